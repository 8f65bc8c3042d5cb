"""Allow ``python -m gw2api``."""

from gw2api.app import main

if __name__ == "__main__":
    main()
