"""Config commands -- view and modify saved settings.

Settings are a :class:`~gw2api.models.ClientConfig` stored as JSON in the
gw2api config directory.  Flags and ``GW2API_*`` environment variables
override them per invocation.
"""

from __future__ import annotations

import typer

from gw2api.output import error, format_response, info, success


config_app = typer.Typer(no_args_is_help=True)


@config_app.command("show")
def config_show() -> None:
    """Show saved settings.

    Example::

        gw2api config show --json
    """
    from gw2api.commands import open_store
    from gw2api.config import get_config_dir, load_settings

    info(f"Config directory: {get_config_dir()}")
    with open_store() as store:
        stats = store.stats()
    info(f"Store: {stats['directory']} ({stats['size']} entries)")
    format_response(load_settings().model_dump(mode="json"))


@config_app.command("set")
def config_set(
    key: str = typer.Argument(help="Setting name, e.g. 'lang' or 'batch_size'."),
    value: str = typer.Argument(help="Value to set."),
) -> None:
    """Set one setting.

    The value is coerced to the type of the current setting and validated
    before saving.

    Example::

        gw2api config set lang de
        gw2api config set use_auth_header true
    """
    from pydantic import ValidationError

    from gw2api.config import load_settings, save_settings
    from gw2api.models import ClientConfig

    data = load_settings().model_dump(mode="json")
    if key not in data:
        error(f"Unknown setting: {key}")
        raise typer.Exit(code=2)

    current = data[key]
    coerced: object = value
    if isinstance(current, bool):
        coerced = value.lower() in ("true", "1", "yes", "on")
    elif value.lower() in ("none", "null", ""):
        coerced = None

    data[key] = coerced
    try:
        new_config = ClientConfig.model_validate(data)
    except ValidationError as exc:
        error(f"Validation error: {exc}")
        raise typer.Exit(code=2) from None

    save_settings(new_config)
    success(f"Set {key} = {getattr(new_config, key)}")


@config_app.command("reset")
def config_reset(
    force: bool = typer.Option(False, "--force", "-f", help="Skip confirmation."),
) -> None:
    """Reset settings to defaults."""
    from gw2api.config import reset_settings

    if not force and not typer.confirm("Reset all settings to defaults?"):
        info("Cancelled.")
        raise typer.Exit()

    reset_settings()
    success("Settings reset to defaults.")
