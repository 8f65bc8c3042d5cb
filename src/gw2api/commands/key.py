"""Key commands -- store and inspect the API key.

The key is kept in the CLI's persistent store under the reserved
``apiKey`` entry and read on every authenticated call::

    gw2api key set XXXXXXXX-XXXX-...
    gw2api key show
"""

from __future__ import annotations

import typer

from gw2api.output import info, success, warning


key_app = typer.Typer(no_args_is_help=True)


@key_app.command("set")
def key_set(
    ctx: typer.Context,
    api_key: str = typer.Argument(help="API key from the account's applications page."),
) -> None:
    """Store the API key used for authenticated endpoints."""
    from gw2api.commands import run_with_client

    run_with_client(ctx, lambda api: api.set_api_key(api_key.strip()))
    success("API key stored.")


@key_app.command("show")
def key_show(ctx: typer.Context) -> None:
    """Show the stored API key, masked."""
    from gw2api.auth import mask_api_key
    from gw2api.commands import run_with_client

    api_key = run_with_client(ctx, lambda api: api.get_api_key())
    if not api_key:
        warning("No API key stored. Run 'gw2api key set <KEY>'.")
        raise typer.Exit(code=1)
    info(mask_api_key(api_key))
