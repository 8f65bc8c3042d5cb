"""Fetch commands -- query the API from the shell.

* ``gw2api get RESOURCE [IDS...]`` -- one-or-many lookup (``items 15 411``).
* ``gw2api account SECTION [--resolve]`` -- authenticated account data,
  optionally resolved into full objects.
* ``gw2api call ENDPOINT [-p key=value ...] [--auth]`` -- any endpoint.

Payloads go to stdout in the active output format.
"""

from __future__ import annotations

from typing import Any, Optional

import typer

from gw2api.output import error, format_response


RESOURCES: dict[str, str] = {
    "achievements": "get_achievements",
    "achievement-groups": "get_achievement_groups",
    "achievement-categories": "get_achievement_categories",
    "colors": "get_colors",
    "commerce-listings": "get_commerce_listings",
    "currencies": "get_currencies",
    "files": "get_files",
    "finishers": "get_finishers",
    "guild-permissions": "get_guild_permissions",
    "guild-upgrades": "get_guild_upgrades",
    "items": "get_items",
    "masteries": "get_masteries",
    "materials": "get_materials",
    "minis": "get_minis",
    "pvp-games": "get_pvp_games",
    "quaggans": "get_quaggans",
    "recipes": "get_recipes",
    "skills": "get_skills",
    "skins": "get_skins",
    "specializations": "get_specializations",
    "traits": "get_traits",
    "worldbosses": "get_world_bosses",
    "wvw-matches": "get_wvw_matches",
    "wvw-objectives": "get_wvw_objectives",
}
"""CLI resource name -> one-or-many :class:`~gw2api.api.Gw2Client` method."""

ACCOUNT_SECTIONS: dict[str, tuple[str, bool]] = {
    "info": ("get_account", False),
    "achievements": ("get_account_achievements", True),
    "bank": ("get_account_bank", True),
    "dyes": ("get_account_dyes", True),
    "finishers": ("get_account_finishers", True),
    "masteries": ("get_account_masteries", True),
    "materials": ("get_account_materials", True),
    "minis": ("get_account_minis", True),
    "pvp-stats": ("get_pvp_stats", False),
    "skins": ("get_account_skins", True),
    "tokeninfo": ("get_token_info", False),
    "wallet": ("get_wallet", True),
    "worldbosses": ("get_account_world_bosses", True),
}
"""Account section -> (client method, accepts ``auto_translate``)."""


def parse_id(raw: str) -> Any:
    """Numeric ids become ``int``; anything else (GUIDs, names) stays a string."""
    return int(raw) if raw.isdigit() else raw


def parse_params(pairs: list[str]) -> dict[str, Any]:
    """Parse ``key=value`` pairs into a parameter dict.

    Raises:
        typer.Exit: With code 2 on a pair without ``=``.
    """
    params: dict[str, Any] = {}
    for pair in pairs:
        key, sep, value = pair.partition("=")
        if not sep or not key:
            error(f"Expected key=value, got: {pair}")
            raise typer.Exit(code=2)
        params[key] = value
    return params


def get_command(
    ctx: typer.Context,
    resource: str = typer.Argument(help="Resource name, e.g. 'items' or 'skins'."),
    ids: Optional[list[str]] = typer.Argument(None, help="Zero, one, or several ids."),
) -> None:
    """Look up a resource by id.

    Without ids, prints every known id.  With one id, prints that object.
    With several, prints them as a list (sorted by id in the request).

    Example::

        gw2api get items 15 411
        gw2api get quaggans box
    """
    from gw2api.commands import run_with_client

    method = RESOURCES.get(resource)
    if method is None:
        error(f"Unknown resource '{resource}'. Choose from: {', '.join(sorted(RESOURCES))}")
        raise typer.Exit(code=2)

    parsed = [parse_id(i) for i in ids or []]
    selector: Any = None
    if len(parsed) == 1:
        selector = parsed[0]
    elif parsed:
        selector = parsed

    data = run_with_client(ctx, lambda api: getattr(api, method)(ids=selector))
    format_response(data)


def account_command(
    ctx: typer.Context,
    section: str = typer.Argument(help="Account section, e.g. 'bank' or 'wallet'."),
    resolve: bool = typer.Option(
        False, "--resolve", "-r", help="Replace ids with full objects."
    ),
) -> None:
    """Show account data.  Requires a stored API key.

    Example::

        gw2api account bank --resolve
    """
    from gw2api.commands import run_with_client

    entry = ACCOUNT_SECTIONS.get(section)
    if entry is None:
        error(
            f"Unknown section '{section}'. Choose from: {', '.join(sorted(ACCOUNT_SECTIONS))}"
        )
        raise typer.Exit(code=2)

    method, translatable = entry
    if translatable:
        data = run_with_client(ctx, lambda api: getattr(api, method)(auto_translate=resolve))
    else:
        data = run_with_client(ctx, lambda api: getattr(api, method)())
    format_response(data)


def call_command(
    ctx: typer.Context,
    endpoint: str = typer.Argument(help="Endpoint path, e.g. '/build'."),
    param: Optional[list[str]] = typer.Option(
        None, "--param", "-p", help="Query parameter as key=value (repeatable)."
    ),
    auth: bool = typer.Option(False, "--auth", help="Send the stored API key."),
) -> None:
    """GET any endpoint through the cache.

    Example::

        gw2api call /commerce/prices -p ids=19684,19709
    """
    from gw2api.commands import run_with_client

    params = parse_params(param or [])
    path = endpoint if endpoint.startswith("/") else f"/{endpoint}"
    data = run_with_client(ctx, lambda api: api.call_api(path, params, auth))
    format_response(data)
