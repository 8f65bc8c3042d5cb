"""High-level client for the Guild Wars 2 v2 API.

:class:`Gw2Client` owns a :class:`~gw2api.models.ClientConfig`, a key-value
store and a :class:`~gw2api.client.RequestExecutor`.  Every endpoint method
is a thin call into the request engine: it names one endpoint, whether the
API key is needed, and any fixed parameters.  Account methods that return
shallow references accept ``auto_translate`` to resolve them into full
objects through :func:`~gw2api.client.resolve_deep`.

Example::

    async with Gw2Client(store=MemoryStore()) as api:
        await api.set_api_key("XXXXXXXX-...")
        bank = await api.get_account_bank(auto_translate=True)
        items = await api.get_items([15, 411])
"""

from __future__ import annotations

import asyncio
from collections.abc import MutableSequence
from typing import Any, Literal, Optional

import httpx

from gw2api.auth import load_api_key, save_api_key
from gw2api.client import RequestExecutor, chunked, fetch_one_or_many, resolve_deep
from gw2api.client.resolver import Lookup
from gw2api.exceptions import UsageError
from gw2api.models import ClientConfig, ParamValue, select_ids
from gw2api.storage.base import KeyValueStore
from gw2api.storage.memory import MemoryStore

PROFESSION_SKILL_BATCH = 50


class Gw2Client:
    """Async client for the Guild Wars 2 API.

    Must be used as an async context manager.  Configuration setters return
    the client so calls can be chained; each one swaps in a new frozen
    :class:`~gw2api.models.ClientConfig`, leaving other clients untouched.

    Args:
        config: Initial settings.  Defaults to :class:`ClientConfig()`.
        store: Key-value store for cached responses and the API key.
            Defaults to a fresh :class:`~gw2api.storage.MemoryStore`.
        transport: Optional :mod:`httpx` transport, mainly for tests.
    """

    def __init__(
        self,
        config: Optional[ClientConfig] = None,
        store: Optional[KeyValueStore] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._executor = RequestExecutor(
            config or ClientConfig(),
            store if store is not None else MemoryStore(),
            transport=transport,
        )

    async def __aenter__(self) -> Gw2Client:
        await self._executor.__aenter__()
        return self

    async def __aexit__(self, *args: object) -> None:
        await self._executor.__aexit__(*args)

    # ------------------------------------------------------------------ #
    # Configuration
    # ------------------------------------------------------------------ #

    @property
    def config(self) -> ClientConfig:
        return self._executor.config

    @property
    def store(self) -> KeyValueStore:
        return self._executor.store

    @property
    def lang(self) -> str:
        return self.config.lang

    @property
    def cache_enabled(self) -> bool:
        return self.config.cache_enabled

    @property
    def use_auth_header(self) -> bool:
        return self.config.use_auth_header

    def configure(self, **changes: Any) -> Gw2Client:
        """Replace the configuration with a validated copy carrying *changes*."""
        self._executor.config = ClientConfig.model_validate(
            {**self.config.model_dump(), **changes}
        )
        return self

    def set_storage(self, store: KeyValueStore) -> Gw2Client:
        self._executor.store = store
        return self

    def set_lang(self, lang: str) -> Gw2Client:
        """Set the language code sent to endpoints with localized text."""
        return self.configure(lang=lang)

    def set_cache(self, enabled: bool) -> Gw2Client:
        """Turn both serving from and writing to the store on or off."""
        return self.configure(cache_enabled=enabled, store_writes_enabled=enabled)

    def set_store_in_cache(self, enabled: bool) -> Gw2Client:
        """Turn writing fresh responses to the store on or off.

        Unlike :meth:`set_cache`, this does not affect whether stored
        responses are served, so the store can be refreshed without being
        read.
        """
        return self.configure(store_writes_enabled=enabled)

    def set_use_auth_header(self, enabled: bool) -> Gw2Client:
        """Send the API key as a bearer header instead of a query parameter.

        Leave this off in browsers: the API does not answer ``OPTIONS``.
        """
        return self.configure(use_auth_header=enabled)

    async def set_api_key(self, api_key: str) -> Gw2Client:
        await save_api_key(self.store, api_key)
        return self

    async def get_api_key(self) -> Optional[str]:
        return await load_api_key(self.store)

    # ------------------------------------------------------------------ #
    # Engine entry points
    # ------------------------------------------------------------------ #

    async def call_api(
        self,
        endpoint: str,
        params: Optional[dict[str, ParamValue]] = None,
        auth_required: bool = True,
    ) -> Any:
        """GET *endpoint* with *params*, through the cache."""
        return await self._executor.execute(endpoint, params, auth_required)

    async def get_one_or_many(
        self,
        endpoint: str,
        ids: Any = None,
        auth_required: bool = True,
        extra_params: Optional[dict[str, ParamValue]] = None,
    ) -> Any:
        """GET *endpoint* for no id, one id, or a list of ids.

        Raises:
            UsageError: If *ids* is not ``None``, an id, or a list of ids.
        """
        return await fetch_one_or_many(
            self._executor, endpoint, select_ids(ids), auth_required, extra_params
        )

    async def get_deeper_info(
        self,
        lookup: Lookup,
        items: Optional[MutableSequence[Any]],
        batch_size: Optional[int] = None,
    ) -> Optional[MutableSequence[Any]]:
        """Resolve shallow *items* through *lookup* (see :func:`resolve_deep`)."""
        return await resolve_deep(
            lookup,
            items,
            batch_size or self.config.batch_size,
            self.config.max_concurrency,
        )

    async def _translated(self, endpoint: str, lookup: Lookup, auto_translate: bool) -> Any:
        shallow = await self.call_api(endpoint)
        if not auto_translate:
            return shallow
        return await self.get_deeper_info(lookup, shallow)

    def _lang_params(self) -> dict[str, ParamValue]:
        return {"lang": self.lang}

    # ------------------------------------------------------------------ #
    # Account
    # ------------------------------------------------------------------ #

    async def get_account(self) -> Any:
        return await self.call_api("/account")

    async def get_characters(self, name: Optional[str] = None) -> Any:
        """Character names, or the details of one character."""
        return await self.get_one_or_many("/characters", name)

    async def get_account_achievements(self, auto_translate: bool = False) -> Any:
        """Achievement progress; optionally merged with achievement details."""
        return await self._translated(
            "/account/achievements", self.get_achievements, auto_translate
        )

    async def get_account_bank(self, auto_translate: bool = False) -> Any:
        """Bank slots (``None`` for empty ones); optionally merged with item details."""
        return await self._translated("/account/bank", self.get_items, auto_translate)

    async def get_account_dyes(self, auto_translate: bool = False) -> Any:
        return await self._translated("/account/dyes", self.get_colors, auto_translate)

    async def get_account_materials(self, auto_translate: bool = False) -> Any:
        return await self._translated("/account/materials", self.get_items, auto_translate)

    async def get_account_masteries(self, auto_translate: bool = False) -> Any:
        return await self._translated(
            "/account/masteries", self.get_masteries, auto_translate
        )

    async def get_account_finishers(self, auto_translate: bool = False) -> Any:
        return await self._translated(
            "/account/finishers", self.get_finishers, auto_translate
        )

    async def get_account_minis(self, auto_translate: bool = False) -> Any:
        return await self._translated("/account/minis", self.get_minis, auto_translate)

    async def get_account_skins(self, auto_translate: bool = False) -> Any:
        return await self._translated("/account/skins", self.get_skins, auto_translate)

    async def get_account_world_bosses(self, auto_translate: bool = True) -> Any:
        """World bosses killed this reset period."""
        return await self._translated(
            "/account/worldbosses", self.get_world_bosses, auto_translate
        )

    async def get_wallet(self, auto_translate: bool = False) -> Any:
        """Currency balances; optionally merged with currency details."""
        return await self._translated("/account/wallet", self.get_currencies, auto_translate)

    async def get_token_info(self) -> Any:
        """Details of the API key in use (name, permissions)."""
        return await self.call_api("/tokeninfo")

    # ------------------------------------------------------------------ #
    # Achievements
    # ------------------------------------------------------------------ #

    async def get_achievements(self, ids: Any = None) -> Any:
        return await self.get_one_or_many("/achievements", ids, False, self._lang_params())

    async def get_daily_achievements(self, auto_translate: bool = True) -> Any:
        """Today's dailies, keyed by category (``pve``, ``pvp``, ``wvw``...).

        With ``auto_translate``, every category list is resolved into full
        achievements concurrently and the category mapping is preserved.
        """
        daily = await self.call_api("/achievements/daily", self._lang_params(), False)
        if not auto_translate:
            return daily

        categories = list(daily)
        resolved = await asyncio.gather(
            *(self.get_deeper_info(self.get_achievements, daily[c]) for c in categories)
        )
        return dict(zip(categories, resolved))

    async def get_achievement_groups(self, ids: Any = None) -> Any:
        """Achievement groups ("Heart of Thorns", "Central Tyria"...).  Ids are GUIDs."""
        return await self.get_one_or_many("/achievements/groups", ids, False)

    async def get_achievement_categories(self, ids: Any = None) -> Any:
        return await self.get_one_or_many("/achievements/categories", ids, False)

    # ------------------------------------------------------------------ #
    # Commerce
    # ------------------------------------------------------------------ #

    async def get_commerce_transactions(
        self, current: bool, second_level: Literal["buys", "sells"]
    ) -> Any:
        """Trading post transactions of the account.

        Args:
            current: Pending transactions when true, the last 90 days otherwise.
            second_level: ``"buys"`` or ``"sells"``.

        Raises:
            UsageError: For any other *second_level*.
        """
        if second_level not in ("buys", "sells"):
            raise UsageError(f"second_level must be 'buys' or 'sells', got {second_level!r}")
        window = "current" if current else "history"
        return await self.call_api(f"/commerce/transactions/{window}/{second_level}")

    async def get_commerce_listings(self, ids: Any = None) -> Any:
        return await self.get_one_or_many("/commerce/listings", ids, False)

    async def get_commerce_exchange(
        self, gems_or_coins: Literal["gems", "coins"], quantity: int
    ) -> Any:
        """Current gem/coin exchange rate for *quantity* gems or coins.

        *quantity* must exceed the price of a single gem or coin.
        """
        target = "gems" if gems_or_coins == "gems" else "coins"
        return await self.call_api(
            f"/commerce/exchange/{target}", {"quantity": quantity}, False
        )

    # ------------------------------------------------------------------ #
    # PvP / WvW
    # ------------------------------------------------------------------ #

    async def get_pvp_stats(self) -> Any:
        return await self.call_api("/pvp/stats")

    async def get_pvp_games(self, ids: Any = None) -> Any:
        """Recent PvP games of the account.  Game ids are UUIDs."""
        return await self.get_one_or_many("/pvp/games", ids)

    async def get_wvw_matches(self, world_id: Optional[int] = None, ids: Any = None) -> Any:
        """WvW matches, optionally the one *world_id* takes part in."""
        extra = {"world": world_id} if world_id is not None else None
        return await self.get_one_or_many("/wvw/matches", ids, False, extra)

    async def get_wvw_objectives(self, ids: Any = None) -> Any:
        return await self.get_one_or_many("/wvw/objectives", ids)

    # ------------------------------------------------------------------ #
    # Game data
    # ------------------------------------------------------------------ #

    async def get_items(self, ids: Any = None) -> Any:
        """Items.  Without ids, the list of every item id."""
        return await self.get_one_or_many("/items", ids, False)

    async def get_materials(self, ids: Any = None) -> Any:
        return await self.get_one_or_many("/materials", ids, False)

    async def get_recipes(self, ids: Any = None) -> Any:
        return await self.get_one_or_many("/recipes", ids, False)

    async def search_recipes(
        self, input_item: Optional[int] = None, output_item: Optional[int] = None
    ) -> Any:
        """Recipe ids using *input_item*, or producing *output_item*.

        Raises:
            UsageError: If both are given.
        """
        if input_item and output_item:
            raise UsageError("input_item and output_item are mutually exclusive")
        params = {
            key: value
            for key, value in (("input", input_item), ("output", output_item))
            if value
        }
        return await self.call_api("/recipes/search", params, False)

    async def get_skins(self, ids: Any = None) -> Any:
        return await self.get_one_or_many("/skins", ids, False)

    async def get_currencies(self, ids: Any = None) -> Any:
        return await self.get_one_or_many("/currencies", ids, False)

    async def get_colors(self, ids: Any = None) -> Any:
        """Dye colors."""
        return await self.get_one_or_many("/colors", ids, False)

    async def get_minis(self, ids: Any = None) -> Any:
        return await self.get_one_or_many("/minis", ids, False)

    async def get_masteries(self, ids: Any = None) -> Any:
        return await self.get_one_or_many("/masteries", ids, False)

    async def get_finishers(self, ids: Any = None) -> Any:
        return await self.get_one_or_many("/finishers", ids, False)

    async def get_world_bosses(self, ids: Any = None) -> Any:
        return await self.get_one_or_many("/worldbosses", ids, False)

    async def get_files(self, ids: Any = None) -> Any:
        """Commonly requested in-game assets (icons).  Ids are strings."""
        return await self.get_one_or_many("/files", ids, False)

    async def get_quaggans(self, ids: Any = None) -> Any:
        return await self.get_one_or_many("/quaggans", ids, False)

    async def get_continents(self) -> Any:
        return await self.call_api("/continents", None, False)

    async def get_build_id(self) -> Any:
        return await self.call_api("/build", None, False)

    async def get_emblems(
        self, fore_or_back: Literal["foregrounds", "backgrounds"], ids: Any = None
    ) -> Any:
        """Layers for rendering guild emblems."""
        layer = "foregrounds" if fore_or_back == "foregrounds" else "backgrounds"
        return await self.get_one_or_many(f"/emblem/{layer}", ids)

    async def get_guild_permissions(self, ids: Any = None) -> Any:
        return await self.get_one_or_many("/guild/permissions", ids)

    async def get_guild_upgrades(self, ids: Any = None) -> Any:
        return await self.get_one_or_many("/guild/upgrades", ids)

    # ------------------------------------------------------------------ #
    # Skills, specializations, traits
    # ------------------------------------------------------------------ #

    async def get_skills(self, ids: Any = None) -> Any:
        return await self.get_one_or_many("/skills", ids, False)

    async def get_specializations(self, ids: Any = None) -> Any:
        return await self.get_one_or_many("/specializations", ids, False)

    async def get_traits(self, ids: Any = None) -> Any:
        return await self.get_one_or_many("/traits", ids, False)

    async def get_profession_skills(
        self,
        profession: str,
        skill_type: Optional[str] = None,
        include_bundles: bool = False,
    ) -> list[dict[str, Any]]:
        """Skills usable by *profession*.

        Fetches every skill id, then the skills themselves in concurrent
        batches of 50, keeping those that list *profession*.

        Args:
            profession: Profession name, capitalised (``"Guardian"``).
            skill_type: Only keep skills of this type (``"Weapon"``, ``"Heal"``...).
            include_bundles: Keep ``"Bundle"`` skills.  Ignored when
                *skill_type* is ``"Bundle"``.
        """
        skill_ids = await self.get_skills()
        batches = await asyncio.gather(
            *(self.get_skills(batch) for batch in chunked(skill_ids, PROFESSION_SKILL_BATCH))
        )

        def _wanted(skill: dict[str, Any]) -> bool:
            if profession not in (skill.get("professions") or []):
                return False
            kind = skill.get("type")
            if skill_type:
                return kind == skill_type
            return include_bundles or kind != "Bundle"

        return [skill for batch in batches for skill in batch if _wanted(skill)]

    async def get_profession_specializations(self, profession: str) -> list[dict[str, Any]]:
        """Specializations of *profession* (e.g. ``"Mesmer"``)."""
        spec_ids = await self.get_specializations()
        specializations = await self.get_deeper_info(self.get_specializations, spec_ids)
        return [spec for spec in specializations or [] if spec.get("profession") == profession]
