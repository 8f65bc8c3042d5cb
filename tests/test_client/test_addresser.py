"""Tests for the one-or-many endpoint addressing convention."""

from __future__ import annotations

import pytest

from gw2api.cache import derive_key
from gw2api.client import RequestExecutor, build_request, fetch_one_or_many
from gw2api.models import ClientConfig, ManyIds, NoIds, SingleId
from gw2api.storage import MemoryStore


class TestBuildRequest:
    def test_no_ids_addresses_bare_endpoint(self) -> None:
        desc = build_request("/items", NoIds(), auth_required=False)
        assert desc.endpoint == "/items"
        assert desc.params == {}
        assert desc.auth_required is False

    def test_single_id_appends_path(self) -> None:
        desc = build_request("/items", SingleId(15))
        assert desc.endpoint == "/items/15"
        assert "ids" not in desc.params

    def test_single_id_is_path_escaped(self) -> None:
        desc = build_request("/characters", SingleId("Zojja Of/Rata Sum"))
        assert desc.endpoint == "/characters/Zojja%20Of%2FRata%20Sum"

    def test_many_ids_become_sorted_param(self) -> None:
        desc = build_request("/items", ManyIds([411, 15]))
        assert desc.endpoint == "/items"
        assert desc.params == {"ids": "15,411"}

    def test_extra_params_merged(self) -> None:
        desc = build_request("/achievements", ManyIds([2, 1]), False, {"lang": "de"})
        assert desc.params == {"ids": "1,2", "lang": "de"}

    def test_extra_params_not_mutated(self) -> None:
        extra = {"lang": "de"}
        build_request("/achievements", ManyIds([1]), False, extra)
        assert extra == {"lang": "de"}

    def test_id_order_does_not_change_cache_key(self) -> None:
        a = build_request("/items", ManyIds([15, 411]))
        b = build_request("/items", ManyIds([411, 15]))
        assert derive_key(a.endpoint, a.params) == derive_key(b.endpoint, b.params)

    def test_rejects_non_selector(self) -> None:
        with pytest.raises(TypeError):
            build_request("/items", [1, 2])  # type: ignore[arg-type]


class TestFetchOneOrMany:
    @pytest.mark.asyncio
    async def test_order_invariance_under_caching(self, fake_api) -> None:
        async with RequestExecutor(ClientConfig(), MemoryStore(), fake_api.transport) as ex:
            first = await fetch_one_or_many(ex, "/items", ManyIds([15, 411]), False)
            second = await fetch_one_or_many(ex, "/items", ManyIds([411, 15]), False)

        assert first == second
        assert len(fake_api.requests) == 1
        assert fake_api.requests[0].url.params["ids"] == "15,411"

    @pytest.mark.asyncio
    async def test_single_and_all(self, fake_api) -> None:
        async with RequestExecutor(ClientConfig(), MemoryStore(), fake_api.transport) as ex:
            single = await fetch_one_or_many(ex, "/items", SingleId(15), False)
            every = await fetch_one_or_many(ex, "/items", NoIds(), False)

        assert single["name"] == "Abomination Hammer"
        assert sorted(every) == [5, 7, 15, 411]
