"""
Tests for the per-session result cache and the pool filter.
"""

import threading

from hedera_agent.tools.filtering import filter_pools, filter_records
from hedera_agent.utils.cache import DEFAULT_SESSION_KEY, SessionResultCache, session_key_for


class TestSessionResultCache:
    """Tests for SessionResultCache"""

    def setup_method(self):
        self.cache = SessionResultCache()

    def test_get_missing_returns_none(self):
        assert self.cache.get("0.0.1") is None

    def test_set_then_get(self):
        self.cache.set("0.0.1", [1, 2, 3])

        assert self.cache.get("0.0.1") == (1, 2, 3)

    def test_stored_collection_is_a_snapshot(self):
        source = [1, 2, 3]
        self.cache.set("0.0.1", source)
        source.append(4)

        assert self.cache.get("0.0.1") == (1, 2, 3)

    def test_empty_collection_is_cached(self):
        self.cache.set("0.0.1", [])

        assert self.cache.get("0.0.1") == ()

    def test_set_overwrites(self):
        self.cache.set("0.0.1", [1])
        self.cache.set("0.0.1", [2, 3])

        assert self.cache.get("0.0.1") == (2, 3)

    def test_keys_are_isolated(self):
        self.cache.set("0.0.1", ["a"])
        self.cache.set("0.0.2", ["b"])

        assert self.cache.get("0.0.1") == ("a",)
        assert self.cache.get("0.0.2") == ("b",)

    def test_clear(self):
        self.cache.set("0.0.1", [1])
        self.cache.set("0.0.2", [2])

        assert self.cache.clear("0.0.1") is True
        assert self.cache.clear("0.0.1") is False
        assert self.cache.get("0.0.1") is None
        assert self.cache.get("0.0.2") == (2,)

    def test_stats(self):
        self.cache.set("0.0.1", [1, 2])
        stats = self.cache.get_stats()

        assert stats["sessions"] == 1
        assert stats["entries"]["0.0.1"]["item_count"] == 2
        assert "stored_at" in stats["entries"]["0.0.1"]

    def test_concurrent_writers_to_distinct_keys(self):
        def writer(n):
            for i in range(50):
                self.cache.set(f"0.0.{n}", [n] * i)

        threads = [threading.Thread(target=writer, args=(n,)) for n in range(8)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert self.cache.get_stats()["sessions"] == 8
        for n in range(8):
            assert self.cache.get(f"0.0.{n}") == tuple([n] * 49)

    def test_session_key_fallback(self):
        assert session_key_for("0.0.42") == "0.0.42"
        assert session_key_for(None) == DEFAULT_SESSION_KEY
        assert session_key_for("") == DEFAULT_SESSION_KEY


class TestFilterPools:
    """Tests for the pool symbol filter"""

    def test_empty_filter_is_identity(self, sample_pools):
        assert filter_pools(sample_pools, "") == sample_pools
        assert filter_pools(sample_pools, None) == sample_pools

    def test_matches_either_token_case_insensitive(self, sample_pools):
        result = filter_pools(sample_pools, "hbar")

        assert [pool["id"] for pool in result] == [0, 1, 3]

    def test_substring_match(self, sample_pools):
        result = filter_pools(sample_pools, "sauce")

        # SAUCE, USDC/SAUCE and XSAUCE
        assert [pool["id"] for pool in result] == [0, 2, 3]

    def test_matches_lp_symbol(self):
        pool = {"tokenA": {"symbol": "A"}, "tokenB": {"symbol": "B"}, "lpToken": {"symbol": "SPECIAL-LP"}}

        assert filter_pools([pool], "special") == [pool]

    def test_records_missing_fields_do_not_match(self):
        pools = [{"id": 1}, {"tokenA": None}, {"tokenA": {"symbol": "HBAR"}}]

        assert filter_pools(pools, "hbar") == [{"tokenA": {"symbol": "HBAR"}}]

    def test_no_record_fails_predicate(self, sample_pools):
        for pool in filter_pools(sample_pools, "usdc"):
            symbols = [pool["tokenA"]["symbol"], pool["tokenB"]["symbol"], pool["lpToken"]["symbol"]]
            assert any("usdc" in symbol.lower() for symbol in symbols)

    def test_filter_records_custom_fields(self):
        records = [{"name": "Alpha"}, {"name": "Beta"}]

        assert filter_records(records, "alp", [("name",)]) == [{"name": "Alpha"}]
