"""Unit tests for the configuration context manager."""

import asyncio
from concurrent.futures import ThreadPoolExecutor

import pytest

from src.bookshelf.runtime.config.config_data import ConfigData
from src.bookshelf.runtime.context import (
    AppContext,
    get_config,
    get_context,
    set_config,
    set_context,
    with_context,
)


class TestContextManager:
    """Test the context manager functionality."""

    def test_default_context_available(self):
        context = get_context()

        assert isinstance(context, AppContext)
        assert isinstance(get_config(), ConfigData)
        assert context.config is get_config()

    def test_override_single_field(self):
        """Should override config for the duration of the context manager."""
        original_config = get_config()

        test_config = ConfigData()
        test_config.cover.storage_dir = "/tmp/override-covers"

        with with_context(test_config):
            override_config = get_config()
            assert override_config.cover.storage_dir == "/tmp/override-covers"
            assert override_config is not original_config

        assert get_config() is original_config

    def test_unset_fields_are_inherited(self):
        original_config = get_config()

        test_config = ConfigData()
        test_config.pagination.max_size = 7

        with with_context(test_config):
            merged = get_config()
            assert merged.pagination.max_size == 7
            assert merged.jwt == original_config.jwt
            assert merged.database.url == original_config.database.url

    def test_nested_overrides(self):
        original_config = get_config()

        level1 = ConfigData()
        level1.app.environment = "production"
        level1.jwt.user_id_claim = "level1_uid"

        with with_context(level1):
            assert get_config().app.environment == "production"

            level2 = ConfigData()
            level2.jwt.user_id_claim = "level2_uid"
            level2.pagination.default_size = 3

            with with_context(level2):
                config = get_config()
                assert config.jwt.user_id_claim == "level2_uid"
                assert config.pagination.default_size == 3
                assert config.app.environment == "production"

            assert get_config().jwt.user_id_claim == "level1_uid"
            assert get_config().pagination.default_size == original_config.pagination.default_size

        assert get_config() is original_config

    def test_no_override(self):
        original_config = get_config()

        with with_context():
            assert get_config() is original_config

    def test_rejects_non_config_override(self):
        with pytest.raises(ValueError):
            with with_context({"jwt": {"secret": "x"}}):
                pass

    def test_restored_after_exception(self):
        original_config = get_config()

        test_config = ConfigData()
        test_config.jwt.user_id_claim = "exception_test_uid"

        with pytest.raises(RuntimeError):
            with with_context(test_config):
                assert get_config().jwt.user_id_claim == "exception_test_uid"
                raise RuntimeError("boom")

        assert get_config() is original_config

    def test_set_config_replaces_whole_configuration(self):
        original_context = get_context()
        replacement = ConfigData()
        replacement.jwt.issuer = "replacement-issuer"

        try:
            set_config(replacement)
            assert get_config() is replacement
        finally:
            set_context(original_context)

        assert get_context() is original_context


class TestIsolation:
    def test_async_tasks_see_their_own_context(self):
        async def worker(worker_id: int) -> int:
            config = ConfigData()
            config.pagination.max_size = worker_id
            with with_context(config):
                await asyncio.sleep(0.01 * (5 - worker_id))
                return get_config().pagination.max_size

        async def run_all() -> list[int]:
            return await asyncio.gather(*(worker(i) for i in range(1, 5)))

        assert asyncio.run(run_all()) == [1, 2, 3, 4]

    def test_threads_see_their_own_context(self):
        original_config = get_config()

        def worker(worker_id: int) -> str:
            config = ConfigData()
            config.jwt.user_id_claim = f"thread_{worker_id}_uid"
            with with_context(config):
                return get_config().jwt.user_id_claim

        with ThreadPoolExecutor(max_workers=4) as executor:
            results = list(executor.map(worker, range(4)))

        assert results == [f"thread_{i}_uid" for i in range(4)]
        assert get_config() is original_config
