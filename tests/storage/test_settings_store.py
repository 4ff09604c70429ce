"""
Tests for storage/settings_store.py - Settings persistence
"""
import pytest

from rpp_copilot.storage.settings_store import (
    BrowserSettingsStore,
    InMemorySettingsStore,
    Settings,
    check_settings,
)


class TestCheckSettings:
    """Test settings validation"""

    def test_default_mode_needs_no_key(self):
        assert check_settings(Settings()).success

    @pytest.mark.parametrize("key", ["", "   "])
    def test_custom_mode_needs_key(self, key):
        result = check_settings(Settings(mode="custom", key=key))
        assert not result.success
        assert result.error == "API Key kustom tidak boleh kosong."


class TestBrowserSettingsStore:
    """Test BrowserSettingsStore"""

    def test_empty_browser_gives_defaults(self):
        assert BrowserSettingsStore().load() == Settings()
        assert BrowserSettingsStore(None).data == {"mode": "default", "key": ""}

    def test_save_updates_browser_data(self):
        store = BrowserSettingsStore()

        result = store.save(Settings(mode="custom", key="my-key"))

        assert result.success
        assert store.data == {"mode": "custom", "key": "my-key"}
        assert BrowserSettingsStore(store.data).load() == Settings(mode="custom", key="my-key")

    def test_rejected_save_leaves_data_untouched(self):
        store = BrowserSettingsStore({"mode": "default", "key": ""})

        result = store.save(Settings(mode="custom", key=""))

        assert not result.success
        assert store.data == {"mode": "default", "key": ""}

    @pytest.mark.parametrize("data", [{"mode": "other"}, {"key": 5}, "garbage", []])
    def test_unreadable_data_gives_defaults(self, data):
        assert BrowserSettingsStore(data).load() == Settings()

    def test_data_is_copied(self):
        data = {"mode": "custom", "key": "k"}
        store = BrowserSettingsStore(data)
        store.save(Settings(mode="default"))
        assert data == {"mode": "custom", "key": "k"}


class TestInMemorySettingsStore:
    """Test InMemorySettingsStore"""

    def test_load_returns_copy(self):
        store = InMemorySettingsStore(Settings(mode="custom", key="k"))
        loaded = store.load()
        loaded.key = "changed"
        assert store.load().key == "k"

    def test_save_counts_only_successes(self):
        store = InMemorySettingsStore()
        store.save(Settings(mode="custom", key=""))
        store.save(Settings(mode="custom", key="k"))
        assert store.save_count == 1
        assert store.load().mode == "custom"
