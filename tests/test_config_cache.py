"""Tests for the process-wide config cache."""

from psisite.services import config_store
from psisite.services.config_cache import ConfigCache
from tests.conftest import put_config, run_db


class TestConfigCache:
    """Fetch once, serve from memory until invalidated or patched."""

    def test_serves_snapshot_until_invalidated(self, client):
        cache = ConfigCache()
        put_config("hero_section", {"title": "Antes"})

        assert run_db(lambda db: cache.get_value(db, "hero_section")) == {"title": "Antes"}

        put_config("hero_section", {"title": "Depois"})
        assert run_db(lambda db: cache.get_value(db, "hero_section")) == {"title": "Antes"}

        cache.invalidate()
        assert run_db(lambda db: cache.get_value(db, "hero_section")) == {"title": "Depois"}

    def test_patch_replaces_matching_entry(self, client):
        cache = ConfigCache()
        put_config("hero_section", {"title": "Antes"})
        run_db(cache.get_all)

        cache.patch("hero_section", {"title": "Novo"})
        entries = run_db(cache.get_all)
        assert [e["value"] for e in entries if e["key"] == "hero_section"] == [{"title": "Novo"}]
        assert len(entries) == 1

    def test_patch_appends_new_key(self, client):
        cache = ConfigCache()
        run_db(cache.get_all)

        cache.patch("faq_section", {"title": "FAQ"})
        assert run_db(lambda db: cache.get_value(db, "faq_section")) == {"title": "FAQ"}

    def test_patch_before_first_fetch_is_a_noop(self, client):
        cache = ConfigCache()
        cache.patch("faq_section", {"title": "FAQ"})
        assert not cache.is_loaded
        assert run_db(lambda db: cache.get_value(db, "faq_section")) is None

    def test_patched_value_converges_with_store(self, client):
        """After invalidation the cache reads whatever the store holds."""
        cache = ConfigCache()
        run_db(cache.get_all)
        cache.patch("hero_section", {"title": "Otimista"})

        run_db(lambda db: config_store.upsert_entry(db, "hero_section", {"title": "Servidor"}))
        cache.invalidate()
        assert run_db(lambda db: cache.get_value(db, "hero_section")) == {"title": "Servidor"}


class TestConfigStore:
    def test_upsert_overwrites_whole_value(self, client):
        put_config("about_section", {"title": "A", "subtitle": "B"})
        put_config("about_section", {"title": "C"})

        async def _read(db):
            return [(e.key, e.value) for e in await config_store.list_entries(db)]

        assert run_db(_read) == [("about_section", {"title": "C"})]

    def test_delete_entry(self, client):
        put_config("seo_meta", {"metaTitle": "x"})
        assert run_db(lambda db: config_store.delete_entry(db, "seo_meta")) is True
        assert run_db(lambda db: config_store.delete_entry(db, "seo_meta")) is False
        assert run_db(lambda db: config_store.get_entry(db, "seo_meta")) is None
