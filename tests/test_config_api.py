"""Tests for the config store JSON API."""

from psisite.services import config_store
from psisite.services.config_cache import config_cache
from tests.conftest import get_config, put_config, run_db


class TestAdminConfigApi:
    """Admin reads and writes of config entries."""

    def test_requires_admin(self, client):
        response = client.get("/api/admin/config")
        assert response.status_code == 401

        response = client.post("/api/admin/config", json={"key": "hero_section", "value": {}})
        assert response.status_code == 401
        assert get_config("hero_section") is None

    def test_upsert_echoes_stored_entry(self, admin_client):
        value = {
            "title": "Cuidando da sua (saúde mental)",
            "subtitle": "Terapia para adultos",
            "buttonText1": "Agendar consulta",
            "buttonText2": "Saiba mais",
        }
        response = admin_client.post("/api/admin/config", json={"key": "hero_section", "value": value})

        assert response.status_code == 200
        body = response.json()
        assert body["key"] == "hero_section"
        assert body["value"] == value
        assert body["updatedAt"]
        assert get_config("hero_section") == value

    def test_second_write_replaces_whole_value(self, admin_client):
        admin_client.post("/api/admin/config", json={"key": "custom_banner", "value": {"a": 1, "b": 2}})
        admin_client.post("/api/admin/config", json={"key": "custom_banner", "value": {"a": 3}})

        entries = admin_client.get("/api/admin/config").json()
        assert [e["value"] for e in entries if e["key"] == "custom_banner"] == [{"a": 3}]

    def test_unknown_keys_are_stored_as_is(self, admin_client):
        response = admin_client.post("/api/admin/config", json={"key": "anything", "value": [1, "two"]})
        assert response.status_code == 200
        assert get_config("anything") == [1, "two"]

    def test_invalid_known_key_is_rejected(self, admin_client):
        response = admin_client.post(
            "/api/admin/config",
            json={"key": "hero_section", "value": {"title": "   ", "subtitle": "x", "buttonText1": "a", "buttonText2": "b"}},
        )
        assert response.status_code == 400
        assert response.json()["detail"]["fields"]["title"] == "Campo obrigatório"
        assert get_config("hero_section") is None

    def test_malformed_body_is_400(self, admin_client):
        response = admin_client.post("/api/admin/config", json={"value": {}})
        assert response.status_code == 400

    def test_invalid_section_colors_rejected(self, admin_client):
        response = admin_client.post(
            "/api/admin/config",
            json={"key": "section_colors", "value": {"hero": {"backgroundType": "solid", "overlayOpacity": 2}}},
        )
        assert response.status_code == 400

    def test_about_credentials_list(self, admin_client):
        credentials = [{"id": 1, "title": "Mestrado", "subtitle": "UEM", "isActive": True, "order": 0}]
        response = admin_client.post("/api/admin/config", json={"key": "about_credentials", "value": credentials})
        assert response.status_code == 200
        assert get_config("about_credentials") == [dict(credentials[0], gradient="from-pink-50 to-purple-50")]

        response = admin_client.post(
            "/api/admin/config",
            json={"key": "about_credentials", "value": [{"title": "Mestrado", "subtitle": ""}]},
        )
        assert response.status_code == 400
        fields = response.json()["detail"]["fields"]
        assert [message for name, message in fields.items() if name.endswith("subtitle")] == ["Campo obrigatório"]

    def test_write_invalidates_public_cache(self, admin_client):
        assert admin_client.get("/api/config").json() == []
        admin_client.post("/api/admin/config", json={"key": "seo_meta", "value": {"metaTitle": "Psicóloga"}})

        entries = admin_client.get("/api/config").json()
        assert [e["key"] for e in entries] == ["seo_meta"]

    def test_delete_config(self, admin_client):
        put_config("seo_meta", {"metaTitle": "x"})
        response = admin_client.delete("/api/admin/config/seo_meta")
        assert response.json() == {"success": True, "deleted": True}
        assert get_config("seo_meta") is None


class TestPublicConfigApi:
    def test_public_config_lists_entries(self, client):
        put_config("site_icon", {"iconPath": "/uploads/icons/favicon.ico"})
        entries = client.get("/api/config").json()
        assert entries[0]["key"] == "site_icon"
        assert entries[0]["value"]["iconPath"] == "/uploads/icons/favicon.ico"

    def test_maintenance_check_defaults(self, client):
        assert client.get("/api/maintenance-check").json() == {
            "maintenance": {"isEnabled": False},
            "general": {},
        }

    def test_maintenance_check_reports_values(self, client):
        put_config("maintenance_mode", {"isEnabled": True, "title": "Em breve"})
        put_config("general_info", {"headerName": "Dra. Ana"})
        body = client.get("/api/maintenance-check").json()
        assert body["maintenance"]["isEnabled"] is True
        assert body["general"]["headerName"] == "Dra. Ana"

    def test_section_styles_endpoint(self, client):
        put_config("section_colors", {
            "faq": {"backgroundType": "solid", "backgroundColor": "#fafafa", "overlayColor": "#000", "overlayOpacity": 0.2},
            "banner": {"backgroundType": "solid", "backgroundColor": "#000"},
        })
        put_config("general_info", {"schedulingButtonColor": "#10b981"})

        body = client.get("/api/section-styles").json()
        assert [s["sectionId"] for s in body["sections"]] == ["faq"]
        faq = body["sections"][0]
        assert faq["selectors"][0] == "#faq-section"
        assert faq["overlay"]["className"] == "section-overlay"
        assert faq["contentStyle"] == {"position": "relative", "z-index": "2"}
        assert body["schedulingButton"]["color"] == "#10b981"
        assert "scheduling-button" in body["schedulingButton"]["markerClasses"]

    def test_public_reads_are_cached(self, client):
        put_config("seo_meta", {"metaTitle": "A"})
        assert client.get("/api/config").json()[0]["value"] == {"metaTitle": "A"}

        # Written behind the cache's back: still the cached snapshot
        run_db(lambda db: config_store.upsert_entry(db, "seo_meta", {"metaTitle": "B"}))
        assert client.get("/api/config").json()[0]["value"] == {"metaTitle": "A"}

        config_cache.invalidate()
        assert client.get("/api/config").json()[0]["value"] == {"metaTitle": "B"}
