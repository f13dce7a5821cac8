"""Tests for the footer and contact settings API."""

from psisite.services.page_settings import DEFAULT_CONTACT, DEFAULT_FOOTER


class TestFooterSettings:
    def test_defaults_are_created_on_first_read(self, client):
        body = client.get("/api/footer-settings").json()
        assert body["id"] == 1
        assert body["contact_buttons"] == DEFAULT_FOOTER["contact_buttons"]
        assert body["bottom_info"]["copyright"].startswith("©")

        # Second read returns the same row
        assert client.get("/api/footer-settings").json()["id"] == 1

    def test_update_replaces_only_sent_groups(self, admin_client):
        bottom_info = {"copyright": "© 2025 Consultório", "certificationText": "", "madeWith": ""}
        response = admin_client.put("/api/admin/footer-settings", json={"bottom_info": bottom_info})

        assert response.status_code == 200
        body = admin_client.get("/api/footer-settings").json()
        assert body["bottom_info"] == bottom_info
        assert body["trust_seals"] == DEFAULT_FOOTER["trust_seals"]

    def test_unknown_groups_are_ignored(self, admin_client):
        response = admin_client.put("/api/admin/footer-settings", json={"sidebar": {"x": 1}})
        assert response.status_code == 200
        assert "sidebar" not in response.json()

    def test_update_requires_admin(self, client):
        response = client.put("/api/admin/footer-settings", json={"bottom_info": {}})
        assert response.status_code == 401

    def test_non_object_body(self, admin_client):
        response = admin_client.put("/api/admin/footer-settings", json=["bottom_info"])
        assert response.status_code == 400


class TestContactSettings:
    def test_defaults(self, client):
        body = client.get("/api/contact-settings").json()
        assert body["location_info"] == DEFAULT_CONTACT["location_info"]

    def test_inactive_items_are_hidden_on_page(self, admin_client):
        items = [
            dict(DEFAULT_CONTACT["contact_items"][0], order=1),
            dict(DEFAULT_CONTACT["contact_items"][2], order=0),
            dict(DEFAULT_CONTACT["contact_items"][1], isActive=False),
        ]
        admin_client.put("/api/admin/contact-settings", json={"contact_items": items})

        page = admin_client.get("/").text
        assert "@adriellebenhossi" not in page
        assert page.index("escutapsi@adrielle.com.br") < page.index("(44) 998-362-704")
