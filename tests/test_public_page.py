"""Tests for the public page and robots.txt."""

import re

from psisite.services.page_settings import DEFAULT_CONTACT, DEFAULT_FOOTER
from tests.conftest import put_config


class TestHomePage:
    def test_renders_with_empty_store(self, client):
        response = client.get("/")
        assert response.status_code == 200
        for section_id in ("hero", "about", "services", "testimonials", "photo-carousel", "faq", "contact"):
            assert f'id="{section_id}-section"' in response.text
        assert 'href="/static/favicon.svg"' in response.text

    def test_hidden_section_is_not_rendered(self, client):
        put_config("section_visibility", {"faq": False, "services": "no"})
        page = client.get("/").text
        assert 'id="faq-section"' not in page
        # Only a strict False hides a section
        assert 'id="services-section"' in page

    def test_legacy_gallery_visibility_key(self, client):
        put_config("section_visibility", {"photo-carousel": False})
        assert 'id="photo-carousel-section"' not in client.get("/").text

    def test_about_block_stays_for_specialties(self, client):
        put_config("section_visibility", {"about": False})
        assert 'id="about-section"' in client.get("/").text

        put_config("section_visibility", {"about": False, "specialties": False})
        assert 'id="about-section"' not in client.get("/").text

    def test_section_order(self, client):
        put_config("section_order", {"faq": -1})
        page = client.get("/").text
        assert page.index('id="faq-section"') < page.index('id="hero-section"')

    def test_corrupt_values_fall_back_to_defaults(self, client):
        put_config("hero_section", "not an object")
        put_config("about_section", {"title": 42, "subtitle": "Minha trajetória"})
        put_config("section_colors", ["faq"])

        response = client.get("/")
        assert response.status_code == 200
        assert "saúde mental" in response.text
        assert "Minha trajetória" in response.text

    def test_scheduling_button_color(self, client):
        put_config("general_info", {"schedulingButtonColor": "#10b981"})
        page = client.get("/").text

        override = 'style="background-color: #10b981"'
        assert re.search(rf'<a [^>]*{override}[^>]*>Agendar consulta</a>', page)
        assert not re.search(rf'<a [^>]*{override}[^>]*>Saiba mais</a>', page)

    def test_scheduling_color_reaches_footer_and_contact_links(self, admin_client):
        put_config("general_info", {"schedulingButtonColor": "#123456"})
        booking = dict(DEFAULT_FOOTER["contact_buttons"][0], label="Agendar consulta", link="https://x")
        social = dict(DEFAULT_FOOTER["contact_buttons"][1], link="https://z")
        admin_client.put("/api/admin/footer-settings", json={"contact_buttons": [booking, social]})
        item = dict(DEFAULT_CONTACT["contact_items"][1], type="online", title="Consulta online", link="https://y")
        admin_client.put("/api/admin/contact-settings", json={"contact_items": [item]})

        page = admin_client.get("/").text
        override = 'style="background-color: #123456"'
        assert re.search(rf'<a href="https://x"[^>]*{override}>Agendar consulta</a>', page)
        assert re.search(rf'<a href="https://y"[^>]*{override}>', page)
        assert re.search(r'<a href="https://z"[^>]*class="[^"]*">Instagram</a>', page)

    def test_custom_favicon(self, client):
        put_config("site_icon", {"iconPath": "/uploads/icons/favicon.ico"})
        assert 'href="/uploads/icons/favicon.ico"' in client.get("/").text

    def test_seo_and_pixels(self, client):
        put_config("seo_meta", {"metaTitle": "Psicóloga Online", "metaDescription": "Terapia online"})
        put_config("marketing_pixels", {"googlePixel": "G-TEST123"})
        page = client.get("/").text
        assert "<title>Psicóloga Online</title>" in page
        assert 'content="Terapia online"' in page
        assert "googletagmanager.com/gtag/js?id=G-TEST123" in page


class TestMaintenance:
    def test_visitors_get_maintenance_page(self, client):
        put_config("maintenance_mode", {"isEnabled": True, "title": "Em (manutenção)", "message": "Volto logo"})
        response = client.get("/")
        assert response.status_code == 503
        assert response.headers["retry-after"] == "3600"
        assert "Volto logo" in response.text
        assert 'id="hero-section"' not in response.text

    def test_admin_still_sees_site(self, admin_client):
        put_config("maintenance_mode", {"isEnabled": True})
        response = admin_client.get("/")
        assert response.status_code == 200
        assert 'id="hero-section"' in response.text


class TestRobots:
    def test_indexing_allowed_by_default(self, client):
        response = client.get("/robots.txt")
        assert response.status_code == 200
        assert response.text == "User-agent: *\nAllow: /\nDisallow: /admin\n"

    def test_indexing_disabled(self, client):
        put_config("marketing_pixels", {"enableGoogleIndexing": False})
        assert client.get("/robots.txt").text == "User-agent: *\nDisallow: /\n"


class TestHealth:
    def test_healthz(self, client):
        assert client.get("/healthz").json() == {"status": "healthy"}


class TestErrorResponses:
    def test_htmx_error_gets_toast_fragment(self, admin_client):
        response = admin_client.get("/admin/forms/nope", headers={"HX-Request": "true"})
        assert response.status_code == 404
        assert 'id="toast"' in response.text
        assert "Formulário não encontrado" in response.text
        assert "<html" not in response.text

    def test_htmx_login_redirect(self, client):
        response = client.get("/admin", headers={"HX-Request": "true"}, follow_redirects=False)
        assert response.headers["HX-Redirect"] == "/admin/login?next=/admin"

    def test_browser_error_page(self, admin_client):
        response = admin_client.get("/admin/forms/nope")
        assert response.status_code == 404
        assert "<html" in response.text
