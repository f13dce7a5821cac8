"""Tests for the content list CRUD API."""

import pytest


TESTIMONIAL = {
    "name": "Maria S.",
    "service": "Terapia individual",
    "testimonial": "Mudou minha forma de lidar com a ansiedade.",
    "rating": 5,
}


class TestContentApi:
    def test_admin_routes_require_login(self, client):
        assert client.get("/api/admin/testimonials").status_code == 401
        assert client.post("/api/admin/faq", json={"question": "q", "answer": "a"}).status_code == 401

    def test_create_uses_camel_case(self, admin_client):
        response = admin_client.post(
            "/api/admin/services",
            json={"title": "Terapia online", "description": "Sessões por vídeo", "showPrice": True, "price": "R$ 150"},
        )
        assert response.status_code == 201
        body = response.json()
        assert body["showPrice"] is True
        assert body["price"] == "R$ 150"
        assert body["isActive"] is True
        assert body["icon"] == "Brain"

    def test_public_list_is_ordered_and_active_only(self, admin_client):
        admin_client.post("/api/admin/faq", json={"question": "Segunda?", "answer": "Sim", "order": 2})
        admin_client.post("/api/admin/faq", json={"question": "Primeira?", "answer": "Sim", "order": 1})
        admin_client.post("/api/admin/faq", json={"question": "Oculta?", "answer": "Sim", "isActive": False})

        public = admin_client.get("/api/faq").json()
        assert [item["question"] for item in public] == ["Primeira?", "Segunda?"]

        everything = admin_client.get("/api/admin/faq").json()
        assert len(everything) == 3

    def test_partial_update(self, admin_client):
        created = admin_client.post("/api/admin/testimonials", json=TESTIMONIAL).json()

        response = admin_client.put(f"/api/admin/testimonials/{created['id']}", json={"rating": 4})
        assert response.status_code == 200
        assert response.json()["rating"] == 4
        assert response.json()["name"] == "Maria S."

    def test_delete(self, admin_client):
        created = admin_client.post("/api/admin/specialties", json={"title": "Ansiedade", "description": "TCC"}).json()

        assert admin_client.delete(f"/api/admin/specialties/{created['id']}").json() == {"success": True}
        assert admin_client.get("/api/specialties").json() == []

    def test_missing_item(self, admin_client):
        response = admin_client.put("/api/admin/photo-carousel/999", json={"title": "x"})
        assert response.status_code == 404
        assert response.json()["detail"] == "Item não encontrado"

    @pytest.mark.parametrize("payload", [
        dict(TESTIMONIAL, rating=6),
        dict(TESTIMONIAL, name="  "),
        {"name": "Sem texto"},
    ])
    def test_invalid_payload(self, admin_client, payload):
        response = admin_client.post("/api/admin/testimonials", json=payload)
        assert response.status_code == 400
        assert response.json()["detail"]["error"] == "Dados inválidos"
        assert admin_client.get("/api/admin/testimonials").json() == []

    def test_active_items_render_on_page(self, admin_client):
        admin_client.post("/api/admin/testimonials", json=TESTIMONIAL)
        admin_client.post("/api/admin/testimonials", json=dict(TESTIMONIAL, name="Oculto", isActive=False))

        page = admin_client.get("/").text
        assert "Maria S." in page
        assert "Oculto" not in page
