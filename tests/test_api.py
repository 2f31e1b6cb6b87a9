"""Endpoint tests through FastAPI's TestClient."""

import pytest

API = "/api/v1"


def _submit_review(client, headers, **overrides):
    payload = {"product_id": "p-kettle", "rating": 5, "title": "Good product", "comment": "Works well"}
    payload.update(overrides)
    response = client.post(f"{API}/reviews", json=payload, headers=headers)
    assert response.status_code == 201
    return response.json()


class TestAuth:
    def test_admin_route_requires_token(self, client):
        response = client.put(f"{API}/content/about", json={"title": "About"})
        assert response.status_code == 401

    def test_admin_route_rejects_customers(self, client, user_headers):
        response = client.put(f"{API}/content/about", json={"title": "About"}, headers=user_headers)
        assert response.status_code == 403

    def test_garbage_token_rejected(self, client):
        response = client.get(f"{API}/reviews/admin", headers={"Authorization": "Bearer nope"})
        assert response.status_code == 401

    def test_static_admin_token(self, client, monkeypatch):
        from storefront_api.app.core.config import settings

        monkeypatch.setattr(settings, "super_admin_static_token", "static-secret")
        response = client.get(f"{API}/content/", headers={"Authorization": "Bearer static-secret"})
        assert response.status_code == 200


class TestContentAPI:
    def test_unknown_slug_reads_as_empty_object(self, client):
        response = client.get(f"{API}/content/does-not-exist")
        assert response.status_code == 200
        assert response.json() == {}

    def test_topbar_text_round_trip(self, client, admin_headers):
        response = client.put(
            f"{API}/content/topbar_text", json={"value": "Free shipping over $50"}, headers=admin_headers
        )
        assert response.status_code == 200

        block = client.get(f"{API}/content/topbar_text").json()
        assert block["value"] == "Free shipping over $50"
        assert block["slug"] == "topbar_text"
        assert block["is_active"] is True

    def test_list_and_delete(self, client, admin_headers):
        client.put(f"{API}/content/a", json={"title": "A"}, headers=admin_headers)
        client.put(f"{API}/content/b", json={"title": "B"}, headers=admin_headers)
        assert [b["slug"] for b in client.get(f"{API}/content/", headers=admin_headers).json()] == ["a", "b"]

        response = client.delete(f"{API}/content/a", headers=admin_headers)
        assert response.status_code == 200
        assert response.json() == {"message": "Content with slug a deleted successfully"}
        assert client.get(f"{API}/content/a").json() == {}

    def test_delete_unknown_slug_succeeds(self, client, admin_headers):
        assert client.delete(f"{API}/content/ghost", headers=admin_headers).status_code == 200

    def test_wrong_field_type_is_a_400(self, client, admin_headers):
        response = client.put(f"{API}/content/about", json={"is_active": "maybe"}, headers=admin_headers)
        assert response.status_code == 400
        assert response.json()["error"] == "ValidationError"
        assert response.json()["field"] == "is_active"

    def test_non_object_body_is_a_400(self, client, admin_headers):
        response = client.put(f"{API}/content/about", json=["a", "b"], headers=admin_headers)
        assert response.status_code == 400


class TestSectionAPI:
    def test_unsaved_section_reads_as_empty_object(self, client):
        assert client.get(f"{API}/sections/health-benefits").json() == {}

    def test_update_and_read(self, client, admin_headers):
        payload = {
            "title": "Health benefits",
            "items": [
                {"label": "Sleep", "value": "Better rest", "icon": "moon"},
                {"_id": "stale", "label": "Focus", "value": "Sharper mind"},
            ],
        }
        response = client.put(f"{API}/sections/health-benefits", json=payload, headers=admin_headers)
        assert response.status_code == 200
        section = response.json()
        assert [i["label"] for i in section["items"]] == ["Sleep", "Focus"]
        assert section["items"][0]["icon"] == "moon"
        assert all(i["id"] != "stale" for i in section["items"])

        public = client.get(f"{API}/sections/health-benefits").json()
        assert public["title"] == "Health benefits"
        assert public["subtitle"] == ""

    def test_switched_off_section_hidden_from_storefront(self, client, admin_headers):
        client.put(f"{API}/sections/health-benefits", json={"title": "T"}, headers=admin_headers)
        client.put(f"{API}/sections/health-benefits", json={"is_active": False}, headers=admin_headers)

        assert client.get(f"{API}/sections/health-benefits").json() == {}
        admin_view = client.get(f"{API}/sections/health-benefits/admin", headers=admin_headers).json()
        assert admin_view["title"] == "T"
        assert admin_view["is_active"] is False

    def test_malformed_item_is_a_400(self, client, admin_headers):
        response = client.put(
            f"{API}/sections/health-benefits",
            json={"items": [{"label": "Sleep", "value": "ok"}, {"label": "No value"}]},
            headers=admin_headers,
        )
        assert response.status_code == 400
        assert response.json()["field"] == "items[1]"
        assert client.get(f"{API}/sections/health-benefits").json() == {}

    def test_duplicate_rows_are_a_500(self, client, store, admin_headers):
        store.insert("sections.health_benefits", {"title": "A"})
        store.insert("sections.health_benefits", {"title": "B"})
        response = client.put(f"{API}/sections/health-benefits", json={"title": "C"}, headers=admin_headers)
        assert response.status_code == 500
        assert response.json()["error"] == "IntegrityError"


class TestReviewAPI:
    def test_submit_requires_login(self, client):
        response = client.post(f"{API}/reviews", json={"product_id": "p", "rating": 5, "comment": "ok"})
        assert response.status_code == 401

    def test_submit_and_moderate(self, client, user_headers, admin_headers):
        review = _submit_review(client, user_headers)
        assert review["status"] == "Pending"
        assert review["author_id"] == "cust-1"

        response = client.put(
            f"{API}/reviews/{review['id']}/status", json={"status": "Approved"}, headers=admin_headers
        )
        assert response.status_code == 200
        assert response.json()["status"] == "Approved"

        page = client.get(f"{API}/reviews/admin", params={"status": "Approved"}, headers=admin_headers).json()
        assert page["total_items"] == 1
        assert page["items"][0]["title"] == "Good product"

        public = client.get(f"{API}/reviews/product/p-kettle").json()
        assert [r["id"] for r in public] == [review["id"]]

    def test_reverse_transition_is_a_409(self, client, user_headers, admin_headers):
        review = _submit_review(client, user_headers)
        url = f"{API}/reviews/{review['id']}/status"
        client.put(url, json={"status": "Approved"}, headers=admin_headers)

        response = client.put(url, json={"status": "Pending"}, headers=admin_headers)
        assert response.status_code == 409
        assert response.json()["error"] == "InvalidTransitionError"

    def test_unknown_review_is_a_404(self, client, admin_headers):
        response = client.put(f"{API}/reviews/missing/status", json={"status": "Approved"}, headers=admin_headers)
        assert response.status_code == 404
        assert client.get(f"{API}/reviews/missing", headers=admin_headers).status_code == 404

    @pytest.mark.parametrize("rating", [0, 6, "five", "3", 3.0, True])
    def test_bad_rating_is_a_400(self, client, user_headers, rating):
        response = client.post(
            f"{API}/reviews", json={"product_id": "p", "rating": rating, "comment": "ok"}, headers=user_headers
        )
        assert response.status_code == 400
        assert response.json()["field"] == "rating"

    def test_unknown_status_filter_is_a_400(self, client, admin_headers):
        response = client.get(f"{API}/reviews/admin", params={"status": "Archived"}, headers=admin_headers)
        assert response.status_code == 400

    def test_pagination_parameters(self, client, user_headers, admin_headers):
        for n in range(12):
            _submit_review(client, user_headers, comment=f"Comment {n}")

        page = client.get(
            f"{API}/reviews/admin", params={"page": 2, "page_size": 5}, headers=admin_headers
        ).json()
        assert page["total_items"] == 12
        assert page["total_pages"] == 3
        assert [r["comment"] for r in page["items"]] == [f"Comment {n}" for n in range(6, 1, -1)]

    def test_delete_review(self, client, user_headers, admin_headers):
        review = _submit_review(client, user_headers)
        response = client.delete(f"{API}/reviews/{review['id']}", headers=admin_headers)
        assert response.status_code == 200
        assert client.get(f"{API}/reviews/{review['id']}", headers=admin_headers).status_code == 404


class TestReturnAPI:
    def test_submit_and_work_the_queue(self, client, user_headers, admin_headers):
        response = client.post(
            f"{API}/returns/",
            json={"order_id": "ORD-42", "type": "replace", "reason": "Wrong size"},
            headers=user_headers,
        )
        assert response.status_code == 201
        request = response.json()
        assert request["user_name"] == "Jane Doe"

        queue = client.get(f"{API}/returns/admin/replacements", headers=admin_headers).json()
        assert [r["id"] for r in queue["items"]] == [request["id"]]

        for status in ("Approved", "Picked Up", "Completed"):
            response = client.put(
                f"{API}/returns/{request['id']}/status", json={"status": status}, headers=admin_headers
            )
            assert response.status_code == 200
        assert client.get(f"{API}/returns/{request['id']}", headers=admin_headers).json()["status"] == "Completed"

    def test_unknown_type_is_a_400(self, client, user_headers):
        response = client.post(
            f"{API}/returns/",
            json={"order_id": "ORD-42", "type": "exchange", "reason": "Wrong size"},
            headers=user_headers,
        )
        assert response.status_code == 400
        assert response.json()["field"] == "type"

    @pytest.mark.parametrize("path", ["/reviews/admin", "/returns/admin", "/returns/admin/replacements"])
    @pytest.mark.parametrize(
        "params, field",
        [({"status": "Archived"}, "status_filter"), ({"page_size": 0}, "page_size")],
    )
    def test_admin_queues_share_query_parameters(self, client, admin_headers, path, params, field):
        response = client.get(f"{API}{path}", params=params, headers=admin_headers)
        assert response.status_code == 400
        assert response.json()["field"] == field


class TestServiceEndpoints:
    def test_health(self, client):
        response = client.get(f"{API}/info/health")
        assert response.status_code == 200
        assert response.json()["status"] == "ok"

    def test_audit_trail(self, client, admin_headers):
        client.put(f"{API}/content/about", json={"title": "About"}, headers=admin_headers)
        client.put(f"{API}/sections/health-benefits", json={"title": "T"}, headers=admin_headers)

        logs = client.get(f"{API}/audit/logs", headers=admin_headers).json()
        assert [(log["object_type"], log["action"]) for log in logs] == [("section", "update"), ("content", "upsert")]

        only_content = client.get(f"{API}/audit/logs", params={"object_type": "content"}, headers=admin_headers)
        assert len(only_content.json()) == 1
