"""
HTTP tests for the JSON API.

Runs requests through the Flask test client with the fake provider from
conftest; checks status codes, response shapes and stored side effects.
"""

import pytest

from domain.models import Generation, db

from conftest import TODAY, FakeGateway, fetch_profile, generation_count


class TestGenerateEndpoint:

    def test_end_to_end_example(self, client, auth_headers, make_profile):
        make_profile("u1", count=3, last_date=TODAY)

        resp = client.post(
            "/api/generate",
            json={"text": "Hello world", "targets": ["instagram", "twitter"], "tone": "casual"},
            headers=auth_headers("u1"),
        )

        assert resp.status_code == 200
        body = resp.get_json()
        assert list(body["results"]) == ["instagram", "twitter"]
        assert body["generationsRemaining"] == 1

        db.session.expire_all()
        record = Generation.query.filter_by(user_id="u1").one()
        assert record.platforms == ["instagram", "twitter"]
        assert record.tone == "casual"

    def test_result_order_follows_request_not_alphabet(self, client, auth_headers):
        resp = client.post(
            "/api/generate",
            json={"text": "Hi", "targets": ["twitter", "facebook", "instagram"], "tone": "viral"},
            headers=auth_headers("u1"),
        )

        assert list(resp.get_json()["results"]) == ["twitter", "facebook", "instagram"]

    def test_original_endpoint_and_field_names(self, client, auth_headers):
        resp = client.post(
            "/generate-content",
            json={"content": "Hi", "platforms": ["linkedin"], "tone": "professional"},
            headers=auth_headers("u1"),
        )

        assert resp.status_code == 200
        assert resp.get_json()["results"] == {"linkedin": "[linkedin|professional] Hi"}

    def test_unauthorized(self, client, gateway):
        resp = client.post("/api/generate", json={"text": "x", "targets": ["twitter"], "tone": "casual"})

        assert resp.status_code == 401
        assert resp.get_json() == {"error": "Authorization required"}
        assert gateway.calls == []

    def test_auth_checked_before_body(self, client):
        resp = client.post("/api/generate", data="not json", headers={"Authorization": "Bearer nope"})

        assert resp.status_code == 401
        assert resp.get_json() == {"error": "Invalid token"}

    def test_bad_request(self, client, auth_headers):
        resp = client.post("/api/generate", json={"text": "x", "targets": []}, headers=auth_headers("u1"))

        assert resp.status_code == 400
        assert resp.get_json() == {"error": "Missing required fields"}

    def test_invalid_json_body(self, client, auth_headers):
        resp = client.post("/api/generate", data="{oops", headers=auth_headers("u1"))

        assert resp.status_code == 400

    def test_overlong_tone_is_bad_request(self, client, auth_headers, make_profile, gateway):
        make_profile("u1", count=1, last_date=TODAY)

        resp = client.post(
            "/api/generate",
            json={"text": "x", "targets": ["twitter"], "tone": "t" * 200000},
            headers=auth_headers("u1"),
        )

        assert resp.status_code == 400
        assert resp.get_json() == {"error": "Invalid request: 'tone' is too long (max 64 characters)"}
        assert gateway.calls == []
        assert generation_count("u1") == 0
        assert fetch_profile("u1").generations_today == 1

    def test_body_over_configured_limit(self, app, client, auth_headers, gateway):
        app.config["MAX_CONTENT_LENGTH"] = 1024

        resp = client.post(
            "/api/generate",
            json={"text": "x" * 2048, "targets": ["twitter"], "tone": "casual"},
            headers=auth_headers("u1"),
        )

        assert resp.status_code == 413
        assert gateway.calls == []

    def test_quota_exceeded(self, client, auth_headers, make_profile, gateway):
        make_profile("u1", count=5, last_date=TODAY)

        resp = client.post(
            "/api/generate",
            json={"text": "x", "targets": ["twitter"], "tone": "casual"},
            headers=auth_headers("u1"),
        )

        assert resp.status_code == 429
        body = resp.get_json()
        assert body["limitReached"] is True
        assert "Daily limit reached" in body["error"]
        assert gateway.calls == []
        assert fetch_profile("u1").generations_today == 5

    def test_provider_failure_is_generic(self, app, client, auth_headers, make_profile):
        make_profile("u1", count=0, last_date=TODAY)
        app.extensions["provider_gateway"] = FakeGateway(fail_on={"twitter"})

        resp = client.post(
            "/api/generate",
            json={"text": "x", "targets": ["instagram", "twitter"], "tone": "casual"},
            headers=auth_headers("u1"),
        )

        assert resp.status_code == 502
        assert resp.get_json() == {"error": "Failed to generate content for twitter"}
        assert generation_count("u1") == 0
        assert fetch_profile("u1").generations_today == 0

    def test_unlimited_user(self, client, auth_headers, make_profile):
        make_profile("pro", tier="unlimited", count=99, last_date=TODAY)

        resp = client.post(
            "/api/generate",
            json={"text": "x", "targets": ["twitter"], "tone": "casual"},
            headers=auth_headers("pro"),
        )

        assert resp.get_json()["generationsRemaining"] == "unlimited"

    def test_no_cache_headers(self, client, auth_headers):
        resp = client.post(
            "/api/generate",
            json={"text": "x", "targets": ["twitter"], "tone": "casual"},
            headers=auth_headers("u1"),
        )

        assert "no-store" in resp.headers["Cache-Control"]


class TestUsageEndpoint:

    def test_usage(self, client, auth_headers, make_profile):
        make_profile("u1", count=2, last_date=TODAY)

        resp = client.get("/api/usage", headers=auth_headers("u1"))

        assert resp.status_code == 200
        assert resp.get_json() == {"tier": "free", "used": 2, "limit": 5, "generationsRemaining": 3}

    def test_usage_requires_auth(self, client):
        assert client.get("/api/usage").status_code == 401


class TestHistoryEndpoints:

    def _generate(self, client, headers, text):
        resp = client.post(
            "/api/generate",
            json={"text": text, "targets": ["linkedin"], "tone": "friendly"},
            headers=headers,
        )
        assert resp.status_code == 200

    def test_list_and_delete(self, client, auth_headers):
        headers = auth_headers("u1")
        self._generate(client, headers, "first")
        self._generate(client, headers, "second")

        items = client.get("/api/history", headers=headers).get_json()["items"]
        assert {i["original_content"] for i in items} == {"first", "second"}
        assert items[0]["results"] == {"linkedin": f"[linkedin|friendly] {items[0]['original_content']}"}

        resp = client.delete(f"/api/history/{items[0]['id']}", headers=headers)
        assert resp.status_code == 200
        assert resp.get_json() == {"ok": True}
        assert len(client.get("/api/history", headers=headers).get_json()["items"]) == 1

    def test_cannot_delete_someone_elses_record(self, client, auth_headers):
        self._generate(client, auth_headers("owner"), "mine")
        record_id = client.get("/api/history", headers=auth_headers("owner")).get_json()["items"][0]["id"]

        resp = client.delete(f"/api/history/{record_id}", headers=auth_headers("intruder"))

        assert resp.status_code == 404
        assert resp.get_json() == {"error": "Generation not found"}
        assert generation_count("owner") == 1

    def test_history_is_per_user(self, client, auth_headers):
        self._generate(client, auth_headers("owner"), "mine")

        assert client.get("/api/history", headers=auth_headers("other")).get_json() == {"items": []}

    @pytest.mark.parametrize("limit,status", [("1", 200), ("abc", 400)])
    def test_limit_param(self, client, auth_headers, limit, status):
        headers = auth_headers("u1")
        self._generate(client, headers, "a")
        self._generate(client, headers, "b")

        resp = client.get(f"/api/history?limit={limit}", headers=headers)

        assert resp.status_code == status
        if status == 200:
            assert len(resp.get_json()["items"]) == 1


class TestPublicEndpoints:

    def test_catalog(self, client):
        data = client.get("/api/catalog").get_json()

        assert [t["id"] for t in data["targets"]] == ["instagram", "facebook", "linkedin", "twitter"]

    def test_health(self, client):
        assert client.get("/health").get_json() == {"ok": True}

    def test_unknown_route_is_json(self, client):
        resp = client.get("/api/nope")

        assert resp.status_code == 404
        assert "error" in resp.get_json()
