"""
Kitchensink Member Service — API Tests
=======================================
Run:  pytest test_main.py -v --cov=kitchensink --cov-report=term-missing
"""
from unittest.mock import MagicMock

import pytest

from conftest import member_payload
from kitchensink.core.dependencies import get_member_repo, get_registration_service
from kitchensink.core.errors import StoreUnavailable
from kitchensink.models.domain import Member
from kitchensink.repositories import MemberRepository
from kitchensink.services.registration_service import RegistrationService
from main import app


# ═══════════════════════════════════════════════════════════════════════════
# HEALTH & METRICS
# ═══════════════════════════════════════════════════════════════════════════
class TestHealth:
    def test_health_ok(self, client):
        r = client.get("/health")
        assert r.status_code == 200
        assert r.json() == {"status": "ok", "service": "kitchensink"}

    def test_readiness_ok(self, client):
        r = client.get("/health/ready")
        assert r.status_code == 200
        assert r.json()["database"] == "connected"

    def test_readiness_fails_when_db_down(self, client):
        broken = MagicMock(spec=MemberRepository)
        broken.verify_connection.side_effect = Exception("boom")
        app.dependency_overrides[get_member_repo] = lambda: broken
        r = client.get("/health/ready")
        assert r.status_code == 503
        assert "boom" in r.json()["detail"]

    def test_metrics_endpoint(self, client):
        client.post("/members", json=member_payload())
        r = client.get("/metrics")
        assert r.status_code == 200
        assert "members_registered_total" in r.text
        assert "http_requests_total" in r.text

    def test_request_id_propagated(self, client):
        r = client.get("/members", headers={"X-Request-ID": "my-req-42"})
        assert r.headers["X-Request-ID"] == "my-req-42"

    def test_request_id_generated(self, client):
        r = client.get("/members")
        assert len(r.headers["X-Request-ID"]) == 36


# ═══════════════════════════════════════════════════════════════════════════
# POST /members
# ═══════════════════════════════════════════════════════════════════════════
class TestRegisterMember:
    def test_create_success(self, client):
        r = client.post("/members", json=member_payload())
        assert r.status_code == 201
        assert r.json() == {
            "id": 0, "name": "John Smith", "email": "john@x.com", "phoneNumber": "2125551212",
        }

    def test_ids_increase(self, client):
        first = client.post("/members", json=member_payload(email="a@example.com")).json()
        second = client.post("/members", json=member_payload(email="b@example.com")).json()
        assert (first["id"], second["id"]) == (0, 1)

    def test_duplicate_email_409_original_unchanged(self, client):
        original = client.post("/members", json=member_payload()).json()
        r = client.post("/members", json=member_payload(name="Jane Smith", phone="9998887777"))
        assert r.status_code == 409
        assert r.json() == {"email": "Email already exists"}
        assert client.get(f"/members/{original['id']}").json() == original

    def test_field_violations_400(self, client):
        r = client.post("/members", json={"name": "A1", "email": "a@b.com", "phoneNumber": "123"})
        assert r.status_code == 400
        assert r.json() == {
            "name": "Must not contain numbers",
            "phoneNumber": "size must be between 10 and 12",
        }
        assert client.get("/members").json() == []

    def test_bad_email_400(self, client):
        r = client.post("/members", json=member_payload(email="nope"))
        assert r.status_code == 400
        assert r.json() == {"email": "must be a well-formed email address"}

    def test_missing_body_400(self, client):
        r = client.post("/members")
        assert r.status_code == 400
        assert r.json() == {"error": "Member data is required."}

    @pytest.mark.parametrize("body", [[], "member", 7])
    def test_non_object_body_400(self, client, body):
        r = client.post("/members", json=body)
        assert r.status_code == 400

    @pytest.mark.parametrize("raw", [b'{"name": "x",', b"not json at all", b"\xff"])
    def test_malformed_json_400(self, client, raw):
        r = client.post("/members", content=raw, headers={"Content-Type": "application/json"})
        assert r.status_code == 400
        assert r.json() == {"error": "Member data is required."}

    def test_id_clash_is_500_not_duplicate_email(self, client, member_repo):
        member_repo.insert(Member(id=0, name="Legacy Row", email="legacy@example.com",
                                  phone_number="1234567890"))
        r = client.post("/members", json=member_payload(email="brand.new@example.com"))
        assert r.status_code == 500
        assert r.json()["error"] == "internal_server_error"
        assert "email" not in r.json()

    def test_client_supplied_id_409(self, client):
        r = client.post("/members", json=member_payload(id=5))
        assert r.status_code == 409
        assert "id" in r.json()
        assert client.get("/members").json() == []

    def test_store_unavailable_500(self, client):
        service = MagicMock(spec=RegistrationService)
        service.register.side_effect = StoreUnavailable("db gone", operation="sequence_next")
        app.dependency_overrides[get_registration_service] = lambda: service
        r = client.post("/members", json=member_payload())
        assert r.status_code == 500
        body = r.json()
        assert body["error"] == "internal_server_error"
        assert "db gone" not in body["detail"]


# ═══════════════════════════════════════════════════════════════════════════
# GET /members
# ═══════════════════════════════════════════════════════════════════════════
class TestListMembers:
    def test_empty(self, client):
        r = client.get("/members")
        assert r.status_code == 200
        assert r.json() == []

    def test_ordered_by_name(self, client):
        for i, name in enumerate(["Walter", "Ann", "Mia"]):
            client.post("/members", json=member_payload(name=name, email=f"m{i}@example.com"))
        r = client.get("/members")
        assert [m["name"] for m in r.json()] == ["Ann", "Mia", "Walter"]

    def test_unexpected_error_is_generic_500(self, client):
        service = MagicMock(spec=RegistrationService)
        service.list_members.side_effect = RuntimeError("kaboom at line 12")
        app.dependency_overrides[get_registration_service] = lambda: service
        r = client.get("/members", headers={"X-Request-ID": "req-500"})
        assert r.status_code == 500
        body = r.json()
        assert body["error"] == "internal_server_error"
        assert body["request_id"] == "req-500"
        assert "kaboom" not in body["detail"]

    def test_store_unavailable_500(self, client):
        service = MagicMock(spec=RegistrationService)
        service.list_members.side_effect = StoreUnavailable("down")
        app.dependency_overrides[get_registration_service] = lambda: service
        assert client.get("/members").status_code == 500


# ═══════════════════════════════════════════════════════════════════════════
# GET /members/{id}
# ═══════════════════════════════════════════════════════════════════════════
class TestGetMember:
    def test_found(self, client):
        created = client.post("/members", json=member_payload()).json()
        r = client.get(f"/members/{created['id']}")
        assert r.status_code == 200
        assert r.json() == created

    def test_not_found(self, client):
        r = client.get("/members/41")
        assert r.status_code == 404
        assert r.json()["detail"] == "Member with id of 41 does not exist."

    def test_invalid_id(self, client):
        r = client.get("/members/not-a-number")
        assert r.status_code == 400
