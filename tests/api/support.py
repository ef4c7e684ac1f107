# Shared helpers for API endpoint tests.
# They wire the app to a per-test in-memory database and create the users,
# pets, sitter profiles and visits most tests start from.

from collections.abc import Iterator
from contextlib import contextmanager
from itertools import count
from typing import Any

from fastapi.testclient import TestClient

from petsitter.database import get_db
from petsitter.main import app

VISIT_DATE = "2030-06-15"
PASSWORD = "secret-password"

_emails = count(1)


@contextmanager
def api_test_client(session_factory) -> Iterator[TestClient]:
    """Yield a TestClient whose requests each get a session on the test database"""

    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    try:
        with TestClient(app) as client:
            yield client
    finally:
        app.dependency_overrides.clear()


def auth_headers(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


def register_user(
    client: TestClient, *, role: str = "OWNER", name: str = "Test User", **overrides: Any
) -> tuple[dict, dict[str, str]]:
    """Register a user and return (auth response body, bearer headers)"""
    payload = {
        "email": f"user{next(_emails)}@example.com",
        "password": PASSWORD,
        "name": name,
        "role": role,
        **overrides,
    }
    response = client.post("/api/auth/register", json=payload)
    assert response.status_code == 201, response.text
    body = response.json()
    return body, auth_headers(body["accessToken"])


def create_pet(client: TestClient, headers: dict[str, str], **overrides: Any) -> dict:
    payload = {"name": "Rex", "type": "DOG", "age": 3, **overrides}
    response = client.post("/api/pets", json=payload, headers=headers)
    assert response.status_code == 201, response.text
    return response.json()


def create_sitter_profile(client: TestClient, headers: dict[str, str], **overrides: Any) -> dict:
    payload = {
        "bio": "Experienced with dogs and cats of all sizes.",
        "city": "Vilnius",
        "hourlyRate": 12.0,
        **overrides,
    }
    response = client.post("/api/sitter-profiles", json=payload, headers=headers)
    assert response.status_code == 201, response.text
    return response.json()


def book_visit(
    client: TestClient,
    headers: dict[str, str],
    sitter_profile_id: str,
    pet_ids: list[str],
    expected_status: int = 201,
    **overrides: Any,
):
    payload = {
        "sitterProfileId": sitter_profile_id,
        "petIds": pet_ids,
        "address": "Gedimino pr. 1, Vilnius",
        "date": VISIT_DATE,
        "timeStart": "10:00",
        "timeEnd": "11:00",
        "services": ["FEEDING", "WALKING"],
        "totalPrice": 12.0,
        **overrides,
    }
    response = client.post("/api/visits", json=payload, headers=headers)
    assert response.status_code == expected_status, response.text
    return response.json()


def setup_booking(client: TestClient, **visit_overrides: Any) -> dict:
    """Owner with a pet, sitter with a profile, and one PENDING visit between them"""
    owner, owner_headers = register_user(client, role="OWNER", name="Olivia Owner")
    sitter, sitter_headers = register_user(client, role="SITTER", name="Sam Sitter", phone="+37060000000")
    pet = create_pet(client, owner_headers)
    profile = create_sitter_profile(client, sitter_headers)
    visit = book_visit(client, owner_headers, profile["id"], [pet["id"]], **visit_overrides)
    return {
        "owner": owner["user"],
        "owner_headers": owner_headers,
        "sitter": sitter["user"],
        "sitter_headers": sitter_headers,
        "pet": pet,
        "profile": profile,
        "visit": visit,
    }


def set_status(client: TestClient, booking: dict, status: str):
    return client.patch(
        f"/api/visits/{booking['visit']['id']}/status",
        json={"status": status},
        headers=booking["sitter_headers"],
    )
