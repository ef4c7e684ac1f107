# Sitter profile lifecycle and the public search.

from petsitter.models import SitterProfile
from tests.api.support import create_sitter_profile, register_user


def test_create_profile_once_per_user(client) -> None:
    _, headers = register_user(client, role="SITTER")
    profile = create_sitter_profile(client, headers, services=["DOG_WALKING"], maxPets=2)

    duplicate = client.post(
        "/api/sitter-profiles", json={"city": "Kaunas", "hourlyRate": 10}, headers=headers
    )

    assert profile["city"] == "Vilnius"
    assert profile["services"] == ["DOG_WALKING"]
    assert profile["avgRating"] == 0
    assert profile["totalReviews"] == 0
    assert duplicate.status_code == 409


def test_create_profile_validation(client) -> None:
    _, headers = register_user(client, role="SITTER")

    def post(**payload):
        return client.post("/api/sitter-profiles", json=payload, headers=headers)

    assert post(city="V", hourlyRate=10).status_code == 422
    assert post(city="Vilnius", hourlyRate=-1).status_code == 422
    assert post(city="Vilnius", hourlyRate=10, bio="short").status_code == 422
    assert post(city="Vilnius", hourlyRate=10, maxPets=0).status_code == 422
    assert post(city="Vilnius", hourlyRate=10, experienceYears=-2).status_code == 422


def test_get_mine_and_public_profile_include_contact_fields(client) -> None:
    sitter, headers = register_user(client, role="SITTER", name="Sam", phone="+37061111111")
    _, stranger_headers = register_user(client)

    assert client.get("/api/sitter-profiles/me", headers=headers).status_code == 404

    profile = create_sitter_profile(client, headers)
    mine = client.get("/api/sitter-profiles/me", headers=headers)
    public = client.get(f"/api/sitter-profiles/{profile['id']}")

    assert mine.status_code == 200
    assert public.status_code == 200
    user = public.json()["user"]
    assert user["id"] == sitter["user"]["id"]
    assert user["email"] == sitter["user"]["email"]
    assert user["phone"] == "+37061111111"
    assert client.get("/api/sitter-profiles/missing").status_code == 404
    assert client.get("/api/sitter-profiles/me", headers=stranger_headers).status_code == 404


def test_search_filters_and_orders_by_rating(client, db) -> None:
    _, a_headers = register_user(client, role="SITTER", name="Alice")
    _, b_headers = register_user(client, role="SITTER", name="Bob")
    _, c_headers = register_user(client, role="SITTER", name="Carl")
    a = create_sitter_profile(client, a_headers, city="Vilnius", hourlyRate=10)
    b = create_sitter_profile(client, b_headers, city="vilnius centras", hourlyRate=20)
    c = create_sitter_profile(client, c_headers, city="Kaunas", hourlyRate=15)

    db.query(SitterProfile).filter(SitterProfile.id == a["id"]).update({"avg_rating": 3.5})
    db.query(SitterProfile).filter(SitterProfile.id == b["id"]).update({"avg_rating": 4.8})
    db.commit()

    everyone = client.get("/api/sitter-profiles").json()
    in_vilnius = client.get("/api/sitter-profiles", params={"city": "VILNIUS"}).json()
    affordable = client.get("/api/sitter-profiles", params={"minRate": 10, "maxRate": 15}).json()
    well_rated = client.get("/api/sitter-profiles", params={"minRating": 4}).json()

    assert [p["id"] for p in everyone] == [b["id"], a["id"], c["id"]]
    assert [p["id"] for p in in_vilnius] == [b["id"], a["id"]]
    assert {p["id"] for p in affordable} == {a["id"], c["id"]}
    assert [p["id"] for p in well_rated] == [b["id"]]
    # The list view exposes only id, name and avatar of the sitter
    assert everyone[0]["user"]["name"] == "Bob"
    assert everyone[0]["user"]["email"] is None


def test_update_and_delete_my_profile(client) -> None:
    _, headers = register_user(client, role="SITTER")

    assert client.patch("/api/sitter-profiles/me", json={"city": "Kaunas"}, headers=headers).status_code == 404

    create_sitter_profile(client, headers)
    updated = client.patch(
        "/api/sitter-profiles/me", json={"hourlyRate": 18.5, "bio": ""}, headers=headers
    )

    assert updated.status_code == 200
    assert updated.json()["hourlyRate"] == 18.5
    assert updated.json()["bio"] is None
    assert updated.json()["city"] == "Vilnius"

    deleted = client.delete("/api/sitter-profiles/me", headers=headers)
    assert deleted.status_code == 200
    assert client.get("/api/sitter-profiles/me", headers=headers).status_code == 404
    assert client.delete("/api/sitter-profiles/me", headers=headers).status_code == 404
