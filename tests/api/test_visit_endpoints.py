# Booking, listing and busy-slot behavior of visits.

from tests.api.support import (
    VISIT_DATE,
    book_visit,
    create_pet,
    create_sitter_profile,
    register_user,
    setup_booking,
)


def test_create_visit_starts_pending_and_resolves_sitter_user(client) -> None:
    booking = setup_booking(client)
    visit = booking["visit"]

    assert visit["status"] == "PENDING"
    assert visit["sitterId"] == booking["profile"]["id"]
    assert visit["sitterUserId"] == booking["sitter"]["id"]
    assert visit["ownerId"] == booking["owner"]["id"]
    assert visit["date"] == VISIT_DATE
    assert [p["id"] for p in visit["pets"]] == [booking["pet"]["id"]]
    assert visit["sitter"]["user"]["phone"] == "+37060000000"


def test_create_visit_accepts_iso_datetime(client) -> None:
    booking = setup_booking(client, date=f"{VISIT_DATE}T00:00:00.000Z")

    assert booking["visit"]["date"] == VISIT_DATE


def test_create_visit_with_foreign_pet_is_forbidden(client) -> None:
    booking = setup_booking(client)
    _, stranger_headers = register_user(client)
    stranger_pet = create_pet(client, stranger_headers)

    book_visit(
        client,
        booking["owner_headers"],
        booking["profile"]["id"],
        [booking["pet"]["id"], stranger_pet["id"]],
        expected_status=403,
        timeStart="15:00",
        timeEnd="16:00",
    )


def test_create_visit_for_unknown_sitter_is_not_found(client) -> None:
    _, headers = register_user(client)
    pet = create_pet(client, headers)

    book_visit(client, headers, "missing-profile", [pet["id"]], expected_status=404)


def test_create_visit_validation(client) -> None:
    _, owner_headers = register_user(client)
    _, sitter_headers = register_user(client, role="SITTER")
    pet = create_pet(client, owner_headers)
    profile = create_sitter_profile(client, sitter_headers)

    book_visit(client, owner_headers, profile["id"], [], expected_status=422)
    book_visit(client, owner_headers, profile["id"], [pet["id"]], expected_status=422, date="15/06/2030")
    book_visit(client, owner_headers, profile["id"], [pet["id"]], expected_status=422, timeStart="9am")
    book_visit(client, owner_headers, profile["id"], [pet["id"]], expected_status=422, totalPrice=-1)
    book_visit(
        client, owner_headers, profile["id"], [pet["id"]], expected_status=400, timeStart="12:00", timeEnd="11:00"
    )


def test_create_visit_conflicting_with_busy_slot_including_buffer(client) -> None:
    booking = setup_booking(client)  # 10:00-11:00

    # Starts 20 minutes after the existing visit ends: inside the travel buffer
    book_visit(
        client,
        booking["owner_headers"],
        booking["profile"]["id"],
        [booking["pet"]["id"]],
        expected_status=409,
        timeStart="11:20",
        timeEnd="12:00",
    )
    # Another day is fine
    book_visit(
        client,
        booking["owner_headers"],
        booking["profile"]["id"],
        [booking["pet"]["id"]],
        date="2030-06-16",
    )


def test_my_bookings_and_my_jobs(client) -> None:
    booking = setup_booking(client)
    later = book_visit(
        client,
        booking["owner_headers"],
        booking["profile"]["id"],
        [booking["pet"]["id"]],
        date="2030-07-01",
    )

    bookings = client.get("/api/visits/my-bookings", headers=booking["owner_headers"])
    jobs = client.get("/api/visits/my-jobs", headers=booking["sitter_headers"])

    assert bookings.status_code == 200
    assert [v["id"] for v in bookings.json()] == [later["id"], booking["visit"]["id"]]
    assert bookings.json()[0]["sitter"]["id"] == booking["profile"]["id"]
    assert jobs.status_code == 200
    assert [v["id"] for v in jobs.json()] == [later["id"], booking["visit"]["id"]]
    assert jobs.json()[0]["owner"]["email"] == booking["owner"]["email"]
    assert jobs.json()[0]["pets"][0]["name"] == "Rex"
    assert client.get("/api/visits/my-jobs", headers=booking["owner_headers"]).json() == []


def test_busy_slots(client) -> None:
    booking = setup_booking(client)
    book_visit(
        client,
        booking["owner_headers"],
        booking["profile"]["id"],
        [booking["pet"]["id"]],
        date="2030-06-17",
        timeStart="08:00",
        timeEnd="09:00",
    )
    headers = booking["owner_headers"]
    params = {"sitterProfileId": booking["profile"]["id"], "dateFrom": VISIT_DATE, "dateTo": "2030-06-17"}

    response = client.get("/api/visits/busy-slots", params=params, headers=headers)

    assert response.status_code == 200
    assert response.json() == [
        {"date": VISIT_DATE, "timeStart": "10:00", "timeEnd": "11:00"},
        {"date": "2030-06-17", "timeStart": "08:00", "timeEnd": "09:00"},
    ]

    narrow = client.get(
        "/api/visits/busy-slots", params={**params, "dateTo": VISIT_DATE}, headers=headers
    )
    assert len(narrow.json()) == 1


def test_busy_slots_parameter_errors(client) -> None:
    _, headers = register_user(client)

    missing = client.get("/api/visits/busy-slots", params={"sitterProfileId": "x"}, headers=headers)
    bad_date = client.get(
        "/api/visits/busy-slots",
        params={"sitterProfileId": "x", "dateFrom": "tomorrow", "dateTo": "2030-01-01"},
        headers=headers,
    )
    datetime_value = client.get(
        "/api/visits/busy-slots",
        params={"sitterProfileId": "x", "dateFrom": "2030-01-01T10:00:00", "dateTo": "2030-01-02"},
        headers=headers,
    )
    reversed_range = client.get(
        "/api/visits/busy-slots",
        params={"sitterProfileId": "x", "dateFrom": "2030-01-02", "dateTo": "2030-01-01"},
        headers=headers,
    )

    assert missing.status_code == 400
    assert bad_date.status_code == 400
    assert datetime_value.status_code == 400
    assert reversed_range.status_code == 400


def test_canceled_and_rejected_visits_do_not_block(client) -> None:
    booking = setup_booking(client)
    client.patch(f"/api/visits/{booking['visit']['id']}/cancel", headers=booking["owner_headers"])

    params = {
        "sitterProfileId": booking["profile"]["id"],
        "dateFrom": VISIT_DATE,
        "dateTo": VISIT_DATE,
    }
    response = client.get("/api/visits/busy-slots", params=params, headers=booking["owner_headers"])

    assert response.json() == []
    book_visit(client, booking["owner_headers"], booking["profile"]["id"], [booking["pet"]["id"]])


def test_get_visit_only_for_participants(client) -> None:
    booking = setup_booking(client)
    _, stranger_headers = register_user(client)
    url = f"/api/visits/{booking['visit']['id']}"

    assert client.get(url, headers=booking["owner_headers"]).status_code == 200
    assert client.get(url, headers=booking["sitter_headers"]).status_code == 200
    assert client.get(url, headers=stranger_headers).status_code == 403
    assert client.get("/api/visits/missing", headers=stranger_headers).status_code == 404


def test_visits_require_authentication(client) -> None:
    assert client.get("/api/visits/my-bookings").status_code == 401
    assert client.post("/api/visits", json={}).status_code == 401
