# Free-slot lookup and visit planning for a sitter.

from tests.api.support import VISIT_DATE, register_user, setup_booking


def test_free_slots_around_busy_visit(client) -> None:
    booking = setup_booking(client)  # 10:00-11:00

    response = client.get(
        "/api/scheduling/free-slots",
        params={
            "sitterProfileId": booking["profile"]["id"],
            "date": VISIT_DATE,
            "duration": 60,
            "preferredStart": "09:00",
        },
        headers=booking["owner_headers"],
    )

    assert response.status_code == 200
    body = response.json()
    assert body["busy"] == [{"timeStart": "10:00", "timeEnd": "11:00"}]
    assert body["free"] == [
        {"timeStart": "00:00", "timeEnd": "09:30"},
        {"timeStart": "11:30", "timeEnd": "24:00"},
    ]
    # 09:00-10:00 would need free time until 10:30; the next fit is after the buffers
    assert body["nextFreeStart"] == "12:00"


def test_free_slots_errors(client) -> None:
    _, headers = register_user(client)

    assert client.get("/api/scheduling/free-slots", headers=headers).status_code == 400
    assert (
        client.get(
            "/api/scheduling/free-slots", params={"sitterProfileId": "x", "date": "soon"}, headers=headers
        ).status_code
        == 400
    )
    assert (
        client.get(
            "/api/scheduling/free-slots", params={"sitterProfileId": "x", "date": VISIT_DATE}, headers=headers
        ).status_code
        == 404
    )
    assert client.get("/api/scheduling/free-slots").status_code == 401


def test_plan_suggests_visits_and_prices_them(client) -> None:
    booking = setup_booking(client)  # sitter rate 12/h, busy 10:00-11:00 on VISIT_DATE

    response = client.post(
        "/api/scheduling/plan",
        json={
            "sitterProfileId": booking["profile"]["id"],
            "dates": ["2030-06-16", VISIT_DATE, VISIT_DATE],
            "preset": "walk",
            "timeWindow": "morning",
        },
        headers=booking["owner_headers"],
    )

    assert response.status_code == 200
    plan = response.json()
    assert [d["date"] for d in plan["days"]] == [VISIT_DATE, "2030-06-16"]

    busy_day, free_day = plan["days"]
    assert busy_day["visits"][0]["timeStart"] == "12:00"
    assert busy_day["visits"][0]["timeEnd"] == "13:00"
    assert busy_day["visits"][0]["suggested"] is True
    assert busy_day["visits"][0]["services"] == ["WALKING"]
    assert free_day["visits"][0]["timeStart"] == "09:00"
    assert free_day["status"] == "free"
    assert plan["hasConflicts"] is False
    assert plan["visitsCount"] == 2
    assert plan["totalHours"] == 2
    assert plan["suggestedTotalPrice"] == 24.0
    assert plan["pricePerVisit"] == 12.0


def test_plan_reports_conflicts_for_explicit_intervals(client) -> None:
    booking = setup_booking(client)

    response = client.post(
        "/api/scheduling/plan",
        json={
            "sitterProfileId": booking["profile"]["id"],
            "dates": [VISIT_DATE],
            "intervalsByDate": {
                VISIT_DATE: [
                    {"timeStart": "10:30", "timeEnd": "11:00", "services": ["FEEDING"]},
                ]
            },
        },
        headers=booking["owner_headers"],
    )

    assert response.status_code == 200
    plan = response.json()
    assert plan["hasConflicts"] is True
    assert plan["conflicts"] == [{"date": VISIT_DATE, "timeStart": "10:00", "timeEnd": "11:00"}]
    assert plan["days"][0]["status"] == "full"
    assert plan["days"][0]["visits"][0]["task"] == "Feeding"
    assert plan["suggestedTotalPrice"] == 6.0


def test_plan_rejects_overlapping_intervals(client) -> None:
    booking = setup_booking(client)

    response = client.post(
        "/api/scheduling/plan",
        json={
            "sitterProfileId": booking["profile"]["id"],
            "dates": ["2030-06-16"],
            "intervalsByDate": {
                "2030-06-16": [
                    {"timeStart": "09:00", "timeEnd": "10:00"},
                    {"timeStart": "09:30", "timeEnd": "10:30"},
                ]
            },
        },
        headers=booking["owner_headers"],
    )

    assert response.status_code == 400
    assert "2030-06-16" in response.json()["detail"]
