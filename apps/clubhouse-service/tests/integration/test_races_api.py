import uuid

from clubhouse.db import models

MISSING = "00000000-0000-0000-0000-000000000000"


def test_yacht_classes(client, admin_headers):
    r = client.post("/api/yacht-classes", json={"name": "Laser", "description": "Single-handed dinghy"}, headers=admin_headers)
    assert r.status_code == 201
    assert r.json()["data"]["name"] == "Laser"

    r = client.post("/api/yacht-classes", json={"name": "Laser"}, headers=admin_headers)
    assert r.status_code == 400
    assert r.json()["error"] == "Yacht class already exists"

    r = client.get("/api/yacht-classes")
    assert [c["name"] for c in r.json()["data"]] == ["Laser"]


def test_create_yacht_class_requires_token(client):
    r = client.post("/api/yacht-classes", json={"name": "Topper"})
    assert r.status_code == 401


def test_create_race(client, admin_headers, event_factory, yacht_class_factory):
    event = event_factory(title="Spring Series")
    laser = yacht_class_factory("Laser")

    r = client.post(
        f"/api/races/events/{event.id}",
        json={"yachtClassId": str(laser.id), "raceDate": "2025-04-12", "windDirection": "SW", "windSpeed": 12},
        headers=admin_headers,
    )
    assert r.status_code == 201
    body = r.json()
    assert body["message"] == "Race created successfully"
    data = body["data"]
    assert data["race_number"] == 1
    assert data["yacht_classes"]["name"] == "Laser"
    assert data["events"]["title"] == "Spring Series"
    assert data["race_results"] == []


def test_create_race_missing_references(client, admin_headers, event_factory, yacht_class_factory):
    event = event_factory()
    laser = yacht_class_factory()

    r = client.post(f"/api/races/events/{MISSING}", json={"yachtClassId": str(laser.id), "raceDate": "2025-04-12"}, headers=admin_headers)
    assert r.status_code == 404
    assert r.json()["error"] == "Event not found"

    r = client.post(f"/api/races/events/{event.id}", json={"yachtClassId": MISSING, "raceDate": "2025-04-12"}, headers=admin_headers)
    assert r.status_code == 404
    assert r.json()["error"] == "Yacht class not found"


def test_list_event_races(client, event_factory, yacht_class_factory, race_factory):
    event = event_factory()
    laser = yacht_class_factory()
    race_factory(event, laser, race_number=2)
    race_factory(event, laser, race_number=1)

    r = client.get(f"/api/races/events/{event.id}")
    assert r.status_code == 200
    assert [race["race_number"] for race in r.json()["data"]] == [1, 2]

    assert client.get(f"/api/races/events/{MISSING}").status_code == 404


def test_submit_results_replaces_existing(client, admin_headers, db_session, event_factory, yacht_class_factory, race_factory, result_factory):
    race = race_factory(event_factory(), yacht_class_factory())
    result_factory(race, "OLD 1", position=1)

    payload = {
        "results": [
            {"sailNumber": "GBR 7", "yachtName": "Gull", "finishTime": "14:02:10", "points": 1},
            {"sailNumber": "GBR 3", "position": 5, "dnf": True},
            {"sailNumber": "GBR 9"},
        ]
    }
    r = client.post(f"/api/races/{race.id}/results", json=payload, headers=admin_headers)
    assert r.status_code == 201
    body = r.json()
    assert body["message"] == "Race results submitted successfully"
    assert [(x["sail_number"], x["position"]) for x in body["data"]] == [("GBR 7", 1), ("GBR 3", 5), ("GBR 9", 3)]
    assert body["data"][1]["dnf"] is True
    assert body["data"][0]["finish_time"] == "14:02:10"

    db_session.expire_all()
    stored = db_session.query(models.RaceResult).filter(models.RaceResult.race_id == race.id).all()
    assert sorted(x.sail_number for x in stored) == ["GBR 3", "GBR 7", "GBR 9"]


def test_get_results_orders_by_position(client, event_factory, yacht_class_factory, race_factory, result_factory):
    event = event_factory(title="Frostbite")
    race = race_factory(event, yacht_class_factory())
    result_factory(race, "THIRD", position=3)
    result_factory(race, "FIRST", position=1)
    result_factory(race, "SECOND", position=2)

    r = client.get(f"/api/races/{race.id}/results")
    assert r.status_code == 200
    data = r.json()["data"]
    assert [x["sail_number"] for x in data["race_results"]] == ["FIRST", "SECOND", "THIRD"]
    assert data["events"]["title"] == "Frostbite"


def test_submit_results_validation_error(client, admin_headers, event_factory, yacht_class_factory, race_factory, result_factory):
    race = race_factory(event_factory(), yacht_class_factory())
    result_factory(race, "KEEP", position=1)

    r = client.post(f"/api/races/{race.id}/results", json={"results": [{"yachtName": "No sail"}]}, headers=admin_headers)
    assert r.status_code == 400
    assert r.json() == {"success": False, "error": "results.0.sailNumber: Field required"}

    r = client.get(f"/api/races/{race.id}/results")
    assert [x["sail_number"] for x in r.json()["data"]["race_results"]] == ["KEEP"]


def test_submit_results_negative_position_rejected(client, admin_headers, event_factory, yacht_class_factory, race_factory):
    race = race_factory(event_factory(), yacht_class_factory())
    r = client.post(f"/api/races/{race.id}/results", json={"results": [{"sailNumber": "A", "position": -1}]}, headers=admin_headers)
    assert r.status_code == 400
    assert r.json()["error"].startswith("results.0.position:")


def test_submit_results_unknown_race(client, admin_headers):
    r = client.post(f"/api/races/{uuid.uuid4()}/results", json={"results": []}, headers=admin_headers)
    assert r.status_code == 404
    assert r.json()["error"] == "Race not found"


def test_submit_results_requires_token(client, event_factory, yacht_class_factory, race_factory):
    race = race_factory(event_factory(), yacht_class_factory())
    r = client.post(f"/api/races/{race.id}/results", json={"results": []})
    assert r.status_code == 401
