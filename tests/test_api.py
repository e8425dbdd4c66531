import json

from flock_records_api.app.core.config import settings


def save(client, **body):
    return client.post("/api/records/save", json=body)


def delete(client, **body):
    return client.request("DELETE", "/api/records/delete", json=body)


def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_save_returns_record_in_camel_case(client, clock):
    response = save(client, flockId="F1", day=1, breederName="Ali", initialChickCount=500,
                    mortality=2, feedKg=12.5, avgWeight=0.05, waterIntake=40, notes="arrived")

    assert response.status_code == 200
    body = response.json()
    assert body["message"] == "Saved day 1 for breeder Ali."
    assert body["record"] == {
        "day": 1,
        "mortality": 2,
        "feedKg": 12.5,
        "avgWeight": 0.05,
        "waterIntake": 40,
        "notes": "arrived",
        "createdAt": clock.now.isoformat(),
        "updatedAt": clock.now.isoformat(),
    }


def test_save_ignores_unknown_fields(client, data_path):
    save(client, flockId="F1", day=1, breederName="Ali", initialChickCount=500, color="red")

    stored = json.loads(data_path.read_text(encoding="utf-8"))
    assert "color" not in stored[0]["dailyRecords"][0]
    assert "initialChickCount" not in stored[0]["dailyRecords"][0]
    assert "breederName" not in stored[0]["dailyRecords"][0]


def test_save_new_flock_without_chick_count_is_400(client):
    before = client.get("/api/flock/all-data").json()
    response = save(client, flockId="F1", day=1, breederName="Ali")

    assert response.status_code == 400
    assert "initialChickCount" in response.json()["detail"]
    assert client.get("/api/flock/all-data").json() == before


def test_save_missing_fields_is_400(client):
    assert save(client, day=1, breederName="Ali", initialChickCount=5).status_code == 400
    assert save(client, flockId="F1", breederName="Ali", initialChickCount=5).status_code == 400
    assert save(client, flockId="F1", day=1, initialChickCount=5).status_code == 400


def test_save_non_numeric_day_is_400(client):
    response = save(client, flockId="F1", day="first", breederName="Ali", initialChickCount=5)
    assert response.status_code == 400


def test_save_boolean_day_is_400(client, data_path):
    response = save(client, flockId="B", day=True, breederName="Ali", initialChickCount=5)

    assert response.status_code == 400
    assert not data_path.exists()


def test_save_rejects_non_numeric_observations(client):
    assert save(client, flockId="B", day=1, breederName="Ali", initialChickCount=5,
                mortality="").status_code == 400
    assert save(client, flockId="B", day=1, breederName="Ali", initialChickCount=5,
                feedKg=True).status_code == 400
    assert save(client, flockId="B", day=1, breederName="Ali",
                initialChickCount="5").status_code == 400


def test_list_all_and_get_one(client):
    save(client, flockId="F1", day=1, breederName="Ali", initialChickCount=500)
    save(client, flockId="F2", day=4, breederName="Mona", initialChickCount=250)

    all_data = client.get("/api/flock/all-data").json()
    assert [f["flockId"] for f in all_data] == ["F1", "F2"]

    response = client.get("/api/flock/data/F2")
    assert response.status_code == 200
    flock = response.json()
    assert flock["breederName"] == "Mona"
    assert flock["initialChickCount"] == 250
    assert flock["currentAge"] == 4
    assert flock["startDate"] == "2024-03-01"
    assert [r["day"] for r in flock["dailyRecords"]] == [4]


def test_get_flock_with_slash_in_id(client):
    save(client, flockId="A/1", day=1, breederName="Ali", initialChickCount=100)

    response = client.get("/api/flock/data/A%2F1")

    assert response.status_code == 200
    assert response.json()["flockId"] == "A/1"
    assert client.get("/api/flock/data/A/1").json()["flockId"] == "A/1"


def test_get_unknown_flock_is_404(client):
    assert client.get("/api/flock/data/nope").status_code == 404


def test_list_all_on_corrupt_store_is_empty(client, data_path):
    data_path.write_text("[{", encoding="utf-8")
    response = client.get("/api/flock/all-data")
    assert response.status_code == 200
    assert response.json() == []


def test_update_record(client, clock):
    save(client, flockId="F1", day=1, breederName="Ali", initialChickCount=500, mortality=2)
    clock.advance(minutes=30)

    response = client.put("/api/records/update", json={"flockId": "F1", "day": 1, "feedKg": 9})

    assert response.status_code == 200
    record = response.json()["record"]
    assert record["feedKg"] == 9
    assert record["mortality"] == 2
    assert record["updatedAt"] == clock.now.isoformat()
    assert record["createdAt"] != record["updatedAt"]


def test_update_errors(client):
    save(client, flockId="F1", day=1, breederName="Ali", initialChickCount=500)
    before = client.get("/api/flock/all-data").json()

    assert client.put("/api/records/update", json={"day": 1}).status_code == 400
    assert client.put("/api/records/update", json={"flockId": "X", "day": 1}).status_code == 404
    assert client.put("/api/records/update", json={"flockId": "F1", "day": 2}).status_code == 404
    assert client.get("/api/flock/all-data").json() == before


def test_delete_record(client):
    save(client, flockId="F1", day=1, breederName="Ali", initialChickCount=500)
    save(client, flockId="F1", day=2)

    response = delete(client, flockId="F1", day=2)

    assert response.status_code == 200
    assert response.json() == {"message": "Deleted day 2 from flock F1."}
    assert client.get("/api/flock/data/F1").json()["currentAge"] == 1


def test_delete_errors(client):
    save(client, flockId="F1", day=1, breederName="Ali", initialChickCount=500)

    assert delete(client, flockId="F1").status_code == 400
    assert delete(client, flockId="X", day=1).status_code == 404
    assert delete(client, flockId="F1", day=5).status_code == 404
    assert len(client.get("/api/flock/data/F1").json()["dailyRecords"]) == 1


def test_write_failure_is_500(client, tmp_path, monkeypatch):
    blocker = tmp_path / "blocker"
    blocker.write_text("x", encoding="utf-8")
    monkeypatch.setattr(settings, "data_file", str(blocker / "flock_data.json"))

    response = save(client, flockId="F1", day=1, breederName="Ali", initialChickCount=500)

    assert response.status_code == 500
    assert client.get("/api/flock/all-data").json() == []


def test_end_to_end_scenario(client):
    assert save(client, flockId="F1", day=1, breederName="Ali",
                initialChickCount=500, mortality=2).status_code == 200
    flock = client.get("/api/flock/data/F1").json()
    assert flock["initialChickCount"] == 500
    assert len(flock["dailyRecords"]) == 1

    assert save(client, flockId="F1", day=2, mortality=3).status_code == 200
    flock = client.get("/api/flock/data/F1").json()
    assert len(flock["dailyRecords"]) == 2
    assert flock["currentAge"] == 2

    assert delete(client, flockId="F1", day=2).status_code == 200
    assert client.get("/api/flock/data/F1").json()["currentAge"] == 1

    all_data = client.get("/api/flock/all-data").json()
    assert [f["flockId"] for f in all_data] == ["F1"]
    assert [r["day"] for r in all_data[0]["dailyRecords"]] == [1]
