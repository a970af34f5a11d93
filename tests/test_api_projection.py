import pytest


def test_defaults_endpoint(client):
    r = client.get("/api/assumptions/defaults")
    assert r.status_code == 200
    data = r.json()
    assert data["studentFee"] == 65
    assert data["conversionRate"] == pytest.approx(0.012)


def test_projection_with_empty_body_uses_defaults(client):
    r = client.post("/api/projection", json={})
    assert r.status_code == 200, r.text
    p = r.json()
    assert p["membership_y1"] == pytest.approx(51_045.0)
    assert p["market"]["total_tam"] == 4_698
    assert len(p["monthly_data"]) == 12
    assert p["break_even_month"] is None
    assert [y["year"] for y in p["year_comparison"]] == ["Year 1", "Year 2", "Year 3"]
    assert len(p["capacity"]["revenue_at_utilization"]) == 4
    assert p["startup_breakdown"][0] == {"name": "Buildout", "value": 30_000, "share": pytest.approx(30_000 / 98_900)}
    assert p["operating_breakdown"][-1]["name"] == "Staffing"


def test_projection_overlays_partial_payload(client):
    r = client.post("/api/projection", json={"studentFee": "80", "rent": "oops"})
    assert r.status_code == 200
    p = r.json()
    # membership: (80*25 + 2100 + 1400) * 12 * 0.83
    assert p["membership_y1"] == pytest.approx(5_500 * 12 * 0.83)
    # rent coerced to 0
    assert p["monthly_fixed"] == pytest.approx(4_850 - 2_500)


def test_non_finite_values_are_null_in_json(client):
    r = client.post("/api/projection", json={"dailyHours": 0, "liveRoomLockout": -6})
    assert r.status_code == 200
    cap = r.json()["capacity"]
    assert cap["total_capacity"] == 0
    assert cap["utilization_required"] is None


def test_huge_integer_input_still_projects(client):
    r = client.post("/api/projection", json={"studentMembers": 10**400})
    assert r.status_code == 200, r.text
    p = r.json()
    assert p["membership_y1"] is None
    assert p["capacity"]["utilization_required"] is None
    assert p["hourly_y1"] == pytest.approx(43_248.0)


def test_saved_model_projection(repo_client):
    created = repo_client.post(
        "/api/models",
        json={"name": "no startup", "data": {
            "buildout": 0, "equipment": 0, "streaming": 0,
            "opCapital": 0, "legal": 0, "marketing": 0,
        }},
    ).json()

    r = repo_client.get(f"/api/models/{created['id']}/projection")
    assert r.status_code == 200
    body = r.json()
    assert body["id"] == created["id"]
    assert body["name"] == "no startup"
    assert body["projection"]["total_startup"] == 0
    assert body["projection"]["break_even_month"] == 2
