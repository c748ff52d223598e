"""Per-date option assignment."""

from conftest import LOCATION


def _get(client, headers, start="2024-06-03", end="2024-06-07", location=LOCATION):
    return client.get(
        "/daily-menu",
        params={"from": start, "to": end, "locationId": location},
        headers=headers,
    )


def test_save_and_read_back(client, catering_headers, menu):
    r = client.post(
        "/daily-menu",
        json={
            "locationId": LOCATION,
            "days": [
                {"date": "2024-06-03", "itemIds": [menu["curry"], menu["wrap"]]},
                {"date": "2024-06-04", "itemIds": [menu["lasagne"]]},
            ],
        },
        headers=catering_headers,
    )
    assert r.status_code == 200
    assert r.json() == {"ok": True}

    days = _get(client, catering_headers).json()["days"]
    assert [d["date"] for d in days] == ["2024-06-03", "2024-06-04"]
    assert sorted(days[0]["itemIds"]) == sorted([menu["curry"], menu["wrap"]])
    assert days[1]["itemIds"] == [menu["lasagne"]]


def test_save_replaces_and_leaves_other_dates(client, catering_headers, menu):
    client.post(
        "/daily-menu",
        json={
            "locationId": LOCATION,
            "days": [
                {"date": "2024-06-03", "itemIds": [menu["curry"]]},
                {"date": "2024-06-04", "itemIds": [menu["lasagne"]]},
            ],
        },
        headers=catering_headers,
    )
    client.post(
        "/daily-menu",
        json={"locationId": LOCATION, "days": [{"date": "2024-06-03", "itemIds": [menu["wrap"]]}]},
        headers=catering_headers,
    )

    days = {d["date"]: d["itemIds"] for d in _get(client, catering_headers).json()["days"]}
    assert days == {"2024-06-03": [menu["wrap"]], "2024-06-04": [menu["lasagne"]]}


def test_save_is_idempotent_and_dedupes(client, catering_headers, menu):
    body = {
        "locationId": LOCATION,
        "days": [{"date": "2024-06-05", "itemIds": [menu["curry"], menu["curry"], "", None]}],
    }
    for _ in range(2):
        assert client.post("/daily-menu", json=body, headers=catering_headers).status_code == 200

    days = _get(client, catering_headers).json()["days"]
    assert days == [{"date": "2024-06-05", "itemIds": [menu["curry"]]}]


def test_empty_list_clears_a_date(client, catering_headers, menu):
    client.post(
        "/daily-menu",
        json={"locationId": LOCATION, "days": [{"date": "2024-06-03", "itemIds": [menu["curry"]]}]},
        headers=catering_headers,
    )
    client.post(
        "/daily-menu",
        json={"locationId": LOCATION, "days": [{"date": "2024-06-03", "itemIds": []}]},
        headers=catering_headers,
    )
    assert _get(client, catering_headers).json()["days"] == []


def test_locations_are_separate(client, catering_headers, menu):
    client.post(
        "/daily-menu",
        json={"locationId": LOCATION, "days": [{"date": "2024-06-03", "itemIds": [menu["curry"]]}]},
        headers=catering_headers,
    )
    assert _get(client, catering_headers, location="loc-annex").json()["days"] == []


def test_unknown_item_rejected(client, catering_headers, menu):
    r = client.post(
        "/daily-menu",
        json={"locationId": LOCATION, "days": [{"date": "2024-06-03", "itemIds": ["ghost"]}]},
        headers=catering_headers,
    )
    assert r.status_code == 400
    assert _get(client, catering_headers).json()["days"] == []


def test_missing_params(client, catering_headers):
    r = client.get("/daily-menu", params={"from": "2024-06-03"}, headers=catering_headers)
    assert r.status_code == 400
    assert "error" in r.json()


def test_reversed_range(client, catering_headers):
    r = _get(client, catering_headers, start="2024-06-07", end="2024-06-03")
    assert r.status_code == 400
    assert r.json() == {"error": "from must be on or before to"}


def test_staff_forbidden(client, staff_headers):
    assert _get(client, staff_headers).status_code == 403
    r = client.post("/daily-menu", json={"locationId": LOCATION, "days": []}, headers=staff_headers)
    assert r.status_code == 403


def test_overlong_location_rejected(client, catering_headers, menu):
    long_location = "l" * 37

    assert _get(client, catering_headers, location=long_location).status_code == 400
    r = client.post(
        "/daily-menu",
        json={"locationId": long_location, "days": [{"date": "2024-06-03", "itemIds": [menu["curry"]]}]},
        headers=catering_headers,
    )
    assert r.status_code == 400
