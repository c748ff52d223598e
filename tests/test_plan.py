"""Personal plans: one hot item or a full cold bundle per day."""

import pytest

from app.services.plan_store import ColdSelection, HotSelection, build_selection
from app.utils.errors import ValidationError

from conftest import LOCATION


def _plan(client, headers, start="2024-06-01", end="2024-06-30"):
    return client.get(
        "/plan",
        params={"from": start, "to": end, "locationId": LOCATION},
        headers=headers,
    )


def _item_ids(day):
    return sorted(i["id"] for i in day["items"])


def test_build_selection():
    assert build_selection(hot_item_id="h") == HotSelection("h")
    assert build_selection(main_id="m", side_id="s", extra_id="e") == ColdSelection("m", "s", "e")

    with pytest.raises(ValidationError, match="exactly one"):
        build_selection()
    with pytest.raises(ValidationError, match="exactly one"):
        build_selection(hot_item_id="h", main_id="m", side_id="s", extra_id="e")
    with pytest.raises(ValidationError, match="main, a side and an extra"):
        build_selection(main_id="m", side_id="s")


def test_hot_day_writes_one_line(client, staff_headers, menu):
    r = client.post(
        "/plan",
        json={"date": "2024-06-03", "locationId": LOCATION, "hotItemId": menu["curry"]},
        headers=staff_headers,
    )
    assert r.status_code == 200
    assert r.json() == {"ok": True}

    days = _plan(client, staff_headers).json()["days"]
    assert len(days) == 1
    assert days[0]["date"] == "2024-06-03"
    assert _item_ids(days[0]) == [menu["curry"]]


def test_cold_day_writes_three_lines(client, staff_headers, menu):
    r = client.post(
        "/plan",
        json={
            "date": "2024-06-04",
            "locationId": LOCATION,
            "cold": {"mainId": menu["wrap"], "sideId": menu["salad"], "extraId": menu["fruit"]},
        },
        headers=staff_headers,
    )
    assert r.status_code == 200

    days = _plan(client, staff_headers).json()["days"]
    assert _item_ids(days[0]) == sorted([menu["wrap"], menu["salad"], menu["fruit"]])


def test_switching_replaces_the_day(client, staff_headers, menu):
    client.post(
        "/plan",
        json={
            "date": "2024-06-04",
            "locationId": LOCATION,
            "cold": {"mainId": menu["wrap"], "sideId": menu["salad"], "extraId": menu["fruit"]},
        },
        headers=staff_headers,
    )
    client.post(
        "/plan",
        json={"date": "2024-06-04", "locationId": LOCATION, "hotItemId": menu["lasagne"]},
        headers=staff_headers,
    )

    days = _plan(client, staff_headers).json()["days"]
    assert len(days) == 1
    assert _item_ids(days[0]) == [menu["lasagne"]]


@pytest.mark.parametrize("extra", [
    {},
    {"hotItemId": "HOT", "cold": {"mainId": "MAIN", "sideId": "SIDE", "extraId": "EXTRA"}},
    {"cold": {"mainId": "MAIN", "sideId": "SIDE"}},
])
def test_invalid_shapes_rejected(client, staff_headers, menu, extra):
    ids = {"HOT": menu["curry"], "MAIN": menu["wrap"], "SIDE": menu["salad"], "EXTRA": menu["fruit"]}
    body = {"date": "2024-06-03", "locationId": LOCATION}
    for key, value in extra.items():
        body[key] = {k: ids[v] for k, v in value.items()} if isinstance(value, dict) else ids[value]

    r = client.post("/plan", json=body, headers=staff_headers)
    assert r.status_code == 400
    assert "error" in r.json()
    assert _plan(client, staff_headers).json()["days"] == []


def test_cold_bundle_category_mismatch(client, staff_headers, menu):
    r = client.post(
        "/plan",
        json={
            "date": "2024-06-03",
            "locationId": LOCATION,
            "cold": {"mainId": menu["curry"], "sideId": menu["salad"], "extraId": menu["fruit"]},
        },
        headers=staff_headers,
    )
    assert r.status_code == 400
    assert r.json() == {"error": "Cold bundle must be Main + Side + Extra"}


def test_hot_pick_must_be_hot(client, staff_headers, menu):
    r = client.post(
        "/plan",
        json={"date": "2024-06-03", "locationId": LOCATION, "hotItemId": menu["wrap"]},
        headers=staff_headers,
    )
    assert r.status_code == 400


def test_archived_item_rejected(client, staff_headers, catering_headers, menu):
    client.delete("/menu", params={"id": menu["curry"]}, headers=catering_headers)
    r = client.post(
        "/plan",
        json={"date": "2024-06-03", "locationId": LOCATION, "hotItemId": menu["curry"]},
        headers=staff_headers,
    )
    assert r.status_code == 400


def test_missing_location(client, staff_headers, menu):
    r = client.post(
        "/plan",
        json={"date": "2024-06-03", "hotItemId": menu["curry"]},
        headers=staff_headers,
    )
    assert r.status_code == 400


def test_plans_are_private(client, login, menu):
    alice = login("alice", name="Alice")
    bob = login("bob", name="Bob")

    client.post(
        "/plan",
        json={"date": "2024-06-03", "locationId": LOCATION, "hotItemId": menu["curry"]},
        headers=alice,
    )
    client.post(
        "/plan",
        json={"date": "2024-06-03", "locationId": LOCATION, "hotItemId": menu["lasagne"]},
        headers=bob,
    )

    assert _item_ids(_plan(client, alice).json()["days"][0]) == [menu["curry"]]
    assert _item_ids(_plan(client, bob).json()["days"][0]) == [menu["lasagne"]]


def test_user_id_in_body_is_ignored(client, login, menu):
    alice = login("alice")
    bob = login("bob")

    client.post(
        "/plan",
        json={
            "date": "2024-06-03",
            "locationId": LOCATION,
            "hotItemId": menu["curry"],
            "userId": "bob",
        },
        headers=alice,
    )
    assert _plan(client, bob).json()["days"] == []
    assert len(_plan(client, alice).json()["days"]) == 1


def test_anonymous_rejected(client):
    assert client.get(
        "/plan", params={"from": "2024-06-01", "to": "2024-06-30", "locationId": LOCATION}
    ).status_code == 401


def test_month_batch_skips_malformed_lines(client, staff_headers, menu):
    r = client.post(
        "/plan",
        json={
            "locationId": LOCATION,
            "lines": [
                {"date": "2024-06-03", "itemId": menu["curry"]},
                {"date": "2024-06-03", "itemId": menu["curry"]},
                {"date": "2024-06-04", "itemId": menu["wrap"]},
                {"date": "2024-06-04", "itemId": menu["salad"]},
                {"date": "2024-06-04", "itemId": menu["fruit"]},
                {"date": "not-a-date", "itemId": menu["curry"]},
                {"date": "2024-06-05"},
                "junk",
            ],
        },
        headers=staff_headers,
    )
    assert r.status_code == 200

    days = {d["date"]: _item_ids(d) for d in _plan(client, staff_headers).json()["days"]}
    assert days == {
        "2024-06-03": [menu["curry"]],
        "2024-06-04": sorted([menu["wrap"], menu["salad"], menu["fruit"]]),
    }


def test_month_batch_drops_incomplete_days(client, staff_headers, catering_headers, menu):
    client.delete("/menu", params={"id": menu["lasagne"]}, headers=catering_headers)

    r = client.post(
        "/plan",
        json={
            "locationId": LOCATION,
            "lines": [
                {"date": "2024-06-03", "itemId": menu["curry"]},
                {"date": "2024-06-03", "itemId": menu["wrap"]},
                {"date": "2024-06-04", "itemId": menu["salad"]},
                {"date": "2024-06-05", "itemId": menu["lasagne"]},
                {"date": "2024-06-06", "itemId": menu["curry"]},
            ],
        },
        headers=staff_headers,
    )
    assert r.status_code == 200

    days = {d["date"]: _item_ids(d) for d in _plan(client, staff_headers).json()["days"]}
    assert days == {"2024-06-06": [menu["curry"]]}


def test_month_batch_clears_the_month(client, staff_headers, menu):
    client.post(
        "/plan",
        json={"date": "2024-06-10", "locationId": LOCATION, "hotItemId": menu["curry"]},
        headers=staff_headers,
    )
    client.post(
        "/plan",
        json={"date": "2024-07-01", "locationId": LOCATION, "hotItemId": menu["curry"]},
        headers=staff_headers,
    )

    r = client.post(
        "/plan",
        json={
            "locationId": LOCATION,
            "month": "2024-06",
            "lines": [
                {"date": "2024-06-03", "itemId": menu["lasagne"]},
                {"date": "2024-07-02", "itemId": menu["lasagne"]},
            ],
        },
        headers=staff_headers,
    )
    assert r.status_code == 200

    days = {
        d["date"]: _item_ids(d)
        for d in _plan(client, staff_headers, end="2024-07-31").json()["days"]
    }
    assert days == {
        "2024-06-03": [menu["lasagne"]],
        "2024-07-01": [menu["curry"]],
    }


def test_month_batch_unknown_item(client, staff_headers, menu):
    r = client.post(
        "/plan",
        json={"locationId": LOCATION, "lines": [{"date": "2024-06-03", "itemId": "ghost"}]},
        headers=staff_headers,
    )
    assert r.status_code == 400


def test_overlong_location_rejected(client, staff_headers, menu):
    r = client.post(
        "/plan",
        json={"date": "2024-06-03", "locationId": "l" * 37, "hotItemId": menu["curry"]},
        headers=staff_headers,
    )
    assert r.status_code == 400

    r = client.post("/profile", json={"locationId": "l" * 37}, headers=staff_headers)
    assert r.status_code == 400
