import pytest

EVENT_DATE = "2030-06-15"


def _payload(menu_item, **overrides):
    payload = {
        "event_date": EVENT_DATE,
        "time_slot": "morning",
        "occasion": "Wedding",
        "venue": "San Lorenzo Hall",
        "num_guests": 80,
        "items": [{"menu_item_id": menu_item["id"], "quantity": 10}],
    }
    payload.update(overrides)
    return payload


@pytest.fixture
def promo(client, admin_headers):
    resp = client.post(
        "/promo-codes",
        json={"code": "SAVE10", "discount_percent": 10, "usage_limit": 1},
        headers=admin_headers,
    )
    return resp.json()["data"]


def _promo_usage(client, admin_headers, promo):
    resp = client.get(f"/promo-codes/{promo['id']}", headers=admin_headers)
    return resp.json()["data"]["usage_count"]


def test_create_booking_prices_from_menu(client, customer, customer_headers, menu_item):
    resp = client.post("/bookings", json=_payload(menu_item), headers=customer_headers)
    assert resp.status_code == 201
    data = resp.json()["data"]
    assert data["booking_ref"].startswith("BK-")
    assert data["user_id"] == customer.id
    assert data["customer_name"] == "alice"
    assert data["status"] == "pending"
    assert data["subtotal"] == 2500.0
    assert data["discount_amount"] == 0.0
    assert data["total_amount"] == 2500.0
    assert data["items"] == [
        {
            "id": data["items"][0]["id"],
            "menu_item_id": menu_item["id"],
            "name": "Beef Caldereta",
            "quantity": 10,
            "unit_price": 250.0,
            "line_total": 2500.0,
        }
    ]


def test_booking_requires_login(client, menu_item):
    resp = client.post("/bookings", json=_payload(menu_item))
    assert resp.status_code == 401


def test_slot_conflict_leaves_bookings_unchanged(
    client, admin_headers, customer_headers, other_headers, menu_item
):
    first = client.post("/bookings", json=_payload(menu_item), headers=customer_headers)
    assert first.status_code == 201

    resp = client.post("/bookings", json=_payload(menu_item), headers=other_headers)
    assert resp.status_code == 409
    assert (
        resp.json()["error"]["message"]
        == f"The morning time slot is already booked for {EVENT_DATE}"
    )

    stored = client.get("/bookings", headers=admin_headers).json()["data"]
    assert [b["id"] for b in stored] == [first.json()["data"]["id"]]

    other_slot = client.post(
        "/bookings",
        json=_payload(menu_item, time_slot="afternoon"),
        headers=other_headers,
    )
    assert other_slot.status_code == 201


def test_availability(client, customer_headers, menu_item):
    resp = client.get(f"/bookings/availability/{EVENT_DATE}")
    assert resp.json()["data"] == {
        "date": EVENT_DATE,
        "booked_slots": [],
        "available_slots": ["morning", "afternoon"],
    }
    client.post(
        "/bookings",
        json=_payload(menu_item, time_slot="afternoon"),
        headers=customer_headers,
    )
    resp = client.get(f"/bookings/availability/{EVENT_DATE}")
    data = resp.json()["data"]
    assert data["booked_slots"] == ["afternoon"]
    assert data["available_slots"] == ["morning"]


def test_cancelled_booking_still_holds_slot(client, customer_headers, menu_item):
    booking = client.post(
        "/bookings", json=_payload(menu_item), headers=customer_headers
    ).json()["data"]
    client.patch(
        f"/bookings/{booking['id']}/status",
        json={"status": "cancelled"},
        headers=customer_headers,
    )
    data = client.get(f"/bookings/availability/{EVENT_DATE}").json()["data"]
    assert data["booked_slots"] == ["morning"]


@pytest.mark.parametrize(
    "overrides, status",
    [
        ({"items": []}, 400),
        ({"time_slot": "evening"}, 400),
        ({"event_date": "not-a-date"}, 400),
        ({"num_guests": 0}, 400),
        ({"items": [{"menu_item_id": 999, "quantity": 1}]}, 400),
    ],
)
def test_invalid_booking_requests(client, customer_headers, menu_item, overrides, status):
    resp = client.post(
        "/bookings", json=_payload(menu_item, **overrides), headers=customer_headers
    )
    assert resp.status_code == status


def test_unavailable_item_rejected(client, admin_headers, customer_headers, menu_item):
    client.patch(f"/menu/{menu_item['id']}/availability", headers=admin_headers)
    resp = client.post("/bookings", json=_payload(menu_item), headers=customer_headers)
    assert resp.status_code == 400
    assert resp.json()["error"]["message"] == "Beef Caldereta is not available"


def test_promo_discount_and_usage(client, admin_headers, customer_headers, menu_item, promo):
    resp = client.post(
        "/bookings",
        json=_payload(menu_item, promo_code="save10"),
        headers=customer_headers,
    )
    assert resp.status_code == 201
    data = resp.json()["data"]
    assert data["promo_code"] == "SAVE10"
    assert data["discount_percent"] == 10
    assert data["discount_amount"] == 250.0
    assert data["total_amount"] == 2250.0
    assert _promo_usage(client, admin_headers, promo) == 1

    resp = client.post(
        "/bookings",
        json=_payload(menu_item, time_slot="afternoon", promo_code="SAVE10"),
        headers=customer_headers,
    )
    assert resp.status_code == 400
    assert resp.json()["error"]["message"] == "Promo code usage limit reached"
    assert _promo_usage(client, admin_headers, promo) == 1


def test_conflict_does_not_consume_promo(
    client, admin_headers, customer_headers, other_headers, menu_item, promo
):
    client.post("/bookings", json=_payload(menu_item), headers=customer_headers)
    resp = client.post(
        "/bookings",
        json=_payload(menu_item, promo_code="SAVE10"),
        headers=other_headers,
    )
    assert resp.status_code == 409
    assert _promo_usage(client, admin_headers, promo) == 0


def test_unknown_promo_rejected(client, customer_headers, menu_item):
    resp = client.post(
        "/bookings",
        json=_payload(menu_item, promo_code="NOPE"),
        headers=customer_headers,
    )
    assert resp.status_code == 400
    assert resp.json()["error"]["message"] == "Invalid promo code"


def test_listing_scopes(client, admin_headers, customer_headers, other_headers, menu_item):
    mine = client.post(
        "/bookings", json=_payload(menu_item), headers=customer_headers
    ).json()["data"]
    theirs = client.post(
        "/bookings",
        json=_payload(menu_item, event_date="2030-07-01"),
        headers=other_headers,
    ).json()["data"]

    own = client.get("/bookings", headers=customer_headers).json()["data"]
    assert [b["id"] for b in own] == [mine["id"]]

    everything = client.get("/bookings", headers=admin_headers).json()["data"]
    assert {b["id"] for b in everything} == {mine["id"], theirs["id"]}

    by_date = client.get(
        "/bookings", params={"date": "2030-07-01"}, headers=admin_headers
    ).json()["data"]
    assert [b["id"] for b in by_date] == [theirs["id"]]

    client.patch(
        f"/bookings/{mine['id']}/status",
        json={"status": "confirmed"},
        headers=admin_headers,
    )
    confirmed = client.get(
        "/bookings", params={"status": "confirmed"}, headers=admin_headers
    ).json()["data"]
    assert [b["id"] for b in confirmed] == [mine["id"]]


def test_owner_or_admin_access(client, admin_headers, customer_headers, other_headers, menu_item):
    booking = client.post(
        "/bookings", json=_payload(menu_item), headers=customer_headers
    ).json()["data"]
    path = f"/bookings/{booking['id']}"
    assert client.get(path, headers=customer_headers).status_code == 200
    assert client.get(path, headers=admin_headers).status_code == 200
    resp = client.get(path, headers=other_headers)
    assert resp.status_code == 403
    assert resp.json()["error"]["message"] == "Access denied"
    assert client.get("/bookings/999", headers=admin_headers).status_code == 404


def test_status_changes(client, admin_headers, customer_headers, menu_item):
    booking = client.post(
        "/bookings", json=_payload(menu_item), headers=customer_headers
    ).json()["data"]
    path = f"/bookings/{booking['id']}/status"

    resp = client.patch(path, json={"status": "confirmed"}, headers=customer_headers)
    assert resp.status_code == 403

    resp = client.patch(path, json={"status": "confirmed"}, headers=admin_headers)
    assert resp.json()["data"]["status"] == "confirmed"

    resp = client.patch(path, json={"status": "cancelled"}, headers=customer_headers)
    assert resp.status_code == 200
    assert resp.json()["data"]["status"] == "cancelled"

    resp = client.patch(path, json={"status": "archived"}, headers=admin_headers)
    assert resp.status_code == 400


def test_delete_frees_slot(client, customer_headers, other_headers, menu_item):
    booking = client.post(
        "/bookings", json=_payload(menu_item), headers=customer_headers
    ).json()["data"]
    path = f"/bookings/{booking['id']}"
    assert client.delete(path, headers=other_headers).status_code == 403
    assert client.delete(path, headers=customer_headers).status_code == 200
    assert client.get(path, headers=customer_headers).status_code == 404

    data = client.get(f"/bookings/availability/{EVENT_DATE}").json()["data"]
    assert data["booked_slots"] == []
