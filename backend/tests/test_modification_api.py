from decimal import Decimal

from freezegun import freeze_time

LONG_TERM_WITH_COOKING = {
    "durationType": "long_term",
    "homeSize": "family_hub",
    "livingArrangement": "live_out",
    "cooking": True,
}


def _create(client, prefs=LONG_TERM_WITH_COOKING):
    res = client.post("/api/v1/bookings", json=prefs)
    assert res.status_code == 201
    return res.json()["id"]


def test_removal_is_prorated_and_left_pending(client):
    booking_id = _create(client)
    with freeze_time("2025-11-10"):
        res = client.post(
            f"/api/v1/bookings/{booking_id}/modifications",
            json={"modificationType": "service_removal", "services": ["cooking"]},
        )
    assert res.status_code == 201
    body = res.json()
    assert body["status"] == "pending_admin_review"
    assert body["effectiveDate"] == "2025-11-10"
    assert Decimal(body["priceAdjustment"]) == Decimal("-1000")
    assert Decimal(body["fullAdjustment"]) == Decimal("-1500")
    assert body["newValues"]["ongoing_monthly_total"] == "6800.00"
    assert body["oldValues"]["services"] == ["cooking"]

    # the booking itself is untouched
    booking = client.get(f"/api/v1/bookings/{booking_id}").json()
    assert Decimal(booking["totalMonthlyCost"]) == Decimal("8300")


def test_review_is_one_way(client):
    booking_id = _create(client)
    mod = client.post(
        f"/api/v1/bookings/{booking_id}/modifications",
        json={"modificationType": "service_addition", "services": ["montessori"]},
    ).json()

    res = client.post(f"/api/v1/modifications/{mod['id']}/review", json={"decision": "applied"})
    assert res.status_code == 200
    assert res.json()["status"] == "applied"
    assert res.json()["reviewedAt"] is not None

    again = client.post(f"/api/v1/modifications/{mod['id']}/review", json={"decision": "rejected"})
    assert again.status_code == 409
    assert again.json()["detail"]["field_errors"] == {"status": "applied"}


def test_review_requires_a_decision(client):
    booking_id = _create(client)
    mod = client.post(
        f"/api/v1/bookings/{booking_id}/modifications",
        json={"modificationType": "cancellation"},
    ).json()
    assert Decimal(mod["priceAdjustment"]) == Decimal("0")
    res = client.post(f"/api/v1/modifications/{mod['id']}/review", json={"decision": "pending_admin_review"})
    assert res.status_code == 422


def test_invalid_service_changes(client):
    booking_id = _create(client)
    url = f"/api/v1/bookings/{booking_id}/modifications"

    dup = client.post(url, json={"modificationType": "service_addition", "services": ["cooking"]})
    assert dup.status_code == 422
    assert dup.json()["detail"]["field_errors"] == {"cooking": "already_selected"}

    missing = client.post(url, json={"modificationType": "service_removal", "services": ["montessori"]})
    assert missing.json()["detail"]["field_errors"] == {"montessori": "not_selected"}

    unknown = client.post(url, json={"modificationType": "service_addition", "services": ["yoga"]})
    assert unknown.status_code == 422
    assert unknown.json()["detail"]["field_errors"] == {"services": "unknown"}

    empty = client.post(url, json={"modificationType": "service_addition"})
    assert empty.json()["detail"]["field_errors"] == {"services": "required"}


def test_short_term_bookings_cannot_be_modified(client):
    booking_id = _create(
        client,
        {
            "bookingType": "emergency",
            "selectedDates": ["2025-11-20"],
            "timeSlots": [{"start": "08:00", "end": "14:00"}],
        },
    )
    res = client.post(
        f"/api/v1/bookings/{booking_id}/modifications",
        json={"modificationType": "service_addition", "services": ["cooking"]},
    )
    assert res.status_code == 422
    assert res.json()["detail"]["field_errors"] == {"booking_id": "not_long_term"}


def test_list_modifications(client):
    booking_id = _create(client)
    url = f"/api/v1/bookings/{booking_id}/modifications"
    client.post(url, json={"modificationType": "service_addition", "services": ["ecd_training"]})
    client.post(url, json={"modificationType": "cancellation"})
    res = client.get(url)
    assert [m["modificationType"] for m in res.json()] == ["service_addition", "cancellation"]


def test_camel_case_service_names_are_accepted(client):
    booking_id = _create(client)
    res = client.post(
        f"/api/v1/bookings/{booking_id}/modifications",
        json={"modificationType": "service_addition", "services": ["specialNeeds"]},
    )
    assert res.status_code == 201
    assert Decimal(res.json()["fullAdjustment"]) > 0

    dup = client.post(
        f"/api/v1/bookings/{booking_id}/modifications",
        json={"modificationType": "service_addition", "services": ["Cooking"]},
    )
    assert dup.status_code == 422
    assert dup.json()["detail"]["field_errors"] == {"cooking": "already_selected"}
