from decimal import Decimal

from nanny_booking.crud import crud_booking_financials as fin
from nanny_booking.models import Booking, BookingFinancials
from nanny_booking.pricing import calculate_booking_revenue


def test_create_long_term_booking(client):
    res = client.post(
        "/api/v1/bookings",
        json={
            "durationType": "long_term",
            "homeSize": "epic_estates",
            "livingArrangement": "live_in",
            "startDate": "2025-12-01",
            "total": 1,  # client-sent totals are ignored
        },
    )
    assert res.status_code == 201
    body = res.json()
    assert body["bookingType"] == "long_term"
    assert body["status"] == "pending"
    assert body["startDate"] == "2025-12-01"
    assert Decimal(body["totalMonthlyCost"]) == Decimal("10000")
    assert Decimal(body["placementFee"]) == Decimal("5000")
    fin_body = body["financials"]
    assert Decimal(fin_body["fixedFee"]) == Decimal("5000")
    assert Decimal(fin_body["commissionPercent"]) == Decimal("25")
    assert Decimal(fin_body["nannyEarnings"]) + Decimal(fin_body["adminTotalRevenue"]) == Decimal(
        fin_body["clientCharge"]
    )


def test_create_gap_coverage_booking(client):
    res = client.post(
        "/api/v1/bookings",
        json={
            "durationType": "short_term",
            "bookingSubType": "gap_coverage",
            "selectedDates": ["2025-11-17", "2025-11-18", "2025-11-19", "2025-11-22", "2025-11-23"],
        },
    )
    assert res.status_code == 201
    body = res.json()
    assert body["bookingType"] == "temporary_support"
    assert body["startDate"] == "2025-11-17"
    assert body["endDate"] == "2025-11-23"
    assert Decimal(body["totalMonthlyCost"]) == Decimal("4040")
    assert Decimal(body["financials"]["adminTotalRevenue"]) == Decimal("2808")


def test_create_hourly_booking_is_flagged_estimated(client):
    res = client.post(
        "/api/v1/bookings",
        json={
            "bookingType": "emergency",
            "selectedDates": ["2025-11-20"],
            "timeSlots": [{"start": "08:00", "end": "14:00"}],
            "cooking": True,
        },
    )
    assert res.status_code == 201
    body = res.json()
    assert body["estimated"] is True
    assert body["services"]["cooking"] is True
    assert Decimal(body["totalMonthlyCost"]) == Decimal("615")


def test_invalid_booking_is_rejected(client, Session):
    res = client.post("/api/v1/bookings", json={"durationType": "long_term", "homeSize": "family_hub"})
    assert res.status_code == 422
    assert res.json()["detail"]["field_errors"] == {"livingArrangement": "required"}
    db = Session()
    assert db.query(Booking).count() == 0
    db.close()


def test_get_booking_and_revenue(client):
    created = client.post(
        "/api/v1/bookings",
        json={"durationType": "long_term", "homeSize": "pocket_palace", "livingArrangement": "live_in"},
    ).json()
    res = client.get(f"/api/v1/bookings/{created['id']}")
    assert res.status_code == 200
    assert res.json()["homeSize"] == "pocket_palace"

    rev = client.get(f"/api/v1/bookings/{created['id']}/revenue")
    assert rev.status_code == 200
    assert Decimal(rev.json()["commissionAmount"]) == Decimal("450")


def test_get_missing_booking(client):
    res = client.get("/api/v1/bookings/404")
    assert res.status_code == 404
    assert res.json()["detail"]["message"] == "Booking not found"


def test_financials_stored_once(Session, caplog):
    db = Session()
    booking = Booking(
        booking_type="emergency",
        duration_type="short_term",
        services={},
        base_rate=400,
        total_monthly_cost=435,
    )
    db.add(booking)
    db.commit()

    breakdown = calculate_booking_revenue(booking.id, "435", "emergency")
    first, created = fin.create_financials_once(db, booking.id, breakdown)
    assert created
    second, created_again = fin.create_financials_once(db, booking.id, breakdown)
    assert not created_again
    assert second.id == first.id
    assert db.query(BookingFinancials).count() == 1
    assert any("already recorded" in r.getMessage() for r in caplog.records)
    db.close()
