from datetime import date, timedelta

from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.database import Base, get_db
from app.main import app


def setup_app():
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    Session = sessionmaker(bind=engine, expire_on_commit=False)

    def override_db():
        db = Session()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_db
    return Session


def seed(client):
    for name, email, role in (
        ("Uma User", "uma@example.com", None),
        ("Helen Helper", "helen@example.com", "helper"),
    ):
        body = {"fullName": name, "email": email, "password": "secret"}
        if role:
            body["role"] = role
        assert client.post("/api/register", json=body).status_code == 200
    assert client.put("/api/helpers/1/approve").status_code == 200
    return client.get("/api/helpers/1").json()


def book(client, listing, when=None):
    when = when or date.today() + timedelta(days=7)
    return client.post(
        "/api/bookings",
        json={
            "userEmail": "uma@example.com",
            "helperId": listing["id"],
            "helperName": listing["name"],
            "helperEmail": listing["email"],
            "date": when.isoformat(),
            "startTime": "10:00",
            "endTime": "12:00",
            "address": "742 Evergreen Terrace",
            "phone": "555-0100",
            "notes": "Ring twice",
        },
    )


def test_create_booking_notifies_helper(sent_emails):
    setup_app()
    client = TestClient(app)
    listing = seed(client)

    res = book(client, listing)
    assert res.status_code == 200
    booking = res.json()
    assert booking["status"] == "Pending"
    assert booking["isReviewed"] is False
    assert booking["userName"] == "Uma User"

    recipient, subject, _ = sent_emails.call_args.args
    assert recipient == "helen@example.com"
    assert subject == "New booking request"
    app.dependency_overrides.clear()


def test_create_booking_in_past_is_rejected():
    setup_app()
    client = TestClient(app)
    listing = seed(client)

    res = book(client, listing, when=date.today() - timedelta(days=1))
    assert res.status_code == 400
    assert res.json()["detail"]["field_errors"] == {"date": "in_past"}
    app.dependency_overrides.clear()


def test_approve_emails_user_and_lists_by_party(sent_emails):
    setup_app()
    client = TestClient(app)
    listing = seed(client)
    booking_id = book(client, listing).json()["id"]

    res = client.put(f"/api/bookings/{booking_id}/approve")
    assert res.status_code == 200
    assert res.json()["status"] == "Confirmed"
    recipient, subject, _ = sent_emails.call_args.args
    assert recipient == "uma@example.com"
    assert subject == "Booking confirmed"

    mine = client.get("/api/bookings", params={"userEmail": "uma@example.com"}).json()
    assert [b["id"] for b in mine] == [booking_id]
    theirs = client.get("/api/bookings", params={"helperEmail": "helen@example.com"}).json()
    assert [b["id"] for b in theirs] == [booking_id]
    assert client.get("/api/bookings", params={"userEmail": "helen@example.com"}).json() == []
    app.dependency_overrides.clear()


def test_rejected_booking_cannot_be_confirmed():
    setup_app()
    client = TestClient(app)
    listing = seed(client)
    booking_id = book(client, listing).json()["id"]

    assert client.put(f"/api/bookings/{booking_id}/reject").json()["status"] == "Rejected"
    res = client.put(f"/api/bookings/{booking_id}/approve")
    assert res.status_code == 409
    assert client.get(f"/api/bookings/{booking_id}").json()["status"] == "Rejected"
    app.dependency_overrides.clear()


def test_cancel_and_delete_booking():
    setup_app()
    client = TestClient(app)
    listing = seed(client)
    booking_id = book(client, listing).json()["id"]

    assert client.put(f"/api/bookings/{booking_id}/cancel").json()["status"] == "Cancelled"
    assert client.delete(f"/api/bookings/{booking_id}").status_code == 200
    assert client.get(f"/api/bookings/{booking_id}").status_code == 404
    assert client.delete(f"/api/bookings/{booking_id}").status_code == 404
    app.dependency_overrides.clear()


def test_booking_unknown_helper():
    setup_app()
    client = TestClient(app)
    listing = seed(client)
    listing["id"] = 999

    res = book(client, listing)
    assert res.status_code == 404
    app.dependency_overrides.clear()
