import importlib
import io
from datetime import date

import pytest
from pypdf import PdfReader

from config import get_settings

from catering.app.pdf import render as pdf_render

YEAR = f"{date.today():%Y}"


def _book(client, headers, menu_item, slot="morning"):
    resp = client.post(
        "/bookings",
        json={
            "event_date": "2030-06-15",
            "time_slot": slot,
            "occasion": "Wedding",
            "venue": "San Lorenzo Hall",
            "num_guests": 80,
            "customer_phone": "09171234567",
            "items": [{"menu_item_id": menu_item["id"], "quantity": 10}],
        },
        headers=headers,
    )
    assert resp.status_code == 201
    return resp.json()["data"]


def _generate(client, headers, booking, **extra):
    return client.post(
        "/receipts/generate", json={"booking_id": booking["id"], **extra}, headers=headers
    )


@pytest.fixture
def booking(client, customer_headers, menu_item):
    return _book(client, customer_headers, menu_item)


@pytest.fixture
def receipt(client, customer_headers, booking):
    resp = _generate(client, customer_headers, booking)
    assert resp.status_code == 201
    return resp.json()["data"]


def _without_weasyprint(monkeypatch):
    real_import = importlib.import_module

    def fake_import(name, *args, **kwargs):
        if name == "weasyprint":
            raise ImportError
        return real_import(name, *args, **kwargs)

    monkeypatch.setattr(pdf_render.importlib, "import_module", fake_import)


def test_generate_receipt_amounts(receipt, booking):
    assert receipt["receipt_number"] == f"RCP-{YEAR}-0001"
    assert receipt["booking_id"] == booking["id"]
    assert receipt["subtotal"] == 2500.0
    assert receipt["tax_rate"] == 0.12
    assert receipt["tax_amount"] == 300.0
    assert receipt["total_amount"] == 2800.0
    assert receipt["payment_method"] == "Cash/Card"
    assert receipt["payment_status"] == "pending"
    assert receipt["issued_date"] == date.today().isoformat()


def test_tax_rate_ignores_configuration(monkeypatch, client, customer_headers, booking):
    monkeypatch.setenv("TAX_RATE", "0.5")
    get_settings.cache_clear()
    try:
        resp = _generate(client, customer_headers, booking)
    finally:
        monkeypatch.delenv("TAX_RATE")
        get_settings.cache_clear()
    data = resp.json()["data"]
    assert data["tax_rate"] == 0.12
    assert data["total_amount"] == 2800.0
    assert not hasattr(get_settings(), "tax_rate")


def test_one_receipt_per_booking(client, admin_headers, booking, receipt):
    resp = _generate(client, admin_headers, booking)
    assert resp.status_code == 409
    assert resp.json()["error"]["message"] == "Receipt already exists for this booking"


def test_numbers_increase(client, customer_headers, menu_item, receipt):
    second = _book(client, customer_headers, menu_item, slot="afternoon")
    resp = _generate(client, customer_headers, second, payment_method="GCash")
    data = resp.json()["data"]
    assert data["receipt_number"] == f"RCP-{YEAR}-0002"
    assert data["payment_method"] == "GCash"


def test_generate_access_rules(client, other_headers, booking):
    assert _generate(client, other_headers, booking).status_code == 403
    resp = _generate(client, other_headers, {"id": 999})
    assert resp.status_code == 404


def test_listing_and_lookup(
    client, admin_headers, customer_headers, other_headers, booking, receipt
):
    own = client.get("/receipts", headers=customer_headers).json()["data"]
    assert [r["id"] for r in own] == [receipt["id"]]
    assert client.get("/receipts", headers=other_headers).json()["data"] == []
    assert len(client.get("/receipts", headers=admin_headers).json()["data"]) == 1

    resp = client.get(f"/receipts/{receipt['id']}", headers=other_headers)
    assert resp.status_code == 403
    resp = client.get(f"/receipts/booking/{booking['id']}", headers=customer_headers)
    assert resp.json()["data"]["id"] == receipt["id"]
    assert client.get("/receipts/999", headers=admin_headers).status_code == 404


def test_receipt_for_booking_without_one(client, customer_headers, booking):
    resp = client.get(f"/receipts/booking/{booking['id']}", headers=customer_headers)
    assert resp.status_code == 200
    assert resp.json()["data"] is None


def test_payment_status_admin_only(client, admin_headers, customer_headers, receipt):
    path = f"/receipts/{receipt['id']}/payment-status"
    resp = client.patch(path, json={"payment_status": "paid"}, headers=customer_headers)
    assert resp.status_code == 403
    resp = client.patch(path, json={"payment_status": "paid"}, headers=admin_headers)
    assert resp.status_code == 200
    assert resp.json()["data"]["payment_status"] == "paid"
    resp = client.patch(path, json={"payment_status": "lost"}, headers=admin_headers)
    assert resp.status_code == 400


def test_booking_with_receipt_cannot_be_deleted(client, customer_headers, booking, receipt):
    resp = client.delete(f"/bookings/{booking['id']}", headers=customer_headers)
    assert resp.status_code == 409
    assert client.get(f"/bookings/{booking['id']}", headers=customer_headers).status_code == 200


def test_receipt_pdf_html_fallback(monkeypatch, client, customer_headers, receipt):
    _without_weasyprint(monkeypatch)
    resp = client.get(f"/receipts/{receipt['id']}/pdf", headers=customer_headers)
    assert resp.status_code == 200
    assert resp.headers["content-type"].startswith("text/html")
    assert (
        resp.headers["content-disposition"]
        == f'attachment; filename="receipt-{receipt["receipt_number"]}.html"'
    )
    body = resp.text
    assert f"Receipt #: {receipt['receipt_number']}" in body
    assert "8:00 AM - 2:00 PM" in body
    assert "San Lorenzo Hall" in body
    assert "Beef Caldereta" in body
    assert "VAT (12%)" in body
    assert "PHP 2,800.00" in body
    assert "Alice Tester" in body


def test_receipt_pdf_with_fake_weasyprint(monkeypatch, client, customer_headers, receipt):
    class DummyHTML:
        def __init__(self, string, base_url=None):
            self.string = string

        def write_pdf(self):
            return b"%PDF-1.4"

    class DummyWeasy:
        HTML = DummyHTML

    real_import = importlib.import_module

    def fake_import(name, *args, **kwargs):
        if name == "weasyprint":
            return DummyWeasy()
        return real_import(name, *args, **kwargs)

    monkeypatch.setattr(pdf_render.importlib, "import_module", fake_import)
    resp = client.get(f"/receipts/{receipt['id']}/pdf", headers=customer_headers)
    assert resp.status_code == 200
    assert resp.headers["content-type"] == "application/pdf"
    assert resp.content.startswith(b"%PDF")
    assert (
        resp.headers["content-disposition"]
        == f'attachment; filename="receipt-{receipt["receipt_number"]}.pdf"'
    )


def test_receipt_pdf_forbidden_for_other_customer(client, other_headers, receipt):
    resp = client.get(f"/receipts/{receipt['id']}/pdf", headers=other_headers)
    assert resp.status_code == 403


def test_booking_pdf_without_receipt(monkeypatch, client, customer_headers, booking):
    _without_weasyprint(monkeypatch)
    resp = client.get(f"/receipts/booking/{booking['id']}/pdf", headers=customer_headers)
    assert resp.status_code == 200
    assert resp.headers["content-type"].startswith("text/html")
    assert (
        resp.headers["content-disposition"]
        == f'attachment; filename="booking-receipt-{booking["booking_ref"]}.html"'
    )
    body = resp.text
    assert "Receipt #: N/A" in body
    assert "Status: Pending" in body
    assert "Payment: Cash/Card" in body
    assert "PHP 2,800.00" in body
    assert "Beef Caldereta" in body
    # printing does not issue a receipt
    resp = client.get(f"/receipts/booking/{booking['id']}", headers=customer_headers)
    assert resp.json()["data"] is None


def test_booking_pdf_access_rules(client, admin_headers, other_headers, booking):
    path = f"/receipts/booking/{booking['id']}/pdf"
    assert client.get(path, headers=other_headers).status_code == 403
    assert client.get(path).status_code == 401
    assert client.get(path, headers=admin_headers).status_code == 200
    assert client.get("/receipts/booking/999/pdf", headers=admin_headers).status_code == 404


def test_render_receipt_placeholders(monkeypatch):
    _without_weasyprint(monkeypatch)
    context = {
        "business": {
            "name": "Test Kitchen",
            "tagline": "",
            "address": "",
            "phone": "",
            "email": "",
        },
        "receipt": {
            "number": "RCP-2030-0007",
            "issued_date": "2030-01-01",
            "booking_ref": "BK-1-ABCDE",
            "payment_method": "N/A",
            "payment_status": "Pending",
        },
        "customer": {"name": "N/A", "email": "N/A", "phone": "N/A"},
        "event": {
            "occasion": "N/A",
            "date": "N/A",
            "slot": "Time not specified",
            "venue": "N/A",
            "guests": "N/A",
        },
        "items": [],
        "totals": {
            "subtotal": "PHP 0.00",
            "discount": None,
            "tax_label": "VAT (12%)",
            "tax": "PHP 0.00",
            "total": "PHP 0.00",
        },
    }
    content, mimetype = pdf_render.render_receipt(context)
    assert mimetype == "text/html"
    html = content.decode()
    assert "No items selected" in html
    assert "Discount" not in html
    assert "Time not specified" in html


def test_render_receipt_real_pdf(client, customer_headers, receipt):
    resp = client.get(f"/receipts/{receipt['id']}/pdf", headers=customer_headers)
    if resp.headers["content-type"] != "application/pdf":
        pytest.skip("weasyprint unavailable")
    reader = PdfReader(io.BytesIO(resp.content))
    text = "".join(page.extract_text() for page in reader.pages)
    assert receipt["receipt_number"] in text
