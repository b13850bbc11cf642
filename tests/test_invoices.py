"""
Invoice endpoint tests.
"""

from datetime import date
from decimal import Decimal

import pytest
from httpx import AsyncClient

from invoicetree.models import Client, Company


def _item(description="Design work", quantity=2, unit_price=50, tax_rate=10, discount_rate=5):
    return {
        "description": description,
        "quantity": quantity,
        "unit_price": unit_price,
        "tax_rate": tax_rate,
        "discount_rate": discount_rate,
    }


@pytest.mark.asyncio
async def test_create_invoice_computes_totals(auth_client: AsyncClient, company, test_client_record):
    response = await auth_client.post(
        "/api/v1/invoices",
        json={
            "client_id": test_client_record.id,
            "due_date": "2030-01-31",
            "items": [_item()],
        },
    )

    assert response.status_code == 201
    data = response.json()
    assert data["company_id"] == company.id
    assert data["status"] == "draft"
    assert data["issue_date"] == date.today().isoformat()
    assert data["number"] == f"INV-{date.today().year}-00001"
    assert Decimal(data["subtotal"]) == Decimal("100")
    assert Decimal(data["tax_total"]) == Decimal("10")
    assert Decimal(data["discount_total"]) == Decimal("5")
    assert Decimal(data["total"]) == Decimal("105")

    item = data["items"][0]
    assert Decimal(item["total"]) == Decimal("105")
    assert data["client"]["name"] == "Globex"
    assert data["company"]["name"] == "Acme Studio"


@pytest.mark.asyncio
async def test_invoice_numbers_are_sequential(auth_client: AsyncClient, company):
    first = await auth_client.post("/api/v1/invoices", json={"items": []})
    second = await auth_client.post("/api/v1/invoices", json={"items": []})

    year = date.today().year
    assert first.json()["number"] == f"INV-{year}-00001"
    assert second.json()["number"] == f"INV-{year}-00002"


@pytest.mark.asyncio
async def test_create_invoice_without_items(auth_client: AsyncClient, company):
    response = await auth_client.post("/api/v1/invoices", json={"number": "MANUAL-1"})

    assert response.status_code == 201
    data = response.json()
    assert data["number"] == "MANUAL-1"
    assert data["items"] == []
    assert Decimal(data["total"]) == 0


@pytest.mark.asyncio
async def test_create_invoice_without_company(auth_client: AsyncClient):
    response = await auth_client.post("/api/v1/invoices", json={"items": [_item()]})

    assert response.status_code == 400


@pytest.mark.asyncio
async def test_create_invoice_with_client_of_other_company(
    auth_client: AsyncClient,
    db_session,
    company,
    test_user,
):
    second = Company(user_id=test_user.id, name="Second Co")
    db_session.add(second)
    await db_session.flush()
    stranger = Client(company_id=second.id, name="Elsewhere")
    db_session.add(stranger)
    await db_session.commit()

    response = await auth_client.post(
        "/api/v1/invoices",
        json={"company_id": company.id, "client_id": stranger.id, "items": []},
    )

    assert response.status_code == 404


@pytest.mark.asyncio
async def test_item_rates_are_bounded(auth_client: AsyncClient, company):
    response = await auth_client.post(
        "/api/v1/invoices",
        json={"items": [_item(tax_rate=150)]},
    )

    assert response.status_code == 422


@pytest.mark.asyncio
async def test_missing_item_numbers_read_as_zero(auth_client: AsyncClient, company):
    response = await auth_client.post(
        "/api/v1/invoices",
        json={"items": [{"description": "Blank", "quantity": None, "unit_price": ""}]},
    )

    assert response.status_code == 201
    item = response.json()["items"][0]
    assert Decimal(item["subtotal"]) == 0
    assert Decimal(item["total"]) == 0


@pytest.mark.asyncio
async def test_update_replaces_items(auth_client: AsyncClient, company):
    created = await auth_client.post(
        "/api/v1/invoices",
        json={"items": [_item("One"), _item("Two"), _item("Three")]},
    )
    invoice = created.json()
    assert len(invoice["items"]) == 3

    response = await auth_client.put(
        f"/api/v1/invoices/{invoice['id']}",
        json={
            "status": "pending",
            "notes": "Thanks",
            "items": [_item("Only", quantity=1, unit_price=200, tax_rate=0, discount_rate=0)],
        },
    )

    assert response.status_code == 200
    data = response.json()
    assert [i["description"] for i in data["items"]] == ["Only"]
    assert Decimal(data["total"]) == Decimal("200")
    assert data["status"] == "pending"
    assert data["notes"] == "Thanks"
    assert data["number"] == invoice["number"]
    assert data["issue_date"] == invoice["issue_date"]

    fetched = await auth_client.get(f"/api/v1/invoices/{invoice['id']}")
    assert [i["description"] for i in fetched.json()["items"]] == ["Only"]


@pytest.mark.asyncio
async def test_update_with_no_items_clears_them(auth_client: AsyncClient, company):
    created = await auth_client.post("/api/v1/invoices", json={"items": [_item()]})
    invoice_id = created.json()["id"]

    response = await auth_client.put(f"/api/v1/invoices/{invoice_id}", json={"items": []})

    data = response.json()
    assert data["items"] == []
    assert Decimal(data["total"]) == 0


@pytest.mark.asyncio
async def test_list_invoices_with_names_and_filters(
    auth_client: AsyncClient,
    company,
    test_client_record,
):
    await auth_client.post(
        "/api/v1/invoices",
        json={"client_id": test_client_record.id, "status": "paid", "items": [_item()]},
    )
    await auth_client.post("/api/v1/invoices", json={"status": "pending", "items": []})

    response = await auth_client.get("/api/v1/invoices")

    assert response.status_code == 200
    data = response.json()
    assert len(data) == 2
    assert data[0]["status"] == "pending"
    assert data[0]["client_name"] is None
    assert data[1]["client_name"] == "Globex"
    assert data[1]["company_name"] == "Acme Studio"

    paid = await auth_client.get("/api/v1/invoices", params={"status": "paid"})
    assert [i["status"] for i in paid.json()] == ["paid"]


@pytest.mark.asyncio
async def test_unknown_status_is_rejected(auth_client: AsyncClient, company):
    response = await auth_client.post("/api/v1/invoices", json={"status": "cancelled"})

    assert response.status_code == 422


@pytest.mark.asyncio
async def test_delete_invoice(auth_client: AsyncClient, company):
    created = await auth_client.post("/api/v1/invoices", json={"items": [_item()]})
    invoice_id = created.json()["id"]

    response = await auth_client.delete(f"/api/v1/invoices/{invoice_id}")
    assert response.status_code == 200

    missing = await auth_client.get(f"/api/v1/invoices/{invoice_id}")
    assert missing.status_code == 404


@pytest.mark.asyncio
async def test_foreign_invoice_is_hidden(auth_client: AsyncClient, db_session, other_user):
    from invoicetree.models import Invoice

    foreign_company = Company(user_id=other_user.id, name="Foreign Co")
    db_session.add(foreign_company)
    await db_session.flush()
    foreign = Invoice(
        company_id=foreign_company.id,
        number="X-1",
        issue_date=date(2024, 1, 1),
    )
    db_session.add(foreign)
    await db_session.commit()

    assert (await auth_client.get(f"/api/v1/invoices/{foreign.id}")).status_code == 404
    assert (await auth_client.delete(f"/api/v1/invoices/{foreign.id}")).status_code == 404
    assert (await auth_client.get("/api/v1/invoices")).json() == []


@pytest.mark.asyncio
async def test_download_pdf(auth_client: AsyncClient, company, test_client_record):
    created = await auth_client.post(
        "/api/v1/invoices",
        json={"client_id": test_client_record.id, "number": "INV-PDF-1", "items": [_item()]},
    )
    invoice_id = created.json()["id"]

    response = await auth_client.get(f"/api/v1/invoices/{invoice_id}/pdf")

    assert response.status_code == 200
    assert response.headers["content-type"] == "application/pdf"
    assert 'filename="invoice_INV-PDF-1.pdf"' in response.headers["content-disposition"]
    assert response.content.startswith(b"%PDF")


@pytest.mark.asyncio
async def test_stored_aggregates_match_stored_items(auth_client: AsyncClient, company):
    items = [
        _item("Half", quantity="0.5", unit_price="0.333", tax_rate="7.25", discount_rate="2.5"),
        _item("Half again", quantity="0.5", unit_price="0.333", tax_rate="7.25", discount_rate="2.5"),
        _item("Odd", quantity="3.125", unit_price="19.999", tax_rate="21", discount_rate="12.75"),
    ]
    created = await auth_client.post("/api/v1/invoices", json={"items": items})
    assert created.status_code == 201

    data = (await auth_client.get(f"/api/v1/invoices/{created.json()['id']}")).json()
    stored = data["items"]

    assert Decimal(data["subtotal"]) == sum(Decimal(i["subtotal"]) for i in stored)
    assert Decimal(data["tax_total"]) == sum(Decimal(i["tax_amount"]) for i in stored)
    assert Decimal(data["discount_total"]) == sum(Decimal(i["discount_amount"]) for i in stored)
    assert Decimal(data["total"]) == sum(Decimal(i["total"]) for i in stored)
    assert Decimal(stored[0]["subtotal"]) == Decimal("0.1665")
    assert Decimal(stored[0]["tax_amount"]) == Decimal("0.01207125")


@pytest.mark.asyncio
async def test_item_precision_is_bounded(auth_client: AsyncClient, company):
    too_fine_price = await auth_client.post(
        "/api/v1/invoices",
        json={"items": [_item(quantity="0.5", unit_price="0.333333")]},
    )
    too_fine_rate = await auth_client.post(
        "/api/v1/invoices",
        json={"items": [_item(tax_rate="7.125")]},
    )

    assert too_fine_price.status_code == 422
    assert too_fine_rate.status_code == 422


@pytest.mark.asyncio
async def test_number_not_reused_after_delete(auth_client: AsyncClient, company):
    first = (await auth_client.post("/api/v1/invoices", json={"items": []})).json()
    second = (await auth_client.post("/api/v1/invoices", json={"items": []})).json()

    await auth_client.delete(f"/api/v1/invoices/{first['id']}")
    third = (await auth_client.post("/api/v1/invoices", json={"items": []})).json()

    year = date.today().year
    assert second["number"] == f"INV-{year}-00002"
    assert third["number"] == f"INV-{year}-00003"


@pytest.mark.asyncio
async def test_update_keeps_omitted_fields(auth_client: AsyncClient, company, test_client_record):
    created = await auth_client.post(
        "/api/v1/invoices",
        json={
            "client_id": test_client_record.id,
            "due_date": "2030-01-31",
            "notes": "Original notes",
            "terms": "Original terms",
            "payment_terms": "Net 30",
            "status": "pending",
            "items": [_item("Kept")],
        },
    )
    invoice = created.json()

    response = await auth_client.put(
        f"/api/v1/invoices/{invoice['id']}",
        json={"notes": "New notes"},
    )

    assert response.status_code == 200
    data = response.json()
    assert data["notes"] == "New notes"
    assert data["client_id"] == test_client_record.id
    assert data["due_date"] == "2030-01-31"
    assert data["terms"] == "Original terms"
    assert data["payment_terms"] == "Net 30"
    assert data["status"] == "pending"
    assert [i["description"] for i in data["items"]] == ["Kept"]
    assert Decimal(data["total"]) == Decimal("105")


@pytest.mark.asyncio
async def test_update_null_clears_optional_fields(auth_client: AsyncClient, company, test_client_record):
    created = await auth_client.post(
        "/api/v1/invoices",
        json={
            "client_id": test_client_record.id,
            "due_date": "2030-01-31",
            "notes": "Some notes",
            "items": [],
        },
    )
    invoice = created.json()

    response = await auth_client.put(
        f"/api/v1/invoices/{invoice['id']}",
        json={"client_id": None, "due_date": None, "notes": None, "number": None},
    )

    data = response.json()
    assert data["client_id"] is None
    assert data["client"] is None
    assert data["due_date"] is None
    assert data["notes"] is None
    assert data["number"] == invoice["number"]
