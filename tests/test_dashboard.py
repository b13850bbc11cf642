"""
Dashboard aggregation tests.
"""

from datetime import date
from decimal import Decimal

import pytest
from httpx import AsyncClient

from invoicetree.models import Client, Company, Invoice, InvoiceStatus
from invoicetree.services.dashboard import aggregate_dashboard, parse_amount


def test_empty_dashboard():
    stats = aggregate_dashboard([], 0)

    assert stats.total_invoices == 0
    assert stats.pending_invoices == 0
    assert stats.total_revenue == 0
    assert stats.active_clients == 0


def test_revenue_counts_only_paid_invoices():
    invoices = [
        {"status": "paid", "total": "100.50"},
        {"status": "paid", "total": 20},
        {"status": "pending", "total": "999"},
        {"status": "draft", "total": "5"},
        {"status": "overdue", "total": "7"},
    ]

    stats = aggregate_dashboard(invoices, 3)

    assert stats.total_invoices == 5
    assert stats.pending_invoices == 1
    assert stats.total_revenue == Decimal("120.50")
    assert stats.active_clients == 3


def test_malformed_totals_count_as_zero():
    invoices = [
        {"status": "paid", "total": "abc"},
        {"status": "paid", "total": None},
        {"status": "paid", "total": "NaN"},
        {"status": "paid", "total": float("inf")},
        {"status": "paid", "total": "12.5 USD"},
    ]

    stats = aggregate_dashboard(invoices, None)

    assert stats.total_invoices == 5
    assert stats.total_revenue == Decimal("12.5")
    assert stats.active_clients == 0


@pytest.mark.parametrize(
    "value, expected",
    [
        ("42", Decimal("42")),
        ("  -3.5", Decimal("-3.5")),
        (".25", Decimal("0.25")),
        ("1e3", Decimal("1000")),
        ("", Decimal("0")),
        ("Infinity", Decimal("0")),
        (True, Decimal("0")),
        (Decimal("7.10"), Decimal("7.10")),
    ],
)
def test_parse_amount(value, expected):
    assert parse_amount(value) == expected


@pytest.mark.asyncio
async def test_dashboard_endpoint(auth_client: AsyncClient, db_session, company, other_user):
    db_session.add_all([
        Client(company_id=company.id, name="A"),
        Client(company_id=company.id, name="B"),
        Invoice(company_id=company.id, number="1", issue_date=date(2024, 1, 1),
                status=InvoiceStatus.PAID, total=Decimal("150")),
        Invoice(company_id=company.id, number="2", issue_date=date(2024, 1, 1),
                status=InvoiceStatus.PENDING, total=Decimal("80")),
        Invoice(company_id=company.id, number="3", issue_date=date(2024, 1, 1),
                status=InvoiceStatus.DRAFT, total=Decimal("10")),
    ])
    foreign = Company(user_id=other_user.id, name="Foreign Co")
    db_session.add(foreign)
    await db_session.flush()
    db_session.add(Invoice(company_id=foreign.id, number="F", issue_date=date(2024, 1, 1),
                           status=InvoiceStatus.PAID, total=Decimal("1000")))
    await db_session.commit()

    response = await auth_client.get("/api/v1/dashboard")

    assert response.status_code == 200
    data = response.json()
    assert data["total_invoices"] == 3
    assert data["pending_invoices"] == 1
    assert Decimal(data["total_revenue"]) == Decimal("150")
    assert data["active_clients"] == 2


@pytest.mark.asyncio
async def test_dashboard_without_company(auth_client: AsyncClient):
    response = await auth_client.get("/api/v1/dashboard")

    assert response.status_code == 200
    data = response.json()
    assert data["total_invoices"] == 0
    assert Decimal(data["total_revenue"]) == 0
