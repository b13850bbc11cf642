"""
Company endpoint tests.
"""

import pytest
from httpx import AsyncClient

from invoicetree.models import Company


@pytest.mark.asyncio
async def test_create_company(auth_client: AsyncClient):
    response = await auth_client.post(
        "/api/v1/companies",
        json={
            "name": "Beta LLC",
            "tax_id": "B-42",
            "email": "hello@beta.example.com",
        },
    )

    assert response.status_code == 201
    data = response.json()
    assert data["name"] == "Beta LLC"
    assert data["tax_id"] == "B-42"


@pytest.mark.asyncio
async def test_create_company_rejects_bad_email(auth_client: AsyncClient):
    response = await auth_client.post(
        "/api/v1/companies",
        json={"name": "Bad Mail", "email": "not-an-email"},
    )

    assert response.status_code == 422


@pytest.mark.asyncio
async def test_list_companies_ordered_by_name(auth_client: AsyncClient, company):
    await auth_client.post("/api/v1/companies", json={"name": "Zeta Works"})
    await auth_client.post("/api/v1/companies", json={"name": "Alpha Labs"})

    response = await auth_client.get("/api/v1/companies")

    assert response.status_code == 200
    names = [c["name"] for c in response.json()]
    assert names == ["Acme Studio", "Alpha Labs", "Zeta Works"]


@pytest.mark.asyncio
async def test_other_users_company_is_hidden(auth_client: AsyncClient, db_session, other_user):
    foreign = Company(user_id=other_user.id, name="Foreign Co")
    db_session.add(foreign)
    await db_session.commit()

    listing = await auth_client.get("/api/v1/companies")
    assert listing.json() == []

    response = await auth_client.get(f"/api/v1/companies/{foreign.id}")
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_company_clients(auth_client: AsyncClient, company, test_client_record):
    response = await auth_client.get(f"/api/v1/companies/{company.id}/clients")

    assert response.status_code == 200
    data = response.json()
    assert [c["name"] for c in data] == ["Globex"]
    assert data[0]["company_id"] == company.id
