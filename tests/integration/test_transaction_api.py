"""
Integration tests for the HTTP API.

These tests verify:
1. POST /api/v1/transactions records a purchase and returns 201
2. Domain errors map to their HTTP status codes and error body
3. Customer onboarding, limit provisioning and history endpoints
4. Health, metrics and request ID plumbing
"""

import re

import pytest
from httpx import AsyncClient


CUSTOMER_NIK = "3201011201900001"


# =============================================================================
# POST /api/v1/transactions
# =============================================================================

class TestCreateTransaction:
    """Tests for POST /api/v1/transactions."""

    @pytest.mark.asyncio
    async def test_records_transaction(
        self,
        client: AsyncClient,
        seeded_customer: str,
        transaction_request: dict,
    ):
        response = await client.post("/api/v1/transactions", json=transaction_request)

        assert response.status_code == 201
        data = response.json()
        assert re.match(r"^32010112-\d{20}-[0-9A-F]{4}$", data["contract_number"])
        assert data["customer_nik"] == CUSTOMER_NIK
        assert data["tenor"] == 6
        assert data["otr"] == 1_000_000
        assert data["admin_fee"] == 50_000
        assert data["installment"] == 180_000
        assert data["interest"] == 30_000
        assert data["asset_name"] == "Honda Beat"
        assert data["created_at"]

    @pytest.mark.asyncio
    async def test_limit_is_reduced(
        self,
        client: AsyncClient,
        seeded_customer: str,
        transaction_request: dict,
    ):
        await client.post("/api/v1/transactions", json=transaction_request)

        response = await client.get(f"/api/v1/customers/{CUSTOMER_NIK}/limits")

        limits = {l["tenor"]: l["remaining_amount"] for l in response.json()["limits"]}
        assert limits == {1: 100_000, 3: 500_000, 6: 8_950_000}

    @pytest.mark.asyncio
    async def test_unknown_customer_returns_404(
        self,
        client: AsyncClient,
        seeded_customer: str,
        transaction_request: dict,
    ):
        transaction_request["customer_nik"] = "9999999999999999"

        response = await client.post("/api/v1/transactions", json=transaction_request)

        assert response.status_code == 404
        assert response.json()["error"] == "CUSTOMER_NOT_FOUND"

    @pytest.mark.asyncio
    async def test_missing_tenor_returns_404(
        self,
        client: AsyncClient,
        seeded_customer: str,
        transaction_request: dict,
    ):
        transaction_request["tenor"] = 12

        response = await client.post("/api/v1/transactions", json=transaction_request)

        assert response.status_code == 404
        assert response.json()["error"] == "LIMIT_NOT_FOUND"

    @pytest.mark.asyncio
    async def test_limit_exceeded_returns_422(
        self,
        client: AsyncClient,
        seeded_customer: str,
        transaction_request: dict,
    ):
        transaction_request["tenor"] = 1

        response = await client.post("/api/v1/transactions", json=transaction_request)

        assert response.status_code == 422
        data = response.json()
        assert data["error"] == "LIMIT_EXCEEDED"
        assert data["message"] == "Transaction amount exceeds available limit"

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "field,value",
        [
            ("otr", 0),
            ("admin_fee", -1),
            ("installment", 0),
            ("interest", -1),
            ("tenor", 0),
            ("asset_name", ""),
            ("customer_nik", "   "),
        ],
    )
    async def test_invalid_fields_rejected(
        self,
        client: AsyncClient,
        seeded_customer: str,
        transaction_request: dict,
        field: str,
        value,
    ):
        transaction_request[field] = value

        response = await client.post("/api/v1/transactions", json=transaction_request)

        assert response.status_code == 422

    @pytest.mark.asyncio
    async def test_missing_field_rejected(
        self,
        client: AsyncClient,
        transaction_request: dict,
    ):
        del transaction_request["asset_name"]

        response = await client.post("/api/v1/transactions", json=transaction_request)

        assert response.status_code == 422


# =============================================================================
# GET /api/v1/transactions/{contract_number}
# =============================================================================

class TestGetTransaction:
    """Tests for GET /api/v1/transactions/{contract_number}."""

    @pytest.mark.asyncio
    async def test_returns_recorded_transaction(
        self,
        client: AsyncClient,
        seeded_customer: str,
        transaction_request: dict,
    ):
        created = (
            await client.post("/api/v1/transactions", json=transaction_request)
        ).json()

        response = await client.get(f"/api/v1/transactions/{created['contract_number']}")

        assert response.status_code == 200
        data = response.json()
        assert data["contract_number"] == created["contract_number"]
        assert data["otr"] == created["otr"]
        assert data["tenor"] == 6

    @pytest.mark.asyncio
    async def test_unknown_contract_number_returns_404(self, client: AsyncClient):
        response = await client.get("/api/v1/transactions/does-not-exist")

        assert response.status_code == 404
        assert response.json()["error"] == "TRANSACTION_NOT_FOUND"


# =============================================================================
# Customers and limits
# =============================================================================

class TestCustomers:
    """Tests for customer onboarding and limit provisioning."""

    @pytest.mark.asyncio
    async def test_register_customer(self, client: AsyncClient, customer_request: dict):
        response = await client.post("/api/v1/customers", json=customer_request)

        assert response.status_code == 201
        data = response.json()
        assert data["nik"] == customer_request["nik"]
        assert data["birth_date"] == "1992-05-15"

        response = await client.get(f"/api/v1/customers/{customer_request['nik']}")
        assert response.status_code == 200
        assert response.json()["full_name"] == "Siti Rahmawati"

    @pytest.mark.asyncio
    async def test_register_duplicate_returns_409(
        self,
        client: AsyncClient,
        customer_request: dict,
    ):
        await client.post("/api/v1/customers", json=customer_request)

        response = await client.post("/api/v1/customers", json=customer_request)

        assert response.status_code == 409
        assert response.json()["error"] == "CUSTOMER_ALREADY_EXISTS"

    @pytest.mark.asyncio
    async def test_unknown_customer_returns_404(self, client: AsyncClient):
        response = await client.get("/api/v1/customers/9999999999999999")

        assert response.status_code == 404
        assert response.json()["error"] == "CUSTOMER_NOT_FOUND"

    @pytest.mark.asyncio
    async def test_provision_limits_then_transact(
        self,
        client: AsyncClient,
        customer_request: dict,
    ):
        nik = customer_request["nik"]
        await client.post("/api/v1/customers", json=customer_request)

        response = await client.post(
            f"/api/v1/customers/{nik}/limits",
            json={"limits": [{"tenor": 2, "limit_amount": 200_000}, {"tenor": 4, "limit_amount": 700_000}]},
        )

        assert response.status_code == 201
        assert response.json()["limits"] == [
            {"tenor": 2, "remaining_amount": 200_000},
            {"tenor": 4, "remaining_amount": 700_000},
        ]

        response = await client.post(
            "/api/v1/transactions",
            json={
                "customer_nik": nik,
                "tenor": 4,
                "otr": 600_000,
                "admin_fee": 25_000,
                "installment": 160_000,
                "interest": 15_000,
                "asset_name": "Samsung Galaxy A55",
            },
        )
        assert response.status_code == 201

        response = await client.get(f"/api/v1/customers/{nik}/limits")
        assert response.json()["limits"][1] == {"tenor": 4, "remaining_amount": 75_000}

    @pytest.mark.asyncio
    async def test_provision_existing_tenor_returns_409(
        self,
        client: AsyncClient,
        seeded_customer: str,
    ):
        response = await client.post(
            f"/api/v1/customers/{CUSTOMER_NIK}/limits",
            json={"limits": [{"tenor": 12, "limit_amount": 1}, {"tenor": 6, "limit_amount": 1}]},
        )

        assert response.status_code == 409
        assert response.json()["error"] == "LIMIT_ALREADY_PROVISIONED"

        # Nothing from the rejected batch was created
        limits = (await client.get(f"/api/v1/customers/{CUSTOMER_NIK}/limits")).json()
        assert [l["tenor"] for l in limits["limits"]] == [1, 3, 6]

    @pytest.mark.asyncio
    async def test_provision_repeated_tenor_returns_400(
        self,
        client: AsyncClient,
        seeded_customer: str,
    ):
        response = await client.post(
            f"/api/v1/customers/{CUSTOMER_NIK}/limits",
            json={"limits": [{"tenor": 12, "limit_amount": 1}, {"tenor": 12, "limit_amount": 2}]},
        )

        assert response.status_code == 400
        assert response.json()["error"] == "INVALID_REQUEST"

    @pytest.mark.asyncio
    async def test_provision_for_unknown_customer_returns_404(self, client: AsyncClient):
        response = await client.post(
            "/api/v1/customers/9999999999999999/limits",
            json={"limits": [{"tenor": 1, "limit_amount": 100}]},
        )

        assert response.status_code == 404


# =============================================================================
# GET /api/v1/customers/{nik}/transactions
# =============================================================================

class TestTransactionHistory:
    """Tests for the transaction history endpoint."""

    @pytest.mark.asyncio
    async def test_history_newest_first(
        self,
        client: AsyncClient,
        seeded_customer: str,
        transaction_request: dict,
    ):
        numbers = []
        for otr in (100_000, 200_000, 300_000):
            transaction_request["otr"] = otr
            response = await client.post("/api/v1/transactions", json=transaction_request)
            numbers.append(response.json()["contract_number"])

        response = await client.get(f"/api/v1/customers/{CUSTOMER_NIK}/transactions")

        assert response.status_code == 200
        data = response.json()
        assert data["customer_nik"] == CUSTOMER_NIK
        assert [t["contract_number"] for t in data["transactions"]] == numbers[::-1]

    @pytest.mark.asyncio
    async def test_history_pagination(
        self,
        client: AsyncClient,
        seeded_customer: str,
        transaction_request: dict,
    ):
        for otr in (100_000, 200_000, 300_000):
            transaction_request["otr"] = otr
            await client.post("/api/v1/transactions", json=transaction_request)

        response = await client.get(
            f"/api/v1/customers/{CUSTOMER_NIK}/transactions?limit=1&offset=1"
        )

        transactions = response.json()["transactions"]
        assert len(transactions) == 1
        assert transactions[0]["otr"] == 200_000

    @pytest.mark.asyncio
    async def test_empty_history(self, client: AsyncClient, seeded_customer: str):
        response = await client.get(f"/api/v1/customers/{CUSTOMER_NIK}/transactions")

        assert response.status_code == 200
        assert response.json()["transactions"] == []

    @pytest.mark.asyncio
    async def test_invalid_limit_rejected(self, client: AsyncClient, seeded_customer: str):
        response = await client.get(
            f"/api/v1/customers/{CUSTOMER_NIK}/transactions?limit=0"
        )

        assert response.status_code == 422


# =============================================================================
# Service endpoints
# =============================================================================

class TestServiceEndpoints:
    """Tests for health, docs redirect and request IDs."""

    @pytest.mark.asyncio
    async def test_health(self, client: AsyncClient):
        response = await client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"
        assert response.json()["database"] == "ok"

    @pytest.mark.asyncio
    async def test_root_redirects_to_docs(self, client: AsyncClient):
        response = await client.get("/")

        assert response.status_code in (302, 307)
        assert response.headers["location"] == "/docs"

    @pytest.mark.asyncio
    async def test_request_id_echoed(self, client: AsyncClient):
        response = await client.get("/health", headers={"X-Request-ID": "abc123"})

        assert response.headers["X-Request-ID"] == "abc123"

    @pytest.mark.asyncio
    async def test_request_id_in_error_body(self, client: AsyncClient):
        response = await client.get(
            "/api/v1/customers/9999999999999999",
            headers={"X-Request-ID": "trace-me"},
        )

        assert response.json()["request_id"] == "trace-me"
