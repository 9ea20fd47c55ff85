"""
Integration tests for the payment ledger and portfolio.

These tests verify:
1. POST /v1/obligations/{obligation_id}/payments - Applies payments and terminal transitions
2. GET /v1/obligations/{obligation_id}[/payments] - Reads obligations and the audit trail
3. GET /v1/customers/{customer_id}/portfolio - Totals and available credit
"""

from uuid import uuid4

import pytest
from httpx import AsyncClient


async def originate_loan(client: AsyncClient, amount_cents: int = 600_000) -> dict:
    response = await client.post(
        "/v1/customers/merchant_strong/working-capital",
        json={"amount_cents": amount_cents, "term_months": 6},
    )
    assert response.status_code == 201
    return response.json()


# =============================================================================
# Payments
# =============================================================================

class TestRecordPayment:
    """Tests for POST /v1/obligations/{obligation_id}/payments."""

    @pytest.mark.asyncio
    async def test_payments_pay_off_loan(self, client: AsyncClient, scored):
        """
        600,000 at 8% plus 2% fee owes 660,000; three payments settle it and
        a fourth is rejected.
        """
        await scored("merchant_strong")
        loan = await originate_loan(client)
        obligation_id = loan["obligation_id"]
        assert loan["total_repayment_cents"] == 660_000

        for amount, remaining in [(300_000, 360_000), (300_000, 60_000)]:
            response = await client.post(
                f"/v1/obligations/{obligation_id}/payments",
                json={"amount_cents": amount},
            )
            assert response.status_code == 201
            assert response.json()["obligation"]["remaining_cents"] == remaining
            assert response.json()["obligation"]["status"] == "active"

        response = await client.post(
            f"/v1/obligations/{obligation_id}/payments",
            json={"amount_cents": 60_000},
        )
        data = response.json()
        assert data["payment"]["amount_cents"] == 60_000
        assert data["obligation"]["status"] == "paid_off"
        assert data["obligation"]["remaining_cents"] == 0
        assert data["obligation"]["amount_repaid_cents"] == 660_000
        assert data["obligation"]["completed_at"] is not None
        assert data["obligation"]["version"] == 3

        response = await client.post(
            f"/v1/obligations/{obligation_id}/payments",
            json={"amount_cents": 1_000},
        )
        assert response.status_code == 409
        assert response.json()["error"] == "ALREADY_COMPLETED"

    @pytest.mark.asyncio
    async def test_net_terms_single_payment(self, client: AsyncClient, scored):
        await scored("merchant_strong")
        contract = (await client.post(
            "/v1/customers/merchant_strong/net-terms",
            json={"invoice_amount_cents": 100_000, "supplier_id": "supplier_1"},
        )).json()

        response = await client.post(
            f"/v1/obligations/{contract['obligation_id']}/payments",
            json={"amount_cents": 102_500},
        )

        assert response.status_code == 201
        obligation = response.json()["obligation"]
        assert obligation["type"] == "net_terms"
        assert obligation["status"] == "completed"
        assert obligation["customer_paid_at"] is not None
        assert obligation["outstanding_cents"] == 0

    @pytest.mark.asyncio
    async def test_revenue_for_period_recorded(self, client: AsyncClient, scored):
        await scored("merchant_strong")
        deal = (await client.post(
            "/v1/customers/merchant_strong/revenue-based-financing",
            json={"advance_amount_cents": 1_000_000},
        )).json()

        response = await client.post(
            f"/v1/obligations/{deal['obligation_id']}/payments",
            json={"amount_cents": 60_000, "revenue_for_period_cents": 1_000_000},
        )

        assert response.json()["payment"]["revenue_for_period_cents"] == 1_000_000
        assert response.json()["obligation"]["remaining_cents"] == 1_340_000

    @pytest.mark.asyncio
    async def test_unknown_obligation_returns_404(self, client: AsyncClient):
        response = await client.post(
            f"/v1/obligations/{uuid4()}/payments",
            json={"amount_cents": 1_000},
        )

        assert response.status_code == 404
        assert response.json()["error"] == "OBLIGATION_NOT_FOUND"

    @pytest.mark.asyncio
    async def test_zero_amount_returns_400(self, client: AsyncClient, scored):
        await scored("merchant_strong")
        loan = await originate_loan(client)

        response = await client.post(
            f"/v1/obligations/{loan['obligation_id']}/payments",
            json={"amount_cents": 0},
        )

        assert response.status_code == 400
        assert response.json()["error"] == "INVALID_AMOUNT"

    @pytest.mark.asyncio
    async def test_malformed_obligation_id_returns_422(self, client: AsyncClient):
        response = await client.post(
            "/v1/obligations/not-a-uuid/payments",
            json={"amount_cents": 1_000},
        )

        assert response.status_code == 422


# =============================================================================
# Reads
# =============================================================================

class TestObligationReads:
    """Tests for obligation and payment reads."""

    @pytest.mark.asyncio
    async def test_get_obligation(self, client: AsyncClient, scored):
        await scored("merchant_strong")
        loan = await originate_loan(client)

        response = await client.get(f"/v1/obligations/{loan['obligation_id']}")

        assert response.status_code == 200
        assert response.json() == loan

    @pytest.mark.asyncio
    async def test_payments_in_applied_order(self, client: AsyncClient, scored):
        await scored("merchant_strong")
        loan = await originate_loan(client)

        for amount in (1_000, 2_000, 3_000):
            await client.post(
                f"/v1/obligations/{loan['obligation_id']}/payments",
                json={"amount_cents": amount},
            )

        response = await client.get(f"/v1/obligations/{loan['obligation_id']}/payments")

        assert response.status_code == 200
        assert [p["amount_cents"] for p in response.json()["payments"]] == [1_000, 2_000, 3_000]

    @pytest.mark.asyncio
    async def test_payments_for_unknown_obligation(self, client: AsyncClient):
        response = await client.get(f"/v1/obligations/{uuid4()}/payments")

        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_list_customer_obligations(self, client: AsyncClient, scored):
        await scored("merchant_strong")
        first = await originate_loan(client)
        second = await originate_loan(client)

        response = await client.get("/v1/customers/merchant_strong/obligations")

        ids = {o["obligation_id"] for o in response.json()["obligations"]}
        assert ids == {first["obligation_id"], second["obligation_id"]}


# =============================================================================
# Portfolio
# =============================================================================

class TestPortfolio:
    """Tests for GET /v1/customers/{customer_id}/portfolio."""

    @pytest.mark.asyncio
    async def test_dashboard_totals(self, client: AsyncClient, scored):
        await scored("merchant_strong")
        loan = await originate_loan(client)
        await client.post(
            f"/v1/obligations/{loan['obligation_id']}/payments",
            json={"amount_cents": 160_000},
        )

        response = await client.get("/v1/customers/merchant_strong/portfolio")

        assert response.status_code == 200
        data = response.json()
        assert data["latest_score"]["score"] == 792
        assert data["total_borrowed_cents"] == 600_000
        assert data["total_repaid_cents"] == 160_000
        assert data["total_outstanding_cents"] == 500_000
        assert data["available_credit_cents"] == 100_000_000 - 500_000
        assert data["active_obligations"] == 1
        assert len(data["obligations"]) == 1

    @pytest.mark.asyncio
    async def test_dashboard_without_score(self, client: AsyncClient):
        response = await client.get("/v1/customers/stranger/portfolio")

        assert response.status_code == 200
        data = response.json()
        assert data["latest_score"] is None
        assert data["available_credit_cents"] == 0
        assert data["obligations"] == []
