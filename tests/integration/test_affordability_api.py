"""
Integration tests for the affordability API.

These tests verify:
1. The full response for the reference scenario
2. Missing inputs are reported with a 200, never an error
3. Profile lookup outcomes (found, empty, failed, unconfigured, inline)
4. Hypothetical credit scores and the debug block
5. Health, metrics and docs endpoints
"""

import pytest
from httpx import AsyncClient

from elena.core.config import settings


# =============================================================================
# Reference Scenario Tests
# =============================================================================

class TestReferenceScenario:
    """Tests for POST /v1/affordability with a complete scenario."""

    @pytest.mark.asyncio
    async def test_over_cap_scenario(
        self,
        client: AsyncClient,
        reference_request: dict,
    ):
        """$3,202 all-in against a $1,800 cap is NO-GO with a lower price target."""
        response = await client.post("/v1/affordability", json=reference_request)

        assert response.status_code == 200
        data = response.json()

        assert data["ok"] is True
        assert data["verdict"]["status"] == "NO-GO"
        assert data["verdict"]["grade"] == "D"
        assert data["verdict"]["housingCap"] == 1800
        assert data["verdict"]["residual"] == 1298
        assert set(data["verdict"]["ratios"]) == {"housingRatio", "expenseRatio"}
        assert data["verdict"]["notes"] == ["Housing cost exceeds the 30% housing cap."]

        mortgage = data["mortgage"]
        assert mortgage["source"] == "deterministic_estimate"
        assert mortgage["all_in_monthly"] == 3202
        assert mortgage["breakdown"] == {
            "principal_interest": 2335,
            "taxes": 667,
            "insurance": 200,
            "hoa": 0,
        }
        assert mortgage["assumptions_used"] == {
            "taxRate": 0.02,
            "insuranceAnnual": 2400.0,
            "hoaMonthly": 0.0,
        }
        assert mortgage["apr_assumed"] == 0.0675
        assert mortgage["loan_amount"] == 360000
        assert mortgage["error"] is None

        assert data["next_action"] == {
            "type": "lower_price",
            "target": {
                "current_price": 400000,
                "target_price": 225000,
                "target_housing_cap": 1800,
            },
            "why": "Brings estimated all-in housing closer to the 30% cap using your current scenario.",
        }
        assert data["missing_inputs"] == []

    @pytest.mark.asyncio
    async def test_inputs_used_and_sources(
        self,
        client: AsyncClient,
        reference_request: dict,
    ):
        response = await client.post("/v1/affordability", json=reference_request)
        inputs = response.json()["inputs_used"]

        assert inputs["income"] == 6000
        assert inputs["expenses"] == 1500
        assert inputs["price"] == 400000
        assert inputs["downpayment"] == 40000
        assert inputs["creditScore"] == 760
        assert inputs["termYears"] == 30
        assert inputs["loanType"] == "conv"
        assert inputs["assumptions"] == {
            "housing_cap_pct": 0.3,
            "buffer_allin_to_pi": 1.28,
            "apr_assumed": 0.0675,
        }

        sources = inputs["sources"]
        assert sources["income"] == "snapshot"
        assert sources["expenses"] == "snapshot"
        assert sources["price"] == "scenario"
        assert sources["creditScore"] == "scenario"
        assert sources["mortgage"] == "deterministic_estimate"
        assert sources["quick"] == "deterministic_quick_rails"
        assert sources["email"] == "missing"
        assert sources["profile"] == "none"

    @pytest.mark.asyncio
    async def test_quick_rails_and_summary(
        self,
        client: AsyncClient,
        reference_request: dict,
    ):
        data = (await client.post("/v1/affordability", json=reference_request)).json()

        quick = data["quick"]
        assert quick["housing_cap_monthly"] == 1800
        assert quick["pi_target_monthly"] == 1406
        assert quick["assumptions"]["apr_assumed"] == 0.0675
        assert quick["quick_max_price"]["price_5_down"] > quick["quick_max_price"]["price_0_down"]

        assert data["summary"].startswith("BLUF: **NO-GO** (Grade: **D**)")
        assert data["intent"] == "affordability_check"
        assert data["context"] == {"snapshot_ok": True, "profile_ok": False}

    @pytest.mark.asyncio
    async def test_overrides_change_the_verdict(
        self,
        client: AsyncClient,
        reference_request: dict,
    ):
        reference_request["overrides"] = {"income": 15000, "expenses": 2000}

        data = (await client.post("/v1/affordability", json=reference_request)).json()

        assert data["verdict"]["status"] == "GREEN"
        assert data["verdict"]["grade"] == "A"
        assert data["next_action"]["type"] == "lock_in_plan"
        assert data["inputs_used"]["sources"]["income"] == "overrides"


# =============================================================================
# Missing Input Tests
# =============================================================================

class TestMissingInputs:
    """Missing data is reported in the body, never as an error."""

    @pytest.mark.asyncio
    async def test_empty_body(self, client: AsyncClient):
        response = await client.post("/v1/affordability", json={})

        assert response.status_code == 200
        data = response.json()

        assert data["ok"] is True
        assert data["scenario_id"].startswith("elena_")
        assert len(data["scenario_id"]) == len("elena_") + 16
        assert data["email"] is None
        assert data["profile_used"] is None
        assert data["quick"] is None
        assert data["verdict"]["status"] == "INSUFFICIENT"
        assert data["verdict"]["grade"] == "N/A"
        assert data["missing_inputs"] == ["income", "expenses", "price", "downpayment", "creditScore"]
        assert data["next_action"]["type"] == "collect_missing_inputs"
        assert data["next_action"]["target"] == {"missing": data["missing_inputs"]}
        assert data["mortgage"]["source"] == "insufficient_inputs_for_mortgage"
        assert data["mortgage"]["all_in_monthly"] is None
        assert data["inputs_used"]["sources"]["quick"] == "missing_income"
        assert data["inputs_used"]["assumptions"]["apr_assumed"] is None
        assert data["context"] == {"snapshot_ok": False, "profile_ok": False}
        assert "debug" not in data

    @pytest.mark.asyncio
    async def test_failed_estimate_is_reported(self, client: AsyncClient):
        response = await client.post("/v1/affordability", json={
            "scenario": {"price": 0, "downpayment": 10000, "creditScore": 700, "income": 6000},
        })

        data = response.json()
        assert response.status_code == 200
        assert data["mortgage"]["source"] == "deterministic_estimate:failed"
        assert data["mortgage"]["error"] == "Missing or invalid price."
        assert data["verdict"]["status"] == "INSUFFICIENT"

    @pytest.mark.asyncio
    async def test_overflowing_taxes_are_reported(self, client: AsyncClient):
        response = await client.post("/v1/affordability", json={
            "overrides": {
                "price": 1e10,
                "downpayment": 0,
                "creditScore": 700,
                "taxRate": 1e300,
                "income": 6000,
            },
        })

        data = response.json()
        assert response.status_code == 200
        assert data["mortgage"]["source"] == "deterministic_estimate:failed"
        assert data["mortgage"]["error"] == "Unable to compute all-in housing cost."
        assert data["verdict"]["status"] == "INSUFFICIENT"

    @pytest.mark.asyncio
    async def test_overflowing_residual_is_insufficient(
        self,
        client: AsyncClient,
        reference_request: dict,
    ):
        reference_request["overrides"] = {"income": 1e308, "expenses": -1e308}

        response = await client.post("/v1/affordability", json=reference_request)

        data = response.json()
        assert response.status_code == 200
        assert data["mortgage"]["source"] == "deterministic_estimate"
        assert data["verdict"]["status"] == "INSUFFICIENT"
        assert data["verdict"]["grade"] == "N/A"

    @pytest.mark.asyncio
    async def test_garbage_values_are_treated_as_missing(self, client: AsyncClient):
        response = await client.post("/v1/affordability", json={
            "scenario": {"price": "lots", "creditScore": True, "income": "NaN"},
        })

        data = response.json()
        assert response.status_code == 200
        assert data["inputs_used"]["price"] is None
        assert data["inputs_used"]["creditScore"] is None
        assert "income" in data["missing_inputs"]

    @pytest.mark.asyncio
    async def test_non_object_layer_is_rejected(self, client: AsyncClient):
        response = await client.post("/v1/affordability", json={"overrides": "cheaper"})

        assert response.status_code == 422


# =============================================================================
# Profile Lookup Tests
# =============================================================================

class TestProfileLookup:
    """Profile lookup outcomes are data in the response."""

    @pytest.mark.asyncio
    async def test_profile_found(self, client: AsyncClient, profile_store):
        response = await client.post("/v1/affordability", json={"email": "  Buyer@Example.com "})

        data = response.json()
        assert data["email"] == "buyer@example.com"
        assert profile_store.emails_requested == ["buyer@example.com"]
        assert data["inputs_used"]["sources"]["email"] == "request"
        assert data["inputs_used"]["sources"]["profile"] == "supabase:profiles"
        assert data["profile_used"]["full_name"] == "Dana Rivers"
        assert data["profile_used"]["first_name"] == "Dana"
        assert data["profile_used"]["phone"] == "+1-555-0100"
        assert data["context"]["profile_ok"] is True

    @pytest.mark.asyncio
    async def test_email_from_identity(self, client: AsyncClient):
        response = await client.post("/v1/affordability", json={
            "identity": {"email": "buyer@example.com"},
        })

        assert response.json()["email"] == "buyer@example.com"

    @pytest.mark.asyncio
    async def test_invalid_email_is_ignored(self, client: AsyncClient, profile_store):
        response = await client.post("/v1/affordability", json={"email": "not-an-email"})

        data = response.json()
        assert data["email"] is None
        assert profile_store.call_count == 0

    @pytest.mark.asyncio
    async def test_stored_profile_has_no_income(self, client: AsyncClient):
        response = await client.post("/v1/affordability", json={"email": "earner@example.com"})

        data = response.json()
        assert data["inputs_used"]["sources"]["profile"] == "supabase:profiles"
        assert data["inputs_used"]["income"] is None
        assert "income" in data["missing_inputs"]
        assert data["profile_used"]["full_name"] == "Sam Okafor"

    @pytest.mark.asyncio
    async def test_inline_income_with_stored_profile(self, client: AsyncClient):
        response = await client.post("/v1/affordability", json={
            "email": "earner@example.com",
            "context": {"profile": {"monthly_income": 9000}},
        })

        data = response.json()
        assert data["inputs_used"]["sources"]["profile"] == "supabase:profiles"
        assert data["inputs_used"]["income"] == 9000
        assert data["inputs_used"]["sources"]["income"] == "profile"
        assert data["profile_used"]["full_name"] == "Sam Okafor"

    @pytest.mark.asyncio
    async def test_profile_not_found(self, client: AsyncClient):
        response = await client.post("/v1/affordability", json={"email": "nobody@example.com"})

        data = response.json()
        assert data["inputs_used"]["sources"]["profile"] == "supabase:empty"
        assert data["profile_used"] == {"email": "nobody@example.com"}

    @pytest.mark.asyncio
    async def test_inline_context_profile(self, client: AsyncClient):
        response = await client.post("/v1/affordability", json={
            "email": "nobody@example.com",
            "context": {"profile": {"first_name": "Lee", "income": 9000}},
        })

        data = response.json()
        assert data["inputs_used"]["sources"]["profile"] == "context.profile"
        assert data["inputs_used"]["income"] == 9000
        assert data["inputs_used"]["sources"]["income"] == "profile"
        assert data["profile_used"]["first_name"] == "Lee"
        assert data["profile_used"]["email"] == "nobody@example.com"

    @pytest.mark.asyncio
    async def test_failing_store_is_not_an_error(
        self,
        client_with_failing_store: AsyncClient,
        reference_request: dict,
    ):
        reference_request["email"] = "buyer@example.com"

        response = await client_with_failing_store.post(
            "/v1/affordability?debug=1",
            json=reference_request,
        )

        assert response.status_code == 200
        data = response.json()
        assert data["inputs_used"]["sources"]["profile"] == "supabase:failed"
        assert data["debug"]["profile_error"] == "Profile store error: relation does not exist"
        assert data["verdict"]["status"] == "NO-GO"

    @pytest.mark.asyncio
    async def test_store_not_configured(self, client_without_store: AsyncClient):
        response = await client_without_store.post(
            "/v1/affordability",
            json={"email": "buyer@example.com"},
        )

        data = response.json()
        assert response.status_code == 200
        assert data["inputs_used"]["sources"]["profile"] == "supabase_env_missing"
        assert data["profile_used"] == {"email": "buyer@example.com"}


# =============================================================================
# Question & Debug Tests
# =============================================================================

class TestQuestionAndDebug:

    @pytest.mark.asyncio
    async def test_hypothetical_score_from_question(
        self,
        client: AsyncClient,
        reference_request: dict,
    ):
        del reference_request["scenario"]["creditScore"]
        reference_request["question"] = "What if my credit score went up to 740?"

        data = (await client.post("/v1/affordability", json=reference_request)).json()

        assert data["intent"] == "user_question"
        assert data["question"] == "What if my credit score went up to 740?"
        assert data["inputs_used"]["creditScore"] == 740
        assert data["inputs_used"]["sources"]["creditScore"] == "question_hypothetical"
        assert data["mortgage"]["apr_assumed"] == 0.0675

    @pytest.mark.asyncio
    async def test_debug_from_body(self, client: AsyncClient, reference_request: dict):
        reference_request["debug"] = True

        data = (await client.post("/v1/affordability", json=reference_request)).json()

        debug = data["debug"]
        assert debug["allow_origins_count"] == len(settings.allow_origins_list)
        assert debug["profile_error"] is None
        assert debug["snapshot_keys"] == ["income", "monthlyExpenses"]
        assert debug["credit_score_source"] == "scenario"
        assert debug["computed_apr_assumed"] == 0.0675

    @pytest.mark.asyncio
    @pytest.mark.parametrize("value", ["1", "true", "TRUE"])
    async def test_debug_from_query(self, client: AsyncClient, value: str):
        data = (await client.post(f"/v1/affordability?debug={value}", json={})).json()

        assert "debug" in data

    @pytest.mark.asyncio
    async def test_debug_query_other_values(self, client: AsyncClient):
        data = (await client.post("/v1/affordability?debug=no", json={})).json()

        assert "debug" not in data


# =============================================================================
# Service Endpoint Tests
# =============================================================================

class TestServiceEndpoints:

    @pytest.mark.asyncio
    async def test_health(self, client: AsyncClient):
        response = await client.get("/v1/health")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["service"] == "elena-gateway"
        assert "version" in data

    @pytest.mark.asyncio
    async def test_request_id_is_echoed(self, client: AsyncClient):
        response = await client.post(
            "/v1/affordability",
            json={},
            headers={"X-Request-ID": "req-123"},
        )

        assert response.headers["X-Request-ID"] == "req-123"

    @pytest.mark.asyncio
    async def test_request_id_is_generated(self, client: AsyncClient):
        response = await client.post("/v1/affordability", json={})

        assert response.headers.get("X-Request-ID")

    @pytest.mark.asyncio
    async def test_metrics_track_verdicts(self, client: AsyncClient, reference_request: dict):
        await client.post("/v1/affordability", json=reference_request)

        response = await client.get("/metrics")

        assert response.status_code == 200
        assert 'elena_affordability_verdict_total{status="NO-GO"}' in response.text
        assert 'elena_next_action_total{type="lower_price"}' in response.text
        assert "elena_affordability_latency_seconds" in response.text

    @pytest.mark.asyncio
    async def test_root_redirects_to_docs(self, client: AsyncClient):
        response = await client.get("/", follow_redirects=False)

        assert response.status_code in (302, 307)
        assert response.headers["location"] == "/docs"
