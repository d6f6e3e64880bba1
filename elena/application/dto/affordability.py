"""Data transfer objects for affordability operations."""

from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from elena.service.affordability import (
    AffordabilityResult,
    AffordabilitySettings,
    EstimateFailure,
    MortgageEstimate,
    QuickRails,
    Scenario,
    Verdict,
    NextAction,
    round_half_up,
)

MORTGAGE_SOURCE_OK = "deterministic_estimate"
MORTGAGE_SOURCE_FAILED = "deterministic_estimate:failed"
MORTGAGE_SOURCE_MISSING = "insufficient_inputs_for_mortgage"


@dataclass(frozen=True)
class AffordabilityRequest:
    """Input data for an affordability check."""

    body: Dict[str, Any]
    debug: bool = False

    def validate(self) -> List[str]:
        errors = []

        if not isinstance(self.body, dict):
            errors.append("request body must be a JSON object")

        return errors

    @property
    def debug_enabled(self) -> bool:
        return self.debug or self.body.get("debug") is True


def _money(value: Optional[float]) -> Optional[int]:
    return round_half_up(value) if value is not None else None


def mortgage_source(result: AffordabilityResult) -> str:
    """Label how the mortgage block was produced."""
    if result.estimate is None:
        return MORTGAGE_SOURCE_MISSING
    if isinstance(result.estimate, MortgageEstimate):
        return MORTGAGE_SOURCE_OK
    return MORTGAGE_SOURCE_FAILED


def quick_to_dict(quick: Optional[QuickRails]) -> Optional[Dict[str, Any]]:
    if quick is None:
        return None
    return {
        "housing_cap_monthly": quick.housing_cap_monthly,
        "pi_target_monthly": quick.pi_target_monthly,
        "assumptions": {
            "housing_cap_pct": quick.housing_cap_pct,
            "buffer": quick.buffer,
            "apr_assumed": quick.apr_assumed,
            "term_years": quick.term_years,
        },
        "quick_max_price": {
            "price_0_down": quick.price_0_down,
            "price_5_down": quick.price_5_down,
        },
    }


def mortgage_to_dict(result: AffordabilityResult) -> Dict[str, Any]:
    """
    Render the mortgage block.

    The block is always present; on failure or missing inputs the numbers
    are null and ``error`` says why.
    """
    estimate = result.estimate
    source = mortgage_source(result)

    if isinstance(estimate, MortgageEstimate):
        return {
            "source": source,
            "all_in_monthly": estimate.all_in_monthly,
            "breakdown": estimate.breakdown.to_dict(),
            "assumptions_used": estimate.assumptions_used.to_dict(),
            "apr_assumed": estimate.apr_assumed,
            "term_years": estimate.term_years,
            "loan_amount": estimate.loan_amount,
            "error": None,
        }

    if isinstance(estimate, EstimateFailure):
        return {
            "source": source,
            "all_in_monthly": None,
            "breakdown": None,
            "assumptions_used": None,
            "apr_assumed": None,
            "term_years": result.scenario.term_years,
            "loan_amount": None,
            "error": estimate.reason,
        }

    return {
        "source": source,
        "all_in_monthly": None,
        "breakdown": None,
        "assumptions_used": None,
        "apr_assumed": result.apr_assumed if result.scenario.credit_score is not None else None,
        "term_years": result.scenario.term_years,
        "loan_amount": None,
        "error": "Mortgage estimate unavailable (missing inputs).",
    }


def verdict_to_dict(verdict: Verdict) -> Dict[str, Any]:
    return {
        "status": verdict.status.value,
        "grade": verdict.grade.value,
        "housingCap": verdict.housing_cap,
        "ratios": {
            "housingRatio": verdict.housing_ratio,
            "expenseRatio": verdict.expense_ratio,
        },
        "residual": verdict.residual,
        "notes": list(verdict.notes),
    }


def next_action_to_dict(action: NextAction) -> Dict[str, Any]:
    return {
        "type": action.type.value,
        "target": action.target,
        "why": action.why,
    }


def inputs_used_to_dict(
    result: AffordabilityResult,
    settings: AffordabilitySettings,
    email_source: str,
    profile_source: str,
) -> Dict[str, Any]:
    scenario: Scenario = result.scenario
    return {
        "income": _money(scenario.income),
        "expenses": _money(scenario.expenses),
        "price": _money(scenario.price),
        "downpayment": _money(scenario.downpayment),
        "creditScore": scenario.credit_score,
        "termYears": scenario.term_years,
        "loanType": scenario.loan_type,
        "assumptions": {
            "housing_cap_pct": settings.housing_cap_pct,
            "buffer_allin_to_pi": settings.pi_buffer,
            "apr_assumed": result.apr_assumed if scenario.credit_score is not None else None,
        },
        "sources": {
            "email": email_source,
            "profile": profile_source,
            "income": scenario.source_of("income"),
            "price": scenario.source_of("price"),
            "expenses": scenario.source_of("expenses"),
            "downpayment": scenario.source_of("downpayment"),
            "creditScore": scenario.source_of("creditScore"),
            "termYears": scenario.source_of("termYears"),
            "loanType": scenario.source_of("loanType"),
            "mortgage": mortgage_source(result),
            "quick": "deterministic_quick_rails" if result.quick else "missing_income",
        },
    }


@dataclass(frozen=True)
class AffordabilityResponse:
    """Response data for an affordability check."""

    ok: bool
    scenario_id: str
    ts: int
    email: Optional[str]
    profile_used: Optional[Dict[str, Any]]
    intent: str
    question: Optional[str]
    missing_inputs: List[str]
    inputs_used: Dict[str, Any]
    quick: Optional[Dict[str, Any]]
    mortgage: Dict[str, Any]
    verdict: Dict[str, Any]
    next_action: Dict[str, Any]
    summary: str
    context: Dict[str, Any]
    debug: Optional[Dict[str, Any]] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        payload = {
            "ok": self.ok,
            "scenario_id": self.scenario_id,
            "ts": self.ts,
            "email": self.email,
            "profile_used": self.profile_used,
            "intent": self.intent,
            "question": self.question,
            "missing_inputs": list(self.missing_inputs),
            "inputs_used": self.inputs_used,
            "quick": self.quick,
            "mortgage": self.mortgage,
            "verdict": self.verdict,
            "next_action": self.next_action,
            "summary": self.summary,
            "context": self.context,
        }
        if self.debug is not None:
            payload["debug"] = self.debug
        return payload
