"""
Affordability Engine for Elena
"""

from .models import (
    Source,
    Scenario,
    MortgageBreakdown,
    MortgageAssumptions,
    MortgageEstimate,
    EstimateFailure,
    QuickRails,
    Verdict,
    VerdictStatus,
    Grade,
    NextAction,
    NextActionType,
    AffordabilityResult,
)
from .settings import AffordabilitySettings, affordability_settings
from .coercion import finite_or_none, round_half_up, round_to_step
from .question import parse_hypothetical_credit_score
from .resolver import read_snapshot, resolve_scenario
from .mortgage import (
    apr_for_score,
    monthly_principal_interest,
    principal_from_payment,
    estimate_all_in,
)
from .quick_rails import quick_affordability
from .verdict import compute_verdict, list_missing_inputs
from .next_action import pick_next_action
from .engine import evaluate, explain_result

__all__ = [
    # Settings
    "AffordabilitySettings",
    "affordability_settings",
    # Models
    "Source",
    "Scenario",
    "MortgageBreakdown",
    "MortgageAssumptions",
    "MortgageEstimate",
    "EstimateFailure",
    "QuickRails",
    "Verdict",
    "VerdictStatus",
    "Grade",
    "NextAction",
    "NextActionType",
    "AffordabilityResult",
    # Coercion
    "finite_or_none",
    "round_half_up",
    "round_to_step",
    # Scenario Resolver
    "parse_hypothetical_credit_score",
    "read_snapshot",
    "resolve_scenario",
    # Mortgage Estimator
    "apr_for_score",
    "monthly_principal_interest",
    "principal_from_payment",
    "estimate_all_in",
    # Quick Rails
    "quick_affordability",
    # Verdict
    "compute_verdict",
    "list_missing_inputs",
    # Next Action
    "pick_next_action",
    # Engine
    "evaluate",
    "explain_result",
]
