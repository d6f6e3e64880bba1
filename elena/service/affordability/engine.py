"""
Affordability Engine for Elena.

This module orchestrates one complete evaluation:
1. Estimate the all-in mortgage cost (when price, downpayment and credit
   score are all known)
2. Compute quick rails from income alone
3. Classify the verdict
4. List missing inputs
5. Pick the next action

This is the main entry point for the affordability module. It is pure:
the same scenario and settings always produce the same result.
"""

from typing import List

from .coercion import round_half_up
from .models import AffordabilityResult, MortgageEstimate, Scenario
from .mortgage import apr_for_score, estimate_all_in
from .next_action import pick_next_action
from .quick_rails import quick_affordability
from .settings import AffordabilitySettings, affordability_settings
from .verdict import compute_verdict, list_missing_inputs


def has_mortgage_inputs(scenario: Scenario) -> bool:
    """True when price, downpayment and credit score are all present."""
    return (
        scenario.price is not None
        and scenario.downpayment is not None
        and scenario.credit_score is not None
    )


def evaluate(
    scenario: Scenario,
    settings: AffordabilitySettings = affordability_settings,
) -> AffordabilityResult:
    """
    Evaluate affordability for a resolved scenario.

    Business gaps never raise. A failed estimate is carried as an
    EstimateFailure, and the verdict falls back to INSUFFICIENT.

    Args:
        scenario: Resolved scenario
        settings: Affordability settings (uses defaults if not provided)

    Returns:
        AffordabilityResult with estimate, quick rails, verdict,
        missing inputs and next action
    """
    estimate = estimate_all_in(scenario, settings) if has_mortgage_inputs(scenario) else None
    housing_all_in = estimate.all_in_monthly if isinstance(estimate, MortgageEstimate) else None

    apr = apr_for_score(scenario.credit_score, settings)
    quick = quick_affordability(scenario.income, apr, scenario.term_years, settings)

    verdict = compute_verdict(
        income=scenario.income,
        expenses=scenario.expenses,
        housing_all_in=housing_all_in,
        settings=settings,
    )

    missing_inputs = list_missing_inputs(
        income=scenario.income,
        expenses=scenario.expenses,
        price=scenario.price,
        downpayment=scenario.downpayment,
        credit_score=scenario.credit_score,
        housing_all_in=housing_all_in,
    )

    next_action = pick_next_action(
        verdict=verdict,
        missing_inputs=missing_inputs,
        price=scenario.price,
        housing_all_in=housing_all_in,
        settings=settings,
    )

    return AffordabilityResult(
        scenario=scenario,
        estimate=estimate,
        apr_assumed=apr,
        quick=quick,
        verdict=verdict,
        missing_inputs=missing_inputs,
        next_action=next_action,
    )


def format_money(amount) -> str:
    """Format a whole-unit amount as US dollars, e.g. $3,202."""
    if amount is None:
        return "$0"
    return f"${amount:,.0f}"


def explain_result(
    result: AffordabilityResult,
    settings: AffordabilitySettings = affordability_settings,
) -> str:
    """
    Generate a human-readable summary of an evaluation.

    This can be used for:
    - Chat replies (bottom line up front)
    - Logging and debugging
    - Support team reference

    Args:
        result: The evaluation to explain
        settings: Affordability settings (uses defaults if not provided)

    Returns:
        Multi-line summary string
    """
    verdict = result.verdict
    lines: List[str] = [
        f"BLUF: **{verdict.status.value}** (Grade: **{verdict.grade.value}**)",
    ]

    if verdict.housing_cap is not None:
        cap_pct = round_half_up(settings.housing_cap_pct * 100)
        lines.append(f"• {cap_pct}% housing cap: {format_money(verdict.housing_cap)}/mo")
    if result.housing_all_in is not None:
        lines.append(f"• Est. all-in housing: {format_money(result.housing_all_in)}/mo")
    if verdict.residual is not None:
        lines.append(f"• Residual after expenses + housing: {format_money(verdict.residual)}/mo")

    quick = result.quick
    if quick is not None and quick.price_0_down:
        lines.append("")
        lines.append("Quick rails (rule-of-thumb):")
        lines.append(f"• Max price @ 0% down: {format_money(quick.price_0_down)}")
        if quick.price_5_down:
            lines.append(f"• Max price @ 5% down: {format_money(quick.price_5_down)}")

    lines.append("")
    lines.append(f"Next move: {result.next_action.why}")

    if result.missing_inputs:
        lines.append("")
        lines.append(f"Missing inputs to tighten this: {', '.join(result.missing_inputs)}")

    return "\n".join(lines)
