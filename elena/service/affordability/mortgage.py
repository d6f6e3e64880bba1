"""
Mortgage Estimator for the Elena affordability engine.

This module turns (price, downpayment, credit score, term) into a monthly
all-in housing cost: principal and interest from the standard fixed-rate
amortization formula, plus property taxes, insurance and HOA dues.
"""

import math
from typing import Optional

from .coercion import round_half_up
from .models import (
    EstimateFailure,
    EstimateOutcome,
    MortgageAssumptions,
    MortgageBreakdown,
    MortgageEstimate,
    Scenario,
)
from .settings import AffordabilitySettings, affordability_settings


def apr_for_score(
    credit_score: Optional[int],
    settings: AffordabilitySettings = affordability_settings,
) -> float:
    """
    Map a credit score to an assumed APR using the tier table.

    Args:
        credit_score: Credit score, or None if unknown
        settings: Affordability settings (uses defaults if not provided)

    Returns:
        APR as a fraction (0.0675 = 6.75%)
    """
    if credit_score is None:
        return settings.default_apr

    tiers = settings.apr_tiers
    for min_score, apr in tiers:
        if credit_score >= min_score:
            return apr

    # Below every tier: price at the lowest tier
    return tiers[-1][1]


def monthly_principal_interest(
    principal: float,
    apr: float,
    term_years: int,
) -> Optional[float]:
    """
    Fully amortizing monthly payment for a fixed-rate loan.

    PMT = L * r(1+r)^n / ((1+r)^n - 1), with r = apr/12 and n = years*12.
    A zero rate degrades to L / n.

    Returns:
        The payment, or None when there is nothing to borrow or the inputs
        produce no finite payment
    """
    if not math.isfinite(principal) or principal <= 0:
        return None
    n = round_half_up(term_years * 12)
    if n <= 0:
        return None

    r = apr / 12
    if r <= 0:
        return principal / n

    try:
        compound = (1 + r) ** n
        payment = principal * (r * compound) / (compound - 1)
    except (OverflowError, ZeroDivisionError):
        return None

    return payment if math.isfinite(payment) else None


def principal_from_payment(
    payment: float,
    apr: float,
    term_years: int,
) -> Optional[float]:
    """
    Reverse amortization: the loan amount a monthly payment can carry.

    principal = PI * ((1+r)^n - 1) / (r(1+r)^n), or PI * n at a zero rate.

    Returns:
        The principal, or None for a non-positive payment or a result that
        isn't finite
    """
    if not math.isfinite(payment) or payment <= 0:
        return None
    n = round_half_up(term_years * 12)
    if n <= 0:
        return None

    r = apr / 12
    if r <= 0:
        return payment * n

    try:
        compound = (1 + r) ** n
        principal = payment * (compound - 1) / (r * compound)
    except (OverflowError, ZeroDivisionError):
        return None

    return principal if math.isfinite(principal) else None


def estimate_all_in(
    scenario: Scenario,
    settings: AffordabilitySettings = affordability_settings,
) -> EstimateOutcome:
    """
    Estimate the all-in monthly housing cost for a scenario.

    Missing tax rate, insurance and HOA fall back to the configured
    placeholders, which are reported back in ``assumptions_used``. Each
    monthly component is rounded before summing so the breakdown always
    adds up to the reported total.

    Args:
        scenario: Resolved scenario
        settings: Affordability settings (uses defaults if not provided)

    Returns:
        MortgageEstimate, or EstimateFailure with the reason. Never raises.
    """
    price = scenario.price
    downpayment = scenario.downpayment
    credit_score = scenario.credit_score

    if price is None or price <= 0:
        return EstimateFailure(reason="Missing or invalid price.")
    if downpayment is None or downpayment < 0:
        return EstimateFailure(reason="Missing or invalid downpayment.")
    if (
        credit_score is None
        or credit_score < settings.min_credit_score
        or credit_score > settings.max_credit_score
    ):
        return EstimateFailure(reason="Missing or invalid creditScore.")

    loan = max(0.0, price - downpayment)
    apr = apr_for_score(credit_score, settings)
    principal_interest = monthly_principal_interest(loan, apr, scenario.term_years)
    if principal_interest is None:
        return EstimateFailure(reason="Unable to compute P&I.")

    assumptions = MortgageAssumptions(
        tax_rate=(
            scenario.tax_rate if scenario.tax_rate is not None else settings.default_tax_rate
        ),
        insurance_annual=(
            scenario.insurance_annual
            if scenario.insurance_annual is not None
            else settings.default_insurance_annual
        ),
        hoa_monthly=(
            scenario.hoa_monthly
            if scenario.hoa_monthly is not None
            else settings.default_hoa_monthly
        ),
    )

    taxes = price * assumptions.tax_rate / 12
    insurance = assumptions.insurance_annual / 12
    hoa = assumptions.hoa_monthly

    # Huge overrides can overflow to inf; report instead of rounding
    if not math.isfinite(principal_interest + taxes + insurance + hoa):
        return EstimateFailure(reason="Unable to compute all-in housing cost.")

    breakdown = MortgageBreakdown(
        principal_interest=round_half_up(principal_interest),
        taxes=round_half_up(taxes),
        insurance=round_half_up(insurance),
        hoa=round_half_up(hoa),
    )

    all_in = breakdown.total
    if all_in <= 0:
        return EstimateFailure(reason="Unable to compute all-in housing cost.")

    return MortgageEstimate(
        loan_amount=round_half_up(loan),
        apr_assumed=apr,
        term_years=scenario.term_years,
        breakdown=breakdown,
        all_in_monthly=all_in,
        assumptions_used=assumptions,
    )
