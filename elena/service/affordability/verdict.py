"""
Verdict Classifier for the Elena affordability engine.

This module combines income, expenses and the estimated all-in housing
cost into a four-state verdict with a letter grade. Rules are evaluated in
strict order: missing income, missing housing estimate, negative residual,
housing over the cap, thin buffer, then GREEN with a graded refinement.
"""

import math
from typing import List, Optional

from .coercion import round_half_up
from .models import Grade, Verdict, VerdictStatus
from .settings import AffordabilitySettings, affordability_settings

NOTE_MISSING_INCOME = "Missing income; cannot compute affordability rails."
NOTE_MISSING_HOUSING = "Missing housing estimate; using cap + quick rails only."
NOTE_NEGATIVE_RESIDUAL = "Residual income is negative after expenses + housing."
NOTE_OVER_CAP = "Housing cost exceeds the {pct}% housing cap."
NOTE_THIN_BUFFER = "Buffer is thin after expenses + housing."
NOTE_UNCOMPUTABLE = "Inputs are too large to compute affordability rails."


def compute_verdict(
    income: Optional[float],
    expenses: Optional[float],
    housing_all_in: Optional[float],
    settings: AffordabilitySettings = affordability_settings,
) -> Verdict:
    """
    Classify affordability.

    Missing expenses count as zero. A housing estimate that is missing or
    not positive counts as missing.

    Args:
        income: Gross monthly income
        expenses: Monthly non-housing expenses
        housing_all_in: Estimated all-in monthly housing cost
        settings: Affordability settings (uses defaults if not provided)

    Returns:
        Verdict with status, grade, ratios, residual and notes
    """
    if income is None or income <= 0:
        return Verdict(
            status=VerdictStatus.INSUFFICIENT,
            grade=Grade.NOT_APPLICABLE,
            notes=(NOTE_MISSING_INCOME,),
        )

    spent = expenses if expenses is not None else 0.0
    housing_cap = income * settings.housing_cap_pct
    expense_ratio = spent / income
    if not _all_finite(housing_cap, expense_ratio):
        return _uncomputable_verdict()

    if housing_all_in is None or housing_all_in <= 0:
        return Verdict(
            status=VerdictStatus.INSUFFICIENT,
            grade=Grade.NOT_APPLICABLE,
            housing_cap=round_half_up(housing_cap),
            expense_ratio=expense_ratio,
            notes=(NOTE_MISSING_HOUSING,),
        )

    housing_ratio = housing_all_in / income
    residual = income - spent - housing_all_in
    cushion_low = income * settings.cushion_low_pct
    cushion_good = income * settings.cushion_good_pct
    if not _all_finite(housing_ratio, residual):
        return _uncomputable_verdict()

    if residual < 0:
        status, grade = VerdictStatus.NO_GO, Grade.D
        notes = (NOTE_NEGATIVE_RESIDUAL,)
    elif housing_all_in > housing_cap:
        status, grade = VerdictStatus.NO_GO, Grade.D
        notes = (NOTE_OVER_CAP.format(pct=round_half_up(settings.housing_cap_pct * 100)),)
    elif residual < cushion_low:
        status, grade = VerdictStatus.CAUTION, Grade.C_PLUS
        notes = (NOTE_THIN_BUFFER,)
    else:
        status = VerdictStatus.GREEN
        grade = grade_green(housing_ratio, residual, cushion_low, cushion_good, settings)
        notes = ()

    return Verdict(
        status=status,
        grade=grade,
        housing_cap=round_half_up(housing_cap),
        housing_ratio=housing_ratio,
        expense_ratio=expense_ratio,
        residual=round_half_up(residual),
        notes=notes,
    )


def _all_finite(*values: float) -> bool:
    return all(math.isfinite(value) for value in values)


def _uncomputable_verdict() -> Verdict:
    return Verdict(
        status=VerdictStatus.INSUFFICIENT,
        grade=Grade.NOT_APPLICABLE,
        notes=(NOTE_UNCOMPUTABLE,),
    )


def grade_green(
    housing_ratio: float,
    residual: float,
    cushion_low: float,
    cushion_good: float,
    settings: AffordabilitySettings = affordability_settings,
) -> Grade:
    """Refine a GREEN verdict into A / A- / B+ / B."""
    if housing_ratio <= settings.grade_a_max_ratio and residual >= cushion_good:
        return Grade.A
    if housing_ratio <= settings.grade_a_minus_max_ratio and residual >= cushion_low:
        return Grade.A_MINUS
    if housing_ratio <= settings.grade_b_plus_max_ratio and residual >= cushion_low:
        return Grade.B_PLUS
    return Grade.B


def list_missing_inputs(
    income: Optional[float],
    expenses: Optional[float],
    price: Optional[float],
    downpayment: Optional[float],
    credit_score: Optional[int],
    housing_all_in: Optional[float],
) -> List[str]:
    """
    Name the inputs still needed for a tighter verdict.

    Price, downpayment and credit score are only asked for while there is
    no positive housing estimate.
    Income that isn't positive counts as missing.
    """
    missing = []
    if income is None or income <= 0:
        missing.append("income")
    if expenses is None:
        missing.append("expenses")

    if housing_all_in is None or housing_all_in <= 0:
        if price is None:
            missing.append("price")
        if downpayment is None:
            missing.append("downpayment")
        if credit_score is None:
            missing.append("creditScore")

    return missing
