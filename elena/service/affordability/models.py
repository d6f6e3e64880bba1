"""
Data models for the affordability engine.

These models represent the data structures flowing through one evaluation,
from the resolved scenario to the final verdict and recommended next action.
Every instance is built fresh per request and never mutated afterwards.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple, Union


class Source(str, Enum):
    """Where a resolved scenario field came from."""
    OVERRIDES = "overrides"
    SNAPSHOT = "snapshot"
    SCENARIO = "scenario"
    PROFILE = "profile"
    QUESTION_HYPOTHETICAL = "question_hypothetical"
    DEFAULT = "default"
    MISSING = "missing"


class VerdictStatus(str, Enum):
    """Four-state affordability classification."""
    GREEN = "GREEN"
    CAUTION = "CAUTION"
    NO_GO = "NO-GO"
    INSUFFICIENT = "INSUFFICIENT"


class Grade(str, Enum):
    """Letter grade attached to a verdict."""
    A = "A"
    A_MINUS = "A-"
    B_PLUS = "B+"
    B = "B"
    C_PLUS = "C+"
    D = "D"
    NOT_APPLICABLE = "N/A"


class NextActionType(str, Enum):
    """The single recommended next step."""
    COLLECT_MISSING_INPUTS = "collect_missing_inputs"
    LOWER_PRICE = "lower_price"
    ADJUST_SCENARIO = "adjust_scenario"
    INCREASE_BUFFER = "increase_buffer"
    LOCK_IN_PLAN = "lock_in_plan"


@dataclass(frozen=True)
class Scenario:
    """
    Canonical financial inputs for one affordability evaluation.

    Attributes:
        price: Home price
        expenses: Monthly non-housing expenses
        downpayment: Cash down payment
        credit_score: Integer credit score, clamped to the allowed range
        term_years: Loan term in years, clamped to the allowed range
        loan_type: Loan program tag (e.g. "conv", "fha", "va")
        income: Gross monthly income
        tax_rate: Annual property tax rate as a fraction
        insurance_annual: Annual insurance premium
        hoa_monthly: Monthly HOA dues
        question: Free-text question the scenario was built for, if any
        sources: Field name -> Source value, for every field above
        snapshot_keys: Keys of the raw upstream snapshot, if one was sent
    """
    price: Optional[float] = None
    expenses: Optional[float] = None
    downpayment: Optional[float] = None
    credit_score: Optional[int] = None
    term_years: int = 30
    loan_type: str = "conv"
    income: Optional[float] = None
    tax_rate: Optional[float] = None
    insurance_annual: Optional[float] = None
    hoa_monthly: Optional[float] = None
    question: Optional[str] = None
    sources: Dict[str, str] = field(default_factory=dict)
    snapshot_keys: Tuple[str, ...] = ()

    @property
    def has_snapshot(self) -> bool:
        return bool(self.snapshot_keys)

    def source_of(self, name: str) -> str:
        return self.sources.get(name, Source.MISSING.value)


@dataclass(frozen=True)
class MortgageBreakdown:
    """Monthly all-in components, each rounded to whole currency units."""
    principal_interest: int
    taxes: int
    insurance: int
    hoa: int

    @property
    def total(self) -> int:
        return self.principal_interest + self.taxes + self.insurance + self.hoa

    def to_dict(self) -> Dict[str, int]:
        return {
            "principal_interest": self.principal_interest,
            "taxes": self.taxes,
            "insurance": self.insurance,
            "hoa": self.hoa,
        }


@dataclass(frozen=True)
class MortgageAssumptions:
    """The tax/insurance/HOA values actually applied to an estimate."""
    tax_rate: float
    insurance_annual: float
    hoa_monthly: float

    def to_dict(self) -> Dict[str, float]:
        return {
            "taxRate": self.tax_rate,
            "insuranceAnnual": self.insurance_annual,
            "hoaMonthly": self.hoa_monthly,
        }


@dataclass(frozen=True)
class MortgageEstimate:
    """
    A successful all-in monthly housing estimate.

    Attributes:
        loan_amount: price - downpayment, never negative
        apr_assumed: APR from the credit-score tier table
        term_years: Amortization term used
        breakdown: Rounded monthly components
        all_in_monthly: Exactly the sum of the breakdown components
        assumptions_used: Tax/insurance/HOA values applied
    """
    loan_amount: int
    apr_assumed: float
    term_years: int
    breakdown: MortgageBreakdown
    all_in_monthly: int
    assumptions_used: MortgageAssumptions
    ok: bool = True


@dataclass(frozen=True)
class EstimateFailure:
    """An estimate that could not be produced, with the reason why."""
    reason: str
    ok: bool = False


EstimateOutcome = Union[MortgageEstimate, EstimateFailure]


@dataclass(frozen=True)
class QuickRails:
    """
    Income-only rule-of-thumb affordability bounds.

    Money figures are rounded to whole currency units.

    Attributes:
        housing_cap_monthly: income * housing cap fraction
        pi_target_monthly: housing cap / P&I buffer
        price_0_down: Max price with no down payment
        price_5_down: Max price with 5% down
        housing_cap_pct: Cap fraction applied
        buffer: P&I buffer applied
        apr_assumed: APR used to invert the payment formula
        term_years: Term used to invert the payment formula
    """
    housing_cap_monthly: int
    pi_target_monthly: int
    price_0_down: Optional[int]
    price_5_down: Optional[int]
    housing_cap_pct: float
    buffer: float
    apr_assumed: float
    term_years: int


@dataclass(frozen=True)
class Verdict:
    """
    The affordability classification result.

    Attributes:
        status: GREEN / CAUTION / NO-GO / INSUFFICIENT
        grade: Letter grade (N/A when insufficient)
        housing_cap: Rounded income * cap fraction, None without income
        housing_ratio: housing all-in / income
        expense_ratio: expenses / income
        residual: Rounded income - expenses - housing all-in
        notes: Ordered diagnostic notes
    """
    status: VerdictStatus
    grade: Grade
    housing_cap: Optional[int] = None
    housing_ratio: Optional[float] = None
    expense_ratio: Optional[float] = None
    residual: Optional[int] = None
    notes: Tuple[str, ...] = ()


@dataclass(frozen=True)
class NextAction:
    """Exactly one recommended action for the user."""
    type: NextActionType
    why: str
    target: Optional[Dict[str, Any]] = None


@dataclass(frozen=True)
class AffordabilityResult:
    """
    Everything one engine evaluation produces.

    Attributes:
        scenario: The resolved inputs
        estimate: Mortgage estimate or failure, None if inputs were missing
        apr_assumed: APR for the scenario's credit score (default tier if none)
        quick: Quick rails, None without income
        verdict: The classification
        missing_inputs: Names of inputs needed for a tighter verdict
        next_action: The recommended next step
    """
    scenario: Scenario
    estimate: Optional[EstimateOutcome]
    apr_assumed: float
    quick: Optional[QuickRails]
    verdict: Verdict
    missing_inputs: List[str]
    next_action: NextAction

    @property
    def housing_all_in(self) -> Optional[int]:
        if isinstance(self.estimate, MortgageEstimate):
            return self.estimate.all_in_monthly
        return None
