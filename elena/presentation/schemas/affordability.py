"""Affordability-related Pydantic schemas."""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class AffordabilityRequestSchema(BaseModel):
    """Schema for POST /v1/affordability request body.

    Every field is optional; gaps in the financial inputs are reported in
    the response instead of rejected.
    """

    model_config = ConfigDict(
        extra="allow",
        json_schema_extra={
            "examples": [
                {
                    "email": "buyer@example.com",
                    "question": "Can I afford this house?",
                    "scenario": {
                        "price": 400000,
                        "downpayment": 40000,
                        "creditScore": 760,
                        "termYears": 30,
                    },
                    "context": {
                        "fad": {"income": 8000, "monthlyExpenses": 1500},
                    },
                }
            ]
        },
    )

    email: Optional[str] = Field(
        None,
        description="User email used for the profile lookup",
        examples=["buyer@example.com"],
    )
    question: Optional[str] = Field(
        None,
        description="Free-text question; may carry a hypothetical credit score",
        examples=["What if my credit score went up to 740?"],
    )
    overrides: Optional[Dict[str, Any]] = Field(
        None,
        description="Explicit values that win over every other source",
    )
    scenario: Optional[Dict[str, Any]] = Field(
        None,
        description="Baseline scenario values",
    )
    context: Optional[Dict[str, Any]] = Field(
        None,
        description="Caller context (fad snapshot, email, inline profile)",
    )
    identity: Optional[Dict[str, Any]] = Field(
        None,
        description="Caller identity (email)",
    )
    fad: Optional[Dict[str, Any]] = Field(None, description="Upstream financial snapshot")
    fad_snapshot: Optional[Dict[str, Any]] = Field(None, description="Upstream financial snapshot")
    snapshot: Optional[Dict[str, Any]] = Field(None, description="Upstream financial snapshot")
    debug: bool = Field(
        False,
        description="Include the debug block in the response",
    )


class QuickAssumptionsSchema(BaseModel):
    housing_cap_pct: float
    buffer: float
    apr_assumed: float
    term_years: int


class QuickMaxPriceSchema(BaseModel):
    price_0_down: Optional[int] = None
    price_5_down: Optional[int] = None


class QuickRailsSchema(BaseModel):
    """Income-only rule-of-thumb bounds."""

    housing_cap_monthly: int = Field(..., description="Income times the housing cap", examples=[2400])
    pi_target_monthly: int = Field(..., description="Housing cap divided by the P&I buffer", examples=[1875])
    assumptions: QuickAssumptionsSchema
    quick_max_price: QuickMaxPriceSchema


class MortgageBreakdownSchema(BaseModel):
    principal_interest: int
    taxes: int
    insurance: int
    hoa: int


class MortgageAssumptionsSchema(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    tax_rate: float = Field(..., alias="taxRate")
    insurance_annual: float = Field(..., alias="insuranceAnnual")
    hoa_monthly: float = Field(..., alias="hoaMonthly")


class MortgageSchema(BaseModel):
    """All-in monthly housing estimate; numbers are null when unavailable."""

    source: str = Field(
        ...,
        description="deterministic_estimate, deterministic_estimate:failed or insufficient_inputs_for_mortgage",
        examples=["deterministic_estimate"],
    )
    all_in_monthly: Optional[int] = Field(None, examples=[3202])
    breakdown: Optional[MortgageBreakdownSchema] = None
    assumptions_used: Optional[MortgageAssumptionsSchema] = None
    apr_assumed: Optional[float] = Field(None, examples=[0.0675])
    term_years: Optional[int] = Field(None, examples=[30])
    loan_amount: Optional[int] = Field(None, examples=[360000])
    error: Optional[str] = None


class RatiosSchema(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    housing_ratio: Optional[float] = Field(None, alias="housingRatio")
    expense_ratio: Optional[float] = Field(None, alias="expenseRatio")


class VerdictSchema(BaseModel):
    """Affordability classification."""

    model_config = ConfigDict(populate_by_name=True)

    status: str = Field(..., description="GREEN, CAUTION, NO-GO or INSUFFICIENT", examples=["CAUTION"])
    grade: str = Field(..., description="Letter grade, N/A when insufficient", examples=["C+"])
    housing_cap: Optional[int] = Field(None, alias="housingCap", examples=[1800])
    ratios: RatiosSchema
    residual: Optional[int] = Field(None, examples=[1298])
    notes: List[str] = Field(default_factory=list)


class NextActionSchema(BaseModel):
    type: str = Field(..., examples=["lower_price"])
    target: Optional[Dict[str, Any]] = None
    why: str


class InputsAssumptionsSchema(BaseModel):
    housing_cap_pct: float
    buffer_allin_to_pi: float
    apr_assumed: Optional[float] = None


class InputsUsedSchema(BaseModel):
    """Resolved inputs and where each came from."""

    model_config = ConfigDict(populate_by_name=True)

    income: Optional[int] = None
    expenses: Optional[int] = None
    price: Optional[int] = None
    downpayment: Optional[int] = None
    credit_score: Optional[int] = Field(None, alias="creditScore")
    term_years: int = Field(..., alias="termYears")
    loan_type: str = Field(..., alias="loanType")
    assumptions: InputsAssumptionsSchema
    sources: Dict[str, str]


class AffordabilityResponseSchema(BaseModel):
    """Schema for POST /v1/affordability response body."""

    ok: bool = Field(..., description="Always true when the request was processed")
    scenario_id: str = Field(..., examples=["elena_3f2a9c0d1b7e4a55"])
    ts: int = Field(..., description="Unix seconds")
    email: Optional[str] = None
    profile_used: Optional[Dict[str, Any]] = None
    intent: str = Field(..., examples=["affordability_check"])
    question: Optional[str] = None
    missing_inputs: List[str] = Field(default_factory=list)
    inputs_used: InputsUsedSchema
    quick: Optional[QuickRailsSchema] = None
    mortgage: MortgageSchema
    verdict: VerdictSchema
    next_action: NextActionSchema
    summary: str
    context: Dict[str, bool]
    debug: Optional[Dict[str, Any]] = Field(
        None,
        description="Diagnostics, present only when requested",
    )
