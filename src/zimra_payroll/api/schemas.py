"""Pydantic schemas for API request/response models."""

from datetime import date
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field

from zimra_payroll.calculators.types import PayrollComponents, TaxBreakdown, TaxResult, TaxSummary


# ============================================================================
# Calculation schemas
# ============================================================================


class PayrollComponentsIn(BaseModel):
    """Pay components for one employee. Missing amounts count as zero."""

    basic_salary: Decimal = Field(default=Decimal("0"), ge=0)
    transport_allowance: Decimal = Field(default=Decimal("0"), ge=0)
    housing_allowance: Decimal = Field(default=Decimal("0"), ge=0)
    other_allowances: Decimal = Field(default=Decimal("0"), ge=0)
    bonuses: Decimal = Field(default=Decimal("0"), ge=0)
    overtime: Decimal = Field(default=Decimal("0"), ge=0)

    def to_components(self) -> PayrollComponents:
        return PayrollComponents.from_amounts(**self.model_dump())


class CalculateRequest(BaseModel):
    """Schema for a payroll calculation request."""

    components: PayrollComponentsIn
    calculation_date: date | None = None
    table_version: str | None = None


class TaxBreakdownSchema(BaseModel):
    """Display strings for a payslip."""

    model_config = ConfigDict(from_attributes=True)

    basic_salary: Decimal
    allowances: Decimal
    gross_total: Decimal
    paye_breakdown: str
    aids_levy_breakdown: str
    nssa_breakdown: str


class TaxResultSchema(BaseModel):
    """A gross-to-net result, as returned or as received for validation."""

    model_config = ConfigDict(from_attributes=True)

    gross_salary: Decimal
    paye: Decimal
    aids_levy: Decimal
    nssa: Decimal
    total_deductions: Decimal
    net_salary: Decimal
    breakdown: TaxBreakdownSchema | None = None

    def to_result(self) -> TaxResult:
        breakdown = None
        if self.breakdown is not None:
            breakdown = TaxBreakdown(**self.breakdown.model_dump())
        return TaxResult(
            gross_salary=self.gross_salary,
            paye=self.paye,
            aids_levy=self.aids_levy,
            nssa=self.nssa,
            total_deductions=self.total_deductions,
            net_salary=self.net_salary,
            breakdown=breakdown,
        )


class CalculateResponse(BaseModel):
    """Schema for a calculation response."""

    table_version: str
    result: TaxResultSchema


# ============================================================================
# Validation schemas
# ============================================================================


class ValidateRequest(BaseModel):
    """Schema for checking a stored result."""

    result: TaxResultSchema
    table_version: str | None = None


class ValidateResponse(BaseModel):
    """Schema for a consistency check outcome."""

    table_version: str
    is_valid: bool
    errors: list[str]


# ============================================================================
# Summary schemas
# ============================================================================


class SummaryRequest(BaseModel):
    """Schema for summarizing a period's results."""

    results: list[TaxResultSchema]


class SummaryResponse(BaseModel):
    """Schema for period totals."""

    model_config = ConfigDict(from_attributes=True)

    total_gross_salary: Decimal
    total_paye: Decimal
    total_aids_levy: Decimal
    total_nssa: Decimal
    total_deductions: Decimal
    total_net_salary: Decimal
    employee_count: int

    @classmethod
    def from_summary(cls, summary: TaxSummary) -> "SummaryResponse":
        return cls.model_validate(summary)


# ============================================================================
# Tax table schemas
# ============================================================================


class TaxBracketSchema(BaseModel):
    """One bracket of a tax table."""

    min: Decimal
    max: Decimal | None
    rate: Decimal
    deduct: Decimal


class TaxTableSchema(BaseModel):
    """Schema for a tax table payload."""

    version: str
    effective_from: date
    currency: str
    aids_levy_rate: Decimal
    nssa_rate: Decimal
    brackets: list[TaxBracketSchema]


class ErrorResponse(BaseModel):
    """Schema for error responses."""

    detail: str
    code: str | None = None
