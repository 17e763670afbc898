"""
Result contracts returned by the engine and its collaborators.

ProjectionResult embeds the ParameterSet it was computed from plus every
derived field. ProjectionFailure carries the untouched ParameterSet and an
error; it has no derived fields at all, so nothing undefined can be shown
as a fact.
"""

from enum import Enum
from typing import List, Optional, Union

from pydantic import BaseModel, ConfigDict

from .parameters import ParameterSet


class ErrorKind(str, Enum):
    INVALID_INPUT = "InvalidInput"
    CALCULATION_ERROR = "CalculationError"


class ProjectionResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    params: ParameterSet

    # Production
    total_capex: float
    daily_raw_material: float
    annual_raw_material: float
    annual_primary_product: float
    daily_byproduct_generated: float
    daily_byproduct_target: float
    daily_byproduct_sold: float
    byproduct_limit_hit: bool
    annual_byproduct_sold: float

    # Revenue
    annual_primary_revenue: float
    annual_byproduct_revenue: float
    annual_revenue: float

    # Costs
    annual_cogs: float
    gross_profit: float
    var_cost_per_unit: float
    annual_var_costs: float
    annual_fixed_opex: float
    annual_depreciation: float

    # Operating profitability
    ebit: float
    ebitda: float

    # Working capital
    daily_cogs: float
    daily_primary_production: float
    daily_production_cost: float
    daily_revenue: float
    rm_inventory: float
    fg_inventory: float
    receivables: float
    payables: float
    current_assets: float

    # Financial structure
    equity: float
    debt: float
    net_working_capital: float
    interest_on_debt: float
    interest_on_wc: float
    total_interest: float

    # Bottom line and capital
    ebt: float
    taxes: float
    net_profit: float
    capital_employed: float
    total_assets: float

    # Ratios (percent)
    roce: float
    roe: float
    gross_margin: float
    net_profit_margin: float
    ebitda_margin: float
    contribution_margin: float
    contribution_margin_pct: float

    @property
    def ok(self) -> bool:
        return True

    @property
    def error(self) -> None:
        return None

    def to_record(self) -> dict:
        """Flat record: every parameter, every derived field, no error."""
        record = self.params.model_dump()
        record.update(self.model_dump(exclude={"params"}))
        record["kind"] = None
        record["error"] = None
        return record


class ProjectionFailure(BaseModel):
    model_config = ConfigDict(frozen=True)

    params: ParameterSet
    kind: ErrorKind
    error: str

    @property
    def ok(self) -> bool:
        return False

    def to_record(self) -> dict:
        record = self.params.model_dump()
        record["kind"] = self.kind.value
        record["error"] = self.error
        return record


Projection = Union[ProjectionResult, ProjectionFailure]


def projection_from_record(record: dict) -> Projection:
    """Inverse of to_record() for either outcome."""
    data = dict(record)
    kind = data.pop("kind", None)
    error = data.pop("error", None)
    param_fields = set(ParameterSet.model_fields)
    params = ParameterSet(**{k: v for k, v in data.items() if k in param_fields})
    if error is not None:
        return ProjectionFailure(
            params=params,
            kind=ErrorKind(kind or ErrorKind.CALCULATION_ERROR),
            error=error,
        )
    derived = {k: v for k, v in data.items() if k not in param_fields}
    return ProjectionResult(params=params, **derived)


# --- Collaborator outputs ---

class SensitivityPoint(BaseModel):
    """One perturbation. Metrics are None when that evaluation failed."""

    model_config = ConfigDict(frozen=True)

    change: float
    value: float
    net_profit: Optional[float] = None
    ebitda: Optional[float] = None
    roce: Optional[float] = None
    revenue: Optional[float] = None
    error: Optional[str] = None


class BreakevenPoint(BaseModel):
    model_config = ConfigDict(frozen=True)

    volume: int
    revenue: int
    costs: int
    profit: int


class BreakevenResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    basis: str
    fixed_costs: float
    revenue_per_unit: float
    var_cost_per_unit: float
    contribution_per_unit: float
    breakeven_volume: float
    breakeven_revenue: float
    current_volume: float
    above_breakeven: bool
    chart: List[BreakevenPoint] = []
