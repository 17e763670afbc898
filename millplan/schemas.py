from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, create_model

from .calculators.breakeven import BreakevenBasis
from .config import settings
from .parameters import ParameterSet, SensitivityVariable, default_parameters

# Every ParameterSet field, all optional. Missing fields fall back to the
# defaults (stateless endpoints) or to the scenario's current value (PATCH).
# NaN and Infinity are rejected with 422.
ParameterOverrides = create_model(
    "ParameterOverrides",
    __config__=ConfigDict(extra="forbid", allow_inf_nan=False),
    **{name: (Optional[float], None) for name in ParameterSet.model_fields},
)


def merge_overrides(overrides: BaseModel, base: Optional[ParameterSet] = None) -> ParameterSet:
    base = base or default_parameters()
    return base.with_changes(**overrides.model_dump(exclude_none=True))


class SensitivityRequest(BaseModel):
    params: ParameterOverrides = Field(default_factory=ParameterOverrides)
    variable: SensitivityVariable = SensitivityVariable.PRIMARY_PRICE
    low: float = Field(default=settings.SENSITIVITY_DEFAULT_LOW_PCT, allow_inf_nan=False)
    high: float = Field(default=settings.SENSITIVITY_DEFAULT_HIGH_PCT, allow_inf_nan=False)


class BreakevenRequest(BaseModel):
    params: ParameterOverrides = Field(default_factory=ParameterOverrides)
    basis: BreakevenBasis = BreakevenBasis.EBITDA
    chart_points: int = Field(default=settings.BREAKEVEN_CHART_POINTS, ge=0, le=1000)


class ScenarioCreate(BaseModel):
    params: ParameterOverrides = Field(default_factory=ParameterOverrides)
