"""
Parameter Set: the engine's only input.

One flat, immutable record of operational, pricing, capital, cost, finance
and working-capital assumptions. Percentages are stored 0-100 and divided
by 100 where they are used, never here.

Also holds the literal default table (used at startup and for "reset"),
the field metadata the parameter form renders, and the explicit list of
variables the sensitivity scan is allowed to perturb.
"""

from enum import Enum
from typing import Callable, Dict, Tuple

from pydantic import BaseModel, ConfigDict


class ParameterSet(BaseModel):
    """Every field is required and numeric. No derived values live here."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    # Operational
    hours_per_day: float
    days_per_month: float

    # Production
    processing_rate: float          # kg of paddy per hour
    primary_yield_pct: float        # poha out per paddy in, %
    byproduct_sale_pct: float       # target sale, % of paddy throughput

    # Pricing (per kg)
    raw_material_price: float
    primary_price: float
    byproduct_price: float

    # Capital
    land_cost: float
    civil_works_cost: float
    machinery_cost: float
    machinery_useful_life_years: float

    # Variable costs, per kg of paddy
    packaging_cost: float
    fuel_cost: float
    other_var_cost: float

    # Fixed costs, per month
    rent_per_month: float
    labor_per_month: float
    electricity_per_month: float
    security_insurance_per_month: float
    misc_per_month: float

    # Finance
    equity_contribution_pct: float
    interest_rate_pct: float
    tax_rate_pct: float

    # Working capital (days)
    rm_inventory_days: float
    fg_inventory_days: float
    debtor_days: float
    creditor_days: float

    def with_changes(self, **changes) -> "ParameterSet":
        """Return a validated copy with some fields replaced."""
        return ParameterSet(**{**self.model_dump(), **changes})


# Literal defaults: a 10 h/day, 24 day/month mill on 1 t/hr of paddy
DEFAULT_PARAMETERS: Dict[str, float] = {
    "hours_per_day": 10,
    "days_per_month": 24,

    "processing_rate": 1000,
    "primary_yield_pct": 65.0,
    "byproduct_sale_pct": 32.0,

    "raw_material_price": 22.0,
    "primary_price": 45.0,
    "byproduct_price": 7.0,

    "land_cost": 0,
    "civil_works_cost": 0,
    "machinery_cost": 7_000_000,
    "machinery_useful_life_years": 15,

    "packaging_cost": 0.5,
    "fuel_cost": 0.0,
    "other_var_cost": 0.0,
    "rent_per_month": 300_000,
    "labor_per_month": 400_000,
    "electricity_per_month": 150_000,
    "security_insurance_per_month": 300_000,
    "misc_per_month": 300_000,

    "equity_contribution_pct": 30.0,
    "interest_rate_pct": 9.0,
    "tax_rate_pct": 25.0,

    "rm_inventory_days": 72,
    "fg_inventory_days": 20,
    "debtor_days": 45,
    "creditor_days": 5,
}


def default_parameters() -> ParameterSet:
    """Fresh Parameter Set from the default table. Used for reset."""
    return ParameterSet(**DEFAULT_PARAMETERS)


# --- Form metadata ---
# Advisory only: the engine does not clamp to these ranges.

PARAM_GROUPS: Dict[str, list] = {
    "Operational": ["hours_per_day", "days_per_month"],
    "Production": ["processing_rate", "primary_yield_pct", "byproduct_sale_pct"],
    "Pricing": ["raw_material_price", "primary_price", "byproduct_price"],
    "Capex": ["land_cost", "civil_works_cost", "machinery_cost", "machinery_useful_life_years"],
    "Operating Costs": [
        "packaging_cost", "fuel_cost", "other_var_cost",
        "rent_per_month", "labor_per_month", "electricity_per_month",
        "security_insurance_per_month", "misc_per_month",
    ],
    "Finance": ["equity_contribution_pct", "interest_rate_pct", "tax_rate_pct"],
    "Working Capital": ["rm_inventory_days", "fg_inventory_days", "debtor_days", "creditor_days"],
}

PARAM_SPECS: Dict[str, dict] = {
    "hours_per_day": {"label": "Production Hours/Day", "unit": "hr", "min": 5, "max": 24, "step": 1},
    "days_per_month": {"label": "Operational Days/Month", "unit": "days", "min": 1, "max": 31, "step": 1},
    "processing_rate": {"label": "Paddy Processing Rate", "unit": "kg/hr", "min": 100, "max": None, "step": 10},
    "primary_yield_pct": {"label": "Poha Yield", "unit": "%", "min": 50, "max": 80, "step": 0.1},
    "byproduct_sale_pct": {"label": "Byproduct Sale", "unit": "%", "min": 0, "max": 40, "step": 0.1},
    "raw_material_price": {"label": "Paddy Purchase Rate", "unit": "₹/kg", "min": 0, "max": None, "step": 0.1},
    "primary_price": {"label": "Poha Selling Price", "unit": "₹/kg", "min": 0, "max": None, "step": 0.1},
    "byproduct_price": {"label": "Byproduct Selling Rate", "unit": "₹/kg", "min": 0, "max": None, "step": 0.1},
    "land_cost": {"label": "Land Cost", "unit": "₹", "min": 0, "max": None, "step": 10000},
    "civil_works_cost": {"label": "Civil Work Cost", "unit": "₹", "min": 0, "max": None, "step": 10000},
    "machinery_cost": {"label": "Machinery Cost", "unit": "₹", "min": 0, "max": None, "step": 10000},
    "machinery_useful_life_years": {"label": "Useful Life", "unit": "years", "min": 1, "max": 50, "step": 1},
    "packaging_cost": {"label": "Packaging", "unit": "₹/kg of paddy", "min": 0, "max": None, "step": 0.01},
    "fuel_cost": {"label": "Fuel/Power", "unit": "₹/kg of paddy", "min": 0, "max": None, "step": 0.01},
    "other_var_cost": {"label": "Other Variable", "unit": "₹/kg of paddy", "min": 0, "max": None, "step": 0.01},
    "rent_per_month": {"label": "Rent/Month", "unit": "₹", "min": 0, "max": None, "step": 1000},
    "labor_per_month": {"label": "Labor/Month", "unit": "₹", "min": 0, "max": None, "step": 1000},
    "electricity_per_month": {"label": "Electricity/Month", "unit": "₹", "min": 0, "max": None, "step": 1000},
    "security_insurance_per_month": {"label": "Security & Insurance/Month", "unit": "₹", "min": 0, "max": None, "step": 1000},
    "misc_per_month": {"label": "Misc Overheads/Month", "unit": "₹", "min": 0, "max": None, "step": 1000},
    "equity_contribution_pct": {"label": "Equity Contribution", "unit": "%", "min": 0, "max": 100, "step": 0.1},
    "interest_rate_pct": {"label": "Interest Rate", "unit": "%", "min": 0, "max": 50, "step": 0.01},
    "tax_rate_pct": {"label": "Corporate Tax Rate", "unit": "%", "min": 0, "max": 50, "step": 0.1},
    "rm_inventory_days": {"label": "RM Inventory Days", "unit": "days", "min": 0, "max": 365, "step": 1},
    "fg_inventory_days": {"label": "FG Inventory Days", "unit": "days", "min": 0, "max": 365, "step": 1},
    "debtor_days": {"label": "Debtor Days (Receivables)", "unit": "days", "min": 0, "max": 365, "step": 1},
    "creditor_days": {"label": "Creditor Days (Payables)", "unit": "days", "min": 0, "max": 365, "step": 1},
}

for _group, _fields in PARAM_GROUPS.items():
    for _name in _fields:
        PARAM_SPECS[_name]["group"] = _group


# --- Sensitivity variables ---

class SensitivityVariable(str, Enum):
    PRIMARY_PRICE = "primary_price"
    RAW_MATERIAL_PRICE = "raw_material_price"
    PRIMARY_YIELD = "primary_yield"
    INTEREST_RATE = "interest_rate"
    PROCESSING_RATE = "processing_rate"
    BYPRODUCT_SALE = "byproduct_sale"

    @property
    def label(self) -> str:
        return _SENSITIVITY_LABELS[self][0]

    @property
    def unit(self) -> str:
        return _SENSITIVITY_LABELS[self][1]

    def get(self, params: ParameterSet) -> float:
        """Read this variable's current value from a Parameter Set."""
        return _ACCESSORS[self][0](params)

    def replace(self, params: ParameterSet, value: float) -> ParameterSet:
        """Copy of params with only this variable changed."""
        return _ACCESSORS[self][1](params, value)


_SENSITIVITY_LABELS: Dict[SensitivityVariable, Tuple[str, str]] = {
    SensitivityVariable.PRIMARY_PRICE: ("Poha Selling Price", "₹/kg"),
    SensitivityVariable.RAW_MATERIAL_PRICE: ("Paddy Purchase Rate", "₹/kg"),
    SensitivityVariable.PRIMARY_YIELD: ("Paddy to Poha Yield", "%"),
    SensitivityVariable.INTEREST_RATE: ("Interest Rate", "%"),
    SensitivityVariable.PROCESSING_RATE: ("Processing Rate", "kg/hr"),
    SensitivityVariable.BYPRODUCT_SALE: ("Byproduct Sale %", "%"),
}

_ACCESSORS: Dict[
    SensitivityVariable,
    Tuple[Callable[[ParameterSet], float], Callable[[ParameterSet, float], ParameterSet]],
] = {
    SensitivityVariable.PRIMARY_PRICE: (
        lambda p: p.primary_price,
        lambda p, v: p.with_changes(primary_price=v),
    ),
    SensitivityVariable.RAW_MATERIAL_PRICE: (
        lambda p: p.raw_material_price,
        lambda p, v: p.with_changes(raw_material_price=v),
    ),
    SensitivityVariable.PRIMARY_YIELD: (
        lambda p: p.primary_yield_pct,
        lambda p, v: p.with_changes(primary_yield_pct=v),
    ),
    SensitivityVariable.INTEREST_RATE: (
        lambda p: p.interest_rate_pct,
        lambda p, v: p.with_changes(interest_rate_pct=v),
    ),
    SensitivityVariable.PROCESSING_RATE: (
        lambda p: p.processing_rate,
        lambda p, v: p.with_changes(processing_rate=v),
    ),
    SensitivityVariable.BYPRODUCT_SALE: (
        lambda p: p.byproduct_sale_pct,
        lambda p, v: p.with_changes(byproduct_sale_pct=v),
    ),
}
