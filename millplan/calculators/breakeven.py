"""
Breakeven analysis over an already-computed ProjectionResult.

Everything is per kg of paddy processed:
  revenue/unit  = poha price x yield + byproduct price x min(sale %, 100 - yield %)
  var cost/unit = paddy price + packaging + fuel + other
Fixed costs depend on the basis:
  EBITDA:     annual fixed opex
  Net Profit: fixed opex + depreciation + total interest
"""

import logging
import math
from enum import Enum

from ..results import BreakevenPoint, BreakevenResult, ProjectionResult
from .base import BaseCalculator

logger = logging.getLogger(__name__)


def _round_half_up(value: float) -> int:
    """Halves round toward +infinity: 2.5 -> 3, -0.5 -> 0."""
    return int(math.floor(value + 0.5))


class BreakevenBasis(str, Enum):
    EBITDA = "EBITDA"
    NET_PROFIT = "Net Profit"


class BreakevenCalculator(BaseCalculator):

    CHART_POINTS = 50
    CHART_HEADROOM = 1.5

    def calculate(self, result: ProjectionResult,
                  basis: BreakevenBasis = BreakevenBasis.EBITDA,
                  chart_points: int = CHART_POINTS,
                  headroom: float = CHART_HEADROOM) -> BreakevenResult:
        if not result.ok:
            raise ValueError(f"Cannot compute breakeven on a failed projection: {result.error}")

        p = result.params
        revenue_per_unit = self.revenue_per_unit(result)
        var_cost_per_unit = p.raw_material_price + result.var_cost_per_unit
        contribution = revenue_per_unit - var_cost_per_unit

        if basis == BreakevenBasis.EBITDA:
            fixed_costs = result.annual_fixed_opex
        else:
            fixed_costs = result.annual_fixed_opex + result.annual_depreciation + result.total_interest

        breakeven_volume = fixed_costs / contribution if contribution > 0 else 0.0
        breakeven_revenue = breakeven_volume * revenue_per_unit
        current_volume = result.annual_raw_material

        logger.debug("Breakeven (%s): %.0f kg/yr on contribution %.4f/kg",
                     basis.value, breakeven_volume, contribution)

        return BreakevenResult(
            basis=basis.value,
            fixed_costs=fixed_costs,
            revenue_per_unit=revenue_per_unit,
            var_cost_per_unit=var_cost_per_unit,
            contribution_per_unit=contribution,
            breakeven_volume=breakeven_volume,
            breakeven_revenue=breakeven_revenue,
            current_volume=current_volume,
            above_breakeven=current_volume > breakeven_volume,
            chart=self.chart(current_volume, breakeven_volume, revenue_per_unit,
                             var_cost_per_unit, fixed_costs, chart_points, headroom),
        )

    def revenue_per_unit(self, result: ProjectionResult) -> float:
        p = result.params
        primary = p.primary_price * self.pct(p.primary_yield_pct)
        byproduct_share = min(self.pct(p.byproduct_sale_pct), self.pct(100 - p.primary_yield_pct))
        return primary + p.byproduct_price * byproduct_share

    def chart(self, current_volume: float, breakeven_volume: float,
              revenue_per_unit: float, var_cost_per_unit: float,
              fixed_costs: float, points: int, headroom: float) -> list:
        """Revenue and cost lines from zero volume to past the larger of current and breakeven."""
        if points <= 0:
            return []
        max_volume = max(current_volume, breakeven_volume) * headroom
        step_size = max_volume / points
        series = []
        for i in range(points + 1):
            volume = i * step_size
            revenue = volume * revenue_per_unit
            costs = fixed_costs + volume * var_cost_per_unit
            series.append(BreakevenPoint(
                volume=_round_half_up(volume),
                revenue=_round_half_up(revenue),
                costs=_round_half_up(costs),
                profit=_round_half_up(revenue - costs),
            ))
        return series


_calculator = BreakevenCalculator()


def breakeven(result: ProjectionResult,
              basis: BreakevenBasis = BreakevenBasis.EBITDA,
              chart_points: int = BreakevenCalculator.CHART_POINTS,
              headroom: float = BreakevenCalculator.CHART_HEADROOM) -> BreakevenResult:
    return _calculator.calculate(result, basis, chart_points, headroom)
