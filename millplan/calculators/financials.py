"""
Projection engine: one annual financial model from one ParameterSet.

Pure Python math. No I/O, no shared state.
evaluate(params) always returns: a ProjectionResult on success, or a
ProjectionFailure (InvalidInput / CalculationError) that keeps the
original params. It never raises.

Day-count bases differ on purpose:
  - daily money rates (COGS, revenue) divide annual figures by 365
  - daily primary production divides by operating days (days/month x 12)
"""

import logging

from ..parameters import ParameterSet
from ..results import ErrorKind, Projection, ProjectionFailure, ProjectionResult
from .base import BaseCalculator

logger = logging.getLogger(__name__)

INVALID_INPUT_MESSAGE = "Yield, Price, and Capex must be greater than 0"
CALCULATION_ERROR_MESSAGE = "Calculation error occurred. Please check your inputs."


class FinancialCalculator(BaseCalculator):

    def calculate(self, params: ParameterSet) -> Projection:
        p = params
        total_capex = p.land_cost + p.civil_works_cost + p.machinery_cost

        if p.primary_yield_pct <= 0 or p.primary_price <= 0 or total_capex <= 0:
            logger.info(
                "Rejected parameters: yield=%s price=%s capex=%s",
                p.primary_yield_pct, p.primary_price, total_capex,
            )
            return ProjectionFailure(
                params=params, kind=ErrorKind.INVALID_INPUT, error=INVALID_INPUT_MESSAGE,
            )

        try:
            result = self._project(p, total_capex)
        except Exception as e:
            logger.warning("Projection failed: %s", e)
            return ProjectionFailure(
                params=params, kind=ErrorKind.CALCULATION_ERROR, error=CALCULATION_ERROR_MESSAGE,
            )

        logger.debug(
            "Projection: revenue=%.2f ebitda=%.2f net_profit=%.2f",
            result.annual_revenue, result.ebitda, result.net_profit,
        )
        return result

    def _project(self, p: ParameterSet, total_capex: float) -> ProjectionResult:
        self.require_finite(p.model_dump())
        yield_frac = self.pct(p.primary_yield_pct)
        operating_days = self.operating_days(p.days_per_month)

        # --- Production ---
        daily_raw_material = p.processing_rate * p.hours_per_day
        annual_raw_material = daily_raw_material * operating_days
        annual_primary_product = annual_raw_material * yield_frac

        # --- Byproduct: sale is capped by what is physically generated ---
        daily_byproduct_generated = daily_raw_material - daily_raw_material * yield_frac
        daily_byproduct_target = daily_raw_material * self.pct(p.byproduct_sale_pct)
        daily_byproduct_sold = min(daily_byproduct_target, daily_byproduct_generated)
        byproduct_limit_hit = daily_byproduct_target > daily_byproduct_generated
        annual_byproduct_sold = daily_byproduct_sold * operating_days

        # --- Revenue ---
        annual_primary_revenue = annual_primary_product * p.primary_price
        annual_byproduct_revenue = annual_byproduct_sold * p.byproduct_price
        annual_revenue = annual_primary_revenue + annual_byproduct_revenue

        # --- Costs (COGS is paddy only; packaging/fuel/other are variable opex) ---
        annual_cogs = annual_raw_material * p.raw_material_price
        gross_profit = annual_revenue - annual_cogs
        var_cost_per_unit = p.packaging_cost + p.fuel_cost + p.other_var_cost
        annual_var_costs = annual_raw_material * var_cost_per_unit
        annual_fixed_opex = self.annualize_monthly(
            p.rent_per_month
            + p.labor_per_month
            + p.electricity_per_month
            + p.security_insurance_per_month
            + p.misc_per_month
        )
        # Land is not depreciated
        if p.machinery_useful_life_years > 0:
            annual_depreciation = (p.machinery_cost + p.civil_works_cost) / p.machinery_useful_life_years
        else:
            annual_depreciation = 0.0

        # --- Operating profitability ---
        ebit = gross_profit - annual_var_costs - annual_fixed_opex - annual_depreciation
        ebitda = ebit + annual_depreciation

        # --- Working capital ---
        daily_cogs = annual_cogs / self.DAYS_PER_YEAR
        daily_primary_production = annual_primary_product / operating_days
        if annual_primary_product > 0:
            daily_production_cost = (annual_cogs + annual_var_costs) / annual_primary_product
        else:
            daily_production_cost = 0.0
        daily_revenue = annual_revenue / self.DAYS_PER_YEAR

        rm_inventory = daily_cogs * p.rm_inventory_days
        fg_inventory = daily_primary_production * daily_production_cost * p.fg_inventory_days
        receivables = daily_revenue * p.debtor_days
        payables = daily_cogs * p.creditor_days
        current_assets = rm_inventory + fg_inventory + receivables

        # --- Financial structure & interest ---
        equity = total_capex * self.pct(p.equity_contribution_pct)
        debt = total_capex - equity
        net_working_capital = current_assets - payables
        interest_rate = self.pct(p.interest_rate_pct)
        interest_on_debt = debt * interest_rate
        # Negative NWC is never a credit
        interest_on_wc = max(0.0, net_working_capital) * interest_rate
        total_interest = interest_on_debt + interest_on_wc

        # --- Bottom line (no tax credit on losses) ---
        ebt = ebit - total_interest
        taxes = max(0.0, ebt) * self.pct(p.tax_rate_pct)
        net_profit = ebt - taxes
        capital_employed = total_capex + net_working_capital
        total_assets = total_capex + current_assets

        # --- Ratios ---
        roce = self.ratio_pct(ebit, capital_employed, positive_only=False)
        roe = self.ratio_pct(net_profit, equity)
        gross_margin = self.ratio_pct(gross_profit, annual_revenue)
        net_profit_margin = self.ratio_pct(net_profit, annual_revenue)
        ebitda_margin = self.ratio_pct(ebitda, annual_revenue)
        contribution_margin = annual_revenue - annual_cogs - annual_var_costs
        contribution_margin_pct = self.ratio_pct(contribution_margin, annual_revenue)

        derived = {
            "total_capex": total_capex,
            "daily_raw_material": daily_raw_material,
            "annual_raw_material": annual_raw_material,
            "annual_primary_product": annual_primary_product,
            "daily_byproduct_generated": daily_byproduct_generated,
            "daily_byproduct_target": daily_byproduct_target,
            "daily_byproduct_sold": daily_byproduct_sold,
            "byproduct_limit_hit": byproduct_limit_hit,
            "annual_byproduct_sold": annual_byproduct_sold,
            "annual_primary_revenue": annual_primary_revenue,
            "annual_byproduct_revenue": annual_byproduct_revenue,
            "annual_revenue": annual_revenue,
            "annual_cogs": annual_cogs,
            "gross_profit": gross_profit,
            "var_cost_per_unit": var_cost_per_unit,
            "annual_var_costs": annual_var_costs,
            "annual_fixed_opex": annual_fixed_opex,
            "annual_depreciation": annual_depreciation,
            "ebit": ebit,
            "ebitda": ebitda,
            "daily_cogs": daily_cogs,
            "daily_primary_production": daily_primary_production,
            "daily_production_cost": daily_production_cost,
            "daily_revenue": daily_revenue,
            "rm_inventory": rm_inventory,
            "fg_inventory": fg_inventory,
            "receivables": receivables,
            "payables": payables,
            "current_assets": current_assets,
            "equity": equity,
            "debt": debt,
            "net_working_capital": net_working_capital,
            "interest_on_debt": interest_on_debt,
            "interest_on_wc": interest_on_wc,
            "total_interest": total_interest,
            "ebt": ebt,
            "taxes": taxes,
            "net_profit": net_profit,
            "capital_employed": capital_employed,
            "total_assets": total_assets,
            "roce": roce,
            "roe": roe,
            "gross_margin": gross_margin,
            "net_profit_margin": net_profit_margin,
            "ebitda_margin": ebitda_margin,
            "contribution_margin": contribution_margin,
            "contribution_margin_pct": contribution_margin_pct,
        }
        self.require_finite(derived)
        return ProjectionResult(params=p, **derived)


# Stateless, shared
_calculator = FinancialCalculator()


def evaluate(params: ParameterSet) -> Projection:
    """Run the projection engine. Never raises."""
    return _calculator.calculate(params)
