"""
Statement and summary builders over a ProjectionResult.

Plain dicts, numeric amounts unformatted; callers format for display.
Line orderings are fixed:
  P&L:      Revenue, COGS, Gross Profit, Variable OpEx, Fixed OpEx,
            Depreciation, EBIT, Interest, EBT, Taxes, Net Profit
  Balance:  Assets {Capex, RM Inv, FG Inv, Receivables, Total}
            Liabilities & Equity {Equity, Debt, Payables, NWC, Capital Employed}
"""

from .formatters import format_currency, format_percentage
from .results import ProjectionResult


def _line(label: str, amount, is_subtotal: bool = False, is_header: bool = False) -> dict:
    return {
        "label": label,
        "amount": amount,
        "is_subtotal": is_subtotal,
        "is_header": is_header,
    }


def profit_and_loss(r: ProjectionResult) -> list:
    """Costs are shown as negative amounts."""
    return [
        _line("Total Revenue", r.annual_revenue),
        _line("COGS", -r.annual_cogs),
        _line("Gross Profit", r.gross_profit, is_subtotal=True),
        _line("Variable OpEx", -r.annual_var_costs),
        _line("Fixed OpEx", -r.annual_fixed_opex),
        _line("Depreciation", -r.annual_depreciation),
        _line("EBIT", r.ebit, is_subtotal=True),
        _line("Total Interest", -r.total_interest),
        _line("EBT", r.ebt, is_subtotal=True),
        _line("Taxes", -r.taxes),
        _line("Net Profit (PAT)", r.net_profit, is_subtotal=True),
    ]


def balance_sheet(r: ProjectionResult) -> list:
    return [
        _line("Assets", None, is_header=True),
        _line("Total Capex", r.total_capex),
        _line("RM Inventory", r.rm_inventory),
        _line("FG Inventory", r.fg_inventory),
        _line("Receivables", r.receivables),
        _line("Total Assets", r.total_assets, is_subtotal=True),
        _line("Liabilities & Equity", None, is_header=True),
        _line("Equity", r.equity),
        _line("Debt", r.debt),
        _line("Payables", r.payables),
        _line("Net Working Capital", r.net_working_capital, is_subtotal=True),
        _line("Capital Employed", r.capital_employed, is_subtotal=True),
    ]


def production_summary(r: ProjectionResult) -> list:
    """
    Daily / monthly / annual view.
    Volumes are per operating day; money rows use a 365-day year.
    """
    days = r.params.days_per_month
    operating_days = days * 12

    def volume(metric, daily, annual, monthly=None):
        return {
            "metric": metric,
            "unit": "kg",
            "daily": daily,
            "monthly": daily * days if monthly is None else monthly,
            "annual": annual,
        }

    def money(metric, annual):
        return {
            "metric": metric,
            "unit": "currency",
            "daily": annual / 365,
            "monthly": annual / 12,
            "annual": annual,
        }

    return [
        volume("Paddy Consumption (kg)", r.daily_raw_material, r.annual_raw_material),
        volume("Poha Production (kg)", r.annual_primary_product / operating_days,
               r.annual_primary_product, monthly=r.annual_primary_product / 12),
        volume("Byproduct Generated (kg)", r.daily_byproduct_generated,
               r.daily_byproduct_generated * operating_days),
        volume("Byproduct Sold (kg)", r.daily_byproduct_sold, r.annual_byproduct_sold),
        money("Total Revenue", r.annual_revenue),
        money("COGS", r.annual_cogs),
        money("Gross Profit", r.gross_profit),
    ]


def _status(value: float, good: float, fair: float) -> str:
    if value > good:
        return "success"
    if value > fair:
        return "warning"
    return "error"


def _sign_status(value: float) -> str:
    return "success" if value > 0 else "error"


_TRENDS = {"success": "up", "warning": "neutral", "error": "down"}


def kpi_cards(r: ProjectionResult) -> list:
    """Headline KPIs with a traffic-light status and trend arrow."""
    cards = [
        {
            "title": "Annual Revenue",
            "value": r.annual_revenue,
            "display": format_currency(r.annual_revenue),
            "subtitle": "Total Income",
            "status": "primary",
            "trend": "up" if r.annual_revenue > 0 else "neutral",
        },
        {
            "title": "Annual COGS",
            "value": r.annual_cogs,
            "display": format_currency(r.annual_cogs),
            "subtitle": "Cost of Goods Sold",
            "status": "secondary",
            "trend": "neutral",
        },
    ]
    graded = [
        ("Gross Margin", r.gross_margin, format_percentage(r.gross_margin),
         format_currency(r.gross_profit), _status(r.gross_margin, 20, 10)),
        ("Contribution Margin", r.contribution_margin_pct, format_percentage(r.contribution_margin_pct),
         format_currency(r.contribution_margin), _status(r.contribution_margin_pct, 25, 15)),
        ("Net Profit (PAT)", r.net_profit, format_currency(r.net_profit),
         f"{format_percentage(r.net_profit_margin)} Margin", _sign_status(r.net_profit)),
        ("EBITDA", r.ebitda, format_currency(r.ebitda),
         f"{format_percentage(r.ebitda_margin)} Margin", _sign_status(r.ebitda)),
        ("ROCE", r.roce, format_percentage(r.roce), "Return on Capital", _status(r.roce, 15, 10)),
        ("ROE", r.roe, format_percentage(r.roe), "Return on Equity", _status(r.roe, 20, 15)),
    ]
    for title, value, display, subtitle, status in graded:
        cards.append({
            "title": title,
            "value": value,
            "display": display,
            "subtitle": subtitle,
            "status": status,
            "trend": _TRENDS[status],
        })
    return cards


def warnings(r: ProjectionResult) -> list:
    out = []
    if r.byproduct_limit_hit:
        out.append(
            "Byproduct sale target exceeds physical generation; sale capped at "
            f"{r.daily_byproduct_generated:,.0f} kg/day."
        )
    return out
