"""
Statements, KPI cards and display formatting.

Tests:
1-4.   P&L and balance sheet ordering and amounts
5-6.   Production summary
7-9.   KPI cards and warnings
10-14. Indian number / currency / percentage formatting
"""

import pytest

from millplan.calculators.financials import evaluate
from millplan.formatters import (
    format_compact_number,
    format_currency,
    format_number,
    format_percentage,
)
from millplan.parameters import default_parameters
from millplan.statements import (
    balance_sheet,
    kpi_cards,
    production_summary,
    profit_and_loss,
    warnings,
)


def _by_label(lines):
    return {line["label"]: line for line in lines}


# ============================================================
# Profit & Loss / Balance Sheet
# ============================================================

def test_pnl_line_order(result):
    assert [line["label"] for line in profit_and_loss(result)] == [
        "Total Revenue", "COGS", "Gross Profit", "Variable OpEx", "Fixed OpEx",
        "Depreciation", "EBIT", "Total Interest", "EBT", "Taxes", "Net Profit (PAT)",
    ]


def test_pnl_costs_negative_and_subtotals_add_up(result):
    lines = profit_and_loss(result)
    pnl = _by_label(lines)
    assert pnl["COGS"]["amount"] == pytest.approx(-63_360_000)
    assert pnl["Fixed OpEx"]["amount"] == pytest.approx(-17_400_000)
    assert pnl["Gross Profit"]["is_subtotal"] is True
    assert pnl["Net Profit (PAT)"]["amount"] == pytest.approx(result.net_profit)
    # every subtotal equals the running sum of the lines above it
    running = 0.0
    for line in lines:
        if line["is_subtotal"]:
            assert line["amount"] == pytest.approx(running)
        else:
            running += line["amount"]


def test_balance_sheet_sections(result):
    lines = balance_sheet(result)
    headers = [line["label"] for line in lines if line["is_header"]]
    assert headers == ["Assets", "Liabilities & Equity"]
    assert lines[0]["amount"] is None
    assert [line["label"] for line in lines[1:6]] == [
        "Total Capex", "RM Inventory", "FG Inventory", "Receivables", "Total Assets",
    ]


def test_balance_sheet_amounts(result):
    bs = _by_label(balance_sheet(result))
    assert bs["Total Capex"]["amount"] == pytest.approx(7_000_000)
    assert bs["FG Inventory"]["amount"] == pytest.approx(4_500_000)
    assert bs["Total Assets"]["amount"] == pytest.approx(result.total_assets)
    assert bs["Equity"]["amount"] + bs["Debt"]["amount"] == pytest.approx(7_000_000)
    assert bs["Capital Employed"]["amount"] == pytest.approx(
        bs["Total Capex"]["amount"] + bs["Net Working Capital"]["amount"]
    )


# ============================================================
# Production summary
# ============================================================

def test_production_summary_volumes(result):
    rows = {row["metric"]: row for row in production_summary(result)}
    paddy = rows["Paddy Consumption (kg)"]
    assert paddy["unit"] == "kg"
    assert paddy["daily"] == pytest.approx(10_000)
    assert paddy["monthly"] == pytest.approx(240_000)
    assert paddy["annual"] == pytest.approx(2_880_000)
    poha = rows["Poha Production (kg)"]
    assert poha["daily"] == pytest.approx(6500)
    assert poha["monthly"] == pytest.approx(156_000)


def test_production_summary_money_rows_use_calendar_year(result):
    rows = {row["metric"]: row for row in production_summary(result)}
    revenue = rows["Total Revenue"]
    assert revenue["unit"] == "currency"
    assert revenue["daily"] == pytest.approx(90_691_200 / 365)
    assert revenue["monthly"] == pytest.approx(90_691_200 / 12)


# ============================================================
# KPI cards + warnings
# ============================================================

def test_kpi_cards_titles_and_displays(result):
    cards = {card["title"]: card for card in kpi_cards(result)}
    assert list(cards) == [
        "Annual Revenue", "Annual COGS", "Gross Margin", "Contribution Margin",
        "Net Profit (PAT)", "EBITDA", "ROCE", "ROE",
    ]
    assert cards["Annual Revenue"]["display"] == "₹9,06,91,200"
    assert cards["Gross Margin"]["display"] == format_percentage(result.gross_margin)
    assert cards["Gross Margin"]["status"] == "success"   # ~30% > 20%
    assert cards["EBITDA"]["status"] == "success"
    assert cards["EBITDA"]["trend"] == "up"


def test_kpi_cards_loss_is_error():
    r = evaluate(default_parameters().with_changes(primary_price=30))
    cards = {card["title"]: card for card in kpi_cards(r)}
    assert cards["Net Profit (PAT)"]["status"] == "error"
    assert cards["Net Profit (PAT)"]["trend"] == "down"
    assert cards["Gross Margin"]["status"] == "error"


def test_warnings_only_when_byproduct_capped(result):
    assert warnings(result) == []
    capped = evaluate(default_parameters().with_changes(primary_yield_pct=70, byproduct_sale_pct=40))
    messages = warnings(capped)
    assert len(messages) == 1
    assert "3,000 kg/day" in messages[0]


# ============================================================
# Formatting
# ============================================================

def test_format_number_indian_grouping():
    assert format_number(1_234_567) == "12,34,567"
    assert format_number(123) == "123"
    assert format_number(12_345_678.9) == "1,23,45,679"
    assert format_number(1234.567, 2) == "1,234.57"
    assert format_number(-1500) == "-1,500"


def test_format_currency():
    assert format_currency(0) == "₹0.00"
    assert format_currency(1_234_567) == "₹12,34,567"
    assert format_currency(-1500) == "₹-1,500"


def test_format_percentage():
    assert format_percentage(12.345) == "12.3%"
    assert format_percentage(-4) == "-4.0%"


def test_format_compact_number():
    assert format_compact_number(25_000_000) == "₹2.5Cr"
    assert format_compact_number(250_000) == "₹2.5L"
    assert format_compact_number(2500) == "₹2.5K"
    assert format_compact_number(999) == "₹999"


@pytest.mark.parametrize("fn", [format_number, format_currency, format_percentage, format_compact_number])
def test_non_finite_is_not_available(fn):
    assert fn(float("nan")) == "N/A"
    assert fn(float("inf")) == "N/A"
