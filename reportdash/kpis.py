import math
from typing import Any, Dict, List, Optional

from .ratio_calculator import calculate_cagr
from .transform import to_chart_dataset


def _latest(value: Any) -> Optional[float]:
    if isinstance(value, list):
        return value[-1] if value else None
    return value


def _usable(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool) and math.isfinite(value)


def format_ratio(value: Any, decimals: int = 2) -> str:
    # A zero ratio means its inputs were missing.
    if not _usable(value) or value == 0:
        return "N/A"
    return f"{value:.{decimals}f}"


def format_number(value: Any, decimals: int = 1) -> str:
    if not _usable(value):
        return "N/A"
    return f"{value:,.{decimals}f}"


def _suffixed(text: str, suffix: str) -> str:
    return text if text == "N/A" else f"{text}{suffix}"


def build_kpis(data: Dict[str, Any]) -> List[Dict[str, str]]:
    """Headline KPI cards for a period record, chart dataset or merged dataset."""
    dataset = to_chart_dataset(data or {})

    revenue = _latest(dataset.get("revenue"))
    fcf_estimated = bool(_latest((dataset.get("estimated") or {}).get("fcf")))
    revenue_series = dataset.get("revenue") if isinstance(dataset.get("revenue"), list) else []

    return [
        {
            "id": "netProfitMargin",
            "label": "Net Profit Margin",
            "value": _suffixed(format_ratio(_latest(dataset.get("netMargin"))), "%"),
            "subtitle": dataset.get("companyName") or "Company",
        },
        {
            "id": "roe",
            "label": "Return on Equity (ROE)",
            "value": _suffixed(format_ratio(_latest(dataset.get("roe"))), "%"),
            "subtitle": f"FY {dataset.get('fiscalYear') or 'N/A'}",
        },
        {
            "id": "currentRatio",
            "label": "Current Ratio",
            "value": _suffixed(format_ratio(_latest(dataset.get("currentRatio"))), "x"),
            "subtitle": "Liquidity position",
        },
        {
            "id": "debtToEquity",
            "label": "Debt-to-Equity Ratio",
            "value": _suffixed(format_ratio(_latest(dataset.get("debtToEquity"))), "x"),
            "subtitle": "Capital structure",
        },
        {
            "id": "revenue",
            "label": "Revenue",
            "value": _suffixed(format_number(revenue / 1000 if _usable(revenue) else None, 2), "B"),
            "subtitle": "SAR",
        },
        {
            "id": "netProfit",
            "label": "Net Profit",
            "value": _suffixed(format_number(_latest(dataset.get("netProfit"))), "M"),
            "subtitle": "SAR",
        },
        {
            "id": "revenueCagr",
            "label": "Revenue CAGR",
            "value": f"{calculate_cagr(revenue_series):.2f}%",
            "subtitle": f"{len(revenue_series)} fiscal year(s)",
        },
        {
            "id": "fcf",
            "label": "Free Cash Flow (Est.)" if fcf_estimated else "Free Cash Flow",
            "value": _suffixed(format_number(_latest(dataset.get("fcf"))), "M"),
            "subtitle": "SAR",
        },
    ]
