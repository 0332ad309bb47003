"""Single-record normalization.

Turns one raw extraction record into a scalar, unit-consistent period record, and
reshapes period records into the chart dataset layout used by the dashboard.
"""
from typing import Any, Dict, List

from .coercion import coerce, is_reported
from .names import normalize_company_name
from .ratio_calculator import FinancialRatioCalculator
from .units import to_millions


CURRENCY_FIELDS = [
    "revenue",
    "netProfit",
    "totalLiabilities",
    "shareholderEquity",
    "currentAssets",
    "currentLiabilities",
]

OPTIONAL_CURRENCY_FIELDS = ["grossProfit", "totalAssets"]

DERIVED_FIELDS = ["netMargin", "currentRatio", "debtToEquity", "roe"]

# Multipliers applied to net profit when the extractor reports no cash-flow figure.
CASH_FLOW_ESTIMATES = {
    "operatingCashFlow": 1.2,
    "investingCashFlow": -0.3,
    "financingCashFlow": -0.5,
    "fcf": 0.9,
}

SERIES_FIELDS = [
    "revenue",
    "grossProfit",
    "netProfit",
    "grossMargin",
    "netMargin",
    "totalAssets",
    "currentAssets",
    "totalLiabilities",
    "currentLiabilities",
    "shareholderEquity",
    "currentRatio",
    "debtToEquity",
    "eps",
    "operatingCashFlow",
    "investingCashFlow",
    "financingCashFlow",
    "fcf",
]

EQUITY_ALIASES = ["shareholderEquity", "totalEquity", "shareholdersEquity"]

VALID_NATURES = {"recurring", "one-time"}
VALID_TRENDS = {"positive", "negative"}


def _first_present(raw: Dict[str, Any], keys: List[str]) -> Any:
    for key in keys:
        if raw.get(key) is not None:
            return raw[key]
    return None


def is_merged_dataset(data: Dict[str, Any]) -> bool:
    return isinstance(data.get("years"), list) and isinstance(data.get("revenue"), list)


def normalize_qualitative_events(events: Any) -> List[Dict[str, Any]]:
    if not isinstance(events, list):
        return []
    normalized: List[Dict[str, Any]] = []
    for event in events:
        if not isinstance(event, dict):
            continue
        amount = coerce(event.get("amount"))
        nature = str(event.get("nature") or "").strip().lower()
        if nature not in VALID_NATURES:
            nature = "one-time"
        trend = str(event.get("trend") or "").strip().lower()
        if trend not in VALID_TRENDS:
            trend = "negative" if amount < 0 else "positive"
        category = event.get("category")
        normalized.append(
            {
                "description": str(event.get("description") or "").strip(),
                "amount": amount,
                "year": "" if event.get("year") is None else str(event.get("year")),
                "nature": nature,
                "category": str(category) if category else None,
                "trend": trend,
            }
        )
    return normalized


def _dividend_value(raw: Dict[str, Any], fiscal_year: str):
    dividends = _first_present(raw, ["dividends", "dividendPerShare"])
    if isinstance(dividends, dict) and "value" not in dividends:
        # Already keyed by year.
        return coerce(dividends.get(fiscal_year), None)
    return coerce(dividends, None)


def normalize_period_record(raw: Dict[str, Any]) -> Dict[str, Any]:
    raw = raw or {}
    fiscal_year = raw.get("fiscalYear")
    fiscal_year = "N/A" if fiscal_year in (None, "") else str(fiscal_year)

    record: Dict[str, Any] = {
        "companyName": normalize_company_name(raw.get("companyName")),
        "fiscalYear": fiscal_year,
    }
    for field in CURRENCY_FIELDS:
        source = raw.get(field)
        if field == "shareholderEquity":
            source = _first_present(raw, EQUITY_ALIASES)
        record[field] = to_millions(coerce(source))
    for field in OPTIONAL_CURRENCY_FIELDS:
        value = coerce(raw.get(field), None)
        record[field] = None if value is None else to_millions(value)
    record["grossMargin"] = coerce(raw.get("grossMargin"))
    record["eps"] = coerce(raw.get("eps"), None)

    calculator = FinancialRatioCalculator(record)
    computed = calculator.calculate_all_ratios()
    for field in DERIVED_FIELDS:
        reported = coerce(raw.get(field))
        if not reported and computed[field] is not None:
            reported = computed[field]
        record[field] = reported

    estimated: Dict[str, bool] = {}
    for field, multiplier in CASH_FLOW_ESTIMATES.items():
        if is_reported(raw.get(field)):
            record[field] = to_millions(coerce(raw.get(field)))
            estimated[field] = False
        else:
            record[field] = 0.0 + record["netProfit"] * multiplier
            estimated[field] = True
    record["estimated"] = estimated

    cash = coerce(_first_present(raw, ["cashEquivalents", "cash"]), None)
    record["cashEquivalents"] = None if cash is None else to_millions(cash)
    record["dividends"] = _dividend_value(raw, fiscal_year)
    record["qualitativeEvents"] = normalize_qualitative_events(raw.get("qualitativeEvents"))
    if raw.get("_fileName"):
        record["_fileName"] = raw["_fileName"]
    return record


def to_chart_dataset(period: Dict[str, Any]) -> Dict[str, Any]:
    """Wrap a scalar period record into single-element series."""
    if is_merged_dataset(period):
        return _collapse_merged(period)
    year = period.get("fiscalYear") or "N/A"
    dataset: Dict[str, Any] = {
        "companyName": period.get("companyName") or normalize_company_name(None),
        "fiscalYear": year,
        "years": [year],
    }
    for field in SERIES_FIELDS:
        dataset[field] = [period.get(field) or 0.0]
    dataset["roe"] = period.get("roe") or 0.0
    dataset["dividends"] = {} if period.get("dividends") is None else {year: period["dividends"]}
    dataset["cashEquivalents"] = (
        {} if period.get("cashEquivalents") is None else {year: period["cashEquivalents"]}
    )
    dataset["estimated"] = {
        field: [bool((period.get("estimated") or {}).get(field))] for field in CASH_FLOW_ESTIMATES
    }
    dataset["qualitativeEvents"] = list(period.get("qualitativeEvents") or [])
    return dataset


def _collapse_merged(data: Dict[str, Any]) -> Dict[str, Any]:
    dataset = dict(data)
    dataset["companyName"] = normalize_company_name(data.get("companyName"))
    roe = data.get("roe")
    if isinstance(roe, list):
        dataset["roe"] = roe[-1] if roe else 0.0
    return dataset


def transform_extracted_data(raw: Dict[str, Any]) -> Dict[str, Any]:
    raw = raw or {}
    if is_merged_dataset(raw):
        return _collapse_merged(raw)
    return to_chart_dataset(normalize_period_record(raw))
