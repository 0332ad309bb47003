import re
from collections import Counter
from typing import Any, Dict, Optional, Sequence

from .coercion import get_val
from .errors import InvalidInputError
from .names import normalize_company_name
from .transform import CASH_FLOW_ESTIMATES, normalize_qualitative_events


MERGED_SERIES_FIELDS = [
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
    "roe",
    "currentRatio",
    "debtToEquity",
    "eps",
    "operatingCashFlow",
    "investingCashFlow",
    "financingCashFlow",
    "fcf",
]

_LEADING_INT = re.compile(r"\s*([-+]?\d+)")


def parse_year(value: Any) -> int:
    """Leading integer of a fiscal-year label, ``0`` when there is none."""
    if value is None:
        return 0
    match = _LEADING_INT.match(str(value))
    if not match:
        return 0
    return int(match.group(1))


def _dividend(record: Dict[str, Any], year: str) -> Optional[float]:
    value = get_val(record, "dividends")
    if value:
        return value
    dividends = record.get("dividends")
    if isinstance(dividends, dict):
        return get_val(dividends, year)
    return None


def _cash(record: Dict[str, Any]) -> float:
    return get_val(record, "cashEquivalents") or get_val(record, "cash") or 0.0


def _estimated_flags(record: Dict[str, Any]) -> Dict[str, bool]:
    flags = record.get("estimated")
    if not isinstance(flags, dict):
        flags = {}
    return {field: bool(flags.get(field)) for field in CASH_FLOW_ESTIMATES}


def merge_extracted_data(records: Sequence[Dict[str, Any]]) -> Dict[str, Any]:
    """Combine single-period records into one dataset of year-aligned series.

    Records are ordered by fiscal year ascending; the newest record supplies the
    company name and fiscal year. Missing metrics become ``0`` in the series.
    Repeated fiscal years are kept as separate entries and listed in
    ``duplicateYears``.
    """
    if not records:
        raise InvalidInputError("merge requires at least one record")

    ordered = sorted(records, key=lambda r: parse_year(r.get("fiscalYear")))
    latest = ordered[-1]

    merged: Dict[str, Any] = {
        "companyName": normalize_company_name(latest.get("companyName")),
        "fiscalYear": latest.get("fiscalYear"),
        "years": [],
    }
    for field in MERGED_SERIES_FIELDS:
        merged[field] = []
    merged["dividends"] = {}
    merged["cashEquivalents"] = {}
    merged["estimated"] = {field: [] for field in CASH_FLOW_ESTIMATES}
    merged["qualitativeEvents"] = []
    merged["_sources"] = [
        {"year": record.get("fiscalYear"), "file": record.get("_fileName")} for record in ordered
    ]

    for record in ordered:
        fiscal_year = record.get("fiscalYear")
        year = "N/A" if fiscal_year in (None, "") else str(fiscal_year)
        merged["years"].append(year)

        for field in MERGED_SERIES_FIELDS:
            merged[field].append(get_val(record, field) or 0)

        if record.get("dividends"):
            merged["dividends"][year] = _dividend(record, year)
        if record.get("cashEquivalents") or record.get("cash"):
            merged["cashEquivalents"][year] = _cash(record)

        for field, flag in _estimated_flags(record).items():
            merged["estimated"][field].append(flag)

        merged["qualitativeEvents"].extend(
            normalize_qualitative_events(record.get("qualitativeEvents"))
        )

    merged["qualitativeEvents"].sort(key=lambda e: parse_year(e.get("year")), reverse=True)
    counts = Counter(merged["years"])
    merged["duplicateYears"] = sorted(year for year, count in counts.items() if count > 1)
    return merged
