from reportdash.kpis import build_kpis, format_ratio
from reportdash.merge import merge_extracted_data
from reportdash.transform import normalize_period_record


def _by_id(kpis):
    return {kpi["id"]: kpi for kpi in kpis}


def test_format_ratio_shows_na_for_missing_or_zero():
    assert format_ratio(None) == "N/A"
    assert format_ratio(0) == "N/A"
    assert format_ratio(float("nan")) == "N/A"
    assert format_ratio(1.694) == "1.69"


def test_build_kpis_for_single_period():
    period = normalize_period_record(
        {
            "companyName": "AL NAHDI MEDICAL COMPANY",
            "fiscalYear": "2024",
            "revenue": 8713.7,
            "netProfit": 892.6,
            "shareholderEquity": 2462.8,
        }
    )
    kpis = _by_id(build_kpis(period))
    assert kpis["roe"]["value"] == "36.24%"
    assert kpis["roe"]["subtitle"] == "FY 2024"
    assert kpis["netProfitMargin"]["subtitle"] == "Nahdi Medical Company"
    assert kpis["currentRatio"]["value"] == "N/A"
    assert kpis["revenue"]["value"] == "8.71B"
    assert kpis["netProfit"]["value"] == "892.6M"
    assert kpis["revenueCagr"]["value"] == "0.00%"
    assert kpis["fcf"]["label"] == "Free Cash Flow (Est.)"


def test_build_kpis_for_merged_dataset_uses_latest_values():
    merged = merge_extracted_data(
        [
            normalize_period_record({"fiscalYear": "2022", "revenue": 100, "netProfit": 10, "fcf": 8}),
            normalize_period_record({"fiscalYear": "2023", "revenue": 121, "netProfit": 11, "fcf": 9}),
        ]
    )
    kpis = _by_id(build_kpis(merged))
    assert kpis["netProfit"]["value"] == "11.0M"
    assert kpis["revenueCagr"]["value"] == "21.00%"
    assert kpis["fcf"]["label"] == "Free Cash Flow"
    assert kpis["roe"]["value"] == "N/A"
