import pytest

from reportdash.ratio_calculator import FinancialRatioCalculator, calculate_cagr


def test_calculate_all_ratios_basic():
    ratios = FinancialRatioCalculator(
        {
            "revenue": 1000.0,
            "netProfit": 80.0,
            "currentAssets": 700.0,
            "currentLiabilities": 350.0,
            "totalLiabilities": 500.0,
            "shareholderEquity": 900.0,
        }
    ).calculate_all_ratios()
    assert ratios["netMargin"] == pytest.approx(8.0)
    assert ratios["currentRatio"] == 2.0
    assert ratios["debtToEquity"] == 500.0 / 900.0
    assert ratios["roe"] == pytest.approx(80.0 / 900.0 * 100)


def test_non_positive_divisors_yield_none():
    ratios = FinancialRatioCalculator(
        {"revenue": 0, "netProfit": 10, "shareholderEquity": -5, "currentLiabilities": None}
    ).calculate_all_ratios()
    assert ratios == {"netMargin": None, "currentRatio": None, "debtToEquity": None, "roe": None}


def test_calculate_cagr():
    assert calculate_cagr([8250, 8616.2, 8713.7]) == pytest.approx(((8713.7 / 8250) ** 0.5 - 1) * 100)
    assert calculate_cagr([100]) == 0
    assert calculate_cagr([0, 100]) == 0
    assert calculate_cagr([100, -5]) == 0
    assert calculate_cagr(None) == 0
