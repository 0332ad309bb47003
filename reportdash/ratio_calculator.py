from typing import Any, Dict, List, Optional


class FinancialRatioCalculator:
    """Derived ratios over one period's base figures (already in millions)."""

    def __init__(self, figures: Dict[str, Any]) -> None:
        self.figures = figures or {}

    def _figure(self, key: str) -> float:
        return self.figures.get(key) or 0.0

    @staticmethod
    def _safe_divide(numerator: float, denominator: float) -> Optional[float]:
        if denominator is None or denominator <= 0:
            return None
        return numerator / denominator

    def net_margin(self) -> Optional[float]:
        ratio = self._safe_divide(self._figure("netProfit"), self._figure("revenue"))
        return None if ratio is None else ratio * 100

    def current_ratio(self) -> Optional[float]:
        return self._safe_divide(self._figure("currentAssets"), self._figure("currentLiabilities"))

    def debt_to_equity(self) -> Optional[float]:
        return self._safe_divide(self._figure("totalLiabilities"), self._figure("shareholderEquity"))

    def roe(self) -> Optional[float]:
        ratio = self._safe_divide(self._figure("netProfit"), self._figure("shareholderEquity"))
        return None if ratio is None else ratio * 100

    def calculate_all_ratios(self) -> Dict[str, Optional[float]]:
        return {
            "netMargin": self.net_margin(),
            "currentRatio": self.current_ratio(),
            "debtToEquity": self.debt_to_equity(),
            "roe": self.roe(),
        }


def calculate_cagr(values: List[float]) -> float:
    if not isinstance(values, list) or len(values) < 2:
        return 0.0
    start = values[0] or 0
    end = values[-1] or 0
    periods = len(values) - 1
    if start <= 0 or end <= 0:
        return 0.0
    return ((end / start) ** (1 / periods) - 1) * 100
