"""
Abstract base class for the projection calculators.

Input: a ParameterSet (or a computed ProjectionResult for the drivers)
Output: a result contract from millplan.results
"""

import logging
import math
from abc import ABC, abstractmethod

logger = logging.getLogger(__name__)


class CalculationError(ArithmeticError):
    """A derived value came out NaN or infinite."""


class BaseCalculator(ABC):
    """All calculators inherit from this."""

    DAYS_PER_YEAR = 365     # flat basis for daily money rates
    MONTHS_PER_YEAR = 12

    @abstractmethod
    def calculate(self, *args, **kwargs):
        pass

    # --- Helper methods for all calculators ---

    def pct(self, value: float) -> float:
        """Convert a 0-100 percentage to a fraction at point of use."""
        return value / 100

    def ratio_pct(self, numerator: float, denominator: float, positive_only: bool = True) -> float:
        """
        numerator / denominator as a percentage.
        Returns 0 when the denominator is unusable: <= 0 when positive_only,
        otherwise only when exactly 0. Never NaN or infinity.
        """
        if positive_only and denominator <= 0:
            return 0.0
        if denominator == 0:
            return 0.0
        return numerator / denominator * 100

    def annualize_monthly(self, monthly: float) -> float:
        return monthly * self.MONTHS_PER_YEAR

    def operating_days(self, days_per_month: float) -> float:
        """Operating days in a year; the production basis, not 365."""
        return days_per_month * self.MONTHS_PER_YEAR

    def require_finite(self, values: dict) -> None:
        """Raise CalculationError naming the first non-finite value."""
        for name, value in values.items():
            if isinstance(value, bool):
                continue
            if not math.isfinite(value):
                raise CalculationError(f"{name} is not finite ({value})")
