"""
Sensitivity scan: repeated single-point evaluation.

For each percent change i in [low, high] (stepped by `step`, low end first),
replace one variable with base * (1 + i/100), run the engine, and record
net profit, EBITDA, ROCE and revenue. Holds no state between calls.
"""

import logging
from typing import List

from ..parameters import ParameterSet, SensitivityVariable
from ..results import SensitivityPoint
from .base import BaseCalculator
from .financials import evaluate

logger = logging.getLogger(__name__)

DEFAULT_STEP_PCT = 2


class SensitivityCalculator(BaseCalculator):

    def calculate(self, params: ParameterSet, variable: SensitivityVariable,
                  low: float = -20, high: float = 20,
                  step: float = DEFAULT_STEP_PCT) -> List[SensitivityPoint]:
        """
        Returns one SensitivityPoint per step. An empty list when high < low.
        Raises ValueError for a non-positive step.
        """
        if step <= 0:
            raise ValueError(f"Sensitivity step must be positive, got {step}")

        base_value = variable.get(params)
        logger.debug("Sensitivity scan on %s (base %s) from %s%% to %s%%",
                     variable.value, base_value, low, high)

        points = []
        for change in self.changes(low, high, step):
            value = base_value * (1 + change / 100)
            outcome = evaluate(variable.replace(params, value))
            if outcome.ok:
                points.append(SensitivityPoint(
                    change=change,
                    value=value,
                    net_profit=outcome.net_profit,
                    ebitda=outcome.ebitda,
                    roce=outcome.roce,
                    revenue=outcome.annual_revenue,
                ))
            else:
                points.append(SensitivityPoint(change=change, value=value, error=outcome.error))
        return points

    def changes(self, low: float, high: float, step: float) -> List[float]:
        """Percent changes low, low+step, ... up to and including high."""
        out = []
        i = 0
        change = low
        while change <= high:
            out.append(change)
            i += 1
            change = low + i * step
        return out

    def count(self, low: float, high: float, step: float = DEFAULT_STEP_PCT) -> int:
        """Number of evaluations a scan over [low, high] will run."""
        if high < low:
            return 0
        return int((high - low) // step) + 1


_calculator = SensitivityCalculator()


def sensitivity_scan(params: ParameterSet, variable: SensitivityVariable,
                     low: float = -20, high: float = 20,
                     step: float = DEFAULT_STEP_PCT) -> List[SensitivityPoint]:
    return _calculator.calculate(params, variable, low, high, step)


def scan_length(low: float, high: float, step: float = DEFAULT_STEP_PCT) -> int:
    return _calculator.count(low, high, step)
