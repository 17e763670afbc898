"""
Deterministic calculation engine.

Pure Python math. No I/O.
Given a ParameterSet, produce the full annual projection; the sensitivity
and breakeven drivers sit on top of that one function.
"""

from .breakeven import BreakevenBasis, breakeven
from .financials import evaluate
from .sensitivity import scan_length, sensitivity_scan

__all__ = ["BreakevenBasis", "breakeven", "evaluate", "scan_length", "sensitivity_scan"]
