"""
Poha mill financial planner.

Deterministic single-year projection for a paddy-to-poha mill with a
byproduct stream: production, revenue, costs, working capital, balance
sheet totals and return ratios from one flat set of parameters.
"""

__version__ = "1.0.0"
