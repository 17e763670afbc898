"""
Caller-side state: the current Parameter Set and its last projection.

The engine is a pure function; this is the one place that holds inputs
between edits. Every update recomputes the whole projection from the merged
Parameter Set, never patching the previous result.
"""

import logging
from typing import Optional

from .calculators.financials import evaluate
from .parameters import ParameterSet, default_parameters
from .results import Projection

logger = logging.getLogger(__name__)


class Scenario:

    def __init__(self, params: Optional[ParameterSet] = None):
        self.params = params or default_parameters()
        self.result: Projection = evaluate(self.params)

    def update(self, **changes) -> Projection:
        """Merge field changes into the inputs and recompute."""
        self.params = self.params.with_changes(**changes)
        self.result = evaluate(self.params)
        logger.debug("Scenario updated: %s", sorted(changes))
        return self.result

    def reset(self) -> Projection:
        self.params = default_parameters()
        self.result = evaluate(self.params)
        return self.result
