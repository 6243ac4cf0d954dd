"""
Convergence criteria for the Lloyd loop.

The k-means loop stops on an absolute decrease threshold of the objective.
The optional iteration cap lives in the algorithm loop itself.
"""

import math
import warnings
from typing import Dict, Any, Optional

from ..base.interfaces import ConvergenceCriterion
from ..base.errors import ConvergenceWarning


class ObjectiveDecrease(ConvergenceCriterion):
    """Converged once the objective stops dropping by at least ``threshold``.

    The first ``check`` only records the baseline J_prev. Each later call
    computes ``diff = J_prev - J_new`` and returns True when ``diff < threshold``;
    otherwise J_new becomes the new baseline. The threshold is absolute and
    independent of scale or N. An increase of the objective (negative diff)
    also stops the loop.
    """

    def __init__(self, threshold: float = 0.01):
        """
        Args:
            threshold: Minimum absolute decrease required to keep iterating
        """
        super().__init__()
        if not threshold > 0:
            raise ValueError(f"threshold must be positive, got {threshold}")
        self.threshold = threshold
        self._prev_objective: Optional[float] = None
        self.last_diff: Optional[float] = None

    def check(self, current_state: Dict[str, Any]) -> bool:
        """Check if objective has stabilized."""
        current_objective = float(current_state['objective'])

        if self._prev_objective is None:
            self._prev_objective = current_objective
            return False

        diff = self._prev_objective - current_objective
        self.last_diff = diff

        self.history.append({
            'iteration': current_state.get('iteration', len(self.history)),
            'objective': current_objective,
            'diff': diff
        })

        if math.isnan(diff):
            # NaN never compares below the threshold; stop instead of spinning.
            warnings.warn("Objective is not finite; stopping iteration",
                          ConvergenceWarning)
            return True

        if diff < self.threshold:
            return True

        self._prev_objective = current_objective
        return False

    def reset(self):
        super().reset()
        self._prev_objective = None
        self.last_diff = None
