"""Error taxonomy and tagged analysis outcomes.

The analyzers raise :class:`InvalidInput` or :class:`InsufficientPeaks`
internally.  The ``evaluate_*`` entry points catch them and hand back an
:class:`Outcome`, so callers choose whether to log, display an
"insufficient data" state, or fall back to the all-zero metrics.
"""

from dataclasses import dataclass
from typing import Any, Optional


class GaitAnalysisError(ValueError):
    """Base class for recoverable analysis failures."""

    code = "analysis_error"


class InvalidInput(GaitAnalysisError):
    """Empty, malformed or degenerate sample sequence."""

    code = "invalid_input"


class InsufficientPeaks(GaitAnalysisError):
    """Fewer than two steps were detected on the vertical axis."""

    code = "insufficient_peaks"

    def __init__(self, n_peaks: int):
        super().__init__(f"Not enough steps detected: {n_peaks} peak(s), need at least 2")
        self.n_peaks = n_peaks


@dataclass(frozen=True)
class Outcome:
    """Result of one analysis stage: either a value or an error.

    Attributes
    ----------
    value : object or None
        Metrics record on success.
    error : GaitAnalysisError or None
        The failure that prevented the computation.
    fallback : object or None
        Zero metrics returned by :meth:`value_or_zero` on failure.
    """

    value: Any = None
    error: Optional[GaitAnalysisError] = None
    fallback: Any = None

    @classmethod
    def success(cls, value) -> "Outcome":
        return cls(value=value)

    @classmethod
    def failure(cls, error: GaitAnalysisError, fallback=None) -> "Outcome":
        return cls(error=error, fallback=fallback)

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def error_code(self) -> Optional[str]:
        return None if self.error is None else self.error.code

    def value_or_zero(self):
        """Return the metrics on success, the zero fallback otherwise."""
        return self.value if self.ok else self.fallback

    def unwrap(self):
        """Return the metrics, re-raising the stored error on failure."""
        if self.error is not None:
            raise self.error
        return self.value
