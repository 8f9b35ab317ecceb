"""Plain-language interpretation of gait scores.

Functions
---------
describe_stability
    Sentence describing a stability score band.
describe_rhythm
    Sentence describing a rhythm score band.
improvement_suggestions
    ``(title, text)`` tips for low scores.
"""

from typing import List, Tuple

# Lower bounds of each band, highest first; the last entry covers < 50.
_BANDS = (90, 80, 70, 60, 50)

_STABILITY_TEXT = (
    "Very little sway while walking; balance is excellent.",
    "Little sway while walking; balance is very good.",
    "Walking pattern is generally stable.",
    "Some instability, but within a good range.",
    "Instability detected while walking.",
    "Walking stability is low and needs improvement.",
)

_RHYTHM_TEXT = (
    "Stride length and pace are exceptionally consistent.",
    "Stride length and pace are very consistent.",
    "Walking rhythm is mostly regular.",
    "Some irregularity, but rhythm is within a good range.",
    "Irregular walking rhythm detected.",
    "Walking rhythm is irregular and needs improvement.",
)

_SUGGESTION_THRESHOLD = 70

_STABILITY_TIP = (
    "Improve walking stability",
    "Land heel first and keep your upper body upright. "
    "Balance exercises help build stability.",
)
_RHYTHM_TIP = (
    "Improve walking rhythm",
    "Try walking to a metronome to keep a steady pace. "
    "Practicing a regular step pattern improves rhythm.",
)
_DATA_TIP = (
    "For a more accurate analysis",
    "Record walking data in VIDEO mode at least three times a week.",
)


def _band(score: int) -> int:
    for i, lower in enumerate(_BANDS):
        if score >= lower:
            return i
    return len(_BANDS)


def describe_stability(score: int) -> str:
    """Describe a stability score (bands at 90/80/70/60/50)."""
    return _STABILITY_TEXT[_band(score)]


def describe_rhythm(score: int) -> str:
    """Describe a rhythm score (bands at 90/80/70/60/50)."""
    return _RHYTHM_TEXT[_band(score)]


def improvement_suggestions(stability_score: int, rhythm_score: int) -> List[Tuple[str, str]]:
    """Tips for the user, as ``(title, text)`` pairs.

    A stability tip is included below 70, a rhythm tip below 70, and a
    data-collection tip is always last.
    """
    suggestions = []
    if stability_score < _SUGGESTION_THRESHOLD:
        suggestions.append(_STABILITY_TIP)
    if rhythm_score < _SUGGESTION_THRESHOLD:
        suggestions.append(_RHYTHM_TIP)
    suggestions.append(_DATA_TIP)
    return suggestions
