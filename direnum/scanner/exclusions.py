"""Path-based exclusion matching."""

from collections.abc import Sequence


def is_excluded(path: str, exclusions: Sequence[str]) -> bool:
    """Return True if any exclusion substring occurs in ``path``, ignoring case."""
    if not exclusions:
        return False
    folded = path.casefold()
    return any(exclusion.casefold() in folded for exclusion in exclusions)
