"""Rewriting of ``?`` markers into PostgreSQL positional parameters"""

from typing import Any, Iterable

MARKER = "?"


def positional(index: int) -> str:
    """Render the placeholder for a 1-based parameter index"""
    return f"${index}"


def rewrite_placeholders(
    fragment: str,
    values: Iterable[Any],
    params: list[Any],
) -> tuple[str, int]:
    """Replace ``?`` markers left to right and bind the matching values.

    Each value replaces the first remaining marker with ``$<len(params)+1>``
    and is then appended to ``params``, so numbering continues from whatever
    the builder already holds.

    Returns the rewritten fragment and the number of values that found no
    marker. Those values are still appended. Markers without a value are left
    as a literal ``?``.
    """
    surplus = 0
    for value in values:
        if MARKER in fragment:
            fragment = fragment.replace(MARKER, positional(len(params) + 1), 1)
        else:
            surplus += 1
        params.append(value)
    return fragment, surplus
