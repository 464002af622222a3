"""Apply resolved replacements to a document."""

from typing import Iterable

from versioning.models import ResolutionOutcome


def rewrite(text: str, outcomes: Iterable[ResolutionOutcome]) -> str:
    """Return ``text`` with every changed specifier substituted.

    Substitution is global and literal: every occurrence of the old
    specifier string is replaced, including occurrences the scanner skipped
    because they sit inside a comment. Repeated outcomes for the same
    specifier are applied once.
    """
    applied = set()
    for outcome in outcomes:
        if not outcome.changed or outcome.replaced.old in applied:
            continue
        applied.add(outcome.replaced.old)
        text = text.replace(outcome.replaced.old, outcome.replaced.new)
    return text
