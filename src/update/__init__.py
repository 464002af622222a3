"""Scan, resolve and rewrite URL specifiers in a document.

Usage:
    from registry import get_registries
    from update import update_text

    result = update_text(source, get_registries())
    result.text       # rewritten document
    result.outcomes   # per-specifier ResolutionOutcome list
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from registry.base import Registry
from versioning.models import ResolutionOutcome

from .resolver import Resolver
from .rewriter import rewrite
from .scanner import Candidate, scan

logger = logging.getLogger(__name__)


@dataclass
class UpdateResult:
    """Rewritten text plus outcomes, grouped by registry in precedence order."""
    original: str
    text: str
    outcomes: List[ResolutionOutcome] = field(default_factory=list)

    @property
    def changed(self) -> bool:
        return self.text != self.original

    @property
    def updates(self) -> List[ResolutionOutcome]:
        return [outcome for outcome in self.outcomes if outcome.changed]

    @property
    def failures(self) -> List[ResolutionOutcome]:
        return [outcome for outcome in self.outcomes if not outcome.success]


def update_text(
    text: str,
    registries: Sequence[Registry],
    max_workers: Optional[int] = None,
) -> UpdateResult:
    """Update every recognized specifier in ``text``; never raises per specifier."""
    outcomes = Resolver(registries, max_workers=max_workers).resolve(scan(text, registries))
    return UpdateResult(original=text, text=rewrite(text, outcomes), outcomes=outcomes)


def update_file(
    path: str,
    registries: Sequence[Registry],
    dry_run: bool = False,
    max_workers: Optional[int] = None,
) -> UpdateResult:
    """Update a file in place (UTF-8); nothing is written on a dry run or no change.

    Raises:
        OSError: the file cannot be read or written.
    """
    with open(path, encoding="utf-8", newline="") as handle:
        original = handle.read()
    result = update_text(original, registries, max_workers=max_workers)
    if result.changed and not dry_run:
        with open(path, "w", encoding="utf-8", newline="") as handle:
            handle.write(result.text)
        logger.debug("Wrote %s (%d updates)", path, len(result.updates))
    return result


__all__ = ["Candidate", "Resolver", "UpdateResult", "rewrite", "scan", "update_file", "update_text"]
