"""Data models for constraint parsing and specifier resolution."""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple


class ConstraintKind(Enum):
    """Constraint operators understood in fragments and path versions."""
    NONE = "none"
    EXACT = "="
    TILDE = "~"
    CARET = "^"
    LESS_THAN = "<"


@dataclass(frozen=True)
class ConstraintToken:
    """Parsed constraint; ``version`` None means relative to the current version."""
    kind: ConstraintKind
    version: Optional[str] = None


_KEEP = object()


@dataclass(frozen=True)
class ModuleReference:
    """Module identity a registry extracted from a specifier.

    ``version`` is the raw version token as written (it may still carry a
    path operator such as ``~``); ``version_span`` locates it inside
    ``specifier``. ``fragment`` is the raw text after ``#``, whitespace
    included, or None when the specifier has no ``#``.
    """
    specifier: str
    registry: str
    name: str
    version: str
    fragment: Optional[str]
    version_span: Tuple[int, int]

    def at(self, version: str, fragment=_KEEP) -> str:
        """Return the specifier with ``version`` substituted.

        Every other character is kept. When ``fragment`` is given the
        trailing ``#...`` is replaced by ``#<fragment>``.
        """
        start, end = self.version_span
        updated = self.specifier[:start] + version + self.specifier[end:]
        if fragment is _KEEP:
            return updated
        base = updated.split("#", 1)[0]
        if fragment is None:
            return base
        return f"{base}#{fragment}"


@dataclass(frozen=True)
class SpecifierReplacement:
    """Old and new text of a rewritten specifier."""
    old: str
    new: str


@dataclass
class ResolutionOutcome:
    """Resolution outcome for one specifier claimed by a registry."""
    specifier: str
    registry: str
    success: bool
    message: Optional[str] = None
    replaced: Optional[SpecifierReplacement] = None

    @property
    def changed(self) -> bool:
        """True when the specifier is rewritten to different text."""
        return self.success and self.replaced is not None and self.replaced.old != self.replaced.new
