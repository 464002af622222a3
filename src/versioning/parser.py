"""Constraint parsing for specifier fragments and path-embedded operators."""

from typing import Optional, Tuple

from .errors import InvalidFragmentError, InvalidVersionError
from .models import ConstraintKind, ConstraintToken
from .semver import parse_version

_FRAGMENT_OPERATORS = {
    "=": ConstraintKind.EXACT,
    "~": ConstraintKind.TILDE,
    "^": ConstraintKind.CARET,
    "<": ConstraintKind.LESS_THAN,
}

# "<" needs an explicit bound, so it cannot sit bare in a path.
_PATH_OPERATORS = {
    "=": ConstraintKind.EXACT,
    "~": ConstraintKind.TILDE,
    "^": ConstraintKind.CARET,
}


def parse_fragment(fragment: Optional[str]) -> ConstraintToken:
    """Parse the text after ``#`` into a ConstraintToken.

    Whitespace around the fragment and around the operand is ignored, so
    ``# < 0.1.0`` and ``#<0.1.0`` are equivalent. A missing or blank fragment
    means no constraint.

    Raises:
        InvalidFragmentError: the fragment does not start with = ~ ^ <.
        InvalidVersionError: the operand is not a semantic version, or "<"
            has no operand.
    """
    if fragment is None:
        return ConstraintToken(ConstraintKind.NONE)
    text = fragment.strip()
    if not text:
        return ConstraintToken(ConstraintKind.NONE)

    kind = _FRAGMENT_OPERATORS.get(text[0])
    if kind is None:
        raise InvalidFragmentError(text)

    operand = text[1:].strip()
    if not operand:
        if kind is ConstraintKind.LESS_THAN:
            raise InvalidVersionError(operand)
        return ConstraintToken(kind)

    parse_version(operand)
    return ConstraintToken(kind, operand)


def split_path_operator(version_token: str) -> Tuple[Optional[str], str]:
    """Split a path-embedded operator off a version token.

    ``"~1.2.3"`` gives ``("~", "1.2.3")``; a plain token gives ``(None, token)``.
    """
    if version_token and version_token[0] in _PATH_OPERATORS:
        return version_token[0], version_token[1:]
    return None, version_token


def path_operator_constraint(operator: str) -> ConstraintToken:
    """Constraint equivalent of a bare path operator (relative to current)."""
    return ConstraintToken(_PATH_OPERATORS[operator])
