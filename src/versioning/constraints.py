"""Constraint evaluation: pick the target version from a registry's version set."""

from typing import Iterable, List, Optional

from .errors import NoCompatibleVersionError
from .models import ConstraintKind, ConstraintToken
from .semver import ParsedVersion, parse_version, sort_versions


def _releases(versions: List[ParsedVersion]) -> List[ParsedVersion]:
    return [pair for pair in versions if not pair[0].prerelease and not pair[0].build]


def select_version(token: ConstraintToken, current: str, available: Iterable[str]) -> Optional[str]:
    """Return the registry's string for the version ``token`` selects.

    ``current`` is the bare version written in the specifier. The result is
    None when an unconstrained specifier is already at (or above) the newest
    release. Pre-releases are only reachable through an exact pin.

    Raises:
        InvalidVersionError: ``current`` (or the constraint operand) is not a
            semantic version.
        NoCompatibleVersionError: the constraint matches nothing available.
    """
    versions = sort_versions(available)

    if token.kind is ConstraintKind.NONE:
        floor = parse_version(current)
        newer = [raw for version, raw in _releases(versions) if version > floor]
        return newer[0] if newer else None

    if token.kind is ConstraintKind.EXACT:
        target = parse_version(token.version or current)
        for version, raw in versions:
            if version == target:
                return raw
        raise NoCompatibleVersionError()

    if token.kind is ConstraintKind.LESS_THAN:
        bound = parse_version(token.version)
        allowed = [raw for version, raw in _releases(versions) if version < bound]
    else:
        base = parse_version(token.version or current)
        if token.kind is ConstraintKind.TILDE:
            allowed = [
                raw for version, raw in _releases(versions)
                if version.major == base.major and version.minor == base.minor
            ]
        else:
            allowed = [raw for version, raw in _releases(versions) if version.major == base.major]

    if not allowed:
        raise NoCompatibleVersionError()
    return allowed[0]
