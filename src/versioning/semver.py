"""Semantic version parsing and ordering built on semantic_version."""

import logging
import re
from typing import Iterable, List, Tuple

import semantic_version

from .errors import InvalidVersionError

logger = logging.getLogger(__name__)

# Syntactic shape of a version segment: optional path operator, optional
# "v" tag prefix, then a dotted numeric start. Commit SHAs have no dot.
_VERSION_TOKEN_RE = re.compile(r"^[~^=]?v?\d+\.[0-9A-Za-z.+-]*$")

ParsedVersion = Tuple[semantic_version.Version, str]


def is_version_token(token: str) -> bool:
    """Return True when ``token`` is shaped like a version (validity not checked)."""
    return bool(token) and _VERSION_TOKEN_RE.match(token) is not None


def parse_version(token: str) -> semantic_version.Version:
    """Parse MAJOR.MINOR.PATCH, tolerating a leading ``v``.

    Raises:
        InvalidVersionError: if the token is not a semantic version.
    """
    text = token or ""
    if text.startswith("v"):
        text = text[1:]
    try:
        return semantic_version.Version(text)
    except ValueError as exc:
        raise InvalidVersionError(token or "") from exc


def same_version(left: str, right: str) -> bool:
    """Compare two version strings semantically, falling back to text."""
    try:
        return parse_version(left) == parse_version(right)
    except InvalidVersionError:
        return left == right


def sort_versions(tokens: Iterable[str]) -> List[ParsedVersion]:
    """Return (parsed, raw) pairs for every parsable token, highest first.

    Unparsable tokens (branch names, "latest", ...) are skipped. When two raw
    strings denote the same version the first one reported wins.
    """
    seen = set()
    parsed: List[ParsedVersion] = []
    for raw in tokens:
        try:
            version = parse_version(raw)
        except InvalidVersionError:
            logger.debug("Skipping non-semver version: %s", raw)
            continue
        if version in seen:
            continue
        seen.add(version)
        parsed.append((version, raw))
    parsed.sort(key=lambda pair: pair[0], reverse=True)
    return parsed
