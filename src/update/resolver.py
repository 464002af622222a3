"""Resolve scanned specifiers against registries into rewrite outcomes."""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, replace
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from common.logging_utils import extra_context, Timer
from constants import Constants
from registry.base import Registry
from versioning.constraints import select_version
from versioning.errors import LookupFailedError, PinupError
from versioning.models import ConstraintToken, ModuleReference, ResolutionOutcome, SpecifierReplacement
from versioning.parser import parse_fragment, path_operator_constraint, split_path_operator
from versioning.semver import parse_version, same_version

from .scanner import Candidate

logger = logging.getLogger(__name__)


@dataclass
class _Claim:
    """A candidate owned by a registry, with its parsed constraint."""
    registry_index: int
    position: int
    registry: Registry
    ref: ModuleReference
    token: Optional[ConstraintToken] = None
    bare_version: str = ""
    path_operator: Optional[str] = None
    error: Optional[PinupError] = None


class Resolver:
    """Claims candidates for registries and picks their target versions.

    Registries are tried in the given order and the first whose
    ``recognize`` succeeds owns the candidate. Version lookups run on a
    thread pool. Outcomes are grouped by registry (in registry order), and
    by textual position within a registry.
    """

    def __init__(self, registries: Sequence[Registry], max_workers: Optional[int] = None):
        self.registries = list(registries)
        self.max_workers = max_workers or Constants.MAX_WORKERS

    def claim(self, candidate: Candidate) -> Optional[Tuple[int, Registry, ModuleReference]]:
        """Return (index, registry, reference) of the first registry recognizing ``candidate``."""
        for index, registry in enumerate(self.registries):
            ref = registry.recognize(candidate.text)
            if ref is not None:
                return index, registry, ref
        return None

    def resolve(self, candidates: Iterable[Candidate]) -> List[ResolutionOutcome]:
        """Resolve every claimed candidate, one outcome each.

        Identical specifier strings share a single version lookup.
        """
        claims: List[_Claim] = []
        for position, candidate in enumerate(candidates):
            claimed = self.claim(candidate)
            if claimed is None:
                logger.debug("No registry claims %s", candidate.text)
                continue
            index, registry, ref = claimed
            claims.append(self._prepare(_Claim(index, position, registry, ref)))

        if not claims:
            return []

        claims.sort(key=lambda claim: (claim.registry_index, claim.position))
        unique: Dict[str, _Claim] = {}
        for claim in claims:
            unique.setdefault(claim.ref.specifier, claim)

        workers = max(1, min(self.max_workers, len(unique)))
        with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="pinup-lookup") as executor:
            futures = {
                specifier: executor.submit(self._resolve_claim, claim)
                for specifier, claim in unique.items()
            }
            return [replace(futures[claim.ref.specifier].result()) for claim in claims]

    @staticmethod
    def _prepare(claim: _Claim) -> _Claim:
        """Parse the constraint and path version before any lookup happens.

        An explicit trailing fragment takes precedence over a path operator;
        the path operator is then only stripped.
        """
        ref = claim.ref
        operator, bare = split_path_operator(ref.version)
        claim.path_operator = operator
        claim.bare_version = bare
        has_fragment = ref.fragment is not None and ref.fragment.strip() != ""
        try:
            if has_fragment or operator is None:
                claim.token = parse_fragment(ref.fragment)
            else:
                claim.token = path_operator_constraint(operator)
            parse_version(bare)
        except PinupError as exc:
            claim.error = exc
        return claim

    def _resolve_claim(self, claim: _Claim) -> ResolutionOutcome:
        ref = claim.ref
        registry = claim.registry
        if claim.error is not None:
            return self._failed(claim, claim.error.message)

        logger.info("Looking for releases: %s", ref.specifier)
        try:
            with Timer() as timer:
                versions = registry.list_versions(ref)
        except LookupFailedError as exc:
            return self._failed(claim, exc.message)
        except Exception as exc:  # pylint: disable=broad-exception-caught
            logger.debug("Unexpected lookup error for %s", ref.specifier, exc_info=True)
            return self._failed(claim, f"lookup failed: {ref.name} ({exc})")
        logger.debug(
            "Versions listed",
            extra=extra_context(
                event="versions",
                component="resolver",
                action="list_versions",
                target=ref.name,
                registry=registry.name,
                count=len(versions),
                duration_ms=timer.duration_ms(),
            )
        )

        try:
            selected = select_version(claim.token, claim.bare_version, versions)
        except PinupError as exc:
            return self._failed(claim, exc.message)

        new_specifier = self._build_specifier(claim, selected)
        if new_specifier == ref.specifier:
            logger.info("Using latest: %s", ref.specifier)
            return ResolutionOutcome(specifier=ref.specifier, registry=registry.name, success=True)

        logger.info("Updating: %s -> %s", ref.specifier, new_specifier)
        return ResolutionOutcome(
            specifier=ref.specifier,
            registry=registry.name,
            success=True,
            replaced=SpecifierReplacement(old=ref.specifier, new=new_specifier),
        )

    @staticmethod
    def _build_specifier(claim: _Claim, selected: Optional[str]) -> str:
        """Substitute the target version; relocate a bare path operator into the fragment."""
        ref = claim.ref
        version = claim.bare_version
        if selected is not None and not same_version(selected, claim.bare_version):
            version = selected
        if claim.path_operator is None:
            return ref.at(version)
        if ref.fragment is not None and ref.fragment.strip():
            return ref.at(version)
        return ref.at(version, fragment=claim.path_operator)

    @staticmethod
    def _failed(claim: _Claim, message: str) -> ResolutionOutcome:
        logger.warning("%s: %s", claim.ref.specifier, message)
        return ResolutionOutcome(
            specifier=claim.ref.specifier,
            registry=claim.registry.name,
            success=False,
            message=message,
        )
