"""Registry capability shared by every concrete module source."""

from __future__ import annotations

import logging
import re
from abc import ABC, abstractmethod
from typing import ClassVar, List, Optional

from versioning.errors import LookupFailedError
from versioning.models import ModuleReference
from versioning.semver import is_version_token

logger = logging.getLogger(__name__)


class Registry(ABC):
    """A source of versioned modules addressed by URL specifiers.

    Subclasses provide ``PATTERN``, a regex matched against the specifier
    with its ``#fragment`` removed. It must define a ``version`` group and a
    ``name`` group, or override :meth:`module_name`. Recognition is pure
    pattern matching; only :meth:`list_versions` performs I/O.
    """

    name: ClassVar[str] = ""
    PATTERN: ClassVar[re.Pattern]

    def looks_like(self, text: str) -> bool:
        """Cheap shape test used by the scanner."""
        return self.PATTERN.match(text.split("#", 1)[0]) is not None

    def recognize(self, text: str) -> Optional[ModuleReference]:
        """Extract the module reference, or None if this registry does not own ``text``.

        A version segment that is not shaped like a version (for example a
        branch name) is not recognized.
        """
        url, sep, fragment = text.partition("#")
        match = self.PATTERN.match(url)
        if match is None:
            return None
        version = match.group("version")
        if not is_version_token(version):
            return None
        return ModuleReference(
            specifier=text,
            registry=self.name,
            name=self.module_name(match),
            version=version,
            fragment=fragment if sep else None,
            version_span=match.span("version"),
        )

    def module_name(self, match: re.Match) -> str:
        """Registry-specific module identity extracted from a PATTERN match."""
        return match.group("name")

    @abstractmethod
    def list_versions(self, ref: ModuleReference) -> List[str]:
        """Return every version published for ``ref``.

        Raises:
            LookupFailedError: the registry could not be queried.
        """

    def lookup_failed(self, ref: ModuleReference, status: int) -> LookupFailedError:
        """Build the error for a failed version listing."""
        detail = f"HTTP {status}" if status else "no response"
        logger.warning("Version lookup failed for %s on %s (%s)", ref.name, self.name, detail)
        return LookupFailedError(f"lookup failed: {ref.name} ({detail})")

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"
