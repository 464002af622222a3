"""Registries that can claim and resolve URL specifiers.

The order of ``DEFAULT_REGISTRIES`` is the default precedence: the first
registry whose pattern recognizes a specifier owns it.
"""

from typing import Dict, Iterable, List, Optional, Type

from .base import Registry
from .deno import DenoLand
from .github import GitHubRaw, JsdelivrGitHub
from .gitlab import GitLabRaw
from .npm_cdn import EsmSh, JsdelivrNpm, Skypack, Unpkg

REGISTRY_CLASSES: Dict[str, Type[Registry]] = {
    cls.name: cls
    for cls in (DenoLand, Unpkg, JsdelivrNpm, JsdelivrGitHub, EsmSh, Skypack, GitHubRaw, GitLabRaw)
}

DEFAULT_REGISTRIES: List[str] = list(REGISTRY_CLASSES)


def get_registries(names: Optional[Iterable[str]] = None) -> List[Registry]:
    """Instantiate registries in the given order (default precedence if None).

    Raises:
        ValueError: if a name is not a known registry.
    """
    selected = list(names) if names else DEFAULT_REGISTRIES
    unknown = [name for name in selected if name not in REGISTRY_CLASSES]
    if unknown:
        raise ValueError(
            f"Unknown registry: {', '.join(unknown)} (supported: {', '.join(REGISTRY_CLASSES)})"
        )
    return [REGISTRY_CLASSES[name]() for name in selected]


__all__ = [
    "Registry",
    "DenoLand",
    "Unpkg",
    "JsdelivrNpm",
    "JsdelivrGitHub",
    "EsmSh",
    "Skypack",
    "GitHubRaw",
    "GitLabRaw",
    "REGISTRY_CLASSES",
    "DEFAULT_REGISTRIES",
    "get_registries",
]
