"""GitHub-hosted modules; versions are the repository's tag names."""

from __future__ import annotations

import re
from typing import List, Optional

from constants import RegistryNames
from repository.github import GitHubClient
from versioning.models import ModuleReference

from .base import Registry


class GitHubTagsRegistry(Registry):
    """Base for registries addressing a GitHub repository at a tag."""

    def __init__(self, client: Optional[GitHubClient] = None):
        self._client = client

    @property
    def client(self) -> GitHubClient:
        if self._client is None:
            self._client = GitHubClient()
        return self._client

    def module_name(self, match: re.Match) -> str:
        return f"{match.group('owner')}/{match.group('repo')}"

    def list_versions(self, ref: ModuleReference) -> List[str]:
        owner, repo = ref.name.split("/", 1)
        status, tags = self.client.get_tag_names(owner, repo)
        if tags is None:
            raise self.lookup_failed(ref, status)
        return tags


class GitHubRaw(GitHubTagsRegistry):
    """``https://raw.githubusercontent.com/OWNER/REPO/TAG/...``."""

    name = RegistryNames.GITHUB_RAW.value
    PATTERN = re.compile(
        r"^https?://raw\.githubusercontent\.com/(?P<owner>[^/\s]+)/(?P<repo>[^/\s]+)/"
        r"(?P<version>[^/\s]+)(?P<rest>/.*)$"
    )


class JsdelivrGitHub(GitHubTagsRegistry):
    """``https://cdn.jsdelivr.net/gh/OWNER/REPO@TAG/...``."""

    name = RegistryNames.JSDELIVR_GH.value
    PATTERN = re.compile(
        r"^https?://cdn\.jsdelivr\.net/gh/(?P<owner>[^/\s]+)/(?P<repo>[^/@\s]+)@"
        r"(?P<version>[^/?\s]+)(?P<rest>.*)$"
    )
