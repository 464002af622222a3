"""GitLab-hosted raw files; versions are the project's tag names."""

from __future__ import annotations

import re
from typing import List, Optional

from constants import RegistryNames
from repository.gitlab import GitLabClient
from versioning.models import ModuleReference

from .base import Registry


class GitLabRaw(Registry):
    """``https://gitlab.com/NAMESPACE/PROJECT/-/raw/TAG/...`` (subgroups allowed)."""

    name = RegistryNames.GITLAB_RAW.value
    PATTERN = re.compile(
        r"^https?://gitlab\.com/(?P<owner>[^\s]+?)/(?P<repo>[^/\s]+)/-/raw/"
        r"(?P<version>[^/\s]+)(?P<rest>/.*)$"
    )

    def __init__(self, client: Optional[GitLabClient] = None):
        self._client = client

    @property
    def client(self) -> GitLabClient:
        if self._client is None:
            self._client = GitLabClient()
        return self._client

    def module_name(self, match: re.Match) -> str:
        return f"{match.group('owner')}/{match.group('repo')}"

    def list_versions(self, ref: ModuleReference) -> List[str]:
        owner, repo = ref.name.rsplit("/", 1)
        status, tags = self.client.get_tag_names(owner, repo)
        if tags is None:
            raise self.lookup_failed(ref, status)
        return tags
