"""GitHub API client for repository tags.

Provides a lightweight REST client used by the GitHub-backed registries
(raw.githubusercontent.com and jsDelivr's /gh/ endpoint).
"""
from __future__ import annotations

import os
import re
from typing import List, Optional, Dict, Any, Tuple

from constants import Constants
from common.http_client import get_json

_NEXT_LINK_RE = re.compile(r'<([^>]+)>;\s*rel="next"')


class GitHubClient:
    """Lightweight REST client for GitHub API operations.

    Supports optional authentication via GITHUB_TOKEN environment variable.
    """

    def __init__(self, base_url: Optional[str] = None, token: Optional[str] = None):
        """Initialize GitHub client.

        Args:
            base_url: Base URL for GitHub API (defaults to Constants.GITHUB_API_BASE)
            token: GitHub personal access token (defaults to GITHUB_TOKEN env var)
        """
        self.base_url = (base_url or Constants.GITHUB_API_BASE).rstrip('/')
        self.token = token or os.environ.get(Constants.ENV_GITHUB_TOKEN)

    def _get_headers(self) -> Dict[str, str]:
        """Get request headers including authorization if token is available."""
        headers = {'Accept': 'application/vnd.github+json'}
        if self.token:
            headers['Authorization'] = f'Bearer {self.token}'
        return headers

    def get_tags(self, owner: str, repo: str) -> Tuple[int, Optional[List[Dict[str, Any]]]]:
        """Fetch repository tags, following Link pagination.

        Args:
            owner: Repository owner
            repo: Repository name

        Returns:
            Tuple of (status of the first page, tag dictionaries or None when
            the first page fails)
        """
        results: List[Dict[str, Any]] = []
        url: Optional[str] = (
            f"{self.base_url}/repos/{owner}/{repo}/tags?per_page={Constants.REPO_API_PER_PAGE}"
        )
        pages = 0
        first_status = 0

        while url and pages < Constants.REPO_API_MAX_PAGES:
            status, headers, data = get_json(url, headers=self._get_headers())
            pages += 1
            if pages == 1:
                first_status = status
            if status != 200 or not isinstance(data, list):
                if pages == 1:
                    return status, None
                break
            results.extend(data)
            url = self._next_link(headers)

        return first_status, results

    def get_tag_names(self, owner: str, repo: str) -> Tuple[int, Optional[List[str]]]:
        """Fetch just the tag names of a repository."""
        status, tags = self.get_tags(owner, repo)
        if tags is None:
            return status, None
        return status, [tag['name'] for tag in tags if isinstance(tag, dict) and tag.get('name')]

    @staticmethod
    def _next_link(headers: Dict[str, str]) -> Optional[str]:
        for key, value in headers.items():
            if key.lower() == 'link':
                match = _NEXT_LINK_RE.search(value or '')
                return match.group(1) if match else None
        return None
