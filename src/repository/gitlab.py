"""GitLab API client for repository tags.

Provides a lightweight REST client used by the GitLab raw-file registry to
list the tags a project has published.
"""
from __future__ import annotations

import os
from typing import List, Optional, Dict, Any, Tuple
from urllib.parse import quote

from constants import Constants
from common.http_client import get_json


class GitLabClient:
    """Lightweight REST client for GitLab API operations.

    Supports optional authentication via GITLAB_TOKEN environment variable.
    """

    def __init__(self, base_url: Optional[str] = None, token: Optional[str] = None):
        """Initialize GitLab client.

        Args:
            base_url: Base URL for GitLab API (defaults to Constants.GITLAB_API_BASE)
            token: GitLab personal access token (defaults to GITLAB_TOKEN env var)
        """
        self.base_url = (base_url or Constants.GITLAB_API_BASE).rstrip('/')
        self.token = token or os.environ.get(Constants.ENV_GITLAB_TOKEN)

    def _get_headers(self) -> Dict[str, str]:
        """Get request headers including authorization if token is available."""
        headers = {}
        if self.token:
            headers['Private-Token'] = self.token
        return headers

    def get_tags(self, owner: str, repo: str) -> Tuple[int, Optional[List[Dict[str, Any]]]]:
        """Fetch project tags with pagination.

        Args:
            owner: Project owner/namespace (may contain subgroups)
            repo: Project name

        Returns:
            Tuple of (status of the first page, tag dictionaries or None when
            the first page fails)
        """
        project_path = quote(f"{owner}/{repo}", safe='')
        return self._get_paginated_results(
            f"{self.base_url}/projects/{project_path}/repository/tags"
        )

    def get_tag_names(self, owner: str, repo: str) -> Tuple[int, Optional[List[str]]]:
        """Fetch just the tag names of a project."""
        status, tags = self.get_tags(owner, repo)
        if tags is None:
            return status, None
        return status, [tag['name'] for tag in tags if isinstance(tag, dict) and tag.get('name')]

    def _get_paginated_results(self, url: str) -> Tuple[int, Optional[List[Dict[str, Any]]]]:
        """Fetch all pages of a paginated endpoint.

        Args:
            url: Base URL for paginated endpoint

        Returns:
            Tuple of (status of the first page, all results across pages or
            None if the first page failed)
        """
        results: List[Dict[str, Any]] = []
        current_url: Optional[str] = f"{url}?per_page={Constants.REPO_API_PER_PAGE}"
        pages = 0
        first_status = 0

        while current_url and pages < Constants.REPO_API_MAX_PAGES:
            status, headers, data = get_json(current_url, headers=self._get_headers())
            pages += 1
            if pages == 1:
                first_status = status

            if status != 200 or not isinstance(data, list):
                if pages == 1:
                    return status, None
                break

            results.extend(data)

            # Check for next page
            current_page = self._get_int_header(headers, 'x-page')
            total_pages = self._get_int_header(headers, 'x-total-pages')

            if current_page and total_pages and current_page < total_pages:
                next_page = current_page + 1
                current_url = f"{url}?per_page={Constants.REPO_API_PER_PAGE}&page={next_page}"
            else:
                current_url = None

        return first_status, results

    @staticmethod
    def _get_int_header(headers: Dict[str, str], name: str) -> Optional[int]:
        """Extract an integer pagination header, case-insensitively.

        Args:
            headers: Response headers
            name: Lower-case header name

        Returns:
            Header value as int or None
        """
        for key, value in headers.items():
            if key.lower() == name:
                try:
                    return int(value)
                except (TypeError, ValueError):
                    return None
        return None
