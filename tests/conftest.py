"""Shared fixtures: isolate tunables and the HTTP cache between tests."""

import pytest

from common.http_client import clear_cache
from constants import Constants

_TUNABLES = (
    "REQUEST_TIMEOUT",
    "MAX_WORKERS",
    "HTTP_RETRY_MAX",
    "HTTP_CACHE_TTL_SEC",
    "HTTP_RETRY_BASE_DELAY_SEC",
    "REPO_API_MAX_PAGES",
)


@pytest.fixture(autouse=True)
def _isolate_constants_and_cache():
    saved = {name: getattr(Constants, name) for name in _TUNABLES}
    Constants.HTTP_RETRY_BASE_DELAY_SEC = 0
    clear_cache()
    yield
    for name, value in saved.items():
        setattr(Constants, name, value)
    clear_cache()
