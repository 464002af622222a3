"""CDNs serving npm packages; versions come from the npm registry packument."""

from __future__ import annotations

import logging
import re
from typing import List

from common.http_client import get_json
from common.logging_utils import extra_context, is_debug_enabled
from constants import Constants, RegistryNames
from versioning.models import ModuleReference

from .base import Registry

logger = logging.getLogger(__name__)

# Optionally scoped npm package name: "lodash" or "@std/path"
_NPM_NAME = r"(?P<name>(?:@[^/@\s]+/)?[^/@\s]+)"
_NPM_VERSION = r"@(?P<version>[^/?\s]+)(?P<rest>.*)$"


def fetch_npm_versions(package: str) -> tuple[int, List[str]]:
    """Return (status, versions) from the npm packument of ``package``."""
    url = Constants.REGISTRY_URL_NPM + package.replace("/", "%2F")
    headers = {"Accept": "application/vnd.npm.install-v1+json; q=1.0, application/json; q=0.8, */*"}
    status, _, data = get_json(url, headers=headers)
    if status != 200 or not isinstance(data, dict):
        return status, []
    versions = list((data.get("versions") or {}).keys())
    if is_debug_enabled(logger):
        logger.debug(
            "npm versions fetched",
            extra=extra_context(
                event="versions",
                component="registry",
                action="list_versions",
                package_manager="npm",
                target=package,
                count=len(versions),
            )
        )
    return status, versions


class NpmCdnRegistry(Registry):
    """Base for CDNs whose module identity is an npm package name."""

    def list_versions(self, ref: ModuleReference) -> List[str]:
        status, versions = fetch_npm_versions(ref.name)
        if status != 200:
            raise self.lookup_failed(ref, status)
        return versions


class Unpkg(NpmCdnRegistry):
    """``https://unpkg.com/NAME@V/...``."""

    name = RegistryNames.UNPKG.value
    PATTERN = re.compile(r"^https?://unpkg\.com/" + _NPM_NAME + _NPM_VERSION)


class JsdelivrNpm(NpmCdnRegistry):
    """``https://cdn.jsdelivr.net/npm/NAME@V/...``."""

    name = RegistryNames.JSDELIVR_NPM.value
    PATTERN = re.compile(r"^https?://cdn\.jsdelivr\.net/npm/" + _NPM_NAME + _NPM_VERSION)


class EsmSh(NpmCdnRegistry):
    """``https://esm.sh/NAME@V`` with an optional ``/vNN/`` build prefix."""

    name = RegistryNames.ESM_SH.value
    PATTERN = re.compile(r"^https?://esm\.sh/(?:v\d+/)?(?:stable/)?" + _NPM_NAME + _NPM_VERSION)


class Skypack(NpmCdnRegistry):
    """``https://cdn.skypack.dev/NAME@V``."""

    name = RegistryNames.SKYPACK.value
    PATTERN = re.compile(r"^https?://cdn\.skypack\.dev/" + _NPM_NAME + _NPM_VERSION)
