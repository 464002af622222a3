"""deno.land registry: the standard library and third-party /x/ modules."""

from __future__ import annotations

import re
from typing import List

from common.http_client import get_json
from constants import Constants, RegistryNames
from versioning.models import ModuleReference

from .base import Registry


class DenoLand(Registry):
    """``https://deno.land/std@V/...`` and ``https://deno.land/x/NAME@V/...``."""

    name = RegistryNames.DENO_LAND.value
    PATTERN = re.compile(
        r"^https?://deno\.land/(?:x/)?(?P<name>[^/@\s]+)@(?P<version>[^/?\s]+)(?P<rest>.*)$"
    )

    def list_versions(self, ref: ModuleReference) -> List[str]:
        url = f"{Constants.REGISTRY_URL_DENO_CDN}{ref.name}/meta/versions.json"
        status, _, data = get_json(url)
        if status != 200 or not isinstance(data, dict):
            raise self.lookup_failed(ref, status)
        versions = data.get("versions") or []
        return [v for v in versions if isinstance(v, str)]
