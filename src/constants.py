"""Constants used in the project."""

from enum import Enum


class ExitCodes(Enum):
    """Exit codes for the program.

    Args:
        Enum (int): Exit codes for the program.
    """

    SUCCESS = 0
    FILE_ERROR = 1
    CONFIG_ERROR = 2
    EXIT_WARNINGS = 3
    TEST_FAILED = 4


class RegistryNames(Enum):
    """Registries shipped with the program, in default precedence order.

    Args:
        Enum (string): Registry identifiers accepted by --registry.
    """

    DENO_LAND = "deno.land"
    UNPKG = "unpkg"
    JSDELIVR_NPM = "jsdelivr-npm"
    JSDELIVR_GH = "jsdelivr-gh"
    ESM_SH = "esm.sh"
    SKYPACK = "skypack"
    GITHUB_RAW = "github-raw"
    GITLAB_RAW = "gitlab-raw"


class Constants:  # pylint: disable=too-few-public-methods
    """General constants used in the project.
    Data holder for configuration constants; not intended to provide behavior.
    """

    REGISTRY_URL_NPM = "https://registry.npmjs.org/"
    REGISTRY_URL_DENO_CDN = "https://cdn.deno.land/"
    SUPPORTED_REGISTRIES = [name.value for name in RegistryNames]
    LOG_FORMAT = "[%(levelname)s] %(message)s"
    LOG_FILE_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"
    ENV_LOG_LEVEL = "PINUP_LOG_LEVEL"
    CONFIG_SECTION = "pinup"
    REQUEST_TIMEOUT = 30  # Timeout in seconds for all HTTP requests
    MAX_WORKERS = 8  # Concurrent registry lookups

    # Repository API constants
    GITHUB_API_BASE = "https://api.github.com"
    GITLAB_API_BASE = "https://gitlab.com/api/v4"
    ENV_GITHUB_TOKEN = "GITHUB_TOKEN"
    ENV_GITLAB_TOKEN = "GITLAB_TOKEN"
    REPO_API_PER_PAGE = 100
    REPO_API_MAX_PAGES = 10
    HTTP_RETRY_MAX = 3
    HTTP_RETRY_BASE_DELAY_SEC = 0.3
    HTTP_CACHE_TTL_SEC = 300

    # Resolution messages surfaced in outcomes
    MSG_NO_COMPATIBLE = "no compatible version found"
    MSG_INVALID_VERSION = "invalid semver version: "
    MSG_INVALID_FRAGMENT = "invalid semver fragment: "
