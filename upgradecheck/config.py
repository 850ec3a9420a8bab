"""Runtime settings using Pydantic.

Settings come from (lowest to highest precedence) built-in defaults, an
optional YAML file, the ``DEPENDENCY_CHECK_SCRIPT`` environment variable,
and command-line flags applied by the CLI.
"""

import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Literal

import yaml
from pydantic import BaseModel, Field, field_validator

SCANNER_ENV_VAR = "DEPENDENCY_CHECK_SCRIPT"
DEFAULT_SCANNER_SCRIPT = "./dependency-check.sh"

MAVEN_SEARCH_URL = "https://search.maven.org/solrsearch/select"
MAVEN_REPOSITORY_URL = "https://repo1.maven.org/maven2"


class Settings(BaseModel):
    """Validated upgrade-check configuration.

    Example YAML::

        scanner_script: /opt/dependency-check/bin/dependency-check.sh
        scan_timeout: 900
        http_retries: 2
        order: semver
        verify_cache: true

    Attributes:
        search_url: Maven Central Solr search endpoint.
        repository_url: Base URL of the Maven 2 repository layout.
        rows: Number of registry results requested (first page only).
        connect_timeout: HTTP connect timeout in seconds.
        read_timeout: HTTP read timeout in seconds.
        http_retries: Extra attempts on connection errors and timeouts.
            ``0`` disables retrying.
        scanner_script: Path to the Dependency-Check launcher.
        scan_output_dir: ``--out`` argument, relative to the scanner's
            directory.
        scan_timeout: Seconds to wait for the scanner.  ``None`` blocks
            until it exits.
        download_dir: Directory jars are cached in.
        order: ``registry`` trusts the registry's ordering; ``semver`` sorts
            candidates newest first.
        verify_cache: Validate cached jars against a stored SHA-256 digest.
    """

    search_url: str = MAVEN_SEARCH_URL
    repository_url: str = MAVEN_REPOSITORY_URL
    rows: int = Field(default=20, ge=1, le=200)
    connect_timeout: float = Field(default=10.0, gt=0)
    read_timeout: float = Field(default=120.0, gt=0)
    http_retries: int = Field(default=0, ge=0, le=10)
    scanner_script: Path = Path(DEFAULT_SCANNER_SCRIPT)
    scan_output_dir: str = "./output"
    scan_timeout: float | None = Field(default=None, gt=0)
    download_dir: Path = Field(default_factory=Path.cwd)
    order: Literal["registry", "semver"] = "registry"
    verify_cache: bool = False

    @field_validator("search_url", "repository_url")
    @classmethod
    def _strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")

    @property
    def http_timeout(self) -> tuple[float, float]:
        """``(connect, read)`` tuple as accepted by ``requests``."""
        return (self.connect_timeout, self.read_timeout)


def load_settings(
    path: Path | None = None,
    environ: Mapping[str, str] | None = None,
    **overrides: Any,
) -> Settings:
    """Build settings from a YAML file, the environment and overrides.

    Args:
        path: Optional YAML settings file.
        environ: Environment mapping; defaults to ``os.environ``.
        **overrides: Explicit values (e.g. from CLI flags).  ``None`` values
            are ignored so unset flags don't mask lower layers.

    Returns:
        Validated ``Settings`` instance.

    Raises:
        FileNotFoundError: if ``path`` doesn't exist.
        ValueError: if the file is not a YAML mapping.
        pydantic.ValidationError: if a value fails validation.
    """
    raw: dict[str, Any] = {}
    if path is not None:
        loaded = yaml.safe_load(path.read_text(encoding="utf-8"))
        if loaded is None:
            loaded = {}
        if not isinstance(loaded, dict):
            raise ValueError(f"Settings file {path} must contain a mapping, got {type(loaded).__name__}")
        raw.update(loaded)

    env = os.environ if environ is None else environ
    script = env.get(SCANNER_ENV_VAR)
    if script:
        raw["scanner_script"] = script

    raw.update({k: v for k, v in overrides.items() if v is not None})
    return Settings.model_validate(raw)
