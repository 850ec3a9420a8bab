"""Error taxonomy for the upgrade-check pipeline.

Every failure raised by the pipeline derives from ``UpgradeCheckError``.
Each subclass keeps the underlying cause (HTTP status and body, process
exit status and stderr, or the offending input) as attributes *and* in its
message, so the CLI can print ``str(exc)`` and still give the operator
something actionable.
"""

from __future__ import annotations


class UpgradeCheckError(Exception):
    """Base class for all upgrade-check failures."""


# ── Versions ─────────────────────────────────────────────────────────────────


class ParseError(UpgradeCheckError):
    """A version string is not in the expected dotted format."""

    def __init__(self, version: str) -> None:
        self.version = version
        super().__init__(f"Version '{version}' is not in expected dotted format")


class SelectionError(UpgradeCheckError):
    """No upgrade candidate could be chosen."""


class NoCompatibleVersionError(SelectionError):
    """No registry version shares the current major version."""

    def __init__(self, major_version: str) -> None:
        self.major_version = major_version
        super().__init__(f"No versions with matching major version found (major version '{major_version}')")


class AlreadyLatestError(SelectionError):
    """The current version is already the best candidate.

    This is an expected outcome rather than a failure; the orchestrator maps
    it to ``Outcome.UP_TO_DATE``.
    """

    def __init__(self, version: str) -> None:
        self.version = version
        super().__init__(f"Version '{version}' is already at latest compatible version")


# ── Registry ─────────────────────────────────────────────────────────────────


class RegistryError(UpgradeCheckError):
    """The registry search could not be completed."""


class RegistryStatusError(RegistryError):
    """The registry answered with a non-2xx status."""

    def __init__(self, status_code: int, body: str) -> None:
        self.status_code = status_code
        self.body = body
        super().__init__(f"Error returned from server. Status code: {status_code}. Response body: {body}")


class RegistryResponseError(RegistryError):
    """The registry answered 2xx but the body was not the expected shape."""


# ── Artifacts ────────────────────────────────────────────────────────────────


class FetchError(UpgradeCheckError):
    """Downloading or storing an artifact failed."""

    def __init__(self, url: str, reason: str) -> None:
        self.url = url
        self.reason = reason
        super().__init__(f"Failed to download {url}: {reason}")


# ── Scanner ──────────────────────────────────────────────────────────────────


class ScanError(UpgradeCheckError):
    """The vulnerability scan did not pass."""


class ScannerLaunchError(ScanError):
    """The scanner process could not be started."""

    def __init__(self, scanner: str, reason: str) -> None:
        self.scanner = scanner
        self.reason = reason
        super().__init__(f"Failed to execute Dependency-check '{scanner}'! Error: {reason}")


class ScanFailedError(ScanError):
    """The scanner ran and exited with a non-zero status."""

    def __init__(self, exit_status: int, stderr: str) -> None:
        self.exit_status = exit_status
        self.stderr = stderr
        super().__init__(f"Dependency-check failed with status code {exit_status}! Error: {stderr.strip()}")


class ScanTimeoutError(ScanError):
    """The scanner did not exit within the configured timeout."""

    def __init__(self, timeout: float) -> None:
        self.timeout = timeout
        super().__init__(f"Dependency-check did not finish within {timeout:g} seconds")
