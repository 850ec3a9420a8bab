"""Data types passed between the pipeline stages."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path


@dataclass(frozen=True)
class Coordinate:
    """Maven coordinate of the library being checked.

    Attributes:
        group: Group id (e.g. ``com.fasterxml.jackson.core``).
        artifact: Artifact id (e.g. ``jackson-databind``).
    """

    group: str
    artifact: str

    @property
    def group_path(self) -> str:
        """Group id as a repository path (``com/fasterxml/jackson/core``)."""
        return self.group.replace(".", "/")

    def jar_name(self, version: str) -> str:
        return f"{self.artifact}-{version}.jar"

    def __str__(self) -> str:
        return f"{self.group}:{self.artifact}"


@dataclass(frozen=True)
class LocalArtifact:
    """A jar materialised on local disk.

    Attributes:
        path: Absolute path to the jar.
        coordinate: Coordinate the jar belongs to.
        version: Version of the jar.
        cached: ``True`` when an existing file was reused instead of
            downloaded.
    """

    path: Path
    coordinate: Coordinate
    version: str
    cached: bool = False


@dataclass(frozen=True)
class ScanVerdict:
    """Pass/fail result of one scanner run, with its stderr and exit status."""

    passed: bool
    detail: str = ""
    exit_status: int | None = None


class Outcome(str, Enum):
    """Terminal state of a single upgrade check."""

    UP_TO_DATE = "up_to_date"
    SAFE = "safe"
    VULNERABLE = "vulnerable"
    FAILED = "failed"


class Stage(str, Enum):
    """Pipeline stage, in execution order."""

    PARSE_CURRENT = "parse_current"
    QUERY_REGISTRY = "query_registry"
    SELECT_CANDIDATE = "select_candidate"
    FETCH_ARTIFACT = "fetch_artifact"
    RUN_SCAN = "run_scan"


@dataclass
class CheckResult:
    """Result of one ``run_check`` invocation.

    Attributes:
        outcome: Terminal state.
        coordinate: Coordinate that was checked.
        current_version: Version supplied by the caller.
        message: Human-readable summary, always including the cause of a
            failure.
        stage: Last stage entered; for ``FAILED`` this is where it broke.
        candidate: Selected upgrade version, once known.
        artifact: Downloaded jar, once fetched.
        verdict: Scanner verdict, once scanned.
    """

    outcome: Outcome
    coordinate: Coordinate
    current_version: str
    message: str
    stage: Stage
    candidate: str | None = None
    artifact: LocalArtifact | None = None
    verdict: ScanVerdict | None = None

    @property
    def ok(self) -> bool:
        return self.outcome in (Outcome.SAFE, Outcome.UP_TO_DATE)

    @property
    def exit_code(self) -> int:
        return 0 if self.ok else 1
