"""End-to-end upgrade check.

Runs the stages strictly in order::

    PARSE_CURRENT → QUERY_REGISTRY → SELECT_CANDIDATE → FETCH_ARTIFACT → RUN_SCAN

and folds every result into a single ``CheckResult``.  Pipeline errors never
escape ``run_check``; anything outside ``UpgradeCheckError`` (a programming
error) does.
"""

import requests

from .config import Settings
from .downloaders import requests_session
from .errors import AlreadyLatestError, ScanFailedError, UpgradeCheckError
from .fetcher import ArtifactCache, cache_for, fetch_artifact
from .models import CheckResult, Coordinate, Outcome, ScanVerdict, Stage
from .registry import search_versions
from .scanner import scan_artifact
from .versions import compatible_versions, major_version_of, pick_candidate

_FAILURE_PREFIX = {
    Stage.PARSE_CURRENT: "Invalid current version!",
    Stage.QUERY_REGISTRY: "Failed to query maven central!",
    Stage.SELECT_CANDIDATE: "Failed to select an upgrade candidate!",
    Stage.FETCH_ARTIFACT: "Failed to download jar file!",
    Stage.RUN_SCAN: "Failed to check vulnerabilities!",
}


def run_check(
    coordinate: Coordinate,
    current_version: str,
    settings: Settings,
    *,
    session: requests.Session | None = None,
    cache: ArtifactCache | None = None,
) -> CheckResult:
    """Check whether a safe same-major upgrade exists for ``coordinate``.

    Args:
        coordinate: Component to check.
        current_version: Version currently in use.
        settings: Runtime settings.
        session: Requests session; a fresh one is created if omitted.
        cache: Artifact cache; chosen from ``settings`` if omitted.

    Returns:
        ``CheckResult`` whose ``outcome`` is ``UP_TO_DATE``, ``SAFE``,
        ``VULNERABLE`` or ``FAILED``.
    """
    stage = Stage.PARSE_CURRENT
    candidate: str | None = None
    artifact = None

    def result(outcome: Outcome, message: str, verdict: ScanVerdict | None = None) -> CheckResult:
        return CheckResult(
            outcome=outcome,
            coordinate=coordinate,
            current_version=current_version,
            message=message,
            stage=stage,
            candidate=candidate,
            artifact=artifact,
            verdict=verdict,
        )

    own_session = session is None
    if session is None:
        session = requests_session()
    if cache is None:
        cache = cache_for(settings)

    try:
        major_version_of(current_version)

        stage = Stage.QUERY_REGISTRY
        versions = search_versions(session, coordinate, settings)

        stage = Stage.SELECT_CANDIDATE
        candidates = compatible_versions(current_version, versions)
        print(f"Versions having same major version: {candidates}")
        candidate = pick_candidate(current_version, candidates, order=settings.order)

        stage = Stage.FETCH_ARTIFACT
        artifact = fetch_artifact(session, coordinate, candidate, cache, settings)

        stage = Stage.RUN_SCAN
        print("Check vulnerabilities")
        verdict = scan_artifact(artifact.path, settings)
    except AlreadyLatestError as e:
        return result(Outcome.UP_TO_DATE, f"Current version is already latest version. {e}")
    except ScanFailedError as e:
        verdict = ScanVerdict(passed=False, detail=e.stderr, exit_status=e.exit_status)
        return result(Outcome.VULNERABLE, f"Version '{candidate}' is vulnerable. {e}", verdict)
    except UpgradeCheckError as e:
        return result(Outcome.FAILED, f"{_FAILURE_PREFIX[stage]} Error: {e}")
    finally:
        if own_session:
            session.close()

    return result(
        Outcome.SAFE,
        f"There is no vulnerability in '{candidate}'. It is safe to use.",
        verdict,
    )
