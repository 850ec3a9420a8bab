"""OWASP Dependency-Check invocation.

The scanner is an external launcher script that expects to run from its own
directory (it resolves its ``lib/`` and data files relatively).  Only its
exit status decides the verdict; stderr is kept for the report.
"""

import subprocess
from pathlib import Path

from .config import Settings
from .errors import ScanFailedError, ScannerLaunchError, ScanTimeoutError
from .models import ScanVerdict


def scanner_command(script: Path, artifact_path: Path, output_dir: str = "./output") -> list[str]:
    return [str(script), "--out", output_dir, "--scan", str(artifact_path)]


def scan_artifact(artifact_path: Path, settings: Settings) -> ScanVerdict:
    """Run Dependency-Check against ``artifact_path``.

    Args:
        artifact_path: Jar to scan.  Should be absolute, since the scanner
            runs from a different working directory.
        settings: Scanner location, output directory and timeout.

    Returns:
        A passing ``ScanVerdict`` when the scanner exits with status 0,
        whatever it wrote to stderr.

    Raises:
        ScannerLaunchError: if the process can't be started.
        ScanFailedError: on a non-zero exit status.
        ScanTimeoutError: if ``settings.scan_timeout`` elapses first.
    """
    script = settings.scanner_script.expanduser().absolute()
    cmd = scanner_command(script, artifact_path, settings.scan_output_dir)

    try:
        proc = subprocess.run(
            cmd,
            cwd=script.parent,
            capture_output=True,
            text=True,
            errors="replace",
            timeout=settings.scan_timeout,
        )
    except subprocess.TimeoutExpired as e:
        raise ScanTimeoutError(e.timeout) from e
    except OSError as e:
        raise ScannerLaunchError(str(script), str(e)) from e

    if proc.returncode != 0:
        raise ScanFailedError(proc.returncode, proc.stderr or "")
    return ScanVerdict(passed=True, detail=proc.stderr or "", exit_status=proc.returncode)
