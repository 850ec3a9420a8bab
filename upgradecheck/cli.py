"""Command-line entry point.

Usage::

    upgradecheck <groupId> <artifactId> <version> [options]
"""

import argparse
import sys
from pathlib import Path
from typing import Sequence

import yaml

from . import __version__
from .config import SCANNER_ENV_VAR, load_settings
from .models import Coordinate
from .pipeline import run_check


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="upgradecheck",
        description=(
            "Find the latest release with the same major version on Maven Central "
            "and verify it with OWASP Dependency-Check before recommending it."
        ),
    )
    p.add_argument("group_id", metavar="groupId")
    p.add_argument("artifact_id", metavar="artifactId")
    p.add_argument("current_version", metavar="version")
    p.add_argument("--config", type=Path, default=None, help="YAML settings file")
    p.add_argument(
        "--scanner",
        dest="scanner_script",
        type=Path,
        default=None,
        help=f"Dependency-Check launcher (overrides ${SCANNER_ENV_VAR})",
    )
    p.add_argument("--scan-timeout", type=float, default=None, help="Seconds to wait for the scanner")
    p.add_argument("--download-dir", type=Path, default=None, help="Directory for downloaded jars")
    p.add_argument(
        "--http-retries",
        type=int,
        default=None,
        help="Extra attempts on connection errors/timeouts (default 0)",
    )
    p.add_argument(
        "--order",
        choices=["registry", "semver"],
        default=None,
        help="Trust registry ordering or sort candidates by version",
    )
    p.add_argument(
        "--verify-cache",
        action="store_true",
        default=None,
        help="Validate cached jars against a stored SHA-256 digest",
    )
    p.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return p


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        settings = load_settings(
            args.config,
            scanner_script=args.scanner_script,
            scan_timeout=args.scan_timeout,
            download_dir=args.download_dir,
            http_retries=args.http_retries,
            order=args.order,
            verify_cache=args.verify_cache,
        )
    except (OSError, ValueError, yaml.YAMLError) as e:
        print(f"Invalid configuration: {e}", file=sys.stderr)
        return 2

    coordinate = Coordinate(group=args.group_id, artifact=args.artifact_id)
    result = run_check(coordinate, args.current_version, settings)

    print(result.message, file=sys.stdout if result.ok else sys.stderr)
    return result.exit_code


if __name__ == "__main__":
    raise SystemExit(main())
