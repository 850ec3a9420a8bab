"""Unit tests for upgradecheck.cli — argument handling and exit codes."""

from pathlib import Path
from unittest.mock import patch

import pytest

from upgradecheck.cli import build_parser, main
from upgradecheck.models import CheckResult, Coordinate, Outcome, Stage

COORD = Coordinate(group="com.example", artifact="widget")


def _result(outcome: Outcome, message: str = "msg") -> CheckResult:
    return CheckResult(
        outcome=outcome,
        coordinate=COORD,
        current_version="1.0.0",
        message=message,
        stage=Stage.RUN_SCAN,
    )


# ── arity ────────────────────────────────────────────────────────────────────


class TestArity:
    @pytest.mark.parametrize(
        "argv",
        [
            [],
            ["com.example"],
            ["com.example", "widget"],
            ["com.example", "widget", "1.0.0", "extra"],
        ],
    )
    def test_wrong_arity_is_usage_error(self, argv, capsys):
        with pytest.raises(SystemExit) as exc:
            main(argv)
        assert exc.value.code != 0
        assert "usage:" in capsys.readouterr().err

    def test_three_positionals(self):
        args = build_parser().parse_args(["com.example", "widget", "1.0.0"])
        assert (args.group_id, args.artifact_id, args.current_version) == ("com.example", "widget", "1.0.0")

    def test_unset_flags_are_none(self):
        args = build_parser().parse_args(["g", "a", "1.0"])
        assert args.scan_timeout is None
        assert args.order is None
        assert args.verify_cache is None


# ── main ─────────────────────────────────────────────────────────────────────


class TestMain:
    @pytest.mark.parametrize(
        "outcome,code,stream",
        [
            (Outcome.SAFE, 0, "out"),
            (Outcome.UP_TO_DATE, 0, "out"),
            (Outcome.VULNERABLE, 1, "err"),
            (Outcome.FAILED, 1, "err"),
        ],
    )
    @patch("upgradecheck.cli.run_check")
    def test_exit_codes(self, mock_check, outcome, code, stream, capsys, tmp_path):
        mock_check.return_value = _result(outcome, message=f"outcome {outcome.value}")
        rc = main(["com.example", "widget", "1.0.0", "--download-dir", str(tmp_path)])
        assert rc == code
        captured = capsys.readouterr()
        assert f"outcome {outcome.value}" in getattr(captured, stream)

    @patch("upgradecheck.cli.run_check")
    def test_flags_reach_settings(self, mock_check, tmp_path):
        mock_check.return_value = _result(Outcome.SAFE)
        main(
            [
                "com.example",
                "widget",
                "1.0.0",
                "--scanner",
                "/opt/dc/dependency-check.sh",
                "--scan-timeout",
                "60",
                "--download-dir",
                str(tmp_path),
                "--http-retries",
                "2",
                "--order",
                "semver",
                "--verify-cache",
            ]
        )
        coordinate, version, settings = mock_check.call_args.args
        assert coordinate == COORD
        assert version == "1.0.0"
        assert settings.scanner_script == Path("/opt/dc/dependency-check.sh")
        assert settings.scan_timeout == 60
        assert settings.download_dir == tmp_path
        assert settings.http_retries == 2
        assert settings.order == "semver"
        assert settings.verify_cache is True

    @patch("upgradecheck.cli.run_check")
    def test_bad_config_file(self, mock_check, tmp_path, capsys):
        cfg = tmp_path / "bad.yaml"
        cfg.write_text("rows: [unterminated\n")
        rc = main(["g", "a", "1.0", "--config", str(cfg)])
        assert rc == 2
        assert "Invalid configuration" in capsys.readouterr().err
        mock_check.assert_not_called()

    @patch("upgradecheck.cli.run_check")
    def test_missing_config_file(self, mock_check, tmp_path, capsys):
        rc = main(["g", "a", "1.0", "--config", str(tmp_path / "missing.yaml")])
        assert rc == 2
        mock_check.assert_not_called()
