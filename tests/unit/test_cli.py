"""Unit tests for the CLI module mural_publisher.cli.murals."""

from __future__ import annotations

from argparse import Namespace
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from mural_publisher.cli import murals
from mural_publisher.models.reports import (
    BulkOperationReport,
    BulkPhase,
    ItemFailure,
    PhaseCounts,
    SubmissionFailure,
    WalkReport,
)
from mural_publisher.utils.errors import AdminOperationError


@pytest.fixture
def cli_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> Path:
    """Run from an empty directory with test credentials set."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("CONTENTFUL_MANAGEMENT_TOKEN", "tok")
    monkeypatch.setenv("CONTENTFUL_SPACE_ID", "sp1")
    return tmp_path


# ======================================================================
# Argument parser
# ======================================================================


class TestParser:
    def test_pt_with_path(self) -> None:
        args = murals._build_parser().parse_args(["pt", "--path", "/data"])
        assert args.command == "pt"
        assert args.path == "/data"

    def test_pt_default_path_is_none(self) -> None:
        args = murals._build_parser().parse_args(["pt"])
        assert args.path is None

    def test_delete_requires_content_type(self) -> None:
        with pytest.raises(SystemExit) as exc_info:
            murals._build_parser().parse_args(["delete"])
        assert exc_info.value.code == 2

    def test_delete_yes_flag(self) -> None:
        args = murals._build_parser().parse_args(["delete", "mural", "-y"])
        assert args.content_type == "mural"
        assert args.yes is True

    def test_delete_assets_defaults_to_prompt(self) -> None:
        args = murals._build_parser().parse_args(["deleteAssets"])
        assert args.yes is False

    def test_fields_takes_content_type(self) -> None:
        args = murals._build_parser().parse_args(["fields", "mural"])
        assert args.content_type == "mural"

    def test_config_option(self) -> None:
        args = murals._build_parser().parse_args(["--config", "other.yaml", "types"])
        assert args.config == "other.yaml"
        assert args.command == "types"

    def test_unknown_command_exits_2(self) -> None:
        with pytest.raises(SystemExit) as exc_info:
            murals._build_parser().parse_args(["frobnicate"])
        assert exc_info.value.code == 2


# ======================================================================
# Confirmation
# ======================================================================


class TestConfirmPrompt:
    @pytest.mark.parametrize("answer", ["y", "Y", "yes", " YES "])
    def test_yes_answers(self, answer: str) -> None:
        assert murals.confirm_prompt("Delete?", input_fn=lambda _p: answer)

    @pytest.mark.parametrize("answer", ["", "n", "no", "sure"])
    def test_other_answers_decline(self, answer: str) -> None:
        assert not murals.confirm_prompt("Delete?", input_fn=lambda _p: answer)

    def test_eof_declines(self) -> None:
        def _eof(_prompt: str) -> str:
            raise EOFError

        assert not murals.confirm_prompt("Delete?", input_fn=_eof)

    def test_prompt_text(self) -> None:
        seen: list[str] = []
        murals.confirm_prompt("Delete all 3 entries?", input_fn=lambda p: seen.append(p) or "n")
        assert seen == ["Delete all 3 entries? [y/N] "]

    def test_yes_flag_skips_prompt(self) -> None:
        confirm = murals._confirm_for(Namespace(yes=True))
        assert confirm("anything") is True

    def test_without_flag_uses_prompt(self) -> None:
        assert murals._confirm_for(Namespace(yes=False)) is murals.confirm_prompt


# ======================================================================
# Report printers
# ======================================================================


class TestReportPrinters:
    def test_walk_report(self, capsys: pytest.CaptureFixture[str]) -> None:
        report = WalkReport(
            root="/data",
            published=["Clock Tower"],
            skipped=["harbour"],
            failed=[SubmissionFailure(directory="broken", error_type="ParseError", message="bad")],
            interrupted=True,
        )

        murals._print_walk_report(report)

        out = capsys.readouterr().out
        assert "+ Clock Tower" in out
        assert "= harbour" in out
        assert "! broken: [ParseError] bad" in out
        assert "Interrupted" in out

    def test_declined_bulk_report(self, capsys: pytest.CaptureFixture[str]) -> None:
        murals._print_bulk_report(BulkOperationReport(target="mural", confirmed=False, total=4))
        assert capsys.readouterr().out.strip() == "Aborted."

    def test_bulk_report_counts(self, capsys: pytest.CaptureFixture[str]) -> None:
        report = BulkOperationReport(
            target="assets",
            confirmed=True,
            total=2,
            unpublish=PhaseCounts(attempted=1, succeeded=1),
            delete=PhaseCounts(attempted=2, succeeded=1, failed=1),
            failures=[ItemFailure(item_id="as2", phase=BulkPhase.DELETE, message="locked")],
        )

        murals._print_bulk_report(report)

        out = capsys.readouterr().out
        assert "Deleted:     1/2 (1 failed)" in out
        assert "! delete as2: locked" in out


# ======================================================================
# Entry point
# ======================================================================


class TestMain:
    def test_no_command_prints_help_and_exits_1(self, capsys: pytest.CaptureFixture[str]) -> None:
        with pytest.raises(SystemExit) as exc_info:
            murals.main([])

        assert exc_info.value.code == 1
        assert "usage:" in capsys.readouterr().out

    def test_missing_credentials_exit_1(
        self,
        monkeypatch: pytest.MonkeyPatch,
        tmp_path: Path,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        monkeypatch.chdir(tmp_path)
        monkeypatch.delenv("CONTENTFUL_MANAGEMENT_TOKEN", raising=False)
        monkeypatch.delenv("CONTENTFUL_SPACE_ID", raising=False)

        with pytest.raises(SystemExit) as exc_info:
            murals.main(["types"])

        assert exc_info.value.code == 1
        assert "CONTENTFUL_MANAGEMENT_TOKEN" in capsys.readouterr().err

    def test_success_exits_0(self, cli_env: Path) -> None:
        with (
            patch.object(murals, "_run", MagicMock(return_value="coro")) as run,
            patch.object(murals.asyncio, "run", return_value=0) as asyncio_run,
        ):
            with pytest.raises(SystemExit) as exc_info:
                murals.main(["types"])

        assert exc_info.value.code == 0
        args, config = run.call_args.args
        assert args.command == "types"
        assert config["contentful"]["space_id"] == "sp1"
        asyncio_run.assert_called_once_with("coro")

    def test_keyboard_interrupt_exits_0(self, cli_env: Path) -> None:
        with (
            patch.object(murals, "_run", MagicMock()),
            patch.object(murals.asyncio, "run", side_effect=KeyboardInterrupt),
        ):
            with pytest.raises(SystemExit) as exc_info:
                murals.main(["pt"])

        assert exc_info.value.code == 0

    def test_application_error_exits_1(
        self, cli_env: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        with (
            patch.object(murals, "_run", MagicMock()),
            patch.object(
                murals.asyncio,
                "run",
                side_effect=AdminOperationError("Cannot list assets", provider_name="contentful"),
            ),
        ):
            with pytest.raises(SystemExit) as exc_info:
                murals.main(["deleteAssets"])

        assert exc_info.value.code == 1
        assert "Error: [contentful] Cannot list assets" in capsys.readouterr().err

    def test_unexpected_error_exits_1(self, cli_env: Path) -> None:
        with (
            patch.object(murals, "_run", MagicMock()),
            patch.object(murals.asyncio, "run", side_effect=RuntimeError("boom")),
        ):
            with pytest.raises(SystemExit) as exc_info:
                murals.main(["checkApi"])

        assert exc_info.value.code == 1
