"""Unit tests for the vdash-cli subcommands."""

import json
import sys
from pathlib import Path

import pytest

from vdash.cli import main
from vdash.services.persistence import STATE_KEY


def _run(monkeypatch: pytest.MonkeyPatch, *argv: str) -> None:
    monkeypatch.setattr(sys, "argv", ["vdash-cli", *argv])
    main()


class TestSrt:
    def test_writes_srt_next_to_script(
        self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        script = tmp_path / "script.txt"
        script.write_text("Hello there.", encoding="utf-8")

        _run(monkeypatch, "srt", str(script))

        srt = tmp_path / "script.srt"
        assert srt.read_text(encoding="utf-8") == "1\n00:00:00,000 --> 00:00:30,000\nHello there.\n\n"
        assert "Subtitles written" in capsys.readouterr().out

    def test_invalid_max_length(
        self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        script = tmp_path / "script.txt"
        script.write_text("Hello there.", encoding="utf-8")

        with pytest.raises(SystemExit) as exc_info:
            _run(monkeypatch, "srt", str(script), "--max-length", "0")

        assert exc_info.value.code == 1
        assert capsys.readouterr().err.startswith("Error:")

    def test_empty_script(self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
        script = tmp_path / "script.txt"
        script.write_text("   ", encoding="utf-8")

        with pytest.raises(SystemExit) as exc_info:
            _run(monkeypatch, "srt", str(script))
        assert exc_info.value.code == 1


class TestState:
    def test_stages_lists_default_template(
        self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        _run(monkeypatch, "stages", "--state", str(tmp_path / "state.json"))
        out = capsys.readouterr().out
        assert "1. Video ideas [in_draft]" in out
        assert "(generateScript)" in out

    def test_invalid_state_file(
        self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        state = tmp_path / "state.json"
        state.write_text(
            json.dumps({STATE_KEY: {"drafts": [{"postDate": "not-a-date"}]}}),
            encoding="utf-8",
        )

        with pytest.raises(SystemExit) as exc_info:
            _run(monkeypatch, "drafts", "--state", str(state))

        assert exc_info.value.code == 1
        assert "Stored state is invalid" in capsys.readouterr().err

    def test_export_then_import(
        self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        source = tmp_path / "source.json"
        source.write_text(
            json.dumps({STATE_KEY: {"drafts": [{"id": "d1", "title": "5 fans"}], "theme": "light"}}),
            encoding="utf-8",
        )
        backup = tmp_path / "backup.json"
        _run(monkeypatch, "export-backup", "-o", str(backup), "--state", str(source))

        target = tmp_path / "target.json"
        _run(monkeypatch, "import-backup", str(backup), "--state", str(target))

        stored = json.loads(target.read_text(encoding="utf-8"))[STATE_KEY]
        assert [d["id"] for d in stored["drafts"]] == ["d1"]
        assert stored["theme"] == "light"
        assert "drafts: 1" in capsys.readouterr().out
