"""Tests for the command-line entry point and configuration loading."""

from __future__ import annotations

import json
import os
import sys
from pathlib import Path

import pytest

from dirhash.cli import EXIT_DIFFERENT, EXIT_ERROR, EXIT_IDENTICAL, main
from dirhash.config import DirhashConfig, load_config


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for key in ("DIRHASH_WORKERS", "DIRHASH_QUEUE_FACTOR", "DIRHASH_LOG_LEVEL", "DIRHASH_NO_COLOR", "NO_COLOR"):
        monkeypatch.delenv(key, raising=False)


def _tree(root: Path, files: dict[str, str]) -> Path:
    for rel, text in files.items():
        path = root / rel
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text)
    return root


# ── CLI ──────────────────────────────────────────────────────────────────────

class TestCLI:

    def test_identical_directories_exit_zero(self, tmp_path: Path, capsys):
        a = _tree(tmp_path / "a", {"x.txt": "abc", "sub/y.txt": "def"})
        b = _tree(tmp_path / "b", {"x.txt": "abc", "sub/y.txt": "def"})
        assert main([str(a), str(b)]) == EXIT_IDENTICAL
        out = capsys.readouterr().out
        assert "Paths are identical." in out
        assert "-> 2 files" in out

    def test_different_directories_exit_one(self, tmp_path: Path, capsys):
        a = _tree(tmp_path / "a", {"x.txt": "abc", "only.txt": "1"})
        b = _tree(tmp_path / "b", {"x.txt": "xyz"})
        assert main([str(a), str(b), "--workers", "2"]) == EXIT_DIFFERENT
        out = capsys.readouterr().out
        assert "x.txt" in out
        assert "only.txt" in out

    def test_files(self, tmp_path: Path, capsys):
        (tmp_path / "a").write_text("same")
        (tmp_path / "b").write_text("same")
        assert main([str(tmp_path / "a"), str(tmp_path / "b")]) == EXIT_IDENTICAL
        assert "Files are identical." in capsys.readouterr().out

    def test_json_output(self, tmp_path: Path, capsys):
        a = _tree(tmp_path / "a", {"f": "1"})
        b = _tree(tmp_path / "b", {"f": "2"})
        assert main([str(a), str(b), "--json"]) == EXIT_DIFFERENT
        data = json.loads(capsys.readouterr().out)
        assert data["diff"]["modified"] == ["f"]

    def test_kind_mismatch_exit_two(self, tmp_path: Path, capsys):
        (tmp_path / "file").write_text("x")
        (tmp_path / "dir").mkdir()
        assert main([str(tmp_path / "file"), str(tmp_path / "dir")]) == EXIT_ERROR
        assert "Error:" in capsys.readouterr().err

    def test_missing_path_exit_two(self, tmp_path: Path, capsys):
        (tmp_path / "dir").mkdir()
        assert main([str(tmp_path / "dir"), str(tmp_path / "missing")]) == EXIT_ERROR
        captured = capsys.readouterr()
        assert "missing" in captured.err
        assert captured.out == ""

    @pytest.mark.skipif(sys.platform in ("win32", "darwin"), reason="file names must be valid Unicode")
    def test_undecodable_file_name(self, tmp_path: Path, capsys):
        a = _tree(tmp_path / "a", {"x.txt": "same"})
        b = _tree(tmp_path / "b", {"x.txt": "same"})
        try:
            (a / os.fsdecode(b"bad\xffname")).write_text("odd")
        except (OSError, UnicodeError):
            pytest.skip("file system rejects non-UTF-8 names")
        assert main([str(a), str(b)]) == EXIT_DIFFERENT
        captured = capsys.readouterr()
        assert "bad\\udcffname" in captured.out
        assert captured.err == ""

    def test_wrong_argument_count(self):
        with pytest.raises(SystemExit) as info:
            main(["only-one"])
        assert info.value.code == 2

    def test_invalid_workers(self, tmp_path: Path):
        with pytest.raises(SystemExit) as info:
            main([str(tmp_path), str(tmp_path), "--workers", "0"])
        assert info.value.code == 2

    def test_plain_output_when_not_a_tty(self, tmp_path: Path, capsys):
        a = _tree(tmp_path / "a", {"f": "1"})
        b = _tree(tmp_path / "b", {"f": "2"})
        main([str(a), str(b)])
        assert "\033[" not in capsys.readouterr().out


# ── Configuration ────────────────────────────────────────────────────────────

class TestConfig:

    def test_defaults(self):
        config = load_config({})
        assert config == DirhashConfig()
        assert config.resolved_workers() == (os.cpu_count() or 1)

    def test_env_overrides(self, monkeypatch):
        monkeypatch.setenv("DIRHASH_WORKERS", "3")
        monkeypatch.setenv("DIRHASH_QUEUE_FACTOR", "5")
        monkeypatch.setenv("DIRHASH_LOG_LEVEL", "debug")
        config = load_config()
        assert config.workers == 3
        assert config.resolved_workers() == 3
        assert config.queue_factor == 5
        assert config.log_level == "DEBUG"

    def test_invalid_values_fall_back(self):
        config = load_config({
            "DIRHASH_WORKERS": "many",
            "DIRHASH_QUEUE_FACTOR": "0",
            "DIRHASH_LOG_LEVEL": "LOUD",
        })
        assert config.workers == 0
        assert config.queue_factor == 2
        assert config.log_level == "WARNING"

    @pytest.mark.parametrize("key", ["DIRHASH_NO_COLOR", "NO_COLOR"])
    def test_no_color(self, key):
        assert load_config({key: "1"}).color is False
        assert load_config({}).color is True
