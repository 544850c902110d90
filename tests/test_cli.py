"""Tests for the gitstamp CLI entry point."""

import json
import logging
from datetime import datetime, timezone
from unittest.mock import MagicMock, patch

import pytest

from src.args import parse_args
from src.gitstamp import _setup_logging, main, run
from src.versioning.errors import NotFoundError
from src.versioning.models import ResolvedVersion, Version


def _resolved():
    return ResolvedVersion(
        commit_hash="0123456789"[:9],
        branch_name="main",
        commit_time=datetime(2024, 1, 2, 3, 4, 5, tzinfo=timezone.utc),
        tag_name="2.1.0",
        version=Version.of(2, 1, 0),
        build_ordinal=70000,
    )


def _service(result=None, error=None):
    service = MagicMock()
    if error is not None:
        service.resolve.side_effect = error
    else:
        service.resolve.return_value = result
    return service


class TestArgParsing:
    """Tests for CLI argument parsing."""

    def test_defaults(self):
        ns = parse_args([])
        assert ns.DIRECTORY == "."
        assert ns.REFERENCE is None
        assert ns.OUTPUT_FORMAT == "properties"
        assert ns.ENV_FILE == []
        assert ns.LOG_LEVEL is None
        assert ns.NIGHTLY is False

    def test_options(self):
        ns = parse_args(["-d", "/src", "--ref", "v2", "-p", "0000.00", "--nightly", "-f", "JSON",
                         "--env-file", "a.pri", "--env-file", "b.pri", "--error-on-missing"])
        assert ns.DIRECTORY == "/src"
        assert ns.REFERENCE == "v2"
        assert ns.PATTERN == "0000.00"
        assert ns.NIGHTLY is True
        assert ns.OUTPUT_FORMAT == "json"
        assert ns.ENV_FILE == ["a.pri", "b.pri"]
        assert ns.ERROR_ON_MISSING is True


class TestRun:
    """Tests for run() exit codes and output."""

    def test_prints_properties(self, tmp_path, capsys):
        args = parse_args(["-d", str(tmp_path)])
        service = _service(_resolved())
        assert run(args, service) == 0
        service.resolve.assert_called_once_with(str(tmp_path), "HEAD")
        out = capsys.readouterr().out
        assert "git.version=02.01.0" in out
        assert "git.release=02.01" in out

    def test_json_output_with_reference(self, tmp_path, capsys):
        args = parse_args(["-d", str(tmp_path), "--ref", "feature", "-f", "json", "-p", "0.0"])
        service = _service(_resolved())
        assert run(args, service) == 0
        service.resolve.assert_called_once_with(str(tmp_path), "feature")
        data = json.loads(capsys.readouterr().out)
        assert data["git.version"] == "2.1"
        assert data["git.commit.hash"] == "012345678"

    def test_not_found(self, tmp_path):
        args = parse_args(["-d", str(tmp_path)])
        assert run(args, _service(error=NotFoundError("no repo"))) == 2

    def test_no_version_is_not_fatal(self, tmp_path, capsys):
        args = parse_args(["-d", str(tmp_path)])
        assert run(args, _service(None)) == 0
        assert capsys.readouterr().out == ""

    def test_no_version_with_error_on_missing(self, tmp_path):
        args = parse_args(["-d", str(tmp_path), "--error-on-missing"])
        assert run(args, _service(None)) == 3

    def test_env_file_rewritten(self, tmp_path):
        pri = tmp_path / "environment.pri"
        pri.write_text("GIT_RELEASE = 0\n", encoding="utf-8")
        args = parse_args(["-d", str(tmp_path), "--env-file", str(pri)])
        assert run(args, _service(_resolved())) == 0
        assert pri.read_text(encoding="utf-8") == "GIT_RELEASE\t= 02.01\n"

    def test_env_file_missing(self, tmp_path):
        args = parse_args(["-d", str(tmp_path), "--env-file", str(tmp_path / "nope.pri")])
        assert run(args, _service(_resolved())) == 1

    def test_bad_config_file(self, tmp_path):
        cfg = tmp_path / "cfg.yml"
        cfg.write_text("pattern: [unclosed", encoding="utf-8")
        args = parse_args(["-d", str(tmp_path), "-c", str(cfg)])
        assert run(args, _service(_resolved())) == 1

    def test_build_number_only(self, capsys):
        args = parse_args(["--build-number"])
        with patch("src.gitstamp.build_ordinal", return_value=81234):
            assert run(args, _service(_resolved())) == 0
        assert capsys.readouterr().out.strip() == "81234"


def test_main_outside_repository(tmp_path):
    missing = tmp_path / "missing"
    assert main(["-d", str(missing), "-q"]) == 2


@pytest.fixture
def root_level():
    """Restore the root logger level changed by _setup_logging."""
    root = logging.getLogger()
    level = root.level
    yield root
    root.setLevel(level)


class TestSetupLogging:
    """Console log level from --loglevel or GITSTAMP_LOG_LEVEL."""

    def test_env_level_used_without_flag(self, monkeypatch, root_level):
        monkeypatch.setenv("GITSTAMP_LOG_LEVEL", "DEBUG")
        _setup_logging(parse_args([]))
        assert root_level.level == logging.DEBUG

    def test_flag_overrides_env(self, monkeypatch, root_level):
        monkeypatch.setenv("GITSTAMP_LOG_LEVEL", "DEBUG")
        _setup_logging(parse_args(["--loglevel", "WARNING"]))
        assert root_level.level == logging.WARNING

    def test_defaults_to_info(self, monkeypatch, root_level):
        monkeypatch.delenv("GITSTAMP_LOG_LEVEL", raising=False)
        _setup_logging(parse_args([]))
        assert root_level.level == logging.INFO


def test_invalid_config_value_maps_to_file_error(tmp_path):
    (tmp_path / "gitstamp.yml").write_text("gitstamp:\n  hash_length: nine\n", encoding="utf-8")
    service = _service(_resolved())
    assert run(parse_args(["-d", str(tmp_path)]), service) == 1
    service.resolve.assert_not_called()


def test_unquoted_pattern_maps_to_file_error(tmp_path):
    (tmp_path / "gitstamp.yml").write_text("gitstamp:\n  pattern: 0000.00\n", encoding="utf-8")
    assert run(parse_args(["-d", str(tmp_path)]), _service(_resolved())) == 1
