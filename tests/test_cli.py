"""Tests for the CLI argument parsing and command execution."""

import logging

import pytest

from ballistics.cli import _format_listing, build_parser, main, run
from ballistics.models import Projectile

RECORDS = """\
alpha_308:
  name: Alpha 168
  cal: 0.308
  grains: 168
  g1: 0.462
  g7: 0.232
  base: bt
alpha_224:
  name: Alpha 55
  cal: 0.224
  grains: 55
  g1: 0.243
  base: flat base
"""


@pytest.fixture(autouse=True)
def restore_root_handlers():
    """main() reconfigures the root logger; undo that after each test."""
    root = logging.getLogger()
    saved_handlers = root.handlers[:]
    saved_level = root.level
    yield
    for handler in root.handlers:
        if handler not in saved_handlers:
            handler.close()
    root.handlers[:] = saved_handlers
    root.setLevel(saved_level)


@pytest.fixture
def data_dir(tmp_path):
    projectiles = tmp_path / "projectiles"
    projectiles.mkdir()
    (projectiles / "alpha.yaml").write_text(RECORDS, encoding="utf-8")
    return tmp_path


class TestBuildParser:
    """Tests for CLI argument parsing."""

    def test_list_defaults(self):
        args = build_parser().parse_args(["list"])
        assert args.command == "list"
        assert args.file is None
        assert args.base is None
        assert args.drag_function is None
        assert args.data_dir is None
        assert args.verbose is False

    def test_drag_function_is_lowercased(self):
        args = build_parser().parse_args(["list", "--drag-function", "G7"])
        assert args.drag_function == "g7"

    def test_drag_function_rejects_unknown(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args(["list", "--drag-function", "g8"])

    def test_show(self):
        args = build_parser().parse_args(
            ["--data-dir", "/tmp/rec", "-v", "show", "alpha_308", "--file", "alpha"]
        )
        assert args.command == "show"
        assert args.id == "alpha_308"
        assert args.file == "alpha"
        assert args.data_dir == "/tmp/rec"
        assert args.verbose is True

    def test_command_required(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args([])


class TestRun:
    def _run(self, data_dir, *argv):
        return run(build_parser().parse_args(["--data-dir", str(data_dir), *argv]))

    def test_list(self, data_dir):
        lines = self._run(data_dir, "list").splitlines()
        assert lines == [
            "alpha_224  Alpha 55  G1 0.243",
            "alpha_308  Alpha 168  G7 0.232",
        ]

    def test_list_by_base(self, data_dir):
        text = self._run(data_dir, "list", "--base", "Boat-Tail")
        assert "alpha_308" in text
        assert "alpha_224" not in text

    def test_list_by_drag_function(self, data_dir):
        text = self._run(data_dir, "list", "--drag-function", "g1")
        assert text.splitlines() == ["alpha_224  Alpha 55  G1 0.243"]

    def test_list_empty(self, data_dir):
        text = self._run(data_dir, "list", "--base", "flat", "--drag-function", "g7")
        assert text == "No projectiles found"

    def test_show(self, data_dir):
        text = self._run(data_dir, "show", "alpha_308")
        assert text.startswith("PROJECTILE: Alpha 168")
        assert "BC (G7): 0.232" in text

    def test_numeric_ids(self, data_dir):
        (data_dir / "projectiles" / "numeric.yaml").write_text(
            "308:\n  name: Numeric 150\n  cal: 0.308\n  grains: 150\n  g1: 0.4\n",
            encoding="utf-8",
        )
        lines = self._run(data_dir, "list").splitlines()
        assert lines[0] == "308        Numeric 150  G1 0.4"
        assert self._run(data_dir, "show", "308").startswith("PROJECTILE: Numeric 150")

    def test_format_listing_mixed_ids(self):
        prj = Projectile.model_validate(
            {"name": "Mixed", "cal": 0.308, "grains": 150, "g7": 0.2}
        )
        text = _format_listing({308: prj, "a_1": prj})
        assert text.splitlines() == [
            "308  Mixed  G7 0.2",
            "a_1  Mixed  G7 0.2",
        ]


class TestMain:
    def test_success(self, data_dir, capsys):
        assert main(["--data-dir", str(data_dir), "show", "alpha_224"]) == 0
        assert "PROJECTILE: Alpha 55" in capsys.readouterr().out

    def test_unknown_id_exits_1(self, data_dir, capsys):
        code = main(["--data-dir", str(data_dir), "show", "nope"])
        assert code == 1
        captured = capsys.readouterr()
        assert captured.out == ""
        assert "NotFound" in captured.err

    def test_bad_base_exits_1(self, data_dir):
        assert main(["--data-dir", str(data_dir), "list", "--base", "hollow"]) == 1

    def test_log_file(self, data_dir, tmp_path):
        log_file = tmp_path / "logs" / "run.log"
        main(["--data-dir", str(data_dir), "--log-file", str(log_file), "-v", "list"])
        for handler in logging.getLogger().handlers:
            handler.flush()
        assert log_file.exists()
        assert "Listing 2 projectiles" in log_file.read_text(encoding="utf-8")
