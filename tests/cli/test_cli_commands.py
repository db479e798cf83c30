#
# tests/cli/test_cli_commands.py
#
"""
End-to-end tests of the seatbelt CLI against real unittest modules.
"""

from pathlib import Path

import pytest
from click.testing import CliRunner

from seatbelt.cli.main import cli

PASSING_TESTS = '''
import unittest


class Passing(unittest.TestCase):
    def test_one(self):
        self.assertEqual(1 + 1, 2)

    def test_two(self):
        self.assertTrue("seatbelt")
'''

FAILING_TESTS = '''
import unittest


class Failing(unittest.TestCase):
    def test_ok(self):
        pass

    def test_broken(self):
        self.assertEqual("left", "right")
'''


@pytest.fixture
def project(tmp_path: Path, isolated_imports: None) -> Path:
    root = tmp_path / "proj"
    (root / "tests").mkdir(parents=True)
    (root / "seatbelt.toml").write_text('[runner]\nsource_root = "tests"\nminimum_pass_threshold = 2\n')
    return root


def invoke(*args: str):
    return CliRunner().invoke(cli, list(args))


class TestMainCLI:
    def test_help_lists_commands(self) -> None:
        result = invoke("--help")

        assert result.exit_code == 0
        assert "seatbelt" in result.output.lower()
        for command in ("run", "watch", "config"):
            assert command in result.output

    def test_invalid_log_level_is_rejected(self) -> None:
        result = invoke("--log-level", "INVALID", "config", "show", "--help")
        assert result.exit_code != 0

    def test_run_help(self) -> None:
        result = invoke("run", "--help")

        assert result.exit_code == 0
        assert "--ready-file" in result.output
        assert "MODULE_REFS" in result.output


class TestConfigCommands:
    def test_show_prints_config(self, project: Path) -> None:
        result = invoke("config", "show", "-c", str(project / "seatbelt.toml"))

        assert result.exit_code == 0
        assert "SeatbeltConfig(" in result.output
        assert "minimum_pass_threshold=2" in result.output

    def test_show_reports_invalid_config(self, tmp_path: Path) -> None:
        bad = tmp_path / "seatbelt.toml"
        bad.write_text("[runner]\nminimum_pass_threshold = -3\n")

        result = invoke("config", "show", "-c", str(bad))

        assert result.exit_code == 1
        assert "Configuration problem" in result.output


class TestRunCommand:
    def test_passing_modules_print_yay(self, project: Path) -> None:
        (project / "tests" / "test_sbcli_pass.py").write_text(PASSING_TESTS)

        result = invoke("run", "-c", str(project / "seatbelt.toml"))

        assert result.exit_code == 0, result.output
        assert "=== test_sbcli_pass.Passing.test_one: ✅ ===" in result.output
        assert "Running tests in these 1 modules [test-sbcli-pass]" in result.output
        assert "seatbelt: tests run, results: {'pass': 2, 'fail': 0, 'error': 0}" in result.output
        assert result.output.count("✅") == 2
        assert "🟢 YAY! 🟢" in result.output

    def test_failing_module_prints_nay(self, project: Path) -> None:
        (project / "tests" / "test_sbcli_fail.py").write_text(FAILING_TESTS)

        result = invoke("run", "-c", str(project / "seatbelt.toml"))

        assert result.exit_code == 1
        assert "❌" in result.output
        assert "FAIL in test_sbcli_fail.Failing.test_broken" in result.output
        assert "🔴 NAY! 🔴 some tests failed or errored" in result.output

    def test_explicit_module_refs(self, project: Path) -> None:
        (project / "tests" / "test_sbcli_only.py").write_text(PASSING_TESTS)
        (project / "tests" / "test_sbcli_skip.py").write_text(FAILING_TESTS)

        result = invoke("run", "-c", str(project / "seatbelt.toml"), "test-sbcli-only")

        assert result.exit_code == 0, result.output
        assert "test_sbcli_skip" not in result.output

    def test_syntax_error_reports_load_failure(self, project: Path) -> None:
        (project / "tests" / "test_sbcli_syntax.py").write_text("def broken(:\n")

        result = invoke("run", "-c", str(project / "seatbelt.toml"))

        assert result.exit_code == 1
        assert "🔴 NAY! 🔴 Failed to load module 'test-sbcli-syntax'" in result.output

    def test_ready_file_gates_run(self, project: Path) -> None:
        (project / "tests" / "test_sbcli_ready.py").write_text(PASSING_TESTS)
        ready = project / "ready"
        ready.touch()

        result = invoke("run", "-c", str(project / "seatbelt.toml"), "--ready-file", str(ready))

        assert result.exit_code == 0, result.output
        assert f"Ready file found: {ready}" in result.output

    def test_invalid_config_exits_2(self, tmp_path: Path) -> None:
        bad = tmp_path / "seatbelt.toml"
        bad.write_text("[runner\n")

        result = invoke("run", "-c", str(bad))

        assert result.exit_code == 2
        assert "Could not parse" in result.output
