from pathlib import Path

from typer.testing import CliRunner

from tapline.cli import app

runner = CliRunner()

HEADER = "from tapline.facade import *\n"


def _script(tmp_path: Path, body: str, name: str = "t.py") -> Path:
    path = tmp_path / name
    path.write_text(HEADER + body)
    return path


def test_run_passing_script(tmp_path):
    script = _script(tmp_path, "plan(2)\nok(True, 'a')\nis_(1, 1, 'b')\n")
    result = runner.invoke(app, ["run", str(script)])
    assert result.exit_code == 0
    assert "1..2\nok 1 - a\nok 2 - b\n" in result.output


def test_run_failing_script(tmp_path):
    script = _script(tmp_path, "plan(2)\nok(True, 'a')\nok(False, 'b')\n")
    result = runner.invoke(app, ["run", str(script)])
    assert result.exit_code == 1
    assert "not ok 2 - b" in result.output


def test_run_prints_plan_when_script_does_not(tmp_path):
    script = _script(tmp_path, "ok(True, 'a')\nok(True, 'b')\n")
    result = runner.invoke(app, ["run", str(script)])
    assert result.exit_code == 0
    assert result.output.endswith("ok 2 - b\n1..2\n")


def test_run_todo_failures_do_not_fail(tmp_path):
    script = _script(tmp_path, "TODO('later')\nok(False, 'a')\n")
    result = runner.invoke(app, ["run", str(script)])
    assert result.exit_code == 0
    assert "not ok 1 - a # TODO later" in result.output


def test_run_script_that_dies(tmp_path):
    script = _script(tmp_path, "ok(True, 'a')\nraise RuntimeError('boom')\n")
    result = runner.invoke(app, ["run", str(script)])
    assert result.exit_code == 255
    assert "# Looks like your test died: RuntimeError('boom')" in result.output
    assert "1..1" in result.output


def test_run_script_that_bails(tmp_path):
    script = _script(tmp_path, "plan(2)\nok(True, 'a')\nBAIL('no database')\n")
    result = runner.invoke(app, ["run", str(script)])
    assert result.exit_code == 255
    assert "Bail out! no database" in result.output


def test_run_script_whose_subtest_bails(tmp_path):
    body = (
        "with subtest('db') as st:\n"
        "    st.pass_('connect')\n"
        "    st.bail('db down')\n"
        "ok(True, 'after bail')\n"
    )
    result = runner.invoke(app, ["run", str(_script(tmp_path, body))])
    assert result.exit_code == 255
    assert "    Bail out! db down\nnot ok 1 - db\n" in result.output


def test_run_keeps_script_exit_code(tmp_path):
    script = _script(tmp_path, "import sys\nok(True, 'a')\nsys.exit(3)\n")
    result = runner.invoke(app, ["run", str(script)])
    assert result.exit_code == 3
    assert "1..1" in result.output


def test_run_script_exit_zero_still_checks_tests(tmp_path):
    script = _script(tmp_path, "import sys\nok(False, 'a')\nsys.exit(0)\n")
    result = runner.invoke(app, ["run", str(script)])
    assert result.exit_code == 1


def test_run_passes_script_arguments(tmp_path):
    script = _script(tmp_path, "import sys\nis_(sys.argv[1:], ['x', 'y'], 'args')\n")
    result = runner.invoke(app, ["run", str(script), "x", "y"])
    assert result.exit_code == 0
    assert "ok 1 - args" in result.output


def test_run_script_can_import_neighbours(tmp_path):
    (tmp_path / "helpers.py").write_text("ANSWER = 42\n")
    script = _script(tmp_path, "from helpers import ANSWER\nis_(ANSWER, 42, 'helper')\n")
    result = runner.invoke(app, ["run", str(script)])
    assert result.exit_code == 0


def test_run_with_config(tmp_path):
    config = tmp_path / "tapline.yaml"
    config.write_text('indent: "  "\ntodo_reason: soon\n')
    script = _script(
        tmp_path,
        "with subtest('outer') as st:\n"
        "    st.mark_todo()\n"
        "    st.fail('inner')\n",
    )
    result = runner.invoke(app, ["run", str(script), "--config", str(config)])
    assert result.exit_code == 0
    assert "  not ok 1 - inner # TODO soon\n  1..1\nok 1 - outer\n" in result.output


def test_run_writes_debug_log(tmp_path):
    script = _script(tmp_path, "plan(1)\nok(True, 'a')\n")
    debug_log = tmp_path / "logs" / "debug.log"
    result = runner.invoke(
        app, ["run", str(script), "--debug-log", str(debug_log), "--verbose"]
    )
    assert result.exit_code == 0
    content = debug_log.read_text()
    assert "Running test script" in content
    assert "planned 1 test(s)" in content


def test_run_missing_script():
    result = runner.invoke(app, ["run", "nonexistent.py"])
    assert result.exit_code == 2


def test_run_missing_config(tmp_path):
    script = _script(tmp_path, "ok(True)\n")
    result = runner.invoke(app, ["run", str(script), "--config", "nope.yaml"])
    assert result.exit_code == 2


def test_run_invalid_config(tmp_path):
    config = tmp_path / "tapline.yaml"
    config.write_text("indent: xx\n")
    script = _script(tmp_path, "ok(True)\n")
    result = runner.invoke(app, ["run", str(script), "--config", str(config)])
    assert result.exit_code == 2


def test_config_command_prints_defaults():
    result = runner.invoke(app, ["config"])
    assert result.exit_code == 0
    assert "indent: '    '" in result.output
    assert "stream: stdout" in result.output


def test_config_command_reads_file(tmp_path):
    config = tmp_path / "tapline.yaml"
    config.write_text("todo_reason: later\n")
    result = runner.invoke(app, ["config", "--config", str(config)])
    assert result.exit_code == 0
    assert "todo_reason: later" in result.output


def test_bundled_examples_pass():
    examples = Path(__file__).parent.parent / "examples"
    for script in sorted(examples.glob("*.py")):
        result = runner.invoke(app, ["run", str(script)])
        assert result.exit_code == 0, f"{script.name}:\n{result.output}"
