import sys

import pytest

from mksysimage.errors import CommandError, StageError
from mksysimage.lib.command import ExecutionLog, run_cmd


def test_successful_command_is_recorded():
    log = ExecutionLog()
    r = run_cmd([sys.executable, "-c", "import sys; print('out'); print('err', file=sys.stderr)"], log=log)

    assert r.returncode == 0
    assert r.stdout.strip() == "out"
    assert len(log) == 1
    entry = log.entries[0]
    assert entry.stdout.strip() == "out"
    assert entry.stderr.strip() == "err"


def test_nonzero_exit_raises_and_is_still_logged():
    log = ExecutionLog()
    with pytest.raises(CommandError) as exc:
        run_cmd([sys.executable, "-c", "import sys; sys.stderr.write('nope'); sys.exit(3)"], log=log)

    assert isinstance(exc.value, StageError)
    assert exc.value.returncode == 3
    assert "nope" in str(exc.value)
    assert log.entries[0].returncode == 3


def test_check_false_returns_failure():
    log = ExecutionLog()
    r = run_cmd([sys.executable, "-c", "raise SystemExit(2)"], check=False, log=log)
    assert r.returncode == 2


def test_unlaunchable_program_raises_command_error():
    log = ExecutionLog()
    with pytest.raises(CommandError) as exc:
        run_cmd(["definitely-not-a-real-program-xyz"], log=log)

    assert exc.value.returncode is None
    assert log.entries[0].returncode is None
    assert "(not started)" in log.render()


def test_stdin_and_cwd_are_passed(tmp_path):
    log = ExecutionLog()
    r = run_cmd(
        [sys.executable, "-c", "import os, sys; print(os.getcwd()); print(sys.stdin.read())"],
        cwd=str(tmp_path),
        input_text=",,L,*\n",
        log=log,
    )
    lines = r.stdout.splitlines()
    assert lines[0] == str(tmp_path.resolve()) or lines[0] == str(tmp_path)
    assert lines[1] == ",,L,*"
    assert log.entries[0].cwd == str(tmp_path)


def test_record_stdout_false_keeps_output_out_of_log():
    log = ExecutionLog()
    r = run_cmd([sys.executable, "-c", "print('tree')"], record_stdout=False, log=log)
    assert r.stdout.strip() == "tree"
    assert log.entries[0].stdout == ""


def test_render_lists_commands_in_order_with_output():
    log = ExecutionLog()
    run_cmd([sys.executable, "-c", "print('first')"], log=log)
    run_cmd([sys.executable, "-c", "print('second')"], log=log)

    text = log.render()
    assert text.index("first") < text.index("second")
    assert text.count("=== ") == 2
    assert "(exit 0)" in text


def test_dump_writes_nothing_for_empty_log(capsys):
    ExecutionLog().dump(sys.stderr)
    assert capsys.readouterr().err == ""
