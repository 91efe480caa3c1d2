import subprocess

import pytest

from appforge import runner
from appforge.errors import CommandFailedError, ExecutionError


def test_run_passes_tokens_without_shell(fake_subprocess):
    assert runner.run(["git", "commit", "-m", "two words"]) == 0
    assert fake_subprocess.calls == [["git", "commit", "-m", "two words"]]


def test_run_logs_shell_quoted_command(fake_subprocess, capsys):
    runner.run(["echo", "a b"])
    assert "$ echo 'a b'" in capsys.readouterr().out


def test_run_without_log_is_silent(fake_subprocess, capsys):
    runner.run(["echo", "hi"], log=False)
    assert capsys.readouterr().out == ""


def test_non_zero_exit_is_fatal(fake_subprocess):
    fake_subprocess.returncodes["bundle install"] = 5

    with pytest.raises(CommandFailedError) as excinfo:
        runner.run(["bundle", "install"])

    assert excinfo.value.returncode == 5
    assert excinfo.value.exit_code == 1
    assert isinstance(excinfo.value, ExecutionError)
    assert fake_subprocess.commands == ["bundle install"]


def test_unchecked_failure_returns_code(fake_subprocess):
    fake_subprocess.returncodes["git"] = 1
    assert runner.run(["git", "commit"], check=False) == 1


def test_missing_executable_is_fatal(monkeypatch):
    def missing(args, **kwargs):
        raise FileNotFoundError(2, "No such file or directory", args[0])

    monkeypatch.setattr(subprocess, "run", missing)

    with pytest.raises(CommandFailedError) as excinfo:
        runner.run(["no-such-tool"])
    assert excinfo.value.returncode == 127


def test_capture_returns_stdout(fake_subprocess):
    assert runner.capture(["git", "rev-parse", "HEAD"]).strip() == "0123abcd"


def test_capture_failure_includes_stderr(fake_subprocess):
    fake_subprocess.returncodes["gem"] = 2
    with pytest.raises(CommandFailedError, match="boom"):
        runner.capture(["gem", "environment", "gemdir"])
