import errno

import pytest
from typer.testing import CliRunner

from appforge import __version__, cli
from appforge.cli import app, main
from appforge.errors import CommandFailedError, NoMatchError

runner = CliRunner()


class FakeGenerator:
    instances: list["FakeGenerator"] = []
    fail_with: Exception | None = None

    def __init__(self, config):
        self.config = config
        self.generated = False
        FakeGenerator.instances.append(self)

    def summary(self):
        return "* Task one\n* Task two"

    def generate(self):
        if FakeGenerator.fail_with is not None:
            raise FakeGenerator.fail_with
        self.generated = True


@pytest.fixture
def fake_generator(monkeypatch):
    FakeGenerator.instances = []
    FakeGenerator.fail_with = None
    monkeypatch.setattr(cli, "Generator", FakeGenerator)
    return FakeGenerator


def test_version():
    result = runner.invoke(app, ["--version"])
    assert result.exit_code == 0
    assert f"appforge v{__version__}" in result.stdout


def test_no_arguments_prints_help(capsys):
    assert main([]) == 0
    assert "APP_PATH" in capsys.readouterr().out


def test_auto_confirmed_run(fake_generator, tmp_path, capsys):
    code = main([str(tmp_path / "forum"), "-y", "--no-start-server", "--simple-form", "-d", "sqlite3"])

    assert code == 0
    (generator,) = fake_generator.instances
    assert generator.generated
    assert generator.config.simple_form is True
    assert generator.config.database == "sqlite3"
    assert generator.config.start_server is False
    out = capsys.readouterr().out
    assert "Will do the following:" in out
    assert "* Task two" in out
    assert "All done!" in out


def test_declined_prompt_does_nothing(fake_generator, tmp_path, monkeypatch):
    monkeypatch.setattr(cli.Confirm, "ask", classmethod(lambda cls, *a, **kw: False))

    assert main([str(tmp_path / "forum")]) == 0
    assert not fake_generator.instances[0].generated


def test_too_many_positional_arguments_is_usage_error(fake_generator):
    assert main(["one", "two"]) == 64
    assert fake_generator.instances == []


def test_unknown_flag_is_usage_error(fake_generator):
    assert main(["app", "--frobnicate"]) == 64


def test_invalid_database_is_usage_error(fake_generator, tmp_path):
    assert main([str(tmp_path / "forum"), "-y", "--database", "oracle"]) == 64


def test_execution_error_exit_code(fake_generator, tmp_path, capsys):
    fake_generator.fail_with = NoMatchError("config/routes.rb", "draw do")

    assert main([str(tmp_path / "forum"), "-y", "--no-start-server"]) == 78
    assert "No match found" in capsys.readouterr().out


def test_failed_command_exits_one(fake_generator, tmp_path):
    fake_generator.fail_with = CommandFailedError(["bundle", "install"], 5)
    assert main([str(tmp_path / "forum"), "-y", "--no-start-server"]) == 1


@pytest.mark.parametrize("error", [BrokenPipeError(), BrokenPipeError(errno.EPIPE, "Broken pipe")])
def test_broken_pipe_is_quiet(fake_generator, tmp_path, capsys, error):
    fake_generator.fail_with = error
    assert main([str(tmp_path / "forum"), "-y", "--no-start-server"]) == 1
    assert "Error" not in capsys.readouterr().out


def test_start_server_after_success(fake_generator, tmp_path, monkeypatch):
    started = []
    monkeypatch.setattr(cli, "_start_app_server", lambda config: started.append(config.app_path))

    assert main([str(tmp_path / "forum"), "-y"]) == 0
    assert started == [tmp_path / "forum"]


def test_unusable_app_path_is_execution_error(tmp_path, fake_subprocess, capsys):
    taken = tmp_path / "taken"
    taken.write_text("not a directory")

    assert main([str(taken), "-y", "--no-start-server"]) == 78
    assert "Cannot use" in capsys.readouterr().out
    assert fake_subprocess.calls == []


@pytest.mark.parametrize("verbose", [True, False])
def test_failure_detail_only_when_verbose(fake_generator, tmp_path, capsys, verbose):
    fake_generator.fail_with = NoMatchError("config/routes.rb", "draw do")
    args = [str(tmp_path / "forum"), "-y", "--no-start-server"]
    if verbose:
        args.append("--verbose")

    assert main(args) == 78

    out = capsys.readouterr().out
    assert "No match found" in out
    assert ("Traceback" in out) is verbose
