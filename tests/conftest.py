import subprocess
from pathlib import Path

import pytest

from appforge import config_loader
from appforge.config_loader import AppConfig


class FakeSubprocess:
    """Stands in for subprocess.run: records every command, spawns nothing."""

    def __init__(self, gem_dir: Path):
        self.calls: list[list[str]] = []
        self.outputs = {
            "status --porcelain": " M Gemfile\n",
            "rev-parse HEAD": "0123abcd\n",
            "gem environment gemdir": f"{gem_dir}\n",
        }
        self.returncodes: dict[str, int] = {}
        self.on_call = None

    def __call__(self, args, **kwargs):
        args = [str(a) for a in args]
        self.calls.append(args)
        if self.on_call:
            self.on_call(args)
        line = " ".join(args)
        returncode = next((rc for key, rc in self.returncodes.items() if key in line), 0)
        stdout = next((out for key, out in self.outputs.items() if key in line), "")
        if not kwargs.get("capture_output"):
            stdout = None
        return subprocess.CompletedProcess(args, returncode, stdout=stdout, stderr="boom")

    @property
    def commands(self) -> list[str]:
        return [" ".join(c) for c in self.calls]


@pytest.fixture(autouse=True)
def _no_user_config(monkeypatch, tmp_path):
    monkeypatch.setattr(config_loader, "_USER_CONFIG_PATH", tmp_path / "no-user-config.yaml")


@pytest.fixture
def fake_subprocess(monkeypatch, tmp_path):
    gem_dir = tmp_path / "gems"
    gem_dir.mkdir()
    fake = FakeSubprocess(gem_dir)
    monkeypatch.setattr(subprocess, "run", fake)
    return fake


@pytest.fixture
def make_config(tmp_path):
    def _make(**options) -> AppConfig:
        options.setdefault("app_path", tmp_path / "app1")
        return AppConfig(**options)

    return _make
