"""
Shared fixtures

Run with: pytest tests/
"""

import io
from collections import namedtuple

import pytest

from gtask.commands import build_registry
from gtask.dispatcher import Dispatcher

from fakes import FakeTaskSource

Result = namedtuple('Result', ['code', 'out', 'err'])


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Keep every test away from the real ~/.config/gtask"""
    config_home = tmp_path / 'xdg'
    monkeypatch.setenv('XDG_CONFIG_HOME', str(config_home))
    return config_home / 'gtask'


@pytest.fixture
def source():
    return FakeTaskSource()


@pytest.fixture
def registry():
    return build_registry()


@pytest.fixture
def run_cli(source, registry):
    """Run one gtask invocation against the fake source"""
    def run(*args):
        out, err = io.StringIO(), io.StringIO()
        dispatcher = Dispatcher(registry, lambda config: source)
        code = dispatcher.run(list(args), out, err)
        return Result(code, out.getvalue(), err.getvalue())
    return run
