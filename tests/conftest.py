import json

import pytest

from omni_agent.cpi import ProcessOutcome


class FakeRunner:
    """Records command lines instead of running them."""

    def __init__(self, outcomes=None, default=None):
        self.outcomes = outcomes or {}
        self.default = default or ProcessOutcome(exit_status=0, stdout="", stderr="")
        self.calls = []

    def __call__(self, command_line: str) -> ProcessOutcome:
        self.calls.append(command_line)
        return self.outcomes.get(command_line, self.default)


@pytest.fixture
def fake_runner() -> FakeRunner:
    return FakeRunner()


@pytest.fixture
def write_cpi(tmp_path):
    """Write a CPI file from a dict of actions and return its path."""

    def _write(actions: dict, name: str = "cpi.json"):
        path = tmp_path / name
        path.write_text(json.dumps({"actions": actions}), encoding="utf-8")
        return path

    return _write
