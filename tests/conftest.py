"""Pytest configuration and shared fixtures."""

import os

import pytest

from BaseContainerRuntime import BaseContainerRuntime, RuntimeCommandError
from DecisionProvider import FixedDecisions
from StackConfig import StackConfig
from StackOrchestrator import StackOrchestrator

os.environ.setdefault("NO_COLOR", "1")


class FakeRuntime(BaseContainerRuntime):
    """In-memory runtime that records every call and simulates networks and containers."""

    def __init__(self, installed=True, reachable=True):
        self.installed = installed
        self.reachable = reachable
        self.networks: set[str] = set()
        self.containers: dict[str, dict] = {}
        self.volumes: set[str] = set()
        self.calls: list[tuple] = []
        self.failures: set[tuple[str, str]] = set()
        self.exec_output = "NAME            ID              SIZE      MODIFIED\n"

    def add_container(self, name: str, running: bool = True, spec=None) -> None:
        self.containers[name] = {"spec": spec, "running": running}

    def calls_to(self, op: str) -> list[tuple]:
        return [c for c in self.calls if c[0] == op]

    def _error(self, op: str, name: str, check: bool) -> bool:
        if check:
            raise RuntimeCommandError(f"docker {op} {name}", 1, f"Error: {op} {name} failed")
        return False

    def is_installed(self) -> bool:
        self.calls.append(("is_installed",))
        return self.installed

    def is_reachable(self) -> bool:
        self.calls.append(("is_reachable",))
        return self.reachable

    def network_exists(self, name) -> bool:
        return name in self.networks

    def create_network(self, name):
        self.calls.append(("create_network", name))
        if ("create_network", name) in self.failures or name in self.networks:
            self._error("network create", name, True)
        self.networks.add(name)

    def remove_network(self, name, check=True) -> bool:
        self.calls.append(("remove_network", name))
        if name not in self.networks:
            return self._error("network rm", name, check)
        self.networks.discard(name)
        return True

    def container_exists(self, name) -> bool:
        return name in self.containers

    def container_running(self, name) -> bool:
        return self.containers.get(name, {}).get("running", False)

    def run_container(self, spec) -> str:
        self.calls.append(("run", spec.name))
        if ("run", spec.name) in self.failures or spec.name in self.containers:
            self._error("run", spec.name, True)
        self.containers[spec.name] = {"spec": spec, "running": True}
        for volume, _ in spec.volumes:
            self.volumes.add(volume)
        return f"id-{spec.name}"

    def start_container(self, name, check=True) -> bool:
        self.calls.append(("start", name))
        if name not in self.containers or ("start", name) in self.failures:
            return self._error("start", name, check)
        self.containers[name]["running"] = True
        return True

    def stop_container(self, name, check=True) -> bool:
        self.calls.append(("stop", name, check))
        if name not in self.containers:
            return self._error("stop", name, check)
        self.containers[name]["running"] = False
        return True

    def remove_container(self, name, check=True) -> bool:
        self.calls.append(("rm", name, check))
        if name not in self.containers or self.containers[name]["running"]:
            return self._error("rm", name, check)
        del self.containers[name]
        return True

    def exec_in_container(self, name, command, check=True, stream=False):
        self.calls.append(("exec", name, tuple(command), stream))
        if not self.container_running(name) or ("exec", name) in self.failures:
            return self._error("exec", name, check)
        return True if stream else self.exec_output

    def container_logs(self, name, follow=False):
        self.calls.append(("logs", name, follow))

    def status_table(self, names) -> str:
        lines = ["NAMES\tSTATUS\tPORTS"]
        for name in names:
            if name in self.containers:
                state = "Up 2 seconds" if self.containers[name]["running"] else "Exited (0)"
                lines.append(f"{name}\t{state}\t")
        return "\n".join(lines)

    def remove_volume(self, name, check=True) -> bool:
        self.calls.append(("volume_rm", name))
        if name not in self.volumes:
            return self._error("volume rm", name, check)
        self.volumes.discard(name)
        return True


class FakeProbe:
    """Readiness probe with a fixed answer."""

    def __init__(self, ready: bool = True):
        self.ready = ready
        self.urls: list[str] = []

    def check(self, url) -> bool:
        self.urls.append(url)
        return self.ready

    def wait_until_ready(self, url) -> bool:
        self.urls.append(url)
        return self.ready


@pytest.fixture
def config() -> StackConfig:
    return StackConfig()


@pytest.fixture
def runtime() -> FakeRuntime:
    return FakeRuntime()


@pytest.fixture
def probe() -> FakeProbe:
    return FakeProbe()


@pytest.fixture
def make_orchestrator(config: StackConfig, runtime: FakeRuntime, probe: FakeProbe):
    """Build an orchestrator over the fake runtime with scripted answers."""
    def _make(answers=None, **overrides) -> StackOrchestrator:
        return StackOrchestrator(
            config=overrides.get("config", config),
            runtime=overrides.get("runtime", runtime),
            decisions=FixedDecisions(answers),
            probe=overrides.get("probe", probe),
        )
    return _make
