#!/usr/bin/env python3

"""
Base Container Runtime - Abstract interface over the container runtime command surface.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field


# ============================================================================
# Errors
# ============================================================================
class RuntimeCommandError(Exception):
    """A runtime command exited with a non-zero status."""

    def __init__(self, cmd, returncode, stderr=""):
        self.cmd = cmd
        self.returncode = returncode
        self.stderr = (stderr or "").strip()
        message = f"Command failed with exit code {returncode}: {cmd}"
        if self.stderr:
            message += f"\n   {self.stderr}"
        super().__init__(message)


# ============================================================================
# Container Specification
# ============================================================================
@dataclass
class ContainerSpec:
    """How a container is launched: name, image, network, ports, volumes, env."""

    name: str
    image: str
    network: str = None
    ports: list = field(default_factory=list)  # (host_port, container_port)
    volumes: list = field(default_factory=list)  # (volume_name, mount_path)
    env: dict = field(default_factory=dict)
    restart_policy: str = None
    detach: bool = True


# ============================================================================
# Base Container Runtime (Abstract Base Class)
# ============================================================================
class BaseContainerRuntime(ABC):
    """
    Abstract base class for container runtimes.

    Methods taking ``check`` raise RuntimeCommandError on failure when it is
    True, and return False instead when it is False.
    """

    binary = "docker"

    @abstractmethod
    def is_installed(self) -> bool:
        """Whether the runtime binary is on PATH."""
        pass

    @abstractmethod
    def is_reachable(self) -> bool:
        """Whether the runtime answers a status query."""
        pass

    @abstractmethod
    def network_exists(self, name) -> bool:
        pass

    @abstractmethod
    def create_network(self, name):
        pass

    @abstractmethod
    def remove_network(self, name, check=True) -> bool:
        pass

    @abstractmethod
    def container_exists(self, name) -> bool:
        """Whether a container with exactly this name exists, running or not."""
        pass

    @abstractmethod
    def container_running(self, name) -> bool:
        pass

    @abstractmethod
    def run_container(self, spec: ContainerSpec) -> str:
        """Create and start a container, returning its ID."""
        pass

    @abstractmethod
    def start_container(self, name, check=True) -> bool:
        pass

    @abstractmethod
    def stop_container(self, name, check=True) -> bool:
        pass

    @abstractmethod
    def remove_container(self, name, check=True) -> bool:
        pass

    @abstractmethod
    def exec_in_container(self, name, command, check=True, stream=False):
        """
        Run a command inside a running container.

        Returns the captured stdout, or True when ``stream`` is set and output
        goes straight to the terminal. Returns False on failure with check off.
        """
        pass

    @abstractmethod
    def container_logs(self, name, follow=False):
        pass

    @abstractmethod
    def status_table(self, names) -> str:
        """Name/status/ports table for the given containers, formatted by the runtime."""
        pass

    @abstractmethod
    def remove_volume(self, name, check=True) -> bool:
        pass
