#!/usr/bin/env python3

"""
Base Service Deployer - Abstract base class for the containers of the stack.
"""

from abc import ABC, abstractmethod
from BaseContainerRuntime import BaseContainerRuntime, ContainerSpec
from ReadinessProbe import ReadinessProbe
from StackConfig import StackConfig
from console import print_info, print_success, print_warning


# ============================================================================
# Base Service Deployer (Abstract Base Class)
# ============================================================================
class BaseServiceDeployer(ABC):
    """Lifecycle of one container of the stack on a container runtime."""

    def __init__(self, config: StackConfig, runtime: BaseContainerRuntime, probe: ReadinessProbe = None):
        self.config = config
        self.runtime = runtime
        self.probe = probe or ReadinessProbe.from_config(config)

    @property
    @abstractmethod
    def display_name(self) -> str:
        pass

    @property
    @abstractmethod
    def container_name(self) -> str:
        pass

    @property
    @abstractmethod
    def host_port(self) -> int:
        pass

    @abstractmethod
    def _get_health_endpoint(self) -> str:
        """Get the health check endpoint for this service."""
        pass

    @abstractmethod
    def _build_container_spec(self) -> ContainerSpec:
        """Build the run specification for this service's container."""
        pass

    @property
    def service_url(self) -> str:
        return f"http://{self.config.host}:{self.host_port}"

    @property
    def health_url(self) -> str:
        return f"{self.service_url}{self._get_health_endpoint()}"

    def exists(self) -> bool:
        return self.runtime.container_exists(self.container_name)

    def is_running(self) -> bool:
        return self.runtime.container_running(self.container_name)

    def run(self) -> str:
        """Create and start the container. Runtime failures propagate."""
        print_info(f"Installing {self.display_name}...")
        container_id = self.runtime.run_container(self._build_container_spec())
        print_success(f"{self.display_name} started successfully")
        return container_id

    def start(self, check=True) -> bool:
        """Start the container if it exists but is stopped."""
        if not self.exists():
            print_warning(f"Container '{self.container_name}' not found")
            return False
        if self.is_running():
            return True
        print_info(f"Starting container {self.container_name}...")
        if not self.runtime.start_container(self.container_name, check=check):
            print_warning(f"Could not start container {self.container_name}")
            return False
        return True

    def stop(self, check=True) -> bool:
        if not self.is_running():
            print_warning(f"Container '{self.container_name}' is not running")
            return False
        print_info(f"Stopping container {self.container_name}...")
        stopped = self.runtime.stop_container(self.container_name, check=check)
        if stopped:
            print_success(f"Container {self.container_name} stopped")
        return stopped

    def remove(self):
        """Stop and remove the container, ignoring errors from either step."""
        self.runtime.stop_container(self.container_name, check=False)
        if self.runtime.remove_container(self.container_name, check=False):
            print_success(f"Container {self.container_name} removed")
        else:
            print_warning(f"Could not remove container {self.container_name}")

    def wait_until_ready(self) -> bool:
        return self.probe.wait_until_ready(self.health_url)

    def logs(self, follow=False):
        if not self.exists():
            print_warning(f"Container '{self.container_name}' not found")
            return
        if follow:
            print_info("Following logs (Ctrl+C to exit)...")
        self.runtime.container_logs(self.container_name, follow=follow)

    def status(self) -> bool:
        """Print the state of the container. Returns whether it is running."""
        if not self.exists():
            print(f"\n❌ Container '{self.container_name}' not found")
            return False

        if not self.is_running():
            print(f"\n⚠️  Container '{self.container_name}' exists but is NOT RUNNING")
            return False

        print(f"\n✅ Container '{self.container_name}' is RUNNING")
        print(f"   Service URL: {self.service_url}")
        print(f"   Health check: {self.health_url}")
        if self.probe.check(self.health_url):
            print(f"   API Status: ✅ Ready")
        else:
            print(f"   API Status: ⏳ Starting up")
        return True
