#!/usr/bin/env python3

"""
Stack Orchestrator - Installs and manages the Ollama + Open WebUI stack.

An install runs these stages top to bottom:

    preflight -> network -> reconcile -> provision -> model fetch -> report

Reconciliation may end the install early when the user keeps the existing
containers, whose start failures are only reported. A failed network
creation exits with status 1. A runtime command failure while provisioning
stops and removes both containers and exits with status 1.
"""

import sys
from enum import Enum
from BaseContainerRuntime import BaseContainerRuntime, RuntimeCommandError
from DecisionProvider import (
    ConsoleDecisions,
    DecisionProvider,
    PULL_MODEL,
    REPLACE_EXISTING,
)
from DockerRuntime import DockerRuntime
from OllamaDeployer import OllamaDeployer
from OpenWebUIDeployer import OpenWebUIDeployer
from ReadinessProbe import ReadinessProbe
from StackConfig import StackConfig
from console import (
    BLUE,
    GREEN,
    YELLOW,
    colorize,
    print_banner,
    print_error,
    print_info,
    print_success,
    print_warning,
)

SEPARATOR = "=" * 48


class Reconciliation(Enum):
    """What reconciliation decided about pre-existing containers."""
    NONE_FOUND = "none_found"
    KEPT = "kept"
    REPLACED = "replaced"


class StackOrchestrator:
    """Sequences the install and lifecycle commands against a container runtime."""

    def __init__(self, config: StackConfig = None, runtime: BaseContainerRuntime = None,
                 decisions: DecisionProvider = None, probe: ReadinessProbe = None):
        self.config = config or StackConfig()
        self.runtime = runtime or DockerRuntime()
        self.decisions = decisions or ConsoleDecisions()
        probe = probe or ReadinessProbe.from_config(self.config)

        self.ollama = OllamaDeployer(self.config, self.runtime, probe)
        self.webui = OpenWebUIDeployer(self.config, self.runtime, probe)
        self.services = {
            "ollama": self.ollama,
            "open-webui": self.webui,
        }

    @property
    def deployers(self):
        return [self.ollama, self.webui]

    # ========================================================================
    # Install stages
    # ========================================================================
    def preflight(self):
        """Exit unless the runtime is installed and reachable."""
        binary = self.runtime.binary
        if not self.runtime.is_installed():
            print_error(f"{binary} is not installed. Install it before continuing.")
            sys.exit(1)

        if not self.runtime.is_reachable():
            print_error(f"{binary} is not running or you lack the required permissions.")
            print_warning(f"Try: sudo systemctl start {binary}")
            print_warning(f"Or add your user to the {binary} group: sudo usermod -aG {binary} $USER")
            sys.exit(1)

        print_success(f"{binary} is installed and running")

    def ensure_network(self):
        name = self.config.network_name
        if self.runtime.network_exists(name):
            print_warning(f"Network {name} already exists")
            return
        print_info(f"Creating network: {name}")
        self.runtime.create_network(name)
        print_success(f"Network {name} created successfully")

    def reconcile(self) -> Reconciliation:
        """Ask whether pre-existing containers are kept or replaced."""
        existing = [deployer for deployer in self.deployers if deployer.exists()]
        if not existing:
            return Reconciliation.NONE_FOUND

        print()
        print_warning("Existing containers found:")
        for deployer in existing:
            print(f"  - {deployer.container_name}")
        print()

        if self.decisions.confirm(REPLACE_EXISTING, "Remove the existing containers and reinstall?"):
            print_info("Removing existing containers...")
            for deployer in existing:
                deployer.remove()
            return Reconciliation.REPLACED

        print_info("Keeping existing containers.")
        for deployer in existing:
            deployer.start(check=False)
        return Reconciliation.KEPT

    def provision(self):
        self.ollama.run()

        print_info(f"Waiting for {self.ollama.display_name} to be ready...")
        if self.ollama.wait_until_ready():
            print_success(f"{self.ollama.display_name} is ready and reachable")
        else:
            print_warning(f"{self.ollama.display_name} may not be fully ready yet")

        self.webui.run()

    def fetch_default_model(self) -> bool:
        model = self.config.default_model
        print()
        if self.decisions.confirm(PULL_MODEL, f"Download the default model {model}?"):
            return self.ollama.pull_model(model)

        print_warning("Model not downloaded. Remember to download at least one model to use Open WebUI.")
        return False

    def install(self) -> int:
        """Run the full install. Returns the process exit code."""
        print_info("Starting Open WebUI + Ollama installation")
        print(SEPARATOR)

        self.preflight()

        try:
            self.ensure_network()
        except RuntimeCommandError as e:
            print_error(f"Installation failed: {e}")
            sys.exit(1)

        if self.reconcile() is Reconciliation.KEPT:
            print_info("Existing containers were kept and started if needed.")
            self.show_final_links()
            self.show_status()
            return 0

        # Only containers created by this run exist past reconciliation
        try:
            self.provision()
        except RuntimeCommandError as e:
            self._cleanup_on_error(e)

        self.fetch_default_model()
        self.show_final_links()
        self.show_management_commands()
        self.show_status()
        return 0

    def _cleanup_on_error(self, error):
        print_error(f"Installation failed: {error}")
        print_error("Cleaning up...")
        for name in self.config.container_names:
            self.runtime.stop_container(name, check=False)
        for name in self.config.container_names:
            self.runtime.remove_container(name, check=False)
        sys.exit(1)

    # ========================================================================
    # Reporting
    # ========================================================================
    def show_final_links(self):
        print()
        print(SEPARATOR)
        print(colorize("🎉 INSTALLATION COMPLETED SUCCESSFULLY! 🎉", GREEN))
        print(SEPARATOR)
        print()
        print(colorize("📋 AVAILABLE SERVICES:", BLUE))
        print()
        print(colorize("🌐 Open WebUI", GREEN))
        print(f"   URL: {colorize(self.config.webui_url, YELLOW)}")
        print("   Description: Web interface for chatting with AI models")
        print()
        print(colorize("🤖 Ollama API", GREEN))
        print(f"   URL: {colorize(self.config.ollama_url, YELLOW)}")
        print("   Description: REST API for managing and running models")
        print()
        print(SEPARATOR)
        print(colorize("🚀 QUICK ACCESS:", BLUE))
        print()
        print(f"👉 Open your browser at: {colorize(self.config.webui_url, GREEN)}")
        print("👉 Create an account on the first screen")
        print("👉 Start chatting with your AI models!")
        print()
        print(SEPARATOR)

    def show_management_commands(self):
        binary = self.runtime.binary
        names = " ".join(self.config.container_names)
        print(colorize("🔧 MANAGING THE SERVICES:", BLUE))
        print(f"- Stop the services: {binary} stop {names}")
        print(f"- Restart the services: {binary} start {names}")
        print(f"- Remove everything: {binary} stop {names} && {binary} rm {names}"
              f" && {binary} network rm {self.config.network_name}")
        print()

    def show_status(self):
        binary = self.runtime.binary
        print_info("Service status:")
        print()
        print(self.runtime.status_table(self.config.container_names))
        print()
        print_info("Useful commands:")
        print(f"- Ollama logs: {binary} logs -f {self.ollama.container_name}")
        print(f"- Open WebUI logs: {binary} logs -f {self.webui.container_name}")
        print(f"- Download a model: {binary} exec {self.ollama.container_name} ollama pull <model_name>")
        print(f"- List models: {binary} exec {self.ollama.container_name} ollama list")

    # ========================================================================
    # Lifecycle commands
    # ========================================================================
    def status(self) -> bool:
        """Print the state of both services. Returns whether both are running."""
        print_banner("🔍 Checking Stack Status")
        self.preflight()
        running = [deployer.status() for deployer in self.deployers]
        print()
        self.show_status()
        return all(running)

    def start_all(self) -> bool:
        print_banner("🚀 Starting Stack")
        self.preflight()
        started = [deployer.start() for deployer in self.deployers]
        return all(started)

    def stop_all(self):
        print_banner("🛑 Stopping Stack")
        self.preflight()
        for deployer in reversed(self.deployers):
            deployer.stop()

    def logs(self, service, follow=False):
        deployer = self.services[service]
        print_banner(f"📋 Container Logs: {deployer.container_name}")
        deployer.logs(follow=follow)

    def pull_model(self, model=None) -> bool:
        self.preflight()
        if not self.ollama.is_running():
            print_error(f"Container '{self.ollama.container_name}' is not running")
            return False
        return self.ollama.pull_model(model)

    def list_models(self) -> bool:
        self.preflight()
        if not self.ollama.is_running():
            print_error(f"Container '{self.ollama.container_name}' is not running")
            return False
        print(self.ollama.list_models().rstrip())
        return True

    def uninstall(self, remove_network=False, remove_volumes=False):
        """Remove both containers and, on request, the network and the volumes."""
        print_banner("🗑️  Uninstalling Stack")
        self.preflight()
        for deployer in reversed(self.deployers):
            if deployer.exists():
                deployer.remove()

        if remove_network and self.runtime.network_exists(self.config.network_name):
            if self.runtime.remove_network(self.config.network_name, check=False):
                print_success(f"Network {self.config.network_name} removed")
            else:
                print_warning(f"Could not remove network {self.config.network_name}")

        if remove_volumes:
            for volume in (self.config.ollama_volume, self.config.webui_volume):
                if self.runtime.remove_volume(volume, check=False):
                    print_success(f"Volume {volume} removed")
                else:
                    print_warning(f"Could not remove volume {volume}")
