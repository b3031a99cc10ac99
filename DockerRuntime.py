#!/usr/bin/env python3

"""
Docker Runtime - Container runtime implementation that shells out to the docker CLI.
Any CLI with docker-compatible commands and flags (e.g. podman) works as well.
"""

import shlex
import shutil
import subprocess
from BaseContainerRuntime import (
    BaseContainerRuntime,
    ContainerSpec,
    RuntimeCommandError,
)

DEFAULT_RUNTIME_BINARY = "docker"
STATUS_TABLE_FORMAT = "table {{.Names}}\\t{{.Status}}\\t{{.Ports}}"


# ============================================================================
# Docker CLI Runtime
# ============================================================================
class DockerRuntime(BaseContainerRuntime):
    """Runs every operation as a docker CLI command."""

    def __init__(self, binary=DEFAULT_RUNTIME_BINARY):
        self.binary = binary

    def _run_command(self, cmd, capture_output=True):
        """Run a shell command and return the result."""
        if capture_output:
            return subprocess.run(cmd, shell=True, capture_output=True, text=True)
        return subprocess.run(cmd, shell=True)

    def _checked(self, cmd, check=True, capture_output=True):
        """Run a command; raise on failure when check is set, else report success as a bool."""
        result = self._run_command(cmd, capture_output=capture_output)
        if result.returncode != 0:
            if check:
                raise RuntimeCommandError(cmd, result.returncode, getattr(result, "stderr", ""))
            return False
        return True

    def _name_filter(self, name):
        return f"--filter name=^{name}$"

    def _list_names(self, cmd):
        result = self._run_command(cmd)
        if result.returncode != 0:
            return []
        return [line.strip() for line in result.stdout.splitlines() if line.strip()]

    # ------------------------------------------------------------------------
    # Preflight
    # ------------------------------------------------------------------------
    def is_installed(self) -> bool:
        return shutil.which(self.binary) is not None

    def is_reachable(self) -> bool:
        result = self._run_command(f"{self.binary} info")
        return result.returncode == 0

    # ------------------------------------------------------------------------
    # Networks
    # ------------------------------------------------------------------------
    def network_exists(self, name) -> bool:
        names = self._list_names(
            f"{self.binary} network ls {self._name_filter(name)} --format '{{{{.Name}}}}'"
        )
        return name in names

    def create_network(self, name):
        self._checked(f"{self.binary} network create {shlex.quote(name)}")

    def remove_network(self, name, check=True) -> bool:
        return self._checked(f"{self.binary} network rm {shlex.quote(name)}", check=check)

    # ------------------------------------------------------------------------
    # Containers
    # ------------------------------------------------------------------------
    def container_exists(self, name) -> bool:
        names = self._list_names(
            f"{self.binary} ps -a {self._name_filter(name)} --format '{{{{.Names}}}}'"
        )
        return name in names

    def container_running(self, name) -> bool:
        names = self._list_names(
            f"{self.binary} ps {self._name_filter(name)} --format '{{{{.Names}}}}'"
        )
        return name in names

    def build_run_command(self, spec: ContainerSpec) -> str:
        """Build the docker run command for a container spec."""
        args = [f"{self.binary} run"]
        if spec.detach:
            args.append("-d")
        args.append(f"--name {shlex.quote(spec.name)}")
        if spec.network:
            args.append(f"--network {shlex.quote(spec.network)}")
        for host_port, container_port in spec.ports:
            args.append(f"-p {host_port}:{container_port}")
        for key, value in spec.env.items():
            args.append(f"-e {shlex.quote(f'{key}={value}')}")
        for volume, mount_path in spec.volumes:
            args.append(f"-v {shlex.quote(f'{volume}:{mount_path}')}")
        if spec.restart_policy:
            args.append(f"--restart {spec.restart_policy}")
        args.append(shlex.quote(spec.image))
        return " ".join(args)

    def run_container(self, spec: ContainerSpec) -> str:
        cmd = self.build_run_command(spec)
        result = self._run_command(cmd)
        if result.returncode != 0:
            raise RuntimeCommandError(cmd, result.returncode, result.stderr)
        return result.stdout.strip()

    def start_container(self, name, check=True) -> bool:
        return self._checked(f"{self.binary} start {shlex.quote(name)}", check=check)

    def stop_container(self, name, check=True) -> bool:
        return self._checked(f"{self.binary} stop {shlex.quote(name)}", check=check)

    def remove_container(self, name, check=True) -> bool:
        return self._checked(f"{self.binary} rm {shlex.quote(name)}", check=check)

    def exec_in_container(self, name, command, check=True, stream=False):
        cmd = f"{self.binary} exec {shlex.quote(name)} {' '.join(shlex.quote(c) for c in command)}"
        if stream:
            return self._checked(cmd, check=check, capture_output=False)

        result = self._run_command(cmd)
        if result.returncode != 0:
            if check:
                raise RuntimeCommandError(cmd, result.returncode, result.stderr)
            return False
        return result.stdout

    def container_logs(self, name, follow=False):
        follow_flag = "-f " if follow else ""
        self._run_command(f"{self.binary} logs {follow_flag}{shlex.quote(name)}", capture_output=False)

    def status_table(self, names) -> str:
        filters = " ".join(self._name_filter(name) for name in names)
        result = self._run_command(
            f"{self.binary} ps -a {filters} --format \"{STATUS_TABLE_FORMAT}\""
        )
        return result.stdout.rstrip() if result.returncode == 0 else ""

    # ------------------------------------------------------------------------
    # Volumes
    # ------------------------------------------------------------------------
    def remove_volume(self, name, check=True) -> bool:
        return self._checked(f"{self.binary} volume rm {shlex.quote(name)}", check=check)
