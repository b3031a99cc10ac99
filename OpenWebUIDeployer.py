#!/usr/bin/env python3

"""
Open WebUI Deployment - Web front end wired to Ollama over the stack network.
"""

from BaseContainerRuntime import ContainerSpec
from BaseServiceDeployer import BaseServiceDeployer


class OpenWebUIDeployer(BaseServiceDeployer):
    """Open WebUI front end."""

    @property
    def display_name(self) -> str:
        return "Open WebUI"

    @property
    def container_name(self) -> str:
        return self.config.webui_container

    @property
    def host_port(self) -> int:
        return self.config.webui_host_port

    def _get_health_endpoint(self) -> str:
        return "/health"

    def _build_container_spec(self) -> ContainerSpec:
        # Container name resolution only works when both containers share the network
        return ContainerSpec(
            name=self.config.webui_container,
            image=self.config.webui_image,
            network=self.config.network_name,
            ports=[(self.config.webui_host_port, self.config.webui_container_port)],
            env={"OLLAMA_BASE_URL": self.config.ollama_internal_url},
            volumes=[(self.config.webui_volume, self.config.webui_mount_path)],
            restart_policy=self.config.restart_policy,
        )
