#!/usr/bin/env python3

"""
Ollama Deployment - Inference server container and its model store.
"""

from BaseContainerRuntime import ContainerSpec
from BaseServiceDeployer import BaseServiceDeployer
from console import print_error, print_info, print_success, print_warning


class OllamaDeployer(BaseServiceDeployer):
    """Ollama inference server."""

    @property
    def display_name(self) -> str:
        return "Ollama"

    @property
    def container_name(self) -> str:
        return self.config.ollama_container

    @property
    def host_port(self) -> int:
        return self.config.ollama_host_port

    def _get_health_endpoint(self) -> str:
        return "/api/tags"

    def _build_container_spec(self) -> ContainerSpec:
        return ContainerSpec(
            name=self.config.ollama_container,
            image=self.config.ollama_image,
            network=self.config.network_name,
            ports=[(self.config.ollama_host_port, self.config.ollama_container_port)],
            volumes=[(self.config.ollama_volume, self.config.ollama_mount_path)],
            restart_policy=self.config.restart_policy,
        )

    def pull_command(self, model) -> str:
        """Shell command a user can run to pull the model by hand."""
        return f"{self.runtime.binary} exec {self.container_name} ollama pull {model}"

    def pull_model(self, model=None) -> bool:
        """Pull a model into the running server. Failure is reported, not raised."""
        model = model or self.config.default_model
        print_info(f"Downloading model: {model}")
        print_warning("This may take several minutes...")

        pulled = self.runtime.exec_in_container(
            self.container_name, ["ollama", "pull", model], check=False, stream=True
        )
        if pulled:
            print_success(f"Model {model} downloaded successfully")
            return True

        print_error(f"Failed to download model {model}")
        print_warning(f"You can download it manually later with: {self.pull_command(model)}")
        return False

    def list_models(self) -> str:
        """Output of `ollama list` inside the container."""
        return self.runtime.exec_in_container(self.container_name, ["ollama", "list"])
