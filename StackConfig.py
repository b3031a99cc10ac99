#!/usr/bin/env python3

"""
Stack Configuration - Names, images, ports and volumes for the Ollama + Open WebUI stack.
"""

from dataclasses import dataclass

# ============================================================================
# Default Configurations
# ============================================================================
DEFAULT_NETWORK_NAME = "ollama-network"
DEFAULT_RESTART_POLICY = "unless-stopped"
DEFAULT_HOST = "localhost"
DEFAULT_MODEL = "llama3.2"

# ============================================================================
# Docker Image Configurations
# ============================================================================
OLLAMA_IMAGE = "ollama/ollama"
OPEN_WEBUI_IMAGE = "ghcr.io/open-webui/open-webui:main"

# ============================================================================
# Container Configurations
# ============================================================================
OLLAMA_CONTAINER_NAME = "ollama"
OLLAMA_HOST_PORT = 11434
OLLAMA_CONTAINER_PORT = 11434
OLLAMA_VOLUME = "ollama_data"
OLLAMA_MOUNT_PATH = "/root/.ollama"

OPEN_WEBUI_CONTAINER_NAME = "open-webui"
OPEN_WEBUI_HOST_PORT = 3000
OPEN_WEBUI_CONTAINER_PORT = 8080
OPEN_WEBUI_VOLUME = "open-webui"
OPEN_WEBUI_MOUNT_PATH = "/app/backend/data"

# ============================================================================
# Readiness Probe Configurations
# ============================================================================
DEFAULT_PROBE_ATTEMPTS = 10
DEFAULT_PROBE_INITIAL_DELAY = 1.0
DEFAULT_PROBE_MAX_DELAY = 8.0
DEFAULT_PROBE_TIMEOUT = 2


# ============================================================================
# Stack Configuration
# ============================================================================
@dataclass
class StackConfig:
    """Everything the deployers need to know about the two containers."""

    network_name: str = DEFAULT_NETWORK_NAME
    restart_policy: str = DEFAULT_RESTART_POLICY
    host: str = DEFAULT_HOST
    default_model: str = DEFAULT_MODEL

    ollama_container: str = OLLAMA_CONTAINER_NAME
    ollama_image: str = OLLAMA_IMAGE
    ollama_host_port: int = OLLAMA_HOST_PORT
    ollama_container_port: int = OLLAMA_CONTAINER_PORT
    ollama_volume: str = OLLAMA_VOLUME
    ollama_mount_path: str = OLLAMA_MOUNT_PATH

    webui_container: str = OPEN_WEBUI_CONTAINER_NAME
    webui_image: str = OPEN_WEBUI_IMAGE
    webui_host_port: int = OPEN_WEBUI_HOST_PORT
    webui_container_port: int = OPEN_WEBUI_CONTAINER_PORT
    webui_volume: str = OPEN_WEBUI_VOLUME
    webui_mount_path: str = OPEN_WEBUI_MOUNT_PATH

    probe_attempts: int = DEFAULT_PROBE_ATTEMPTS
    probe_initial_delay: float = DEFAULT_PROBE_INITIAL_DELAY
    probe_max_delay: float = DEFAULT_PROBE_MAX_DELAY
    probe_timeout: int = DEFAULT_PROBE_TIMEOUT

    def __post_init__(self):
        for field_name in ("network_name", "host", "ollama_container", "webui_container",
                           "ollama_image", "webui_image", "default_model", "restart_policy"):
            if not getattr(self, field_name):
                raise ValueError(f"{field_name} must not be empty")

        for field_name in ("ollama_host_port", "ollama_container_port",
                           "webui_host_port", "webui_container_port"):
            port = getattr(self, field_name)
            if not 1 <= port <= 65535:
                raise ValueError(f"{field_name} must be between 1 and 65535, got {port}")

        if self.ollama_container == self.webui_container:
            raise ValueError("ollama_container and webui_container must differ")

        if self.probe_attempts < 1:
            raise ValueError("probe_attempts must be at least 1")

    @property
    def container_names(self):
        return [self.ollama_container, self.webui_container]

    @property
    def ollama_internal_url(self) -> str:
        """Base URL of the inference server as seen from inside the network."""
        return f"http://{self.ollama_container}:{self.ollama_container_port}"

    @property
    def ollama_url(self) -> str:
        return f"http://{self.host}:{self.ollama_host_port}"

    @property
    def webui_url(self) -> str:
        return f"http://{self.host}:{self.webui_host_port}"
