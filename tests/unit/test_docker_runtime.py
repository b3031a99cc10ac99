"""Unit tests for the docker CLI runtime."""

import subprocess
from unittest.mock import patch

import pytest

from BaseContainerRuntime import ContainerSpec, RuntimeCommandError
from DockerRuntime import DockerRuntime


def _completed(returncode: int = 0, stdout: str = "", stderr: str = "") -> subprocess.CompletedProcess:
    return subprocess.CompletedProcess(args="", returncode=returncode, stdout=stdout, stderr=stderr)


def _issued(mock_run) -> list[str]:
    return [call.args[0] for call in mock_run.call_args_list]


def test_run_command_for_inference_server() -> None:
    spec = ContainerSpec(
        name="ollama",
        image="ollama/ollama",
        network="ollama-network",
        ports=[(11434, 11434)],
        volumes=[("ollama_data", "/root/.ollama")],
        restart_policy="unless-stopped",
    )
    assert DockerRuntime().build_run_command(spec) == (
        "docker run -d --name ollama --network ollama-network -p 11434:11434 "
        "-v ollama_data:/root/.ollama --restart unless-stopped ollama/ollama"
    )


def test_run_command_passes_environment() -> None:
    spec = ContainerSpec(
        name="open-webui",
        image="ghcr.io/open-webui/open-webui:main",
        network="ollama-network",
        ports=[(3000, 8080)],
        env={"OLLAMA_BASE_URL": "http://ollama:11434"},
        volumes=[("open-webui", "/app/backend/data")],
        restart_policy="unless-stopped",
    )
    cmd = DockerRuntime("podman").build_run_command(spec)
    assert cmd.startswith("podman run -d --name open-webui")
    assert "-p 3000:8080" in cmd
    assert "-e OLLAMA_BASE_URL=http://ollama:11434" in cmd
    assert "-v open-webui:/app/backend/data" in cmd
    assert cmd.endswith("ghcr.io/open-webui/open-webui:main")


def test_run_container_returns_id() -> None:
    with patch("subprocess.run", return_value=_completed(stdout="abc123\n")):
        assert DockerRuntime().run_container(ContainerSpec(name="x", image="img")) == "abc123"


def test_run_container_failure_raises() -> None:
    failed = _completed(returncode=125, stderr="Conflict. The container name is already in use")
    with patch("subprocess.run", return_value=failed):
        with pytest.raises(RuntimeCommandError) as exc:
            DockerRuntime().run_container(ContainerSpec(name="x", image="img"))
    assert exc.value.returncode == 125
    assert "already in use" in exc.value.stderr


def test_container_exists_matches_exact_name() -> None:
    runtime = DockerRuntime()
    with patch("subprocess.run", return_value=_completed(stdout="ollama-old\n")):
        assert runtime.container_exists("ollama") is False
    with patch("subprocess.run", return_value=_completed(stdout="ollama\n")) as mock_run:
        assert runtime.container_exists("ollama") is True
    assert _issued(mock_run) == ["docker ps -a --filter name=^ollama$ --format '{{.Names}}'"]


def test_container_running_queries_running_only() -> None:
    with patch("subprocess.run", return_value=_completed(stdout="")) as mock_run:
        assert DockerRuntime().container_running("open-webui") is False
    assert _issued(mock_run) == ["docker ps --filter name=^open-webui$ --format '{{.Names}}'"]


def test_network_exists_and_create() -> None:
    runtime = DockerRuntime()
    with patch("subprocess.run", return_value=_completed(stdout="ollama-network\n")):
        assert runtime.network_exists("ollama-network") is True
    with patch("subprocess.run", return_value=_completed()) as mock_run:
        runtime.create_network("ollama-network")
    assert _issued(mock_run) == ["docker network create ollama-network"]


def test_create_network_failure_raises() -> None:
    with patch("subprocess.run", return_value=_completed(returncode=1, stderr="denied")):
        with pytest.raises(RuntimeCommandError):
            DockerRuntime().create_network("ollama-network")


def test_unchecked_stop_and_remove_report_failure() -> None:
    runtime = DockerRuntime()
    with patch("subprocess.run", return_value=_completed(returncode=1, stderr="No such container")):
        assert runtime.stop_container("ollama", check=False) is False
        assert runtime.remove_container("ollama", check=False) is False
        with pytest.raises(RuntimeCommandError):
            runtime.stop_container("ollama")


def test_streaming_exec_inherits_terminal() -> None:
    with patch("subprocess.run", return_value=_completed()) as mock_run:
        assert DockerRuntime().exec_in_container("ollama", ["ollama", "pull", "llama3.2"], stream=True) is True
    mock_run.assert_called_once_with("docker exec ollama ollama pull llama3.2", shell=True)


def test_captured_exec_returns_output() -> None:
    with patch("subprocess.run", return_value=_completed(stdout="llama3.2:latest\n")):
        assert DockerRuntime().exec_in_container("ollama", ["ollama", "list"]) == "llama3.2:latest\n"


def test_status_table_filters_both_containers() -> None:
    table = "NAMES\tSTATUS\tPORTS\nollama\tUp 1 minute\t0.0.0.0:11434->11434/tcp\n"
    with patch("subprocess.run", return_value=_completed(stdout=table)) as mock_run:
        assert DockerRuntime().status_table(["ollama", "open-webui"]) == table.rstrip()
    cmd = _issued(mock_run)[0]
    assert "--filter name=^ollama$ --filter name=^open-webui$" in cmd
    assert '--format "table {{.Names}}\\t{{.Status}}\\t{{.Ports}}"' in cmd


def test_preflight_checks() -> None:
    runtime = DockerRuntime()
    with patch("shutil.which", return_value=None):
        assert runtime.is_installed() is False
    with patch("shutil.which", return_value="/usr/bin/docker"):
        assert runtime.is_installed() is True
    with patch("subprocess.run", return_value=_completed(returncode=1)) as mock_run:
        assert runtime.is_reachable() is False
    assert _issued(mock_run) == ["docker info"]


def test_logs_follow() -> None:
    with patch("subprocess.run", return_value=_completed()) as mock_run:
        DockerRuntime().container_logs("ollama", follow=True)
    mock_run.assert_called_once_with("docker logs -f ollama", shell=True)
