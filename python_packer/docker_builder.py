"""
Docker Builder - Creates the engine client and streams image builds.
"""

import logging
import os
import sys
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, TextIO

import docker
import requests

from .errors import BuildFailure, ClientConstructionFailure


@dataclass
class BuildResult:
    """Result of a Docker build."""
    image_name: str
    image_id: Optional[str] = None
    logs: List[str] = field(default_factory=list)


def create_client() -> docker.DockerClient:
    """Create a client from DOCKER_* environment variables, negotiating the API version."""
    try:
        return docker.from_env(version="auto")
    except docker.errors.DockerException as e:
        raise ClientConstructionFailure(f"Failed to create Docker client: {e}") from e


class DockerBuilder:
    """Builds images through the Docker Engine API."""

    def __init__(self, client: docker.DockerClient, output: Optional[TextIO] = None):
        self.client = client
        self.output = output
        self.logger = logging.getLogger(__name__)

    def build_image(self, context_dir: str, dockerfile_path: str, image_name: str) -> BuildResult:
        """Build context_dir with dockerfile_path, printing progress as it arrives."""
        result = BuildResult(image_name=image_name)

        try:
            stream = self.client.api.build(
                path=os.path.abspath(context_dir),
                # the SDK resolves relative Dockerfile paths against the context
                dockerfile=os.path.abspath(dockerfile_path),
                tag=image_name,
                rm=True,  # Remove intermediate containers
                decode=True,
            )
            for chunk in stream:
                self._handle_chunk(chunk, result)

        except docker.errors.DockerException as e:
            raise BuildFailure(f"Docker build failed: {e}") from e
        except requests.exceptions.RequestException as e:
            raise BuildFailure(f"Docker build failed: {e}") from e
        except OSError as e:
            # raised by the SDK while packing unreadable files into the context
            raise BuildFailure(f"Docker build failed: {e}") from e

        self.logger.debug(f"Build of {image_name} produced {len(result.logs)} log lines")
        return result

    def _handle_chunk(self, chunk: Dict[str, Any], result: BuildResult):
        if "error" in chunk:
            detail = chunk.get("errorDetail") or {}
            message = detail.get("message") or chunk["error"]
            raise BuildFailure(f"Docker build failed: {message.strip()}")

        if "stream" in chunk:
            line = chunk["stream"]
        elif "status" in chunk:
            line = chunk["status"]
            if chunk.get("id"):
                line = f"{chunk['id']}: {line}"
            if chunk.get("progress"):
                line += f" {chunk['progress']}"
            line += "\n"
        else:
            line = None

        aux = chunk.get("aux")
        if isinstance(aux, dict) and aux.get("ID"):
            result.image_id = aux["ID"]

        if line:
            result.logs.append(line.rstrip("\n"))
            out = self.output or sys.stdout
            out.write(line)
            out.flush()
