"""
Packaging workflow: validate, generate a Dockerfile if needed, build the image.
"""

import logging
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Callable, Iterator, Optional, TextIO

import docker

from .config import BuildRequest
from .docker_builder import DockerBuilder, create_client
from .dockerfile import create_default_dockerfile
from .errors import WriteFailure
from .utils.files import file_exists, remove_file, write_file
from .validator import validate_request

logger = logging.getLogger(__name__)


@dataclass
class PackResult:
    image_name: str
    dockerfile_path: str
    generated_dockerfile: bool = False
    image_id: Optional[str] = None


@contextmanager
def generated_dockerfile(request: BuildRequest) -> Iterator[bool]:
    """Write the default Dockerfile if none exists, and remove it on exit.

    Yields True when a file was generated. An existing file is left untouched.
    """
    path = request.dockerfile_path
    if file_exists(path):
        yield False
        return

    logger.warning(f"Dockerfile not found at {path}. Create a default")
    contents = create_default_dockerfile(request.base_image).build()
    logger.info(f"Dockerfile:\n{contents}")

    try:
        write_file(path, contents)
    except OSError as e:
        raise WriteFailure(path, str(e)) from e

    try:
        yield True
    finally:
        if remove_file(path):
            logger.debug(f"Removed generated Dockerfile {path}")


class PackerWorkflow:
    """Packages one project into one image."""

    def __init__(
        self,
        request: BuildRequest,
        client_factory: Optional[Callable[[], docker.DockerClient]] = None,
        output: Optional[TextIO] = None
    ):
        self.request = request
        self.client_factory = client_factory or create_client
        self.output = output

    def run(self) -> PackResult:
        request = validate_request(self.request)

        with generated_dockerfile(request) as generated:
            logger.info("Create docker client")
            client = self.client_factory()

            logger.info("Build docker image")
            builder = DockerBuilder(client, output=self.output)
            build = builder.build_image(
                context_dir=request.project_path,
                dockerfile_path=request.dockerfile_path,
                image_name=request.output_image
            )

        logger.info(f"Successfully built docker image '{request.output_image}'")
        return PackResult(
            image_name=request.output_image,
            dockerfile_path=request.dockerfile_path,
            generated_dockerfile=generated,
            image_id=build.image_id
        )
