"""
Validator - Resolves and checks a build request before any work starts.
"""

import logging

from .config import BuildRequest
from .errors import MissingEntrypoint
from .utils.files import file_exists

logger = logging.getLogger(__name__)


def validate_request(request: BuildRequest) -> BuildRequest:
    """Resolve the Dockerfile path and check the project has an entrypoint.

    Image names are not checked here; the Docker engine reports bad
    references when the build runs.
    """
    if not request.is_resolved:
        request = request.resolved()
        logger.warning(f"--dockerfile is not specified. Use {request.dockerfile_path} by default")

    logger.info(f"Project: {request.project_path}")
    logger.info(f"Dockerfile: {request.dockerfile_path}")
    logger.info(f"Base Image: {request.base_image}")
    logger.info(f"Output Image: {request.output_image}")

    if not file_exists(request.entrypoint_path):
        raise MissingEntrypoint(request.project_path)

    return request
