"""
Build request configuration.
"""

import os
from typing import Optional

from pydantic import BaseModel, ConfigDict

DOCKERFILE_NAME = "Dockerfile"
ENTRYPOINT_FILE = "__main__.py"


class BuildRequest(BaseModel):
    """Inputs for one packaging run. Immutable once constructed."""

    model_config = ConfigDict(frozen=True)

    project_path: str
    output_image: str
    base_image: str
    dockerfile_path: Optional[str] = None

    @property
    def is_resolved(self) -> bool:
        return self.dockerfile_path is not None

    @property
    def entrypoint_path(self) -> str:
        return os.path.join(self.project_path, ENTRYPOINT_FILE)

    @property
    def default_dockerfile_path(self) -> str:
        return os.path.join(self.project_path, DOCKERFILE_NAME)

    def resolved(self) -> "BuildRequest":
        """Return a copy with the Dockerfile path filled in."""
        if self.is_resolved:
            return self
        return self.model_copy(update={"dockerfile_path": self.default_dockerfile_path})
