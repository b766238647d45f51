"""
Errors raised while packaging a project.

Every error is terminal for the invocation; the CLI turns them into a
logged message and a non-zero exit status.
"""


class PackerError(Exception):
    """Base class for all packaging errors."""


class MissingEntrypoint(PackerError):
    """The project root has no __main__.py."""

    def __init__(self, project_path: str):
        self.project_path = project_path
        super().__init__(
            f"You need __main__.py at python project root {project_path} as entrypoint"
        )


class ClientConstructionFailure(PackerError):
    """The Docker client could not be created from the environment."""


class BuildFailure(PackerError):
    """The Docker build call failed or reported an error."""


class WriteFailure(PackerError):
    """The generated Dockerfile could not be written to disk."""

    def __init__(self, path: str, reason: str):
        self.path = path
        super().__init__(f"Failed to write Dockerfile to {path}: {reason}")
