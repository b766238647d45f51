"""
Dockerfile Builder - In-memory multi-stage Dockerfile with deterministic rendering.
"""

from dataclasses import dataclass
from typing import List, Optional, Tuple

BUILDER_STAGE = "builder"
BUILDER_IMAGE = "python"
TARGET_DIR = "/app"


@dataclass(frozen=True)
class Instruction:
    """A single Dockerfile instruction and its operands."""
    keyword: str
    args: Tuple[str, ...]

    def render(self) -> str:
        return " ".join((self.keyword,) + self.args)


@dataclass(frozen=True)
class Stage:
    """A build stage opened by a FROM instruction."""
    image: str
    alias: Optional[str] = None


class Dockerfile:
    """Ordered sequence of instructions grouped into stages."""

    def __init__(self):
        self.instructions: List[Instruction] = []
        self.stages: List[Stage] = []

    def _append(self, keyword: str, *args: str) -> "Dockerfile":
        if keyword != "FROM" and not self.stages:
            raise ValueError(f"{keyword} must follow a FROM instruction")
        self.instructions.append(Instruction(keyword, tuple(args)))
        return self

    def stage_aliases(self) -> List[str]:
        return [stage.alias for stage in self.stages if stage.alias]

    def from_(self, image: str) -> "Dockerfile":
        """Start an unaliased stage."""
        self.stages.append(Stage(image))
        return self._append("FROM", image)

    def from_as(self, image: str, alias: str) -> "Dockerfile":
        """Start a stage that later stages can copy from by alias."""
        if alias in self.stage_aliases():
            raise ValueError(f"Stage alias '{alias}' is already declared")
        self.stages.append(Stage(image, alias))
        return self._append("FROM", image, "AS", alias)

    def run(self, *args: str) -> "Dockerfile":
        return self._append("RUN", *args)

    def workdir(self, path: str) -> "Dockerfile":
        return self._append("WORKDIR", path)

    def add(self, src: str, dst: str) -> "Dockerfile":
        return self._append("ADD", src, dst)

    def copy(self, src: str, dst: str) -> "Dockerfile":
        return self._append("COPY", src, dst)

    def copy_from(self, src: str, dst: str, stage: str) -> "Dockerfile":
        """Copy src out of an earlier stage referenced by alias."""
        if stage not in self.stage_aliases():
            raise ValueError(f"Unknown stage '{stage}'")
        return self._append("COPY", f"--from={stage}", src, dst)

    def entrypoint(self, *args: str) -> "Dockerfile":
        return self._append("ENTRYPOINT", *args)

    def cmd(self, *args: str) -> "Dockerfile":
        return self._append("CMD", *args)

    def env(self, key: str, value: str) -> "Dockerfile":
        return self._append("ENV", f"{key}={value}")

    def label(self, key: str, value: str) -> "Dockerfile":
        return self._append("LABEL", f"{key}={value}")

    def expose(self, port: int) -> "Dockerfile":
        return self._append("EXPOSE", str(port))

    def build(self) -> str:
        """Render instructions in insertion order, one per line."""
        return "".join(instruction.render() + "\n" for instruction in self.instructions)

    def __str__(self) -> str:
        return self.build()


def create_default_dockerfile(base_image: str) -> Dockerfile:
    """Two-stage build: vendor dependencies found by pipreqs, then copy onto base_image.

    The builder stage always uses the plain python image regardless of base_image.
    """
    d = Dockerfile()

    # build stage
    d.from_as(BUILDER_IMAGE, BUILDER_STAGE)
    d.run("pip", "install", "pipreqs")
    d.workdir(TARGET_DIR)
    d.add(".", ".")
    d.run("pipreqs", ".")
    d.run("pip", "install", "-r", "./requirements.txt", "-t", ".")

    # runtime stage
    d.from_(base_image)
    d.copy_from(TARGET_DIR, TARGET_DIR, BUILDER_STAGE)
    d.workdir("/")
    d.entrypoint("python", TARGET_DIR)

    return d
