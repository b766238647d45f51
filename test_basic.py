#!/usr/bin/env python3
"""
Basic tests for Python Packer.
These cover request resolution, validation and Dockerfile rendering without Docker.
"""

import logging
import os

import pytest
from pydantic import ValidationError

from python_packer.config import BuildRequest
from python_packer.dockerfile import Dockerfile, Instruction, create_default_dockerfile
from python_packer.errors import MissingEntrypoint
from python_packer.validator import validate_request

EXPECTED_DOCKERFILE = """FROM python AS builder
RUN pip install pipreqs
WORKDIR /app
ADD . .
RUN pipreqs .
RUN pip install -r ./requirements.txt -t .
FROM python:3.9-slim
COPY --from=builder /app /app
WORKDIR /
ENTRYPOINT python /app
"""


def make_project(tmp_path, with_entrypoint=True):
    project = tmp_path / "proj"
    project.mkdir()
    if with_entrypoint:
        (project / "__main__.py").write_text("print('hello world')\n")
    return project


def make_request(project, dockerfile_path=None) -> BuildRequest:
    return BuildRequest(
        project_path=str(project),
        output_image="myapp:latest",
        base_image="python:3.9-slim",
        dockerfile_path=dockerfile_path
    )


def test_request_resolves_default_dockerfile(tmp_path):
    request = make_request(tmp_path)

    assert not request.is_resolved
    resolved = request.resolved()
    assert resolved.dockerfile_path == os.path.join(str(tmp_path), "Dockerfile")
    assert resolved.is_resolved
    # original is unchanged
    assert request.dockerfile_path is None


def test_request_keeps_explicit_dockerfile(tmp_path):
    request = make_request(tmp_path, dockerfile_path="/elsewhere/Dockerfile")

    assert request.resolved() is request


def test_request_is_immutable(tmp_path):
    request = make_request(tmp_path)

    with pytest.raises(ValidationError):
        request.base_image = "alpine"


def test_validate_defaults_dockerfile_and_logs(tmp_path, caplog):
    project = make_project(tmp_path)

    with caplog.at_level(logging.INFO):
        resolved = validate_request(make_request(project))

    assert resolved.dockerfile_path == str(project / "Dockerfile")
    assert "--dockerfile is not specified" in caplog.text
    assert f"Project: {project}" in caplog.text
    assert "Base Image: python:3.9-slim" in caplog.text
    assert "Output Image: myapp:latest" in caplog.text


def test_validate_explicit_dockerfile_no_notice(tmp_path, caplog):
    project = make_project(tmp_path)
    dockerfile = str(tmp_path / "Dockerfile.custom")

    with caplog.at_level(logging.INFO):
        resolved = validate_request(make_request(project, dockerfile))

    assert resolved.dockerfile_path == dockerfile
    assert "--dockerfile is not specified" not in caplog.text


def test_validate_missing_entrypoint(tmp_path):
    project = make_project(tmp_path, with_entrypoint=False)

    with pytest.raises(MissingEntrypoint) as excinfo:
        validate_request(make_request(project))

    assert str(project) in str(excinfo.value)


def test_validate_entrypoint_must_be_file(tmp_path):
    project = make_project(tmp_path, with_entrypoint=False)
    (project / "__main__.py").mkdir()

    with pytest.raises(MissingEntrypoint):
        validate_request(make_request(project))


def test_default_dockerfile_content():
    assert create_default_dockerfile("python:3.9-slim").build() == EXPECTED_DOCKERFILE


def test_default_dockerfile_is_deterministic():
    first = create_default_dockerfile("myregistry/runtime:1.2").build()
    second = create_default_dockerfile("myregistry/runtime:1.2").build()

    assert first == second


def test_default_dockerfile_stages():
    d = create_default_dockerfile("debian:bookworm")
    lines = d.build().splitlines()

    assert [(s.image, s.alias) for s in d.stages] == [("python", "builder"), ("debian:bookworm", None)]
    from_lines = [line for line in lines if line.startswith("FROM ")]
    assert from_lines == ["FROM python AS builder", "FROM debian:bookworm"]

    final_stage = lines[lines.index("FROM debian:bookworm"):]
    copies = [line for line in final_stage if line.startswith("COPY ")]
    assert copies == ["COPY --from=builder /app /app"]


def test_builder_stage_ignores_base_image():
    assert create_default_dockerfile("alpine:3").build().startswith("FROM python AS builder\n")


def test_instruction_render():
    assert Instruction("RUN", ("pip", "install", "pipreqs")).render() == "RUN pip install pipreqs"
    assert Instruction("WORKDIR", ("/",)).render() == "WORKDIR /"


def test_dockerfile_extra_instructions():
    d = Dockerfile()
    d.from_("python:3.11-slim").env("PYTHONUNBUFFERED", "1").label("app", "demo")
    d.copy(".", "/srv").expose(8000).cmd("python", "/srv")

    assert d.build() == (
        "FROM python:3.11-slim\n"
        "ENV PYTHONUNBUFFERED=1\n"
        "LABEL app=demo\n"
        "COPY . /srv\n"
        "EXPOSE 8000\n"
        "CMD python /srv\n"
    )
    assert str(d) == d.build()


def test_dockerfile_requires_from_first():
    with pytest.raises(ValueError):
        Dockerfile().run("echo", "hi")


def test_dockerfile_rejects_unknown_stage():
    d = Dockerfile().from_("python")

    with pytest.raises(ValueError):
        d.copy_from("/app", "/app", "builder")


def test_dockerfile_rejects_duplicate_alias():
    d = Dockerfile().from_as("python", "builder")

    with pytest.raises(ValueError):
        d.from_as("python:3.11", "builder")


def test_empty_dockerfile_renders_empty():
    assert Dockerfile().build() == ""
