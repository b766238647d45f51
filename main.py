#!/usr/bin/env python3
"""
Main CLI interface for Python Packer.

Packages a Python project with a __main__.py entrypoint into a Docker image.
"""

import sys
import argparse
import logging
from typing import List, Optional

from python_packer import __version__
from python_packer.config import BuildRequest
from python_packer.errors import PackerError
from python_packer.workflow import PackerWorkflow

logger = logging.getLogger("python_packer")


def create_parser() -> argparse.ArgumentParser:
    """Create command line argument parser."""

    parser = argparse.ArgumentParser(
        prog="python-packer",
        description="Pack Python projects into deployable artifacts",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s docker --project-path ./myapp --base-image python:3.9-slim --output-image myapp:latest
  %(prog)s docker --project-path ./myapp --base-image python:3.9-slim --output-image myapp:latest --dockerfile ./Dockerfile.prod

If no Dockerfile exists at the given (or default) path, a two-stage Dockerfile is
generated for the build and removed afterwards.
        """
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"Python Packer {__version__}"
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    docker_parser = subparsers.add_parser(
        "docker",
        help="pack a python project into a docker image",
        description="Pack a python project into a docker image"
    )

    # Required arguments
    docker_parser.add_argument(
        "--project-path",
        required=True,
        help="(required) path to python project directory"
    )

    docker_parser.add_argument(
        "--base-image",
        required=True,
        help="(required) name of base image to build from"
    )

    docker_parser.add_argument(
        "--output-image",
        required=True,
        help="(required) name of output image"
    )

    # Optional arguments
    docker_parser.add_argument(
        "--dockerfile",
        dest="dockerfile_path",
        help="path to Dockerfile (default: <project-path>/Dockerfile)"
    )

    docker_parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable verbose output for debugging"
    )

    return parser


def request_from_args(args: argparse.Namespace) -> BuildRequest:
    return BuildRequest(
        project_path=args.project_path,
        output_image=args.output_image,
        base_image=args.base_image,
        dockerfile_path=args.dockerfile_path or None
    )


def setup_logging(verbose: bool = False):
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(levelname)s %(message)s"
    )


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point. Returns the process exit status."""

    parser = create_parser()

    if argv is None:
        argv = sys.argv[1:]

    if not argv:
        parser.print_help()
        return 1

    args = parser.parse_args(argv)
    setup_logging(args.verbose)

    try:
        PackerWorkflow(request_from_args(args)).run()
        return 0

    except PackerError as e:
        logger.error(str(e))
        if args.verbose:
            logger.debug("Traceback:", exc_info=True)
        return 1

    except KeyboardInterrupt:
        print("\n⚠️  Process interrupted")
        return 130

    except Exception as e:
        logger.error(f"Fatal error: {e}")
        if args.verbose:
            logger.debug("Traceback:", exc_info=True)
        return 1


if __name__ == "__main__":
    sys.exit(main())
