"""
Python Packer Package
Packages Python projects into Docker images using a two-stage build.
"""

__version__ = "1.0.0"
__description__ = "Package Python projects into Docker images"
