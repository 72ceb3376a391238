"""
Setup script for vecmat

This setup.py is kept for compatibility with tooling that still invokes it
directly. The package metadata lives in pyproject.toml.
"""

from setuptools import setup


setup(
    zip_safe=True,
)
