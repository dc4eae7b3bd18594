from __future__ import annotations

from setuptools import setup  # type: ignore

# Metadata lives in pyproject.toml; this shim keeps `python setup.py develop` working.
setup()
