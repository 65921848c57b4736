"""Protostruct - proto3 schema to Python record compiler."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("protostruct")
except PackageNotFoundError:
    __version__ = "(local)"
