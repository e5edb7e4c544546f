"""turbojni: generate JNI C++ bridges for react-native native modules."""

from __future__ import annotations

from . import errors
from .codegen import generate, write_files
from .config import GeneratorOptions
from .schema import Schema, load_schema

__all__ = [
    "GeneratorOptions",
    "Schema",
    "errors",
    "generate",
    "load_schema",
    "write_files",
]
