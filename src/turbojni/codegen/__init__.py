"""C++ (JNI) bridge emission for native modules."""

from __future__ import annotations

from .assemble import assemble, flatten_modules, generate, write_files
from .document import CppDocument
from .methods import EmittedMethod, emit_method

__all__ = [
    "CppDocument",
    "EmittedMethod",
    "assemble",
    "emit_method",
    "flatten_modules",
    "generate",
    "write_files",
]
