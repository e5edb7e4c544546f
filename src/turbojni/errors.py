"""Domain-specific errors for turbojni."""

from __future__ import annotations


class TurboJniError(Exception):
    """Base error for turbojni."""


class UnsupportedAnnotationError(TurboJniError):
    """Raised when a type annotation falls outside the supported set at a translation site."""

    def __init__(self, tag: str, where: str = "") -> None:
        self.tag = tag
        msg = f"unsupported type annotation: {tag}"
        if where:
            msg = f"{msg} ({where})"
        super().__init__(msg)


class UnresolvableAliasError(TurboJniError):
    """Raised when a type alias is missing from the module's alias table."""

    def __init__(self, alias: str) -> None:
        self.alias = alias
        super().__init__(f"unresolvable type alias: {alias}")


class DuplicateModuleError(TurboJniError):
    """Raised when two schema files declare the same native module name."""

    def __init__(self, module: str) -> None:
        self.module = module
        super().__init__(f"duplicate native module name: {module}")


class SchemaLoadError(TurboJniError):
    """Raised when a schema document does not have the expected shape."""
