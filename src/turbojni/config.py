from __future__ import annotations

import os
from dataclasses import dataclass, replace
from pathlib import Path

DUPLICATE_POLICIES = ("overwrite", "error")


@dataclass(frozen=True)
class GeneratorOptions:
    source_ext: str = "cpp"
    header_ext: str = "h"
    # What to do when two schema files declare the same native module name.
    on_duplicate: str = "overwrite"

    def __post_init__(self) -> None:
        if self.on_duplicate not in DUPLICATE_POLICIES:
            raise ValueError(
                f"on_duplicate must be one of {', '.join(DUPLICATE_POLICIES)}; got {self.on_duplicate!r}"
            )

    @classmethod
    def from_env(cls) -> "GeneratorOptions":
        """Return default options, honoring `TURBOJNI_ON_DUPLICATE`."""
        opts = cls()
        override = os.environ.get("TURBOJNI_ON_DUPLICATE")
        if override:
            opts = replace(opts, on_duplicate=override.strip().lower())
        return opts


def default_output_dir() -> Path:
    """Return the default directory generated files are written to.

    Override with `TURBOJNI_OUT_DIR`.
    """
    override = os.environ.get("TURBOJNI_OUT_DIR")
    if override:
        return Path(override)
    return Path.cwd()
