"""Output-document model for the generated C++ unit."""

from __future__ import annotations

from dataclasses import dataclass, field

LICENSE_HEADER = [
    "/**",
    " * Copyright (c) Facebook, Inc. and its affiliates.",
    " *",
    " * This source code is licensed under the MIT license found in the",
    " * LICENSE file in the root directory of this source tree.",
    " *",
    " * @generated by turbojni",
    " */",
]


@dataclass
class CppDocument:
    """Ordered blocks of C++ lines, rendered to text once at the end.

    Values are appended as whole lines; nothing is substituted into text that
    was already emitted.
    """

    include: str
    namespaces: list[str] = field(default_factory=lambda: ["facebook", "react"])
    blocks: list[list[str]] = field(default_factory=list)

    def add_block(self, lines: list[str]) -> None:
        if lines:
            self.blocks.append(list(lines))

    def render(self) -> str:
        out: list[str] = []
        out.extend(LICENSE_HEADER)
        out.append("")
        out.append(f'#include "{self.include}"')
        out.append("")
        for ns in self.namespaces:
            out.append(f"namespace {ns} {{")
        out.append("")
        for block in self.blocks:
            out.extend(block)
            out.append("")
        for ns in reversed(self.namespaces):
            out.append(f"}} // namespace {ns}")
        return "\n".join(out) + "\n"
