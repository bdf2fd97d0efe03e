"""Writes a whole program as annotated three-address code."""

from __future__ import annotations

import io
from typing import TextIO

from cminus.nodes import CodeContext, ProgramNode

HEADER = (
    "//========== THREE ADDRESS CODE ==========\n\n"
    "// This code was generated by a two-pass compiler\n"
    "// Format:\n"
    "// - t0, t1, etc. are temporary variables\n"
    "// - L0, L1, etc. are labels for jumps\n"
    "// - Operations follow the three-address code format\n\n"
    "// Three Address Code\n\n"
)
FOOTER = "\n\n//========== END OF CODE ==========\n"


class ThreeAddrCodeGenerator:
    """Emits the code of a program tree between a header and a footer."""

    def __init__(self, root: ProgramNode, out: TextIO):
        self.root = root
        self.out = out
        self.context = CodeContext(out=out)

    def generate(self) -> None:
        self.out.write(HEADER)
        self.root.generate_code(self.context)
        self.out.write(FOOTER)


def generate_three_address_code(root: ProgramNode) -> str:
    """Return the full three-address code listing of ``root``."""
    buffer = io.StringIO()
    ThreeAddrCodeGenerator(root, buffer).generate()
    return buffer.getvalue()