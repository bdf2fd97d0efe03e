"""Syntax tree nodes that lower themselves to three-address code."""

from __future__ import annotations

import io
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Optional, TextIO


@dataclass
class CodeContext:
    """Shared state while emitting code: output, name map and counters."""

    out: TextIO = field(default_factory=io.StringIO)
    symbol_to_temp: dict[str, str] = field(default_factory=dict)
    temp_count: int = 0
    label_count: int = 0

    def new_temp(self) -> str:
        """Allocate the next temporary name (t0, t1, ...)."""
        name = f"t{self.temp_count}"
        self.temp_count += 1
        return name

    def new_label(self) -> str:
        """Allocate the next label name (L0, L1, ...)."""
        name = f"L{self.label_count}"
        self.label_count += 1
        return name

    def emit(self, line: str) -> None:
        """Write one line of code."""
        self.out.write(f"{line}\n")


class ASTNode(ABC):
    """Base of every node in the tree."""

    @abstractmethod
    def generate_code(self, ctx: CodeContext) -> str:
        """Emit code for this node and return the name holding its value."""


class ExprNode(ASTNode):
    """An expression carrying its static type (int, float, void, ...)."""

    def __init__(self, type: str):
        self.type = type


class VarNode(ExprNode):
    """A reference to a variable, optionally indexed as an array."""

    def __init__(self, name: str, type: str, index: Optional[ExprNode] = None):
        super().__init__(type)
        self.name = name
        self.index = index

    def has_index(self) -> bool:
        return self.index is not None

    def generate_index_code(self, ctx: CodeContext) -> str:
        """Emit code computing the indexed element and return its temporary."""
        if self.index is None:
            raise ValueError(f"variable {self.name!r} has no index")
        arr_idx = self.index.generate_code(ctx)
        result = ctx.new_temp()
        ctx.emit(f"{result} = {self.name}[{arr_idx}]")
        return result

    def generate_code(self, ctx: CodeContext) -> str:
        if self.name not in ctx.symbol_to_temp:
            ctx.symbol_to_temp[self.name] = ctx.new_temp()
        if self.index is None:
            return ctx.symbol_to_temp[self.name]
        arr_idx = self.generate_index_code(ctx)
        result = ctx.new_temp()
        ctx.emit(f"{result} = {ctx.symbol_to_temp[self.name]}[{arr_idx}]")
        return result


class ConstNode(ExprNode):
    """A literal value."""

    def __init__(self, value: str, type: str):
        super().__init__(type)
        self.value = value

    def generate_code(self, ctx: CodeContext) -> str:
        result = ctx.new_temp()
        ctx.emit(f"{result} = {self.value}")
        return result


class BinaryOpNode(ExprNode):
    """A binary operation such as ``a + b``."""

    def __init__(self, op: str, left: ExprNode, right: ExprNode, type: str):
        super().__init__(type)
        self.op = op
        self.left = left
        self.right = right

    def generate_code(self, ctx: CodeContext) -> str:
        left_code = self.left.generate_code(ctx)
        left_temp = ctx.new_temp()
        ctx.emit(f"{left_temp} = {left_code}")
        right_code = self.right.generate_code(ctx)
        if right_code.startswith("t"):
            right_temp = right_code
        else:
            right_temp = ctx.new_temp()
            ctx.emit(f"{right_temp} = {right_code}")
        result = ctx.new_temp()
        ctx.emit(f"{result} = {left_temp} {self.op} {right_temp}")
        return result


class UnaryOpNode(ExprNode):
    """A prefix operation such as ``-a`` or ``!a``."""

    def __init__(self, op: str, expr: ExprNode, type: str):
        super().__init__(type)
        self.op = op
        self.expr = expr

    def generate_code(self, ctx: CodeContext) -> str:
        operand = self.expr.generate_code(ctx)
        result = ctx.new_temp()
        ctx.emit(f"{result} = {self.op}{operand}")
        return result


class AssignNode(ExprNode):
    """An assignment ``lhs = rhs``."""

    def __init__(self, lhs: VarNode, rhs: ExprNode, type: str):
        super().__init__(type)
        self.lhs = lhs
        self.rhs = rhs

    def generate_code(self, ctx: CodeContext) -> str:
        lhs_code = self.lhs.generate_code(ctx)
        rhs_code = self.rhs.generate_code(ctx)
        mapped = ctx.symbol_to_temp.setdefault(rhs_code, "")
        ctx.emit(f"{lhs_code} = {mapped or rhs_code}")
        return lhs_code


class StmtNode(ASTNode):
    """Base of statement nodes."""


class ExprStmtNode(StmtNode):
    """An expression used as a statement."""

    def __init__(self, expr: Optional[ExprNode]):
        self.expr = expr

    def generate_code(self, ctx: CodeContext) -> str:
        if self.expr is None:
            return ""
        return self.expr.generate_code(ctx)


class BlockNode(StmtNode):
    """A compound statement."""

    def __init__(self, statements: Optional[list[StmtNode]] = None):
        self.statements: list[StmtNode] = []
        for stmt in statements or ():
            self.add_statement(stmt)

    def add_statement(self, stmt: Optional[StmtNode]) -> None:
        if stmt is not None:
            self.statements.append(stmt)

    def generate_code(self, ctx: CodeContext) -> str:
        for stmt in self.statements:
            stmt.generate_code(ctx)
        return ""


class IfNode(StmtNode):
    """An ``if`` statement with an optional ``else`` part."""

    def __init__(
        self,
        condition: ExprNode,
        then_block: StmtNode,
        else_block: Optional[StmtNode] = None,
    ):
        self.condition = condition
        self.then_block = then_block
        self.else_block = else_block

    def generate_code(self, ctx: CodeContext) -> str:
        label_start = ctx.new_label()
        label_end = ctx.new_label()
        label_else = ctx.new_label()
        cond = self.condition.generate_code(ctx)
        ctx.emit(f"if {cond} goto {label_start}")
        ctx.emit(f"goto {label_end}")
        ctx.emit(f"{label_start}:")
        self.then_block.generate_code(ctx)
        ctx.emit(f"goto {label_else}")
        ctx.emit(f"{label_else}:")
        if self.else_block is not None:
            self.else_block.generate_code(ctx)
        ctx.emit(f"{label_end}:")
        return ""


def _emit_loop(
    ctx: CodeContext,
    condition: ExprNode,
    body: StmtNode,
    update: Optional[ExprNode],
) -> None:
    start_label = ctx.new_label()
    loop_label = ctx.new_label()
    end_label = ctx.new_label()
    ctx.emit(f"{start_label}:")
    cond = condition.generate_code(ctx)
    ctx.emit(f"if {cond} goto {loop_label}")
    ctx.emit(f"goto {end_label}")
    ctx.emit(f"{loop_label}:")
    body.generate_code(ctx)
    if update is not None:
        update.generate_code(ctx)
    ctx.emit(f"goto {start_label}")
    ctx.emit(f"{end_label}:")


class WhileNode(StmtNode):
    """A ``while`` loop."""

    def __init__(self, condition: ExprNode, body: StmtNode):
        self.condition = condition
        self.body = body

    def generate_code(self, ctx: CodeContext) -> str:
        _emit_loop(ctx, self.condition, self.body, None)
        return ""


class ForNode(StmtNode):
    """A ``for`` loop; the init and update expressions may be omitted."""

    def __init__(
        self,
        init: Optional[ExprNode],
        condition: Optional[ExprNode],
        update: Optional[ExprNode],
        body: StmtNode,
    ):
        self.init = init
        self.condition = condition
        self.update = update
        self.body = body

    def generate_code(self, ctx: CodeContext) -> str:
        if self.condition is None:
            raise ValueError("for loop has no condition")
        if self.init is not None:
            self.init.generate_code(ctx)
        _emit_loop(ctx, self.condition, self.body, self.update)
        return ""


class ReturnNode(StmtNode):
    """A ``return`` statement with an optional value."""

    def __init__(self, expr: Optional[ExprNode] = None):
        self.expr = expr

    def generate_code(self, ctx: CodeContext) -> str:
        if self.expr is None:
            ctx.emit("return")
        else:
            ctx.emit(f"return {self.expr.generate_code(ctx)}")
        return ""


class DeclNode(StmtNode):
    """A declaration of one or more variables of the same type."""

    def __init__(self, type: str):
        self.type = type
        self.vars: list[tuple[str, int]] = []

    def add_var(self, name: str, array_size: int = 0) -> None:
        self.vars.append((name, array_size))

    def generate_code(self, ctx: CodeContext) -> str:
        for name, size in self.vars:
            if size > 0:
                ctx.emit(f"// Declaration {self.type} {name}[{size}]")
                ctx.symbol_to_temp[name] = f"t{ctx.temp_count}"
            else:
                ctx.emit(f"// Declaration {self.type} {name}")
                ctx.symbol_to_temp[name] = name
        return ""


class FuncDeclNode(ASTNode):
    """A function definition with its parameters and body."""

    def __init__(self, return_type: str, name: str, body: Optional[BlockNode] = None):
        self.return_type = return_type
        self.name = name
        self.params: list[tuple[str, str]] = []
        self.body = body

    def add_param(self, type: str, name: str) -> None:
        self.params.append((type, name))

    def generate_code(self, ctx: CodeContext) -> str:
        signature = ", ".join(f"{ptype} {pname}" for ptype, pname in self.params)
        ctx.emit(f"// Function: {self.return_type} {self.name}({signature})")
        for _, pname in self.params:
            ctx.symbol_to_temp[pname] = pname
        if self.body is not None:
            self.body.generate_code(ctx)
        ctx.emit("")
        return ""


class ArgumentsNode(ASTNode):
    """A list of call arguments gathered before the call node is built."""

    def __init__(self) -> None:
        self.arguments: list[ExprNode] = []

    def add_argument(self, arg: Optional[ExprNode]) -> None:
        if arg is not None:
            self.arguments.append(arg)

    def get_argument(self, index: int) -> Optional[ExprNode]:
        """The argument at ``index``, or None when out of range."""
        if 0 <= index < len(self.arguments):
            return self.arguments[index]
        return None

    def __len__(self) -> int:
        return len(self.arguments)

    def __iter__(self):
        return iter(self.arguments)

    def generate_code(self, ctx: CodeContext) -> str:
        return ""


class FuncCallNode(ExprNode):
    """A call of a named function."""

    def __init__(self, func_name: str, type: str):
        super().__init__(type)
        self.func_name = func_name
        self.arguments: list[ExprNode] = []

    def add_argument(self, arg: Optional[ExprNode]) -> None:
        if arg is not None:
            self.arguments.append(arg)

    def generate_code(self, ctx: CodeContext) -> str:
        for argument in self.arguments:
            arg_code = argument.generate_code(ctx)
            mapped = ctx.symbol_to_temp.setdefault(arg_code, "")
            if mapped:
                temp = ctx.new_temp()
                ctx.emit(f"{temp} = {mapped}")
                ctx.emit(f"param {temp}")
            else:
                ctx.emit(f"param {arg_code}")
        result = ctx.new_temp()
        ctx.emit(f"{result} = call {self.func_name}, {len(self.arguments)}")
        return result


class ProgramNode(ASTNode):
    """The root: a sequence of top-level units."""

    def __init__(self) -> None:
        self.units: list[ASTNode] = []

    def add_unit(self, unit: Optional[ASTNode]) -> None:
        if unit is not None:
            self.units.append(unit)

    def generate_code(self, ctx: CodeContext) -> str:
        for unit in self.units:
            unit.generate_code(ctx)
        return ""