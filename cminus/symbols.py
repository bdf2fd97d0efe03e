"""Symbols, chained hash scopes and a stack of nested scopes."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterator, Optional, TextIO

BANNER = "################################"


@dataclass
class SymbolInfo:
    """One entry of a scope: a variable, an array or a function."""

    name: str
    type: str
    id_type: str = ""
    var_type: str = ""
    array_size: int = 0
    param_types: list[str] = field(default_factory=list)
    param_names: list[str] = field(default_factory=list)
    ast_node: Optional[Any] = None

    def param_count(self) -> int:
        """Number of declared parameter types."""
        return len(self.param_types)

    def _describe(self) -> str:
        text = f"\n< {self.name} : {self.type} >\n"
        if self.id_type == "func_def":
            details = ", ".join(
                f"{ptype} {pname}"
                for ptype, pname in zip(self.param_types, self.param_names)
            )
            return (
                text
                + "Function Definition\n"
                + f"Return Type: {self.var_type}\n"
                + f"Number of Parameters: {len(self.param_types)}\n"
                + f"Parameter Details: {details}"
            )
        if self.id_type == "var":
            return text + f"Variable\nType: {self.var_type}\n"
        if self.id_type == "array":
            return text + f"Array\nType: {self.var_type}\nSize: {self.array_size}\n"
        return text + "Error\n"


class ScopeTable:
    """A fixed-size hash table of symbols with separate chaining."""

    def __init__(self, size: int, scope_id: int, parent: Optional[ScopeTable] = None):
        if size <= 0:
            raise ValueError("scope table size must be positive")
        self.size = size
        self.scope_id = scope_id
        self.parent = parent
        self.child_count = 0
        self._buckets: list[list[SymbolInfo]] = [[] for _ in range(size)]
        if parent is not None:
            parent.child_count += 1

    def hash(self, name: str) -> int:
        """Bucket index: the sum of the character codes modulo the size."""
        return sum(ord(ch) for ch in name) % self.size

    def lookup(self, name: str) -> Optional[SymbolInfo]:
        """Return the symbol called ``name`` in this scope, or None."""
        return next(
            (sym for sym in self._buckets[self.hash(name)] if sym.name == name), None
        )

    def insert(self, name: str, type: str) -> bool:
        """Add a new symbol; False if the name is already in this scope."""
        if self.lookup(name) is not None:
            return False
        self._buckets[self.hash(name)].append(SymbolInfo(name, type))
        return True

    def delete(self, name: str) -> bool:
        """Remove the symbol called ``name``; False if it is absent."""
        bucket = self._buckets[self.hash(name)]
        for position, sym in enumerate(bucket):
            if sym.name == name:
                del bucket[position]
                return True
        return False

    def __iter__(self) -> Iterator[SymbolInfo]:
        for bucket in self._buckets:
            yield from bucket

    def __len__(self) -> int:
        return sum(len(bucket) for bucket in self._buckets)

    def render(self) -> str:
        """The printed form of this scope."""
        parts = [f"ScopeTable # {self.scope_id}\n"]
        for index, bucket in enumerate(self._buckets):
            if not bucket:
                continue
            parts.append(f"{index} --> ")
            parts.extend(sym._describe() for sym in bucket)
            parts.append("\n")
        parts.append("\n")
        return "".join(parts)

    def write(self, out: TextIO) -> None:
        """Write the printed form of this scope to ``out``."""
        out.write(self.render())


class SymbolTable:
    """A stack of nested scopes, innermost first on lookup."""

    def __init__(self, size: int = 10):
        self.size = size
        self.current: Optional[ScopeTable] = None
        self._last_id = 0

    def _require_scope(self) -> ScopeTable:
        if self.current is None:
            raise LookupError("no scope is open")
        return self.current

    def _scopes(self) -> Iterator[ScopeTable]:
        scope = self.current
        while scope is not None:
            yield scope
            scope = scope.parent

    def current_id(self) -> int:
        """Id of the innermost open scope."""
        return self._require_scope().scope_id

    def enter_scope(self, out: TextIO) -> ScopeTable:
        """Open a new scope nested in the current one and log it."""
        self._last_id += 1
        self.current = ScopeTable(self.size, self._last_id, self.current)
        out.write(f"New ScopeTable with ID {self.current.scope_id} created\n\n")
        return self.current

    def exit_scope(self, out: TextIO) -> ScopeTable:
        """Close the innermost scope and log it."""
        scope = self._require_scope()
        out.write(f"Scopetable with ID {scope.scope_id} removed\n\n")
        self.current = scope.parent
        return scope

    def insert(self, name: str, type: str) -> bool:
        """Insert into the innermost scope."""
        return self._require_scope().insert(name, type)

    def remove(self, name: str) -> bool:
        """Delete from the innermost scope."""
        return self._require_scope().delete(name)

    def lookup(self, name: str) -> Optional[SymbolInfo]:
        """Find ``name`` in the innermost scope that holds it, or None."""
        self._require_scope()
        for scope in self._scopes():
            found = scope.lookup(name)
            if found is not None:
                return found
        return None

    def print_all_scopes(self, out: TextIO) -> None:
        """Write every open scope, innermost first, between banners."""
        out.write(f"{BANNER}\n\n")
        for scope in self._scopes():
            scope.write(out)
        out.write(f"{BANNER}\n\n")