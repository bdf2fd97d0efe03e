"""Hash scopes of rich symbol records with a logging scope stack."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator, Optional, TextIO

from cminus.symbols import BANNER

FUNCTION = "function"
FUNCTION_DEFINITION = "function_definition"


@dataclass
class SymbolRecord:
    """A named symbol with its kind, types, parameters and array size."""

    name: str
    type: str
    symbol_type: str = ""
    return_type: str = ""
    data_type: str = ""
    parameter_types: list[str] = field(default_factory=list)
    parameter_names: list[str] = field(default_factory=list)
    array_size: int = 0

    def add_parameter(self, name: str, type: str) -> None:
        """Append one parameter, keeping names and types aligned."""
        self.parameter_names.append(name)
        self.parameter_types.append(type)


def _is_indexed(name: str) -> bool:
    return "[" in name and "]" in name


class HashedScope:
    """A fixed number of buckets holding symbol records by name."""

    def __init__(
        self,
        bucket_count: int,
        unique_id: int,
        parent: Optional[HashedScope] = None,
        function_kind: str = FUNCTION_DEFINITION,
    ):
        if bucket_count <= 0:
            raise ValueError("bucket count must be positive")
        self.bucket_count = bucket_count
        self.unique_id = unique_id
        self.parent = parent
        self.function_kind = function_kind
        self._buckets: list[list[SymbolRecord]] = [[] for _ in range(bucket_count)]

    def hash(self, name: str) -> int:
        """Bucket index: the sum of the character codes modulo the bucket count."""
        return sum(ord(ch) for ch in name) % self.bucket_count

    def lookup(self, name: str) -> Optional[SymbolRecord]:
        """Return the record called ``name`` in this scope, or None."""
        return next(
            (sym for sym in self._buckets[self.hash(name)] if sym.name == name), None
        )

    def insert(self, symbol: SymbolRecord) -> bool:
        """Add ``symbol``; False if its name is already in this scope."""
        if self.lookup(symbol.name) is not None:
            return False
        self._buckets[self.hash(symbol.name)].append(symbol)
        return True

    def delete(self, name: str) -> bool:
        """Remove the record called ``name``; False if it is absent."""
        bucket = self._buckets[self.hash(name)]
        for position, sym in enumerate(bucket):
            if sym.name == name:
                del bucket[position]
                return True
        return False

    def __iter__(self) -> Iterator[SymbolRecord]:
        for bucket in self._buckets:
            yield from bucket

    def __len__(self) -> int:
        return sum(len(bucket) for bucket in self._buckets)

    def _describe(self, symbol: SymbolRecord) -> str:
        text = f"< {symbol.name} : ID >\n"
        if symbol.symbol_type == self.function_kind:
            details = ", ".join(
                f"{ptype} {pname}"
                for ptype, pname in zip(symbol.parameter_types, symbol.parameter_names)
            )
            text += (
                "Function Definition\n"
                f"Return Type: {symbol.return_type}\n"
                f"Number of Parameters: {len(symbol.parameter_names)}\n"
                f"Parameter Details: {details}"
            )
            if symbol.parameter_names:
                text += "\n"
            return text
        if symbol.array_size > 0:
            return text + f"Array\nType: {symbol.type}\nSize: {symbol.array_size}\n"
        text += f"{symbol.symbol_type}\nType: {symbol.data_type}\n"
        if symbol.symbol_type == "Array":
            text += f"Size: {symbol.array_size}\n"
        return text

    def render(self) -> str:
        """The printed form of this scope; indexed names are left out."""
        parts = [f"ScopeTable # {self.unique_id}\n"]
        for index, bucket in enumerate(self._buckets):
            if not bucket:
                continue
            parts.append(f"{index} --> \n")
            parts.extend(
                self._describe(sym) for sym in bucket if not _is_indexed(sym.name)
            )
            parts.append("\n")
        return "".join(parts)


class LoggedSymbolTable:
    """A stack of nested hash scopes that logs each scope it opens and closes."""

    def __init__(
        self,
        bucket_count: int,
        out: TextIO,
        function_kind: str = FUNCTION_DEFINITION,
    ):
        self.bucket_count = bucket_count
        self.out = out
        self.function_kind = function_kind
        self.current: Optional[HashedScope] = None
        self._last_id = 0

    def __enter__(self) -> LoggedSymbolTable:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def _scopes(self) -> Iterator[HashedScope]:
        scope = self.current
        while scope is not None:
            yield scope
            scope = scope.parent

    def enter_scope(self) -> HashedScope:
        """Open a scope nested in the current one."""
        self._last_id += 1
        self.current = HashedScope(
            self.bucket_count, self._last_id, self.current, self.function_kind
        )
        self.out.write(f"New ScopeTable with ID {self.current.unique_id} created\n\n")
        return self.current

    def exit_scope(self) -> HashedScope:
        """Close the innermost scope."""
        scope = self.current
        if scope is None:
            raise LookupError("no scope is open")
        self.out.write(f"Scopetable with ID {scope.unique_id} removed\n\n")
        self.current = scope.parent
        return scope

    def close(self) -> None:
        """Close every open scope, innermost first."""
        while self.current is not None:
            self.exit_scope()

    def insert(self, symbol: SymbolRecord) -> bool:
        """Insert into the innermost scope; False if none is open or the name is taken."""
        if self.current is None:
            return False
        return self.current.insert(symbol)

    def lookup(self, name: str) -> Optional[SymbolRecord]:
        """Find ``name`` in the innermost scope that holds it, or None."""
        for scope in self._scopes():
            found = scope.lookup(name)
            if found is not None:
                return found
        return None

    def print_all_scopes(self) -> None:
        """Write every open scope, innermost first, between banners."""
        self.out.write(f"{BANNER}\n\n")
        for scope in self._scopes():
            self.out.write(scope.render())
        self.out.write(f"{BANNER}\n\n")