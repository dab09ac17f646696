"""
Defines the syntax tree produced by the slark parser.

Classes:
    LoadStmt:
        A `load(...)` statement: the module being loaded and the symbols it binds.

    Program:
        The ordered sequence of statements in a source file.

    LoadStmtDict, ProgramDict:
        TypedDict shapes returned by `to_dict()`, suitable for JSON output.

`Statement` is the union of all statement node types. Only `LoadStmt` exists
today.

Nodes are built once by the parser and never mutated afterwards; their
sequences are stored as tuples.

Usage:
    >>> stmt = LoadStmt("@rules_cc//cc:defs.bzl", [("cc_test", "cc_test")])
    >>> str(stmt)
    'load("@rules_cc//cc:defs.bzl", "cc_test")'
"""

from collections.abc import Iterable, Iterator
from typing import Any, TypedDict


class SymbolDict(TypedDict):
    local_name: str
    exported_name: str


class LoadStmtDict(TypedDict):
    """
    Serialized form of a LoadStmt.

    Fields:
        kind (str): Always "load".
        module_name (str): The module label, exactly as written in the string literal.
        symbols (list[SymbolDict]): Imported symbols in source order.
    """

    kind: str
    module_name: str
    symbols: list[SymbolDict]


class ProgramDict(TypedDict):
    statements: list[LoadStmtDict]


class LoadStmt:
    """
    A `load` statement importing symbols from another module.

    Args:
        module_name (str): Label of the module to load, e.g. `@rules_cc//cc:defs.bzl`.
        symbols (Iterable[tuple[str, str]]): `(local_name, exported_name)` pairs.
            `local_name` is bound in the loading file; `exported_name` is the
            name published by the loaded module. They are equal when the source
            spells only the string.

    Attributes:
        module_name (str): Module label.
        symbols (tuple[tuple[str, str], ...]): The pairs, in source order. The
            parser never builds a LoadStmt with no symbols.
    """

    __slots__ = ("module_name", "symbols")

    def __init__(self, module_name: str, symbols: Iterable[tuple[str, str]]) -> None:
        self.module_name = module_name
        self.symbols: tuple[tuple[str, str], ...] = tuple(
            (local, exported) for local, exported in symbols
        )

    def __repr__(self) -> str:
        return f"LoadStmt(module_name={self.module_name!r}, symbols={list(self.symbols)!r})"

    def __str__(self) -> str:
        parts = [f'"{self.module_name}"']
        for local, exported in self.symbols:
            if local == exported:
                parts.append(f'"{exported}"')
            else:
                parts.append(f'{local} = "{exported}"')
        return f"load({', '.join(parts)})"

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, LoadStmt):
            return False
        return self.module_name == other.module_name and self.symbols == other.symbols

    def __hash__(self) -> int:
        return hash((self.module_name, self.symbols))

    def to_dict(self) -> LoadStmtDict:
        return {
            "kind": "load",
            "module_name": self.module_name,
            "symbols": [
                {"local_name": local, "exported_name": exported}
                for local, exported in self.symbols
            ],
        }


Statement = LoadStmt
"""Union of all statement node types."""


class Program:
    """
    An ordered sequence of statements. Order matters: loads run top to bottom.

    Attributes:
        statements (tuple[Statement, ...]): The statements in source order.
    """

    __slots__ = ("statements",)

    def __init__(self, statements: Iterable[Statement] = ()) -> None:
        self.statements: tuple[Statement, ...] = tuple(statements)

    def __repr__(self) -> str:
        return f"Program({list(self.statements)!r})"

    def __str__(self) -> str:
        return "\n".join(str(stmt) for stmt in self.statements)

    def __eq__(self, other: Any) -> bool:
        return isinstance(other, Program) and self.statements == other.statements

    def __hash__(self) -> int:
        return hash(self.statements)

    def __len__(self) -> int:
        return len(self.statements)

    def __iter__(self) -> Iterator[Statement]:
        return iter(self.statements)

    def to_dict(self) -> ProgramDict:
        return {"statements": [stmt.to_dict() for stmt in self.statements]}


__all__ = ["LoadStmt", "LoadStmtDict", "Program", "ProgramDict", "Statement", "SymbolDict"]
