"""Abstract Syntax Tree (AST) definitions for the Sanskriti language.

Expressions and statements are kept as two separate node families. A
statement may own expressions (an `ExprStmt` wraps exactly one), but an
expression never owns a statement. Nodes are built bottom-up by the
parsers and are not modified afterwards.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, List, Optional


@dataclass
class Node:
    """Base class for all AST nodes."""
    pass


@dataclass
class Expr(Node):
    pass


@dataclass
class Stmt(Node):
    pass


@dataclass
class Program(Node):
    body: List[Stmt]


# Expressions

@dataclass
class Literal(Expr):
    value: Any  # float, str, bool or NIL


@dataclass
class Grouping(Expr):
    expr: Expr


@dataclass
class Unary(Expr):
    op: str
    operand: Expr
    line: int = 0


@dataclass
class Binary(Expr):
    op: str
    left: Expr
    right: Expr
    line: int = 0


@dataclass
class Logical(Expr):
    op: str  # 'and' or 'or'
    left: Expr
    right: Expr
    line: int = 0


@dataclass
class Variable(Expr):
    name: str
    line: int = 0


@dataclass
class Assign(Expr):
    name: str
    value: Expr
    line: int = 0


# Statements

@dataclass
class Print(Stmt):
    expr: Expr


@dataclass
class VarDecl(Stmt):
    name: str
    initializer: Optional[Expr]
    line: int = 0


@dataclass
class Block(Stmt):
    statements: List[Stmt]


@dataclass
class If(Stmt):
    condition: Expr
    then_branch: Stmt
    else_branch: Optional[Stmt]


@dataclass
class While(Stmt):
    condition: Expr
    body: Stmt


@dataclass
class ExprStmt(Stmt):
    expr: Expr
