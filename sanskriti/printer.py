"""Parenthesized prefix (S-expression) rendering of AST nodes."""

from __future__ import annotations

from .ast import (
    Node, Literal, Grouping, Unary, Binary, Logical, Variable, Assign,
    Program, Print, VarDecl, Block, If, While, ExprStmt,
)
from .types import NilVal, format_number


def format_atom(value) -> str:
    if isinstance(value, bool):
        return 'true' if value else 'false'
    if isinstance(value, NilVal):
        return 'nil'
    if isinstance(value, float):
        if value.is_integer():
            return str(int(value))
        return format_number(value)
    return str(value)


def parenthesize(name: str, *parts: Node) -> str:
    inner = ' '.join(format_node(p) for p in parts)
    return f"({name} {inner})" if inner else f"({name})"


def format_expr(node: Node) -> str:
    if isinstance(node, Literal):
        return format_atom(node.value)
    if isinstance(node, Grouping):
        return parenthesize('group', node.expr)
    if isinstance(node, Unary):
        return parenthesize(node.op, node.operand)
    if isinstance(node, (Binary, Logical)):
        return parenthesize(node.op, node.left, node.right)
    if isinstance(node, Variable):
        return node.name
    if isinstance(node, Assign):
        return f"(= {node.name} {format_expr(node.value)})"
    raise TypeError(f"not an expression: {type(node).__name__}")


def format_stmt(node: Node) -> str:
    if isinstance(node, Print):
        return parenthesize('print', node.expr)
    if isinstance(node, ExprStmt):
        return parenthesize('expr', node.expr)
    if isinstance(node, VarDecl):
        if node.initializer is None:
            return f"(var {node.name})"
        return f"(var {node.name} {format_expr(node.initializer)})"
    if isinstance(node, Block):
        return parenthesize('block', *node.statements)
    if isinstance(node, If):
        if node.else_branch is None:
            return parenthesize('if', node.condition, node.then_branch)
        return parenthesize('if', node.condition, node.then_branch, node.else_branch)
    if isinstance(node, While):
        return parenthesize('while', node.condition, node.body)
    if isinstance(node, Program):
        return '\n'.join(format_stmt(s) for s in node.body)
    raise TypeError(f"not a statement: {type(node).__name__}")


def format_node(node: Node) -> str:
    if isinstance(node, (Print, ExprStmt, VarDecl, Block, If, While, Program)):
        return format_stmt(node)
    return format_expr(node)
