"""JSON serialization/deserialization for the Sanskriti AST.

This module converts between the AST dataclasses and plain Python
dict/list structures suitable for JSON encoding. It supports a full
round-trip for all node types and the `nil` value.
"""

from __future__ import annotations

from typing import Any

from .ast import (
    Program,
    Literal,
    Grouping,
    Unary,
    Binary,
    Logical,
    Variable,
    Assign,
    Print,
    VarDecl,
    Block,
    If,
    While,
    ExprStmt,
)
from .types import NIL, NilVal


def ast_to_obj(node: Any) -> Any:
    # Primitives
    if node is None:
        return None
    if isinstance(node, (float, str, bool)):
        return node
    if isinstance(node, NilVal):
        return {"__type__": "Nil"}

    # Statements
    if isinstance(node, Program):
        return {"type": "Program", "body": [ast_to_obj(n) for n in node.body]}
    if isinstance(node, VarDecl):
        return {
            "type": "VarDecl",
            "name": node.name,
            "initializer": ast_to_obj(node.initializer),
            "line": node.line,
        }
    if isinstance(node, Print):
        return {"type": "Print", "expr": ast_to_obj(node.expr)}
    if isinstance(node, Block):
        return {"type": "Block", "statements": [ast_to_obj(s) for s in node.statements]}
    if isinstance(node, If):
        return {
            "type": "If",
            "condition": ast_to_obj(node.condition),
            "then_branch": ast_to_obj(node.then_branch),
            "else_branch": ast_to_obj(node.else_branch),
        }
    if isinstance(node, While):
        return {"type": "While", "condition": ast_to_obj(node.condition), "body": ast_to_obj(node.body)}
    if isinstance(node, ExprStmt):
        return {"type": "ExprStmt", "expr": ast_to_obj(node.expr)}

    # Expressions
    if isinstance(node, Assign):
        return {"type": "Assign", "name": node.name, "value": ast_to_obj(node.value), "line": node.line}
    if isinstance(node, Binary):
        return {
            "type": "Binary",
            "op": node.op,
            "left": ast_to_obj(node.left),
            "right": ast_to_obj(node.right),
            "line": node.line,
        }
    if isinstance(node, Logical):
        return {
            "type": "Logical",
            "op": node.op,
            "left": ast_to_obj(node.left),
            "right": ast_to_obj(node.right),
            "line": node.line,
        }
    if isinstance(node, Unary):
        return {"type": "Unary", "op": node.op, "operand": ast_to_obj(node.operand), "line": node.line}
    if isinstance(node, Grouping):
        return {"type": "Grouping", "expr": ast_to_obj(node.expr)}
    if isinstance(node, Literal):
        return {"type": "Literal", "value": ast_to_obj(node.value)}
    if isinstance(node, Variable):
        return {"type": "Variable", "name": node.name, "line": node.line}

    raise TypeError(f"Unsupported node for serialization: {type(node).__name__}")


def ast_from_obj(obj: Any) -> Any:
    if obj is None or isinstance(obj, (str, bool)):
        return obj
    if isinstance(obj, (int, float)):
        # numbers are always doubles at run time
        return float(obj)
    if not isinstance(obj, dict):
        raise TypeError("Invalid AST object")
    if obj.get("__type__") == "Nil":
        return NIL
    t = obj.get("type")
    if t == "Program":
        return Program(body=[ast_from_obj(n) for n in obj["body"]])
    if t == "VarDecl":
        return VarDecl(
            name=obj["name"],
            initializer=ast_from_obj(obj.get("initializer")),
            line=obj.get("line", 0),
        )
    if t == "Print":
        return Print(expr=ast_from_obj(obj["expr"]))
    if t == "Block":
        return Block(statements=[ast_from_obj(s) for s in obj["statements"]])
    if t == "If":
        return If(
            condition=ast_from_obj(obj["condition"]),
            then_branch=ast_from_obj(obj["then_branch"]),
            else_branch=ast_from_obj(obj.get("else_branch")),
        )
    if t == "While":
        return While(condition=ast_from_obj(obj["condition"]), body=ast_from_obj(obj["body"]))
    if t == "ExprStmt":
        return ExprStmt(expr=ast_from_obj(obj["expr"]))
    if t == "Assign":
        return Assign(name=obj["name"], value=ast_from_obj(obj["value"]), line=obj.get("line", 0))
    if t == "Binary":
        return Binary(
            op=obj["op"],
            left=ast_from_obj(obj["left"]),
            right=ast_from_obj(obj["right"]),
            line=obj.get("line", 0),
        )
    if t == "Logical":
        return Logical(
            op=obj["op"],
            left=ast_from_obj(obj["left"]),
            right=ast_from_obj(obj["right"]),
            line=obj.get("line", 0),
        )
    if t == "Unary":
        return Unary(op=obj["op"], operand=ast_from_obj(obj["operand"]), line=obj.get("line", 0))
    if t == "Grouping":
        return Grouping(expr=ast_from_obj(obj["expr"]))
    if t == "Literal":
        return Literal(value=ast_from_obj(obj["value"]))
    if t == "Variable":
        return Variable(name=obj["name"], line=obj.get("line", 0))

    raise ValueError(f"Unknown AST node type: {t}")
