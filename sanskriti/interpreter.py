"""Tree-walking interpreter for the Sanskriti language.

This module ties the pipeline together (lexer -> translator -> parser)
and evaluates the resulting AST directly against a chain of
`Environment` scopes. Output of `print` statements goes to stdout in
execution order. The first failing statement aborts the run with a
`LoxRuntimeError`; anything already printed stays printed.
"""

from __future__ import annotations

import math
from typing import Any, List, Optional

from .ast import (
    Program, Node, Stmt, Literal, Grouping, Unary, Binary, Logical,
    Variable, Assign, Print, VarDecl, Block, If, While, ExprStmt,
)
from .environment import Environment
from .errors import LoxRuntimeError
from .lexer import tokenize
from .parser import parse_expression, parse_program
from .translator import translate
from .types import NIL, is_number, is_truthy, to_string, type_name, values_equal

ENGINES = ('hand', 'lark')


def parse_source(source: str, engine: str = 'hand') -> Program:
    """Lex, translate and parse source text as a program."""
    tokens = translate(tokenize(source))
    if engine == 'lark':
        from .grammar import parse_program_lark
        return parse_program_lark(tokens)
    return parse_program(tokens)


def parse_source_expression(source: str, engine: str = 'hand') -> Node:
    """Lex, translate and parse source text holding a single expression."""
    tokens = translate(tokenize(source))
    if engine == 'lark':
        from .grammar import parse_expression_lark
        return parse_expression_lark(tokens)
    return parse_expression(tokens)


def divide(a: float, b: float) -> float:
    # IEEE-754 semantics; Python raises where the hardware would not
    try:
        return a / b
    except ZeroDivisionError:
        if a == 0 or math.isnan(a):
            return math.nan
        return math.copysign(math.inf, a) * math.copysign(1.0, b)


class Interpreter:
    """Core interpreter that executes a Sanskriti AST."""
    def __init__(self, debug_level: int = 0, debug_file: str = 'debug.txt'):
        self.global_env = Environment()
        self.debug_level = debug_level
        self.debug_file = debug_file
        self.debug_fp = None

    def debug(self, msg: str):
        if self.debug_fp:
            self.debug_fp.write(msg + '\n')
            self.debug_fp.flush()

    # Public API
    def run(self, program: Program, env: Optional[Environment] = None) -> None:
        if env is None:
            env = self.global_env
        if self.debug_level > 0:
            self.debug_fp = open(self.debug_file, 'w', encoding='utf-8')
        try:
            self.execute_block(program.body, env)
        except RecursionError:
            raise LoxRuntimeError('RecursionError', 'Too much nesting.') from None
        finally:
            if self.debug_fp:
                self.debug_fp.close()
                self.debug_fp = None

    def execute_block(self, statements: List[Stmt], env: Environment) -> None:
        for stmt in statements:
            self.execute(stmt, env)

    def execute(self, node: Stmt, env: Environment) -> None:
        if self.debug_level >= 1:
            self.debug(f"exec {type(node).__name__} depth={env.depth()}")
        if isinstance(node, ExprStmt):
            self.evaluate(node.expr, env)
            return
        if isinstance(node, Print):
            value = self.evaluate(node.expr, env)
            print(to_string(value))
            return
        if isinstance(node, VarDecl):
            value = self.evaluate(node.initializer, env) if node.initializer is not None else NIL
            env.declare(node.name, value)
            if self.debug_level >= 2:
                self.debug(f"declare {node.name}: {type_name(value)} = {to_string(value)}")
            return
        if isinstance(node, Block):
            # new scope; dropped when the block exits, normally or not
            self.execute_block(node.statements, Environment(parent=env))
            return
        if isinstance(node, If):
            cond = self.evaluate(node.condition, env)
            truthy = is_truthy(cond)
            if self.debug_level >= 3:
                self.debug(f"if condition {to_string(cond)} -> {truthy}")
            if truthy:
                self.execute(node.then_branch, env)
            elif node.else_branch is not None:
                self.execute(node.else_branch, env)
            return
        if isinstance(node, While):
            while True:
                cond = self.evaluate(node.condition, env)
                if self.debug_level >= 3:
                    self.debug(f"while condition {to_string(cond)} -> {is_truthy(cond)}")
                if not is_truthy(cond):
                    break
                self.execute(node.body, env)
            return
        raise NotImplementedError(f"execute: unexpected node type {type(node)}")

    def evaluate(self, node: Node, env: Environment) -> Any:
        if isinstance(node, Literal):
            return node.value
        if isinstance(node, Grouping):
            return self.evaluate(node.expr, env)
        if isinstance(node, Variable):
            return env.get(node.name, node.line)
        if isinstance(node, Assign):
            value = self.evaluate(node.value, env)
            env.set(node.name, value, node.line)
            if self.debug_level >= 2:
                self.debug(f"assign {node.name}: {type_name(value)} = {to_string(value)}")
            return value
        if isinstance(node, Unary):
            operand = self.evaluate(node.operand, env)
            if node.op == '!':
                return not is_truthy(operand)
            if node.op == '-':
                if not is_number(operand):
                    raise LoxRuntimeError('TypeError', 'Operand must be a number.', node.line)
                return -operand
            raise LoxRuntimeError('TypeError', f'Unsupported unary operator {node.op}.', node.line)
        if isinstance(node, Logical):
            left = self.evaluate(node.left, env)
            # Short-circuit: the right operand is only evaluated when needed
            if node.op == 'or':
                if is_truthy(left):
                    return left
            elif not is_truthy(left):
                return left
            return self.evaluate(node.right, env)
        if isinstance(node, Binary):
            left = self.evaluate(node.left, env)
            right = self.evaluate(node.right, env)
            return self.apply_binary_op(node.op, left, right, node.line)
        raise NotImplementedError(f"evaluate: unexpected node type {type(node)}")

    def apply_binary_op(self, op: str, a: Any, b: Any, line: Optional[int] = None) -> Any:
        if op == '+':
            if is_number(a) and is_number(b):
                return a + b
            if isinstance(a, str) and isinstance(b, str):
                return a + b
            raise LoxRuntimeError(
                'TypeError',
                f'Operands must be two numbers or two strings, got {type_name(a)} and {type_name(b)}.',
                line,
            )
        if op == '==':
            return values_equal(a, b)
        if op == '!=':
            return not values_equal(a, b)
        if not (is_number(a) and is_number(b)):
            raise LoxRuntimeError(
                'TypeError',
                f"Operands must be numbers for '{op}', got {type_name(a)} and {type_name(b)}.",
                line,
            )
        if op == '-':
            return a - b
        if op == '*':
            return a * b
        if op == '/':
            return divide(a, b)
        if op == '<':
            return a < b
        if op == '<=':
            return a <= b
        if op == '>':
            return a > b
        if op == '>=':
            return a >= b
        raise LoxRuntimeError('TypeError', f'Unknown operator {op}.', line)


def run_program(source: str, debug_level: int = 0, engine: str = 'hand') -> Interpreter:
    """Convenience function to lex, translate, parse and run a program from source."""
    ast_program = parse_source(source, engine)
    interpreter = Interpreter(debug_level=debug_level)
    interpreter.run(ast_program)
    return interpreter


def run_file(file_path: str, debug_level: int = 0, engine: str = 'hand') -> Interpreter:
    """Run a source file, returning the interpreter instance."""
    with open(file_path, 'r', encoding='utf-8') as f:
        source = f.read()
    return run_program(source, debug_level, engine)
