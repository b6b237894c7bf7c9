"""Grammar-driven parser for the Sanskriti language.

This module is a second front end next to the hand-written parser in
`parser.py`. It works in two stages:

1. **Preprocessing**: the translated token list gets explicit statement
   terminators. The hand-written parser lets a `;` be left out right
   before `}` or end of input; here the missing semicolons are inserted
   so the grammar can require them. Stray semicolons are dropped.
   Tokens inside parentheses are never touched, which keeps the
   `for (...; ...; ...)` header intact.

2. **Parsing**: the tokens are fed one by one into a Lark LALR parser
   whose terminals are exactly our `TokenType` names. The resulting
   parse tree is turned into `sanskriti.ast` nodes by a transformer, so
   both front ends produce equal trees for the same program.
"""

from __future__ import annotations

from typing import List

from lark import Lark, Token as LarkToken, Transformer
from lark.exceptions import UnexpectedInput
from lark.lexer import Lexer

from .ast import (
    Program, Expr, Literal, Grouping, Unary, Binary, Logical,
    Variable, Assign, Print, VarDecl, Block, If, While, ExprStmt,
)
from .errors import ParseError
from .parser import desugar_for
from .tokens import Token, TokenType
from .types import NIL

SANSKRITI_GRAMMAR = r"""
    program: statement*
    expr_only: expression

    // Statements
    ?statement: var_decl
              | print_stmt
              | if_stmt
              | while_stmt
              | for_stmt
              | block
              | expr_stmt

    var_decl: VAR IDENTIFIER (EQUAL expression)? SEMICOLON
    print_stmt: PRINT expression SEMICOLON
    expr_stmt: expression SEMICOLON
    block: LEFT_BRACE statement* RIGHT_BRACE
    if_stmt: IF LEFT_PAREN expression RIGHT_PAREN statement (ELSE statement)?
    while_stmt: WHILE LEFT_PAREN expression RIGHT_PAREN statement
    for_stmt: FOR LEFT_PAREN for_init [expression] SEMICOLON [expression] RIGHT_PAREN statement
    for_init: var_decl | expr_stmt | SEMICOLON

    // Expressions with precedence
    ?expression: assignment
    ?assignment: IDENTIFIER EQUAL assignment -> assign
               | logic_or
    ?logic_or: logic_and (OR logic_and)*
    ?logic_and: equality (AND equality)*
    ?equality: comparison ((EQUAL_EQUAL | BANG_EQUAL) comparison)*
    ?comparison: term ((LESS | LESS_EQUAL | GREATER | GREATER_EQUAL) term)*
    ?term: factor ((PLUS | MINUS) factor)*
    ?factor: unary ((STAR | SLASH) unary)*
    ?unary: (BANG | MINUS) unary -> unary_op
          | primary
    ?primary: NUMBER -> number
            | STRING -> string
            | TRUE -> true
            | FALSE -> false
            | NIL -> nil
            | IDENTIFIER -> variable
            | LEFT_PAREN expression RIGHT_PAREN -> grouping

    %declare LEFT_PAREN RIGHT_PAREN LEFT_BRACE RIGHT_BRACE SEMICOLON
    %declare MINUS PLUS SLASH STAR BANG BANG_EQUAL EQUAL EQUAL_EQUAL
    %declare GREATER GREATER_EQUAL LESS LESS_EQUAL
    %declare IDENTIFIER STRING NUMBER
    %declare AND OR ELSE FALSE TRUE NIL FOR IF PRINT VAR WHILE
"""

NO_TERMINATOR_NEEDED = (None, TokenType.SEMICOLON, TokenType.LEFT_BRACE, TokenType.RIGHT_BRACE)


class TokenStreamLexer(Lexer):
    """Placeholder lexer: tokens are fed to the parser directly."""
    def __init__(self, lexer_conf):
        pass

    def lex(self, data):
        for token in data:
            yield to_lark_token(token)


def to_lark_token(token: Token) -> LarkToken:
    return LarkToken(token.type.name, token.lexeme, line=token.line)


def terminate_statements(tokens: List[Token]) -> List[Token]:
    """Insert omitted semicolons before `}` / EOF and drop stray ones."""
    result: List[Token] = []
    depth = 0  # parenthesis nesting
    prev = None
    for token in tokens:
        kind = token.type
        if depth == 0:
            if kind == TokenType.SEMICOLON and prev in NO_TERMINATOR_NEEDED:
                continue
            if kind in (TokenType.RIGHT_BRACE, TokenType.EOF) and prev not in NO_TERMINATOR_NEEDED:
                result.append(Token(TokenType.SEMICOLON, ';', None, token.line))
        if kind == TokenType.LEFT_PAREN:
            depth += 1
        elif kind == TokenType.RIGHT_PAREN and depth > 0:
            depth -= 1
        result.append(token)
        prev = kind
    return result


class ASTTransformer(Transformer):
    """Transforms the raw parse tree into an AST."""

    def program(self, items):
        return Program(body=list(items))

    def expr_only(self, items):
        return items[0]

    def var_decl(self, items):
        # VAR IDENTIFIER [EQUAL expression] SEMICOLON
        name = items[1]
        initializer = items[3] if len(items) == 5 else None
        return VarDecl(str(name), initializer, name.line)

    def print_stmt(self, items):
        return Print(items[1])

    def expr_stmt(self, items):
        return ExprStmt(items[0])

    def block(self, items):
        return Block(statements=list(items[1:-1]))

    def if_stmt(self, items):
        condition = items[2]
        then_branch = items[4]
        else_branch = items[6] if len(items) > 5 else None
        return If(condition, then_branch, else_branch)

    def while_stmt(self, items):
        return While(items[2], items[4])

    def for_init(self, items):
        init = items[0]
        if isinstance(init, LarkToken):
            return None
        return init

    def for_stmt(self, items):
        # FOR ( init cond ; incr ) body
        init, condition, increment, body = items[2], items[3], items[5], items[7]
        return desugar_for(init, condition, increment, body)

    # Expressions
    def assign(self, items):
        name, _, value = items
        return Assign(str(name), value, name.line)

    def fold_logical(self, items) -> Expr:
        left = items[0]
        i = 1
        while i < len(items):
            op = items[i]
            right = items[i + 1]
            left = Logical(str(op), left, right, op.line)
            i += 2
        return left

    def fold_binary(self, items) -> Expr:
        left = items[0]
        i = 1
        while i < len(items):
            op = items[i]
            right = items[i + 1]
            left = Binary(str(op), left, right, op.line)
            i += 2
        return left

    logic_or = fold_logical
    logic_and = fold_logical
    equality = fold_binary
    comparison = fold_binary
    term = fold_binary
    factor = fold_binary

    def unary_op(self, items):
        op, operand = items
        return Unary(str(op), operand, op.line)

    def number(self, items):
        return Literal(float(items[0]))

    def string(self, items):
        return Literal(str(items[0])[1:-1])

    def true(self, items):
        return Literal(True)

    def false(self, items):
        return Literal(False)

    def nil(self, items):
        return Literal(NIL)

    def variable(self, items):
        token = items[0]
        return Variable(str(token), token.line)

    def grouping(self, items):
        return Grouping(items[1])


SANSKRITI_PARSER = Lark(
    SANSKRITI_GRAMMAR,
    parser='lalr',
    lexer=TokenStreamLexer,
    start=['program', 'expr_only'],
    maybe_placeholders=True,
)


def describe_expected(err: UnexpectedInput) -> str:
    expected = sorted(getattr(err, 'expected', None) or ())
    if not expected:
        return 'Unexpected token.'
    return f"Expect one of: {', '.join(expected)}."


def _parse(tokens: List[Token], start: str):
    interactive = SANSKRITI_PARSER.parse_interactive(start=start)
    eof = None
    for token in tokens:
        if token.type == TokenType.EOF:
            eof = token
            break
        try:
            interactive.feed_token(to_lark_token(token))
        except UnexpectedInput as e:
            raise ParseError(token, describe_expected(e)) from e
    if eof is None:
        line = tokens[-1].line if tokens else 1
        eof = Token(TokenType.EOF, '', None, line)
    try:
        tree = interactive.feed_eof(to_lark_token(eof))
    except UnexpectedInput as e:
        raise ParseError(eof, describe_expected(e)) from e
    try:
        return ASTTransformer().transform(tree)
    except RecursionError:
        raise ParseError(eof, 'Too much nesting.') from None


def parse_program_lark(tokens: List[Token]) -> Program:
    """Parse a translated token list as a program using the grammar."""
    if not tokens or tokens[-1].type != TokenType.EOF:
        line = tokens[-1].line if tokens else 1
        tokens = list(tokens) + [Token(TokenType.EOF, '', None, line)]
    return _parse(terminate_statements(tokens), 'program')


def parse_expression_lark(tokens: List[Token]) -> Expr:
    """Parse a translated token list holding exactly one expression."""
    return _parse(tokens, 'expr_only')
