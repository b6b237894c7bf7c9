"""Recursive-descent parser for the Sanskriti language.

Statements are parsed by recursive descent; expressions by precedence
climbing, one method per precedence level from lowest to highest:

    assignment -> logic_or -> logic_and -> equality -> comparison
               -> term -> factor -> unary -> primary

Each binary level parses one operand of the next level up, then loops
consuming operators of its own level, building left-deep trees.
Assignment and unary are right-associative and recurse instead.

The parser expects a token list that has already been through the
translator. It stops at the first error by raising ParseError.
"""

from __future__ import annotations

from typing import List, Optional

from .ast import (
    Program, Expr, Stmt, Literal, Grouping, Unary, Binary, Logical,
    Variable, Assign, Print, VarDecl, Block, If, While, ExprStmt,
)
from .errors import ParseError
from .tokens import Token, TokenType
from .types import NIL

EQUALITY_OPS = (TokenType.EQUAL_EQUAL, TokenType.BANG_EQUAL)
COMPARISON_OPS = (TokenType.LESS, TokenType.LESS_EQUAL, TokenType.GREATER, TokenType.GREATER_EQUAL)
TERM_OPS = (TokenType.PLUS, TokenType.MINUS)
FACTOR_OPS = (TokenType.STAR, TokenType.SLASH)
UNARY_OPS = (TokenType.BANG, TokenType.MINUS)

# Reserved words that have no statement or expression form here.
UNSUPPORTED = (TokenType.CLASS, TokenType.FUN, TokenType.RETURN, TokenType.SUPER, TokenType.THIS)


def desugar_for(init: Optional[Stmt], condition: Optional[Expr],
                increment: Optional[Expr], body: Stmt) -> Stmt:
    """Rewrite a for loop into a block holding a while loop."""
    if increment is not None:
        body = Block([body, ExprStmt(increment)])
    if condition is None:
        condition = Literal(True)
    loop: Stmt = While(condition, body)
    if init is not None:
        loop = Block([init, loop])
    return loop


class Parser:
    def __init__(self, tokens: List[Token]):
        self.tokens = list(tokens)
        if not self.tokens or self.tokens[-1].type != TokenType.EOF:
            line = self.tokens[-1].line if self.tokens else 1
            self.tokens.append(Token(TokenType.EOF, '', None, line))
        self.pos = 0

    def peek(self) -> Token:
        return self.tokens[self.pos]

    def at_end(self) -> bool:
        return self.peek().type == TokenType.EOF

    def match(self, *types: TokenType) -> bool:
        return self.peek().type in types

    def advance(self) -> Token:
        token = self.peek()
        if not self.at_end():
            self.pos += 1
        return token

    def consume(self, token_type: TokenType, expected: str) -> Token:
        if self.match(token_type):
            return self.advance()
        raise ParseError(self.peek(), expected)

    def end_statement(self, what: str) -> None:
        # ';' may only be left out right before '}' or end of input
        if self.match(TokenType.SEMICOLON):
            self.advance()
            return
        if self.match(TokenType.RIGHT_BRACE, TokenType.EOF):
            return
        raise ParseError(self.peek(), f"Expect ';' after {what}.")

    def unsupported(self, token: Token) -> ParseError:
        return ParseError(token, f"'{token.lexeme}' is not supported.")

    # Statements

    def parse_program(self) -> Program:
        statements: List[Stmt] = []
        while not self.at_end():
            if self.match(TokenType.SEMICOLON):
                self.advance()
                continue
            statements.append(self.parse_statement())
        return Program(statements)

    def parse_statement(self) -> Stmt:
        token = self.peek()
        if token.type == TokenType.VAR:
            decl = self.parse_var_decl()
            self.end_statement('variable declaration')
            return decl
        if token.type == TokenType.PRINT:
            return self.parse_print_stmt()
        if token.type == TokenType.IF:
            return self.parse_if_stmt()
        if token.type == TokenType.WHILE:
            return self.parse_while_stmt()
        if token.type == TokenType.FOR:
            return self.parse_for_stmt()
        if token.type == TokenType.LEFT_BRACE:
            return self.parse_block()
        if token.type in (TokenType.CLASS, TokenType.FUN, TokenType.RETURN):
            raise self.unsupported(token)
        expr = self.parse_expression()
        self.end_statement('expression')
        return ExprStmt(expr)

    def parse_var_decl(self) -> VarDecl:
        self.consume(TokenType.VAR, "Expect 'var'.")
        name = self.consume(TokenType.IDENTIFIER, 'Expect variable name.')
        initializer: Optional[Expr] = None
        if self.match(TokenType.EQUAL):
            self.advance()
            initializer = self.parse_expression()
        return VarDecl(name.lexeme, initializer, name.line)

    def parse_print_stmt(self) -> Print:
        self.consume(TokenType.PRINT, "Expect 'print'.")
        value = self.parse_expression()
        self.end_statement('value')
        return Print(value)

    def parse_block(self) -> Block:
        self.consume(TokenType.LEFT_BRACE, "Expect '{'.")
        statements: List[Stmt] = []
        while not self.match(TokenType.RIGHT_BRACE):
            if self.at_end():
                raise ParseError(self.peek(), "Expect '}' after block.")
            # stray semicolons
            if self.match(TokenType.SEMICOLON):
                self.advance()
                continue
            statements.append(self.parse_statement())
        self.consume(TokenType.RIGHT_BRACE, "Expect '}' after block.")
        return Block(statements)

    def parse_if_stmt(self) -> If:
        self.consume(TokenType.IF, "Expect 'if'.")
        self.consume(TokenType.LEFT_PAREN, "Expect '(' after 'if'.")
        condition = self.parse_expression()
        self.consume(TokenType.RIGHT_PAREN, "Expect ')' after if condition.")
        then_branch = self.parse_statement()
        else_branch = None
        # binds to the nearest if
        if self.match(TokenType.ELSE):
            self.advance()
            else_branch = self.parse_statement()
        return If(condition, then_branch, else_branch)

    def parse_while_stmt(self) -> While:
        self.consume(TokenType.WHILE, "Expect 'while'.")
        self.consume(TokenType.LEFT_PAREN, "Expect '(' after 'while'.")
        condition = self.parse_expression()
        self.consume(TokenType.RIGHT_PAREN, "Expect ')' after condition.")
        body = self.parse_statement()
        return While(condition, body)

    def parse_for_stmt(self) -> Stmt:
        self.consume(TokenType.FOR, "Expect 'for'.")
        self.consume(TokenType.LEFT_PAREN, "Expect '(' after 'for'.")
        init: Optional[Stmt]
        if self.match(TokenType.SEMICOLON):
            init = None
        elif self.match(TokenType.VAR):
            init = self.parse_var_decl()
        else:
            init = ExprStmt(self.parse_expression())
        self.consume(TokenType.SEMICOLON, "Expect ';' after loop initializer.")
        condition = None
        if not self.match(TokenType.SEMICOLON):
            condition = self.parse_expression()
        self.consume(TokenType.SEMICOLON, "Expect ';' after loop condition.")
        increment = None
        if not self.match(TokenType.RIGHT_PAREN):
            increment = self.parse_expression()
        self.consume(TokenType.RIGHT_PAREN, "Expect ')' after for clauses.")
        body = self.parse_statement()
        return desugar_for(init, condition, increment, body)

    # Expressions

    def parse_expression(self) -> Expr:
        return self.parse_assign()

    # assignment: IDENTIFIER '=' assignment | logic_or
    def parse_assign(self) -> Expr:
        target = self.parse_logic_or()
        if self.match(TokenType.EQUAL):
            equals = self.advance()
            value = self.parse_assign()
            if isinstance(target, Variable):
                return Assign(target.name, value, target.line)
            raise ParseError(equals, 'Invalid assignment target.')
        return target

    def parse_logic_or(self) -> Expr:
        node = self.parse_logic_and()
        while self.match(TokenType.OR):
            op_token = self.advance()
            right = self.parse_logic_and()
            node = Logical('or', node, right, op_token.line)
        return node

    def parse_logic_and(self) -> Expr:
        node = self.parse_equality()
        while self.match(TokenType.AND):
            op_token = self.advance()
            right = self.parse_equality()
            node = Logical('and', node, right, op_token.line)
        return node

    def parse_equality(self) -> Expr:
        node = self.parse_comparison()
        while self.match(*EQUALITY_OPS):
            op_token = self.advance()
            right = self.parse_comparison()
            node = Binary(op_token.lexeme, node, right, op_token.line)
        return node

    def parse_comparison(self) -> Expr:
        node = self.parse_term()
        while self.match(*COMPARISON_OPS):
            op_token = self.advance()
            right = self.parse_term()
            node = Binary(op_token.lexeme, node, right, op_token.line)
        return node

    def parse_term(self) -> Expr:
        node = self.parse_factor()
        while self.match(*TERM_OPS):
            op_token = self.advance()
            right = self.parse_factor()
            node = Binary(op_token.lexeme, node, right, op_token.line)
        return node

    def parse_factor(self) -> Expr:
        node = self.parse_unary()
        while self.match(*FACTOR_OPS):
            op_token = self.advance()
            right = self.parse_unary()
            node = Binary(op_token.lexeme, node, right, op_token.line)
        return node

    def parse_unary(self) -> Expr:
        if self.match(*UNARY_OPS):
            op_token = self.advance()
            operand = self.parse_unary()
            return Unary(op_token.lexeme, operand, op_token.line)
        return self.parse_primary()

    def parse_primary(self) -> Expr:
        token = self.peek()
        if token.type in (TokenType.NUMBER, TokenType.STRING):
            self.advance()
            return Literal(token.literal)
        if token.type == TokenType.TRUE:
            self.advance()
            return Literal(True)
        if token.type == TokenType.FALSE:
            self.advance()
            return Literal(False)
        if token.type == TokenType.NIL:
            self.advance()
            return Literal(NIL)
        if token.type == TokenType.IDENTIFIER:
            self.advance()
            return Variable(token.lexeme, token.line)
        if token.type == TokenType.LEFT_PAREN:
            self.advance()
            expr = self.parse_expression()
            self.consume(TokenType.RIGHT_PAREN, "Expect ')' after expression.")
            return Grouping(expr)
        if token.type in UNSUPPORTED:
            raise self.unsupported(token)
        raise ParseError(token, 'Expect expression.')


def parse_program(tokens: List[Token]) -> Program:
    """Parse a translated token list as a whole program."""
    parser = Parser(tokens)
    try:
        return parser.parse_program()
    except RecursionError:
        raise ParseError(parser.peek(), 'Too much nesting.') from None


def parse_expression(tokens: List[Token]) -> Expr:
    """Parse a translated token list holding exactly one expression."""
    parser = Parser(tokens)
    try:
        expr = parser.parse_expression()
    except RecursionError:
        raise ParseError(parser.peek(), 'Too much nesting.') from None
    parser.consume(TokenType.EOF, 'Expect end of expression.')
    return expr
