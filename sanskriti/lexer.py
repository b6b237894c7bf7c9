"""Lexer for Sanskriti source text.

The scanner follows the usual single-pass rules for a C-like scripting
language and extends the identifier alphabet with the Devanagari
blocks, so identifiers and keywords may mix ASCII and Devanagari freely.
Sanskrit keywords are lexed as plain identifiers here; turning them into
keyword tokens is the translator's job.
"""

from __future__ import annotations

from typing import List

from sanskriti.errors import LexError
from sanskriti.tokens import RESERVED, Token, TokenType

# Devanagari, Devanagari Extended and Vedic Extensions
DEVANAGARI_RANGES = (
    (0x0900, 0x097F),
    (0xA8E0, 0xA8FF),
    (0x1CD0, 0x1CFF),
)

# zero width non-joiner / joiner, used to control conjunct rendering
JOINERS = {'\u200c', '\u200d'}

SINGLE_CHAR_TOKENS = {
    '(': TokenType.LEFT_PAREN,
    ')': TokenType.RIGHT_PAREN,
    '{': TokenType.LEFT_BRACE,
    '}': TokenType.RIGHT_BRACE,
    ',': TokenType.COMMA,
    '.': TokenType.DOT,
    '-': TokenType.MINUS,
    '+': TokenType.PLUS,
    ';': TokenType.SEMICOLON,
    '*': TokenType.STAR,
}

# first char -> (single form, two char form with '=')
EQUAL_SUFFIXED = {
    '!': (TokenType.BANG, TokenType.BANG_EQUAL),
    '=': (TokenType.EQUAL, TokenType.EQUAL_EQUAL),
    '<': (TokenType.LESS, TokenType.LESS_EQUAL),
    '>': (TokenType.GREATER, TokenType.GREATER_EQUAL),
}


def is_devanagari(c: str) -> bool:
    cp = ord(c)
    return any(lo <= cp <= hi for lo, hi in DEVANAGARI_RANGES)


def is_digit(c: str) -> bool:
    return '0' <= c <= '9'


def is_ident_start(c: str) -> bool:
    return ('a' <= c <= 'z') or ('A' <= c <= 'Z') or c == '_' or is_devanagari(c)


def is_ident_char(c: str) -> bool:
    return is_ident_start(c) or is_digit(c) or c in JOINERS


def tokenize(source: str) -> List[Token]:
    """Convert source text into a list of tokens ending with EOF.

    Raises LexError on the first unexpected character or on a string
    literal that is still open at end of input.
    """
    tokens: List[Token] = []
    i = 0
    line = 1
    length = len(source)

    def peek(offset: int = 0) -> str:
        j = i + offset
        return source[j] if j < length else ''

    while i < length:
        c = source[i]
        if c == '\n':
            line += 1
            i += 1
            continue
        if c.isspace():
            i += 1
            continue
        # Line comment
        if c == '/' and peek(1) == '/':
            while i < length and source[i] != '\n':
                i += 1
            continue
        if c == '/':
            tokens.append(Token(TokenType.SLASH, c, None, line))
            i += 1
            continue
        if c in SINGLE_CHAR_TOKENS:
            tokens.append(Token(SINGLE_CHAR_TOKENS[c], c, None, line))
            i += 1
            continue
        # Longest match for != == <= >=
        if c in EQUAL_SUFFIXED:
            single, double = EQUAL_SUFFIXED[c]
            if peek(1) == '=':
                tokens.append(Token(double, c + '=', None, line))
                i += 2
            else:
                tokens.append(Token(single, c, None, line))
                i += 1
            continue
        # String literal, no escapes; may span lines
        if c == '"':
            start_i = i
            start_line = line
            i += 1
            while i < length and source[i] != '"':
                if source[i] == '\n':
                    line += 1
                i += 1
            if i >= length:
                raise LexError('Unterminated string.', line)
            i += 1  # closing quote
            lexeme = source[start_i:i]
            tokens.append(Token(TokenType.STRING, lexeme, lexeme[1:-1], start_line))
            continue
        if is_digit(c):
            start_i = i
            while i < length and is_digit(source[i]):
                i += 1
            # a fraction needs at least one digit after the dot
            if peek() == '.' and is_digit(peek(1)):
                i += 1
                while i < length and is_digit(source[i]):
                    i += 1
            lexeme = source[start_i:i]
            tokens.append(Token(TokenType.NUMBER, lexeme, float(lexeme), line))
            continue
        if is_ident_start(c):
            start_i = i
            while i < length and is_ident_char(source[i]):
                i += 1
            lexeme = source[start_i:i]
            token_type = RESERVED.get(lexeme, TokenType.IDENTIFIER)
            tokens.append(Token(token_type, lexeme, None, line))
            continue
        raise LexError(f'Unexpected character: {c}', line, c)
    tokens.append(Token(TokenType.EOF, '', None, line))
    return tokens
