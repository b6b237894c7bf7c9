"""Sanskrit keyword translation.

Sanskrit keywords reach the translator as ordinary IDENTIFIER tokens.
`translate` rewrites the ones whose whole lexeme is a known keyword into
the matching target keyword token; everything else is passed through
untouched. Because the lexer has already isolated each identifier, a
name such as `true_ध्वज` or `चरम` can never be partially rewritten.
"""

from __future__ import annotations

import re
from dataclasses import replace
from types import MappingProxyType
from typing import List, Mapping

from sanskriti.lexer import DEVANAGARI_RANGES, JOINERS
from sanskriti.tokens import RESERVED, Token, TokenType

KEYWORDS: Mapping[str, str] = MappingProxyType({
    'श्रेणी': 'class',
    'अथ्वा': 'else',
    'असत्य': 'false',
    'पुरा': 'for',
    'विनियोग': 'fun',
    'यदि': 'if',
    'नेति': 'nil',
    'विकल्प': 'or',
    'च': 'and',
    'कथय': 'print',
    'देयम': 'return',
    'महा': 'super',
    'यह': 'this',
    'सत्य': 'true',
    'चर': 'var',
    'यावद': 'while',
})


def translate(tokens: List[Token]) -> List[Token]:
    """Return a new token list with Sanskrit keywords rewritten."""
    result: List[Token] = []
    for token in tokens:
        target = KEYWORDS.get(token.lexeme) if token.type == TokenType.IDENTIFIER else None
        if target is None:
            result.append(token)
        else:
            result.append(replace(token, type=RESERVED[target], lexeme=target))
    return result


def _build_word_pattern() -> 're.Pattern[str]':
    start = 'A-Za-z_' + ''.join(f'\\u{lo:04x}-\\u{hi:04x}' for lo, hi in DEVANAGARI_RANGES)
    rest = start + '0-9' + ''.join(f'\\u{ord(c):04x}' for c in JOINERS)
    # numbers are skipped whole, so a word right after a digit starts
    # a new token just as it does in the lexer
    return re.compile(
        rf'(?P<skip>"[^"]*"?|//[^\n]*|[0-9]+(?:\.[0-9]+)?)'
        rf'|(?P<word>[{start}][{rest}]*)'
    )


WORD_PATTERN = _build_word_pattern()


def translate_source(text: str) -> str:
    """Whole-word keyword translation over raw source text.

    Strings and line comments are copied verbatim.
    """
    def substitute(match: 're.Match[str]') -> str:
        word = match.group('word')
        if word is None:
            return match.group('skip')
        return KEYWORDS.get(word, word)

    return WORD_PATTERN.sub(substitute, text)
