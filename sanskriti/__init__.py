# Sanskriti language package
# This package provides a lexer, keyword translator, parser and tree-walking
# interpreter for a scripting language written with Sanskrit keywords.
__version__ = '0.1.0'

from .errors import SanskritiError, LexError, ParseError, LoxRuntimeError
from .lexer import tokenize
from .translator import translate, translate_source
from .parser import parse_program, parse_expression
from .interpreter import run_program, run_file, parse_source, parse_source_expression, Interpreter

__all__ = [
    'tokenize',
    'translate',
    'translate_source',
    'parse_program',
    'parse_expression',
    'parse_source',
    'parse_source_expression',
    'run_program',
    'run_file',
    'Interpreter',
    'SanskritiError',
    'LexError',
    'ParseError',
    'LoxRuntimeError',
    '__version__',
]
