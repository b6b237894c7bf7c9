"""CLI entry point for the Sanskriti toolchain.

Usage:
    python -m sanskriti [-v|-vv|-vvv] [--no-banner] tokenize [--translate] <source_file>
    python -m sanskriti [-v...] parse [--engine hand|lark] [--json] <source_file>
    python -m sanskriti [-v...] run [--engine hand|lark] <source_file>
    python -m sanskriti [-v...] emit-ast [--engine hand|lark] <source_file>
    python -m sanskriti [-v...] run-ast <ast_json_file>

Options:
  -v            Increase debug verbosity (can be repeated)
  --no-banner   Do not write the startup banner to stderr

Debug information is written to `debug.txt` in the current directory when
verbosity is greater than zero. Diagnostics go to stderr as
`[line N] Error: ...`; lex and parse errors exit with status 65, runtime
errors with status 70.
"""

import argparse
import json
import sys
from pathlib import Path
from typing import List, Optional

from . import __version__
from .ast import Program
from .ast_json import ast_from_obj, ast_to_obj
from .errors import LexError, LoxRuntimeError, ParseError, SanskritiError
from .interpreter import ENGINES, Interpreter, parse_source, parse_source_expression
from .lexer import tokenize
from .printer import format_expr
from .translator import translate

EXIT_DATA_ERROR = 65
EXIT_SOFTWARE_ERROR = 70


def banner() -> str:
    return f"संस्कृति (sanskriti) {__version__}"


def read_source(path: str) -> str:
    source_file = Path(path)
    if not source_file.exists():
        print(f"Error: file {source_file} not found", file=sys.stderr)
        sys.exit(1)
    try:
        with open(source_file, 'r', encoding='utf-8') as f:
            return f.read()
    except (OSError, UnicodeDecodeError):
        print(f"Error: cannot read {source_file}", file=sys.stderr)
        sys.exit(1)


def report(error: SanskritiError) -> None:
    if isinstance(error, ParseError):
        print(f"[line {error.line}] {error.message}", file=sys.stderr)
    else:
        print(f"[line {error.line}] Error: {error.message}", file=sys.stderr)


def exit_code(error: SanskritiError) -> int:
    if isinstance(error, LoxRuntimeError):
        return EXIT_SOFTWARE_ERROR
    return EXIT_DATA_ERROR


def cmd_tokenize(args) -> None:
    source = read_source(args.filename)
    try:
        tokens = tokenize(source)
    except LexError as e:
        report(e)
        sys.exit(EXIT_DATA_ERROR)
    if args.translate:
        tokens = translate(tokens)
    for token in tokens:
        print(token)


def cmd_parse(args) -> None:
    source = read_source(args.filename)
    expr = parse_source_expression(source, args.engine)
    if args.json:
        print(json.dumps(ast_to_obj(expr), ensure_ascii=False, indent=2))
    else:
        print(format_expr(expr))


def cmd_run(args) -> None:
    source = read_source(args.filename)
    program = parse_source(source, args.engine)
    Interpreter(debug_level=args.v).run(program)


def cmd_emit_ast(args) -> None:
    program_file = Path(args.filename)
    program = parse_source(read_source(args.filename), args.engine)
    out_path = program_file.with_name(program_file.name + '.ast.json')
    with open(out_path, 'w', encoding='utf-8') as out:
        json.dump(ast_to_obj(program), out, ensure_ascii=False, indent=2)
    print(str(out_path))


def cmd_run_ast(args) -> None:
    text = read_source(args.filename)
    try:
        program = ast_from_obj(json.loads(text))
        if not isinstance(program, Program):
            raise TypeError("top-level node must be a Program")
    except (json.JSONDecodeError, KeyError, TypeError, ValueError, RecursionError) as e:
        print(f"Error: invalid AST file {args.filename}: {e}", file=sys.stderr)
        sys.exit(EXIT_DATA_ERROR)
    Interpreter(debug_level=args.v).run(program)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog='sanskriti', description="Sanskriti language toolchain")
    parser.add_argument('-v', action='count', default=0, help='increase debug verbosity (can be repeated)')
    parser.add_argument('--no-banner', action='store_true', help='do not print the startup banner')
    parser.add_argument('--version', action='version', version=banner())
    commands = parser.add_subparsers(dest='command', required=True)

    tok = commands.add_parser('tokenize', help='print the token stream of a source file')
    tok.add_argument('filename')
    tok.add_argument('--translate', action='store_true', help='show tokens after keyword translation')
    tok.set_defaults(func=cmd_tokenize)

    par = commands.add_parser('parse', help='parse a single expression and print it')
    par.add_argument('filename')
    par.add_argument('--engine', choices=ENGINES, default='hand')
    par.add_argument('--json', action='store_true', help='print the AST as JSON')
    par.set_defaults(func=cmd_parse)

    run = commands.add_parser('run', help='run a program')
    run.add_argument('filename')
    run.add_argument('--engine', choices=ENGINES, default='hand')
    run.set_defaults(func=cmd_run)

    emit = commands.add_parser('emit-ast', help='write the program AST next to the source as JSON')
    emit.add_argument('filename')
    emit.add_argument('--engine', choices=ENGINES, default='hand')
    emit.set_defaults(func=cmd_emit_ast)

    run_ast = commands.add_parser('run-ast', help='run a previously emitted AST JSON file')
    run_ast.add_argument('filename')
    run_ast.set_defaults(func=cmd_run_ast)
    return parser


def main(argv: Optional[List[str]] = None) -> None:
    args = build_parser().parse_args(argv)
    if not args.no_banner:
        print(banner(), file=sys.stderr)
    try:
        args.func(args)
    except SanskritiError as e:
        report(e)
        sys.exit(exit_code(e))


if __name__ == '__main__':
    main()
