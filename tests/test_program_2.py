from pathlib import Path

from sanskriti.interpreter import parse_source, Interpreter

EXAMPLE = Path(__file__).resolve().parent.parent / 'examples' / 'program_2.skt'


def test_program_2_if_else(capsys):
    with open(EXAMPLE, 'r', encoding='utf-8') as f:
        source = f.read()
    ast = parse_source(source)
    interp = Interpreter()
    interp.run(ast)
    out = capsys.readouterr().out
    # only the then-branch runs
    assert out == 'A\n'
