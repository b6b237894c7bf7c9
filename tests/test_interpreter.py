import math
import sys

import pytest

from sanskriti.ast import Literal, Print, Program, Unary
from sanskriti.errors import LoxRuntimeError, ParseError
from sanskriti.interpreter import Interpreter, parse_source, run_file, run_program
from sanskriti.types import NIL


def output(source, capsys):
    run_program(source)
    return capsys.readouterr().out.splitlines()


def test_arithmetic_precedence(capsys):
    assert output('कथय 2 + 3 * 4; कथय (2 + 3) * 4; कथय 10 - 3 - 2;', capsys) == ['14.0', '20.0', '5.0']


def test_number_display(capsys):
    assert output('कथय 7 / 2; कथय -0.5; कथय 1 / 3;', capsys) == ['3.5', '-0.5', '0.3333333333333333']


def test_division_by_zero_follows_ieee(capsys):
    assert output('कथय 1 / 0; कथय -1 / 0; कथय 0 / 0;', capsys) == ['inf', '-inf', 'nan']


def test_value_display(capsys):
    assert output('कथय सत्य; कथय असत्य; कथय नेति; कथय "बिना उद्धरण";', capsys) == [
        'true', 'false', 'nil', 'बिना उद्धरण',
    ]


def test_string_concatenation(capsys):
    assert output('कथय "राम" + "सीता";', capsys) == ['रामसीता']


@pytest.mark.parametrize('source', ['"a" + 1;', '1 + सत्य;', 'नेति + नेति;'])
def test_plus_with_mismatched_operands(source):
    with pytest.raises(LoxRuntimeError) as info:
        run_program(source)
    assert info.value.err.name == 'TypeError'


@pytest.mark.parametrize('source', ['"a" - 1;', '2 * "b";', 'सत्य / 1;', '"a" < "b";', '1 >= नेति;'])
def test_numeric_operators_require_numbers(source):
    with pytest.raises(LoxRuntimeError):
        run_program(source)


def test_unary_minus_requires_number():
    with pytest.raises(LoxRuntimeError) as info:
        run_program('\n-"x";')
    assert info.value.message == 'Operand must be a number.'
    assert info.value.line == 2


def test_bang_uses_truthiness(capsys):
    assert output('कथय !0; कथय !""; कथय !नेति; कथय !असत्य;', capsys) == ['false', 'false', 'true', 'true']


def test_truthiness_in_conditions(capsys):
    source = 'यदि (0) कथय "zero"; यदि ("") कथय "empty"; यदि (नेति) कथय "nil"; अथ्वा कथय "falsey";'
    assert output(source, capsys) == ['zero', 'empty', 'falsey']


def test_equality_is_structural_without_coercion(capsys):
    source = 'कथय 1 == 1; कथय "a" == "a"; कथय 1 == सत्य; कथय 0 == असत्य; कथय नेति == असत्य; कथय 1 != "1";'
    assert output(source, capsys) == ['true', 'true', 'false', 'false', 'false', 'true']


def test_comparisons(capsys):
    assert output('कथय 1 < 2; कथय 2 <= 2; कथय 3 > 4; कथय 4 >= 5;', capsys) == [
        'true', 'true', 'false', 'false',
    ]


def test_or_short_circuits_undefined_variable(capsys):
    assert output('कथय सत्य विकल्प अपरिभाषित;', capsys) == ['true']


def test_and_short_circuits_undefined_variable(capsys):
    assert output('कथय असत्य च अपरिभाषित;', capsys) == ['false']


def test_logical_operators_evaluate_right_when_needed():
    with pytest.raises(LoxRuntimeError):
        run_program('असत्य विकल्प अपरिभाषित;')
    with pytest.raises(LoxRuntimeError):
        run_program('सत्य च अपरिभाषित;')


def test_short_circuit_skips_side_effects(capsys):
    source = 'चर n = 0; सत्य विकल्प (n = 1); असत्य च (n = 2); कथय n;'
    assert output(source, capsys) == ['0.0']


def test_undefined_variable_is_an_error():
    with pytest.raises(LoxRuntimeError) as info:
        run_program('कथय 1;\nकथय अज्ञात;')
    assert info.value.err.name == 'NameError'
    assert info.value.line == 2
    assert 'Undefined variable' in info.value.message


def test_assignment_to_undeclared_name_is_an_error():
    with pytest.raises(LoxRuntimeError):
        run_program('अज्ञात = 1;')


def test_var_without_initializer_is_nil():
    interp = run_program('चर a;')
    assert interp.global_env.values['a'] is NIL


def test_block_variables_are_not_visible_afterwards():
    with pytest.raises(LoxRuntimeError):
        run_program('{ चर भीतर = 1; } कथय भीतर;')


def test_assignment_in_block_updates_enclosing_binding(capsys):
    source = 'चर a = 1; { a = 2; { a = a + 1; } } कथय a;'
    assert output(source, capsys) == ['3.0']


def test_shadowing_does_not_touch_outer_binding(capsys):
    source = 'चर a = "बाहर"; { चर a = "भीतर"; a = "बदला"; कथय a; } कथय a;'
    assert output(source, capsys) == ['बदला', 'बाहर']


def test_assignment_is_an_expression(capsys):
    assert output('चर a; चर b; a = b = 5; कथय a + b;', capsys) == ['10.0']


def test_output_before_error_is_kept(capsys):
    with pytest.raises(LoxRuntimeError):
        run_program('कथय "पहले"; कथय -"x"; कथय "बाद";')
    assert capsys.readouterr().out == 'पहले\n'


def test_while_loop_counts(capsys):
    source = 'चर आरम्भ = 1; चर सीमा = 5; यावद (आरम्भ <= सीमा) { कथय आरम्भ; आरम्भ = आरम्भ + 1; }'
    assert output(source, capsys) == ['1.0', '2.0', '3.0', '4.0', '5.0']


def test_if_else(capsys):
    assert output('चर ध्वज = सत्य; यदि (ध्वज) { कथय "A"; } अथ्वा { कथय "B"; }', capsys) == ['A']
    assert output('चर ध्वज = असत्य; यदि (ध्वज) { कथय "A"; } अथ्वा { कथय "B"; }', capsys) == ['B']


def test_for_loop_variable_is_scoped_to_loop():
    with pytest.raises(LoxRuntimeError):
        run_program('पुरा (चर i = 0; i < 1; i = i + 1) {} कथय i;')


def test_interpreter_keeps_globals_between_runs(capsys):
    interp = Interpreter()
    interp.run(parse_source('चर गणना = 1;'))
    interp.run(parse_source('गणना = गणना + 1; कथय गणना;'))
    assert capsys.readouterr().out == '2.0\n'


def test_overflow_gives_infinity():
    # 1 followed by 308 zeros is the literal for 1e308
    interp = run_program('चर बड़ा = 1' + '0' * 308 + '; चर x = बड़ा * 10;')
    assert math.isinf(interp.global_env.values['x'])


def test_debug_trace_file(tmp_path, capsys):
    trace = tmp_path / 'debug.txt'
    interp = Interpreter(debug_level=3, debug_file=str(trace))
    interp.run(parse_source('चर a = 1; यदि (a) a = 2;'))
    lines = trace.read_text(encoding='utf-8').splitlines()
    assert 'declare a: Number = 1.0' in lines
    assert 'if condition 1.0 -> True' in lines
    assert 'assign a: Number = 2.0' in lines
    assert interp.debug_fp is None


def test_no_trace_file_without_debug_level(tmp_path):
    trace = tmp_path / 'debug.txt'
    Interpreter(debug_file=str(trace)).run(parse_source('चर a = 1;'))
    assert not trace.exists()


def test_small_numbers_print_without_exponent(capsys):
    assert output('कथय 0.0000001; कथय 1 / 1000000000;', capsys) == ['0.0000001', '0.000000001']


def test_deeply_nested_source_is_a_parse_error():
    source = 'कथय ' + '(' * 200 + '1' + ')' * 200 + ';'
    with pytest.raises(ParseError) as info:
        run_program(source)
    assert info.value.message.endswith('Too much nesting.')


def test_deeply_nested_tree_is_a_runtime_error():
    expr = Literal(1.0)
    for _ in range(sys.getrecursionlimit() + 100):
        expr = Unary('-', expr, 1)
    with pytest.raises(LoxRuntimeError) as info:
        Interpreter().run(Program([Print(expr)]))
    assert info.value.err.name == 'RecursionError'


def test_run_file(tmp_path, capsys):
    path = tmp_path / 'prog.skt'
    path.write_text('चर नाम = "विश्व"; कथय नाम;', encoding='utf-8')
    interp = run_file(str(path))
    assert capsys.readouterr().out == 'विश्व\n'
    assert interp.global_env.values['नाम'] == 'विश्व'
