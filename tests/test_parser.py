import pytest

from sanskriti.ast import (
    Assign, Binary, Block, ExprStmt, Grouping, If, Literal, Logical, Print,
    Unary, VarDecl, Variable, While,
)
from sanskriti.errors import ParseError
from sanskriti.interpreter import parse_source, parse_source_expression
from sanskriti.printer import format_expr, format_stmt
from sanskriti.types import NIL


def sexpr(source):
    return format_expr(parse_source_expression(source))


def test_precedence():
    assert sexpr('2 + 3 * 4') == '(+ 2 (* 3 4))'
    assert sexpr('(2 + 3) * 4') == '(* (group (+ 2 3)) 4)'


def test_left_associativity():
    assert sexpr('10 - 3 - 2') == '(- (- 10 3) 2)'
    assert sexpr('8 / 4 / 2') == '(/ (/ 8 4) 2)'


def test_comparison_and_equality_levels():
    assert sexpr('1 < 2 == 3 >= 4') == '(== (< 1 2) (>= 3 4))'


def test_logical_levels():
    assert sexpr('a or b and c') == '(or a (and b c))'
    assert sexpr('क विकल्प ख च ग') == '(or क (and ख ग))'


def test_unary_is_right_associative():
    assert sexpr('!!सत्य') == '(! (! true))'
    assert sexpr('--1') == '(- (- 1))'


def test_assignment_is_right_associative():
    expr = parse_source_expression('a = b = 1')
    assert expr == Assign('a', Assign('b', Literal(1.0), 1), 1)
    assert format_expr(expr) == '(= a (= b 1))'


def test_literals():
    assert parse_source_expression('नेति') == Literal(NIL)
    assert parse_source_expression('असत्य') == Literal(False)
    assert parse_source_expression('"पाठ"') == Literal('पाठ')
    assert sexpr('2.5') == '2.5'


def test_invalid_assignment_target():
    with pytest.raises(ParseError) as info:
        parse_source_expression('a + b = 3')
    assert info.value.token.lexeme == '='
    assert 'Invalid assignment target' in info.value.message


def test_unmatched_paren():
    with pytest.raises(ParseError) as info:
        parse_source_expression('(1 + 2')
    assert info.value.message == "Error at end: Expect ')' after expression."


def test_token_that_starts_no_expression():
    with pytest.raises(ParseError) as info:
        parse_source_expression('\n* 3')
    assert info.value.line == 2
    assert info.value.expected == 'Expect expression.'


def test_expression_mode_rejects_trailing_tokens():
    with pytest.raises(ParseError):
        parse_source_expression('1 2')


def test_program_statements():
    program = parse_source('चर a = 1; कथय a; a = 2; { चर b; }')
    assert program.body == [
        VarDecl('a', Literal(1.0), 1),
        Print(Variable('a', 1)),
        ExprStmt(Assign('a', Literal(2.0), 1)),
        Block([VarDecl('b', None, 1)]),
    ]


def test_semicolon_optional_before_brace_and_end():
    program = parse_source('यदि (x) { कथय 1 } कथय 2')
    assert program.body == [
        If(Variable('x', 1), Block([Print(Literal(1.0))]), None),
        Print(Literal(2.0)),
    ]


def test_missing_semicolon_between_statements():
    with pytest.raises(ParseError) as info:
        parse_source('कथय 1 कथय 2')
    assert info.value.expected == "Expect ';' after value."


def test_stray_semicolons_are_skipped():
    program = parse_source(';; कथय 1;; { ; } ;')
    assert program.body == [Print(Literal(1.0)), Block([])]


def test_dangling_else_binds_to_nearest_if():
    program = parse_source('यदि (a) यदि (b) कथय 1; अथ्वा कथय 2;')
    outer = program.body[0]
    assert outer.else_branch is None
    assert outer.then_branch.else_branch == Print(Literal(2.0))


def test_while_statement():
    program = parse_source('यावद (i < 3) i = i + 1;')
    assert program.body == [
        While(
            Binary('<', Variable('i', 1), Literal(3.0), 1),
            ExprStmt(Assign('i', Binary('+', Variable('i', 1), Literal(1.0), 1), 1)),
        )
    ]


def test_for_loop_is_desugared():
    program = parse_source('पुरा (चर i = 0; i < 2; i = i + 1) कथय i;')
    assert format_stmt(program.body[0]) == (
        '(block (var i 0) (while (< i 2) (block (print i) (expr (= i (+ i 1))))))'
    )


def test_for_loop_without_clauses():
    program = parse_source('पुरा (;;) { }')
    assert program.body == [While(Literal(True), Block([]))]


def test_operator_lines_are_recorded():
    expr = parse_source_expression('1 +\n\n-x')
    assert expr == Binary('+', Literal(1.0), Unary('-', Variable('x', 3), 3), 1)


def test_grouping_node():
    assert parse_source_expression('(a)') == Grouping(Variable('a', 1))


def test_logical_node():
    assert parse_source_expression('a च b') == Logical('and', Variable('a', 1), Variable('b', 1), 1)


@pytest.mark.parametrize('source', ['विनियोग f() {}', 'देयम 1;', 'श्रेणी A {}', 'कथय यह;', 'कथय महा;'])
def test_unsupported_constructs(source):
    with pytest.raises(ParseError) as info:
        parse_source(source)
    assert 'not supported' in info.value.message


def test_unterminated_block():
    with pytest.raises(ParseError) as info:
        parse_source('{ कथय 1;')
    assert info.value.expected == "Expect '}' after block."
