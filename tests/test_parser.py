"""Tests for command and prefix-expression parsing."""

import pytest

from fieldcalc.common import CompositeModuloError, InvalidSyntaxError
from fieldcalc.repl import TypeSpec, ValueType, parse_command, parse_expression
from fieldcalc.repl.parser import BinaryOp, Literal, UnaryOp, Variable


class TestTypeSpec:

    def test_describe(self) -> None:
        assert TypeSpec(ValueType.RATIONAL).describe() == "Q"
        assert TypeSpec(ValueType.RESIDUE, 7).describe() == "Z 7"
        assert str(TypeSpec(ValueType.RATIONAL_MATRIX)) == "Matrix[Q]"
        assert TypeSpec(ValueType.RESIDUE_MATRIX, 7).describe() == "Matrix[Z 7]"

    def test_scalar_and_matrix(self) -> None:
        spec = TypeSpec(ValueType.RESIDUE, 5)
        assert spec.matrix() == TypeSpec(ValueType.RESIDUE_MATRIX, 5)
        assert spec.matrix().scalar() == spec
        assert TypeSpec(ValueType.RATIONAL).scalar() == TypeSpec(ValueType.RATIONAL)


class TestCommands:

    def test_exit(self) -> None:
        assert parse_command("EXIT").keyword == "EXIT"

    def test_define_rational(self) -> None:
        command = parse_command("DEF Q x")
        assert (command.keyword, command.type_spec, command.name) == (
            "DEF", TypeSpec(ValueType.RATIONAL), "x")

    def test_define_residue(self) -> None:
        command = parse_command("DEF Z 7 y")
        assert command.type_spec == TypeSpec(ValueType.RESIDUE, 7)
        assert command.name == "y"

    def test_define_matrix(self) -> None:
        command = parse_command("DEF Matrix[Z 13] 2 3 M")
        assert command.type_spec == TypeSpec(ValueType.RESIDUE_MATRIX, 13)
        assert (command.height, command.width, command.name) == (2, 3, "M")

    def test_define_rational_matrix(self) -> None:
        command = parse_command("DEF Matrix [ Q ] 1 1 A")
        assert command.type_spec == TypeSpec(ValueType.RATIONAL_MATRIX)

    def test_eval(self) -> None:
        assert parse_command("EVAL Matrix[Q]").type_spec == TypeSpec(ValueType.RATIONAL_MATRIX)
        assert parse_command("EVAL Z 11").type_spec == TypeSpec(ValueType.RESIDUE, 11)

    def test_composite_modulus(self) -> None:
        with pytest.raises(CompositeModuloError):
            parse_command("DEF Z 4 x")
        with pytest.raises(CompositeModuloError):
            parse_command("EVAL Matrix[Z 1]")

    @pytest.mark.parametrize("line", [
        "",
        "def Q x",
        "PRINT x",
        "EXIT now",
        "DEF Q",
        "DEF Q 3",
        "DEF R x",
        "DEF Z x",
        "DEF Z -7 x",
        "DEF Q x y",
        "DEF Matrix[Q] 2 A",
        "DEF Matrix[Q] 0 2 A",
        "DEF Matrix[Q 2 2 A",
        "DEF Matrix Q 2 2 A",
        "EVAL",
        "EVAL Q x",
    ])
    def test_malformed(self, line: str) -> None:
        with pytest.raises(InvalidSyntaxError):
            parse_command(line)

    @pytest.mark.parametrize("name", ["det", "pow", "Q", "Matrix", "EVAL"])
    def test_reserved_names(self, name: str) -> None:
        with pytest.raises(InvalidSyntaxError):
            parse_command(f"DEF Q {name}")


class TestExpressions:

    def test_literal_and_variable(self) -> None:
        assert parse_expression("-3") == Literal("-3")
        assert parse_expression("x") == Variable("x")

    def test_nested_prefix(self) -> None:
        assert parse_expression("* 2 - x y") == BinaryOp(
            "*", Literal("2"), BinaryOp("-", Variable("x"), Variable("y")))

    def test_functions(self) -> None:
        assert parse_expression("det * A B") == UnaryOp(
            "det", BinaryOp("*", Variable("A"), Variable("B")))
        assert parse_expression("pow x 3") == BinaryOp("pow", Variable("x"), Literal("3"))
        assert parse_expression("scale / 1 2 A") == BinaryOp(
            "scale", BinaryOp("/", Literal("1"), Literal("2")), Variable("A"))

    def test_parentheses_group(self) -> None:
        assert parse_expression("+ (neg a) (b)") == BinaryOp(
            "+", UnaryOp("neg", Variable("a")), Variable("b"))

    @pytest.mark.parametrize("line", ["", "+ 1", "neg", "1 2", "+ 1 2 3", "(+ 1 2", ")", "[ x"])
    def test_malformed(self, line: str) -> None:
        with pytest.raises(InvalidSyntaxError):
            parse_expression(line)


class TestLargeLiterals:

    def test_modulus_with_thousands_of_digits(self) -> None:
        with pytest.raises(InvalidSyntaxError, match="below 2\\^32"):
            parse_command("EVAL Z " + "1" * 5000)

    def test_ten_digit_modulus_above_range(self) -> None:
        with pytest.raises(CompositeModuloError):
            parse_command("EVAL Z 4294967311")

    def test_largest_prime_modulus(self) -> None:
        assert parse_command("EVAL Z 4294967291").type_spec.modulo == 4294967291

    def test_leading_zeros_do_not_count(self) -> None:
        assert parse_command("EVAL Z " + "0" * 20 + "7").type_spec.modulo == 7

    def test_huge_dimension(self) -> None:
        with pytest.raises(InvalidSyntaxError):
            parse_command("DEF Matrix[Q] " + "9" * 5000 + " 1 A")
