"""
Тесты для Operand и Mantissa/Scale Decomposition

Проверяет:
1. Разбор raw операндов в tagged variant
2. Отказ на некорректных операндах (InvalidOperand)
3. Разложение чисел в (mantissa, scale)
4. Percent-операнды через decompose
5. Восстановление значения из пары
"""

import math

import pytest
from pydantic import ValidationError

from src.core.math.decomposition import DecimalValue, decompose_number
from src.core.math.operands import (
    ExactArithmeticError,
    InvalidOperand,
    Operand,
    OperandKind,
    parse_decimal_literal,
)
from src.core.math.operators import decompose, resolve_operand, resolve_percent


# =============================================================================
# ТЕСТЫ OPERAND
# =============================================================================


class TestOperandParse:
    """Тесты для Operand.parse"""

    def test_numbers(self) -> None:
        """int и float → NUMBER"""
        assert Operand.parse(3) == Operand(kind=OperandKind.NUMBER, value=3)
        assert Operand.parse(0.1) == Operand(kind=OperandKind.NUMBER, value=0.1)

    def test_int_type_preserved(self) -> None:
        """int остаётся int внутри модели"""
        assert isinstance(Operand.parse(3).value, int)
        assert isinstance(Operand.parse("3").value, int)
        assert isinstance(Operand.parse("3.5").value, float)

    def test_percent_literal(self) -> None:
        """'<decimal>%' → PERCENT с литералом до деления на 100"""
        operand = Operand.parse("50%")
        assert operand.kind is OperandKind.PERCENT
        assert operand.value == 50

        operand = Operand.parse(" -12.5% ")
        assert operand.kind is OperandKind.PERCENT
        assert operand.value == -12.5

    def test_numeric_string(self) -> None:
        """Числовая строка без маркера → NUMBER"""
        assert Operand.parse("0.25") == Operand.number(0.25)
        assert Operand.parse("1e-8") == Operand.number(1e-8)

    def test_operand_passthrough(self) -> None:
        """Готовый Operand возвращается как есть"""
        operand = Operand.percent(10)
        assert Operand.parse(operand) is operand

    @pytest.mark.parametrize("raw", ["%", "abc%", "5%%", "%5", "12.3.4%", "", "abc", "1e400"])
    def test_malformed_strings_raise(self, raw: str) -> None:
        """Некорректные строки → InvalidOperand"""
        with pytest.raises(InvalidOperand):
            Operand.parse(raw)

    @pytest.mark.parametrize("raw", [math.nan, math.inf, -math.inf, True, None, [1], object()])
    def test_invalid_values_raise(self, raw) -> None:
        """NaN/Inf, bool и прочие типы → InvalidOperand"""
        with pytest.raises(InvalidOperand):
            Operand.parse(raw)

    def test_invalid_operand_is_value_error(self) -> None:
        """InvalidOperand ловится как ValueError и как базовая ошибка"""
        with pytest.raises(ValueError):
            Operand.parse("x%")
        with pytest.raises(ExactArithmeticError):
            Operand.parse("x%")

    def test_operand_is_frozen(self) -> None:
        """Operand неизменяем"""
        operand = Operand.number(1)
        with pytest.raises(ValidationError):
            operand.value = 2


class TestParseDecimalLiteral:
    """Тесты для parse_decimal_literal"""

    def test_literals(self) -> None:
        assert parse_decimal_literal("12") == 12
        assert parse_decimal_literal("-0.5") == -0.5
        assert parse_decimal_literal(".5") == 0.5
        assert parse_decimal_literal("+3.") == 3.0
        assert parse_decimal_literal("1.5e-7") == 1.5e-7

    def test_big_integer_literal_is_exact(self) -> None:
        """Целые литералы не теряют точность"""
        assert parse_decimal_literal("123456789012345678901234567890") == (
            123456789012345678901234567890
        )


# =============================================================================
# ТЕСТЫ DECOMPOSITION
# =============================================================================


class TestDecomposeNumber:
    """Тесты для decompose_number"""

    @pytest.mark.parametrize("value", [0, 1, -1, 42, -987, 10**20])
    def test_integers_have_unit_scale(self, value: int) -> None:
        """decompose(n) = (n, 1) для целых"""
        assert decompose_number(value) == DecimalValue(mantissa=value, scale=1)

    def test_integral_float_has_unit_scale(self) -> None:
        """Integral float → int мантисса, scale 1"""
        result = decompose_number(7.0)
        assert result == DecimalValue(7, 1)
        assert isinstance(result.mantissa, int)

    def test_fractions(self) -> None:
        """Обычные дроби"""
        assert decompose_number(0.11) == DecimalValue(11, 100)
        assert decompose_number(1.1) == DecimalValue(11, 10)
        assert decompose_number(-0.5) == DecimalValue(-5, 10)
        assert decompose_number(123.456) == DecimalValue(123456, 1000)

    def test_scientific_values(self) -> None:
        """Значения, печатающиеся в научной нотации"""
        assert decompose_number(1e-8) == DecimalValue(1, 10**8)
        assert decompose_number(-1.5e-7) == DecimalValue(-15, 10**8)

    def test_scale_is_power_of_ten(self) -> None:
        """scale ∈ {1, 10, 100, ...}"""
        for value in [0.5, 0.25, 0.125, 3.14159, 1e-12]:
            scale = decompose_number(value).scale
            assert scale >= 1
            assert str(scale) == "1" + "0" * (len(str(scale)) - 1)

    @pytest.mark.parametrize(
        "value",
        [0.1, 0.2, 0.3, 1.005, 2.675, 123.456789012345, -0.000123, 9.87654321e-9],
    )
    def test_round_trip(self, value: float) -> None:
        """mantissa / scale восстанавливает исходное значение"""
        pair = decompose_number(value)
        assert pair.mantissa / pair.scale == value
        assert pair.value == value

    def test_value_property_prefers_int(self) -> None:
        """DecimalValue.value → int при делении нацело"""
        assert DecimalValue(250, 10).value == 25
        assert isinstance(DecimalValue(250, 10).value, int)
        assert DecimalValue(25, 10).value == 2.5

    @pytest.mark.parametrize("value", [math.nan, math.inf, "0.5", True])
    def test_invalid_input_raises(self, value) -> None:
        """Только конечные числа"""
        with pytest.raises(InvalidOperand):
            decompose_number(value)


class TestDecomposeOperand:
    """Тесты для decompose / Percent Resolver"""

    def test_percent_resolved_before_decomposition(self) -> None:
        """'25%' → 0.25 → (25, 100)"""
        assert decompose("25%") == DecimalValue(25, 100)
        assert decompose("100%") == DecimalValue(1, 1)

    def test_resolve_percent_exact(self) -> None:
        """Деление на 100 выполняется точно"""
        assert resolve_percent(Operand.percent(50)) == 0.5
        assert resolve_percent(Operand.percent(12.5)) == 0.125
        assert resolve_percent(Operand.percent(0.7)) == 0.007
        assert resolve_percent(Operand.percent(300)) == 3

    def test_resolve_operand(self) -> None:
        """NUMBER возвращается как есть, PERCENT разрешается"""
        assert resolve_operand(0.3) == 0.3
        assert resolve_operand("7%") == 0.07
        assert resolve_operand("-50%") == -0.5

    def test_percent_matches_plain_number(self) -> None:
        """decompose('50%') == decompose(0.5)"""
        assert decompose("50%") == decompose(0.5)
