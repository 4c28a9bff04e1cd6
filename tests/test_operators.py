from __future__ import annotations

import pytest

from tests.support.harness import run_runtime_case

SCENARIOS = [
    pytest.param("5 + 5 + 5 + 5 - 10", ("int", 10), id="sum-chain"),
    pytest.param("2 * 2 * 2 * 2 * 2", ("int", 32), id="product-chain"),
    pytest.param("-50 + 100 + -50", ("int", 0), id="negative-operands"),
    pytest.param("5 * 2 + 10", ("int", 20), id="product-then-sum"),
    pytest.param("5 + 2 * 10", ("int", 25), id="sum-then-product"),
    pytest.param("50 / 2 * 2 + 10", ("int", 60), id="div-mul-left-assoc"),
    pytest.param("2 * (5 + 10)", ("int", 30), id="grouped-sum"),
    pytest.param("(5 + 10 * 2 + 15 / 3) * 2 + -10", ("int", 50), id="mixed-arith"),
    pytest.param("--5", ("int", 5), id="double-negation"),
    pytest.param("1 < 2", ("bool", True), id="lt-true"),
    pytest.param("1 > 2", ("bool", False), id="gt-false"),
    pytest.param("1 < 1", ("bool", False), id="lt-equal"),
    pytest.param("1 == 1", ("bool", True), id="int-eq"),
    pytest.param("1 != 2", ("bool", True), id="int-neq"),
    pytest.param("true == true", ("bool", True), id="bool-eq"),
    pytest.param("true != false", ("bool", True), id="bool-neq"),
    pytest.param("false == true", ("bool", False), id="bool-eq-false"),
    pytest.param("(1 < 2) == true", ("bool", True), id="compare-then-eq"),
    pytest.param("(1 > 2) == true", ("bool", False), id="compare-then-eq-false"),
    pytest.param("!true", ("bool", False), id="bang-true"),
    pytest.param("!false", ("bool", True), id="bang-false"),
    pytest.param("!5", ("bool", False), id="bang-int-truthy"),
    pytest.param("!0", ("bool", False), id="bang-zero-truthy"),
    pytest.param("!!5", ("bool", True), id="double-bang"),
    pytest.param('!""', ("bool", False), id="bang-empty-string"),
    pytest.param("![]", ("bool", False), id="bang-empty-array"),
    pytest.param("!if (false) { 1 }", ("bool", True), id="bang-null"),
    pytest.param('"a" == "a"', ("bool", True), id="string-eq"),
    pytest.param('"a" != "b"', ("bool", True), id="string-neq"),
    pytest.param('"Hello" + " " + "World!"', ("string", "Hello World!"), id="string-concat"),
    pytest.param("5 + true", ("error", "type mismatch: INTEGER + BOOLEAN"), id="int-plus-bool"),
    pytest.param('5 + "5"', ("error", "type mismatch: INTEGER + STRING"), id="int-plus-string"),
    pytest.param('1 == "1"', ("error", "type mismatch: INTEGER == STRING"), id="eq-across-types"),
    pytest.param("1 != true", ("error", "type mismatch: INTEGER != BOOLEAN"), id="neq-across-types"),
    pytest.param("-true", ("error", "unknown operator: -BOOLEAN"), id="minus-bool"),
    pytest.param('-"a"', ("error", "unknown operator: -STRING"), id="minus-string"),
    pytest.param("true + false", ("error", "unknown operator: BOOLEAN + BOOLEAN"), id="bool-plus"),
    pytest.param("true < false", ("error", "unknown operator: BOOLEAN < BOOLEAN"), id="bool-lt"),
    pytest.param('"a" - "b"', ("error", "unknown operator: STRING - STRING"), id="string-minus"),
    pytest.param('"a" < "b"', ("error", "unknown operator: STRING < STRING"), id="string-lt"),
    pytest.param("[1] + [2]", ("error", "unknown operator: ARRAY + ARRAY"), id="array-plus"),
    pytest.param("[1] == [1]", ("error", "unknown operator: ARRAY == ARRAY"), id="array-eq"),
    pytest.param(
        "let f = fn() { 1 }; f == f",
        ("error", "unknown operator: FUNCTION == FUNCTION"),
        id="fn-eq",
    ),
]


@pytest.mark.parametrize("source, expectation", SCENARIOS)
def test_operators(source: str, expectation) -> None:
    run_runtime_case(source, expectation)
