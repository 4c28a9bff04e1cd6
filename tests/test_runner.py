from __future__ import annotations

import io
import logging
import sys
from textwrap import dedent

import pytest

from monkey_ref import runner
from monkey_ref.evaluator import eval_expr, eval_node
from monkey_ref.parser_rd import parse_source
from monkey_ref.runner import _load_source, main, repl_eval, run
from monkey_ref.runtime import NULL, MkError, MkInt, MkString
from monkey_ref.utils import debug_enabled, recursion_limit, render
from tests.support.harness import run_program


def test_bindings_persist_across_runs(frame) -> None:
    result, errors = run("let add = fn(a, b) { a + b }; let result = add(5, 10);", frame)
    assert errors == []
    assert result is NULL

    result, errors = run("result", frame)
    assert errors == []
    assert result == MkInt(15)


def test_function_defined_in_earlier_run(frame) -> None:
    run_program("let twice = fn(f, x) { f(f(x)) };", frame)
    run_program("let inc = fn(x) { x + 1 };", frame)

    assert run_program("twice(inc, 40)", frame) == MkInt(42)


def test_run_reports_every_syntax_error(frame) -> None:
    result, errors = run("let = 1; let x 2;", frame)

    assert result is NULL
    assert len(errors) == 2


def test_repl_eval_flags_trailing_let(frame) -> None:
    assert repl_eval("let a = 1;", frame) == (NULL, [], True)
    assert repl_eval("a", frame) == (MkInt(1), [], False)
    assert repl_eval("let b = 2; b", frame) == (MkInt(2), [], False)


def test_repl_eval_returns_parse_errors(frame) -> None:
    result, errors, is_stmt = repl_eval("let = 1", frame)

    assert result is NULL
    assert errors and not is_stmt


RENDER_CASES = [
    pytest.param("42", "42", id="int"),
    pytest.param("-7", "-7", id="negative-int"),
    pytest.param("true", "true", id="true"),
    pytest.param("1 > 2", "false", id="false"),
    pytest.param('"raw text"', "raw text", id="string-raw"),
    pytest.param("[1, [2, 3], true]", "[1, [2, 3], true]", id="array"),
    pytest.param("[]", "[]", id="empty-array"),
    pytest.param('{"b": 1, 2: [3], false: "x"}', "{b: 1, 2: [3], false: x}", id="hash-insertion-order"),
    pytest.param("{}", "{}", id="empty-hash"),
    pytest.param("fn(a, b) { a + b }", "<fn(a, b)>", id="function-opaque"),
    pytest.param("first", "<builtin first>", id="builtin"),
    pytest.param("if (false) { 1 }", "null", id="null"),
    pytest.param("1 + true", "ERROR: type mismatch: INTEGER + BOOLEAN", id="error"),
]


@pytest.mark.parametrize("source, expected", RENDER_CASES)
def test_render(source: str, expected: str) -> None:
    assert render(run_program(source)) == expected


def test_error_render_is_distinct() -> None:
    assert render(MkError("boom")) == "ERROR: boom"
    assert render(MkString("ERROR")) == "ERROR"


def test_load_source_reads_file(tmp_path) -> None:
    path = tmp_path / "prog.mk"
    path.write_text("let x = 1; x + 1", encoding="utf-8")

    assert _load_source(str(path)) == "let x = 1; x + 1"


def test_load_source_literal_fallback() -> None:
    assert _load_source("1 + 2") == "1 + 2"


def test_load_source_reads_stdin(monkeypatch) -> None:
    monkeypatch.setattr(sys, "stdin", io.StringIO("5 * 5"))

    assert _load_source("-") == "5 * 5"


def test_load_source_empty_stdin(monkeypatch) -> None:
    monkeypatch.setattr(sys, "stdin", io.StringIO(""))

    with pytest.raises(SystemExit):
        _load_source(None)


@pytest.fixture
def cli(monkeypatch, capsys):
    """Run main() with argv, returning (exit code, stdout, stderr)."""
    monkeypatch.delenv("MONKEY_DEBUG", raising=False)
    monkeypatch.delenv("MONKEY_RECURSION_LIMIT", raising=False)

    def _run(*argv: str):
        monkeypatch.setattr(sys, "argv", ["monkey", *argv])
        code = 0
        try:
            main()
        except SystemExit as exc:
            code = exc.code
        out, err = capsys.readouterr()
        return code, out, err

    return _run


def test_cli_prints_result(cli) -> None:
    assert cli("let x = 2; x * 21") == (0, "42\n", "")


def test_cli_runs_file(cli, tmp_path) -> None:
    path = tmp_path / "fib.mk"
    path.write_text(
        dedent(
            """\
            let fib = fn(n) { if (n < 2) { n } else { fib(n - 1) + fib(n - 2) } };
            fib(10)
            """
        ),
        encoding="utf-8",
    )

    assert cli(str(path)) == (0, "55\n", "")


def test_cli_reads_stdin(cli, monkeypatch) -> None:
    monkeypatch.setattr(sys, "stdin", io.StringIO('"from stdin"'))

    assert cli("-") == (0, "from stdin\n", "")


def test_cli_runtime_error_exits_nonzero(cli) -> None:
    code, out, err = cli("missing")

    assert code == 1
    assert out == ""
    assert err == "ERROR: identifier not found: missing\n"


def test_cli_syntax_errors_exit_nonzero(cli) -> None:
    code, out, err = cli("let = 1")

    assert code == 1
    assert out == ""
    assert err == "parse errors:\n\texpected next token to be identifier, got ASSIGN instead (line 1, col 5)\n"


def test_cli_ast_flag(cli) -> None:
    code, out, _ = cli("--ast", "x")

    assert code == 0
    assert out == "Program\n  .statements\n    ExpressionStatement\n      .value\n        Identifier name='x'\n"


def test_cli_rejects_extra_arguments(cli) -> None:
    code, _, _ = cli("1", "2")

    assert code == "Unexpected argument: 2"


def test_cli_rejects_unknown_option(cli) -> None:
    code, out, _ = cli("--foo", "1")

    assert code == "Unknown option: --foo"
    assert out == ""


def test_cli_negative_literal_is_source(cli) -> None:
    assert cli("-5") == (0, "-5\n", "")


def test_cli_help(cli) -> None:
    code, out, _ = cli("--help")

    assert code == 0
    assert out.startswith("usage: monkey")


def test_env_helpers(monkeypatch) -> None:
    monkeypatch.setenv("MONKEY_DEBUG", "yes")
    monkeypatch.setenv("MONKEY_RECURSION_LIMIT", " 5000 ")
    assert debug_enabled()
    assert recursion_limit() == 5000

    monkeypatch.setenv("MONKEY_DEBUG", "0")
    monkeypatch.setenv("MONKEY_RECURSION_LIMIT", "lots")
    assert not debug_enabled()
    assert recursion_limit() is None

    monkeypatch.setenv("MONKEY_RECURSION_LIMIT", "-1")
    assert recursion_limit() is None


def test_configure_host_applies_recursion_limit(monkeypatch) -> None:
    calls = []
    monkeypatch.delenv("MONKEY_DEBUG", raising=False)
    monkeypatch.setenv("MONKEY_RECURSION_LIMIT", "4321")
    monkeypatch.setattr(runner.sys, "setrecursionlimit", calls.append)

    runner.configure_host()

    assert calls == [4321]


def test_run_logs_at_debug(frame, caplog) -> None:
    with caplog.at_level(logging.DEBUG, logger="monkey_ref"):
        run("let = 1", frame)

    assert any("syntax error" in rec.getMessage() for rec in caplog.records)


def test_eval_expr_uses_fresh_global_frame() -> None:
    program, _ = parse_source('len("abc") + 1')

    assert eval_expr(program) == MkInt(4)


def test_eval_node_rejects_foreign_objects(frame) -> None:
    with pytest.raises(TypeError):
        eval_node(object(), frame)
