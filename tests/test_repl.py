import io

import pytest

from derivator import repl


@pytest.fixture
def streams():
    return io.StringIO(), io.StringIO()


@pytest.mark.parametrize("line", ["exit", "EXIT", "  Exit  "])
def test_exit(streams, line):
    out, err = streams
    assert repl.run_line(line, out, err) is False
    assert out.getvalue() == "bye\n"


def test_full_run(streams):
    out, err = streams
    assert repl.run_line("x * x", out, err) is True
    text = out.getvalue()
    assert "tokens read: [('VAR', 'x'), ('OP', '*'), ('VAR', 'x')]" in text
    assert "input read as: x * x\nMul\n ├─x\n ╰─x\n" in text
    assert "derivative calculated: x * 1 + x * 1" in text
    assert "derivative simplified to: x + x" in text
    assert err.getvalue() == ""


def test_blank_line_is_ignored(streams):
    out, err = streams
    assert repl.run_line("   ", out, err) is True
    assert out.getvalue() == err.getvalue() == ""


def test_lex_error(streams):
    out, err = streams
    assert repl.run_line("x # 1", out, err) is True
    assert err.getvalue().startswith("lex error:")
    assert out.getvalue() == ""


def test_parse_error(streams):
    out, err = streams
    assert repl.run_line("1 2", out, err) is True
    assert err.getvalue().startswith("parse error: UnexpectedTokens")


def test_evaluation_error_prints_completed_stages(streams):
    out, err = streams
    assert repl.run_line("x / 0", out, err) is True
    assert "input read as: x / 0" in out.getvalue()
    assert "input simplified to" not in out.getvalue()
    assert err.getvalue().startswith("evaluation error: DivisionByZero")


def test_main_loop(monkeypatch, capsys):
    lines = iter(["sin(x)", "exit", "never read"])
    monkeypatch.setattr("builtins.input", lambda prompt="": next(lines))
    repl.main()
    captured = capsys.readouterr()
    assert "derivative simplified to: cos(x)" in captured.out
    assert captured.out.rstrip().endswith("bye")
    assert next(lines) == "never read"


def test_main_stops_at_end_of_input(monkeypatch, capsys):
    def fake_input(prompt=""):
        raise EOFError

    monkeypatch.setattr("builtins.input", fake_input)
    repl.main()
    assert capsys.readouterr().out == ""


def test_deeply_nested_input_is_reported(streams):
    out, err = streams
    assert repl.run_line("(" * 5000 + "x" + ")" * 5000, out, err) is True
    assert err.getvalue().startswith("parse error: NestingTooDeep")
    assert repl.run_line("exit", out, err) is False


def test_recursion_in_later_stages_is_reported(streams, monkeypatch):
    out, err = streams

    def too_deep(expr, variable=None):
        raise RecursionError("maximum recursion depth exceeded")

    monkeypatch.setattr(repl, "derive_expr", too_deep)
    assert repl.run_line("x", out, err) is True
    assert err.getvalue() == "evaluation error: expression nested too deeply\n"
