import pytest

from sigmo.repl import Repl, paren_balance, MAIN_PROMPT, INCOMPLETE_PROMPT


def make_repl(lines):
    """Repl fed from `lines`; returns (repl, prompts seen, output lines)."""
    prompts, output = [], []
    feed = iter(lines)

    def read_line(prompt):
        prompts.append(prompt)
        try:
            return next(feed)
        except StopIteration:
            raise EOFError

    return Repl(read_line=read_line, write=output.append), prompts, output


def run_lines(lines):
    repl, prompts, output = make_repl(lines)
    repl.run()
    return prompts, output


@pytest.mark.parametrize(
    "tokens,expected",
    [
        ([], 0),
        (["(", "a"], 1),
        (["'(", "(", ")"], 1),
        (["(", ")", ")"], -1),
        (['"("'], 0),
    ]
)
def test_paren_balance(tokens, expected):
    assert paren_balance(tokens) == expected


def test_echoes_results():
    prompts, output = run_lines(["(+ 1 2)"])
    assert output == ["3"]
    assert prompts == [MAIN_PROMPT, MAIN_PROMPT]


def test_multi_line_input_uses_continuation_prompt():
    prompts, output = run_lines(["(+ 1", "2)"])
    assert output == ["3"]
    assert prompts == [MAIN_PROMPT, INCOMPLETE_PROMPT, MAIN_PROMPT]


def test_quoted_list_across_lines():
    _, output = run_lines(["'(1", "2)"])
    assert output == ["'(1 2)"]


def test_nil_is_not_echoed():
    _, output = run_lines(["(if false 1)", "nil"])
    assert output == []


def test_session_state_persists():
    _, output = run_lines(["(def a 5)", "(* a 2)"])
    assert output == ["5", "10"]


def test_errors_are_reported_and_session_continues():
    _, output = run_lines(["undefined", "(+ 1 1)"])
    assert output == ["error: Unknown identifier 'undefined'", "2"]


def test_first_error_stops_the_rest_of_the_line():
    _, output = run_lines(["(def a 1) (undefined) (def b 2)", "b"])
    assert output == ["1", "error: Unknown identifier 'undefined'", "error: Unknown identifier 'b'"]


def test_syntax_errors_are_reported():
    _, output = run_lines([")", "(@)", "1"])
    assert output == [
        "error: Unexpected token ')' (no matching open paren).",
        "error: Invalid token '@'",
        "1",
    ]


def test_macro_splice_failure_is_reported():
    _, output = run_lines(["(macro bad (x) (list x...))", "(bad 1)", "1"])
    assert output[0] == "<macro bad>"
    assert output[1] == "error: Cannot splice 'x...': substitution is of type 'int', not 'list'"
    assert output[2] == "1"


def test_runaway_recursion_is_reported():
    _, output = run_lines(["(def loop (lambda (n) (loop n)))", "(loop 1)", "2"])
    assert output[1] == "error: maximum recursion depth exceeded"
    assert output[2] == "2"


def test_quit_ends_session():
    prompts, output = run_lines(["quit", "(+ 1 1)"])
    assert output == []
    assert prompts == [MAIN_PROMPT]


def test_blank_lines_are_skipped():
    _, output = run_lines(["", "   ", "7"])
    assert output == ["7"]


def test_rounding_non_finite_floats_is_reported():
    _, output = run_lines(['(ceil (parse-float "nan"))', "(+ 1 2)"])
    assert output == ["error: Cannot round 'nan'.", "3"]
