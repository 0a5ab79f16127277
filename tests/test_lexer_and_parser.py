import pytest
from hypothesis import given, strategies as st

from sigmo.errors import SigmoSyntaxError
from sigmo.reader.lexer import tokenize
from sigmo.reader.parser import categorize, parse, read
from sigmo.types.value import Atom, TRUE, FALSE, NIL
from sigmo.types.list_value import List
from sigmo.types.hash_value import Hash


@pytest.mark.parametrize(
    "source,expected",
    [
        ("a", ["a"]),
        ("(a b c)", ["(", "a", "b", "c", ")"]),
        ("'(1 2)", ["'(", "1", "2", ")"]),
        ("(f)(g)", ["(", "f", ")", "(", "g", ")"]),
        ('"hello world"', ['"hello world"']),
        ('"a\\nb\\tc"', ['"a\nb\tc"']),
        ('"(not; a comment)"', ['"(not; a comment)"']),
        ('"[kept]"', ['"[kept]"']),
        ("a ; comment\nb", ["a", "b"]),
        ("a;comment\nb", ["a", "b"]),
        ("[a b]", ["a", "b"]),
        ('{"k" 1 :s 2}', ["{", '"k"', "1", ":s", "2", "}"]),
        ("a\r\nb\tc", ["a", "b", "c"]),
    ]
)
def test_tokenize(source, expected):
    assert tokenize(source) == expected


@pytest.mark.parametrize(
    "source",
    [
        "",
        "    ",
        "; comment only",
        '"unterminated',
    ]
)
def test_tokenize_edge_cases_no_crash(source):
    tokenize(source)


@pytest.mark.parametrize(
    "token,expected",
    [
        ("42", Atom("int", 42)),
        ("-7", Atom("int", -7)),
        ("3.14", Atom("float", 3.14)),
        ("1e3", Atom("float", 1000.0)),
        ("true", TRUE),
        ("false", FALSE),
        ("nil", NIL),
        ('"hi"', Atom("string", "hi")),
        ("foo", Atom("identifier", "foo")),
        ("set!", Atom("identifier", "set!")),
        ("+", Atom("identifier", "+")),
        ("foo-bar?", Atom("identifier", "foo-bar?")),
        ("core/math/pi", Atom("identifier", "core/math/pi")),
        (":key", Atom("symbol", ":key")),
        ("rest...", Atom("expansion", "rest")),
        ("#int", Atom("type", "int")),
        ("x#int", Atom("typed-id", "x#int")),
    ]
)
def test_categorize(token, expected):
    assert categorize(token) == expected


@pytest.mark.parametrize("token", ["@foo", "#", "a#", "#b#c", "...", "%", "\"a#b\"", "\"x...\""])
def test_categorize_invalid(token):
    with pytest.raises(SigmoSyntaxError, match="Invalid token"):
        categorize(token)


def test_parse_nested_lists():
    result = read("(a (b c))")
    assert result == [
        List([Atom("identifier", "a"), List([Atom("identifier", "b"), Atom("identifier", "c")])])
    ]
    assert str(result[0]) == "(a (b c))"


def test_parse_quoted_list():
    (form,) = read("'(1 (2))")
    assert form.quoted is True
    assert form.children[1].quoted is False
    assert str(form) == "'(1 (2))"


def test_parse_multiple_top_level_forms():
    forms = read("(a) (b) '(c)")
    assert [str(f) for f in forms] == ["(a)", "(b)", "'(c)"]


def test_parse_bare_atom():
    assert read("42") == [Atom("int", 42)]


def test_parse_hash_literal_keeps_raw_pairs():
    (h,) = read('{"a" 1 :b (+ 1 1)}')
    assert isinstance(h, Hash)
    assert [str(p) for p in h.pairs] == ['"a"', "1", ":b", "(+ 1 1)"]
    assert h.vals == {} and h.sym_vals == {}


@pytest.mark.parametrize(
    "source,message",
    [
        (")", "no matching open paren"),
        ("}", "no matching open bracket"),
        ("(}", "no matching open bracket"),
        ("{)", "no matching open paren"),
        ("(a", "Unexpected end of input"),
        ("{:a 1", "Unexpected end of input"),
        ("(a @b)", "Invalid token '@b'"),
    ]
)
def test_parse_errors(source, message):
    with pytest.raises(SigmoSyntaxError, match=message):
        read(source)


def test_parse_accepts_token_iterables():
    assert parse(iter(["(", "x", ")"])) == [List([Atom("identifier", "x")])]


# -------------------------------
# Properties
# -------------------------------
@given(st.integers())
def test_int_literals_read_back(n):
    assert read(str(n)) == [Atom("int", n)]


@given(st.floats(allow_nan=False, allow_infinity=False))
def test_float_render_is_stable(f):
    (atom,) = read(repr(f))
    assert atom.type == "float"
    assert atom.value == f
    assert str(atom) == repr(f)


@given(st.lists(st.integers(min_value=-10**6, max_value=10**6), max_size=10))
def test_int_list_render_round_trips(items):
    source = "(" + " ".join(str(i) for i in items) + ")"
    (form,) = read(source)
    assert str(form) == source


string_body = st.text(
    st.characters(blacklist_characters='"\\#.', blacklist_categories=("Cs",)),
    max_size=30,
)


@given(string_body)
def test_string_literals_read_back(text):
    assert read(f'"{text}"') == [Atom("string", text)]


@given(st.text(max_size=200))
def test_reader_never_crashes(text):
    tokens = tokenize(text)
    assert all(isinstance(t, str) and t for t in tokens)
    try:
        forms = parse(tokens)
    except SigmoSyntaxError:
        return
    assert isinstance(forms, list)
