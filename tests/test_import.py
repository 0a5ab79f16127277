import pytest

from sigmo.errors import SigmoLoadError
from sigmo.loader import load_file, read_source
from sigmo.types.context import Context
from sigmo.types.value import Atom, NIL, is_error


@pytest.fixture
def lib_root(tmp_path, monkeypatch):
    monkeypatch.setenv("SIGMO_ROOT", str(tmp_path))
    monkeypatch.delenv("SIGMO_EXT", raising=False)
    return tmp_path


def test_import_by_identifier_evaluates_in_current_context(itp, lib_root):
    (lib_root / "lib.mo").write_text("(def answer 42)\n(def half (/ answer 2))\n")
    assert itp.eval("(import lib)") == Atom("int", 21)
    assert itp.eval("answer") == Atom("int", 42)


def test_import_nested_path(itp, lib_root):
    (lib_root / "core").mkdir()
    (lib_root / "core" / "math.mo").write_text("(namespace core/math (def pi 3.14))")
    itp.eval("(import core/math)")
    assert itp.eval("core/math/pi") == Atom("float", 3.14)


def test_import_by_string_path(itp, tmp_path):
    path = tmp_path / "direct.lisp"
    path.write_text("(def direct true)")
    itp.eval(f'(import "{path}")')
    assert itp.eval("direct") == Atom("bool", True)


def test_import_uses_configured_extension(itp, lib_root, monkeypatch):
    monkeypatch.setenv("SIGMO_EXT", "lisp")
    (lib_root / "other.lisp").write_text("(def other 1)")
    assert itp.eval("(import other)") == Atom("int", 1)


def test_import_inside_function_binds_in_call_context(itp, lib_root):
    (lib_root / "inner.mo").write_text("(def hidden 1)")
    itp.eval("(def load-it (lambda () (do (import inner) hidden)))")
    assert itp.eval("(load-it)") == Atom("int", 1)
    assert is_error(itp.eval("hidden"))


def test_import_empty_file_is_nil(itp, lib_root):
    (lib_root / "empty.mo").write_text("; nothing here\n")
    assert itp.eval("(import empty)") is NIL


def test_import_missing_file_is_an_error_value(itp, lib_root):
    result = itp.eval("(import missing)")
    assert is_error(result)
    assert result.value.startswith(f"error during import of '{lib_root / 'missing.mo'}'")


def test_import_parse_failure_is_an_error_value(itp, lib_root):
    (lib_root / "broken.mo").write_text("(def x")
    result = itp.eval("(import broken)")
    assert is_error(result)
    assert "Unexpected end of input" in result.value


def test_import_returns_first_evaluation_error(itp, lib_root):
    (lib_root / "fails.mo").write_text("(def before 1)\n(undefined-fn)\n(def after 2)")
    assert itp.eval("(import fails)").value == "Unknown identifier 'undefined-fn'"
    assert itp.eval("before") == Atom("int", 1)
    assert is_error(itp.eval("after"))


def test_import_errors_can_be_guarded(itp, lib_root):
    assert itp.eval("(guard (import missing))") is NIL


def test_import_argument_type(itp):
    result = itp.eval("(import 5)")
    assert result.value == "import expected argument 0 of type 'identifier|string', got type 'int'"


# -------------------------------
# Batch loading
# -------------------------------
def test_read_source(tmp_path):
    path = tmp_path / "a.mo"
    path.write_text("(+ 1 2)")
    assert read_source(path) == "(+ 1 2)"


def test_load_file_returns_last_value(tmp_path):
    path = tmp_path / "ok.mo"
    path.write_text("(def a 1)\n(do a)")
    ctx = Context()
    assert load_file(path, ctx) == Atom("int", 1)
    assert ctx.get("a") == Atom("int", 1)


def test_interpreter_load(itp, tmp_path):
    path = tmp_path / "ok.mo"
    path.write_text("(def a 1)\n(+ a 1)")
    assert itp.load(path) == Atom("int", 2)
    assert itp.eval("a") == Atom("int", 1)


@pytest.mark.parametrize(
    "content,message",
    [
        ("(undefined)", "Unknown identifier 'undefined'"),
        ("(def x", "cannot parse"),
    ]
)
def test_load_failures_are_fatal(itp, tmp_path, content, message):
    path = tmp_path / "bad.mo"
    path.write_text(content)
    with pytest.raises(SigmoLoadError, match=message):
        itp.load(path)


def test_load_missing_file_is_fatal(itp, tmp_path):
    with pytest.raises(SigmoLoadError, match="cannot read"):
        itp.load(tmp_path / "nope.mo")
