import pytest

from sigmo.builtin.env_builtin import BUILTINS, ALIASES
from sigmo.types.value import NIL, is_error


@pytest.mark.parametrize(
    "source,expected",
    [
        # arithmetic
        ("(+ 1 2 3)", "6"),
        ("(+ 1 2.5)", "3.5"),
        ("(- 10 4)", "6"),
        ("(* 2 3 4)", "24"),
        ("(/ 7 2)", "3"),
        ("(mod 7 3)", "1"),
        ("(mod -7 3)", "-1"),
        ("(add 1 2)", "3"),
        ("(sub 1 2)", "-1"),
        ("(mul 2 2)", "4"),
        ("(div 4 2)", "2"),
        # comparison
        ("(lt 1 2)", "true"),
        ("(lte 3 2)", "false"),
        ("(gt 1 2)", "false"),
        ("(gte 2 2.0)", "true"),
        ("(< 1 2)", "true"),
        ("(> 1 2)", "false"),
        ("(eq 1 1)", "true"),
        ("(eq 1 1.0)", "false"),
        ("(eq '(1 2) (list 1 2))", "true"),
        ("(eq nil nil)", "true"),
        ("(neq \"a\" \"b\")", "true"),
        ("(= 1 1)", "true"),
        ("(equal \"a\" \"a\")", "true"),
        # logic
        ("(and true true false)", "false"),
        ("(or false true)", "true"),
        ("(xor true false)", "true"),
        ("(xor true true)", "false"),
        ("(xor false false)", "false"),
        ("(not 0)", "true"),
        ("(! true)", "false"),
        # strings
        ("(cat \"a\" \"b\" \"c\")", '"abc"'),
        ("(trim \"--x--\" \"-\")", '"x"'),
        ("(join '(1 \"b\" 3) \", \")", '"1, b, 3"'),
        ("(split \"a,b,c\" \",\")", '("a" "b" "c")'),
        ("(split-n \"a,b,c\" \",\" 2)", '("a" "b,c")'),
        ("(split-n \"a,b,c\" \",\" -1)", '("a" "b" "c")'),
        ("(parse-int \"42\")", "42"),
        ("(parse-float \"2.5\")", "2.5"),
        # lists
        ("(list 1 2 3)", "(1 2 3)"),
        ("(list)", "()"),
        ("(head '(1 2 3))", "1"),
        ("(first '(1 2 3))", "1"),
        ("(tail '(1 2 3))", "(2 3)"),
        ("(rest '(1))", "()"),
        ("(cons 1 '(2 3))", "(1 2 3)"),
        ("(cons '(1) 2)", "(1 2)"),
        ("(rev '(1 2 3))", "(3 2 1)"),
        ("(rev \"abc\")", '"cba"'),
        ("(len '(1 2))", "2"),
        ("(len \"abc\")", "3"),
        ("(len {\"a\" 1 :b 2})", "2"),
        ("(get '(1 2 3) 0)", "1"),
        ("(get '(1 2 3) -1)", "3"),
        # evaluation
        ("(exec '(+ 1 2))", "3"),
        ("(eval \"(+ 1 2)\")", "3"),
        # hashes
        ("(hget {\"a\" 1} \"a\")", "1"),
        ("(hget {:k 1} :k)", "1"),
        ("(hget {\"a\" 1} \"z\")", "nil"),
        ("(hcontains {\"a\" 1} \"a\")", "true"),
        ("(hcontains {\"a\" 1} :a)", "false"),
        # types & conversions
        ("(type 1)", "#int"),
        ("(type '(1))", "#list"),
        ("(type \"s\")", "#string"),
        ("(type +)", "#function"),
        ("(int 3.9)", "3"),
        ("(int \"12\")", "12"),
        ("(float 2)", "2.0"),
        ("(string 12)", '"12"'),
        ("(string (list 1 \"a\"))", '"(1 "a")"'),
        ("(bool 0)", "false"),
        ("(bool \"x\")", "true"),
        ("(floor 2.7)", "2.0"),
        ("(ceil 2.1)", "3.0"),
    ]
)
def test_builtin(itp, source, expected):
    result = itp.eval(source)
    assert not is_error(result), result
    assert str(result) == expected


@pytest.mark.parametrize(
    "source,message",
    [
        ("(head '())", "Cannot take the head of an empty list"),
        ("(get '(1) 5)", "Index '5' out of list bounds."),
        ("(get '(1) -2)", "Index '-2' out of list bounds."),
        ("(/ 1 0)", "Division by zero"),
        ("(mod 1 0)", "Division by zero"),
        ("(parse-int \"x\")", "Could not convert string 'x' to an integer."),
        ("(parse-float \"x\")", "Could not convert string 'x' to a float."),
        ("(split \"abc\" \"\")", "Cannot split on an empty separator"),
        ("(eval \"(\")", "Unexpected end of input (1 unclosed '(')."),
        ("(eval \"(undefined)\")", "Unknown identifier 'undefined'"),
        ("(len 5)", "Function 'len' expected argument 0 of type 'list|string|hash', got type 'int'."),
        ("(- 1)", "Function '-' expected 2 args, only got 1."),
        ("(not 1 2)", "Function 'not' expected 1 args, but got 2."),
        ("(floor (parse-float \"inf\"))", "Cannot round 'inf'."),
        ("(ceil (parse-float \"-inf\"))", "Cannot round '-inf'."),
        ("(ceil (parse-float \"nan\"))", "Cannot round 'nan'."),
        ("(int (parse-float \"nan\"))", "Cannot convert 'nan' to an integer."),
    ]
)
def test_builtin_errors(itp, source, message):
    result = itp.eval(source)
    assert is_error(result)
    assert result.value == message


def test_print_and_println(itp, capsys):
    assert itp.eval('(print "a" 1)') is NIL
    assert itp.eval('(println "b" (list 1 "c"))') is NIL
    assert itp.eval("(println)") is NIL
    assert capsys.readouterr().out == 'a 1b (1 "c")\n\n'


def test_hset_mutates_in_place(run):
    run('(def h {"a" 1})')
    assert str(run('(hset! h :b 2)')) == '{"a" 1 :b 2}'
    assert str(run("(hget h :b)")) == "2"


def test_cons_does_not_mutate_operands(run):
    run("(def xs (list 1))", "(cons xs 2)")
    assert str(run("xs")) == "(1)"


def test_exec_evaluates_in_caller_context(run):
    run("(def code '(def y 5))", "(exec code)")
    assert str(run("y")) == "5"
    assert str(run("code")) == "'(def y 5)"


def test_eval_in_caller_context(run):
    run('(eval "(def z 3)")')
    assert str(run("z")) == "3"


def test_aliases_share_the_function():
    for alias, target in ALIASES.items():
        assert target in BUILTINS, alias


def test_alias_is_same_object(itp):
    assert itp.eval("first") is itp.eval("head")
