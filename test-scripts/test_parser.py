#!/usr/bin/env python3

import sys, io, warnings
sys.path.insert(0, ".")

from gramtype import ParseError, TokenizeError
from gramtype.grammar import Grammar
from gramtype.parser import Parser
from gramtype.grammars import get_grammar
from gramtype.ast import syneq, TERMINAL, NONTERMINAL
from gramtype.debug import Debug, TRACE
from gramtype import canon

def builtin (name) :
    return Grammar.loads(get_grammar(name))

def fails (parser, text, message=None, error=ParseError, **args) :
    try :
        parser.parse(text, **args)
    except error as err :
        if message is not None :
            assert str(err) == message, str(err)
        return err
    raise AssertionError("parsing %r should fail" % text)

def test_stlc_application () :
    tree = Parser(builtin("stlc")).parse("x y")
    assert tree.kind == NONTERMINAL and tree.value == "Term"
    assert len(tree.children) == 1
    app = tree.children[0]
    assert app.value == "Application"
    assert app.typing_rule is not None and app.typing_rule.name == "app"
    assert [c.value for c in app.children] == ["BaseTerm", "BaseTerm"]
    assert [c.binding for c in app.children] == ["f", "e"]
    assert app.lookup("f").text() == "x"
    assert app.lookup("e").text() == "y"

def test_stlc_lambda () :
    tree = Parser(builtin("stlc")).parse("λx:A->B.x")
    base = tree.children[0]
    assert base.value == "BaseTerm"
    lam = base.children[0]
    assert lam.value == "Lambda" and lam.rule == "lambda"
    assert lam.typing_rule.conclusion.type_expr == "τ₁ → τ₂"
    assert lam.text() == "λ x : A -> B . x"
    assert lam.lookup("e").text() == "x"

def test_stlc_variable_rule () :
    tree = Parser(builtin("stlc")).parse("(f)")
    variables = [n for n in tree.nodes() if n.value == "Variable"]
    assert len(variables) == 1
    assert variables[0].typing_rule.name == "var"
    assert variables[0].lookup("x").value == "Identifier"
    assert variables[0].lookup("x").text() == "f"

def test_binding_propagation () :
    g = Grammar.loads("Variable ::= Identifier[x]\n"
                      "Identifier ::= /[a-z]+/")
    tree = Parser(g).parse("y")
    leaf = tree.children[0].children[0]
    assert leaf.kind == TERMINAL
    assert leaf.value == "y"
    assert leaf.binding == "x"

def test_binding_not_overwritten () :
    tree = Parser(builtin("arith")).parse("7")
    leaf = tree.leaves()[0]
    assert leaf.value == "7"
    assert leaf.binding == "n"

def test_left_recursion_terminates () :
    p = Parser(Grammar.loads("A ::= 'x' | A 'x'"))
    tree = p.parse("x")
    assert len(tree.children) == 1
    assert tree.children[0].value == "x"
    tree = p.parse("x x")
    assert [c.kind for c in tree.children] == [NONTERMINAL, TERMINAL]
    fails(p, "y", "unable to parse input completely")

def test_left_recursion_first () :
    p = Parser(Grammar.loads("A ::= A 'x' | 'x'"))
    assert p.parse("x").text() == "x"
    assert p.parse("x x").text() == "x x"

def test_first_match_wins () :
    g = Grammar.loads("S(one) ::= /[a-z]+/\nS(two) ::= 'a'")
    with warnings.catch_warnings() :
        warnings.simplefilter("ignore")
        assert Parser(g).parse("a").rule == "one"

def test_incomplete_input () :
    p = Parser(builtin("arith"))
    fails(p, "1 +", "unable to parse input completely")
    fails(p, "(1 + 2", "unable to parse input completely")
    fails(p, "", "empty input", error=TokenizeError)
    err = fails(p, " \n\t", "empty input", error=TokenizeError)
    assert err.pos == 0
    err = fails(p, "1 - 2", error=TokenizeError)
    assert err.pos == 2 and err.found == "-"

def test_arith_tree () :
    g = builtin("arith")
    tree = Parser(g).parse("1 + 2")
    number = ('(N Term (b t) (N Factor (b f)'
              ' (N Number (r num) (b n) (T (b n) "%s"))))')
    expected = '(N Expr (r add) %s (T "+") (N Expr (b e) %s))' % (
        number % 1, number % 2)
    assert canon.dumps(tree) == expected
    assert syneq(tree, canon.loads(expected, g))
    assert tree.typing_rule is g.typing_rules["add"]

def test_arith_precedence () :
    tree = Parser(builtin("arith")).parse("2 * (3 + 4)")
    assert tree.rule is None
    term = tree.children[0]
    assert term.rule == "mul"
    assert term.children[2].text() == "( 3 + 4 )"

def test_propositional_start () :
    p = Parser(builtin("propositional"))
    tree = p.parse("λp:P->Q.p", start="Proof")
    intro = [n for n in tree.nodes() if n.rule == "impl_intro"]
    assert len(intro) == 1
    assert intro[0].lookup("P").text() == "P -> Q"
    tree = p.parse("f a", start="Proof")
    assert tree.children[0].value == "Application"
    assert tree.children[0].rule == "modus_ponens"
    assert p.parse("⊤ -> ⊥", start="Proposition").text() == "⊤ -> ⊥"
    fails(p, "f a", "no production for 'Nope'", start="Nope")

def test_unresolved_rule_warns_once () :
    g = Grammar.loads("Var(var) ::= /[a-z]+/")
    p = Parser(g)
    with warnings.catch_warnings(record=True) as caught :
        warnings.simplefilter("always")
        first = p.parse("x")
        second = p.parse("y")
    assert first.rule == "var" and first.typing_rule is None
    assert second.typing_rule is None
    assert len(caught) == 1
    assert "no typing rule 'var'" in str(caught[0].message)

def test_shared_grammar_untouched () :
    g = Grammar.loads("Var(var) ::= /[a-z]+/")
    state = dict(vars(g))
    with warnings.catch_warnings(record=True) as caught :
        warnings.simplefilter("always")
        Parser(g).parse("x")
        Parser(g).parse("y")
    assert vars(g) == state
    assert g.typing_rules == {}
    # each parser reports the missing rule once
    assert [str(w.message) for w in caught] \
        == ["no typing rule 'var' (used by Var(var) ::= /[a-z]+/)"] * 2

def test_parse_token_ids () :
    p = Parser(builtin("arith"))
    ids = p.tokenizer.tokenize("3 * 4")
    assert all(isinstance(i, int) for i in ids)
    assert p.parse_tokens(ids).text() == "3 * 4"

def test_regex_search () :
    p = Parser(Grammar.loads("Identifier ::= /[a-z]/"))
    assert p.parse("ab").text() == "ab"
    assert p.parse("x1").text() == "x1"
    fails(p, "42", "unable to parse input completely")
    p = Parser(Grammar.loads("N ::= /^[0-9]$/"))
    assert p.parse("5").text() == "5"
    fails(p, "55")

def test_trace () :
    out = io.StringIO()
    p = Parser(builtin("arith"), debug=Debug(TRACE, out))
    p.parse("1")
    lines = out.getvalue().splitlines()
    assert lines[0] == "gramtype[info]: parsing 1 tokens from Expr"
    assert "gramtype[trace]: enter Term at token 0" in lines
    assert p.debug.input == "1"

if __name__ == "__main__" :
    for name, test in sorted(globals().items()) :
        if name.startswith("test_") and callable(test) :
            test()
