#!/usr/bin/env python3

import sys, os, tempfile, shutil, warnings
sys.path.insert(0, ".")

from gramtype import NotationError
from gramtype.grammar import Grammar, Symbol, Production
from gramtype.grammars import get_grammar, list_grammars
from gramtype.notation import read, write
from gramtype.typing import (parse_premises, parse_context_extensions,
                             parse_conclusion, JudgmentPremise, Membership,
                             TypeRelation, Compound, TypeValue,
                             ContextLookup, JudgmentConclusion)

def raises (function, *args) :
    try :
        function(*args)
    except NotationError as err :
        return err
    raise AssertionError("%s%r should fail" % (function.__name__, args))

def test_stlc_grammar () :
    g = Grammar.loads(get_grammar("stlc"))
    assert "Variable" in g.productions
    assert "Lambda" in g.productions
    assert len(g.productions["Lambda"]) == 1
    assert g.productions["Lambda"][0].rule == "lambda"
    param = g.productions["TypedParam"][0]
    assert Symbol("Variable", "x") in param.rhs
    assert sorted(g.typing_rules) == ["app", "lambda", "var"]
    lam = g.typing_rules["lambda"]
    assert lam.conclusion == TypeValue("τ₁ → τ₂")
    assert len(lam.premises) == 1
    judgment = lam.premises[0].judgment
    assert [(e.variable, e.type_expr) for e in judgment.extensions] \
        == [("x", "τ₁")]
    app = g.typing_rules["app"]
    assert [str(p) for p in app.premises] == ["Γ ⊢ f : τ₁ → τ₂",
                                              "Γ ⊢ e : τ₁"]
    assert g.typing_rules["var"].conclusion == ContextLookup("x")
    assert set(g.special_tokens) == set(["(", ")", "->", ":", "λ", "."])

def test_round_trip () :
    for name in list_grammars() :
        g = Grammar.loads(get_grammar(name))
        spec = g.to_spec_string()
        again = Grammar.loads(spec)
        assert again == g, name
        assert list(again.productions) == sorted(g.productions)
        for nt in g.productions :
            assert again.productions[nt] == g.productions[nt], (name, nt)
        assert again.to_spec_string() == spec

def test_spec_string_layout () :
    g = Grammar.loads(get_grammar("stlc"))
    lines = g.to_spec_string().splitlines()
    assert lines[0] == "// --- Production Rules ---"
    assert "// --- Typing Rules ---" in lines
    assert "Application(app) ::= BaseTerm[f] BaseTerm[e]" in lines
    assert "BaseTerm ::= Variable | Lambda | '(' Term ')'" in lines
    pos = lines.index("Γ,x:τ₁ ⊢ e : τ₂")
    assert lines[pos+1] == "-" * 20 + " (lambda)"
    assert lines[pos+2] == "τ₁ → τ₂"

def test_save_load () :
    tmp = tempfile.mkdtemp()
    try :
        path = os.path.join(tmp, "arith.gram")
        g = Grammar.loads(get_grammar("arith"))
        g.save(path)
        with open(path, encoding="utf-8") as infile :
            assert infile.read() == g.to_spec_string()
        assert Grammar.load(path) == g
    finally :
        shutil.rmtree(tmp)

def test_judgment_premise () :
    premises = parse_premises("Γ,x:τ₁,y:τ₂ ⊢ e : σ")
    assert len(premises) == 1
    judgment = premises[0].judgment
    assert [(e.variable, e.type_expr) for e in judgment.extensions] \
        == [("x", "τ₁"), ("y", "τ₂")]
    assert judgment.expression == "e"
    assert judgment.type_expr == "σ"

def test_premise_forms () :
    premises = parse_premises("x ∈ Γ, τ₁ = τ₂, (Γ ⊢ e : τ, σ ⊆ τ)")
    assert [type(p) for p in premises] == [Membership, TypeRelation,
                                           Compound]
    assert premises[1].relation == "="
    assert type(premises[2].premises[0]) == JudgmentPremise
    # the turnstile wins over the relation symbols
    assert type(parse_premises("Γ ⊢ x : τ")[0]) == JudgmentPremise

def test_context_extension_errors () :
    err = raises(parse_context_extensions, "x:τ")
    assert "must start with" in str(err)
    err = raises(parse_context_extensions, "Γ,xτ")
    assert err.fragment == "xτ"

def test_conclusions () :
    assert parse_conclusion("Γ(x)") == ContextLookup("x")
    assert isinstance(parse_conclusion("Γ,x:τ ⊢ e : σ"), JudgmentConclusion)
    assert parse_conclusion("P -> Q") == TypeValue("P -> Q")
    raises(parse_conclusion, "τ + σ")

def test_notation_errors () :
    err = raises(read, "Lambda(lambda) 'λ' Term")
    assert str(err).startswith("neither productions nor typing rule")
    raises(read, "x ∈ Γ\n------\nΓ(x)")
    raises(read, "x ∈ Γ\n------ (var)")
    err = raises(read, "foo bar\n------ (r)\nτ")
    assert str(err) == "unknown premise format: foo bar"
    assert err.fragment == "foo bar"

def test_continuation_lines () :
    g = read("Number ::= /[0-9]+/\n"
             "       | Number '.' /[0-9]+/\n"
             "Sign ::= '+' | '-'")
    assert len(g.productions["Number"]) == 2
    assert g.productions["Number"][1] == Production([Symbol("Number"),
                                                     Symbol("'.'"),
                                                     Symbol("/[0-9]+/")])
    assert g.special_tokens == [".", "+", "-"]

def test_ignored_line_warns () :
    with warnings.catch_warnings(record=True) as caught :
        warnings.simplefilter("always")
        g = read("A ::= 'a'\nstray text\nB ::= 'b'")
    assert g.nonterminals() == ["A", "B"]
    assert len(caught) == 1
    assert "stray text" in str(caught[0].message)

def test_rule_overwrite () :
    g = read("----\nInt (lit)\n\n----\nBool (lit)")
    assert list(g.typing_rules) == ["lit"]
    assert g.typing_rules["lit"].conclusion == TypeValue("Bool")

def test_write_quotes_literals () :
    g = Grammar()
    g.add_production("Op", Production([Symbol("+", "op"), Symbol("Term")]))
    g.add_special_token("+")
    assert write(g).splitlines()[1] == "Op ::= '+'[op] Term"

if __name__ == "__main__" :
    for name, test in sorted(globals().items()) :
        if name.startswith("test_") and callable(test) :
            test()
