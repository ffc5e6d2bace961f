#!/usr/bin/env python3

import sys
sys.path.insert(0, ".")

from gramtype import NotationError
from gramtype.grammar import Grammar
from gramtype.grammars import get_grammar
from gramtype.parser import Parser
from gramtype.ast import ASTNode, syneq
from gramtype import canon

samples = {"stlc" : ["x", "x y", "(λx:A->B.x) y", "λf:(A->B)->C.f"],
           "arith" : ["1", "1 + 2 * 3", "(1 + 2) * 3"],
           "lambda" : ["x", "λx.x", "(f x)", "(λx.(x x) y)"]}

def test_round_trip () :
    for name, texts in sorted(samples.items()) :
        g = Grammar.loads(get_grammar(name))
        parser = Parser(g)
        for text in texts :
            tree = parser.parse(text)
            text = canon.dumps(tree)
            back = canon.loads(text, g)
            assert syneq(back, tree), text
            assert canon.dumps(back) == text
            for old, new in zip(tree.nodes(), back.nodes()) :
                assert old.typing_rule is new.typing_rule

def test_escapes () :
    tree = ASTNode.nonterminal("S", [ASTNode.terminal('a"b\\'),
                                     ASTNode.terminal("")])
    text = canon.dumps(tree)
    assert text == '(N S (T "a\\"b\\\\") (T ""))'
    assert syneq(canon.loads(text), tree)

def test_structural_equality () :
    g = Grammar.loads(get_grammar("arith"))
    parser = Parser(g)
    assert syneq(parser.parse("1+2"), parser.parse("1 + 2"))
    assert not syneq(parser.parse("1 + 2"), parser.parse("2 + 1"))
    loaded = canon.loads(canon.dumps(parser.parse("1 + 2")))
    loaded.children[0].binding = None
    assert not syneq(loaded, parser.parse("1 + 2"))

def test_whitespace () :
    text = '(N A\n  (r x)\n  (T (b v) "1")\n)'
    node = canon.loads(text)
    assert canon.dumps(node) == '(N A (r x) (T (b v) "1"))'

def test_rule_name_with_spaces () :
    g = Grammar.loads("Var(my var) ::= /[a-z]+/\n\n"
                      "x ∈ Γ\n------ (my var)\nΓ(x)")
    tree = Parser(g).parse("y")
    text = canon.dumps(tree)
    assert text == '(N Var (r my var) (T "y"))'
    back = canon.loads(text, g)
    assert syneq(back, tree)
    assert back.rule == "my var"
    assert back.typing_rule is g.typing_rules["my var"]

def test_malformed () :
    for text in ['', '(N)', '(T "x"', '(T "x\\q")', '(N A) (N B)',
                 '(T (b x "y")', '(N A (r ) (T "x"))', '(N A (r a (b c)))'] :
        try :
            canon.loads(text)
        except NotationError :
            pass
        else :
            raise AssertionError("%r should not load" % text)

if __name__ == "__main__" :
    for name, test in sorted(globals().items()) :
        if name.startswith("test_") and callable(test) :
            test()
