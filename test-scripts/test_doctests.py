#!/usr/bin/env python3

import sys, doctest, importlib
sys.path.insert(0, ".")

modules = ["gramtype",
           "gramtype.debug",
           "gramtype.lexer",
           "gramtype.typing",
           "gramtype.grammar",
           "gramtype.notation",
           "gramtype.ast",
           "gramtype.parser",
           "gramtype.canon",
           "gramtype.grammars",
           ]

def test_doctests () :
    for modname in modules :
        module = importlib.import_module(modname)
        failed, tried = doctest.testmod(module,
                                        optionflags=doctest.NORMALIZE_WHITESPACE
                                        | doctest.REPORT_ONLY_FIRST_FAILURE
                                        | doctest.ELLIPSIS)
        assert tried > 0, modname
        assert failed == 0, modname

if __name__ == "__main__" :
    test_doctests()
