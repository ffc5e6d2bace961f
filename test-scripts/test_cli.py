#!/usr/bin/env python3

import sys, io, os, tempfile, shutil
sys.path.insert(0, ".")

from gramtype import main as cli
from gramtype.grammar import Grammar
from gramtype.grammars import get_grammar

def run (*args) :
    stdout, stderr = sys.stdout, sys.stderr
    sys.stdout, sys.stderr = io.StringIO(), io.StringIO()
    code = 0
    try :
        try :
            cli.main(list(args))
        except SystemExit as exit :
            code = exit.code
        return code, sys.stdout.getvalue(), sys.stderr.getvalue()
    finally :
        sys.stdout, sys.stderr = stdout, stderr

def test_list () :
    code, out, err = run("-l")
    assert code == 0
    assert out.split() == ["arith", "lambda", "propositional", "stlc"]

def test_parse_builtin () :
    code, out, err = run("-b", "arith", "-c", "7")
    assert code == 0
    assert out.strip() == ('(N Expr (N Term (b t) (N Factor (b f)'
                           ' (N Number (r num) (b n) (T (b n) "7")))))')
    code, out, err = run("--builtin", "stlc", "x y", "x")
    assert code == 0
    assert out.startswith("Term (\n  Application[e]@app (\n")
    assert out.count("Term (") == 2

def test_parse_error () :
    code, out, err = run("-b", "arith", "1 +")
    assert code == cli.ERR_PARSE
    assert err == "gramtype: 1 +: unable to parse input completely\n"
    code, out, err = run("-b", "arith", "1 ; 2")
    assert code == cli.ERR_PARSE

def test_bad_arguments () :
    code, out, err = run()
    assert code == cli.ERR_ARG
    assert "no grammar provided" in err
    code, out, err = run("-b", "sql")
    assert code == cli.ERR_ARG
    assert "unknown grammar 'sql'" in err
    code, out, err = run("-b", "arith", "-t", "loud", "1")
    assert code == cli.ERR_OPT

def test_grammar_file () :
    tmp = tempfile.mkdtemp()
    try :
        path = os.path.join(tmp, "bad.gram")
        with open(path, "w", encoding="utf-8") as out :
            out.write("x ∈ Γ\n----\nΓ(x)\n")
        code, out, err = run(path)
        assert code == cli.ERR_NOTATION
        assert err == "gramtype: typing rule has no name\n"
        code, out, err = run(os.path.join(tmp, "missing.gram"))
        assert code == cli.ERR_IO
        path = os.path.join(tmp, "lambda.gram")
        saved = os.path.join(tmp, "saved.gram")
        with open(path, "w", encoding="utf-8") as out :
            out.write(get_grammar("lambda"))
        code, out, err = run("-s", "-o", saved, path, "λx.x")
        assert code == 0
        spec = Grammar.load(path).to_spec_string()
        assert out.startswith(spec)
        assert "Lambda[l]@lambda (" in out
        assert Grammar.load(saved) == Grammar.load(path)
        code, out, err = run("-o", path, path)
        assert code == cli.ERR_ARG
    finally :
        shutil.rmtree(tmp)

def test_trace () :
    code, out, err = run("-b", "arith", "-t", "debug", "1")
    assert code == 0
    assert err.startswith("gramtype[info]: parsing 1 tokens from Expr\n")
    assert "gramtype[debug]:" in err
    assert "gramtype[trace]:" not in err

if __name__ == "__main__" :
    for name, test in sorted(globals().items()) :
        if name.startswith("test_") and callable(test) :
            test()
