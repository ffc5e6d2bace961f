"""gramtype is organised into a small set of modules:

  * `gramtype.grammar` holds the grammar model (symbols, productions
    and the `Grammar` itself), `gramtype.typing` the typing rules
    attached to productions, written in natural-deduction notation
  * `gramtype.notation` reads and writes the textual specification
    that mixes productions and inference rules
  * `gramtype.lexer`, `gramtype.parser` and `gramtype.ast` turn input
    text into syntax trees annotated with bindings and typing rules
  * `gramtype.canon` encodes syntax trees in a canonical parenthesized
    form used to compare them structurally
  * `gramtype.grammars` ships ready-made specifications and
    `gramtype.main` the command line interface

A short tour:

>>> from gramtype.grammar import Grammar
>>> from gramtype.parser import Parser
>>> from gramtype.grammars import get_grammar
>>> g = Grammar.loads(get_grammar('stlc'))
>>> tree = Parser(g).parse('x y')
>>> tree.children[0].value, tree.children[0].typing_rule.name
('Application', 'app')
"""

version = "0.3.1"
defaultencoding = "utf-8"

"""## Module `gramtype`

This module only provides the exceptions used throughout gramtype.
"""

class GramtypeError (Exception) :
    "Generic error in gramtype"
    pass

class NotationError (GramtypeError) :
    """Malformed grammar, judgment, premise or conclusion notation

    >>> raise NotationError('unknown premise format: foo', 'foo')
    Traceback (most recent call last):
     ...
    gramtype.NotationError: unknown premise format: foo
    >>> NotationError('bad', 'x y').fragment
    'x y'
    """
    def __init__ (self, message, fragment=None) :
        GramtypeError.__init__(self, message)
        self.fragment = fragment

class ParseError (GramtypeError) :
    """Error raised when an input cannot be parsed

    The position `pos` is a token index (or a character offset for
    tokenization errors), `expected` and `found` are set on terminal
    mismatches.

    >>> err = ParseError("expected '+', found '*'", pos=1,
    ...                  expected="'+'", found='*')
    >>> err.pos, err.expected, err.found
    (1, "'+'", '*')
    """
    def __init__ (self, message, pos=None, expected=None, found=None) :
        GramtypeError.__init__(self, message)
        self.pos = pos
        self.expected = expected
        self.found = found

class TokenizeError (ParseError) :
    "The tokenizer could not recognize a part of the input"
    pass
