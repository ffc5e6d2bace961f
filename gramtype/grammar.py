"""The grammar model: symbols, productions and grammars.

A grammar maps each nonterminal to an ordered list of productions (its
alternatives, tried in this order by the parser), holds the typing
rules indexed by name and the list of special tokens (the literal
terminals) used to build a tokenizer.

>>> g = Grammar.loads('''
... Expr ::= Term[t] '+' Expr[e] | Term[t]
... Term ::= /[0-9]+/
... ''')
>>> g.nonterminals()
['Expr', 'Term']
>>> g.productions['Expr'][1]
Production([Symbol('Term', 't')])
>>> g.special_tokens
['+']
>>> g.start_symbol()
'Expr'
"""

import io
from gramtype import defaultencoding

class Symbol (object) :
    """One symbol in the right-hand side of a production

    `value` is a nonterminal name, a quoted literal (`'+'` or `"+"`)
    or a regular expression between slashes (`/[0-9]+/`). A symbol
    may carry a binding name that is copied on the syntax tree nodes
    it produces.

    >>> Symbol('Term', 't')
    Symbol('Term', 't')
    >>> str(Symbol('Term', 't')), str(Symbol("'+'"))
    ('Term[t]', "'+'")
    >>> Symbol('Term', 't') == Symbol('Term', 't')
    True
    >>> len(set([Symbol('x'), Symbol('x'), Symbol('x', 'y')]))
    2
    """
    def __init__ (self, value, binding=None) :
        """
        @param value: the symbol text
        @type value: `str`
        @param binding: an optional binding name
        @type binding: `str`
        """
        self.__dict__["value"] = value
        self.__dict__["binding"] = binding
    def __setattr__ (self, name, value) :
        raise AttributeError("Symbol object is immutable")
    def __repr__ (self) :
        if self.binding is None :
            return "%s(%r)" % (self.__class__.__name__, self.value)
        return "%s(%r, %r)" % (self.__class__.__name__, self.value,
                               self.binding)
    def __str__ (self) :
        if self.binding is None :
            return self.value
        return "%s[%s]" % (self.value, self.binding)
    def __eq__ (self, other) :
        return (isinstance(other, Symbol)
                and self.value == other.value
                and self.binding == other.binding)
    def __ne__ (self, other) :
        return not self.__eq__(other)
    def __hash__ (self) :
        return hash((self.value, self.binding))
    def is_regex (self) :
        """Check whether the symbol is a regular expression

        >>> Symbol('/[a-z]+/').is_regex(), Symbol('//').is_regex()
        (True, False)
        """
        return is_regex(self.value)
    def is_literal (self) :
        """Check whether the symbol is a quoted literal

        >>> Symbol("'λ'").is_literal(), Symbol('"x"').is_literal()
        (True, True)
        >>> Symbol('Term').is_literal(), Symbol("'").is_literal()
        (False, False)
        """
        return is_quoted(self.value)
    def literal (self) :
        """Return the text of a literal without its quotes, or the
        symbol value itself if it is not a literal

        >>> Symbol("'λ'").literal(), Symbol('Term').literal()
        ('λ', 'Term')
        """
        if self.is_literal() :
            return self.value[1:-1]
        return self.value
    def pattern (self) :
        """Return the regular expression of a regex symbol

        >>> Symbol('/[0-9]+/').pattern()
        '[0-9]+'
        """
        return self.value[1:-1]

def is_regex (text) :
    return len(text) > 2 and text.startswith("/") and text.endswith("/")

def is_quoted (text) :
    return len(text) >= 2 and text[0] == text[-1] and text[0] in "'\""

class Production (object) :
    """One alternative of a nonterminal

    >>> p = Production([Symbol("'λ'"), Symbol('Term', 'e')], 'lambda')
    >>> p
    Production([Symbol("'λ'"), Symbol('Term', 'e')], 'lambda')
    >>> str(p)
    "'λ' Term[e]"
    """
    def __init__ (self, rhs, rule=None) :
        """
        @param rhs: the sequence of symbols
        @type rhs: `list` of `Symbol`
        @param rule: the name of the typing rule attached to this
            alternative, if any
        @type rule: `str`
        """
        self.__dict__["rhs"] = tuple(rhs)
        self.__dict__["rule"] = rule
    def __setattr__ (self, name, value) :
        raise AttributeError("Production object is immutable")
    def __repr__ (self) :
        if self.rule is None :
            return "%s(%r)" % (self.__class__.__name__, list(self.rhs))
        return "%s(%r, %r)" % (self.__class__.__name__, list(self.rhs),
                               self.rule)
    def __str__ (self) :
        return " ".join(str(s) for s in self.rhs)
    def __eq__ (self, other) :
        return (isinstance(other, Production)
                and self.rhs == other.rhs
                and self.rule == other.rule)
    def __ne__ (self, other) :
        return not self.__eq__(other)
    def __hash__ (self) :
        return hash((self.rhs, self.rule))
    def __len__ (self) :
        return len(self.rhs)
    def __iter__ (self) :
        return iter(self.rhs)

class Grammar (object) :
    """A complete grammar made of context-free productions and
    inference-style typing rules

    Attributes are:
     - self.productions: a `dict` mapping each nonterminal to the
       list of its productions, in declaration order
     - self.typing_rules: a `dict` mapping rule names to `TypingRule`
       instances
     - self.special_tokens: the literal terminals, in order of first
       appearance
    """
    def __init__ (self) :
        self.productions = {}
        self.typing_rules = {}
        self.special_tokens = []
    def __repr__ (self) :
        """
        >>> Grammar()
        <Grammar: 0 nonterminals, 0 typing rules>
        """
        return "<%s: %s nonterminals, %s typing rules>" % (
            self.__class__.__name__, len(self.productions),
            len(self.typing_rules))
    def __eq__ (self, other) :
        """Compare grammars as the round trip through the textual
        notation does: same productions in the same order, same
        typing rules, and same special tokens regardless of order

        >>> a = Grammar.loads("A ::= 'x' | 'y'")
        >>> b = Grammar.loads("A ::= 'x'\\n| 'y'")
        >>> a == b, a == Grammar.loads("A ::= 'y' | 'x'")
        (True, False)
        """
        return (isinstance(other, Grammar)
                and self.productions == other.productions
                and self.typing_rules == other.typing_rules
                and set(self.special_tokens) == set(other.special_tokens))
    def __ne__ (self, other) :
        return not self.__eq__(other)
    __hash__ = None
    def add_production (self, nonterminal, production) :
        """Append an alternative to a nonterminal

        >>> g = Grammar()
        >>> g.add_production('A', Production([Symbol("'x'")]))
        >>> g.add_production('A', Production([Symbol('A'), Symbol("'x'")]))
        >>> len(g.productions['A'])
        2
        """
        self.productions.setdefault(nonterminal, []).append(production)
    def add_special_token (self, token) :
        """Add a special token if not already present

        >>> g = Grammar()
        >>> for tok in ['(', ')', '(', 'λ'] :
        ...     g.add_special_token(tok)
        >>> g.special_tokens
        ['(', ')', 'λ']
        """
        if token not in self.special_tokens :
            self.special_tokens.append(token)
    def add_typing_rule (self, rule) :
        """Add a typing rule, replacing any rule with the same name

        >>> from gramtype.typing import TypingRule
        >>> g = Grammar()
        >>> g.add_typing_rule(TypingRule.parse('var', 'x ∈ Γ', 'Γ(x)'))
        >>> g.add_typing_rule(TypingRule.parse('var', '', 'τ'))
        >>> list(g.typing_rules), g.typing_rules['var'].conclusion
        (['var'], TypeValue('τ'))
        """
        self.typing_rules[rule.name] = rule
    def nonterminals (self) :
        "Return the nonterminal names in declaration order"
        return list(self.productions)
    def is_nonterminal (self, name) :
        return name in self.productions
    def start_symbol (self) :
        """Return the nonterminal where parsing starts: `Expr` if it
        is declared, otherwise `Term`, otherwise the first declared
        nonterminal (or `None` for an empty grammar)

        >>> Grammar.loads("A ::= 'a'\\nTerm ::= A").start_symbol()
        'Term'
        >>> Grammar.loads("A ::= 'a'\\nB ::= A").start_symbol()
        'A'
        """
        for name in ("Expr", "Term") :
            if name in self.productions :
                return name
        for name in self.productions :
            return name
        return None
    def rule_for (self, production) :
        """Return the typing rule attached to a production, or `None`
        when it has no rule name or when this name is not defined in
        the grammar

        The grammar is left untouched, so it may be shared by parsers.

        >>> from gramtype.typing import TypingRule
        >>> g = Grammar.loads("Var(var) ::= /[a-z]+/")
        >>> g.rule_for(g.productions['Var'][0]) is None
        True
        >>> g.add_typing_rule(TypingRule.parse('var', 'x ∈ Γ', 'Γ(x)'))
        >>> g.rule_for(g.productions['Var'][0]).name
        'var'
        """
        if production.rule is None :
            return None
        return self.typing_rules.get(production.rule)
    @classmethod
    def loads (cls, text) :
        """Build a grammar from its textual specification

        @param text: the specification
        @type text: `str`
        @rtype: `Grammar`
        @raise NotationError: when the specification is malformed
        """
        from gramtype.notation import read
        return read(text, cls())
    @classmethod
    def load (cls, path) :
        """Load a grammar from a specification file

        @param path: the file to read
        @type path: `str`
        @rtype: `Grammar`
        """
        with io.open(path, encoding=defaultencoding) as infile :
            return cls.loads(infile.read())
    def to_spec_string (self) :
        """Produce the textual specification of the grammar

        >>> print(Grammar.loads("B ::= 'b'\\nA ::= B[x] | /a+/").to_spec_string())
        // --- Production Rules ---
        A ::= B[x] | /a+/
        B ::= 'b'
        <BLANKLINE>

        @return: the specification, that `loads` reads back into an
            equal grammar
        @rtype: `str`
        """
        from gramtype.notation import write
        return write(self)
    def save (self, path) :
        """Write the textual specification to a file

        @param path: the file to write
        @type path: `str`
        """
        with io.open(path, "w", encoding=defaultencoding) as outfile :
            outfile.write(self.to_spec_string())
