"""A recursive-descent parser with backtracking, driven by a `Grammar`

The alternatives of a nonterminal are tried in the order they were
declared, the first one that matches wins. When an alternative fails,
the parser goes back to where it started and tries the next one.
Nodes are annotated with the bindings of the symbols that produced
them and with the typing rules of the productions that matched.

>>> from gramtype.grammar import Grammar
>>> g = Grammar.loads('''
... Expr ::= Term[l] '+' Expr[r] | Term[t]
... Term ::= /[0-9]+/
... ''')
>>> tree = Parser(g).parse('1 + 22')
>>> print(tree.pretty())
Expr (
  Term[l] (
    '1'[l]
  )
  '+'
  Expr[r] (
    Term[t] (
      '22'[t]
    )
  )
)
>>> tree.span
Span(0, 3)
>>> Parser(g).parse('1 +')
Traceback (most recent call last):
 ...
gramtype.ParseError: unable to parse input completely
"""

import re
from gramtype import ParseError, TokenizeError
from gramtype.ast import ASTNode, Span
from gramtype.debug import Quiet, warn
from gramtype.lexer import Tokenizer, DELIMITERS

class Parser (object) :
    """Parse texts according to a grammar

    A parser holds the position of the current parse, so one instance
    should not be used by several threads at once. The grammar itself
    is only read and may be shared.
    """
    def __init__ (self, grammar, delimiters=DELIMITERS, debug=None) :
        """Initialize a new instance

        @param grammar: the grammar to parse with
        @type grammar: `Grammar`
        @param delimiters: the characters that separate tokens
        @type delimiters: `str`
        @param debug: the diagnostic context (nothing is reported by
            default)
        @type debug: `Debug`
        """
        self.grammar = grammar
        self.tokenizer = Tokenizer(grammar.special_tokens, delimiters)
        self.debug = debug or Quiet()
        self.tokens = []
        self.pos = 0
        self._active = set()
        self._regex = {}
        self._unresolved = set()
    def __repr__ (self) :
        return "<%s for %r>" % (self.__class__.__name__, self.grammar)
    def parse (self, text, start=None) :
        """Tokenize and parse a text

        >>> from gramtype.grammar import Grammar
        >>> p = Parser(Grammar.loads("A ::= 'x' | A 'x'"))
        >>> p.parse('x').children
        [<Terminal 'x' [0:1]>]
        >>> p.parse(' ')
        Traceback (most recent call last):
         ...
        gramtype.TokenizeError: empty input
        >>> p.parse('x ; x')
        Traceback (most recent call last):
         ...
        gramtype.TokenizeError: unrecognized character ';' at offset 2

        @param text: the text to parse
        @type text: `str`
        @param start: the nonterminal to start from (by default, the
            grammar's start symbol)
        @type start: `str`
        @return: the syntax tree covering the whole text
        @rtype: `ASTNode`
        @raise TokenizeError: when the text is empty or holds an
            unrecognized character
        @raise ParseError: when the text cannot be parsed
        """
        self.debug.input = text
        tokens = self.tokenizer.tokens(text)
        if not tokens :
            raise TokenizeError("empty input", pos=0)
        return self.parse_tokens(tokens, start)
    def parse_tokens (self, tokens, start=None) :
        """Parse a sequence of tokens

        Tokens may be given as texts or as token ids from the
        parser's tokenizer.

        >>> from gramtype.grammar import Grammar
        >>> p = Parser(Grammar.loads("Pair ::= '(' /[a-z]+/ ',' /[a-z]+/ ')'"))
        >>> p.parse_tokens(['(', 'a', ',', 'b', ')']).text()
        '( a , b )'
        >>> p.parse_tokens(p.tokenizer.tokenize('(a,a)')).text()
        '( a , a )'
        >>> p.parse_tokens(['('], start='Nope')
        Traceback (most recent call last):
         ...
        gramtype.ParseError: no production for 'Nope'

        @param tokens: the tokens to parse
        @type tokens: `list` of `str` or `int`
        @param start: the nonterminal to start from
        @type start: `str`
        @rtype: `ASTNode`
        @raise ParseError: when the tokens cannot be parsed
        """
        self.tokens = [self.tokenizer.text(tok) if isinstance(tok, int)
                       else str(tok) for tok in tokens]
        self.pos = 0
        self._active = set()
        if not self.tokens :
            raise ParseError("empty input", pos=0)
        if start is None :
            start = self.grammar.start_symbol()
            if start is None :
                raise ParseError("grammar has no production", pos=0)
        elif not self.grammar.is_nonterminal(start) :
            raise ParseError("no production for %r" % start, pos=0)
        self.debug.info("parsing %s tokens from %s", len(self.tokens), start)
        for production in self.grammar.productions[start] :
            self.pos = 0
            try :
                node = self.try_production(start, production)
            except ParseError as err :
                self.debug.debug("%s ::= %s failed: %s", start, production, err)
                continue
            if self.pos == len(self.tokens) :
                node.span = Span(0, len(self.tokens))
                return node
            self.debug.debug("%s ::= %s stopped at token %s",
                             start, production, self.pos)
        raise ParseError("unable to parse input completely", pos=self.pos)
    def parse_nonterminal (self, nonterminal) :
        """Parse a nonterminal at the current position, trying its
        alternatives in order

        Re-entering a nonterminal at the position where it is already
        being parsed fails instead of looping forever.

        @param nonterminal: the nonterminal name
        @type nonterminal: `str`
        @rtype: `ASTNode`
        @raise ParseError: when no alternative matches
        """
        start = self.pos
        key = (nonterminal, start)
        if key in self._active :
            self.debug.trace("left recursion on %s at token %s",
                             nonterminal, start)
            raise ParseError("unable to parse nonterminal %s" % nonterminal,
                             pos=start)
        try :
            alternatives = self.grammar.productions[nonterminal]
        except KeyError :
            raise ParseError("no production for %r" % nonterminal, pos=start)
        self.debug.trace("enter %s at token %s", nonterminal, start)
        self._active.add(key)
        try :
            for production in alternatives :
                try :
                    return self.try_production(nonterminal, production)
                except ParseError as err :
                    self.debug.trace("%s ::= %s failed: %s",
                                     nonterminal, production, err)
        finally :
            self._active.discard(key)
        raise ParseError("unable to parse nonterminal %s" % nonterminal,
                         pos=start)
    def try_production (self, nonterminal, production) :
        """Parse one alternative of a nonterminal at the current position

        On failure, the position is restored to where it was before
        the attempt.

        @param nonterminal: the nonterminal the production belongs to
        @type nonterminal: `str`
        @param production: the alternative to match
        @type production: `Production`
        @rtype: `ASTNode`
        @raise ParseError: when a symbol does not match
        """
        start = self.pos
        try :
            children = [self.parse_symbol(symbol) for symbol in production]
        except ParseError :
            self.pos = start
            raise
        self.debug.debug("%s ::= %s matched tokens %s to %s",
                         nonterminal, production, start, self.pos)
        return ASTNode.nonterminal(nonterminal, children,
                                   span=Span(start, self.pos),
                                   typing_rule=self.typing_rule(nonterminal,
                                                                production),
                                   rule=production.rule)
    def typing_rule (self, nonterminal, production) :
        """Return the typing rule attached to a production

        A rule name that the grammar does not define is not an error:
        `None` is returned and the parser warns the first time it
        meets this name.

        >>> import warnings
        >>> from gramtype.grammar import Grammar
        >>> g = Grammar.loads("Var(var) ::= /[a-z]+/")
        >>> p = Parser(g)
        >>> with warnings.catch_warnings(record=True) as w :
        ...     warnings.simplefilter('always')
        ...     p.typing_rule('Var', g.productions['Var'][0]) is None
        ...     p.typing_rule('Var', g.productions['Var'][0]) is None
        ...     [str(m.message) for m in w]
        True
        True
        ["no typing rule 'var' (used by Var(var) ::= /[a-z]+/)"]
        """
        rule = self.grammar.rule_for(production)
        if (rule is None and production.rule is not None
            and production.rule not in self._unresolved) :
            self._unresolved.add(production.rule)
            warn("no typing rule %r (used by %s(%s) ::= %s)"
                 % (production.rule, nonterminal, production.rule, production))
        return rule
    def parse_symbol (self, symbol) :
        """Parse one symbol at the current position

        >>> from gramtype.grammar import Grammar, Symbol
        >>> p = Parser(Grammar.loads("Variable ::= Identifier[x]\\n"
        ...                          "Identifier ::= /[a-z]+/"))
        >>> p.tokens, p.pos = ['y', 'z'], 1
        >>> p.parse_symbol(Symbol('/[a-z]/', 'v')).binding, p.pos
        ('v', 2)
        >>> p.parse_symbol(Symbol("'+'"))
        Traceback (most recent call last):
         ...
        gramtype.ParseError: unexpected end of input
        >>> p.pos = 0
        >>> p.parse_symbol(Symbol("'+'"))
        Traceback (most recent call last):
         ...
        gramtype.ParseError: expected '+', found y

        @param symbol: the symbol to match
        @type symbol: `Symbol`
        @rtype: `ASTNode`
        @raise ParseError: when the symbol does not match
        """
        if self.grammar.is_nonterminal(symbol.value) :
            node = self.parse_nonterminal(symbol.value)
            if symbol.binding is not None :
                node.binding = symbol.binding
                self._propagate(node)
            return node
        if self.pos >= len(self.tokens) :
            raise ParseError("unexpected end of input", pos=self.pos,
                             expected=symbol.value)
        token = self.tokens[self.pos]
        if not self.match(symbol, token) :
            raise ParseError("expected %s, found %s" % (symbol.value, token),
                             pos=self.pos, expected=symbol.value, found=token)
        self.debug.trace("token %s %r matches %s", self.pos, token, symbol)
        self.pos += 1
        return ASTNode.terminal(token, Span(self.pos - 1, self.pos),
                                symbol.binding)
    def _propagate (self, node) :
        # a leaf reached through single-child nodes gets the binding
        binding = node.binding
        while node.children is not None and len(node.children) == 1 :
            node = node.children[0]
        if node.is_terminal() and node.binding is None :
            node.binding = binding
    def match (self, symbol, token) :
        """Check whether a token matches a terminal symbol

        >>> from gramtype.grammar import Grammar, Symbol
        >>> p = Parser(Grammar())
        >>> p.match(Symbol("'λ'"), 'λ'), p.match(Symbol('"λ"'), 'λ')
        (True, True)
        >>> p.match(Symbol('/[0-9]/'), 'a42'), p.match(Symbol('/^[0-9]$/'), '42')
        (True, False)
        >>> p.match(Symbol('/[0-9/'), '4'), p.match(Symbol('x'), 'x')
        (False, True)

        A regex matches when it is found anywhere in the token, anchors
        must be written in the pattern to match whole tokens only.
        """
        if symbol.is_literal() :
            return token == symbol.literal()
        elif symbol.is_regex() :
            regex = self._compile(symbol.pattern())
            return regex is not None and regex.search(token) is not None
        return token == symbol.value
    def _compile (self, pattern) :
        try :
            return self._regex[pattern]
        except KeyError :
            pass
        try :
            regex = re.compile(pattern)
        except re.error as err :
            self.debug.info("invalid regex /%s/: %s", pattern, err)
            regex = None
        self._regex[pattern] = regex
        return regex
