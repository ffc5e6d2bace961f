"""Syntax trees built by the parser.

Every node is either a terminal (a leaf holding the text of one
token) or a nonterminal (named after the nonterminal it was parsed
from, with the ordered list of its children). Nodes keep the binding
of the grammar symbol that produced them and, for nonterminals, the
typing rule of the production that matched.

>>> leaf = ASTNode.terminal('x', span=Span(0, 1), binding='x')
>>> var = ASTNode.nonterminal('Variable', [leaf], span=Span(0, 1))
>>> root = ASTNode.nonterminal('Term', [var], span=Span(0, 1))
>>> print(root.pretty())
Term (
  Variable (
    'x'[x]
  )
)
>>> root.lookup('x') is leaf
True
"""

TERMINAL = "Terminal"
NONTERMINAL = "Nonterminal"

class Span (object) :
    """A range `[start, end)` of token indexes

    >>> Span(0, 3), len(Span(1, 3))
    (Span(0, 3), 2)
    """
    def __init__ (self, start, end) :
        self.start = start
        self.end = end
    def __repr__ (self) :
        return "%s(%r, %r)" % (self.__class__.__name__, self.start, self.end)
    def __eq__ (self, other) :
        return (isinstance(other, Span)
                and (self.start, self.end) == (other.start, other.end))
    def __ne__ (self, other) :
        return not self.__eq__(other)
    def __hash__ (self) :
        return hash((self.start, self.end))
    def __len__ (self) :
        return self.end - self.start

class ASTNode (object) :
    """A node in a syntax tree

    Attributes are:
     - self.kind: `TERMINAL` or `NONTERMINAL`
     - self.value: the token text for a terminal, the nonterminal
       name otherwise
     - self.span: the `Span` of tokens covered by the node, or `None`
     - self.children: the list of children, `None` for terminals
     - self.binding: the binding name of the symbol that produced
       the node, or `None`
     - self.rule: the name of the typing rule of the production that
       produced the node (kept even if the grammar does not define
       it), or `None`
     - self.typing_rule: the corresponding `TypingRule`, or `None`
    """
    def __init__ (self, kind, value, span=None, children=None,
                  binding=None, typing_rule=None, rule=None) :
        if kind == NONTERMINAL and children is None :
            children = []
        elif kind == TERMINAL and children is not None :
            raise ValueError("terminal nodes have no children")
        elif kind not in (TERMINAL, NONTERMINAL) :
            raise ValueError("invalid node kind %r" % kind)
        self.kind = kind
        self.value = value
        self.span = span
        self.children = children
        self.binding = binding
        self.typing_rule = typing_rule
        if rule is None and typing_rule is not None :
            rule = typing_rule.name
        self.rule = rule
    @classmethod
    def terminal (cls, value, span=None, binding=None) :
        return cls(TERMINAL, value, span=span, binding=binding)
    @classmethod
    def nonterminal (cls, value, children=[], span=None, binding=None,
                     typing_rule=None, rule=None) :
        return cls(NONTERMINAL, value, span=span, children=list(children),
                   binding=binding, typing_rule=typing_rule, rule=rule)
    def __repr__ (self) :
        """
        >>> ASTNode.terminal('+', Span(1, 2))
        <Terminal '+' [1:2]>
        >>> ASTNode.nonterminal('Lambda', binding='l', rule='lambda')
        <Nonterminal Lambda[l]@lambda (0 children)>
        """
        if self.span is None :
            span = ""
        else :
            span = " [%s:%s]" % (self.span.start, self.span.end)
        if self.kind == TERMINAL :
            return "<%s %r%s>" % (self.kind, self.value, span)
        return "<%s %s%s (%s children)>" % (self.kind, self._label(), span,
                                           len(self.children))
    def _label (self) :
        if self.kind == TERMINAL :
            label = "'%s'" % self.value
        else :
            label = self.value
        if self.binding is not None :
            label = "%s[%s]" % (label, self.binding)
        if self.rule is not None :
            label = "%s@%s" % (label, self.rule)
        return label
    def is_terminal (self) :
        return self.kind == TERMINAL
    def nodes (self) :
        """Iterate over the nodes of the tree, in pre-order

        >>> t = ASTNode.nonterminal('A', [ASTNode.terminal('a'),
        ...                               ASTNode.terminal('b')])
        >>> [n.value for n in t.nodes()]
        ['A', 'a', 'b']
        """
        yield self
        for child in self.children or [] :
            for node in child.nodes() :
                yield node
    def leaves (self) :
        return [node for node in self.nodes() if node.is_terminal()]
    def text (self) :
        """Return the tokens covered by the node, separated by spaces

        >>> ASTNode.nonterminal('A', [ASTNode.terminal('f'),
        ...                           ASTNode.terminal('x')]).text()
        'f x'
        """
        return " ".join(leaf.value for leaf in self.leaves())
    def lookup (self, binding) :
        """Find the first node below this one that carries a binding

        The search does not enter nodes that have their own typing
        rule since their bindings refer to their own premises.

        >>> inner = ASTNode.nonterminal('App', [ASTNode.terminal('f',
        ...                             binding='f')], rule='app')
        >>> outer = ASTNode.nonterminal('Term', [inner], rule='term')
        >>> outer.lookup('f') is None, inner.lookup('f').value
        (True, 'f')

        @param binding: the binding name to look for
        @type binding: `str`
        @return: the first node in pre-order with this binding, or
            `None`
        @rtype: `ASTNode`
        """
        for child in self.children or [] :
            if child.binding == binding :
                return child
            if child.rule is None :
                found = child.lookup(binding)
                if found is not None :
                    return found
        return None
    def pretty (self, indent=0) :
        """Return a human-readable representation of the tree

        >>> t = ASTNode.nonterminal('Expr', [ASTNode.terminal('1'),
        ...                                  ASTNode.nonterminal('E')],
        ...                         rule='e')
        >>> print(t.pretty())
        Expr@e (
          '1'
          E
        )
        """
        prefix = "  " * indent
        text = prefix + self._label()
        if self.children :
            lines = [text + " ("]
            lines.extend(child.pretty(indent + 1) for child in self.children)
            lines.append(prefix + ")")
            text = "\n".join(lines)
        return text

def syneq (left, right) :
    """Structural equality of syntax trees

    Nodes are equal when they have the same kind, value, binding and
    equal children in the same order. Spans and typing rules are not
    compared.

    >>> a = ASTNode.nonterminal('A', [ASTNode.terminal('x', Span(0, 1))])
    >>> b = ASTNode.nonterminal('A', [ASTNode.terminal('x')], rule='r')
    >>> syneq(a, b)
    True
    >>> b.children[0].binding = 'y'
    >>> syneq(a, b)
    False
    """
    if (left.kind != right.kind or left.value != right.value
        or left.binding != right.binding) :
        return False
    if left.children is None or right.children is None :
        return left.children is right.children
    if len(left.children) != len(right.children) :
        return False
    return all(syneq(l, r) for l, r in zip(left.children, right.children))
