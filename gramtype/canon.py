"""Canonical textual form of syntax trees

A nonterminal node is written `(N Name (r rule) (b binding) child...)`
and a terminal node `(T (b binding) "value")`, the `(r ...)` and
`(b ...)` parts being omitted when the node has no rule or no binding.
Trees with equal canonical forms are structurally equal (see
`gramtype.ast.syneq`), which makes the canonical form handy to write
down expected parse results.

>>> from gramtype.ast import ASTNode
>>> tree = ASTNode.nonterminal('Application', [
...     ASTNode.terminal('f', binding='f'),
...     ASTNode.terminal('"x"', binding='e')], rule='app')
>>> dumps(tree)
'(N Application (r app) (T (b f) "f") (T (b e) "\\\\"x\\\\""))'
>>> dumps(loads(dumps(tree))) == dumps(tree)
True
"""

from gramtype import NotationError
from gramtype.ast import ASTNode, TERMINAL, NONTERMINAL

_tags = {NONTERMINAL : "N",
         TERMINAL : "T"}

##
## encoding
##

def quote (text) :
    r"""Quote a terminal value

    >>> print(quote('a"b\\c'))
    "a\"b\\c"
    """
    return '"%s"' % text.replace("\\", "\\\\").replace('"', '\\"')

def dumps (node) :
    """Encode a syntax tree in canonical form

    >>> dumps(ASTNode.nonterminal('Term', binding='t'))
    '(N Term (b t))'

    @param node: the root of the tree
    @type node: `ASTNode`
    @rtype: `str`
    """
    parts = [_tags[node.kind]]
    if node.kind == NONTERMINAL :
        parts.append(node.value)
        if node.rule is not None :
            parts.append("(r %s)" % node.rule)
    if node.binding is not None :
        parts.append("(b %s)" % node.binding)
    if node.kind == NONTERMINAL :
        parts.extend(dumps(child) for child in node.children)
    else :
        parts.append(quote(node.value))
    return "(%s)" % " ".join(parts)

##
## decoding
##

class _Reader (object) :
    def __init__ (self, text, grammar) :
        self.text = text
        self.pos = 0
        self.grammar = grammar
    def error (self, message) :
        raise NotationError("%s at offset %s" % (message, self.pos),
                            self.text[self.pos:self.pos+20])
    def skip (self) :
        while self.pos < len(self.text) and self.text[self.pos].isspace() :
            self.pos += 1
    def peek (self, prefix) :
        self.skip()
        return self.text.startswith(prefix, self.pos)
    def expect (self, prefix) :
        if not self.peek(prefix) :
            self.error("expected %r" % prefix)
        self.pos += len(prefix)
    def word (self) :
        self.skip()
        start = self.pos
        while (self.pos < len(self.text)
               and not self.text[self.pos].isspace()
               and self.text[self.pos] not in '()"') :
            self.pos += 1
        if start == self.pos :
            self.error("expected a name")
        return self.text[start:self.pos]
    def string (self) :
        self.expect('"')
        chars = []
        while self.pos < len(self.text) :
            char = self.text[self.pos]
            self.pos += 1
            if char == '"' :
                return "".join(chars)
            elif char == "\\" :
                if self.pos >= len(self.text) :
                    break
                char = self.text[self.pos]
                if char not in '"\\' :
                    self.error("invalid escape")
                self.pos += 1
            chars.append(char)
        self.error("unterminated string")
    def attribute (self, key) :
        # (key value) or None, value runs up to the closing parenthesis
        self.skip()
        if not self.text.startswith("(%s " % key, self.pos) :
            return None
        self.pos += len(key) + 1
        self.skip()
        start = self.pos
        while (self.pos < len(self.text)
               and self.text[self.pos] not in '()"') :
            self.pos += 1
        value = self.text[start:self.pos].strip()
        if not value :
            self.error("expected a name")
        self.expect(")")
        return value
    def node (self) :
        self.expect("(")
        tag = self.word()
        if tag == "N" :
            name = self.word()
            rule = self.attribute("r")
            binding = self.attribute("b")
            children = []
            while not self.peek(")") :
                if self.pos >= len(self.text) :
                    self.error("expected ')'")
                children.append(self.node())
            self.expect(")")
            typing_rule = None
            if rule is not None and self.grammar is not None :
                typing_rule = self.grammar.typing_rules.get(rule)
            return ASTNode.nonterminal(name, children, binding=binding,
                                       typing_rule=typing_rule, rule=rule)
        elif tag == "T" :
            binding = self.attribute("b")
            value = self.string()
            self.expect(")")
            return ASTNode.terminal(value, binding=binding)
        self.pos -= len(tag)
        self.error("unknown node tag %r" % tag)

def loads (text, grammar=None) :
    """Decode a syntax tree from its canonical form

    >>> loads('(N Var (r var) (T (b x) "y"))').pretty()
    "Var@var (\\n  'y'[x]\\n)"
    >>> loads('(N Var (r my var) (T "y"))').rule
    'my var'
    >>> loads('(N Var (T "y")')
    Traceback (most recent call last):
     ...
    gramtype.NotationError: expected ')' at offset 14
    >>> loads('(X a)')
    Traceback (most recent call last):
     ...
    gramtype.NotationError: unknown node tag 'X' at offset 1

    @param text: the canonical form
    @type text: `str`
    @param grammar: if given, rule names are resolved to the typing
        rules of this grammar
    @type grammar: `Grammar`
    @rtype: `ASTNode`
    @raise NotationError: when the text is not a canonical form
    """
    reader = _Reader(text, grammar)
    node = reader.node()
    reader.skip()
    if reader.pos < len(text) :
        reader.error("trailing data")
    return node
