"""Typing rules in natural-deduction notation.

A typing rule is made of premises and a conclusion, written as in

    Γ ⊢ f : τ₁ → τ₂, Γ ⊢ e : τ₁
    ---------------------------- (app)
    τ₂

Premises have four forms: a typing judgment (`Γ,x:τ ⊢ e : σ`), a
context membership (`x ∈ Γ`), a relation between two types
(`τ₁ = τ₂`, `τ₁ <: τ₂`, ...) and a compound premise that groups other
premises between parentheses. Conclusions are either a type
expression, a typing judgment or a context lookup `Γ(x)`.

>>> rule = TypingRule.parse('app', 'Γ ⊢ f : τ₁ → τ₂, Γ ⊢ e : τ₁', 'τ₂')
>>> rule.premises[0]
JudgmentPremise(TypingJudgment([], 'f', 'τ₁ → τ₂'))
>>> rule.conclusion
TypeValue('τ₂')
>>> print(rule)
Γ ⊢ f : τ₁ → τ₂, Γ ⊢ e : τ₁
-------------------- (app)
τ₂

All these objects are immutable values: they are compared and hashed
structurally.

>>> rule == TypingRule.parse('app', 'Γ ⊢ f:τ₁ → τ₂,Γ ⊢ e:τ₁', ' τ₂ ')
True
"""

import re
from gramtype import NotationError

CONTEXT = "Γ"
TURNSTILE = "⊢"
MEMBERSHIP = "∈"
ARROW = "→"
RELATION_SYMBOLS = ("=", "<", "∈", "⊆", "⊂", "⊃", "⊇", ":")
TYPE_GLYPHS = "_ →λ?"

_lookup = re.compile(r"^%s\((.+)\)$" % CONTEXT)
_extension = re.compile(r"^\s*[^,:%s]+:[^,%s]+$" % (TURNSTILE, TURNSTILE))

##
## base class for value objects
##

class _Value (object) :
    """Base class for the immutable values of this module. Subclasses
    list their fields in `_fields`.
    """
    _fields = ()
    def _key (self) :
        return tuple(getattr(self, name) for name in self._fields)
    def __setattr__ (self, name, value) :
        if name in self._fields and name in self.__dict__ :
            raise AttributeError("%s object is immutable"
                                 % self.__class__.__name__)
        object.__setattr__(self, name, value)
    def __eq__ (self, other) :
        return (self.__class__ is other.__class__
                and self._key() == other._key())
    def __ne__ (self, other) :
        return not self.__eq__(other)
    def __hash__ (self) :
        return hash((self.__class__.__name__,) + self._key())
    def __repr__ (self) :
        return "%s(%s)" % (self.__class__.__name__,
                           ", ".join(repr(v) for v in self._reprargs()))
    def _reprargs (self) :
        return [list(v) if isinstance(v, tuple) else v for v in self._key()]

##
## judgments
##

class TypingExtension (_Value) :
    """One binding `x:τ` added to a context

    >>> ext = TypingExtension('x', 'τ₁')
    >>> ext, str(ext)
    (TypingExtension('x', 'τ₁'), 'x:τ₁')
    >>> ext.variable = 'y'
    Traceback (most recent call last):
     ...
    AttributeError: TypingExtension object is immutable
    """
    _fields = ("variable", "type_expr")
    def __init__ (self, variable, type_expr) :
        self.variable = variable
        self.type_expr = type_expr
    def __str__ (self) :
        return "%s:%s" % (self.variable, self.type_expr)

class TypingJudgment (_Value) :
    """A judgment `Γ,x:τ ⊢ e : σ`: the context, possibly extended,
    proves that expression `e` has type `σ`

    >>> j = TypingJudgment([TypingExtension('x', 'τ')], 'e', 'σ')
    >>> str(j)
    'Γ,x:τ ⊢ e : σ'
    >>> str(TypingJudgment([], 'e', 'σ'))
    'Γ ⊢ e : σ'
    """
    _fields = ("extensions", "expression", "type_expr")
    def __init__ (self, extensions, expression, type_expr) :
        """
        @param extensions: the bindings added to the context
        @type extensions: `list` of `TypingExtension`
        @param expression: the expression being typed
        @type expression: `str`
        @param type_expr: its type
        @type type_expr: `str`
        """
        self.extensions = tuple(extensions)
        self.expression = expression
        self.type_expr = type_expr
    def context (self) :
        return ",".join([CONTEXT] + [str(e) for e in self.extensions])
    def __str__ (self) :
        return "%s %s %s : %s" % (self.context(), TURNSTILE,
                                  self.expression, self.type_expr)

##
## premises
##

class Premise (_Value) :
    """Base class for premises. This class is abstract, use one of
    `JudgmentPremise`, `Membership`, `TypeRelation` or `Compound`.
    """
    def __init__ (self) :
        raise NotImplementedError("abstract class")

class JudgmentPremise (Premise) :
    """A typing judgment used as a premise

    >>> str(JudgmentPremise(TypingJudgment([], 'e', 'τ')))
    'Γ ⊢ e : τ'
    """
    _fields = ("judgment",)
    def __init__ (self, judgment) :
        self.judgment = judgment
    def __str__ (self) :
        return str(self.judgment)

class Membership (Premise) :
    """A membership premise `x ∈ Γ`

    >>> str(Membership('x', 'Γ'))
    'x ∈ Γ'
    """
    _fields = ("variable", "context")
    def __init__ (self, variable, context) :
        self.variable = variable
        self.context = context
    def __str__ (self) :
        return "%s %s %s" % (self.variable, MEMBERSHIP, self.context)

class TypeRelation (Premise) :
    """A relation between two types, for instance `τ₁ <: τ₂`

    >>> str(TypeRelation('τ₁', 'τ₂', '<:'))
    'τ₁ <: τ₂'
    """
    _fields = ("left_type", "right_type", "relation")
    def __init__ (self, left_type, right_type, relation) :
        self.left_type = left_type
        self.right_type = right_type
        self.relation = relation
    def __str__ (self) :
        return "%s %s %s" % (self.left_type, self.relation, self.right_type)

class Compound (Premise) :
    """A group of premises, written between parentheses

    >>> c = Compound([Membership('x', 'Γ'), TypeRelation('τ', 'σ', '=')])
    >>> str(c)
    '(x ∈ Γ, τ = σ)'
    """
    _fields = ("premises",)
    def __init__ (self, premises) :
        self.premises = tuple(premises)
    def __str__ (self) :
        return "(%s)" % format_premises(self.premises)

##
## conclusions
##

class Conclusion (_Value) :
    """Base class for conclusions. This class is abstract, use one of
    `TypeValue`, `JudgmentConclusion` or `ContextLookup`.
    """
    def __init__ (self) :
        raise NotImplementedError("abstract class")

class TypeValue (Conclusion) :
    "The conclusion is the value of a type expression"
    _fields = ("type_expr",)
    def __init__ (self, type_expr) :
        self.type_expr = type_expr
    def __str__ (self) :
        return self.type_expr

class JudgmentConclusion (Conclusion) :
    "The conclusion is a typing judgment"
    _fields = ("judgment",)
    def __init__ (self, judgment) :
        self.judgment = judgment
    def __str__ (self) :
        return str(self.judgment)

class ContextLookup (Conclusion) :
    """The conclusion is the type of a variable found in the context

    >>> str(ContextLookup('x'))
    'Γ(x)'
    """
    _fields = ("variable",)
    def __init__ (self, variable) :
        self.variable = variable
    def __str__ (self) :
        return "%s(%s)" % (CONTEXT, self.variable)

##
## typing rules
##

class TypingRule (_Value) :
    """A named inference rule

    Rules are identified by their name in a grammar, but two rules
    are equal only if they also have the same premises and
    conclusion.
    """
    _fields = ("name", "premises", "conclusion")
    def __init__ (self, name, premises, conclusion) :
        """
        @param name: the rule name
        @type name: `str`
        @param premises: the hypotheses of the rule
        @type premises: `list` of `Premise`
        @param conclusion: the goal of the rule
        @type conclusion: `Conclusion`
        """
        self.name = name
        self.premises = tuple(premises)
        self.conclusion = conclusion
    @classmethod
    def parse (cls, name, premises, conclusion) :
        """Build a rule from the text of its premises and conclusion

        >>> r = TypingRule.parse('var', 'x ∈ Γ', 'Γ(x)')
        >>> r.premises, r.conclusion
        ((Membership('x', 'Γ'),), ContextLookup('x'))
        >>> TypingRule.parse('axiom', '', 'Bool').premises
        ()
        >>> TypingRule.parse('bad', 'x ~ y', 'τ')
        Traceback (most recent call last):
         ...
        gramtype.NotationError: unknown premise format: x ~ y

        @param name: the rule name
        @type name: `str`
        @param premises: the premises, separated by commas
        @type premises: `str`
        @param conclusion: the conclusion
        @type conclusion: `str`
        @rtype: `TypingRule`
        @raise NotationError: when the notation is malformed
        """
        return cls(name.strip(), parse_premises(premises),
                   parse_conclusion(conclusion))
    def __str__ (self) :
        conclusion = str(self.conclusion)
        line = "-" * max(20, len(conclusion) + 5)
        text = "%s (%s)\n%s" % (line, self.name, conclusion)
        if self.premises :
            return "%s\n%s" % (format_premises(self.premises), text)
        return text

def format_premises (premises) :
    """Render premises back into their surface notation

    >>> format_premises([Membership('x', 'Γ'),
    ...                  JudgmentPremise(TypingJudgment(
    ...                      [TypingExtension('x', 'τ')], 'e', 'σ'))])
    'x ∈ Γ, Γ,x:τ ⊢ e : σ'
    """
    return ", ".join(str(p) for p in premises)

##
## notation parsing
##

def validate_type_expr (expr) :
    """Check that a text is a well-formed type expression

    >>> validate_type_expr('τ₁ → τ₂'), validate_type_expr('P -> Q')
    (True, True)
    >>> validate_type_expr('?B'), validate_type_expr('Int_32')
    (True, True)
    >>> validate_type_expr(''), validate_type_expr('τ + σ')
    (False, False)

    @param expr: the text to check
    @type expr: `str`
    @rtype: `bool`
    """
    expr = expr.strip().replace("->", ARROW)
    return bool(expr) and all(c.isalnum() or c in TYPE_GLYPHS for c in expr)

def parse_context_extensions (context) :
    """Parse a context like `Γ,x:τ₁,y:τ₂`

    >>> parse_context_extensions('Γ,x:τ₁,y:τ₂')
    ('Γ', [('x', 'τ₁'), ('y', 'τ₂')])
    >>> parse_context_extensions(' Γ ')
    ('Γ', [])
    >>> parse_context_extensions('x:τ')
    Traceback (most recent call last):
     ...
    gramtype.NotationError: context must start with 'Γ', got 'x:τ'
    >>> parse_context_extensions('Γ,xτ')
    Traceback (most recent call last):
     ...
    gramtype.NotationError: invalid context extension, expected 'var:type': xτ

    @param context: the context text
    @type context: `str`
    @return: the base context and the list of (variable, type) pairs
    @rtype: `tuple`
    @raise NotationError: if the base is not `Γ` or an extension is
        malformed
    """
    parts = context.strip().split(",")
    base = parts[0].strip()
    if base != CONTEXT :
        raise NotationError("context must start with %r, got %r"
                            % (CONTEXT, base), context)
    extensions = []
    for ext in parts[1:] :
        ext = ext.strip()
        if not ext :
            continue
        pair = [p.strip() for p in ext.split(":")]
        if len(pair) != 2 or not all(pair) :
            raise NotationError("invalid context extension, expected"
                                " 'var:type': %s" % ext, ext)
        extensions.append(tuple(pair))
    return base, extensions

def parse_judgment (text) :
    """Parse a typing judgment

    >>> j = parse_judgment('Γ,x:τ₁,y:τ₂ ⊢ e : σ')
    >>> j.extensions
    (TypingExtension('x', 'τ₁'), TypingExtension('y', 'τ₂'))
    >>> j.expression, j.type_expr
    ('e', 'σ')
    >>> parse_judgment('Γ ⊢ e')
    Traceback (most recent call last):
     ...
    gramtype.NotationError: invalid typing judgment format: Γ ⊢ e

    @param text: the judgment text
    @type text: `str`
    @rtype: `TypingJudgment`
    @raise NotationError: if the judgment is malformed
    """
    parts = [p.strip() for p in text.split(TURNSTILE)]
    if len(parts) != 2 :
        raise NotationError("invalid typing judgment format: %s"
                            % text.strip(), text)
    _, extensions = parse_context_extensions(parts[0])
    typed = [p.strip() for p in parts[1].split(":")]
    if len(typed) != 2 or not all(typed) :
        raise NotationError("invalid typing judgment format: %s"
                            % text.strip(), text)
    return TypingJudgment([TypingExtension(v, t) for v, t in extensions],
                          typed[0], typed[1])

def parse_membership (text) :
    """Parse a membership `x ∈ Γ` into a pair (variable, context)

    >>> parse_membership(' x ∈ Γ ')
    ('x', 'Γ')
    >>> parse_membership('x ∈ Γ ∈ Δ')
    Traceback (most recent call last):
     ...
    gramtype.NotationError: invalid membership format: x ∈ Γ ∈ Δ
    """
    parts = [p.strip() for p in text.split(MEMBERSHIP)]
    if len(parts) != 2 or not all(parts) :
        raise NotationError("invalid membership format: %s" % text.strip(),
                            text)
    return parts[0], parts[1]

def parse_type_relation (text) :
    """Parse a relation between types into (left, right, relation)

    The relation is the first run of relation symbols, everything
    after it is the right-hand side.

    >>> parse_type_relation('τ₁ <: τ₂')
    ('τ₁', 'τ₂', '<:')
    >>> parse_type_relation('σ = τ → τ')
    ('σ', 'τ → τ', '=')
    >>> parse_type_relation('= τ')
    Traceback (most recent call last):
     ...
    gramtype.NotationError: invalid type relation format: = τ
    >>> parse_type_relation('τ σ')
    Traceback (most recent call last):
     ...
    gramtype.NotationError: no relation symbol found in: τ σ
    """
    left, relation, right = [], [], []
    for char in text :
        if right :
            right.append(char)
        elif char in RELATION_SYMBOLS :
            relation.append(char)
        elif relation :
            right.append(char)
        else :
            left.append(char)
    if not relation :
        raise NotationError("no relation symbol found in: %s" % text.strip(),
                            text)
    left = "".join(left).strip()
    right = "".join(right).strip()
    if not (left and right) :
        raise NotationError("invalid type relation format: %s"
                            % text.strip(), text)
    return left, right, "".join(relation)

def _split_toplevel (text) :
    # split on commas outside of parentheses and brackets
    parts, depth, current = [], 0, []
    for char in text :
        if char in "([" :
            depth += 1
        elif char in ")]" :
            depth -= 1
        if char == "," and depth == 0 :
            parts.append("".join(current))
            current = []
        else :
            current.append(char)
    parts.append("".join(current))
    return parts

def _is_context_prefix (text) :
    # 'Γ' or 'Γ,x:τ,...' that still waits for its turnstile
    parts = text.split(",")
    return (parts[0].strip() == CONTEXT
            and all(_extension.match(p) for p in parts[1:]))

def split_premises (text) :
    """Split premises on their top-level commas

    Commas of a context like `Γ,x:τ` do not separate premises, nor
    those inside parentheses.

    >>> split_premises('Γ,x:τ₁ ⊢ e : τ₂, x ∈ Γ')
    ['Γ,x:τ₁ ⊢ e : τ₂', 'x ∈ Γ']
    >>> split_premises('(x ∈ Γ, y ∈ Γ), τ = σ,, ')
    ['(x ∈ Γ, y ∈ Γ)', 'τ = σ']

    @param text: the premises
    @type text: `str`
    @return: the non-empty premises, stripped
    @rtype: `list` of `str`
    """
    merged = []
    for part in _split_toplevel(text) :
        if merged and _is_context_prefix(merged[-1]) and part.strip() :
            merged[-1] = "%s,%s" % (merged[-1], part)
        else :
            merged.append(part)
    return [p.strip() for p in merged if p.strip()]

def _is_group (text) :
    if not (text.startswith("(") and text.endswith(")")) :
        return False
    depth = 0
    for pos, char in enumerate(text) :
        if char == "(" :
            depth += 1
        elif char == ")" :
            depth -= 1
            if depth == 0 and pos < len(text) - 1 :
                return False
    return True

def parse_premise (text) :
    """Parse one premise

    Forms are tried in this order: compound (the whole premise is
    between parentheses), typing judgment (contains `⊢`), membership
    (contains `∈`) and then type relation.

    >>> parse_premise('Γ,x:τ ⊢ e : σ')
    JudgmentPremise(TypingJudgment([TypingExtension('x', 'τ')], 'e', 'σ'))
    >>> parse_premise('x ∈ Γ')
    Membership('x', 'Γ')
    >>> parse_premise('τ₁ ⊆ τ₂')
    TypeRelation('τ₁', 'τ₂', '⊆')
    >>> parse_premise('(x ∈ Γ, τ = σ)')
    Compound([Membership('x', 'Γ'), TypeRelation('τ', 'σ', '=')])
    >>> parse_premise('whatever')
    Traceback (most recent call last):
     ...
    gramtype.NotationError: unknown premise format: whatever

    @param text: the premise
    @type text: `str`
    @rtype: `Premise`
    @raise NotationError: when no form matches or the matching form
        is malformed
    """
    text = text.strip()
    if _is_group(text) :
        return Compound(parse_premises(text[1:-1]))
    elif TURNSTILE in text :
        return JudgmentPremise(parse_judgment(text))
    elif MEMBERSHIP in text :
        return Membership(*parse_membership(text))
    elif any(sym in text for sym in RELATION_SYMBOLS) :
        return TypeRelation(*parse_type_relation(text))
    raise NotationError("unknown premise format: %s" % text, text)

def parse_premises (text) :
    """Parse a list of premises separated by commas

    >>> parse_premises('Γ ⊢ f : τ → σ, Γ ⊢ e : τ')
    [JudgmentPremise(TypingJudgment([], 'f', 'τ → σ')), JudgmentPremise(TypingJudgment([], 'e', 'τ'))]
    >>> parse_premises('  ')
    []
    """
    return [parse_premise(p) for p in split_premises(text)]

def parse_conclusion (text) :
    """Parse a conclusion

    >>> parse_conclusion('Γ(x)')
    ContextLookup('x')
    >>> parse_conclusion('Γ ⊢ e : τ')
    JudgmentConclusion(TypingJudgment([], 'e', 'τ'))
    >>> parse_conclusion('τ₁ → τ₂')
    TypeValue('τ₁ → τ₂')
    >>> parse_conclusion("'int'")
    Traceback (most recent call last):
     ...
    gramtype.NotationError: invalid conclusion format: 'int'

    @param text: the conclusion
    @type text: `str`
    @rtype: `Conclusion`
    @raise NotationError: if the conclusion is malformed
    """
    text = text.strip()
    match = _lookup.match(text)
    if match :
        return ContextLookup(match.group(1).strip())
    elif TURNSTILE in text :
        return JudgmentConclusion(parse_judgment(text))
    elif validate_type_expr(text) :
        return TypeValue(text)
    raise NotationError("invalid conclusion format: %s" % text, text)
