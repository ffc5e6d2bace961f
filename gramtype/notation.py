"""Reader and writer for the textual grammar notation.

A specification is made of blocks separated by blank lines. A block
that contains `::=` holds productions:

    Expr ::= Term[t] '+' Expr[e] | Term[t]
    Lambda(lambda) ::= 'λ' Variable[x] '.' Term[e]
    Number ::= /[0-9]+/
             | Number '.' /[0-9]+/

A block that contains a dashed line holds one inference rule, with
its premises above the line, its name in parentheses after the line
and its conclusion below:

    Γ,x:τ₁ ⊢ e : τ₂
    ---------------- (lambda)
    τ₁ → τ₂

Lines starting with `//` are comments.

>>> g = read('''
... // lambda calculus
... Variable(var) ::= /[a-z]+/
... Term ::= Variable[v] | '(' Term ')'
...
... x ∈ Γ
... ------ (var)
... Γ(x)
... ''')
>>> g.productions['Term']
[Production([Symbol('Variable', 'v')]), Production([Symbol("'('"), Symbol('Term'), Symbol("')'")])]
>>> g.typing_rules['var']
TypingRule('var', [Membership('x', 'Γ')], ContextLookup('x'))
>>> print(write(g))
// --- Production Rules ---
Term ::= Variable[v] | '(' Term ')'
Variable(var) ::= /[a-z]+/
<BLANKLINE>
// --- Typing Rules ---
x ∈ Γ
-------------------- (var)
Γ(x)
<BLANKLINE>
>>> read(write(g)) == g
True
"""

import re
from gramtype import NotationError
from gramtype.debug import warn
from gramtype.grammar import Grammar, Production, Symbol, is_regex, is_quoted
from gramtype.typing import TypingRule, format_premises

_blank = re.compile(r"\n[ \t\r\f\v]*\n")
_dashes = re.compile(r"^-{3,}")
_name_at_end = re.compile(r"\(([^()]+)\)\s*$")
_name_after = re.compile(r"\s\(([^()]+)\)\s*$")
_binding = re.compile(r"^(.+)\[([^\[\]]+)\]$")

##
## reader
##

def strip_comments (lines) :
    """Strip lines, drop empty ones and comments

    >>> strip_comments(['  A ::= B  ', '', '// comment', '  | C'])
    ['A ::= B', '| C']
    """
    return [line.strip() for line in lines
            if line.strip() and not line.strip().startswith("//")]

def split_blocks (text) :
    """Split a specification into blocks of (stripped) lines

    >>> split_blocks('A ::= x\\n  \\n// c\\nB ::= y\\n\\n\\n// only comments')
    [['A ::= x'], ['B ::= y']]
    """
    blocks = []
    for block in _blank.split(text.replace("\r\n", "\n")) :
        lines = strip_comments(block.split("\n"))
        if lines :
            blocks.append(lines)
    return blocks

def is_separator (line) :
    """Check whether a line is the dashed separator of an inference
    rule

    >>> is_separator('----- (app)'), is_separator('--'), is_separator('P -> Q')
    (True, False, False)
    """
    return bool(_dashes.match(line))

def parse_production_line (line) :
    """Split a production into its left and right-hand sides

    >>> parse_production_line("Lambda(lambda) ::= 'λ' Term[e]")
    ('Lambda(lambda)', "'λ' Term[e]")
    >>> parse_production_line("Lambda 'λ' Term[e]")
    Traceback (most recent call last):
     ...
    gramtype.NotationError: invalid production line: Lambda 'λ' Term[e]
    """
    if "::=" not in line :
        raise NotationError("invalid production line: %s" % line, line)
    lhs, rhs = line.split("::=", 1)
    return lhs.strip(), rhs.strip()

def parse_nonterminal (lhs) :
    """Parse a left-hand side `Name` or `Name(rule)`

    >>> parse_nonterminal('Lambda(lambda)'), parse_nonterminal(' Term ')
    (('Lambda', 'lambda'), ('Term', None))
    >>> parse_nonterminal('Term()')
    ('Term', None)
    >>> parse_nonterminal('(rule)')
    Traceback (most recent call last):
     ...
    gramtype.NotationError: missing nonterminal name in '(rule)'
    """
    lhs = lhs.strip()
    rule = None
    start, end = lhs.find("("), lhs.rfind(")")
    if 0 <= start < end :
        rule = lhs[start+1:end].strip() or None
        lhs = lhs[:start].strip()
    if not lhs or any(c.isspace() for c in lhs) :
        raise NotationError("missing nonterminal name in %r"
                            % (lhs if rule is None else "%s(%s)" % (lhs, rule)),
                            lhs)
    return lhs, rule

def parse_symbol (token) :
    """Parse one symbol of a right-hand side

    >>> parse_symbol('Variable[x]'), parse_symbol('/[0-9]+/')
    (Symbol('Variable', 'x'), Symbol('/[0-9]+/'))
    >>> parse_symbol('/[a-z][a-z0-9]*/[x]'), parse_symbol("'+'[op]")
    (Symbol('/[a-z][a-z0-9]*/', 'x'), Symbol("'+'", 'op'))
    >>> parse_symbol('Type[τ₁]'), parse_symbol('x[]')
    (Symbol('Type', 'τ₁'), Symbol('x[]'))
    """
    if is_regex(token) :
        return Symbol(token)
    match = _binding.match(token)
    if match :
        value, binding = match.groups()
        if is_regex(value) or not value.startswith("/") :
            return Symbol(value, binding)
    return Symbol(token)

def _split_alternatives (rhs) :
    # split on '|' but never inside quoted literals or regexps
    alternatives = [[]]
    for token in rhs.split() :
        value = _binding.sub(r"\1", token)
        if is_quoted(value) or is_regex(value) :
            alternatives[-1].append(token)
            continue
        parts = token.split("|")
        for num, part in enumerate(parts) :
            if num > 0 :
                alternatives.append([])
            if part :
                alternatives[-1].append(part)
    return alternatives

def parse_rhs (rhs) :
    """Parse a right-hand side into its alternatives

    >>> parse_rhs("Term[t] '+' Expr[e] | Term[t]")
    [[Symbol('Term', 't'), Symbol("'+'"), Symbol('Expr', 'e')], [Symbol('Term', 't')]]
    >>> parse_rhs("'|' | A|B")
    [[Symbol("'|'")], [Symbol('A')], [Symbol('B')]]

    @param rhs: the right-hand side
    @type rhs: `str`
    @return: the non-empty alternatives
    @rtype: `list` of `list` of `Symbol`
    """
    return [[parse_symbol(tok) for tok in alt]
            for alt in _split_alternatives(rhs) if alt]

def special_tokens (rhs) :
    """Find the quoted literals of a right-hand side, in order of
    first appearance and without their quotes

    >>> special_tokens("'(' Term ')' | '(' Term ',' Term ')' | \\"'\\"")
    ['(', ')', ',', "'"]
    """
    found = []
    for alt in _split_alternatives(rhs) :
        for token in alt :
            value = parse_symbol(token).value
            if is_quoted(value) and value[1:-1] not in found :
                found.append(value[1:-1])
    return found

def parse_inference_rule (lines) :
    """Parse the lines of an inference rule block

    The rule name is taken after the dashed line, or after the
    conclusion if it is not found there. Several lines of premises
    are joined with commas.

    >>> parse_inference_rule(['x ∈ Γ', '---- (var)', 'Γ(x)'])
    TypingRule('var', [Membership('x', 'Γ')], ContextLookup('x'))
    >>> parse_inference_rule(['----', 'Bool (true)'])
    TypingRule('true', [], TypeValue('Bool'))
    >>> parse_inference_rule(['x ∈ Γ', '----', 'Γ(x)'])
    Traceback (most recent call last):
     ...
    gramtype.NotationError: typing rule has no name
    >>> parse_inference_rule(['x ∈ Γ', '---- (var)'])
    Traceback (most recent call last):
     ...
    gramtype.NotationError: no conclusion after dashed line in rule 'var'

    @param lines: the stripped lines of the block
    @type lines: `list` of `str`
    @rtype: `TypingRule`
    @raise NotationError: when the rule is malformed
    """
    for sep, line in enumerate(lines) :
        if is_separator(line) :
            break
    else :
        raise NotationError("no dashed line in typing rule",
                            "\n".join(lines))
    premises = ", ".join(lines[:sep])
    name = None
    match = _name_at_end.search(lines[sep])
    if match :
        name = match.group(1).strip()
    if sep + 1 < len(lines) :
        conclusion = lines[sep+1]
        if name is None :
            match = _name_after.search(conclusion)
            if match :
                name = match.group(1).strip()
                conclusion = conclusion[:match.start()].strip()
    else :
        conclusion = None
    if not name :
        raise NotationError("typing rule has no name", "\n".join(lines))
    elif conclusion is None :
        raise NotationError("no conclusion after dashed line in rule %r"
                            % name, "\n".join(lines))
    return TypingRule.parse(name, premises, conclusion)

def read_productions (lines, grammar) :
    """Read the productions of a block into a grammar

    A line with `::=` starts a new nonterminal, the following lines
    starting with `|` add alternatives to it.
    """
    assert any("::=" in line for line in lines)
    num = 0
    while num < len(lines) :
        line = lines[num]
        num += 1
        if "::=" not in line :
            warn("ignored line in productions: %s" % line)
            continue
        text = [line]
        while num < len(lines) and lines[num].startswith("|") :
            text.append(lines[num])
            num += 1
        lhs, rhs = parse_production_line(" ".join(text))
        name, rule = parse_nonterminal(lhs)
        for tok in special_tokens(rhs) :
            grammar.add_special_token(tok)
        for symbols in parse_rhs(rhs) :
            grammar.add_production(name, Production(symbols, rule))

def read (text, grammar=None) :
    """Read a specification into a grammar

    @param text: the specification
    @type text: `str`
    @param grammar: the grammar to extend (a new one by default)
    @type grammar: `Grammar`
    @return: the grammar
    @rtype: `Grammar`
    @raise NotationError: when the specification is malformed
    """
    if grammar is None :
        grammar = Grammar()
    for lines in split_blocks(text) :
        if any("::=" in line for line in lines) :
            read_productions(lines, grammar)
        elif any(is_separator(line) for line in lines) :
            grammar.add_typing_rule(parse_inference_rule(lines))
        else :
            raise NotationError("neither productions nor typing rule: %s"
                                % lines[0], "\n".join(lines))
    return grammar

##
## writer
##

def _isname (text) :
    return all(c.isalnum() or c == "_" for c in text)

def format_symbol (symbol) :
    """Render a symbol

    >>> format_symbol(Symbol('Term', 'e')), format_symbol(Symbol('+'))
    ('Term[e]', "'+'")
    >>> format_symbol(Symbol('/[0-9]+/')), format_symbol(Symbol('Base_Term'))
    ('/[0-9]+/', 'Base_Term')
    """
    value = symbol.value
    if is_quoted(value) or is_regex(value) or _isname(value) :
        text = value
    else :
        text = "'%s'" % value
    if symbol.binding is None :
        return text
    return "%s[%s]" % (text, symbol.binding)

def format_rhs (symbols) :
    return " ".join(format_symbol(s) for s in symbols)

def format_conclusion (conclusion) :
    """
    >>> from gramtype.typing import parse_conclusion
    >>> format_conclusion(parse_conclusion('Γ,x:τ ⊢ e : σ'))
    'Γ,x:τ ⊢ e : σ'
    """
    return str(conclusion)

def format_rule (rule) :
    lines = []
    if rule.premises :
        lines.append(format_premises(rule.premises))
    conclusion = format_conclusion(rule.conclusion)
    lines.append("%s (%s)" % ("-" * max(20, len(conclusion) + 5), rule.name))
    lines.append(conclusion)
    return "\n".join(lines)

def _lhs (name, rule) :
    if rule is None :
        return name
    return "%s(%s)" % (name, rule)

def write (grammar) :
    """Produce the textual specification of a grammar

    Nonterminals and typing rules are sorted by name. Consecutive
    alternatives attached to the same rule share a line.

    >>> g = read("A(r) ::= 'a' | 'b'\\nA ::= 'c'\\nA(r) ::= 'd'")
    >>> print(write(g))
    // --- Production Rules ---
    A(r) ::= 'a' | 'b'
    A ::= 'c'
    A(r) ::= 'd'
    <BLANKLINE>

    @param grammar: the grammar to write
    @type grammar: `Grammar`
    @rtype: `str`
    """
    out = ["// --- Production Rules ---"]
    for name in sorted(grammar.productions) :
        line, rule = None, None
        for prod in grammar.productions[name] :
            if line is not None and prod.rule == rule :
                line = "%s | %s" % (line, format_rhs(prod.rhs))
                continue
            if line is not None :
                out.append(line)
            rule = prod.rule
            line = "%s ::= %s" % (_lhs(name, rule), format_rhs(prod.rhs))
        if line is not None :
            out.append(line)
    if grammar.typing_rules :
        out.append("")
        out.append("// --- Typing Rules ---")
        for name in sorted(grammar.typing_rules) :
            out.append(format_rule(grammar.typing_rules[name]))
            out.append("")
        out.pop(-1)
    return "\n".join(out) + "\n"
