"""Ready-made grammar specifications

>>> list_grammars()
['arith', 'lambda', 'propositional', 'stlc']
>>> from gramtype.grammar import Grammar
>>> g = Grammar.loads(get_grammar('stlc'))
>>> sorted(g.typing_rules)
['app', 'lambda', 'var']
>>> get_grammar('sql')
Traceback (most recent call last):
 ...
KeyError: "unknown grammar 'sql' (available: arith, lambda, propositional, stlc)"
"""

STLC = """
// simply typed lambda calculus

// identifiers
Identifier ::= /[a-zA-Z][a-zA-Z0-9_]*/

// variables
Variable(var) ::= Identifier[x]

// types, arrow is right-associative
TypeName ::= Identifier
BaseType ::= TypeName | '(' Type ')'
Type ::= BaseType[τ₁] '->' Type[τ₂] | BaseType[τ]

// typed parameters
TypedParam ::= Variable[x] ':' Type[τ]

// abstractions
Lambda(lambda) ::= 'λ' TypedParam '.' Term[e]

// terms that are not applications
BaseTerm ::= Variable | Lambda | '(' Term ')'

// applications
Application(app) ::= BaseTerm[f] BaseTerm[e]

Term ::= Application[e] | BaseTerm[e]

// typing rules
x ∈ Γ
------------ (var)
Γ(x)

Γ,x:τ₁ ⊢ e : τ₂
--------------------------- (lambda)
τ₁ → τ₂

Γ ⊢ f : τ₁ → τ₂, Γ ⊢ e : τ₁
-------------------------------- (app)
τ₂
"""

ARITH = """
// arithmetic expressions
Expr(add) ::= Term[t] '+' Expr[e]
Expr ::= Term[t]
Term(mul) ::= Factor[f] '*' Term[t]
Term ::= Factor[f]
Factor ::= '(' Expr[e] ')' | Number[n]
Number(num) ::= /[0-9]+/

-------------------- (num)
Int

Γ ⊢ t : Int, Γ ⊢ e : Int
----------------------------- (add)
Int

Γ ⊢ f : Int, Γ ⊢ t : Int
----------------------------- (mul)
Int
"""

LAMBDA = """
// a subset of the lambda calculus, applications are parenthesized
Variable(var) ::= /[a-zA-Z][a-zA-Z0-9_]*/

Lambda(lambda) ::= 'λ' Variable[x] '.' Term[e]

Application(app) ::= Term[f] Term[e]

Term ::= Variable[v] | Lambda[l] | '(' Application[a] ')'

x ∈ Γ
------------ (var)
Γ(x)

Γ,x:τ₁ ⊢ e : τ₂
--------------------------- (lambda)
τ₁ → τ₂

Γ ⊢ f : τ₁ → τ₂, Γ ⊢ e : τ₁
-------------------------------- (app)
τ₂
"""

PROPOSITIONAL = """
// implicational propositional logic: propositions are types and
// proofs are terms

Identifier ::= /[A-Za-z][A-Za-z0-9_]*/

// propositions
AtomicProp ::= Identifier
BaseProp ::= AtomicProp | '⊤' | '⊥' | '(' Proposition ')'
Proposition ::= BaseProp[P] '->' Proposition[Q] | BaseProp[P]

// proofs
ProofVar(var) ::= Identifier[x]
ImplicationIntro(impl_intro) ::= 'λ' Identifier[x] ':' Proposition[P] '.' Proof[proof]
BaseProof ::= ProofVar | ImplicationIntro | '(' Proof ')'
Application(modus_ponens) ::= BaseProof[f] BaseProof[arg]
Proof ::= Application | BaseProof

// hypothesis
x ∈ Γ
----------- (var)
Γ(x)

// implication introduction
Γ,x:P ⊢ proof : Q
-------------------------- (impl_intro)
P -> Q

// modus ponens
Γ ⊢ f : P -> Q, Γ ⊢ arg : P
----------------------------- (modus_ponens)
Q
"""

GRAMMARS = {"stlc" : STLC,
            "arith" : ARITH,
            "lambda" : LAMBDA,
            "propositional" : PROPOSITIONAL}

def list_grammars () :
    "Return the sorted names of the available grammars"
    return sorted(GRAMMARS)

def get_grammar (name) :
    """Return the specification of a built-in grammar

    @param name: the grammar name, see `list_grammars`
    @type name: `str`
    @rtype: `str`
    @raise KeyError: if there is no such grammar
    """
    try :
        return GRAMMARS[name]
    except KeyError :
        raise KeyError("unknown grammar %r (available: %s)"
                       % (name, ", ".join(list_grammars())))
