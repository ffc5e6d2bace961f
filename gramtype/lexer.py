"""A simple lexical analyser driven by a grammar's special tokens

The tokenizer knows two classes of tokens: the special tokens (that
is, the literal terminals quoted in a grammar, like `'('` or `'->'`)
and words, that are maximal runs of alphanumeric characters or `_`.
Delimiters (whitespace by default) separate tokens and are dropped.
Every other character is an error.

>>> t = Tokenizer(['(', ')', '->', 'λ', ':', '.'])
>>> t.tokens('(λy:a->b.y)r')
['(', 'λ', 'y', ':', 'a', '->', 'b', '.', 'y', ')', 'r']

Tokens are interned: each distinct text gets an integer id, special
tokens first, in the order they were given.

>>> t.tokenize('(y)')
[0, 6, 1]
>>> t.text(6)
'y'
>>> t.tokenize('x @ y')
Traceback (most recent call last):
 ...
gramtype.TokenizeError: unrecognized character '@' at offset 2
"""

from gramtype import TokenizeError

DELIMITERS = " \t\n\r"

def isword (char) :
    """Check whether a character may appear in a word token

    >>> isword('x'), isword('_'), isword('₁'), isword('+')
    (True, True, True, False)
    """
    return char.isalnum() or char == "_"

def iskeyword (text) :
    """Check whether a special token looks like an identifier, in
    which case it is only recognized as a whole word

    >>> iskeyword('int'), iskeyword('->'), iskeyword('λ')
    (True, False, False)
    """
    return all(c == "_" or (c.isalnum() and ord(c) < 128) for c in text)

class Token (str) :
    """A token from the lexer

    Behaves as a string holding the token text. Additional attributes
    are:

     - self.kind: token id (also available as `int(self)`)
     - self.text: token text
     - self.start: offset of the first character in the input
     - self.end: offset following the last character
     - self.index: position of the token in the sequence
     - self.lexer: the Tokenizer instance that produced this token

    >>> tok = Tokenizer(['+']).tokens('1 + 22')[2]
    >>> tok, int(tok), tok.start, tok.end, tok.index
    ('22', 2, 4, 6, 2)
    """
    def __new__ (cls, text, kind, start, end, index, lexer) :
        self = str.__new__(cls, text)
        self.kind = kind
        self.text = text
        self.start = start
        self.end = end
        self.index = index
        self.lexer = lexer
        return self
    def __int__ (self) :
        return self.kind

class Tokenizer (object) :
    """Tokenizer for the special tokens of a grammar.

    An instance has the following attributes:
     - self.special: the special tokens, in the order they were given
     - self.delimiters: the characters that separate tokens
     - self.tok_text: a list mapping every known id to its text
     - self.tok_id: the reverse mapping, from text to id
    """
    def __init__ (self, special=[], delimiters=DELIMITERS) :
        """Initialize a new instance.

        @param special: the literal tokens to be recognized
        @type special: `list` of `str`
        @param delimiters: the characters that separate tokens
        @type delimiters: `str`
        """
        self.special = []
        self.delimiters = delimiters
        self.tok_text = []
        self.tok_id = {}
        for text in special :
            if text and text not in self.tok_id :
                self.special.append(text)
                self._intern(text)
        # longest match first
        self._bylength = sorted(self.special, key=len, reverse=True)
    def __repr__ (self) :
        """
        >>> Tokenizer(['+', '*'])
        Tokenizer(['+', '*'])
        >>> Tokenizer([], delimiters=' ')
        Tokenizer([], delimiters=' ')
        """
        if self.delimiters == DELIMITERS :
            return "%s(%r)" % (self.__class__.__name__, self.special)
        return "%s(%r, delimiters=%r)" % (self.__class__.__name__,
                                          self.special, self.delimiters)
    def _intern (self, text) :
        try :
            return self.tok_id[text]
        except KeyError :
            kind = self.tok_id[text] = len(self.tok_text)
            self.tok_text.append(text)
            return kind
    def text (self, kind) :
        """Return the text of a token id

        >>> Tokenizer(['+']).text(0)
        '+'
        >>> Tokenizer(['+']).text(3)
        Traceback (most recent call last):
         ...
        KeyError: 'unknown token id 3'

        @param kind: a token id
        @type kind: `int`
        @rtype: `str`
        """
        if 0 <= kind < len(self.tok_text) :
            return self.tok_text[kind]
        raise KeyError("unknown token id %r" % kind)
    def _special_at (self, text, pos, word) :
        for tok in self._bylength :
            if text.startswith(tok, pos) :
                if iskeyword(tok) and len(tok) < len(word) :
                    continue
                return tok
        return None
    def _word_at (self, text, pos) :
        end = pos
        while (end < len(text) and isword(text[end])
               and text[end] not in self.delimiters) :
            end += 1
        return text[pos:end]
    def tokens (self, text) :
        """Break a text into a list of `Token` instances

        A keyword special token does not split a longer identifier:

        >>> t = Tokenizer(['int', '='])
        >>> t.tokens('int integer=int')
        ['int', 'integer', '=', 'int']
        >>> t.tokens('')
        []

        @param text: the text to tokenize
        @type text: `str`
        @return: the tokens found in text
        @rtype: `list` of `Token`
        @raise TokenizeError: when a character is not recognized
        """
        result = []
        pos = 0
        while pos < len(text) :
            char = text[pos]
            if char in self.delimiters :
                pos += 1
                continue
            word = self._word_at(text, pos)
            tok = self._special_at(text, pos, word)
            if tok is None :
                tok = word
            if not tok :
                raise TokenizeError("unrecognized character %r at offset %s"
                                    % (char, pos), pos=pos, found=char)
            result.append(Token(tok, self._intern(tok), pos, pos + len(tok),
                                len(result), self))
            pos += len(tok)
        return result
    def tokenize (self, text) :
        """Break a text into a list of token ids

        >>> Tokenizer(['+']).tokenize('1 + 1')
        [1, 0, 1]

        @param text: the text to tokenize
        @type text: `str`
        @return: the ids of the tokens found in text
        @rtype: `list` of `int`
        @raise TokenizeError: when a character is not recognized
        """
        return [tok.kind for tok in self.tokens(text)]
