"""Diagnostics for gramtype

Two channels are used. Non-fatal problems found while building a
grammar (ignored lines, rule names that never resolve) are reported
with Python's `warnings` through function `warn`. Tracing of the
parser is done through a `Debug` context that the caller creates and
passes explicitly, so that two parsers never share diagnostic state.

>>> import io
>>> out = io.StringIO()
>>> dbg = Debug(DEBUG, out, input='x y')
>>> dbg.info('parsing %r', dbg.input)
>>> dbg.trace('not shown')
>>> print(out.getvalue().strip())
gramtype[info]: parsing 'x y'
"""

import sys, warnings

NONE = 0
INFO = 1
DEBUG = 2
TRACE = 3

LEVELS = {"none" : NONE,
          "info" : INFO,
          "debug" : DEBUG,
          "trace" : TRACE}

def warn (message) :
    """Issue a warning message.
    """
    warnings.warn(message, stacklevel=2)

def level (name) :
    """Convert a level name (or number) to a level

    >>> level('trace') == TRACE
    True
    >>> level('2') == DEBUG
    True
    >>> level('loud')
    Traceback (most recent call last):
     ...
    ValueError: unknown debug level 'loud'

    @param name: a level name from `LEVELS` or an integer
    @type name: `str`
    @return: the level
    @rtype: `int`
    """
    try :
        return LEVELS[str(name).lower()]
    except KeyError :
        pass
    try :
        return max(NONE, min(TRACE, int(name)))
    except ValueError :
        raise ValueError("unknown debug level %r" % name)

class Debug (object) :
    """A diagnostic context

    Messages whose level is above `self.level` are discarded, the
    others are written to `self.stream` prefixed with their origin.
    Attribute `input` may hold the text being processed so that
    messages can refer to it.
    """
    def __init__ (self, level=INFO, stream=None, input=None) :
        """Initialize a new instance

        @param level: the maximal level of displayed messages
        @type level: `int`
        @param stream: where to write messages (default: `sys.stderr`)
        @type stream: `file`
        @param input: the text being processed, if any
        @type input: `str`
        """
        self.level = level
        self.stream = stream
        self.input = input
    def __repr__ (self) :
        """
        >>> Debug(TRACE, input='x')
        Debug(3, input='x')
        """
        if self.input is None :
            return "%s(%r)" % (self.__class__.__name__, self.level)
        return "%s(%r, input=%r)" % (self.__class__.__name__, self.level,
                                     self.input)
    def enabled (self, level) :
        return level <= self.level
    def log (self, level, origin, message, *args) :
        """Write a message if `level` is enabled

        `message` is %-formatted with `args` only when it is actually
        written, so that tracing is cheap when disabled.
        """
        if not self.enabled(level) :
            return
        if args :
            message = message % args
        stream = self.stream or sys.stderr
        stream.write("gramtype[%s]: %s\n" % (origin, message.strip()))
        stream.flush()
    def info (self, message, *args) :
        self.log(INFO, "info", message, *args)
    def debug (self, message, *args) :
        self.log(DEBUG, "debug", message, *args)
    def trace (self, message, *args) :
        self.log(TRACE, "trace", message, *args)

class Quiet (Debug) :
    """A context that discards everything, used when no context is
    given to the parser
    """
    def __init__ (self) :
        Debug.__init__(self, NONE)
    def log (self, level, origin, message, *args) :
        pass
