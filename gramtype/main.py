import sys, optparse, io
import pdb, traceback
import gramtype
from gramtype import NotationError, ParseError
from gramtype.grammar import Grammar
from gramtype.parser import Parser
from gramtype.grammars import get_grammar, list_grammars
from gramtype.debug import Debug, Quiet, level
from gramtype import canon

##
## error messages
##

options = None

ERR_ARG = 1
ERR_OPT = 2
ERR_IO = 3
ERR_PARSE = 4
ERR_NOTATION = 5
ERR_BUG = 255

def log (message) :
    sys.stdout.write("%s\n" % message.rstrip())
    sys.stdout.flush()

def err (message) :
    sys.stderr.write("gramtype: %s\n" % message.strip())
    sys.stderr.flush()

def die (code, message=None) :
    global options
    if message :
        err(message)
    if options is not None and options.debug :
        pdb.post_mortem(sys.exc_info()[2])
    else :
        sys.exit(code)

def bug () :
    global options
    sys.stderr.write("""
    ********************************************************************
    *** An unexpected error ocurred. Please report this bug together ***
    *** with the execution trace below and, if possible, the grammar ***
    *** and the input text that caused it.                           ***
    ********************************************************************

""")
    traceback.print_exc()
    if options is not None and options.debug :
        pdb.post_mortem(sys.exc_info()[2])
    else :
        sys.exit(ERR_BUG)

##
## options parsing
##

opt = optparse.OptionParser(prog="gramtype",
                            usage="%prog [OPTION]... [GRAMMAR] [TEXT]...",
                            version="%prog " + gramtype.version)
opt.add_option("-b", "--builtin",
               dest="builtin", action="store", default=None,
               help="use a built-in grammar instead of a file",
               metavar="NAME")
opt.add_option("-l", "--list",
               dest="list", action="store_true", default=False,
               help="list built-in grammars and exit")
opt.add_option("-s", "--spec",
               dest="spec", action="store_true", default=False,
               help="print the normalised grammar specification")
opt.add_option("-o", "--save",
               dest="save", action="store", default=None,
               help="save the normalised grammar specification",
               metavar="OUTFILE")
opt.add_option("-c", "--canonical",
               dest="canonical", action="store_true", default=False,
               help="print trees in canonical form (default: pretty)")
opt.add_option("--start",
               dest="start", action="store", default=None,
               help="start parsing from this nonterminal",
               metavar="NONTERMINAL")
opt.add_option("-t", "--trace",
               dest="trace", action="store", default=None,
               help="trace the parser (none, info, debug or trace)",
               metavar="LEVEL")
opt.add_option("--debug",
               dest="debug", action="store_true", default=False,
               help="launch debugger on error (default: no)")

def getopts (args) :
    global options
    (options, args) = opt.parse_args(args)
    if options.list :
        return None, []
    if options.builtin is None :
        if len(args) < 1 :
            err("no grammar provided")
            opt.print_help()
            die(ERR_ARG)
        path, args = args[0], args[1:]
    else :
        path = None
    if path is not None and path == options.save :
        err("grammar file also used as output (--save)")
        opt.print_help()
        die(ERR_ARG)
    if options.trace is not None :
        options.trace = level(options.trace)
    return path, args

##
## main
##

def load (path) :
    if path is None :
        try :
            return Grammar.loads(get_grammar(options.builtin))
        except KeyError :
            die(ERR_ARG, sys.exc_info()[1].args[0])
    try :
        with io.open(path, encoding=gramtype.defaultencoding) as infile :
            source = infile.read()
    except (IOError, OSError) :
        die(ERR_IO, "could not read grammar file %r" % path)
    return Grammar.loads(source)

def main (args=sys.argv[1:]) :
    global options
    # get options
    try :
        path, texts = getopts(args)
    except SystemExit :
        raise
    except Exception :
        die(ERR_OPT, str(sys.exc_info()[1]))
    if options.list :
        for name in list_grammars() :
            log(name)
        return
    # load grammar
    try :
        grammar = load(path)
    except NotationError :
        die(ERR_NOTATION, str(sys.exc_info()[1]))
    except SystemExit :
        raise
    except Exception :
        bug()
    if options.spec :
        log(grammar.to_spec_string())
    if options.save :
        try :
            grammar.save(options.save)
        except (IOError, OSError) :
            die(ERR_IO, "could not write %r" % options.save)
    # parse texts
    if options.trace is None :
        debug = Quiet()
    else :
        debug = Debug(options.trace, sys.stderr)
    parser = Parser(grammar, debug=debug)
    for text in texts :
        try :
            tree = parser.parse(text, options.start)
        except ParseError :
            die(ERR_PARSE, "%s: %s" % (text, sys.exc_info()[1]))
        except Exception :
            bug()
        if options.canonical :
            log(canon.dumps(tree))
        else :
            log(tree.pretty())

if __name__ == "__main__" :
    main()
