import doctest, sys, os, glob

retcode = 0

import gramtype
version = open("VERSION").read().strip()
if gramtype.version != version :
    print("Mismatched versions:")
    print("  gramtype.version = %r" % gramtype.version)
    print("  VERSION = %r" % version)
    sys.exit(1)

def test (module) :
    print("  Testing '%s'" % module.__name__)
    f, t = doctest.testmod(module, #verbose=True,
                           optionflags=doctest.NORMALIZE_WHITESPACE
                           | doctest.REPORT_ONLY_FIRST_FAILURE
                           | doctest.ELLIPSIS)
    return f

modules = ["gramtype",
           "gramtype.debug",
           "gramtype.lexer",
           "gramtype.typing",
           "gramtype.grammar",
           "gramtype.notation",
           "gramtype.ast",
           "gramtype.parser",
           "gramtype.canon",
           "gramtype.grammars",
           ]

stop = False
if len(sys.argv) > 1 :
    if sys.argv[1] == "--stop" :
        stop = True
        del sys.argv[1]

doscripts = True
if len(sys.argv) > 1 :
    modules = sys.argv[1:]
    doscripts = False

for modname in modules :
    try :
        __import__(modname)
        retcode = max(retcode, test(sys.modules[modname]))
        if retcode and stop :
            break
    except Exception :
        print("  Could not test %r:" % modname)
        c, e, t = sys.exc_info()
        print("    %s: %s" % (c.__name__, e))
        retcode = max(retcode, 1)

if doscripts :
    for script in sorted(glob.glob("test-scripts/test*.py")) :
        print("  Running '%s'" % script)
        retcode = max(retcode, os.system("%s %s" % (sys.executable, script)))
        if retcode and stop :
            break

sys.exit(min(retcode, 255))
