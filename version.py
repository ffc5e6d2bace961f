"""Keep `VERSION` and `gramtype.version` in step

usage: python version.py check        compare both versions
       python version.py next         increment the last version number
       python version.py set VERSION  use the given version

The package source is read as text so that a broken package can still
be bumped.
"""

import sys, os, re, io

ROOT = os.path.dirname(os.path.abspath(__file__))
VERSION = os.path.join(ROOT, "VERSION")
PACKAGE = os.path.join(ROOT, "gramtype", "__init__.py")

_assign = re.compile(r'^version = "([^"]*)"$', re.M)

def package_version () :
    with io.open(PACKAGE, encoding="utf-8") as infile :
        match = _assign.search(infile.read())
    if match is None :
        raise ValueError("no version assignment in %s" % PACKAGE)
    return match.group(1)

def file_version () :
    with io.open(VERSION, encoding="utf-8") as infile :
        return infile.read().strip()

def increment (version) :
    """Increment the last number of a dotted version

    >>> increment('0.3.1'), increment('1.9')
    ('0.3.2', '1.10')
    """
    head, _, last = version.rpartition(".")
    last = str(int(last) + 1)
    return "%s.%s" % (head, last) if head else last

def update (version) :
    with io.open(PACKAGE, encoding="utf-8") as infile :
        source = infile.read()
    with io.open(PACKAGE, "w", encoding="utf-8") as out :
        out.write(_assign.sub('version = "%s"' % version, source, count=1))
    with io.open(VERSION, "w", encoding="utf-8") as out :
        out.write("%s\n" % version)

def main (args) :
    if args == ["check"] :
        found, expected = package_version(), file_version()
        if found != expected :
            print("VERSION=%s / gramtype.version=%s" % (expected, found))
            return 1
    elif args == ["next"] :
        update(increment(package_version()))
    elif len(args) == 2 and args[0] == "set" :
        update(args[1])
    else :
        print(__doc__.split("\n\n")[1])
        return 255
    return 0

if __name__ == "__main__" :
    sys.exit(main(sys.argv[1:]))
