#!/usr/bin/env python3

import sys, os, io, shutil, tempfile
sys.path.insert(0, ".")

import gramtype
import version

def test_versions_agree () :
    assert version.package_version() == gramtype.version
    assert version.file_version() == gramtype.version
    assert version.main(["check"]) == 0

def test_increment () :
    assert version.increment("0.3.1") == "0.3.2"
    assert version.increment("0.3.9") == "0.3.10"
    assert version.increment("2") == "3"

def test_update () :
    tmp = tempfile.mkdtemp()
    saved = version.VERSION, version.PACKAGE
    try :
        version.VERSION = os.path.join(tmp, "VERSION")
        version.PACKAGE = os.path.join(tmp, "__init__.py")
        shutil.copy(saved[0], version.VERSION)
        shutil.copy(saved[1], version.PACKAGE)
        assert version.main(["next"]) == 0
        bumped = version.increment(gramtype.version)
        assert version.package_version() == bumped
        assert version.file_version() == bumped
        assert version.main(["set", "1.0"]) == 0
        assert version.main(["check"]) == 0
        with io.open(version.PACKAGE, encoding="utf-8") as infile :
            assert 'version = "1.0"\n' in infile.read()
        with io.open(version.VERSION, "w", encoding="utf-8") as out :
            out.write("0.0\n")
        assert version.main(["check"]) == 1
        assert version.main(["bump"]) == 255
    finally :
        version.VERSION, version.PACKAGE = saved
        shutil.rmtree(tmp)

if __name__ == "__main__" :
    for name, test in sorted(globals().items()) :
        if name.startswith("test_") and callable(test) :
            test()
