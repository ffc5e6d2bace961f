#!/usr/bin/env python

from setuptools import setup

try :
    long_description=open("README", encoding="utf-8").read()
except (IOError, OSError) :
    long_description="""gramtype reads language specifications that mix
context-free grammar productions with typing rules written in
natural-deduction notation, and parses texts into syntax trees
annotated with variable bindings and typing rules."""

if __name__ == "__main__" :
    setup(name="gramtype",
          version=open("VERSION").read().strip(),
          description="Grammars with typing rules: a small language workbench",
          long_description=long_description,
          scripts=["bin/gramtype",
                   ],
          packages=["gramtype",
                    ],
          python_requires=">=3.6",
          extras_require={"test" : ["pytest"],
                          },
          classifiers=[
              "Intended Audience :: Science/Research",
              "Intended Audience :: Education",
              "Operating System :: OS Independent",
              "Programming Language :: Python :: 3",
              "Topic :: Software Development :: Compilers",
              "Topic :: Software Development :: Libraries :: Python Modules",
          ],
          )
