"""
Field Calculator
================

An interactive calculator over exact numeric domains: arbitrary-precision
rationals, residues modulo a prime, and matrices over either, with reduced
row echelon form, rank and determinant.

Modules:
    - common: Exact arithmetic kernel (Natural, Integer, Rational, Residue)
    - matrix: Generic matrix engine over any field
    - repl: Command parsing, evaluation and variable storage
    - config: Shell configuration

Quick Start:
    >>> from fieldcalc.common import Rational
    >>> from fieldcalc.matrix import Matrix
    >>> q = Rational.parse
    >>> Matrix([[q("2"), q("0")], [q("0"), q("3")]]).rref().determinant
    Rational(6)
"""

__version__ = "0.1.0"
__author__ = "Field Calculator Developers"

from . import common
from . import matrix
from . import repl
