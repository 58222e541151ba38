"""Parsing module for Molang source."""

from molang.parsing.molang_lexer import MolangLexer
from molang.parsing.molang_parser import MolangParser

__all__ = [
    "MolangLexer",
    "MolangParser",
]
