"""Python code generation for compiled expressions.

This module provides:
- context: slot bookkeeping for one compile
- writer: indentation-aware source emission
- loader: turning generated source into functions
"""

from molang.codegen.context import CompilationContext
from molang.codegen.loader import DynamicLoader
from molang.codegen.writer import SourceWriter

__all__ = [
    "CompilationContext",
    "DynamicLoader",
    "SourceWriter",
]
