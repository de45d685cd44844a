"""Example grammars built from the core combinators.

Submodules:
    calculator - Arithmetic expressions with variables and assignment
    ssql - Simplified SQL SELECT statements
"""

from .calculator import UndefinedVariableError, evaluate, parse_expression
from .ssql import parse_query

__all__ = ["UndefinedVariableError", "evaluate", "parse_expression", "parse_query"]
