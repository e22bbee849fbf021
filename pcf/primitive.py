"""
The well-known types, and the types of the built-in functions.
PCF's built-ins are first-class functions: Applying them is a separate term.
"""

from .static.domain import Primitive, FunctionType

INTEGER = Primitive("Integer")
BOOLEAN = Primitive("Boolean")

INT_TO_INT = FunctionType(INTEGER, INTEGER)
INT_TO_BOOL = FunctionType(INTEGER, BOOLEAN)
