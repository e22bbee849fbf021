"""
A static type checker for PCF, the language of Programming Computable Functions.
"""
