"""
Specimen terms, shared among the tests.
"""
from pcf.syntax import (
	Identifier, NumberLiteral, BoolLiteral, Successor, Predecessor, IsZero,
	Function, Application, RecursiveDef, Conditional, Let, Pair, First, Second,
)
from pcf.static.domain import FunctionType
from pcf.primitive import INTEGER, BOOLEAN, INT_TO_INT

def succ_of(n:int):
	return Application(Successor(), NumberLiteral(n))

def identity():
	return Function("x", INTEGER, Identifier("x"))

def recursive_sum():
	x, y, sum_ = Identifier("x"), Identifier("y"), Identifier("sum")
	body = Conditional(
		Application(IsZero(), x),
		y,
		Application(
			Application(sum_, Application(Predecessor(), Identifier("x"))),
			Application(Successor(), Identifier("y")),
		),
	)
	sum_type = FunctionType(INTEGER, FunctionType(INTEGER, INTEGER))
	return RecursiveDef("sum", sum_type, Function("x", INTEGER, Function("y", INTEGER, body)))

def let_f():
	f = Function("x", INTEGER, Application(Successor(), Identifier("x")))
	return Let("f", INT_TO_INT, f, Application(Identifier("f"), NumberLiteral(0)))

def int_bool_pair():
	return Pair(NumberLiteral(1), BoolLiteral(True))

def first_of_pair():
	return First(int_bool_pair())

def second_of_pair():
	return Second(int_bool_pair())

def conditional_on_true():
	return Conditional(BoolLiteral(True), succ_of(47), NumberLiteral(0))
