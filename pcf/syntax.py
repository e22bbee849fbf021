"""
The set of PCF term shapes.
Something outside this package (a parser, or a test) calls these constructors
bottom-up to build a finite tree. Nothing in here ever changes a term once built.
Type annotations on binding forms are PCFType objects, already built.
"""
from boozetools.support.foundation import Visitor
from .static.domain import PCFType

class Term:
	def __str__(self): return render(self)
	def __repr__(self): return "<%s: %s>" % (type(self).__name__, render(self))

def _is_name(name) -> bool:
	return isinstance(name, str) and bool(name)

class Identifier(Term):
	def __init__(self, name:str):
		assert _is_name(name), name
		self.name = name

class NumberLiteral(Term):
	def __init__(self, value:int):
		assert isinstance(value, int) and not isinstance(value, bool), value
		self.value = value

class BoolLiteral(Term):
	def __init__(self, value:bool):
		assert isinstance(value, bool), value
		self.value = value

class Successor(Term): pass
class Predecessor(Term): pass
class IsZero(Term): pass

class Function(Term):
	def __init__(self, param:str, param_type:PCFType, body:Term):
		assert _is_name(param), param
		assert isinstance(param_type, PCFType), param_type
		assert isinstance(body, Term), body
		self.param, self.param_type, self.body = param, param_type, body

class Application(Term):
	def __init__(self, callee:Term, argument:Term):
		assert isinstance(callee, Term), callee
		assert isinstance(argument, Term), argument
		self.callee, self.argument = callee, argument

class RecursiveDef(Term):
	""" The name is bound to the declared type within the body, so the body may refer to itself. """
	def __init__(self, name:str, declared_type:PCFType, body:Term):
		assert _is_name(name), name
		assert isinstance(declared_type, PCFType), declared_type
		assert isinstance(body, Term), body
		self.name, self.declared_type, self.body = name, declared_type, body

class Conditional(Term):
	def __init__(self, condition:Term, then_branch:Term, else_branch:Term):
		assert all(isinstance(t, Term) for t in (condition, then_branch, else_branch))
		self.condition = condition
		self.then_branch = then_branch
		self.else_branch = else_branch

class Let(Term):
	def __init__(self, name:str, declared_type:PCFType, binding_expr:Term, body_expr:Term):
		assert _is_name(name), name
		assert isinstance(declared_type, PCFType), declared_type
		assert isinstance(binding_expr, Term), binding_expr
		assert isinstance(body_expr, Term), body_expr
		self.name, self.declared_type = name, declared_type
		self.binding_expr, self.body_expr = binding_expr, body_expr

class Pair(Term):
	def __init__(self, first:Term, second:Term):
		assert isinstance(first, Term), first
		assert isinstance(second, Term), second
		self.first, self.second = first, second

class Projection(Term):
	def __init__(self, pair_expr:Term):
		assert isinstance(pair_expr, Term), pair_expr
		self.pair_expr = pair_expr

class First(Projection): pass
class Second(Projection): pass

###################
#

class Render(Visitor):
	"""
	Lay a term out on one line, and remember where each sub-term landed.
	The spans are what lets a diagnostic point at the guilty part of the line.
	"""
	def __init__(self):
		self._pieces = []
		self._width = 0
		self.spans = {}

	def render(self, term:Term) -> str:
		self.place(term)
		return "".join(self._pieces)

	def place(self, term:Term):
		start = self._width
		self.visit(term)
		# A shared sub-term keeps the span of its first appearance.
		self.spans.setdefault(id(term), slice(start, self._width))

	def _emit(self, *bits):
		for bit in bits:
			if isinstance(bit, Term): self.place(bit)
			else:
				self._pieces.append(bit)
				self._width += len(bit)

	def visit_Identifier(self, t:Identifier): self._emit(t.name)
	def visit_NumberLiteral(self, t:NumberLiteral): self._emit(str(t.value))
	def visit_BoolLiteral(self, t:BoolLiteral): self._emit("true" if t.value else "false")
	def visit_Successor(self, _): self._emit("Succ")
	def visit_Predecessor(self, _): self._emit("Pred")
	def visit_IsZero(self, _): self._emit("IsZero")

	def visit_Function(self, t:Function):
		self._emit("fn ", t.param, ":", t.param_type.render(), " => ", t.body)

	def visit_Application(self, t:Application):
		self._emit(t.callee, " (", t.argument, ")")

	def visit_RecursiveDef(self, t:RecursiveDef):
		self._emit(t.name, ":", t.declared_type.render(), " => ", t.body)

	def visit_Conditional(self, t:Conditional):
		self._emit("if (", t.condition, ") then (", t.then_branch, ") else (", t.else_branch, ")")

	def visit_Let(self, t:Let):
		self._emit("let ", t.name, ": ", t.declared_type.render(), " = ", t.binding_expr, " in ", t.body_expr)

	def visit_Pair(self, t:Pair): self._emit("(", t.first, ", ", t.second, ")")
	def visit_First(self, t:First): self._emit("fst (", t.pair_expr, ")")
	def visit_Second(self, t:Second): self._emit("snd (", t.pair_expr, ")")

def render(term:Term) -> str:
	return Render().render(term)
