"""
The type-checker proper: One rule per shape of term.

Everything here is fully annotated PCF, so checking is a single top-down pass.
There is no unification and no backtracking. Each rule looks at its sub-terms
at most once, in a suitable environment, and either composes their types or
complains. The first complaint wins: An Error type passes straight up to the
top, and nothing else gets checked along the way.

Deep terms make for deep recursion here. If Python runs out of stack,
the RecursionError goes to the caller.
"""
# ----------------------------------------------------------------

from typing import Optional
from boozetools.support.foundation import Visitor
from .. import syntax
from ..diagnostics import Report
from ..environment import Environment, null_env
from ..primitive import INTEGER, BOOLEAN, INT_TO_INT, INT_TO_BOOL
from .domain import (
	PCFType, FunctionType, PairType, Error, Mismatch, is_equivalent,
	UNBOUND_IDENTIFIER, NOT_A_FUNCTION, ARGUMENT_TYPE_MISMATCH,
	RECURSION_TYPE_MISMATCH, CONDITIONAL_BRANCH_MISMATCH,
	LET_TYPE_MISMATCH, NOT_A_PAIR,
)

class TypeChecker(Visitor):
	_root: Optional[syntax.Term]

	def __init__(self, report: Report):
		self._report = report
		self._root = None

	def check_term(self, term:syntax.Term, env:Environment=null_env) -> PCFType:
		""" Judge one whole term. The report hears about it if it's ill-typed. """
		assert isinstance(term, syntax.Term), term
		assert isinstance(env, Environment), env
		self._root = term
		self._report.info("Type-Check", term)
		try:
			typ = self.check(term, env)
		finally:
			self._root = None
		self._report.info("  :", typ.explain() if typ.is_error() else typ)
		return typ

	def check(self, term:syntax.Term, env:Environment) -> PCFType:
		# Housekeeping around the generic visitation protocol
		typ = self.visit(term, env)
		return typ if isinstance(typ, PCFType) else self.drat("Failed to return a type from %r"%type(term))

	def drat(self, hint) -> PCFType:
		self._report.drat(self._root, hint)
		raise AssertionError(hint)

	def visit_Identifier(self, ident:syntax.Identifier, env:Environment) -> PCFType:
		typ = env.lookup(ident.name)
		if typ is None:
			self._report.unbound_identifier(env, self._root, ident)
			return Error(UNBOUND_IDENTIFIER, ident)
		return typ

	@staticmethod
	def visit_NumberLiteral(_, __) -> PCFType: return INTEGER

	@staticmethod
	def visit_BoolLiteral(_, __) -> PCFType: return BOOLEAN

	@staticmethod
	def visit_Successor(_, __) -> PCFType: return INT_TO_INT

	@staticmethod
	def visit_Predecessor(_, __) -> PCFType: return INT_TO_INT

	@staticmethod
	def visit_IsZero(_, __) -> PCFType: return INT_TO_BOOL

	def visit_Function(self, fn:syntax.Function, env:Environment) -> PCFType:
		body_type = self.check(fn.body, env.extend(fn.param, fn.param_type))
		if body_type.is_error(): return body_type
		return FunctionType(fn.param_type, body_type)

	def visit_Application(self, app:syntax.Application, env:Environment) -> PCFType:
		fn_type = self.check(app.callee, env)
		if fn_type.is_error(): return fn_type
		if not isinstance(fn_type, FunctionType):
			self._report.not_a_function(env, self._root, app.callee, fn_type)
			return Error(NOT_A_FUNCTION, app.callee)
		arg_type = self.check(app.argument, env)
		if arg_type.is_error(): return arg_type
		if not is_equivalent(fn_type.domain, arg_type):
			mismatch = Mismatch(fn_type.domain, arg_type)
			self._report.argument_type_mismatch(env, self._root, app.argument, mismatch)
			return Error(ARGUMENT_TYPE_MISMATCH, app.argument, mismatch)
		return fn_type.range

	def visit_RecursiveDef(self, rec:syntax.RecursiveDef, env:Environment) -> PCFType:
		inner = env.extend(rec.name, rec.declared_type)
		body_type = self.check(rec.body, inner)
		if body_type.is_error(): return body_type
		if not is_equivalent(body_type, rec.declared_type):
			mismatch = Mismatch(rec.declared_type, body_type)
			self._report.recursion_type_mismatch(inner, self._root, rec.body, mismatch)
			return Error(RECURSION_TYPE_MISMATCH, rec.body, mismatch)
		return rec.declared_type

	def visit_Conditional(self, cond:syntax.Conditional, env:Environment) -> PCFType:
		# All three parts see the same environment.
		cond_type = self.check(cond.condition, env)
		if cond_type.is_error(): return cond_type
		then_type = self.check(cond.then_branch, env)
		if then_type.is_error(): return then_type
		else_type = self.check(cond.else_branch, env)
		if else_type.is_error(): return else_type
		if not is_equivalent(cond_type, BOOLEAN):
			mismatch = Mismatch(BOOLEAN, cond_type)
			self._report.conditional_not_boolean(env, self._root, cond.condition, mismatch)
			return Error(CONDITIONAL_BRANCH_MISMATCH, cond.condition, mismatch)
		if not is_equivalent(then_type, else_type):
			self._report.conditional_branch_mismatch(env, self._root, cond.then_branch, then_type, cond.else_branch, else_type)
			return Error(CONDITIONAL_BRANCH_MISMATCH, cond)
		return then_type

	def visit_Let(self, let:syntax.Let, env:Environment) -> PCFType:
		# NB: The bound expression cannot see the surrounding bindings.
		#     That is how PCF's let has always been checked here; keep it so.
		bound_type = self.check(let.binding_expr, null_env)
		if bound_type.is_error(): return bound_type
		if not is_equivalent(bound_type, let.declared_type):
			mismatch = Mismatch(let.declared_type, bound_type)
			self._report.let_type_mismatch(null_env, self._root, let.binding_expr, mismatch)
			return Error(LET_TYPE_MISMATCH, let.binding_expr, mismatch)
		return self.check(let.body_expr, env.extend(let.name, let.declared_type))

	def visit_Pair(self, pair:syntax.Pair, env:Environment) -> PCFType:
		# Pairs, like let-bindings, are checked without the surrounding bindings.
		first = self.check(pair.first, null_env)
		if first.is_error(): return first
		second = self.check(pair.second, null_env)
		if second.is_error(): return second
		return PairType(first, second)

	def _projection(self, proj:syntax.Projection) -> PCFType:
		typ = self.check(proj.pair_expr, null_env)
		if typ.is_error(): return typ
		if not isinstance(typ, PairType):
			self._report.not_a_pair(null_env, self._root, proj.pair_expr, typ)
			return Error(NOT_A_PAIR, proj.pair_expr)
		return typ

	def visit_First(self, proj:syntax.First, _env) -> PCFType:
		typ = self._projection(proj)
		return typ if typ.is_error() else typ.first

	def visit_Second(self, proj:syntax.Second, _env) -> PCFType:
		typ = self._projection(proj)
		return typ if typ.is_error() else typ.second

def check(term:syntax.Term, env:Environment=null_env, report:Optional[Report]=None) -> PCFType:
	"""
	Work out the type of a term in an environment.
	The answer is an Error type if the term is ill-typed; its nature says why.
	Without a report of your own, a fresh quiet one hears the complaint.
	"""
	if report is None: report = Report(max_issues=None)
	return TypeChecker(report).check_term(term, env)

def verdict(typ:PCFType) -> str:
	""" What a display ought to say about the result of a check. """
	return typ.explain() if typ.is_error() else typ.render()
