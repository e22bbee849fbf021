import sys, random
from typing import Any, Optional
from boozetools.support.failureprone import illustration

from .syntax import Term, Render
from .environment import Environment
from .static.domain import PCFType, Mismatch

class TooManyIssues(Exception):
	pass

def _outburst():
	particle = ["Oh, ", "Well, ", "Aw, ", "", ""]

	minced_oaths = [
		'Ack', 'Blargh', 'Confound it', 'Crud', 'Curses', 'Drat',
		'Fiddlesticks', 'Good Grief', 'Great Scott', 'Heavens',
		'Nuts', 'Rats', 'Snap', 'Woe is me',
	]

	resignations = [
		'That does not type.',
		'I cannot make these types agree.',
		'The judgement is not derivable.',
		'I need to ask for help.',
	]

	return "%s%s! %s"%tuple(map(random.choice, (particle, minced_oaths, resignations)))

class Report:
	"""
	Collects what goes wrong while checking, and tells the console about it on request.
	The type-checker makes exactly one entry per ill-typed term it is asked about.
	"""
	_issues : list["Pic"]

	def __init__(self, *, verbose:int=0, max_issues:Optional[int]=3):
		self._verbose = verbose or 0   # Because None is incomparable.
		self._issues = []
		self._max_issues = max_issues

	def ok(self): return not self._issues
	def sick(self): return bool(self._issues)

	@property
	def issues(self) -> tuple["Pic", ...]: return tuple(self._issues)

	def issue(self, it:Any):
		self._issues.append(it)
		if len(self._issues) == self._max_issues:
			raise TooManyIssues(self)

	def reset(self):
		self._issues.clear()

	def info(self, *args):
		if self._verbose:
			print(*args, file=sys.stderr)

	def complain_to_console(self):
		""" Emit all the issues to the console. """
		_bemoan(self._issues)

	def assert_no_issues(self, message):
		""" Does what it says on the tin """
		if self._issues:
			self.complain_to_console()
			raise AssertionError(_outburst()+" "+message)

	# Methods the type-checker calls, one per way a term can fail to type.
	# Each gets the whole term under scrutiny, so the picture has context.

	def unbound_identifier(self, env:Environment, root:Term, ident:Term):
		intro = "I don't see what '%s' refers to."%ident.name
		problem = [Annotation(root, ident, "not bound here")]
		self.issue(Pic(intro, problem, _in_scope(env)))

	def not_a_function(self, env:Environment, root:Term, callee:Term, got:PCFType):
		intro = "Dunno how to call %s as a function." % got
		problem = [Annotation(root, callee, "Found to be %s" % got)]
		self.issue(Pic(intro, problem, _in_scope(env)))

	def argument_type_mismatch(self, env:Environment, root:Term, argument:Term, mismatch:Mismatch):
		self.bad_type(env, root, argument, mismatch, "Type-checking found a disagreement over an argument.")

	def recursion_type_mismatch(self, env:Environment, root:Term, body:Term, mismatch:Mismatch):
		self.bad_type(env, root, body, mismatch, "This recursive definition does not produce its declared type.")

	def let_type_mismatch(self, env:Environment, root:Term, binding:Term, mismatch:Mismatch):
		self.bad_type(env, root, binding, mismatch, "This let-binding does not match its declared type.")

	def conditional_not_boolean(self, env:Environment, root:Term, condition:Term, mismatch:Mismatch):
		self.bad_type(env, root, condition, mismatch, "The condition of an if-expression must be a Boolean.")

	def conditional_branch_mismatch(self, env:Environment, root:Term, then_branch:Term, t1:PCFType, else_branch:Term, t2:PCFType):
		intro = "Types for these branches need to match, but they do not."
		problem = [
			Annotation(root, then_branch, str(t1)),
			Annotation(root, else_branch, str(t2)),
		]
		self.issue(Pic(intro, problem, _in_scope(env)))

	def not_a_pair(self, env:Environment, root:Term, pair_expr:Term, got:PCFType):
		intro = "Only a pair can be taken apart, but this is %s." % got
		problem = [Annotation(root, pair_expr, "Found to be %s" % got)]
		self.issue(Pic(intro, problem, _in_scope(env)))

	def bad_type(self, env:Environment, root:Term, expr:Term, mismatch:Mismatch, intro:str):
		complaint = "This %s needs to be a(n) %s."%(mismatch.got, mismatch.need)
		problem = [Annotation(root, expr, complaint)]
		self.issue(Pic(intro, problem, _in_scope(env)))

	# Some things for just in case:

	def drat(self, root:Term, hint):
		intro = "This term hits an unfinished part of the type-checker."
		footer = ["", "Hint: "+str(hint)]
		self.issue(Pic(intro, [Annotation(root, root)], footer))
		self.complain_to_console()
		raise AssertionError(hint)

def _in_scope(env:Environment) -> list[str]:
	bindings = env.bindings()
	if bindings:
		return ["In scope: " + ", ".join("%s:%s" % pair for pair in bindings.items())]
	else:
		return ["Nothing was in scope."]

class Annotation:
	"""
	Underline one sub-term within the one-line rendering of the whole term.
	There is no source file to quote, so the rendering stands in for one.
	"""
	text: str
	slice: slice
	caption: str
	def __init__(self, root:Term, node:Term, caption:str=""):
		layout = Render()
		self.text = layout.render(root)
		self.slice = layout.spans[id(node)]
		self.caption = caption
	def illustrate(self):
		width = self.slice.stop - self.slice.start
		return illustration(self.text, self.slice.start, width, prefix='  |', caption=self.caption)

class Pic:
	def __init__(self, intro:str, anns:list[Annotation], footer=()):
		self._intro, self._anns, self._footer = intro, anns, footer
	@property
	def intro(self) -> str: return self._intro
	def as_text(self):
		lines = [self._intro, ""]
		lines.extend(ann.illustrate() for ann in self._anns)
		lines.extend(self._footer)
		return '\n'.join(lines)

def _bemoan(issues):
	""" Emit all the issues to the console. """
	if issues:
		print("*"*60, file=sys.stderr)
		print(_outburst(), file=sys.stderr)
	for i in issues:
		print("  -"*20, file=sys.stderr)
		print(i.as_text(), file=sys.stderr)
	sys.stderr.flush()
