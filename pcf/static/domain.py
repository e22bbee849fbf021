"""
The Algebra of Type Checking
=============================

The PCFType class hierarchy represents type judgements.
PCF has only a few shapes of type, and no type variables,
so equality is purely structural: Same shape, same parts.

Each structurally-distinct type gets a number the first time
anyone builds it. After that, comparing two types is just
comparing two integers, no matter how deep the arrows go.

---------------------------------------------------------------------------
"""

from threading import Lock
from typing import NamedTuple, Optional

_TYPE_NUMBERING = {}
_NUMBERING_LOCK = Lock()

# The kinds of typing failure. Each one is a different reason
# why a term is ill-typed. They are distinct only for diagnostic purposes.
UNBOUND_IDENTIFIER = "UnboundIdentifier"
NOT_A_FUNCTION = "NotAFunction"
ARGUMENT_TYPE_MISMATCH = "ArgumentTypeMismatch"
RECURSION_TYPE_MISMATCH = "RecursionTypeMismatch"
CONDITIONAL_BRANCH_MISMATCH = "ConditionalBranchMismatch"
LET_TYPE_MISMATCH = "LetTypeMismatch"
NOT_A_PAIR = "NotAPair"

FAILURE_KINDS = (
	UNBOUND_IDENTIFIER, NOT_A_FUNCTION, ARGUMENT_TYPE_MISMATCH,
	RECURSION_TYPE_MISMATCH, CONDITIONAL_BRANCH_MISMATCH,
	LET_TYPE_MISMATCH, NOT_A_PAIR,
)

class PCFType:
	equivalence_class: int

	def __init__(self, domain_key):
		type_key = (type(self), domain_key)
		# Types may be built on several threads at once; each new key needs a unique number.
		with _NUMBERING_LOCK:
			self.equivalence_class = _TYPE_NUMBERING.setdefault(type_key, len(_TYPE_NUMBERING))

	def __eq__(self, other):
		return isinstance(other, PCFType) and is_equivalent(self, other)
	def __hash__(self): return hash(self.equivalence_class)

	def __repr__(self) -> str:
		return self.render()

	def render(self) -> str:
		raise NotImplementedError(type(self))

	def is_error(self): return False
	pass


def is_equivalent(s:PCFType, t:PCFType) -> bool:
	return s.equivalence_class == t.equivalence_class

class Primitive(PCFType):
	""" Integer and Boolean: They have a name and nothing else. """
	def __init__(self, name:str):
		super().__init__(name)
		self._name = name
	def render(self) -> str: return self._name

class FunctionType(PCFType):
	def __init__(self, domain:PCFType, range:PCFType):
		assert isinstance(domain, PCFType) and isinstance(range, PCFType), (domain, range)
		self.domain, self.range = domain, range
		super().__init__((domain.equivalence_class, range.equivalence_class))
	def render(self):
		return self.domain.render() + " -> " + self.range.render()

class PairType(PCFType):
	def __init__(self, first:PCFType, second:PCFType):
		assert isinstance(first, PCFType) and isinstance(second, PCFType), (first, second)
		self.first, self.second = first, second
		super().__init__((first.equivalence_class, second.equivalence_class))
	def render(self):
		return "(%s, %s)" % (self.first.render(), self.second.render())

class Mismatch(NamedTuple):
	need: PCFType
	got: PCFType

class Error(PCFType):
	"""
	The type of things that make no sense.
	All errors are alike as types; the nature says what went wrong,
	and the guilty party is the sub-term where it went wrong.
	"""
	def __init__(self, nature:str, guilty=None, mismatch:Optional[Mismatch]=None):
		assert nature in FAILURE_KINDS, nature
		super().__init__(None)
		self.nature = nature
		self.guilty = guilty
		self.mismatch = mismatch
	def render(self) -> str: return "Error"
	def is_error(self): return True

	def explain(self) -> str:
		text = self.nature
		if self.guilty is not None:
			text += " at " + str(self.guilty)
		if self.mismatch is not None:
			text += ": needed %s but got %s" % self.mismatch
		return text
