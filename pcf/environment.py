"""
Simplest possible environment concept.

This is the canonical list-structured search: Each binding links
to the environment it extends. Extending never touches the original,
so any number of branches can grow their own scopes from a common base
without seeing each other's bindings.
"""
from typing import Mapping, Optional
import abc
from .static.domain import PCFType

class Environment(abc.ABC):
	@abc.abstractmethod
	def lookup(self, name:str) -> Optional[PCFType]:
		pass

	def extend(self, name:str, typ:PCFType) -> "InnerEnv":
		return InnerEnv(name, typ, self)

	def bindings(self) -> dict[str, PCFType]:
		""" The visible bindings, outermost first. An inner binding replaces an outer one. """
		frames = []
		env = self
		while isinstance(env, InnerEnv):
			frames.append(env)
			env = env._static_link
		into = {}
		for frame in reversed(frames):
			into.pop(frame._name, None)
			into[frame._name] = frame._type
		return into

	def __contains__(self, name:str) -> bool:
		return self.lookup(name) is not None

class NullEnv(Environment):
	""" Effectively the built-in scope, but with nothing built in. """
	def lookup(self, name:str) -> Optional[PCFType]:
		return None
	def __repr__(self): return "<empty>"
null_env = NullEnv()

class InnerEnv(Environment):
	def __init__(self, name:str, typ:PCFType, static_link:Environment):
		assert isinstance(name, str), name
		assert isinstance(typ, PCFType), typ
		self._name = name
		self._type = typ
		self._static_link = static_link

	def lookup(self, name:str) -> Optional[PCFType]:
		env = self
		while isinstance(env, InnerEnv):
			if env._name == name: return env._type
			env = env._static_link
		return env.lookup(name)

	def __repr__(self):
		return "<%s>" % ", ".join("%s:%s" % pair for pair in self.bindings().items())

def empty() -> Environment:
	return null_env

def from_mapping(mapping:Mapping[str, PCFType]) -> Environment:
	env = null_env
	for name, typ in mapping.items():
		env = env.extend(name, typ)
	return env
