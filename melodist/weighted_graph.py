import random
import typing


NodeType = typing.TypeVar("NodeType")
TargetType = typing.TypeVar("TargetType")


class WeightedGraph (typing.Generic[NodeType, TargetType]):

	"""
	A weighted directed graph that accumulates transition counts.

	Weights are raw counts. Probabilities are derived from them on demand so
	that repeated training keeps strengthening edges instead of re-weighting
	already normalized values.
	"""

	def __init__ (self) -> None:

		"""
		Initialize an empty weighted graph.
		"""

		self._edges: typing.Dict[NodeType, typing.Dict[TargetType, int]] = {}


	def add_transition (self, source: NodeType, target: TargetType, weight: int = 1) -> None:

		"""
		Add a weighted transition between two nodes.
		"""

		if weight <= 0:
			raise ValueError("Weight must be positive")

		if source not in self._edges:
			self._edges[source] = {}

		# If a transition already exists, accumulate to strengthen the edge.
		if target in self._edges[source]:
			self._edges[source][target] += weight

		else:
			self._edges[source][target] = weight


	def merge (self, counts: typing.Dict[NodeType, typing.Dict[TargetType, int]]) -> None:

		"""
		Add a batch of pre-counted transitions.
		"""

		for source, targets in counts.items():
			for target, weight in targets.items():
				self.add_transition(source, target, weight)


	def get_transitions (self, source: NodeType) -> typing.List[typing.Tuple[TargetType, int]]:

		"""
		Return weighted transitions for a source node.
		"""

		if source not in self._edges:
			return []

		return list(self._edges[source].items())


	def probabilities (self, source: NodeType) -> typing.Dict[TargetType, float]:

		"""
		Return the normalized outgoing distribution of a source node.

		The values sum to 1.0 (within floating tolerance) whenever the node has
		any outgoing transitions, and the dict is empty otherwise.
		"""

		options = self.get_transitions(source)
		total = sum(weight for _, weight in options)

		if total <= 0:
			return {}

		return {target: weight / total for target, weight in options}


	def sources (self) -> typing.List[NodeType]:

		"""
		Return every node that has outgoing transitions.
		"""

		return list(self._edges)


	def choose_next (self, source: NodeType, rng: random.Random) -> typing.Optional[TargetType]:

		"""
		Choose the next node from a source using one cumulative-probability draw.

		Returns ``None`` when the source has no outgoing transitions.
		"""

		distribution = self.probabilities(source)

		if not distribution:
			return None

		roll = rng.random()
		accum = 0.0

		for target, probability in distribution.items():
			accum += probability
			if roll <= accum:
				return target

		# Decision path: rounding can leave the cumulative sum fractionally below the roll.
		return list(distribution)[-1]


	def clear (self) -> None:

		"""
		Remove every transition.
		"""

		self._edges.clear()


	def __len__ (self) -> int:

		return len(self._edges)
