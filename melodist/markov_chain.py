"""Variable-order Markov chain over note transitions.

The model learns, from example note sequences, how often each
``(pitch, duration)`` pair follows a window of the previous ``order`` notes.
Velocity and start time are discarded when building keys, so the model only
knows *what* comes next, never *when* or *how loud*.

Raw counts are retained across ``train()`` calls and probabilities are
derived from them on every query. Normalizing in place would make a second
training batch count as much as the whole history before it.

Example:
	```python
	model = TransitionModel(order=2)
	model.train(notes)

	next_note = model.sample_next(notes[-2:], rng)  # None if unseen
	```
"""

import logging
import random
import threading
import typing

import melodist.constants.velocity
import melodist.melody
import melodist.weighted_graph


logger = logging.getLogger(__name__)

NoteKey = typing.Tuple[int, float]
StateKey = typing.Tuple[NoteKey, ...]


class TransitionModel:

	"""
	A trainable probability table keyed by fixed-length note windows.

	All public operations hold the same lock, so a ``train()`` call from one
	thread is never observed half-applied by ``sample_next()`` in another.
	"""

	def __init__ (self, order: int = 2) -> None:

		"""
		Create an empty model.

		Parameters:
			order: Number of preceding notes used as the lookup key. Fixed for
				the lifetime of the model.
		"""

		if order < 1:
			raise ValueError(f"Model order must be at least 1, got {order}")

		self._order = order
		self._graph: melodist.weighted_graph.WeightedGraph[StateKey, NoteKey] = melodist.weighted_graph.WeightedGraph()
		self._lock = threading.Lock()


	@property
	def order (self) -> int:

		"""Number of notes in each state key."""

		return self._order


	def state_key (self, notes: typing.Sequence[melodist.melody.Note]) -> StateKey:

		"""
		Reduce the last ``order`` notes to a lookup key.
		"""

		return tuple(note.key() for note in notes[-self._order:])


	def train (self, notes: typing.Sequence[melodist.melody.Note]) -> None:

		"""
		Record every ``order``-note window and the note that follows it.

		Sequences shorter than ``order + 1`` notes are ignored. Counts from
		earlier calls are kept and added to.
		"""

		if len(notes) < self._order + 1:
			return

		# Count the whole batch first so the graph only changes in one step.
		batch: typing.Dict[StateKey, typing.Dict[NoteKey, int]] = {}

		for i in range(len(notes) - self._order):
			state = tuple(note.key() for note in notes[i:i + self._order])
			target = notes[i + self._order].key()
			targets = batch.setdefault(state, {})
			targets[target] = targets.get(target, 0) + 1

		with self._lock:
			self._graph.merge(batch)
			size = len(self._graph)

		logger.debug(f"Trained on {len(notes)} notes, {len(batch)} windows updated, {size} keys total")


	def probabilities (self, state: StateKey) -> typing.Dict[NoteKey, float]:

		"""
		Return the normalized next-note distribution for a state key.
		"""

		with self._lock:
			return self._graph.probabilities(state)


	def sample_next (
		self,
		last_notes: typing.Sequence[melodist.melody.Note],
		rng: typing.Optional[random.Random] = None
	) -> typing.Optional[melodist.melody.Note]:

		"""
		Draw the next note for the given history, or ``None`` if there is no continuation.

		Only the last ``order`` notes of ``last_notes`` are used. The returned
		note carries the sampled pitch and duration with a placeholder velocity
		and a start time of zero; the caller positions it.
		"""

		if len(last_notes) < self._order:
			return None

		state = self.state_key(last_notes)

		with self._lock:
			choice = self._graph.choose_next(state, rng or random.Random())

		if choice is None:
			return None

		pitch, duration = choice

		return melodist.melody.Note(
			pitch = pitch,
			duration = duration,
			velocity = melodist.constants.velocity.DEFAULT_VELOCITY,
			start_time = 0.0
		)


	def reset (self) -> None:

		"""
		Forget everything the model has learned.
		"""

		with self._lock:
			self._graph.clear()


	def size (self) -> int:

		"""
		Return the number of distinct state keys.
		"""

		with self._lock:
			return len(self._graph)


	def states (self) -> typing.List[StateKey]:

		"""
		Return every state key that has at least one recorded continuation.
		"""

		with self._lock:
			return self._graph.sources()


	def __len__ (self) -> int:

		return self.size()
