"""Melody generation: a Markov chain proposes, music theory disposes.

:class:`MelodyGenerator` owns one :class:`~melodist.markov_chain.TransitionModel`
for its whole lifetime. Each call to :meth:`MelodyGenerator.generate` runs the
same pipeline:

1. Seed with a random scale tone inside the requested range.
2. Ask the model for a continuation of the last ``order`` notes. A proposal
   is kept only if it is in range and in the scale.
3. Otherwise take a constrained random-walk step from the previous pitch.
4. Stop before the first note that would overrun the last measure.
5. Clamp any leap larger than the complexity allows.

The model starts almost empty (two short hand-written patterns), so step 3
carries most of the work until melodies are fed back with
:meth:`MelodyGenerator.train_from_melody`.

Example:
	```python
	import melodist

	generator = melodist.MelodyGenerator(rng=random.Random(7))
	params = melodist.GenerationParams(
		length = 2,
		complexity = 0.3,
		rhythm_density = 0.6,
		range = (60, 84),
		scale = melodist.scale_of(0, "major"),
	)

	melody = generator.generate(params)
	generator.train_from_melody(melody)
	```
"""

import dataclasses
import datetime
import enum
import logging
import math
import random
import typing
import uuid

import melodist.constants
import melodist.constants.durations
import melodist.constants.velocity
import melodist.intervals
import melodist.markov_chain
import melodist.melody
import melodist.sequence_utils


logger = logging.getLogger(__name__)


# (pitches, duration in beats, velocity) used to prime a new model.
SEED_PATTERNS: typing.List[typing.Tuple[typing.List[int], float, int]] = [
	# C major scale ascending
	([60, 62, 64, 65, 67, 69, 71, 72], melodist.constants.durations.EIGHTH, 64),
	# C major arpeggio up and back
	([60, 64, 67, 72, 67, 64], melodist.constants.durations.SIXTEENTH, 70),
]


class CandidateSource (enum.Enum):

	"""Where a candidate note came from."""

	MODEL = "model"
	RANDOM_WALK = "random_walk"


@dataclasses.dataclass
class Candidate:

	"""A proposed next note, tagged with the strategy that produced it."""

	note: melodist.melody.Note
	source: CandidateSource


def max_interval (complexity: float) -> int:

	"""Largest random-walk step in semitones: ``floor(complexity * 12) + 1``."""

	return math.floor(complexity * 12) + 1


def max_leap (complexity: float) -> int:

	"""Largest leap kept by the repair pass: ``floor(complexity * 12) + 7``."""

	return math.floor(complexity * 12) + 7


def repair_leaps (notes: typing.List[melodist.melody.Note], leap: int) -> typing.List[melodist.melody.Note]:

	"""Clamp every leap wider than ``leap`` semitones, in place.

	Each note is compared with its (already repaired) predecessor and pulled
	to exactly ``leap`` semitones away in the same direction. The result is
	not re-checked against the scale or the range.
	"""

	for previous, current in zip(notes, notes[1:]):

		interval = current.pitch - previous.pitch

		if abs(interval) > leap:
			current.pitch = previous.pitch + (leap if interval > 0 else -leap)

	return notes


def pattern_notes (pitches: typing.Sequence[int], duration: float, velocity: int) -> typing.List[melodist.melody.Note]:

	"""Lay out pitches back to back at a fixed duration."""

	return [
		melodist.melody.Note(pitch=pitch, duration=duration, velocity=velocity, start_time=i * duration)
		for i, pitch in enumerate(pitches)
	]


class MelodyGenerator:

	"""Generates melodies from a transition model plus scale, range and leap constraints."""

	def __init__ (
		self,
		order: int = 2,
		rng: typing.Optional[random.Random] = None,
		seed_patterns: bool = True
	) -> None:

		"""Create a generator with its own transition model.

		Parameters:
			order: Markov order of the transition model.
			rng: Random source for every draw. Pass a seeded
				``random.Random`` for repeatable output.
			seed_patterns: Prime the model with ``SEED_PATTERNS``.
		"""

		self.rng = rng or random.Random()
		self.model = melodist.markov_chain.TransitionModel(order=order)

		if seed_patterns:
			for pitches, duration, velocity in SEED_PATTERNS:
				self.model.train(pattern_notes(pitches, duration, velocity))


	def generate (self, params: melodist.melody.GenerationParams) -> melodist.melody.GeneratedMelody:

		"""
		Generate one melody. Never raises for valid parameters.
		"""

		notes = self.generate_notes(params)

		created_at = datetime.datetime.now()
		melody_id = str(uuid.UUID(int=self.rng.getrandbits(128), version=4))

		return melodist.melody.GeneratedMelody(
			id = melody_id,
			notes = notes,
			params = params,
			created_at = created_at,
			name = f"Melody {created_at.strftime('%H:%M:%S')}"
		)


	def generate_notes (self, params: melodist.melody.GenerationParams) -> typing.List[melodist.melody.Note]:

		"""
		Run the generation loop and the leap repair, returning placed notes.
		"""

		total_beats = params.length * melodist.constants.BEATS_PER_MEASURE

		seed = self._seed_note(params)
		notes = [seed]
		current_time = seed.duration
		sources = {source: 0 for source in CandidateSource}

		while current_time < total_beats:

			candidate = self._next_candidate(notes, params)

			if current_time + candidate.note.duration > total_beats:
				break

			candidate.note.start_time = current_time
			notes.append(candidate.note)
			current_time += candidate.note.duration
			sources[candidate.source] += 1

		repair_leaps(notes, max_leap(params.complexity))

		logger.debug(
			f"Generated {len(notes)} notes over {total_beats} beats "
			f"({sources[CandidateSource.MODEL]} from model, {sources[CandidateSource.RANDOM_WALK]} from random walk)"
		)

		return notes


	def train_from_melody (self, melody: melodist.melody.GeneratedMelody) -> None:

		"""
		Feed a melody back into the transition model.
		"""

		self.model.train(melody.notes)


	def reset (self) -> None:

		"""
		Clear everything the transition model has learned, including the seed patterns.
		"""

		self.model.reset()


	def model_size (self) -> int:

		"""
		Return the number of distinct state keys the model knows.
		"""

		return self.model.size()


	def _seed_note (self, params: melodist.melody.GenerationParams) -> melodist.melody.Note:

		"""Pick a random scale tone inside the range to open the melody."""

		pool = melodist.intervals.scale_pitches_in_range(params.scale, params.low, params.high)

		if pool:
			pitch = self.rng.choice(pool)

		else:
			logger.debug(f"No {params.scale.type} scale tones in range {params.range}, seeding with {params.low}")
			pitch = params.low

		return melodist.melody.Note(
			pitch = pitch,
			duration = self._choose_duration(params.rhythm_density),
			velocity = self._choose_velocity(),
			start_time = 0.0
		)


	def _next_candidate (self, notes: typing.List[melodist.melody.Note], params: melodist.melody.GenerationParams) -> Candidate:

		"""Try the model first and fall back to a random-walk step."""

		candidate = self._model_candidate(notes, params)

		if candidate is not None:
			return candidate

		return self._random_walk_candidate(notes[-1], params)


	def _model_candidate (
		self,
		notes: typing.List[melodist.melody.Note],
		params: melodist.melody.GenerationParams
	) -> typing.Optional[Candidate]:

		"""Return the model's proposal if it is in range and in the scale."""

		proposal = self.model.sample_next(notes, self.rng)

		if proposal is None:
			return None

		if not params.low <= proposal.pitch <= params.high:
			return None

		if not melodist.intervals.is_in_scale(proposal.pitch, params.scale):
			return None

		note = melodist.melody.Note(
			pitch = proposal.pitch,
			duration = self._choose_duration(params.rhythm_density),
			velocity = self._choose_velocity(),
		)

		return Candidate(note=note, source=CandidateSource.MODEL)


	def _random_walk_candidate (self, previous: melodist.melody.Note, params: melodist.melody.GenerationParams) -> Candidate:

		"""Step from the previous pitch, then clamp to the range and snap to the scale."""

		pitch = melodist.sequence_utils.random_walk_step(
			previous.pitch,
			step = max_interval(params.complexity),
			low = params.low,
			high = params.high,
			rng = self.rng
		)

		if not melodist.intervals.is_in_scale(pitch, params.scale):

			snapped = melodist.intervals.nearest_scale_note(pitch, params.scale)

			if params.low <= snapped <= params.high:
				pitch = snapped

			else:
				# Snapping stays within the octave, which can cross a range boundary.
				pool = melodist.intervals.scale_pitches_in_range(params.scale, params.low, params.high)
				nearest = melodist.sequence_utils.nearest_in_pool(snapped, pool)

				if nearest is not None:
					pitch = nearest

		note = melodist.melody.Note(
			pitch = pitch,
			duration = self._choose_duration(params.rhythm_density),
			velocity = self._choose_velocity(),
		)

		return Candidate(note=note, source=CandidateSource.RANDOM_WALK)


	def _choose_duration (self, rhythm_density: float) -> float:

		"""Draw a duration from the dense or sparse weight table."""

		if rhythm_density > melodist.constants.durations.DENSITY_THRESHOLD:
			weights = melodist.constants.durations.DENSE_WEIGHTS

		else:
			weights = melodist.constants.durations.SPARSE_WEIGHTS

		return melodist.sequence_utils.weighted_choice(
			list(zip(melodist.constants.durations.DURATION_CHOICES, weights)),
			self.rng,
			fallback = melodist.constants.durations.FALLBACK_DURATION
		)


	def _choose_velocity (self) -> int:

		return self.rng.randint(
			melodist.constants.velocity.GENERATED_VELOCITY_LOW,
			melodist.constants.velocity.GENERATED_VELOCITY_HIGH
		)
