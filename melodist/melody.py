"""Notes, generation parameters and generated melodies.

Timing is in **beats** (1.0 = one quarter note) and is tempo independent;
converting to seconds is the job of :mod:`melodist.playback`.
"""

import dataclasses
import datetime
import typing

import melodist.constants.velocity
import melodist.intervals


@dataclasses.dataclass
class Note:

	"""
	A single pitched note placed at a beat offset.

	Notes are mutable while a melody is being generated (the start time is
	only known once the note is accepted) and treated as fixed afterwards.
	"""

	pitch: int
	duration: float
	velocity: int
	start_time: float = 0.0


	def __post_init__ (self) -> None:

		if self.duration <= 0:
			raise ValueError(f"Duration must be positive, got {self.duration}")

		if not melodist.constants.velocity.MIN_VELOCITY <= self.velocity <= melodist.constants.velocity.MAX_VELOCITY:
			raise ValueError(
				f"Velocity must be between {melodist.constants.velocity.MIN_VELOCITY} "
				f"and {melodist.constants.velocity.MAX_VELOCITY}, got {self.velocity}"
			)

		if self.start_time < 0:
			raise ValueError(f"Start time cannot be negative, got {self.start_time}")


	def key (self) -> typing.Tuple[int, float]:

		"""
		Return the ``(pitch, duration)`` pair used by the transition model.
		"""

		return (self.pitch, self.duration)


	def end_time (self) -> float:

		"""Return the beat at which the note stops sounding."""

		return self.start_time + self.duration


	def to_dict (self) -> typing.Dict[str, typing.Any]:

		return {
			"pitch": self.pitch,
			"duration": self.duration,
			"velocity": self.velocity,
			"start_time": self.start_time,
		}


	@classmethod
	def from_dict (cls, data: typing.Dict[str, typing.Any]) -> "Note":

		return cls(
			pitch = int(data["pitch"]),
			duration = float(data["duration"]),
			velocity = int(data["velocity"]),
			start_time = float(data.get("start_time", 0.0))
		)


@dataclasses.dataclass(frozen=True)
class GenerationParams:

	"""
	Immutable input to one generation call.

	Parameters:
		length: Number of 4/4 measures to fill.
		complexity: 0.0–1.0. Widens both the random-walk step and the
			largest leap the repair pass allows.
		rhythm_density: 0.0–1.0. Above 0.5 short durations dominate.
		range: Inclusive ``(low, high)`` MIDI pitch bounds.
		scale: Scale every generated pitch is drawn from.
	"""

	length: int
	complexity: float
	rhythm_density: float
	range: typing.Tuple[int, int]
	scale: melodist.intervals.Scale


	def __post_init__ (self) -> None:

		if self.length <= 0:
			raise ValueError(f"Length must be a positive number of measures, got {self.length}")

		if not 0.0 <= self.complexity <= 1.0:
			raise ValueError(f"Complexity must be between 0 and 1, got {self.complexity}")

		if not 0.0 <= self.rhythm_density <= 1.0:
			raise ValueError(f"Rhythm density must be between 0 and 1, got {self.rhythm_density}")

		low, high = self.range

		if low > high:
			raise ValueError(f"Range low ({low}) cannot be above range high ({high})")

		# Normalize lists (e.g. from JSON or YAML) to a tuple so params stay hashable.
		object.__setattr__(self, "range", (int(low), int(high)))


	@property
	def low (self) -> int:

		return self.range[0]


	@property
	def high (self) -> int:

		return self.range[1]


	def to_dict (self) -> typing.Dict[str, typing.Any]:

		return {
			"length": self.length,
			"complexity": self.complexity,
			"rhythm_density": self.rhythm_density,
			"range": [self.low, self.high],
			"scale": {"root": self.scale.root, "type": self.scale.type},
		}


	@classmethod
	def from_dict (cls, data: typing.Dict[str, typing.Any]) -> "GenerationParams":

		scale = data["scale"]
		low, high = data["range"]

		return cls(
			length = int(data["length"]),
			complexity = float(data["complexity"]),
			rhythm_density = float(data["rhythm_density"]),
			range = (int(low), int(high)),
			scale = melodist.intervals.scale_of(int(scale["root"]), scale["type"])
		)


@dataclasses.dataclass
class GeneratedMelody:

	"""
	The result of one generation call.
	"""

	id: str
	notes: typing.List[Note]
	params: GenerationParams
	created_at: datetime.datetime
	name: str


	def duration_beats (self) -> float:

		"""Return the beat at which the last note ends (0.0 for an empty melody)."""

		if not self.notes:
			return 0.0

		return max(note.end_time() for note in self.notes)


	def to_dict (self) -> typing.Dict[str, typing.Any]:

		"""Return a JSON-safe representation."""

		return {
			"id": self.id,
			"name": self.name,
			"created_at": self.created_at.isoformat(),
			"params": self.params.to_dict(),
			"notes": [note.to_dict() for note in self.notes],
		}


	@classmethod
	def from_dict (cls, data: typing.Dict[str, typing.Any]) -> "GeneratedMelody":

		return cls(
			id = str(data["id"]),
			notes = [Note.from_dict(note) for note in data["notes"]],
			params = GenerationParams.from_dict(data["params"]),
			created_at = datetime.datetime.fromisoformat(data["created_at"]),
			name = str(data["name"])
		)
