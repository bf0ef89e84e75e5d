"""Scales, scale membership and pitch snapping.

All functions here are pure. Pitches are absolute MIDI note numbers
(60 = middle C); scale membership is always decided on the pitch class
(``pitch % 12``), so a scale covers every octave.
"""

import dataclasses
import typing


SCALE_INTERVALS: typing.Dict[str, typing.List[int]] = {
	"major": [0, 2, 4, 5, 7, 9, 11],
	"minor": [0, 2, 3, 5, 7, 8, 10],
	"dorian": [0, 2, 3, 5, 7, 9, 10],
	"phrygian": [0, 1, 3, 5, 7, 8, 10],
	"lydian": [0, 2, 4, 6, 7, 9, 11],
	"mixolydian": [0, 2, 4, 5, 7, 9, 10],
	"aeolian": [0, 2, 3, 5, 7, 8, 10],
	"locrian": [0, 1, 3, 5, 6, 8, 10],
}

SCALE_TYPES: typing.List[str] = list(SCALE_INTERVALS)


@dataclasses.dataclass(frozen=True)
class Scale:

	"""
	A seven-note scale as a root pitch class, a type and its pitch classes.

	Build scales with :func:`scale_of` rather than directly, so that ``notes``
	always matches the type's interval template.
	"""

	root: int
	type: str
	notes: typing.Tuple[int, ...]


def scale_of (root: int, scale_type: str) -> Scale:

	"""
	Build a scale from a root pitch class and a scale type.

	Parameters:
		root: Root pitch class (0 = C, 1 = C#, ... 11 = B). Reduced mod 12.
		scale_type: One of ``SCALE_TYPES``.

	Raises:
		ValueError: If the scale type is unknown.

	Example:
		```python
		scale_of(0, "major").notes   # (0, 2, 4, 5, 7, 9, 11)
		scale_of(9, "minor").notes   # (9, 11, 0, 2, 4, 5, 7)
		```
	"""

	if scale_type not in SCALE_INTERVALS:
		raise ValueError(f"Unknown scale type '{scale_type}'. Available: {SCALE_TYPES}")

	root_pc = root % 12
	notes = tuple((root_pc + interval) % 12 for interval in SCALE_INTERVALS[scale_type])

	return Scale(root=root_pc, type=scale_type, notes=notes)


def is_in_scale (pitch: int, scale: Scale) -> bool:

	"""Return True if the pitch class of ``pitch`` belongs to the scale."""

	return pitch % 12 in scale.notes


def scale_degree (pitch: int, scale: Scale) -> typing.Optional[int]:

	"""
	Return the 0-based scale degree of a pitch, or ``None`` if it is not in the scale.
	"""

	pc = pitch % 12

	if pc not in scale.notes:
		return None

	return scale.notes.index(pc)


def nearest_scale_note (pitch: int, scale: Scale) -> int:

	"""
	Snap a pitch to a scale tone within the same octave.

	The distance is the plain difference between pitch classes, not the
	circular one, so B (11) in a scale containing C (0) and A# (10) snaps to
	A#. When two scale tones are equally close, the one listed first in
	``scale.notes`` wins.

	Example:
		```python
		c_major = scale_of(0, "major")
		nearest_scale_note(61, c_major)  # → 60  (C# ties C and D, C listed first)
		nearest_scale_note(66, c_major)  # → 65
		```
	"""

	pc = pitch % 12
	octave_base = (pitch // 12) * 12

	best_pc = scale.notes[0]
	best_distance = abs(pc - best_pc)

	for candidate in scale.notes[1:]:
		distance = abs(pc - candidate)
		if distance < best_distance:
			best_pc = candidate
			best_distance = distance

	return octave_base + best_pc


def next_scale_note (pitch: int, scale: Scale, direction: int) -> int:

	"""
	Step one scale degree up (``direction=1``) or down (``direction=-1``).

	The octave changes when the degree wraps around the scale. Pitches outside
	the scale are returned unchanged.
	"""

	if direction not in (1, -1):
		raise ValueError(f"Direction must be 1 or -1, got {direction}")

	degree = scale_degree(pitch, scale)

	if degree is None:
		return pitch

	count = len(scale.notes)
	next_degree = (degree + direction) % count
	octave_base = (pitch // 12) * 12
	target = octave_base + scale.notes[next_degree]

	# Pitch classes are not sorted for non-C roots, so compare actual pitches.
	if direction > 0 and target <= pitch:
		target += 12

	elif direction < 0 and target >= pitch:
		target -= 12

	return target


def scale_pitches_in_range (scale: Scale, low: int, high: int) -> typing.List[int]:

	"""
	Return every scale pitch in ``[low, high]``, ascending by octave.

	Within each octave the pitches follow ``scale.notes`` order.
	"""

	pitches: typing.List[int] = []

	for octave in range(low // 12, high // 12 + 1):
		for pc in scale.notes:
			pitch = octave * 12 + pc
			if low <= pitch <= high:
				pitches.append(pitch)

	return pitches
