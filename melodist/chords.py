"""Chord definitions and chord tone construction.

Module-level constants:
- `CHORD_INTERVALS`: Maps chord quality names to interval lists (semitones from root)
- `CHORD_SUFFIX`: Maps chord quality names to human-readable suffixes (e.g., `"m"`, `"7"`)

Chord qualities: `"major"`, `"minor"`, `"diminished"`, `"augmented"`, `"sus2"`, `"sus4"`,
`"dominant_7th"`, `"major_7th"`, `"minor_7th"`, `"half_diminished_7th"`
"""

import dataclasses
import typing

import melodist.notes


CHORD_INTERVALS: typing.Dict[str, typing.List[int]] = {
	"major": [0, 4, 7],
	"minor": [0, 3, 7],
	"diminished": [0, 3, 6],
	"augmented": [0, 4, 8],
	"sus2": [0, 2, 7],
	"sus4": [0, 5, 7],
	"dominant_7th": [0, 4, 7, 10],
	"major_7th": [0, 4, 7, 11],
	"minor_7th": [0, 3, 7, 10],
	"half_diminished_7th": [0, 3, 6, 10],
}

CHORD_SUFFIX: typing.Dict[str, str] = {
	"major": "",
	"minor": "m",
	"diminished": "dim",
	"augmented": "+",
	"sus2": "sus2",
	"sus4": "sus4",
	"dominant_7th": "7",
	"major_7th": "maj7",
	"minor_7th": "m7",
	"half_diminished_7th": "m7b5",
}


def chord_intervals (quality: str) -> typing.List[int]:

	"""
	Return the interval template for a chord quality.
	"""

	if quality not in CHORD_INTERVALS:
		raise ValueError(f"Unknown chord quality: {quality}")

	return list(CHORD_INTERVALS[quality])


@dataclasses.dataclass(frozen=True)
class Chord:

	"""
	Represents a chord as an absolute root pitch, a quality and an inversion.
	"""

	root: int
	quality: str
	inversion: int = 0


	def __post_init__ (self) -> None:

		if self.inversion < 0:
			raise ValueError(f"Inversion cannot be negative, got {self.inversion}")


	def notes (self) -> typing.List[int]:

		"""
		Return the MIDI pitches of this chord. See :func:`chord_notes`.
		"""

		return chord_notes(self)


	def name (self) -> str:

		"""
		Return a human-friendly chord name.
		"""

		root_name = melodist.notes.PC_TO_NOTE_NAME[self.root % 12]
		suffix = CHORD_SUFFIX.get(self.quality, "")

		return f"{root_name}{suffix}"


def chord_notes (chord: Chord) -> typing.List[int]:

	"""Return the MIDI pitches of a chord, lowest first for root position.

	The quality template is added to the root, then for each step of
	``inversion`` the lowest note moves to the top, one octave up. The
	rotation is applied ``inversion`` times without wrapping, so inverting a
	triad three times lifts the whole chord an octave.

	Example:
		```python
		chord_notes(Chord(root=60, quality="major"))               # [60, 64, 67]
		chord_notes(Chord(root=60, quality="major", inversion=1))  # [64, 67, 72]
		chord_notes(Chord(root=60, quality="major", inversion=3))  # [72, 76, 79]
		```
	"""

	notes = [chord.root + interval for interval in chord_intervals(chord.quality)]

	for _ in range(chord.inversion):
		notes.append(notes.pop(0) + 12)

	return notes
