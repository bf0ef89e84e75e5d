"""Note names for MIDI pitches.

Convention: **C4 = 60** (Middle C), so MIDI 0 is ``"C-1"`` and 127 is ``"G9"``.
Only sharps are produced and accepted, which keeps ``parse_name`` the exact
inverse of ``pitch_name``::

    pitch_name(61)      # "C#4"
    parse_name("C#4")   # 61
    parse_name("A-1")   # 9
"""

import re
import typing


PC_TO_NOTE_NAME: typing.List[str] = [
	"C",
	"C#",
	"D",
	"D#",
	"E",
	"F",
	"F#",
	"G",
	"G#",
	"A",
	"A#",
	"B",
]

NOTE_NAME_TO_PC: typing.Dict[str, int] = {name: pc for pc, name in enumerate(PC_TO_NOTE_NAME)}

_NOTE_NAME_PATTERN = re.compile(r"([A-G]#?)(-?[0-9]+)")


def pitch_name (pitch: int) -> str:

	"""Return the scientific pitch name of a MIDI pitch (e.g. ``60`` → ``"C4"``)."""

	octave = pitch // 12 - 1

	return f"{PC_TO_NOTE_NAME[pitch % 12]}{octave}"


def parse_name (name: str) -> int:

	"""Parse a ``letter[#]octave`` note name into a MIDI pitch.

	Parameters:
		name: Note name such as ``"C4"``, ``"F#3"`` or ``"B-1"``.

	Returns:
		MIDI note number.

	Raises:
		ValueError: If the name does not match the pattern, or names a
			sharp that does not exist (``"E#4"``, ``"B#4"``).
	"""

	match = _NOTE_NAME_PATTERN.fullmatch(name)

	if match is None:
		raise ValueError(f"Invalid note name: {name!r}. Expected e.g. 'C4', 'F#3'.")

	note, octave = match.groups()

	if note not in NOTE_NAME_TO_PC:
		raise ValueError(f"Invalid note name: {name!r}. Only C, D, F, G and A take a sharp.")

	return (int(octave) + 1) * 12 + NOTE_NAME_TO_PC[note]
