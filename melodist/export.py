"""Export generated melodies as MIDI or MusicXML.

MIDI files are written with ``mido``: format 0, a single track and 96 ticks
per quarter note. Each note becomes a note-on followed by its note-off, and
``mido`` closes the track with the end-of-track meta event. A one-note melody
(C4, one beat, velocity 64) produces this track body::

    00 90 3C 40    note-on, delta 0
    60 80 3C 40    note-off after 96 ticks, release velocity 0x40
    00 FF 2F 00    end of track

MusicXML output is a minimal ``score-partwise`` document built with
``xml.etree.ElementTree``: one part, 4/4, treble clef, ``divisions`` of 4 per
quarter note.
"""

import enum
import io
import logging
import math
import os
import typing
import xml.etree.ElementTree

import mido

import melodist.constants
import melodist.constants.velocity
import melodist.melody


logger = logging.getLogger(__name__)

MUSICXML_DIVISIONS = 4

MUSICXML_DOCTYPE = (
	'<!DOCTYPE score-partwise PUBLIC "-//Recordare//DTD MusicXML 3.1 Partwise//EN" '
	'"http://www.musicxml.org/dtds/partwise.dtd">'
)


class ExportFormat (enum.Enum):

	"""Supported export targets."""

	MIDI = "midi"
	MUSICXML = "musicxml"


def resolve_format (fmt: typing.Union[ExportFormat, str]) -> ExportFormat:

	"""Accept an ``ExportFormat`` or its string value."""

	if isinstance(fmt, ExportFormat):
		return fmt

	try:
		return ExportFormat(str(fmt).lower())

	except ValueError:
		raise ValueError(
			f"Unsupported export format: {fmt!r}. Available: {[f.value for f in ExportFormat]}"
		) from None


def export_melody (melody: melodist.melody.GeneratedMelody, fmt: typing.Union[ExportFormat, str]) -> bytes:

	"""Encode a melody in the requested format."""

	resolved = resolve_format(fmt)

	if resolved is ExportFormat.MIDI:
		return melody_to_midi_bytes(melody)

	return melody_to_musicxml(melody).encode("utf-8")


def write_melody (
	melody: melodist.melody.GeneratedMelody,
	fmt: typing.Union[ExportFormat, str],
	path: typing.Union[str, os.PathLike]
) -> None:

	"""Encode a melody and write it to ``path``."""

	data = export_melody(melody, fmt)

	with open(path, "wb") as f:
		f.write(data)

	logger.info(f"Exported '{melody.name}' ({len(melody.notes)} notes) to {path}")


def beats_to_ticks (beats: float, ticks_per_beat: int = melodist.constants.MIDI_TICKS_PER_BEAT) -> int:

	"""Convert a beat offset to whole MIDI ticks, rounding down."""

	return math.floor(beats * ticks_per_beat)


def melody_to_midi_file (melody: melodist.melody.GeneratedMelody) -> mido.MidiFile:

	"""Build a format 0 ``mido.MidiFile`` for a melody.

	Note-on delta times count from the previous event, so a gap between one
	note's end and the next note's start becomes the note-on delta. Overlapping
	notes are not reordered; their note-on delta is clamped at zero.
	"""

	ticks_per_beat = melodist.constants.MIDI_TICKS_PER_BEAT

	mid = mido.MidiFile(type=0, ticks_per_beat=ticks_per_beat)
	track = mido.MidiTrack()
	mid.tracks.append(track)

	last_tick = 0

	for note in melody.notes:

		start_tick = beats_to_ticks(note.start_time, ticks_per_beat)
		duration_ticks = beats_to_ticks(note.duration, ticks_per_beat)

		track.append(mido.Message(
			"note_on",
			note = note.pitch,
			velocity = note.velocity,
			time = max(0, start_tick - last_tick)
		))

		track.append(mido.Message(
			"note_off",
			note = note.pitch,
			velocity = melodist.constants.velocity.RELEASE_VELOCITY,
			time = duration_ticks
		))

		last_tick = max(start_tick, last_tick) + duration_ticks

	track.append(mido.MetaMessage("end_of_track", time=0))

	return mid


def melody_to_midi_bytes (melody: melodist.melody.GeneratedMelody) -> bytes:

	"""Return the standard MIDI file bytes for a melody."""

	buffer = io.BytesIO()
	melody_to_midi_file(melody).save(file=buffer)

	return buffer.getvalue()


_STEPS: typing.List[typing.Tuple[str, int]] = [
	("C", 0), ("C", 1), ("D", 0), ("D", 1), ("E", 0), ("F", 0),
	("F", 1), ("G", 0), ("G", 1), ("A", 0), ("A", 1), ("B", 0),
]


def note_type (duration: float) -> str:

	"""Return the MusicXML note type for a duration in beats."""

	if duration >= 2:
		return "half"

	if duration >= 1:
		return "quarter"

	if duration >= 0.5:
		return "eighth"

	return "16th"


def _sub (parent: xml.etree.ElementTree.Element, tag: str, text: typing.Optional[object] = None) -> xml.etree.ElementTree.Element:

	element = xml.etree.ElementTree.SubElement(parent, tag)

	if text is not None:
		element.text = str(text)

	return element


def _attributes (measure: xml.etree.ElementTree.Element) -> None:

	attributes = _sub(measure, "attributes")
	_sub(attributes, "divisions", MUSICXML_DIVISIONS)
	_sub(_sub(attributes, "key"), "fifths", 0)

	time = _sub(attributes, "time")
	_sub(time, "beats", melodist.constants.BEATS_PER_MEASURE)
	_sub(time, "beat-type", 4)

	clef = _sub(attributes, "clef")
	_sub(clef, "sign", "G")
	_sub(clef, "line", 2)


def melody_to_musicxml (melody: melodist.melody.GeneratedMelody) -> str:

	"""Return a MusicXML 3.1 partwise document for a melody.

	Notes go into the measure their start beat falls in; notes that cross a
	barline are not split or tied.
	"""

	score = xml.etree.ElementTree.Element("score-partwise", version="3.1")

	score_part = _sub(_sub(score, "part-list"), "score-part")
	score_part.set("id", "P1")
	_sub(score_part, "part-name", melody.name)

	part = _sub(score, "part")
	part.set("id", "P1")

	beats_per_measure = melodist.constants.BEATS_PER_MEASURE
	measure_count = max(1, melody.params.length)

	for note in melody.notes:
		measure_count = max(measure_count, int(note.start_time // beats_per_measure) + 1)

	measures = []

	for number in range(1, measure_count + 1):
		measure = _sub(part, "measure")
		measure.set("number", str(number))
		measures.append(measure)

	_attributes(measures[0])

	for note in melody.notes:

		measure = measures[int(note.start_time // beats_per_measure)]
		step, alter = _STEPS[note.pitch % 12]

		element = _sub(measure, "note")
		pitch = _sub(element, "pitch")
		_sub(pitch, "step", step)

		if alter:
			_sub(pitch, "alter", alter)

		_sub(pitch, "octave", note.pitch // 12 - 1)
		_sub(element, "duration", math.floor(note.duration * MUSICXML_DIVISIONS))
		_sub(element, "type", note_type(note.duration))

	body = xml.etree.ElementTree.tostring(score, encoding="unicode")

	return f'<?xml version="1.0" encoding="UTF-8"?>\n{MUSICXML_DOCTYPE}\n{body}'
