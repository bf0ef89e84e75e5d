"""Play generated melodies on a MIDI output port.

Melodies are timed in beats; this module is where beats become seconds.
There is no sound engine here: notes go out as MIDI messages through a
``mido`` output port to whatever synth, DAW or hardware is listening.

Example:
	```python
	name, port = select_output_device()

	if port is not None:
		play(port, melody.notes, bpm=100)
		port.close()
	```
"""

import logging
import time
import typing

import mido

import melodist.constants.velocity
import melodist.melody


logger = logging.getLogger(__name__)


def beats_to_seconds (beats: float, bpm: float) -> float:

	"""Convert a beat offset to seconds at a tempo."""

	if bpm <= 0:
		raise ValueError(f"BPM must be positive, got {bpm}")

	return beats * 60.0 / bpm


def melody_messages (
	notes: typing.Sequence[melodist.melody.Note],
	bpm: float,
	channel: int = 0
) -> typing.List[typing.Tuple[float, mido.Message]]:

	"""
	Return ``(seconds, message)`` pairs for every note-on and note-off, in time order.

	At equal times note-offs come first, so a repeated pitch is released
	before it is struck again.
	"""

	events: typing.List[typing.Tuple[float, int, mido.Message]] = []

	for note in notes:

		start = beats_to_seconds(note.start_time, bpm)
		end = beats_to_seconds(note.end_time(), bpm)

		events.append((start, 1, mido.Message("note_on", channel=channel, note=note.pitch, velocity=note.velocity)))
		events.append((end, 0, mido.Message(
			"note_off",
			channel = channel,
			note = note.pitch,
			velocity = melodist.constants.velocity.RELEASE_VELOCITY
		)))

	events.sort(key=lambda event: (event[0], event[1]))

	return [(seconds, message) for seconds, _, message in events]


def play (
	output: typing.Any,
	notes: typing.Sequence[melodist.melody.Note],
	bpm: float = 120,
	channel: int = 0,
	loops: int = 1,
	sleep: typing.Callable[[float], None] = time.sleep,
	clock: typing.Callable[[], float] = time.monotonic
) -> None:

	"""Send a melody to an output port in real time. Blocks until the last note-off.

	If playback is interrupted (``KeyboardInterrupt`` or a send failure),
	note-offs are sent for every note still sounding before the exception
	propagates.

	Parameters:
		output: An open ``mido`` output port (anything with ``send()``).
		notes: Notes with beat-based ``start_time`` and ``duration``.
		bpm: Tempo in beats per minute.
		channel: MIDI channel (0-15).
		loops: Number of times to play the melody back to back. Each pass
			lasts until the last note of the melody ends.
		sleep: Sleep function, replaceable in tests.
		clock: Monotonic clock, replaceable in tests.
	"""

	if loops < 1:
		raise ValueError(f"Loops must be at least 1, got {loops}")

	pass_events = melody_messages(notes, bpm, channel)
	pass_seconds = beats_to_seconds(max((note.end_time() for note in notes), default=0.0), bpm)

	# A pass never has events after pass_seconds, so concatenated passes stay in time order.
	events = [
		(seconds + index * pass_seconds, message)
		for index in range(loops)
		for seconds, message in pass_events
	]

	sounding: typing.Set[int] = set()

	logger.info(f"Playing {len(notes)} notes at {bpm} BPM" + (f", {loops} times" if loops > 1 else ""))

	started = clock()

	try:

		for seconds, message in events:

			wait = started + seconds - clock()

			if wait > 0:
				sleep(wait)

			output.send(message)

			if message.type == "note_on":
				sounding.add(message.note)

			else:
				sounding.discard(message.note)

	finally:

		if sounding:
			logger.warning(f"Playback interrupted, releasing {len(sounding)} notes")

			for pitch in sorted(sounding):
				output.send(mido.Message(
					"note_off",
					channel = channel,
					note = pitch,
					velocity = melodist.constants.velocity.RELEASE_VELOCITY
				))


def panic (output: typing.Any) -> None:

	"""
	Send "All Notes Off" (CC 123) and "All Sound Off" (CC 120) on all 16 channels.
	"""

	logger.info("Panic: sending all notes off.")

	for channel in range(16):
		output.send(mido.Message("control_change", channel=channel, control=123, value=0))
		output.send(mido.Message("control_change", channel=channel, control=120, value=0))


def select_output_device (device_name: typing.Optional[str] = None) -> typing.Tuple[typing.Optional[str], typing.Optional[typing.Any]]:

	"""
	Select and open a MIDI output device.

	If ``device_name`` is provided, attempts to open that specific device.
	Otherwise the first available output is used.

	Returns:
		A tuple of (device_name, midi_out_object) or (None, None) on failure.
	"""

	try:
		outputs = mido.get_output_names()
		logger.info(f"Available MIDI outputs: {outputs}")

		if not outputs:
			logger.error("No MIDI output devices found.")
			return None, None

		if device_name is not None and device_name not in outputs:
			logger.error(
				f"MIDI output device '{device_name}' not found. "
				f"Available devices: {outputs}"
			)
			return None, None

		selected_name = device_name if device_name is not None else outputs[0]
		midi_out = mido.open_output(selected_name)
		logger.info(f"Opened MIDI output: {selected_name}")

		return selected_name, midi_out

	except Exception as e:
		logger.error(f"Failed to open MIDI output: {e}")
		return None, None
