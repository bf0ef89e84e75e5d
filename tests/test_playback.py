import typing

import pytest

import conftest
import melodist.playback


class FakeClock:

	"""Deterministic clock that advances only when sleep() is called."""

	def __init__ (self) -> None:

		self.now = 0.0
		self.sleeps: typing.List[float] = []


	def time (self) -> float:

		return self.now


	def sleep (self, seconds: float) -> None:

		self.sleeps.append(seconds)
		self.now += seconds


def test_beats_to_seconds () -> None:

	assert melodist.playback.beats_to_seconds(1.0, 120) == 0.5
	assert melodist.playback.beats_to_seconds(4.0, 60) == 4.0


def test_non_positive_bpm_raises () -> None:

	with pytest.raises(ValueError):
		melodist.playback.beats_to_seconds(1.0, 0)


def test_melody_messages_order_and_timing () -> None:

	notes = conftest.make_notes([60, 60, 64], duration=1.0)

	events = melodist.playback.melody_messages(notes, bpm=120)

	assert [(seconds, m.type, m.note) for seconds, m in events] == [
		(0.0, "note_on", 60),
		(0.5, "note_off", 60),
		(0.5, "note_on", 60),
		(1.0, "note_off", 60),
		(1.0, "note_on", 64),
		(1.5, "note_off", 64),
	]


def test_play_sends_all_messages_on_schedule (fake_output: conftest.FakeMidiOut) -> None:

	clock = FakeClock()
	notes = conftest.make_notes([60, 62], duration=0.5)

	melodist.playback.play(fake_output, notes, bpm=60, sleep=clock.sleep, clock=clock.time)

	assert [(m.type, m.note) for m in fake_output.sent] == [
		("note_on", 60),
		("note_off", 60),
		("note_on", 62),
		("note_off", 62),
	]
	assert clock.sleeps == [0.5, 0.5]
	assert all(m.channel == 0 for m in fake_output.sent)


def test_play_loops_back_to_back (fake_output: conftest.FakeMidiOut) -> None:

	"""The second pass starts as the last note of the first one ends."""

	clock = FakeClock()
	notes = conftest.make_notes([60, 62], duration=0.5)

	melodist.playback.play(fake_output, notes, bpm=60, loops=2, sleep=clock.sleep, clock=clock.time)

	assert [(m.type, m.note) for m in fake_output.sent] == [
		("note_on", 60),
		("note_off", 60),
		("note_on", 62),
		("note_off", 62),
		("note_on", 60),
		("note_off", 60),
		("note_on", 62),
		("note_off", 62),
	]
	assert clock.sleeps == [0.5, 0.5, 0.5, 0.5]


def test_play_rejects_zero_loops (fake_output: conftest.FakeMidiOut) -> None:

	with pytest.raises(ValueError):
		melodist.playback.play(fake_output, conftest.make_notes([60]), loops=0)

	assert fake_output.sent == []


def test_play_releases_notes_when_interrupted (fake_output: conftest.FakeMidiOut) -> None:

	"""An interrupt mid-note still sends the note-off."""

	notes = conftest.make_notes([60, 62], duration=0.5)

	def interrupting_sleep (seconds: float) -> None:
		raise KeyboardInterrupt

	with pytest.raises(KeyboardInterrupt):
		melodist.playback.play(fake_output, notes, bpm=60, sleep=interrupting_sleep, clock=lambda: 0.0)

	assert [(m.type, m.note) for m in fake_output.sent] == [
		("note_on", 60),
		("note_off", 60),
	]


def test_panic_covers_every_channel (fake_output: conftest.FakeMidiOut) -> None:

	melodist.playback.panic(fake_output)

	assert len(fake_output.sent) == 32
	assert {m.channel for m in fake_output.sent} == set(range(16))
	assert {m.control for m in fake_output.sent} == {120, 123}


def test_select_output_device_default (patch_midi: None) -> None:

	name, port = melodist.playback.select_output_device()

	assert name == "Dummy MIDI"
	assert isinstance(port, conftest.FakeMidiOut)


def test_select_output_device_unknown_name (patch_midi: None) -> None:

	assert melodist.playback.select_output_device("Nope") == (None, None)
