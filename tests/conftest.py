import random
import typing

import mido
import pytest

import melodist.intervals
import melodist.melody


class FakeMidiOut:

	"""Minimal MIDI output stub that records what it is sent."""

	def __init__ (self) -> None:

		self.sent: typing.List[mido.Message] = []
		self.closed = False


	def send (self, message: mido.Message) -> None:

		"""Record outgoing MIDI messages."""

		self.sent.append(message)


	def close (self) -> None:

		"""Mark the fake device closed."""

		self.closed = True


# Module-level reference so tests can access the most recently opened FakeMidiOut.
_current_fake_output: typing.Optional[FakeMidiOut] = None


def _fake_get_output_names () -> list[str]:

	"""Return a fixed list of MIDI output names for tests."""

	return ["Dummy MIDI"]


def _fake_open_output (name: str) -> FakeMidiOut:

	"""Return a fake MIDI output regardless of the name."""

	global _current_fake_output
	fake = FakeMidiOut()
	_current_fake_output = fake
	return fake


@pytest.fixture
def patch_midi (monkeypatch: pytest.MonkeyPatch) -> None:

	"""Patch mido to use a fake MIDI output for all tests that need it."""

	monkeypatch.setattr(mido, "get_output_names", _fake_get_output_names)
	monkeypatch.setattr(mido, "open_output", _fake_open_output)


@pytest.fixture
def fake_output () -> FakeMidiOut:

	return FakeMidiOut()


@pytest.fixture
def rng () -> random.Random:

	return random.Random(42)


@pytest.fixture
def c_major () -> melodist.intervals.Scale:

	return melodist.intervals.scale_of(0, "major")


def make_notes (pitches: typing.Sequence[int], duration: float = 0.5, velocity: int = 80) -> typing.List[melodist.melody.Note]:

	"""Lay out pitches back to back at a fixed duration."""

	return [
		melodist.melody.Note(pitch=pitch, duration=duration, velocity=velocity, start_time=i * duration)
		for i, pitch in enumerate(pitches)
	]
