import pytest

import melodist.notes


def test_middle_c () -> None:

	assert melodist.notes.pitch_name(60) == "C4"
	assert melodist.notes.parse_name("C4") == 60


def test_sharps_and_low_octave () -> None:

	assert melodist.notes.pitch_name(61) == "C#4"
	assert melodist.notes.pitch_name(0) == "C-1"
	assert melodist.notes.pitch_name(127) == "G9"
	assert melodist.notes.parse_name("A-1") == 9


def test_round_trip_full_midi_range () -> None:

	"""parse_name is the exact inverse of pitch_name for every MIDI pitch."""

	for pitch in range(128):
		assert melodist.notes.parse_name(melodist.notes.pitch_name(pitch)) == pitch


@pytest.mark.parametrize("name", ["", "C", "H4", "c4", "Db4", "C#", "C 4", "C4 ", "C##4", "4C", "C٤", "C４"])
def test_malformed_names_raise (name: str) -> None:

	with pytest.raises(ValueError, match="Invalid note name"):
		melodist.notes.parse_name(name)


def test_nonexistent_sharp_raises () -> None:

	with pytest.raises(ValueError):
		melodist.notes.parse_name("E#4")
