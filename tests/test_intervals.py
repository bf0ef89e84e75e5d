import pytest

import melodist.intervals


def test_scale_of_c_major () -> None:

	"""C major should produce the white-key pitch classes in order."""

	scale = melodist.intervals.scale_of(0, "major")

	assert scale.root == 0
	assert scale.type == "major"
	assert scale.notes == (0, 2, 4, 5, 7, 9, 11)


def test_scale_of_reduces_mod_12 () -> None:

	"""Intervals wrap past B back to C."""

	scale = melodist.intervals.scale_of(9, "minor")

	assert scale.notes == (9, 11, 0, 2, 4, 5, 7)


def test_every_scale_has_seven_pitch_classes_containing_root () -> None:

	"""All types and roots give seven values in [0, 11] including the root."""

	for scale_type in melodist.intervals.SCALE_TYPES:
		for root in range(12):

			scale = melodist.intervals.scale_of(root, scale_type)

			assert len(scale.notes) == 7
			assert all(0 <= pc <= 11 for pc in scale.notes)
			assert melodist.intervals.is_in_scale(root, scale)


def test_unknown_scale_type_raises () -> None:

	with pytest.raises(ValueError, match="Unknown scale type"):
		melodist.intervals.scale_of(0, "bebop")


def test_is_in_scale_uses_pitch_class (c_major: melodist.intervals.Scale) -> None:

	assert melodist.intervals.is_in_scale(60, c_major)
	assert melodist.intervals.is_in_scale(84, c_major)
	assert melodist.intervals.is_in_scale(-1, c_major)
	assert not melodist.intervals.is_in_scale(61, c_major)


def test_scale_degree (c_major: melodist.intervals.Scale) -> None:

	assert melodist.intervals.scale_degree(60, c_major) == 0
	assert melodist.intervals.scale_degree(71, c_major) == 6
	assert melodist.intervals.scale_degree(79, c_major) == 4
	assert melodist.intervals.scale_degree(61, c_major) is None


class TestNearestScaleNote:

	def test_in_scale_pitch_unchanged (self, c_major: melodist.intervals.Scale) -> None:
		"""A pitch already in the scale snaps to itself."""
		for pitch in (60, 62, 64, 65, 67, 69, 71):
			assert melodist.intervals.nearest_scale_note(pitch, c_major) == pitch

	def test_tie_prefers_first_listed (self, c_major: melodist.intervals.Scale) -> None:
		"""C# is one semitone from both C and D; C is listed first."""
		assert melodist.intervals.nearest_scale_note(61, c_major) == 60
		assert melodist.intervals.nearest_scale_note(66, c_major) == 65

	def test_preserves_octave (self, c_major: melodist.intervals.Scale) -> None:
		assert melodist.intervals.nearest_scale_note(49, c_major) == 48
		assert melodist.intervals.nearest_scale_note(73, c_major) == 72

	def test_distance_is_not_circular (self) -> None:
		"""B (11) with C at index 0 and A# present snaps down to A#, not up to C."""
		scale = melodist.intervals.scale_of(0, "mixolydian")  # 0 2 4 5 7 9 10
		assert melodist.intervals.nearest_scale_note(71, scale) == 70

	def test_result_always_in_scale (self) -> None:
		for scale_type in melodist.intervals.SCALE_TYPES:
			scale = melodist.intervals.scale_of(3, scale_type)
			for pitch in range(40, 90):
				assert melodist.intervals.is_in_scale(melodist.intervals.nearest_scale_note(pitch, scale), scale)


class TestNextScaleNote:

	def test_step_up_and_down (self, c_major: melodist.intervals.Scale) -> None:
		assert melodist.intervals.next_scale_note(60, c_major, 1) == 62
		assert melodist.intervals.next_scale_note(64, c_major, -1) == 62

	def test_wraps_octave (self, c_major: melodist.intervals.Scale) -> None:
		assert melodist.intervals.next_scale_note(71, c_major, 1) == 72
		assert melodist.intervals.next_scale_note(60, c_major, -1) == 59

	def test_non_c_root_crosses_octave_correctly (self) -> None:
		"""A minor lists B before C; stepping up from B4 must land on C5."""
		a_minor = melodist.intervals.scale_of(9, "minor")
		assert melodist.intervals.next_scale_note(71, a_minor, 1) == 72
		assert melodist.intervals.next_scale_note(72, a_minor, -1) == 71

	def test_out_of_scale_unchanged (self, c_major: melodist.intervals.Scale) -> None:
		assert melodist.intervals.next_scale_note(61, c_major, 1) == 61

	def test_invalid_direction_raises (self, c_major: melodist.intervals.Scale) -> None:
		with pytest.raises(ValueError):
			melodist.intervals.next_scale_note(60, c_major, 2)


def test_scale_pitches_in_range (c_major: melodist.intervals.Scale) -> None:

	assert melodist.intervals.scale_pitches_in_range(c_major, 60, 72) == [60, 62, 64, 65, 67, 69, 71, 72]


def test_scale_pitches_in_range_empty () -> None:

	"""A one-semitone range outside the scale yields nothing."""

	c_major = melodist.intervals.scale_of(0, "major")

	assert melodist.intervals.scale_pitches_in_range(c_major, 61, 61) == []


def test_scale_pitches_in_range_follows_scale_order_within_octave () -> None:

	a_minor = melodist.intervals.scale_of(9, "minor")

	assert melodist.intervals.scale_pitches_in_range(a_minor, 57, 62) == [57, 59, 60, 62]
