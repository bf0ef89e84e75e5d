import random

import pytest

import melodist.sequence_utils


class _FixedRandom (random.Random):

	"""Random source whose ``random()`` always returns the same value."""

	def __init__ (self, value: float) -> None:

		super().__init__(0)
		self.value = value

	def random (self) -> float:

		return self.value


def test_weighted_choice_uses_cumulative_threshold () -> None:

	"""A draw of 0.5 over weights 1, 1, 2 lands exactly on the first boundary."""

	options = [("a", 1.0), ("b", 1.0), ("c", 2.0)]

	assert melodist.sequence_utils.weighted_choice(options, _FixedRandom(0.0)) == "a"
	assert melodist.sequence_utils.weighted_choice(options, _FixedRandom(0.25)) == "a"
	assert melodist.sequence_utils.weighted_choice(options, _FixedRandom(0.3)) == "b"
	assert melodist.sequence_utils.weighted_choice(options, _FixedRandom(0.9)) == "c"


def test_weighted_choice_weights_are_relative () -> None:

	"""Weights need not sum to 1."""

	rng = random.Random(1)
	options = [("rare", 1), ("common", 9)]

	picks = [melodist.sequence_utils.weighted_choice(options, rng) for _ in range(2000)]

	assert picks.count("common") / 2000 == pytest.approx(0.9, abs=0.03)


def test_weighted_choice_rejects_empty_and_zero () -> None:

	with pytest.raises(ValueError):
		melodist.sequence_utils.weighted_choice([], random.Random(0))

	with pytest.raises(ValueError):
		melodist.sequence_utils.weighted_choice([("a", 0.0)], random.Random(0))


def test_clamp () -> None:

	assert melodist.sequence_utils.clamp(5, 0, 10) == 5
	assert melodist.sequence_utils.clamp(-3, 0, 10) == 0
	assert melodist.sequence_utils.clamp(12, 0, 10) == 10


def test_random_walk_step_stays_within_step_and_bounds () -> None:

	"""Every step lies within ``step`` of the start and inside the bounds."""

	rng = random.Random(3)
	seen = set()

	for _ in range(500):
		value = melodist.sequence_utils.random_walk_step(64, 2, 60, 72, rng)
		assert 62 <= value <= 66
		seen.add(value)

	assert seen == {62, 63, 64, 65, 66}


def test_random_walk_step_clamps () -> None:

	rng = random.Random(4)

	for _ in range(200):
		assert 60 <= melodist.sequence_utils.random_walk_step(60, 5, 60, 62, rng) <= 62


def test_random_walk_step_invalid_bounds () -> None:

	with pytest.raises(ValueError):
		melodist.sequence_utils.random_walk_step(60, 1, 70, 60, random.Random(0))


def test_nearest_in_pool () -> None:

	assert melodist.sequence_utils.nearest_in_pool(63, [60, 62, 64]) == 62
	assert melodist.sequence_utils.nearest_in_pool(70, [60, 62, 64]) == 64
	assert melodist.sequence_utils.nearest_in_pool(60, []) is None
