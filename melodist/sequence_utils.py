import random
import typing

T = typing.TypeVar("T")


def weighted_choice (
	options: typing.Sequence[typing.Tuple[T, float]],
	rng: random.Random,
	fallback: typing.Optional[T] = None
) -> T:

	"""Pick one item from a list of (value, weight) pairs with a single draw.

	One uniform number in [0, 1) is scaled by the total weight and compared
	against the running cumulative weight. Weights are relative - they don't
	need to sum to 1.0.

	Parameters:
		options: List of ``(value, weight)`` tuples
		rng: Random number generator instance
		fallback: Returned if rounding leaves the draw past the last cumulative
			weight. Defaults to the last option.

	Example:
		```python
		duration = melodist.sequence_utils.weighted_choice([
			(0.25, 0.4),   # sixteenth: 40%
			(0.5, 0.4),    # eighth: 40%
			(1.0, 0.2),    # quarter: 20%
		], rng)
		```
	"""

	if not options:
		raise ValueError("Options list cannot be empty")

	total = sum(weight for _, weight in options)

	if total <= 0:
		raise ValueError("Total weight must be positive")

	threshold = rng.random() * total
	cumulative = 0.0

	for value, weight in options:
		cumulative += weight
		if threshold <= cumulative:
			return value

	if fallback is not None:
		return fallback

	return options[-1][0]


def clamp (value: int, low: int, high: int) -> int:

	"""Clamp an integer to ``[low, high]``."""

	return max(low, min(high, value))


def random_walk_step (current: int, step: int, low: int, high: int, rng: random.Random) -> int:

	"""Move ``current`` by a uniform integer in ``[-step, step]`` and clamp to ``[low, high]``.

	A single step of a drunk walk, similar to Max/MSP's ``drunk`` object.

	Example:
		```python
		pitch = melodist.sequence_utils.random_walk_step(64, step=2, low=60, high=72, rng=rng)
		```
	"""

	if low > high:
		raise ValueError(f"low ({low}) must be <= high ({high})")

	delta = rng.randint(-step, step)

	return clamp(current + delta, low, high)


def nearest_in_pool (value: int, pool: typing.Sequence[int]) -> typing.Optional[int]:

	"""Return the pool member closest to ``value`` (lower wins ties), or None for an empty pool."""

	if not pool:
		return None

	return min(pool, key=lambda candidate: (abs(candidate - value), candidate))
