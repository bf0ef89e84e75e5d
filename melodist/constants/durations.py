"""Beat-based duration constants for generated notes.

All values are in **beats**, where 1.0 = one quarter note. The generator only
ever produces the four values in ``DURATION_CHOICES``; the weight tables pick
between them depending on the requested rhythm density::

    import melodist.constants.durations as dur

    # Dense rhythms favour sixteenths and eighths
    dur.DENSE_WEIGHTS    # [0.4, 0.4, 0.15, 0.05]

    # Sparse rhythms favour quarters and halves
    dur.SPARSE_WEIGHTS   # [0.1, 0.3, 0.4, 0.2]
"""

SIXTEENTH = 0.25
EIGHTH = 0.5
QUARTER = 1.0
HALF = 2.0

DURATION_CHOICES = [SIXTEENTH, EIGHTH, QUARTER, HALF]

DENSE_WEIGHTS = [0.4, 0.4, 0.15, 0.05]
SPARSE_WEIGHTS = [0.1, 0.3, 0.4, 0.2]

# rhythm_density strictly above this selects DENSE_WEIGHTS.
DENSITY_THRESHOLD = 0.5

# Returned when a floating point draw slips past the last cumulative weight.
FALLBACK_DURATION = EIGHTH
