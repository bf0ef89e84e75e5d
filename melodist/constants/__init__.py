"""Constants for Melodist.

- ``melodist.constants.durations`` - Beat-based note durations and the duration weight tables
- ``melodist.constants.velocity`` - MIDI velocity constants

Timing is expressed in **beats** (1.0 = one quarter note) everywhere in the
generator. The constants below only matter where beats meet a fixed grid.
"""

# Generated melodies are always in 4/4.
BEATS_PER_MEASURE = 4

# Resolution of exported MIDI files (ticks per quarter note).
MIDI_TICKS_PER_BEAT = 96
