"""MIDI velocity constants.

Velocity is the MIDI attack strength (0-127).
"""

# Placeholder velocity carried by notes sampled from the transition model.
DEFAULT_VELOCITY = 64

# Generated notes draw their velocity uniformly from this inclusive range.
GENERATED_VELOCITY_LOW = 64
GENERATED_VELOCITY_HIGH = 96

# Note-off release velocity written to MIDI files (0x40).
RELEASE_VELOCITY = 64

# MIDI standard range
MIN_VELOCITY = 0
MAX_VELOCITY = 127
