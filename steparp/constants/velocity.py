"""MIDI velocity constants.

Velocity is the MIDI attack strength (0-127). These constants define the
engine's defaults and the standard MIDI range.
"""

# Placeholder velocity stored on generated steps
DEFAULT_VELOCITY = 100

# Default clamp range used when velocity clamping is switched on
DEFAULT_MIN_VELOCITY = 60
DEFAULT_MAX_VELOCITY = 100

# Default humanize range (+/- velocity units)
DEFAULT_HUMANIZE_VELOCITY = 10

# MIDI standard range
MIN_VELOCITY = 0
MAX_VELOCITY = 127
