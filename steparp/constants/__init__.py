"""Constants for steparp.

This package contains three sets of constants:

- ``steparp.constants.durations`` - Beat-based durations for step lengths
- ``steparp.constants.velocity`` - MIDI velocity bounds and engine defaults
- ``steparp.constants.control_change`` - Standard MIDI CC numbers
"""

# MIDI data bytes are 7-bit.

MIDI_DATA_MIN = 0
MIDI_DATA_MAX = 127
