"""Standard MIDI control change numbers.

Use these as keys of ``SequenceConfig.control_changes``::

    import steparp.constants.control_change as cc

    config.control_changes = {cc.PAN: [0, 127]}
"""

MOD_WHEEL = 1
BREATH = 2
VOLUME = 7
PAN = 10
EXPRESSION = 11
SUSTAIN = 64
