"""Beat-based duration constants for step lengths and gates.

All values are in **beats**, where 1.0 = one quarter note. These are the
values the duration model resolves to::

    import steparp.constants.durations as dur
    import steparp.durations

    steparp.durations.resolve("/16")   # == dur.SIXTEENTH
    steparp.durations.resolve("8d")    # == dur.DOTTED_EIGHTH
    steparp.durations.resolve("4t")    # == dur.TRIPLET_QUARTER

A whole note spans ``WHOLE_NOTE_BEATS`` beats, so a denominator ``D``
resolves to ``WHOLE_NOTE_BEATS / D``.
"""

WHOLE_NOTE_BEATS = 4.0

THIRTYSECOND = 0.125
SIXTEENTH = 0.25
DOTTED_SIXTEENTH = 0.375
TRIPLET_EIGHTH = 1 / 3
EIGHTH = 0.5
DOTTED_EIGHTH = 0.75
TRIPLET_QUARTER = 2 / 3
QUARTER = 1.0
DOTTED_QUARTER = 1.5
HALF = 2.0
DOTTED_HALF = 3.0
WHOLE = 4.0
