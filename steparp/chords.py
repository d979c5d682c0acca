"""Chord definitions.

This module maps chord-type tags to intervals (semitones from the root) and
builds the chord steps used by the sequence builder.

Module-level constants:
- `CHORD_INTERVALS`: Maps chord tags (e.g. `"maj"`, `"min7"`) to interval lists
- `CHORD_ALIASES`: Maps long chord names (e.g. `"major"`, `"minor_7th"`) to tags

Chord tags: `"maj"`, `"min"`, `"dim"`, `"aug"`, `"maj7"`, `"dom7"`, `"min7"`,
`"sus2"`, `"sus4"`
"""

import logging
import typing

import steparp.score


logger = logging.getLogger(__name__)


class ChordType:

	"""
	Named chord-type tags.
	"""

	MAJOR = "maj"
	MINOR = "min"
	DIMINISHED = "dim"
	MAJOR7 = "maj7"
	DOMINANT7 = "dom7"
	MINOR7 = "min7"
	SUSPENDED2 = "sus2"
	SUSPENDED4 = "sus4"
	AUGMENTED = "aug"


CHORD_INTERVALS: typing.Dict[str, typing.List[int]] = {
	ChordType.MAJOR: [0, 4, 7],
	ChordType.MINOR: [0, 3, 7],
	ChordType.DIMINISHED: [0, 3, 6],
	ChordType.AUGMENTED: [0, 4, 8],
	ChordType.MAJOR7: [0, 4, 7, 11],
	ChordType.DOMINANT7: [0, 4, 7, 10],
	ChordType.MINOR7: [0, 3, 7, 10],
	ChordType.SUSPENDED2: [0, 2, 7],
	ChordType.SUSPENDED4: [0, 5, 7],
}

CHORD_ALIASES: typing.Dict[str, str] = {
	"major": ChordType.MAJOR,
	"minor": ChordType.MINOR,
	"diminished": ChordType.DIMINISHED,
	"augmented": ChordType.AUGMENTED,
	"major_7th": ChordType.MAJOR7,
	"dominant_7th": ChordType.DOMINANT7,
	"minor_7th": ChordType.MINOR7,
	"major7": ChordType.MAJOR7,
	"dominant7": ChordType.DOMINANT7,
	"minor7": ChordType.MINOR7,
	"suspended2": ChordType.SUSPENDED2,
	"suspended4": ChordType.SUSPENDED4,
}


def chord_intervals (chord_type: str) -> typing.Optional[typing.List[int]]:

	"""
	Return the intervals for a chord tag or alias, or ``None`` if unknown.
	"""

	if not isinstance(chord_type, str):
		return None

	tag = CHORD_ALIASES.get(chord_type, chord_type)

	return CHORD_INTERVALS.get(tag)


def build_chord (chord_type: str, root_pitch: int) -> typing.Optional[typing.List[int]]:

	"""Return the absolute pitches of a chord built on ``root_pitch``.

	Parameters:
		chord_type: A chord tag (``"maj"``) or alias (``"major"``).
		root_pitch: The pitch the intervals are added to.

	Returns:
		``root_pitch + interval`` for each interval in table order, or
		``None`` when the chord type is unknown. Callers must treat ``None``
		as "no chord", never as an empty or zero-pitch chord.

	Example:
		```python
		build_chord("maj", 0)    # [0, 4, 7]
		build_chord("min7", 60)  # [60, 63, 67, 70]
		build_chord("nope", 60)  # None
		```
	"""

	intervals = chord_intervals(chord_type)

	if intervals is None:
		logger.error(f"Unknown chord type: {chord_type!r}")
		return None

	return [root_pitch + interval for interval in intervals]


def chord_element (chord_type: str, root_pitch: int, duration: typing.Any = None) -> typing.Optional[steparp.score.Chord]:

	"""
	Build a ``Chord`` score element, or ``None`` for an unknown chord type.
	"""

	pitches = build_chord(chord_type, root_pitch)

	if pitches is None:
		return None

	return steparp.score.Chord(pitches=pitches, duration=duration)
