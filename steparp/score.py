"""Score elements: the payload of a single sequence step.

A step is one of ``Note``, ``Rest`` or ``Chord``. Each can be expanded
against the triggering note-on into the note-on events it plays.
"""

import dataclasses
import typing

import steparp.constants.velocity
import steparp.events


@dataclasses.dataclass
class Note:

	"""
	A single note, ``pitch`` semitones above the trigger.
	"""

	pitch: int = 0
	duration: typing.Any = None
	velocity: int = steparp.constants.velocity.DEFAULT_VELOCITY


@dataclasses.dataclass
class Rest:

	"""
	Silence that still takes up ``duration``.
	"""

	duration: typing.Any = None


@dataclasses.dataclass
class Chord:

	"""
	Several notes at once, each ``pitches[i]`` semitones above the trigger.
	"""

	pitches: typing.List[int] = dataclasses.field(default_factory=list)
	duration: typing.Any = None


ScoreElement = typing.Union[Note, Rest, Chord]


def expand (element: ScoreElement, trigger: steparp.events.MidiEvent) -> typing.List[steparp.events.MidiEvent]:

	"""Expand a step against a note-on into the note-on events it plays.

	Parameters:
		element: The step to expand.
		trigger: The note-on carrying root pitch, velocity, channel and
			beat position. It is never modified.

	Returns:
		A new list: empty for a rest, one event for a note, one per
		interval (in order) for a chord. A trigger that is not a note-on
		is returned on its own.
	"""

	if trigger.message_type != 'note_on':
		return [trigger]

	if isinstance(element, Rest):
		return []

	if isinstance(element, Note):
		return [trigger.copy(pitch=trigger.pitch + element.pitch)]

	if isinstance(element, Chord):
		return [trigger.copy(pitch=trigger.pitch + pitch) for pitch in element.pitches]

	raise TypeError(f"Not a score element: {element!r}")
