import dataclasses
import typing

import mido


@dataclasses.dataclass
class MidiEvent:

	"""
	A MIDI event at a logical beat position.

	Note events use ``pitch`` and ``velocity``; control changes use ``control``
	and ``value``. Any other message is carried untouched in ``data`` so it
	can be passed through to the host unmodified.
	"""

	beat_pos: float
	message_type: str
	channel: int = 0
	pitch: int = 0
	velocity: float = 0
	control: int = 0
	value: float = 0
	data: typing.Any = None


	def is_note_on (self) -> bool:

		"""
		True for a sounding note-on. A note-on with velocity 0 is a note-off.
		"""

		return self.message_type == 'note_on' and self.velocity > 0


	def copy (self, **changes: typing.Any) -> "MidiEvent":

		"""
		Return a copy of this event with the given fields replaced.
		"""

		return dataclasses.replace(self, **changes)


	@classmethod
	def from_message (cls, message: typing.Union[mido.Message, mido.MetaMessage], beat_pos: float = 0.0) -> "MidiEvent":

		"""Wrap a mido message as an event at ``beat_pos``.

		Note and control change messages are unpacked into fields. Anything
		else (including meta messages) keeps the original in ``data``.
		"""

		if message.type in ('note_on', 'note_off'):
			return cls(
				beat_pos = beat_pos,
				message_type = message.type,
				channel = message.channel,
				pitch = message.note,
				velocity = message.velocity
			)

		if message.type == 'control_change':
			return cls(
				beat_pos = beat_pos,
				message_type = message.type,
				channel = message.channel,
				control = message.control,
				value = message.value
			)

		return cls(
			beat_pos = beat_pos,
			message_type = message.type,
			channel = getattr(message, 'channel', 0),
			data = message
		)


	def to_message (self) -> typing.Union[mido.Message, mido.MetaMessage]:

		"""
		Build the mido message for this event (``time`` is left at 0).
		"""

		if self.message_type in ('note_on', 'note_off'):
			return mido.Message(self.message_type, channel=self.channel, note=int(self.pitch), velocity=int(self.velocity))

		if self.message_type == 'control_change':
			return mido.Message('control_change', channel=self.channel, control=int(self.control), value=int(self.value))

		if self.data is None:
			raise ValueError(f"Event of type {self.message_type!r} has no message data")

		return self.data.copy()


def note_on (pitch: int, velocity: float, beat_pos: float = 0.0, channel: int = 0) -> MidiEvent:
	return MidiEvent(beat_pos=beat_pos, message_type='note_on', channel=channel, pitch=pitch, velocity=velocity)


def note_off (pitch: int, beat_pos: float = 0.0, channel: int = 0) -> MidiEvent:
	return MidiEvent(beat_pos=beat_pos, message_type='note_off', channel=channel, pitch=pitch, velocity=0)


def control_change (control: int, value: float, beat_pos: float = 0.0, channel: int = 0) -> MidiEvent:
	return MidiEvent(beat_pos=beat_pos, message_type='control_change', channel=channel, control=control, value=value)
