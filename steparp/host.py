import logging
import typing

import mido

import steparp.constants
import steparp.events


logger = logging.getLogger(__name__)


@typing.runtime_checkable
class Host (typing.Protocol):

	"""
	Protocol for the environment that delivers and plays events.

	The host owns real time: the engine only attaches beat positions and
	hands fully built events to ``send()``.
	"""

	def send (self, event: steparp.events.MidiEvent) -> None:

		"""
		Dispatch an event at its attached beat position.
		"""

		...


	def normalize (self, value: float) -> int:

		"""
		Convert a raw velocity or CC value into valid MIDI data.
		"""

		...


def normalize_data (value: float) -> int:

	"""
	Clamp a value into the 7-bit MIDI data range and round it to an int.
	"""

	value = max(steparp.constants.MIDI_DATA_MIN, min(steparp.constants.MIDI_DATA_MAX, value))

	return int(round(value))


class RecordingHost:

	"""
	A host that keeps every event it is sent, for offline rendering and tests.
	"""

	def __init__ (self) -> None:

		self.sent: typing.List[steparp.events.MidiEvent] = []


	def send (self, event: steparp.events.MidiEvent) -> None:

		"""
		Record an event.
		"""

		self.sent.append(event)


	def normalize (self, value: float) -> int:

		"""
		Clamp and round to 0-127.
		"""

		return normalize_data(value)


	def clear (self) -> None:

		"""
		Forget all recorded events.
		"""

		self.sent.clear()


	def events (self) -> typing.List[steparp.events.MidiEvent]:

		"""
		Return recorded events ordered by beat position, keeping send order for ties.
		"""

		return sorted(self.sent, key=lambda event: event.beat_pos)


	def notes (self) -> typing.List[steparp.events.MidiEvent]:

		"""
		Return recorded note-on events in send order.
		"""

		return [event for event in self.sent if event.message_type == 'note_on']


	def save (self, filename: str, ticks_per_beat: int = 480) -> None:

		"""Write the recorded events to a type 0 Standard MIDI File.

		Beat positions are converted to delta ticks at ``ticks_per_beat``.
		Negative deltas (which only arise from rounding) are written as zero.
		"""

		logger.info(f"Saving {len(self.sent)} events to {filename}...")

		mid = mido.MidiFile(type=0)
		mid.ticks_per_beat = ticks_per_beat
		track = mido.MidiTrack()
		mid.tracks.append(track)

		last_tick = 0

		for event in self.events():

			tick = int(round(event.beat_pos * ticks_per_beat))
			delta_ticks = max(0, tick - last_tick)

			message = event.to_message()
			message.time = delta_ticks
			track.append(message)

			last_tick = max(last_tick, tick)

		mid.save(filename)
		logger.info(f"Saved {filename}")
