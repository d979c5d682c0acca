import logging
import typing

import mido

import steparp.events
import steparp.host
import steparp.processor


logger = logging.getLogger(__name__)


def read_events (filename: str) -> typing.List[steparp.events.MidiEvent]:

	"""Read a MIDI file as events at beat positions.

	All tracks are merged. Channel messages become events; meta and SysEx
	messages are skipped apart from ``set_tempo``, which is kept so the
	output file plays at the input's tempo.
	"""

	mid = mido.MidiFile(filename)
	ticks_per_beat = mid.ticks_per_beat

	events: typing.List[steparp.events.MidiEvent] = []
	tick = 0

	for message in mido.merge_tracks(mid.tracks):

		tick += message.time
		beat_pos = tick / ticks_per_beat

		if message.is_meta:
			if message.type == 'set_tempo':
				events.append(steparp.events.MidiEvent.from_message(message, beat_pos))
			continue

		if message.type == 'sysex':
			continue

		events.append(steparp.events.MidiEvent.from_message(message, beat_pos))

	logger.info(f"Read {len(events)} events from {filename}")

	return events


def render (processor: steparp.processor.Processor, events: typing.Iterable[steparp.events.MidiEvent]) -> int:

	"""
	Feed events through the processor in order. Returns the number of triggers.
	"""

	triggers = 0

	for event in events:

		if event.is_note_on():
			triggers += 1

		processor.handle_event(event)

	return triggers


def render_file (input_filename: str, output_filename: str, processor: steparp.processor.Processor, host: steparp.host.RecordingHost, ticks_per_beat: int = 480) -> int:

	"""
	Render a MIDI file through the processor into a new MIDI file. Returns the number of triggers.
	"""

	triggers = render(processor, read_events(input_filename))

	logger.info(f"Rendered {triggers} triggers into {len(host.sent)} events")

	host.save(output_filename, ticks_per_beat=ticks_per_beat)

	return triggers
