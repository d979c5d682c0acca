"""The step scheduler.

One activation runs per triggering note-on. It walks the step list once,
accumulating a beat-position cursor, and for each step:

1. resolves the step duration (scaled by ``1 / speed``),
2. rolls the step's chance,
3. applies gate, transpose and pitch offset and expands the step into notes,
4. humanizes position and velocity, applies the velocity override and clamp,
5. sends control changes, the note-on, and its paired note-off,
6. advances the cursor by the absolute step duration, played or not.

Nothing persists between activations. Randomness comes from an injectable
source with a ``random()`` method so tests can make it deterministic.
"""

import logging
import random
import typing

import steparp.constants
import steparp.durations
import steparp.events
import steparp.host
import steparp.score
import steparp.sequence
import steparp.settings


logger = logging.getLogger(__name__)


class RandomSource (typing.Protocol):

	def random (self) -> float:
		...


def random_delta (value_range: float, rng: RandomSource) -> float:

	"""Return a random offset within ``[-value_range, +value_range]``.

	The magnitude is uniform in ``[0, value_range)`` and the sign is drawn
	independently. A non-positive range returns 0 without drawing.
	"""

	if value_range <= 0:
		return 0

	delta = rng.random() * value_range

	if rng.random() > 0.5:
		return delta

	return -delta


def shape_velocity (velocity: float, settings: steparp.settings.EngineSettings, normalize: typing.Callable[[float], float]) -> float:

	"""Apply the velocity clamp settings.

	With clamping off the velocity is returned unchanged. With clamping on it
	is held within ``[min_velocity, max_velocity]``. With normalization also
	on, the velocity's position within 0-127 (after ``normalize``) is mapped
	linearly into the clamp range instead, so relative dynamics survive::

		64 with range 20-40 -> 20 + 20 * 64 / 127 = 30.08
	"""

	if not settings.clamp_velocity:
		return velocity

	if settings.normalize_velocity:
		position = normalize(velocity) / float(steparp.constants.MIDI_DATA_MAX)
		return settings.min_velocity + (settings.max_velocity - settings.min_velocity) * position

	return min(settings.max_velocity, max(settings.min_velocity, velocity))


class StepScheduler:

	"""
	Turns one trigger note-on into the timed events of a sequence.
	"""

	def __init__ (self, host: steparp.host.Host, rng: typing.Optional[RandomSource] = None) -> None:

		"""
		Initialize with the host that receives output events and an optional random source.
		"""

		self.host = host
		self.rng: RandomSource = rng if rng is not None else random.Random()


	def handle_event (
		self,
		event: steparp.events.MidiEvent,
		steps: typing.List[steparp.score.ScoreElement],
		config: steparp.sequence.SequenceConfig,
		settings: steparp.settings.EngineSettings
	) -> None:

		"""
		Run an activation for a sounding note-on; send anything else to the host unmodified.
		"""

		if not event.is_note_on() or not steps:
			self.host.send(event)
			return

		self.activate(event, steps, config, settings)


	def activate (
		self,
		trigger: steparp.events.MidiEvent,
		steps: typing.List[steparp.score.ScoreElement],
		config: steparp.sequence.SequenceConfig,
		settings: steparp.settings.EngineSettings
	) -> None:

		"""Generate and send every event for one trigger.

		Parameters:
			trigger: The incoming note-on (root pitch, velocity, beat position).
			steps: The sequence built for this trigger. Must not be empty.
			config: Per-step arrays (pitches, gates, chances, velocities, CCs).
			settings: Settings snapshot for this activation.
		"""

		effective_length = settings.sequence_length if settings.sequence_length > 0 else len(steps)
		speed_factor = settings.speed_factor()
		cursor = trigger.beat_pos

		logger.debug(f"Activation: pitch {trigger.pitch} at {trigger.beat_pos}, {effective_length} steps")

		for index in range(effective_length):

			step = steps[index % len(steps)]

			if step.duration is None:
				step_duration = 1.0
			else:
				step_duration = steparp.durations.resolve(step.duration)

			step_duration *= speed_factor

			should_play = True
			chance = steparp.sequence.cycle(config.chances, index)

			if chance is not None and self.rng.random() > chance:
				should_play = False

			# Zero-length and negative (rest) steps only move the cursor
			if step_duration > 0 and should_play:
				self._play_step(index, step, step_duration, cursor, trigger, config, settings)

			cursor += abs(step_duration)


	def _play_step (
		self,
		index: int,
		step: steparp.score.ScoreElement,
		step_duration: float,
		cursor: float,
		trigger: steparp.events.MidiEvent,
		config: steparp.sequence.SequenceConfig,
		settings: steparp.settings.EngineSettings
	) -> None:

		"""
		Expand one step and send its control changes, note-ons and note-offs.
		"""

		event_duration = step_duration

		gate = steparp.sequence.cycle(config.gates, index)
		if gate is not None:
			event_duration *= gate

		pitch = trigger.pitch + settings.transpose

		step_pitch = steparp.sequence.cycle(config.pitches, index)
		if step_pitch is not None:
			pitch += step_pitch

		note_ons = steparp.score.expand(step, trigger.copy(pitch=pitch))

		for note_on in note_ons:

			if not steparp.constants.MIDI_DATA_MIN <= note_on.pitch <= steparp.constants.MIDI_DATA_MAX:
				logger.warning(f"Step {index}: pitch {note_on.pitch} out of MIDI range - dropped")
				continue

			# Never earlier than the trigger, or the host will not play it
			beat_pos = max(cursor + random_delta(settings.humanize_beat_pos, self.rng), trigger.beat_pos)

			velocity = note_on.velocity

			step_velocity = steparp.sequence.cycle(config.velocities, index)
			if step_velocity is not None:
				velocity = step_velocity

			velocity += random_delta(settings.humanize_velocity, self.rng)
			velocity = shape_velocity(velocity, settings, self.host.normalize)

			for control, values in config.control_changes.items():

				value = steparp.sequence.cycle(values, index)
				if value is None:
					continue

				self.host.send(steparp.events.control_change(
					control = control,
					value = self.host.normalize(value),
					beat_pos = beat_pos,
					channel = note_on.channel
				))

			self.host.send(note_on.copy(beat_pos=beat_pos, velocity=self.host.normalize(velocity)))

			self.host.send(steparp.events.note_off(
				pitch = note_on.pitch,
				beat_pos = beat_pos + event_duration,
				channel = note_on.channel
			))
