import dataclasses
import logging
import typing

import steparp.chords
import steparp.constants.velocity
import steparp.durations
import steparp.score


logger = logging.getLogger(__name__)


@dataclasses.dataclass
class SequenceConfig:

	"""The per-step arrays that shape a sequence.

	Every array is read cyclically (``values[index % len(values)]``) against
	the effective sequence length. ``None`` or an empty list switches that
	modifier off.

	Attributes:
		denominators: Step lengths as note denominators (4 = quarter note).
		durations: Step lengths in any form ``steparp.durations.resolve()``
			accepts. Overrides ``denominators`` when set.
		chords: Chord tags. When set, every step plays a chord instead of
			a single note.
		pitches: Semitone offset per step, added to the trigger pitch.
		gates: Fraction of each step the note sounds for (0-1).
		chances: Probability each step plays (0-1).
		velocities: Fixed velocity per step. ``None`` keeps the played velocity.
		control_changes: CC number -> per-step CC values, sent with each note.
	"""

	denominators: typing.Optional[typing.List[float]] = dataclasses.field(default_factory=lambda: [4, 4, 4, 4])
	durations: typing.Optional[typing.List[typing.Any]] = None
	chords: typing.Optional[typing.List[str]] = None
	pitches: typing.Optional[typing.List[int]] = dataclasses.field(default_factory=lambda: [0])
	gates: typing.Optional[typing.List[float]] = dataclasses.field(default_factory=lambda: [1])
	chances: typing.Optional[typing.List[float]] = dataclasses.field(default_factory=lambda: [1])
	velocities: typing.Optional[typing.List[float]] = None
	control_changes: typing.Dict[int, typing.List[float]] = dataclasses.field(default_factory=dict)


	def duration_values (self) -> typing.List[typing.Any]:

		"""
		Return the configured step durations (explicit durations win over denominators).
		"""

		if self.durations:
			return list(self.durations)

		if self.denominators:
			return steparp.durations.denominator_durations(self.denominators)

		return []


def cycle (values: typing.Optional[typing.Sequence[typing.Any]], index: int) -> typing.Any:

	"""
	Return ``values[index % len(values)]``, or ``None`` if the array is unset or empty.
	"""

	if not values:
		return None

	return values[index % len(values)]


def build_sequence (config: SequenceConfig) -> typing.List[steparp.score.ScoreElement]:

	"""Build the step list for one trigger.

	One ``Note`` (offset 0, placeholder velocity) is created per configured
	duration. When chords are configured, each step is then replaced by the
	chord ``chords[index % len(chords)]`` rooted at 0, keeping the step's
	duration (1 beat if the step has none). An unknown chord type becomes a
	``Rest`` so the step still takes up time.

	The result shares no mutable state with earlier calls.
	"""

	steps: typing.List[steparp.score.ScoreElement] = [
		steparp.score.Note(pitch=0, duration=duration, velocity=steparp.constants.velocity.DEFAULT_VELOCITY)
		for duration in config.duration_values()
	]

	if not config.chords:
		return steps

	chord_steps: typing.List[steparp.score.ScoreElement] = []

	for index, step in enumerate(steps):

		duration = step.duration if step.duration is not None else 1.0
		chord_type = cycle(config.chords, index)
		chord = steparp.chords.chord_element(chord_type, 0, duration)

		if chord is None:
			logger.warning(f"Step {index}: no chord for {chord_type!r}, step will rest")
			chord_steps.append(steparp.score.Rest(duration=duration))
		else:
			chord_steps.append(chord)

	return chord_steps
