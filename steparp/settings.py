import dataclasses
import logging

import steparp.constants.velocity


logger = logging.getLogger(__name__)


MIN_SPEED = 0.01


@dataclasses.dataclass
class EngineSettings:

	"""Scalar settings read by the scheduler on every trigger.

	Attributes:
		transpose: Semitones added to every generated note.
		speed: Playback speed multiplier (1.0 = as written, 2.0 = twice as fast).
		sequence_length: Number of steps to play. 0 plays each step once.
		humanize_beat_pos: Maximum random shift of each note start, in beats.
		humanize_velocity: Maximum random velocity change, in velocity units.
		clamp_velocity: Keep velocities within ``min_velocity``-``max_velocity``.
		normalize_velocity: When clamping, rescale 0-127 into the clamp range
			instead of cutting off, so crescendos survive.
		min_velocity: Lower clamp bound.
		max_velocity: Upper clamp bound.
	"""

	transpose: int = 0
	speed: float = 1.0
	sequence_length: int = 0
	humanize_beat_pos: float = 0.025
	humanize_velocity: float = steparp.constants.velocity.DEFAULT_HUMANIZE_VELOCITY
	clamp_velocity: bool = False
	normalize_velocity: bool = True
	min_velocity: float = steparp.constants.velocity.DEFAULT_MIN_VELOCITY
	max_velocity: float = steparp.constants.velocity.DEFAULT_MAX_VELOCITY


	def snapshot (self) -> "EngineSettings":

		"""
		Return an independent copy for one scheduler activation.
		"""

		return dataclasses.replace(self)


	def speed_factor (self) -> float:

		"""
		Return the multiplier applied to every step duration (``1 / speed``).
		"""

		speed = self.speed

		if speed <= 0:
			logger.warning(f"Speed {speed} is not positive - using {MIN_SPEED}")
			speed = MIN_SPEED

		return 1.0 / speed
