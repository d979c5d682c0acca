"""Host-adjustable parameters.

The host shows the descriptor list returned by ``parameter_descriptors()``
and reports edits by index through ``ParameterBridge.parameter_changed()``.
The list order is fixed: a parameter's id is its index.

| id | name | host value | setting |
| -- | ---- | ---------- | ------- |
| 0 | Transpose | -63..63 semitones | ``transpose`` |
| 1 | Sequence Length | 0..12 (0 = every step once) | ``sequence_length`` |
| 2 | Speed | 0..300 percent | ``speed`` (fraction) |
| 3 | Humanize Beat Pos | 0..0.25 beats | ``humanize_beat_pos`` |
| 4 | Velocity Controls | text label | - |
| 5 | Humanize Velocity | 0..63 | ``humanize_velocity`` |
| 6 | Clamp Velocity | Off / On | ``clamp_velocity`` |
| 7 | Min Velocity | 0..127 | ``min_velocity`` |
| 8 | Max Velocity | 0..127 | ``max_velocity`` |

Changes apply to the next trigger; an activation already running uses the
snapshot it started with.
"""

import dataclasses
import logging
import typing

import steparp.settings


logger = logging.getLogger(__name__)


TRANSPOSE = 0
SEQUENCE_LENGTH = 1
SPEED = 2
HUMANIZE_BEAT_POS = 3
VELOCITY_CONTROLS_LABEL = 4
HUMANIZE_VELOCITY = 5
CLAMP_VELOCITY = 6
MIN_VELOCITY = 7
MAX_VELOCITY = 8

PARAMETER_IDS: typing.Dict[str, int] = {
	"transpose": TRANSPOSE,
	"sequence_length": SEQUENCE_LENGTH,
	"speed": SPEED,
	"humanize_beat_pos": HUMANIZE_BEAT_POS,
	"humanize_velocity": HUMANIZE_VELOCITY,
	"clamp_velocity": CLAMP_VELOCITY,
	"min_velocity": MIN_VELOCITY,
	"max_velocity": MAX_VELOCITY,
}


@dataclasses.dataclass
class ParameterDescriptor:

	"""
	How the host should present one parameter.
	"""

	name: str
	type: str							# 'lin', 'menu' or 'text'
	min_value: float = 0
	max_value: float = 0
	number_of_steps: typing.Optional[int] = None
	default_value: float = 0
	unit: typing.Optional[str] = None
	value_strings: typing.Optional[typing.List[str]] = None


def parameter_descriptors (settings: steparp.settings.EngineSettings) -> typing.List[ParameterDescriptor]:

	"""
	Return the ordered descriptor list, with defaults taken from ``settings``.
	"""

	return [
		ParameterDescriptor("Transpose", "lin", -63, 63, 126, settings.transpose),
		ParameterDescriptor("Sequence Length", "lin", 0, 12, 12, settings.sequence_length),
		ParameterDescriptor("Speed", "lin", 0, 300, 300, settings.speed * 100, unit="%"),
		ParameterDescriptor("Humanize Beat Pos", "lin", 0, 0.25, None, settings.humanize_beat_pos),
		ParameterDescriptor("Velocity Controls", "text"),
		ParameterDescriptor("Humanize Velocity", "lin", 0, 63, 63, settings.humanize_velocity),
		ParameterDescriptor("Clamp Velocity", "menu", 0, 1, 2, 1 if settings.clamp_velocity else 0, value_strings=["Off", "On"]),
		ParameterDescriptor("Min Velocity", "lin", 0, 127, 127, settings.min_velocity),
		ParameterDescriptor("Max Velocity", "lin", 0, 127, 127, settings.max_velocity),
	]


class ParameterBridge:

	"""
	Applies host parameter edits to a live ``EngineSettings``.
	"""

	def __init__ (self, settings: steparp.settings.EngineSettings) -> None:

		self.settings = settings


	def parameter_changed (self, param_id: int, value: float) -> None:

		"""Apply a parameter edit reported by the host.

		Parameters:
			param_id: Index into the descriptor list.
			value: The new value in host units (speed in percent, clamp as 0/1).

		Unknown ids, including the text label, are ignored.
		"""

		settings = self.settings

		if param_id == TRANSPOSE:
			settings.transpose = int(round(value))

		elif param_id == SEQUENCE_LENGTH:
			settings.sequence_length = int(round(value))

		elif param_id == SPEED:
			settings.speed = value / 100

		elif param_id == HUMANIZE_BEAT_POS:
			settings.humanize_beat_pos = value

		elif param_id == HUMANIZE_VELOCITY:
			settings.humanize_velocity = value

		elif param_id == CLAMP_VELOCITY:
			settings.clamp_velocity = value != 0

		elif param_id == MIN_VELOCITY:
			settings.min_velocity = value

		elif param_id == MAX_VELOCITY:
			settings.max_velocity = value

		else:
			logger.debug(f"Ignoring unknown parameter {param_id!r}")
			return

		logger.debug(f"Parameter {param_id} set to {value}")


	def parameter_changed_by_name (self, name: str, value: float) -> None:

		"""
		Apply a parameter edit by name (``"transpose"``, ``"speed"``, ...). Unknown names are ignored.
		"""

		if name not in PARAMETER_IDS:
			logger.debug(f"Ignoring unknown parameter {name!r}")
			return

		self.parameter_changed(PARAMETER_IDS[name], value)


	def values (self) -> typing.Dict[str, float]:

		"""
		Return the current parameter values by name, in host units.
		"""

		settings = self.settings

		return {
			"transpose": settings.transpose,
			"sequence_length": settings.sequence_length,
			"speed": settings.speed * 100,
			"humanize_beat_pos": settings.humanize_beat_pos,
			"humanize_velocity": settings.humanize_velocity,
			"clamp_velocity": 1 if settings.clamp_velocity else 0,
			"min_velocity": settings.min_velocity,
			"max_velocity": settings.max_velocity,
		}
