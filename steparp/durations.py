"""Step durations in beats.

A step's length can be written three ways, all resolving to beats
(1.0 = one quarter note):

- ``BeatDuration(0.5)`` - a literal beat count. Negative values are rests
  that still consume ``abs(beats)`` of time.
- ``DenominatorDuration(8)`` - a note denominator (1 = whole, 4 = quarter,
  8 = eighth), giving ``4 / denominator`` beats.
- ``NoteLengthDuration("8d")`` - a notation string:

  - ``"/8"`` - plain denominator
  - ``"8d"`` or ``"8D"`` - dotted (x 1.5)
  - ``"8t"`` or ``"8T"`` - triplet (x 2/3)

``resolve()`` accepts any of these, plain numbers (beats) and bare notation
strings. It never raises: malformed input is logged and resolves to 0.0.

Example:
	```python
	resolve(DenominatorDuration(8))   # 0.5
	resolve("4d")                     # 1.5
	resolve("4t")                     # 0.666...
	resolve("garbage")                # 0.0 (logged)
	```
"""

import dataclasses
import logging
import re
import typing

import steparp.constants.durations


logger = logging.getLogger(__name__)


_DIGITS = re.compile(r"^[0-9]+$")


@dataclasses.dataclass(frozen=True)
class BeatDuration:

	"""
	A duration given directly in beats.
	"""

	duration: float

	def beats (self) -> float:
		return float(self.duration)


@dataclasses.dataclass(frozen=True)
class DenominatorDuration:

	"""
	A duration given as a note denominator (whole = 1, quarter = 4).
	"""

	denominator: float

	def beats (self) -> float:

		"""
		Return ``4 / denominator`` beats, or 0.0 for a zero denominator.

		A negative denominator gives a negative length, which plays as a rest.
		"""

		if self.denominator == 0:
			logger.error("Note denominator must not be zero")
			return 0.0

		return steparp.constants.durations.WHOLE_NOTE_BEATS / self.denominator


@dataclasses.dataclass(frozen=True)
class NoteLengthDuration:

	"""
	A duration given as a notation string (``"/4"``, ``"4d"``, ``"4t"``).
	"""

	notation: str

	def beats (self) -> float:

		"""
		Parse the notation string and return its length in beats.

		Unrecognised strings are logged and resolve to 0.0.
		"""

		notation = self.notation

		if not isinstance(notation, str):
			logger.error(f"Note length in wrong format: {notation!r}")
			return 0.0

		if notation.startswith("/"):
			return _denominator_string_beats(notation[1:], notation)

		suffix = notation[-1:].lower()

		if suffix == "d":
			return _denominator_string_beats(notation[:-1], notation) * 1.5

		if suffix == "t":
			return _denominator_string_beats(notation[:-1], notation) * 2.0 / 3.0

		logger.error(f"Unrecognised note length: {notation!r}")
		return 0.0


DurationLike = typing.Union[float, int, str, BeatDuration, DenominatorDuration, NoteLengthDuration]


def _denominator_string_beats (digits: str, notation: str) -> float:

	if not _DIGITS.match(digits):
		logger.error(f"Unrecognised note length: {notation!r}")
		return 0.0

	return DenominatorDuration(int(digits)).beats()


def resolve (duration: typing.Any) -> float:

	"""Resolve any duration representation to beats.

	Parameters:
		duration: A number of beats, a notation string, or one of
			``BeatDuration``, ``DenominatorDuration``, ``NoteLengthDuration``.

	Returns:
		The duration in beats. Negative for negative literal beats or
		denominators (rests). 0.0 for anything that cannot be resolved.
	"""

	if isinstance(duration, bool):
		logger.error(f"Unsupported duration type: {duration!r}")
		return 0.0

	if isinstance(duration, (int, float)):
		return float(duration)

	if isinstance(duration, str):
		return NoteLengthDuration(duration).beats()

	if isinstance(duration, (BeatDuration, DenominatorDuration, NoteLengthDuration)):
		return duration.beats()

	logger.error(f"Unsupported duration type: {duration!r}")
	return 0.0


def denominator_durations (values: typing.Iterable[float]) -> typing.List[DenominatorDuration]:

	"""
	Wrap a list of note denominators as ``DenominatorDuration`` steps.
	"""

	return [DenominatorDuration(value) for value in values]
