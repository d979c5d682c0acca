import typing

import pytest

import steparp.host
import steparp.processor
import steparp.sequence
import steparp.settings


class FixedRandom:

	"""Deterministic stand-in for ``random.Random`` that cycles through fixed values."""

	def __init__ (self, *values: float) -> None:

		"""Store the values to return (defaults to 0.5)."""

		self.values: typing.List[float] = list(values) or [0.5]
		self.calls = 0


	def random (self) -> float:

		"""Return the next value in the cycle."""

		value = self.values[self.calls % len(self.values)]
		self.calls += 1
		return value


@pytest.fixture
def fixed_random () -> typing.Type[FixedRandom]:

	"""Factory for deterministic random sources, e.g. ``fixed_random(0.5, 0.9)``."""

	return FixedRandom


@pytest.fixture
def host () -> steparp.host.RecordingHost:

	"""A host that records everything it is sent."""

	return steparp.host.RecordingHost()


@pytest.fixture
def settings () -> steparp.settings.EngineSettings:

	"""Settings with humanization switched off so output is exact."""

	return steparp.settings.EngineSettings(humanize_beat_pos=0, humanize_velocity=0)


@pytest.fixture
def processor (host: steparp.host.RecordingHost, settings: steparp.settings.EngineSettings) -> steparp.processor.Processor:

	"""A processor with default config, exact settings and a fixed random source."""

	return steparp.processor.Processor(
		host = host,
		config = steparp.sequence.SequenceConfig(),
		settings = settings,
		rng = FixedRandom(0.5)
	)
