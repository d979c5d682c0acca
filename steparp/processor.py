import logging
import random
import typing

import steparp.events
import steparp.host
import steparp.parameters
import steparp.scheduler
import steparp.sequence
import steparp.settings


logger = logging.getLogger(__name__)


class Processor:

	"""
	The MIDI transformer a host talks to.

	A `Processor` owns the sequence configuration, the engine settings, the
	parameter bridge and the scheduler. The host calls `handle_event()` once
	per incoming message and `parameter_changed()` when a control moves.
	Both run to completion before returning, so a parameter edit can never
	land in the middle of an activation.

	Example:
		```python
		host = steparp.host.RecordingHost()
		processor = Processor(host, seed=42)
		processor.config.pitches = [0, 7, 12]
		processor.handle_event(steparp.events.note_on(60, 100, beat_pos=0.0))
		```
	"""

	def __init__ (
		self,
		host: steparp.host.Host,
		config: typing.Optional[steparp.sequence.SequenceConfig] = None,
		settings: typing.Optional[steparp.settings.EngineSettings] = None,
		seed: typing.Optional[int] = None,
		rng: typing.Optional[steparp.scheduler.RandomSource] = None
	) -> None:

		"""Create a processor.

		Parameters:
			host: Receives every output event and normalizes MIDI data.
			config: Per-step arrays. Defaults to four quarter notes.
			settings: Engine settings. Defaults to ``EngineSettings()``.
			seed: Seed for a private ``random.Random`` so output is repeatable.
			rng: An explicit random source; takes precedence over ``seed``.
		"""

		if rng is None:
			rng = random.Random(seed)

		self.host = host
		self.config = config if config is not None else steparp.sequence.SequenceConfig()
		self.settings = settings if settings is not None else steparp.settings.EngineSettings()
		self.bridge = steparp.parameters.ParameterBridge(self.settings)
		self.scheduler = steparp.scheduler.StepScheduler(host, rng)


	@property
	def parameters (self) -> typing.List[steparp.parameters.ParameterDescriptor]:

		"""
		The host parameter descriptors, with defaults from the current settings.
		"""

		return steparp.parameters.parameter_descriptors(self.settings)


	def handle_event (self, event: steparp.events.MidiEvent) -> None:

		"""
		Process one incoming event: sequence a note-on, pass anything else through.
		"""

		if not event.is_note_on():
			self.host.send(event)
			return

		steps = steparp.sequence.build_sequence(self.config)

		if not steps:
			logger.debug("No steps configured - passing trigger through")

		self.scheduler.handle_event(event, steps, self.config, self.settings.snapshot())


	def parameter_changed (self, param_id: int, value: float) -> None:

		"""
		Forward a host parameter edit to the bridge.
		"""

		self.bridge.parameter_changed(param_id, value)
