"""YAML configuration.

A config file has a ``sequence`` section (the per-step arrays of
``SequenceConfig``), a ``settings`` section (the fields of
``EngineSettings``) and an optional top-level ``seed``::

	sequence:
	  denominators: [4, 8, 8, 4]
	  chords: [maj, min7]
	  gates: [1, 0.5]
	  control_changes:
	    10: [0, 127]
	settings:
	  humanize_velocity: 0
	  clamp_velocity: true
	seed: 42

Missing sections and keys keep their defaults.
"""

import dataclasses
import logging
import os
import typing

import yaml

import steparp.host
import steparp.processor
import steparp.sequence
import steparp.settings


logger = logging.getLogger(__name__)


_LIST_KEYS = ("denominators", "durations", "chords", "pitches", "gates", "chances", "velocities")

_NUMBER = (int, float)

# Element types accepted in each per-step list
_ELEMENT_TYPES: typing.Dict[str, typing.Tuple[type, ...]] = {
	"denominators": _NUMBER,
	"durations": _NUMBER + (str,),
	"chords": (str,),
	"pitches": _NUMBER,
	"gates": _NUMBER,
	"chances": _NUMBER,
	"velocities": _NUMBER,
}


def load_config (config_path: str = 'steparp.yaml') -> dict:

	"""
	Load configuration from a YAML file.
	"""

	if not os.path.exists(config_path):
		logger.warning(f"Config file {config_path} not found. Using defaults.")
		return {}

	with open(config_path, 'r') as f:
		return yaml.safe_load(f) or {}


def _check_keys (section: str, data: dict, allowed: typing.Iterable[str]) -> None:

	unknown = set(data) - set(allowed)

	if unknown:
		raise ValueError(f"Unknown {section} keys: {', '.join(sorted(str(key) for key in unknown))}")


def _check_elements (name: str, values: list, allowed: typing.Tuple[type, ...]) -> None:

	for index, value in enumerate(values):

		# bool is an int subclass but never a valid step value
		if isinstance(value, bool) or not isinstance(value, allowed):
			raise ValueError(f"{name}[{index}] has wrong type {type(value).__name__}: {value!r}")


def _check_setting (field: dataclasses.Field, value: typing.Any) -> None:

	if field.type is bool:
		valid = isinstance(value, bool)
	elif field.type is int:
		valid = isinstance(value, int) and not isinstance(value, bool)
	else:
		valid = isinstance(value, _NUMBER) and not isinstance(value, bool)

	if not valid:
		raise ValueError(f"settings.{field.name} must be {field.type.__name__}, got {type(value).__name__}: {value!r}")


def sequence_config_from_dict (data: typing.Optional[dict]) -> steparp.sequence.SequenceConfig:

	"""Build a ``SequenceConfig`` from the ``sequence`` section.

	Raises:
		ValueError: For unknown keys, values of the wrong container type,
			or list elements of the wrong type.
	"""

	config = steparp.sequence.SequenceConfig()

	if not data:
		return config

	if not isinstance(data, dict):
		raise ValueError("sequence section must be a mapping")

	_check_keys("sequence", data, _LIST_KEYS + ("control_changes",))

	for key in _LIST_KEYS:

		if key not in data:
			continue

		value = data[key]

		if value is not None and not isinstance(value, list):
			raise ValueError(f"sequence.{key} must be a list, got {type(value).__name__}")

		if value is not None:
			_check_elements(f"sequence.{key}", value, _ELEMENT_TYPES[key])

		setattr(config, key, value)

	control_changes = data.get("control_changes") or {}

	if not isinstance(control_changes, dict):
		raise ValueError("sequence.control_changes must be a mapping of CC number to values")

	config.control_changes = {}

	for control, values in control_changes.items():

		if not isinstance(values, list):
			raise ValueError(f"sequence.control_changes[{control}] must be a list")

		if isinstance(control, bool) or not isinstance(control, (int, str)) or not str(control).isdigit():
			raise ValueError(f"sequence.control_changes key must be a CC number, got {control!r}")

		_check_elements(f"sequence.control_changes[{control}]", values, _NUMBER)

		config.control_changes[int(control)] = values

	return config


def settings_from_dict (data: typing.Optional[dict]) -> steparp.settings.EngineSettings:

	"""Build ``EngineSettings`` from the ``settings`` section.

	Raises:
		ValueError: For unknown keys or values of the wrong type.
	"""

	if not data:
		return steparp.settings.EngineSettings()

	if not isinstance(data, dict):
		raise ValueError("settings section must be a mapping")

	fields = {field.name: field for field in dataclasses.fields(steparp.settings.EngineSettings)}

	_check_keys("settings", data, fields)

	for name, value in data.items():
		_check_setting(fields[name], value)

	return steparp.settings.EngineSettings(**data)


def processor_from_config (config: dict, host: steparp.host.Host, seed: typing.Optional[int] = None) -> steparp.processor.Processor:

	"""
	Build a ``Processor`` from a loaded config. An explicit ``seed`` overrides the config's.
	"""

	_check_keys("top-level", config, ("sequence", "settings", "seed"))

	if seed is None:
		seed = config.get("seed")

	if seed is not None and (isinstance(seed, bool) or not isinstance(seed, int)):
		raise ValueError(f"seed must be an integer, got {seed!r}")

	return steparp.processor.Processor(
		host = host,
		config = sequence_config_from_dict(config.get("sequence")),
		settings = settings_from_dict(config.get("settings")),
		seed = seed
	)
