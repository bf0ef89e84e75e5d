"""YAML configuration for the command-line tool.

Every section and key is optional; anything missing falls back to
``DEFAULTS``. A typical file::

    generation:
      length: 4
      complexity: 0.5
      rhythm_density: 0.6
      low: 60
      high: 84
      key: C
      mode: major
      order: 2

    playback:
      bpm: 120
      loops: 1
      device_name: null

    export:
      format: midi

    store:
      directory: melodies
"""

import copy
import logging
import os
import typing

import yaml

import melodist.intervals
import melodist.melody
import melodist.notes


logger = logging.getLogger(__name__)


DEFAULTS: typing.Dict[str, typing.Dict[str, typing.Any]] = {
	"generation": {
		"length": 4,
		"complexity": 0.5,
		"rhythm_density": 0.6,
		"low": 60,
		"high": 84,
		"key": "C",
		"mode": "major",
		"order": 2,
	},
	"playback": {
		"bpm": 120,
		"loops": 1,
		"device_name": None,
	},
	"export": {
		"format": "midi",
	},
	"store": {
		"directory": None,
	},
}


def load_config (config_path: str = "config.yaml") -> dict:

	"""
	Load configuration from a YAML file.
	"""

	if not os.path.exists(config_path):
		logger.warning(f"Config file {config_path} not found. Using defaults.")
		return {}

	with open(config_path, "r") as f:
		data = yaml.safe_load(f)

	if data is None:
		return {}

	if not isinstance(data, dict):
		raise ValueError(f"Config file {config_path} must contain a mapping, got {type(data).__name__}")

	return data


def merge_config (overrides: typing.Dict[str, typing.Any]) -> typing.Dict[str, typing.Dict[str, typing.Any]]:

	"""
	Overlay user sections on top of ``DEFAULTS``. Unknown sections and keys are ignored with a warning.
	"""

	merged = copy.deepcopy(DEFAULTS)

	for section, values in overrides.items():

		if section not in merged:
			logger.warning(f"Ignoring unknown config section '{section}'")
			continue

		if not isinstance(values, dict):
			raise ValueError(f"Config section '{section}' must be a mapping")

		for key, value in values.items():

			if key not in merged[section]:
				logger.warning(f"Ignoring unknown config key '{section}.{key}'")
				continue

			merged[section][key] = value

	return merged


def key_to_pitch_class (key: typing.Union[str, int]) -> int:

	"""Accept a note name (``"F#"``) or a pitch class (``6``)."""

	if isinstance(key, int):
		return key % 12

	if key not in melodist.notes.NOTE_NAME_TO_PC:
		raise ValueError(f"Unknown key name: {key!r}. Expected e.g. 'C', 'F#', 'A#'.")

	return melodist.notes.NOTE_NAME_TO_PC[key]


def generation_params (config: typing.Dict[str, typing.Dict[str, typing.Any]]) -> melodist.melody.GenerationParams:

	"""Build ``GenerationParams`` from the ``generation`` section of a merged config."""

	section = config["generation"]

	return melodist.melody.GenerationParams(
		length = int(section["length"]),
		complexity = float(section["complexity"]),
		rhythm_density = float(section["rhythm_density"]),
		range = (int(section["low"]), int(section["high"])),
		scale = melodist.intervals.scale_of(key_to_pitch_class(section["key"]), section["mode"])
	)
