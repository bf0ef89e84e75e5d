"""Melody persistence.

The generator never stores anything itself; callers hand melodies to any
object that satisfies :class:`MelodyStore`. Two implementations are provided:

- :class:`MemoryMelodyStore` keeps melodies in a dict (tests, one-off runs).
- :class:`DirectoryMelodyStore` writes one JSON file per melody id.

Example:
	```python
	store = DirectoryMelodyStore("melodies")
	save_melody(store, melody)

	for saved in store.list_all():
		print(saved.name, len(saved.notes))
	```
"""

import json
import logging
import os
import pathlib
import typing

import melodist.melody


logger = logging.getLogger(__name__)


class MelodyStore (typing.Protocol):

	"""Key-value store for generated melodies, keyed by melody id."""

	def get (self, key: str) -> typing.Optional[melodist.melody.GeneratedMelody]:
		...

	def put (self, key: str, value: melodist.melody.GeneratedMelody) -> None:
		...

	def delete (self, key: str) -> None:
		...

	def list_all (self) -> typing.List[melodist.melody.GeneratedMelody]:
		...


def save_melody (store: MelodyStore, melody: melodist.melody.GeneratedMelody) -> None:

	"""Store a melody under its own id."""

	store.put(melody.id, melody)


class MemoryMelodyStore:

	"""In-process store backed by a dict."""

	def __init__ (self) -> None:

		self._melodies: typing.Dict[str, melodist.melody.GeneratedMelody] = {}


	def get (self, key: str) -> typing.Optional[melodist.melody.GeneratedMelody]:

		return self._melodies.get(key)


	def put (self, key: str, value: melodist.melody.GeneratedMelody) -> None:

		self._melodies[key] = value


	def delete (self, key: str) -> None:

		self._melodies.pop(key, None)


	def list_all (self) -> typing.List[melodist.melody.GeneratedMelody]:

		return sorted(self._melodies.values(), key=lambda melody: melody.created_at)


class DirectoryMelodyStore:

	"""
	Stores each melody as ``<id>.json`` inside a directory.

	The directory is created on the first write. Keys are used as file names,
	so they must not contain path separators.
	"""

	def __init__ (self, directory: typing.Union[str, os.PathLike]) -> None:

		self.directory = pathlib.Path(directory)


	def _path (self, key: str) -> pathlib.Path:

		if not key or "/" in key or "\\" in key or key in (".", ".."):
			raise ValueError(f"Invalid melody key: {key!r}")

		return self.directory / f"{key}.json"


	def get (self, key: str) -> typing.Optional[melodist.melody.GeneratedMelody]:

		path = self._path(key)

		if not path.exists():
			return None

		with open(path, "r", encoding="utf-8") as f:
			return melodist.melody.GeneratedMelody.from_dict(json.load(f))


	def put (self, key: str, value: melodist.melody.GeneratedMelody) -> None:

		path = self._path(key)
		self.directory.mkdir(parents=True, exist_ok=True)

		with open(path, "w", encoding="utf-8") as f:
			json.dump(value.to_dict(), f, indent=2)

		logger.info(f"Saved melody '{value.name}' to {path}")


	def delete (self, key: str) -> None:

		path = self._path(key)

		if path.exists():
			path.unlink()
			logger.info(f"Deleted {path}")


	def list_all (self) -> typing.List[melodist.melody.GeneratedMelody]:

		if not self.directory.exists():
			return []

		melodies = []

		for path in sorted(self.directory.glob("*.json")):
			with open(path, "r", encoding="utf-8") as f:
				melodies.append(melodist.melody.GeneratedMelody.from_dict(json.load(f)))

		return sorted(melodies, key=lambda melody: melody.created_at)
