import argparse
import logging
import os
import random
import sys
import typing

import melodist.config
import melodist.export
import melodist.generator
import melodist.playback
import melodist.store


logger = logging.getLogger(__name__)


def build_parser () -> argparse.ArgumentParser:

	parser = argparse.ArgumentParser(prog="melodist", description="Generate melodies from a Markov chain and music theory rules")
	parser.add_argument("--config", default="config.yaml", help="YAML config file (default: config.yaml)")
	parser.add_argument("--seed", type=int, default=None, help="Random seed for repeatable output")
	parser.add_argument("--count", type=int, default=1, help="Number of melodies to generate (default: 1)")
	parser.add_argument("--train", action="store_true", help="Feed each melody back into the model before generating the next")
	parser.add_argument("--export", default=None, help="Export path; with --count > 1 an index is added before the extension")
	parser.add_argument("--format", default=None, choices=[f.value for f in melodist.export.ExportFormat], help="Export format")
	parser.add_argument("--store", default=None, help="Directory to save melodies as JSON")
	parser.add_argument("--play", action="store_true", help="Play each melody on a MIDI output")
	parser.add_argument("--device", default=None, help="MIDI output device name")
	parser.add_argument("--bpm", type=float, default=None, help="Playback tempo")
	parser.add_argument("--loops", type=int, default=None, help="Times to repeat each melody during playback")

	return parser


def export_path (path: str, index: int, count: int) -> str:

	"""Insert ``-<index>`` before the extension when exporting several melodies."""

	if count == 1:
		return path

	root, extension = os.path.splitext(path)

	return f"{root}-{index}{extension}"


def run (args: argparse.Namespace) -> int:

	"""
	Generate, export, save and play according to the parsed arguments.
	"""

	config = melodist.config.merge_config(melodist.config.load_config(args.config))
	params = melodist.config.generation_params(config)

	if args.count < 1:
		raise ValueError(f"--count must be at least 1, got {args.count}")

	rng = random.Random(args.seed)
	generator = melodist.generator.MelodyGenerator(order=int(config["generation"]["order"]), rng=rng)

	directory = args.store or config["store"]["directory"]
	store: typing.Optional[melodist.store.MelodyStore] = melodist.store.DirectoryMelodyStore(directory) if directory else None

	fmt = args.format or config["export"]["format"]
	bpm = args.bpm or config["playback"]["bpm"]
	loops = args.loops if args.loops is not None else int(config["playback"]["loops"])

	port = None

	if args.play:
		_, port = melodist.playback.select_output_device(args.device or config["playback"]["device_name"])

		if port is None:
			logger.error("Playback requested but no MIDI output could be opened")
			return 1

	try:

		for index in range(1, args.count + 1):

			melody = generator.generate(params)
			logger.info(f"{melody.name}: {len(melody.notes)} notes, {melody.duration_beats()} beats (id {melody.id})")

			if args.train:
				generator.train_from_melody(melody)

			if args.export:
				melodist.export.write_melody(melody, fmt, export_path(args.export, index, args.count))

			if store is not None:
				melodist.store.save_melody(store, melody)

			if port is not None:
				melodist.playback.play(port, melody.notes, bpm=bpm, loops=loops)

	finally:

		if port is not None:
			port.close()

	return 0


def main (argv: typing.Optional[typing.List[str]] = None) -> None:

	"""
	Main entry point for the melodist command-line tool.
	"""

	logging.basicConfig(level=logging.INFO)

	args = build_parser().parse_args(argv)

	try:
		code = run(args)

	except (ValueError, OSError) as e:
		logger.error(str(e))
		code = 1

	except KeyboardInterrupt:
		code = 130

	sys.exit(code)


if __name__ == "__main__":
	main()
