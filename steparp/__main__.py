"""Render a MIDI file through the step sequencer.

Every note-on in INPUT triggers the configured sequence; all other messages
pass through. The result is written to OUTPUT::

	python -m steparp triggers.mid arpeggio.mid --config steparp.yaml --seed 7
"""

import argparse
import logging
import typing

import steparp.config
import steparp.host
import steparp.render


# Configure logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


def main (argv: typing.Optional[typing.List[str]] = None) -> None:

	"""
	Main entry point for the steparp renderer.
	"""

	parser = argparse.ArgumentParser(description=__doc__, formatter_class=argparse.RawDescriptionHelpFormatter)
	parser.add_argument("input", help="MIDI file with trigger notes")
	parser.add_argument("output", help="MIDI file to write")
	parser.add_argument("--config", default="steparp.yaml", help="YAML config file (default: steparp.yaml)")
	parser.add_argument("--seed", type=int, default=None, help="Random seed for repeatable humanize and chance")
	parser.add_argument("--ticks-per-beat", type=int, default=480, help="Output file resolution (default: 480)")
	args = parser.parse_args(argv)

	config = steparp.config.load_config(args.config)

	host = steparp.host.RecordingHost()
	processor = steparp.config.processor_from_config(config, host, seed=args.seed)

	triggers = steparp.render.render_file(args.input, args.output, processor, host, ticks_per_beat=args.ticks_per_beat)

	logger.info(f"Done: {triggers} triggers")


if __name__ == "__main__":
	main()
