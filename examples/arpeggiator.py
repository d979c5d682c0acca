"""
steparp - Chord Arpeggiator

Builds a MIDI file from a short chord progression. Each root note triggers
a four-step minor-seventh / major-seventh figure with gated sixteenths,
a dotted-eighth accent and a pan sweep.

How it works
────────────
Triggers are fed to the processor exactly as a host would deliver them:
one note-on per chord root, each with its own beat position. The
processor builds the step list, rolls chances, humanizes timing and
velocity, and hands every generated event to a RecordingHost, which
writes them to a Standard MIDI File.

Step overview
─────────────
  Step │ Length        │ Pitch │ Gate │ Chance
  ─────┼───────────────┼───────┼──────┼───────
  1    │ sixteenth     │ +0    │ 1.0  │ 100%
  2    │ sixteenth     │ +12   │ 0.5  │ 100%
  3    │ dotted eighth │ +7    │ 0.5  │ 75%
  4    │ eighth        │ +12   │ 0.25 │ 50%

How to run
──────────
  python examples/arpeggiator.py

Writes arpeggiator.mid to the current directory.

Tweakable parameters
────────────────────
- SEED: Change for a different humanize/chance roll; None for a new one each run.
- settings.speed: 0.5 doubles every step length, 2.0 halves it.
- settings.sequence_length: Set above 4 to let the figure run on and wrap.
"""

import logging

import steparp
import steparp.constants.control_change as cc
import steparp.events
import steparp.parameters


logging.basicConfig(level=logging.INFO)

SEED = 42

# (root pitch, beat position) for each trigger
PROGRESSION = [
	(57, 0.0),    # A
	(53, 2.0),    # F
	(60, 4.0),    # C
	(55, 6.0),    # G
]


def main () -> None:

	host = steparp.RecordingHost()

	config = steparp.SequenceConfig(
		durations = ["/16", "/16", "8d", "/8"],
		chords = ["min7", "maj7"],
		pitches = [0, 12, 7, 12],
		gates = [1, 0.5, 0.5, 0.25],
		chances = [1, 1, 0.75, 0.5],
		control_changes = {cc.PAN: [32, 64, 96, 64]}
	)

	processor = steparp.Processor(host, config=config, seed=SEED)

	# The same edits a host would make from its parameter panel
	processor.parameter_changed(steparp.parameters.HUMANIZE_VELOCITY, 6)
	processor.parameter_changed(steparp.parameters.CLAMP_VELOCITY, 1)

	for pitch, beat_pos in PROGRESSION:
		processor.handle_event(steparp.events.note_on(pitch, 100, beat_pos=beat_pos))

	host.save("arpeggiator.mid")


if __name__ == "__main__":
	main()
