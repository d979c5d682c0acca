"""
steparp - a MIDI step sequencer and arpeggiator engine.

Every incoming note-on triggers a short sequence of derived notes, chords
and control changes, each scheduled at a logical beat position for the host
to play. Per-step arrays shape the result:

- **Durations** as denominators (``8``), beats (``0.5``) or notation
  (``"/8"``, ``"8d"`` dotted, ``"8t"`` triplet).
- **Chords** from a fixed table (``maj``, ``min``, ``dim``, ``aug``,
  ``maj7``, ``dom7``, ``min7``, ``sus2``, ``sus4``).
- **Pitch** offsets, **gates**, **chances** and fixed **velocities**.
- **Control changes** sent alongside every note.

Global settings add transpose, speed, a sequence-length override, timing and
velocity humanization, and velocity clamping with optional normalization.
They are exposed to the host as a fixed parameter list.

Pure MIDI: no audio, no clock. Time is beat position; the host decides when
events actually play. ``python -m steparp`` renders a MIDI file offline.

Minimal example:

    ```python
    import steparp
    import steparp.events

    host = steparp.RecordingHost()
    processor = steparp.Processor(host, seed=1)
    processor.config.denominators = [8, 8, 4]
    processor.config.chords = ["min7"]

    processor.handle_event(steparp.events.note_on(57, 100, beat_pos=0.0))
    host.save("arp.mid")
    ```

Package-level exports: ``Processor``, ``SequenceConfig``, ``EngineSettings``,
``RecordingHost``.
"""

import steparp.host
import steparp.processor
import steparp.sequence
import steparp.settings


Processor = steparp.processor.Processor
SequenceConfig = steparp.sequence.SequenceConfig
EngineSettings = steparp.settings.EngineSettings
RecordingHost = steparp.host.RecordingHost
