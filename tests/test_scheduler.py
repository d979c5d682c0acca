import typing

import pytest

import steparp.events
import steparp.host
import steparp.scheduler
import steparp.sequence
import steparp.settings


def _run (
	config: steparp.sequence.SequenceConfig,
	settings: steparp.settings.EngineSettings,
	trigger: typing.Optional[steparp.events.MidiEvent] = None,
	rng: typing.Optional[steparp.scheduler.RandomSource] = None
) -> steparp.host.RecordingHost:

	"""Run one activation and return the host holding its output."""

	host = steparp.host.RecordingHost()
	scheduler = steparp.scheduler.StepScheduler(host, rng)

	if trigger is None:
		trigger = steparp.events.note_on(60, 100, beat_pos=0.0)

	scheduler.handle_event(trigger, steparp.sequence.build_sequence(config), config, settings)

	return host


def _note_offs (host: steparp.host.RecordingHost) -> typing.List[steparp.events.MidiEvent]:
	return [event for event in host.sent if event.message_type == 'note_off']


# ── timing ───────────────────────────────────────────────────────────

def test_uniform_quarters_land_on_beats (settings: steparp.settings.EngineSettings) -> None:

	"""Four quarter notes from beat 0 start exactly on 0, 1, 2, 3."""

	host = _run(steparp.sequence.SequenceConfig(), settings)

	assert [e.beat_pos for e in host.notes()] == [0.0, 1.0, 2.0, 3.0]
	assert [e.beat_pos for e in _note_offs(host)] == [1.0, 2.0, 3.0, 4.0]


def test_gate_shortens_note_off (settings: steparp.settings.EngineSettings) -> None:

	"""Each note-off falls at onset + gate * duration."""

	config = steparp.sequence.SequenceConfig(gates=[0.5, 0.25])
	host = _run(config, settings)

	assert [e.beat_pos for e in _note_offs(host)] == [0.5, 1.25, 2.5, 3.25]


def test_trigger_position_offsets_sequence (settings: steparp.settings.EngineSettings) -> None:

	"""The sequence starts at the trigger's beat position."""

	host = _run(steparp.sequence.SequenceConfig(denominators=[8, 8]), settings, steparp.events.note_on(60, 100, beat_pos=16.0))

	assert [e.beat_pos for e in host.notes()] == [16.0, 16.5]


def test_mixed_durations_accumulate (settings: steparp.settings.EngineSettings) -> None:

	"""Onsets accumulate each step's resolved duration."""

	config = steparp.sequence.SequenceConfig(durations=["/4", "8d", "/16", 0.5])
	host = _run(config, settings)

	assert [e.beat_pos for e in host.notes()] == [0.0, 1.0, 1.75, 2.0]


def test_speed_scales_durations (settings: steparp.settings.EngineSettings) -> None:

	"""Speed 2 halves every step and gate length."""

	settings.speed = 2.0
	host = _run(steparp.sequence.SequenceConfig(), settings)

	assert [e.beat_pos for e in host.notes()] == [0.0, 0.5, 1.0, 1.5]
	assert [e.beat_pos for e in _note_offs(host)] == [0.5, 1.0, 1.5, 2.0]


def test_zero_speed_is_floored (settings: steparp.settings.EngineSettings) -> None:

	"""A zero speed plays at the minimum speed instead of dividing by zero."""

	settings.speed = 0
	host = _run(steparp.sequence.SequenceConfig(denominators=[4, 4]), settings)

	assert [e.beat_pos for e in host.notes()] == [0.0, 100.0]


# ── sequence length ──────────────────────────────────────────────────

def test_sequence_length_repeats_steps (settings: steparp.settings.EngineSettings) -> None:

	"""sequence_length 6 over 4 steps plays 6 steps, reusing steps 0 and 1."""

	settings.sequence_length = 6
	config = steparp.sequence.SequenceConfig(denominators=[4, 4, 8, 8], pitches=[0, 2, 4, 5, 7, 9])
	host = _run(config, settings)

	notes = host.notes()

	assert len(notes) == 6
	assert [e.beat_pos for e in notes] == [0.0, 1.0, 2.0, 2.5, 3.0, 4.0]
	assert [e.pitch for e in notes] == [60, 62, 64, 65, 67, 69]


def test_sequence_length_shorter_than_steps (settings: steparp.settings.EngineSettings) -> None:

	"""A sequence_length below the step count stops early."""

	settings.sequence_length = 2
	host = _run(steparp.sequence.SequenceConfig(), settings)

	assert len(host.notes()) == 2


# ── chance ───────────────────────────────────────────────────────────

def test_zero_chance_never_plays_but_takes_time (settings: steparp.settings.EngineSettings, fixed_random: typing.Callable[..., typing.Any]) -> None:

	"""A chance-0 step emits nothing but the next step still starts after it."""

	config = steparp.sequence.SequenceConfig(chances=[1, 0], control_changes={10: [64]})
	host = _run(config, settings, rng=fixed_random(0.5))

	assert [e.beat_pos for e in host.notes()] == [0.0, 2.0]
	assert [e.beat_pos for e in host.sent if e.message_type == 'control_change'] == [0.0, 2.0]


def test_chance_compares_against_draw (settings: steparp.settings.EngineSettings, fixed_random: typing.Callable[..., typing.Any]) -> None:

	"""A step plays when the draw is not greater than its chance."""

	config = steparp.sequence.SequenceConfig(chances=[0.5, 0.4, 0.6, 0.5])
	host = _run(config, settings, rng=fixed_random(0.5))

	assert [e.beat_pos for e in host.notes()] == [0.0, 2.0, 3.0]


def test_no_chances_draws_nothing (settings: steparp.settings.EngineSettings, fixed_random: typing.Callable[..., typing.Any]) -> None:

	"""Without chances (and without humanize) no random numbers are drawn."""

	rng = fixed_random(0.5)
	_run(steparp.sequence.SequenceConfig(chances=None), settings, rng=rng)

	assert rng.calls == 0


# ── rests and malformed durations ────────────────────────────────────

def test_negative_duration_is_rest (settings: steparp.settings.EngineSettings) -> None:

	"""A negative beat duration rests for its absolute length."""

	config = steparp.sequence.SequenceConfig(durations=[1.0, -1.0, 1.0])
	host = _run(config, settings)

	assert [e.beat_pos for e in host.notes()] == [0.0, 2.0]


def test_negative_denominator_is_rest (settings: steparp.settings.EngineSettings) -> None:

	"""A negative denominator rests for the length of its positive note."""

	config = steparp.sequence.SequenceConfig(denominators=[4, -4, 4])
	host = _run(config, settings)

	assert [e.beat_pos for e in host.notes()] == [0.0, 2.0]
	assert [e.beat_pos for e in _note_offs(host)] == [1.0, 3.0]


def test_malformed_duration_skips_step (settings: steparp.settings.EngineSettings) -> None:

	"""A malformed duration plays nothing and advances by zero."""

	config = steparp.sequence.SequenceConfig(durations=["/4", "garbage", "/4"])
	host = _run(config, settings)

	assert [e.beat_pos for e in host.notes()] == [0.0, 1.0]


# ── pitch ────────────────────────────────────────────────────────────

def test_transpose_and_pitch_offsets (settings: steparp.settings.EngineSettings) -> None:

	"""Pitch is trigger + transpose + step offset."""

	settings.transpose = -12
	config = steparp.sequence.SequenceConfig(pitches=[0, 7])
	host = _run(config, settings)

	assert [e.pitch for e in host.notes()] == [48, 55, 48, 55]
	assert [e.pitch for e in _note_offs(host)] == [48, 55, 48, 55]


def test_chord_steps (settings: steparp.settings.EngineSettings) -> None:

	"""Chord steps play every chord tone at the step's onset."""

	config = steparp.sequence.SequenceConfig(denominators=[2], chords=["min"], pitches=[2])
	host = _run(config, settings)

	notes = host.notes()

	assert [e.pitch for e in notes] == [62, 65, 69]
	assert all(e.beat_pos == 0.0 for e in notes)
	assert all(e.beat_pos == 2.0 for e in _note_offs(host))


def test_unknown_chord_step_rests (settings: steparp.settings.EngineSettings) -> None:

	"""A step with an unknown chord emits nothing but keeps its time."""

	config = steparp.sequence.SequenceConfig(chords=["maj", "bogus"])
	host = _run(config, settings)

	assert sorted({e.beat_pos for e in host.notes()}) == [0.0, 2.0]
	assert len(host.notes()) == 6


def test_out_of_range_pitch_dropped (settings: steparp.settings.EngineSettings) -> None:

	"""Notes outside 0-127 are dropped; the rest of the sequence plays."""

	config = steparp.sequence.SequenceConfig(pitches=[0, 5])
	host = _run(config, settings, steparp.events.note_on(125, 100))

	assert [e.pitch for e in host.notes()] == [125, 125]
	assert [e.beat_pos for e in host.notes()] == [0.0, 2.0]


# ── velocity ─────────────────────────────────────────────────────────

def test_played_velocity_kept (settings: steparp.settings.EngineSettings) -> None:

	"""Without a velocity array the trigger's velocity is used."""

	host = _run(steparp.sequence.SequenceConfig(), settings, steparp.events.note_on(60, 77))

	assert [e.velocity for e in host.notes()] == [77, 77, 77, 77]


def test_step_velocities_override (settings: steparp.settings.EngineSettings) -> None:

	"""A velocity array replaces the played velocity, and the host normalizes it."""

	config = steparp.sequence.SequenceConfig(velocities=[90, 200, -5])
	host = _run(config, settings)

	assert [e.velocity for e in host.notes()] == [90, 127, 0, 90]


def test_clamp_with_normalize (settings: steparp.settings.EngineSettings) -> None:

	"""Velocity 64 (half of 0-127) normalized into 20-40 gives 30."""

	settings.clamp_velocity = True
	settings.normalize_velocity = True
	settings.min_velocity = 20
	settings.max_velocity = 40

	host = _run(steparp.sequence.SequenceConfig(), settings, steparp.events.note_on(60, 64))

	assert [e.velocity for e in host.notes()] == [30, 30, 30, 30]


def test_clamp_without_normalize (settings: steparp.settings.EngineSettings) -> None:

	"""Hard clamping holds velocities inside both bounds."""

	settings.clamp_velocity = True
	settings.normalize_velocity = False
	settings.min_velocity = 60
	settings.max_velocity = 100

	config = steparp.sequence.SequenceConfig(velocities=[30, 80, 120])
	host = _run(config, settings)

	assert [e.velocity for e in host.notes()] == [60, 80, 100, 60]


def test_clamp_off_ignores_range (settings: steparp.settings.EngineSettings) -> None:

	"""With clamping off the range has no effect."""

	settings.min_velocity = 60
	settings.max_velocity = 100

	config = steparp.sequence.SequenceConfig(velocities=[30, 120])
	host = _run(config, settings)

	assert [e.velocity for e in host.notes()] == [30, 120, 30, 120]


@pytest.mark.parametrize("velocity, expected", [(0, 20.0), (127, 40.0)])
def test_shape_velocity_normalize_bounds (velocity: int, expected: float) -> None:

	"""Normalization maps the ends of 0-127 onto the ends of the clamp range."""

	settings = steparp.settings.EngineSettings(clamp_velocity=True, min_velocity=20, max_velocity=40)

	assert steparp.scheduler.shape_velocity(velocity, settings, steparp.host.normalize_data) == expected


# ── humanize ─────────────────────────────────────────────────────────

def test_random_delta_zero_range (fixed_random: typing.Callable[..., typing.Any]) -> None:

	"""A non-positive range returns 0 without drawing."""

	rng = fixed_random(0.9)

	assert steparp.scheduler.random_delta(0, rng) == 0
	assert steparp.scheduler.random_delta(-1, rng) == 0
	assert rng.calls == 0


def test_random_delta_sign (fixed_random: typing.Callable[..., typing.Any]) -> None:

	"""The magnitude comes from the first draw and the sign from the second."""

	assert steparp.scheduler.random_delta(10, fixed_random(0.5, 0.9)) == 5.0
	assert steparp.scheduler.random_delta(10, fixed_random(0.5, 0.2)) == -5.0


def test_random_delta_bounded () -> None:

	"""Real random deltas stay within the range."""

	import random

	rng = random.Random(1234)
	deltas = [steparp.scheduler.random_delta(0.25, rng) for _ in range(1000)]

	assert all(-0.25 <= d <= 0.25 for d in deltas)
	assert any(d < 0 for d in deltas) and any(d > 0 for d in deltas)


def test_humanize_beat_pos (settings: steparp.settings.EngineSettings, fixed_random: typing.Callable[..., typing.Any]) -> None:

	"""Timing humanize shifts onsets; note-offs follow the shifted onset."""

	settings.humanize_beat_pos = 0.1
	config = steparp.sequence.SequenceConfig(chances=None)
	host = _run(config, settings, rng=fixed_random(0.5, 0.9))

	assert [e.beat_pos for e in host.notes()] == pytest.approx([0.05, 1.05, 2.05, 3.05])
	assert [e.beat_pos for e in _note_offs(host)] == pytest.approx([1.05, 2.05, 3.05, 4.05])


def test_humanize_never_before_trigger (settings: steparp.settings.EngineSettings, fixed_random: typing.Callable[..., typing.Any]) -> None:

	"""A negative timing shift on the first step is held at the trigger position."""

	settings.humanize_beat_pos = 0.1
	config = steparp.sequence.SequenceConfig(chances=None)
	host = _run(config, settings, steparp.events.note_on(60, 100, beat_pos=8.0), rng=fixed_random(0.5, 0.2))

	assert [e.beat_pos for e in host.notes()] == pytest.approx([8.0, 8.95, 9.95, 10.95])


def test_humanize_velocity (settings: steparp.settings.EngineSettings, fixed_random: typing.Callable[..., typing.Any]) -> None:

	"""Velocity humanize adds a bounded random delta before normalization."""

	settings.humanize_velocity = 10
	config = steparp.sequence.SequenceConfig(chances=None)
	host = _run(config, settings, rng=fixed_random(0.5, 0.9))

	assert [e.velocity for e in host.notes()] == [105, 105, 105, 105]


# ── control changes ──────────────────────────────────────────────────

def test_control_changes_precede_each_note (settings: steparp.settings.EngineSettings) -> None:

	"""Each configured CC is sent at the note's position, before the note-on."""

	config = steparp.sequence.SequenceConfig(denominators=[4, 4], control_changes={10: [0, 127], 1: [64]})
	host = _run(config, settings)

	types = [(e.message_type, e.control, e.value, e.beat_pos) for e in host.sent]

	assert types == [
		('control_change', 10, 0, 0.0),
		('control_change', 1, 64, 0.0),
		('note_on', 0, 0, 0.0),
		('note_off', 0, 0, 1.0),
		('control_change', 10, 127, 1.0),
		('control_change', 1, 64, 1.0),
		('note_on', 0, 0, 1.0),
		('note_off', 0, 0, 2.0),
	]


def test_control_change_values_normalized (settings: steparp.settings.EngineSettings) -> None:

	"""CC values pass through the host's normalize and keep the trigger channel."""

	config = steparp.sequence.SequenceConfig(denominators=[4], control_changes={64: [300.4]})
	host = _run(config, settings, steparp.events.note_on(60, 100, channel=5))

	cc = [e for e in host.sent if e.message_type == 'control_change']

	assert cc[0].value == 127
	assert cc[0].channel == 5


def test_empty_control_change_list_skipped (settings: steparp.settings.EngineSettings) -> None:

	"""A CC with no step values sends nothing."""

	config = steparp.sequence.SequenceConfig(control_changes={10: []})
	host = _run(config, settings)

	assert not [e for e in host.sent if e.message_type == 'control_change']


# ── passthrough ──────────────────────────────────────────────────────

@pytest.mark.parametrize("event", [
	steparp.events.note_off(60, beat_pos=1.0),
	steparp.events.control_change(7, 100, beat_pos=1.0),
	steparp.events.note_on(60, 0, beat_pos=1.0),
])
def test_non_note_on_passes_through (event: steparp.events.MidiEvent, settings: steparp.settings.EngineSettings) -> None:

	"""Anything but a sounding note-on is sent unmodified."""

	host = _run(steparp.sequence.SequenceConfig(), settings, event)

	assert host.sent == [event]
	assert host.sent[0] is event


def test_trigger_without_steps_passes_through (settings: steparp.settings.EngineSettings) -> None:

	"""With no steps configured the trigger itself is sent."""

	trigger = steparp.events.note_on(60, 100)
	host = _run(steparp.sequence.SequenceConfig(denominators=None), settings, trigger)

	assert host.sent == [trigger]
