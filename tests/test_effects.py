import numpy as np

from src.core.effects import (
    AudioCue, ConsoleEffects, RecordingEffects, ShakePulse, SparksBurst, generate_sparks,
)
from src.core.types import PaperState


def test_generate_sparks_count_and_ranges():
    sparks = generate_sparks(40, np.random.default_rng(1))
    assert len(sparks) == 40
    for s in sparks:
        assert 30 <= s.x <= 70
        assert 50 <= s.y <= 70
        assert -100 <= s.tx <= 100
        assert -300 <= s.ty <= -100
        assert 0.5 <= s.scale <= 2.0
        assert 0.0 <= s.delay <= 0.5
        assert 0.5 <= s.duration <= 1.5


def test_generate_sparks_seeded():
    a = generate_sparks(10, np.random.default_rng(3))
    b = generate_sparks(10, np.random.default_rng(3))
    assert a == b


def test_generate_zero_sparks():
    assert generate_sparks(0) == ()


def test_recording_effects_collects_in_order():
    effects = RecordingEffects()
    effects.state_changed(PaperState.ACTIVE)
    effects.play_audio(AudioCue.MUSIC_START)
    effects.animate(ShakePulse(400))
    assert effects.states == [PaperState.ACTIVE]
    assert effects.audio == [AudioCue.MUSIC_START]
    assert effects.animations == [ShakePulse(400)]
    effects.clear()
    assert effects.states == effects.audio == effects.animations == []


def test_console_effects_prints(capsys):
    effects = ConsoleEffects()
    effects.state_changed(PaperState.BURNING)
    effects.animate(SparksBurst(generate_sparks(3, np.random.default_rng(0))))
    out = capsys.readouterr().out
    assert "BURNING" in out
    assert "3 sparks" in out
