from neon_serpent.audio import PATCHES, AudioEngine
from neon_serpent.events import FoodEaten, GameOver, GameStarted, LevelChanged


def test_disabled_engine_swallows_events():
    engine = AudioEngine(enabled=False)
    for event in (GameStarted(), FoodEaten("mint", (1, 2)), LevelChanged(2), GameOver(9)):
        engine.handle_event(event)
    assert not engine.enabled


def test_every_food_has_a_cue():
    assert {"berry", "citrus", "mint", "royal"} <= set(PATCHES)


def test_render_patch_mixes_arpeggio_into_one_buffer():
    engine = AudioEngine(enabled=False)
    buffer = engine._render_patch(PATCHES["start"])
    voice = int(engine.sample_rate * 350 / 1000)
    step = int(engine.sample_rate * 40 / 1000)
    assert len(buffer) == voice + 2 * step
    assert max(abs(sample) for sample in buffer) <= 32767
    assert any(buffer)
