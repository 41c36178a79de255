import logging
import math
import random

import pytest

from conftest import ConstantNoise
from tilewall.config import WallConfig
from tilewall.core.surface import RecordingSurface
from tilewall.core.tile import MAX_ROTATION, NEXT_SALT, Phase, Tile


def make_tile(config, noise, rng, palette, start=0, is_light=False):
    return Tile(
        x=0,
        y=0,
        size=config.cell_size,
        is_light=is_light,
        seed=2024.5,
        palette=palette,
        noise=noise,
        rng=rng,
        config=config,
        phase_start_tick=start,
    )


def test_new_tile_holds_without_next(quick_config, constant_noise, rng, palette):
    tile = make_tile(quick_config, constant_noise, rng, palette)
    assert tile.phase == Phase.HOLD
    assert tile.next is None
    assert tile.hold_jitter == 0
    assert tile.opacities(0) == (1.0, 0.0)


def test_hold_fade_hold_scenario(quick_config, constant_noise, rng, palette):
    tile = make_tile(quick_config, constant_noise, rng, palette)
    first = tile.current

    for now in range(1, 101):
        assert tile.advance(now) is None
    assert tile.phase == Phase.HOLD

    assert tile.advance(101) == Phase.FADE
    incoming = tile.next
    assert incoming is not None
    assert incoming.seed == tile.seed + 101 + NEXT_SALT
    assert tile.current is first

    for now in range(102, 151):
        assert tile.advance(now) is None
    assert tile.phase == Phase.FADE

    assert tile.advance(151) == Phase.HOLD
    assert tile.current is incoming
    assert tile.next is None
    assert tile.phase_start_tick == 151


def test_at_most_one_transition_per_frame(constant_noise, palette):
    config = WallConfig(cell_size=50, hold_frames=1, fade_frames=1, hold_jitter=0)
    tile = make_tile(config, constant_noise, random.Random(3), palette)
    phases = []
    for now in range(1, 40):
        before = tile.phase
        fired = tile.advance(now)
        if fired is None:
            assert tile.phase == before
        else:
            assert fired != before
        phases.append(tile.phase)
    # Never skips a state: every change alternates HOLD <-> FADE
    changes = [b for a, b in zip(phases, phases[1:]) if a != b]
    assert all(a != b for a, b in zip(changes, changes[1:]))


def test_jitter_resampled_on_each_hold(constant_noise, palette):
    config = WallConfig(cell_size=50, hold_frames=5, fade_frames=2, hold_jitter=3)
    tile = make_tile(config, constant_noise, random.Random(11), palette)
    jitters = {tile.hold_jitter}
    for now in range(1, 400):
        if tile.advance(now) == Phase.HOLD:
            jitters.add(tile.hold_jitter)
    assert all(-3 <= j <= 3 for j in jitters)
    assert len(jitters) > 1


def test_opacities_complementary_during_fade(quick_config, constant_noise, rng, palette):
    tile = make_tile(quick_config, constant_noise, rng, palette)
    tile.advance(101)
    for now in range(101, 151):
        current, incoming = tile.opacities(now)
        assert current + incoming == 1.0
        assert incoming == pytest.approx((now - 101) / 50)


def test_hold_draws_current_only(quick_config, constant_noise, rng, palette):
    tile = make_tile(quick_config, constant_noise, rng, palette)
    surface = RecordingSurface(200, 200)
    tile.draw(surface, 10, 10 / 60)

    background, *module = surface.commands
    assert background.op == "rect"
    assert background.args["center"] is False
    assert background.args["w"] == background.args["h"] == 201
    assert background.color == quick_config.bg_dark
    assert module
    assert all(c.alpha == 1.0 for c in module)


def test_fade_draws_both_instances(quick_config, constant_noise, rng, palette):
    tile = make_tile(quick_config, constant_noise, rng, palette)
    tile.advance(101)

    surface = RecordingSurface(200, 200)
    tile.draw(surface, 126, 126 / 60)
    alphas = [c.alpha for c in surface.commands[1:]]
    assert set(alphas) == {0.5}
    assert len(alphas) > 0

    surface = RecordingSurface(200, 200)
    tile.draw(surface, 111, 111 / 60)
    alphas = sorted({c.alpha for c in surface.commands[1:]})
    assert alphas == pytest.approx([0.2, 0.8])
    # The incoming instance is layered on top of the outgoing one
    assert surface.commands[-1].alpha == pytest.approx(0.2)


def test_fade_start_frame_renders_next_invisibly(quick_config, constant_noise, rng, palette):
    tile = make_tile(quick_config, constant_noise, rng, palette, start=-101)
    surface = RecordingSurface(200, 200)
    tile.draw(surface, 0, 0.0)
    assert tile.phase == Phase.FADE
    # k == 0 on the first fade frame, so only current is drawn
    assert {c.alpha for c in surface.commands[1:]} == {1.0}


def test_light_tile_background(quick_config, constant_noise, rng, palette):
    tile = make_tile(quick_config, constant_noise, rng, palette, is_light=True)
    surface = RecordingSurface(200, 200)
    tile.draw(surface, 1, 0.0)
    assert surface.commands[0].color == quick_config.bg_light


def test_module_frame_is_centered_and_rotated(quick_config, rng, palette):
    tile = make_tile(quick_config, ConstantNoise(1.0), rng, palette)
    tile.x, tile.y = 400, 200
    surface = RecordingSurface(800, 800)
    tile.draw(surface, 1, 0.0)

    a, b, c, d, e, f = surface.commands[1].transform
    assert (c, f) == pytest.approx((500, 300))
    assert math.atan2(d, a) == pytest.approx(MAX_ROTATION)
    assert surface.commands[0].transform == (1.0, 0.0, 0.0, 0.0, 1.0, 0.0)


def test_rotation_bounded_and_smooth(quick_config, noise_field, rng, palette):
    tile = make_tile(quick_config, noise_field, rng, palette)
    prev = tile.rotation(0.0)
    for frame in range(1, 600):
        angle = tile.rotation(frame / 60)
        assert -MAX_ROTATION <= angle <= MAX_ROTATION
        assert abs(angle - prev) < 0.05
        prev = angle


def test_seed_never_changes(quick_config, noise_field, palette):
    config = WallConfig(cell_size=100, hold_frames=3, fade_frames=2, hold_jitter=1)
    tile = make_tile(config, noise_field, random.Random(8), palette)
    seed = tile.seed
    surface = RecordingSurface(100, 100)
    for now in range(1, 100):
        tile.draw(surface, now, now / 60)
    assert tile.seed == seed


def test_transitions_logged_at_debug(quick_config, constant_noise, rng, palette, caplog):
    tile = make_tile(quick_config, constant_noise, rng, palette)
    with caplog.at_level(logging.DEBUG, logger="tilewall"):
        tile.advance(101)
        tile.advance(151)
    messages = [r.getMessage() for r in caplog.records]
    assert any("fading in at frame 101" in m for m in messages)
    assert any("holding at frame 151" in m for m in messages)


def test_zero_fade_config_does_not_divide_by_zero(constant_noise, rng, palette):
    config = WallConfig(cell_size=50, hold_frames=0, fade_frames=0, hold_jitter=0)
    tile = make_tile(config, constant_noise, rng, palette)
    assert tile.config.fade_frames == 1
    assert tile.advance(2) == Phase.FADE
    assert tile.blend_weight(2) == 0.0
    assert tile.blend_weight(3) == 1.0
