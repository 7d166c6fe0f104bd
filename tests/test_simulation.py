import random

import pytest

from flappyburst.core.events import EventType
from flappyburst.core.state import GamePhase
from flappyburst.game.geometry import Playfield
from flappyburst.game.simulation import ScoreBoard, Simulation

DT = 0.016


def run(sim, ticks, dt=DT):
    for _ in range(ticks):
        sim.update(dt)


def test_initial_state(simulation):
    assert simulation.phase == GamePhase.READY
    assert simulation.score == 0
    assert len(simulation.pipes) == 0
    assert simulation.bird.y == simulation.playfield.height / 2
    assert simulation.bird.vy == 0


def test_ready_does_no_physics(simulation):
    before = simulation.snapshot()
    run(simulation, 50)
    assert simulation.snapshot() == before


def test_first_flap_starts_and_flaps(simulation, recorder):
    assert simulation.on_flap()
    assert simulation.phase == GamePhase.RUNNING
    assert simulation.bird.vy == -340.0
    assert recorder.count(EventType.GAME_START) == 1
    assert recorder.count(EventType.FLAP) == 1


def test_velocity_after_n_ticks(simulation):
    simulation.start()
    run(simulation, 20)
    assert simulation.bird.vy == pytest.approx(20 * 980.0 * DT)


def test_pause_freezes_state(simulation):
    simulation.on_flap()
    run(simulation, 10)
    assert simulation.toggle_pause()
    assert simulation.phase == GamePhase.PAUSED

    frozen = simulation.snapshot()
    run(simulation, 100)
    simulation.tick(0.03)
    assert simulation.snapshot() == frozen

    # Flaps are ignored while paused
    assert not simulation.on_flap()
    assert simulation.snapshot() == frozen

    assert simulation.toggle_pause()
    assert simulation.phase == GamePhase.RUNNING


def test_toggle_pause_ignored_outside_play(simulation):
    assert not simulation.toggle_pause()
    assert simulation.phase == GamePhase.READY


def test_fall_to_game_over(settings, event_bus, recorder, rng):
    sim = Simulation(settings=settings, event_bus=event_bus, rng=rng, best_score=7)
    sim.start()
    sim.bird.flap()
    run(sim, 500)

    assert sim.phase == GamePhase.GAME_OVER
    assert sim.bird.bottom > sim.playfield.height
    assert recorder.count(EventType.GAME_OVER) == 1
    assert sim.best_score == 7

    over = recorder.of(EventType.GAME_OVER)[0]
    assert over.data["cause"] == "ground"
    assert over.data["new_best"] is False


def test_best_updates_from_zero(simulation, recorder):
    simulation.start()
    simulation.bird.flap()
    run(simulation, 500)
    assert simulation.best_score == 0
    assert recorder.count(EventType.NEW_BEST) == 0


def test_game_over_is_terminal(simulation):
    simulation.start()
    run(simulation, 500)
    snapshot = simulation.snapshot()
    run(simulation, 10)
    assert not simulation.on_flap()
    assert simulation.snapshot() == snapshot


def test_scoring_through_simulation(floating_simulation, recorder, pipe_factory):
    sim = floating_simulation
    sim.start()
    sim.pipes.append(pipe_factory(60.0))  # right edge 128, bird x 120
    run(sim, 30)

    assert sim.phase == GamePhase.RUNNING
    assert sim.score == 1
    assert recorder.count(EventType.SCORE) == 1
    assert recorder.of(EventType.SCORE)[0].data["score"] == 1


def test_pipe_collision_ends_game(floating_simulation, recorder, pipe_factory):
    sim = floating_simulation
    sim.start()
    sim.pipes.append(pipe_factory(150.0, top_height=500, bottom_y=650))
    run(sim, 60)

    assert sim.phase == GamePhase.GAME_OVER
    assert recorder.of(EventType.GAME_OVER)[0].data["cause"] == "pipe"
    assert recorder.count(EventType.GAME_OVER) == 1


def test_new_best_is_recorded(floating_simulation, recorder, pipe_factory):
    sim = floating_simulation
    sim.start()
    sim.pipes.append(pipe_factory(60.0))
    sim.pipes.append(pipe_factory(300.0, top_height=500, bottom_y=650))
    run(sim, 200)

    assert sim.phase == GamePhase.GAME_OVER
    assert sim.score == 1
    assert sim.best_score == 1
    assert recorder.of(EventType.NEW_BEST)[0].data["best"] == 1


def test_pipes_spawn_on_interval(floating_simulation):
    sim = floating_simulation
    sim.start()
    # The interval ramps down to its 950 ms floor within the first half second
    run(sim, 59)  # 944 ms
    assert len(sim.pipes) == 0
    run(sim, 1)   # 960 ms
    assert len(sim.pipes) == 1
    assert sim.params.spawn_timer == 0.0


def test_spawned_pipe_starts_off_screen(floating_simulation):
    sim = floating_simulation
    sim.start()
    run(sim, 60)
    pipe = sim.pipes.pipes[0]
    assert pipe.x > sim.playfield.width


@pytest.mark.parametrize("ending", ["ground", "pipe", "paused", "running"])
def test_reset_completeness(floating_simulation, settings, event_bus, rng, pipe_factory, ending):
    if ending == "ground":
        sim = Simulation(settings=settings, event_bus=event_bus, rng=rng, best_score=3)
        sim.start()
        run(sim, 500)
    else:
        sim = floating_simulation
        sim.start()
        sim.pipes.append(pipe_factory(60.0))
        if ending == "pipe":
            sim.pipes.append(pipe_factory(300.0, top_height=500, bottom_y=650))
            run(sim, 200)
        else:
            run(sim, 100)
            if ending == "paused":
                sim.toggle_pause()

    sim.reset()

    assert sim.phase == GamePhase.READY
    assert sim.score == 0
    assert len(sim.pipes) == 0
    assert sim.bird.y == sim.playfield.height / 2
    assert sim.bird.vy == 0
    assert sim.params == sim.ramp.initial_params()


def test_reset_keeps_best(floating_simulation, pipe_factory):
    sim = floating_simulation
    sim.start()
    sim.pipes.append(pipe_factory(60.0))
    sim.pipes.append(pipe_factory(300.0, top_height=500, bottom_y=650))
    run(sim, 200)
    sim.reset()
    assert sim.best_score == 1


def test_play_after_game_over(simulation, recorder):
    simulation.start()
    run(simulation, 500)
    assert simulation.play()
    assert simulation.phase == GamePhase.RUNNING
    assert simulation.score == 0
    assert recorder.count(EventType.GAME_RESET) == 1


def test_play_while_paused_is_refused(simulation):
    simulation.start()
    simulation.toggle_pause()
    assert not simulation.play()
    assert simulation.phase == GamePhase.PAUSED


def test_start_twice_is_refused(simulation):
    assert simulation.start()
    assert not simulation.start()


def test_tick_clamps_delta(simulation):
    simulation.start()
    simulation.tick(5.0)
    assert simulation.params.elapsed_time == pytest.approx(0.033)
    simulation.tick(-1.0)
    assert simulation.params.elapsed_time == pytest.approx(0.033)


def test_resize_recenters_idle_bird(simulation):
    simulation.resize(400, 600)
    assert simulation.playfield == Playfield(400.0, 600.0)
    assert simulation.bird.y == 300.0


def test_resize_during_play_keeps_bird(simulation):
    simulation.start()
    run(simulation, 5)
    y = simulation.bird.y
    simulation.resize(400, 900)
    assert simulation.bird.y == y
    assert simulation.playfield.height == 900.0


def test_instances_are_independent(settings):
    a = Simulation(settings=settings, rng=random.Random(1))
    b = Simulation(settings=settings, rng=random.Random(1))
    a.on_flap()
    run(a, 10)
    assert b.phase == GamePhase.READY
    assert b.bird.vy == 0


def test_seed_from_settings_is_reproducible(tmp_path):
    from flappyburst.config.settings import PhysicsSettings, Settings

    settings = Settings(_env_file=None, data_dir=tmp_path, seed=11,
                        physics=PhysicsSettings(gravity=1e-6))
    layouts = []
    for _ in range(2):
        sim = Simulation(settings=settings)
        sim.start()
        run(sim, 300)
        layouts.append([(p.top_height, p.bottom_y) for p in sim.pipes])
    assert layouts[0] == layouts[1]
    assert layouts[0]


def test_phase_changes_are_published(simulation, recorder):
    simulation.on_flap()
    simulation.toggle_pause()
    changes = [(e.data["from"], e.data["to"]) for e in recorder.of(EventType.PHASE_CHANGED)]
    assert changes == [
        (GamePhase.READY, GamePhase.RUNNING),
        (GamePhase.RUNNING, GamePhase.PAUSED),
    ]


def test_snapshot_is_a_copy(floating_simulation, pipe_factory):
    sim = floating_simulation
    sim.start()
    sim.pipes.append(pipe_factory(300.0))
    snap = sim.snapshot()
    run(sim, 1)
    assert snap.pipes[0].x == 300.0
    assert sim.pipes.pipes[0].x < 300.0


def test_scoreboard_commit():
    board = ScoreBoard(current=4, best=5)
    assert not board.commit()
    assert board.best == 5
    board.current = 6
    assert board.commit()
    assert board.best == 6
