import pytest

from flappyburst.config.settings import PhysicsSettings
from flappyburst.game.bird import Bird
from flappyburst.game.collision import CAUSE_CEILING, CAUSE_GROUND, CAUSE_PIPE, CollisionEngine
from flappyburst.game.geometry import Playfield

FIELD = Playfield(480, 720)


@pytest.fixture
def engine():
    return CollisionEngine()


@pytest.fixture
def bird():
    return Bird.from_settings(PhysicsSettings(), start_y=360.0)


def test_clear_sky(engine, bird, pipe_factory):
    report = engine.evaluate(bird, [pipe_factory(300.0)], FIELD)
    assert not report.collided
    assert report.points == 0


def test_pass_scores_once(engine, bird, pipe_factory):
    pipe = pipe_factory(0.0)  # right edge 68 < bird x 120
    first = engine.evaluate(bird, [pipe], FIELD)
    second = engine.evaluate(bird, [pipe], FIELD)
    assert first.passed == [pipe]
    assert second.points == 0
    assert pipe.passed


def test_right_edge_must_be_strictly_left(engine, bird, pipe_factory):
    pipe = pipe_factory(52.0)  # right edge exactly at bird x
    report = engine.evaluate(bird, [pipe], FIELD)
    assert report.points == 0
    assert not pipe.passed


def test_inside_gap_is_safe(engine, bird, pipe_factory):
    pipe = pipe_factory(100.0, top_height=200, bottom_y=520)
    assert not engine.evaluate(bird, [pipe], FIELD).collided


def test_hits_top_pipe(engine, bird, pipe_factory):
    pipe = pipe_factory(100.0, top_height=350, bottom_y=520)
    report = engine.evaluate(bird, [pipe], FIELD)
    assert report.collided
    assert report.cause == CAUSE_PIPE


def test_hits_bottom_pipe(engine, bird, pipe_factory):
    pipe = pipe_factory(100.0, top_height=150, bottom_y=370)
    assert engine.evaluate(bird, [pipe], FIELD).cause == CAUSE_PIPE


def test_first_hit_stops_evaluation(engine, bird, pipe_factory):
    blocking = pipe_factory(100.0, top_height=500, bottom_y=650)
    behind = pipe_factory(-20.0)  # would score if it were reached
    report = engine.evaluate(bird, [blocking, behind], FIELD)
    assert report.collided
    assert not behind.passed


def test_score_before_hit_on_same_pipe_counts(engine, bird, pipe_factory):
    passed = pipe_factory(0.0)
    blocking = pipe_factory(100.0, top_height=500, bottom_y=650)
    report = engine.evaluate(bird, [passed, blocking], FIELD)
    assert report.points == 1
    assert report.collided


def test_ceiling(engine, bird):
    bird.y = 15.0
    report = engine.evaluate(bird, [], FIELD)
    assert report.collided
    assert report.cause == CAUSE_CEILING


def test_ground(engine, bird):
    bird.y = 705.0
    report = engine.evaluate(bird, [], FIELD)
    assert report.cause == CAUSE_GROUND


def test_touching_bounds_is_allowed(engine, bird):
    bird.y = 16.0
    assert not engine.evaluate(bird, [], FIELD).collided
    bird.y = 704.0
    assert not engine.evaluate(bird, [], FIELD).collided
