import random

import pytest

from flappyburst.config.settings import PhysicsSettings, Settings
from flappyburst.core.events import EventBus, EventType
from flappyburst.game.pipes import Pipe
from flappyburst.game.simulation import Simulation


class EventRecorder:
    """Collects every event emitted on a bus."""

    def __init__(self, bus: EventBus):
        self.events = []
        bus.subscribe_all(self.events.append)

    def of(self, event_type: EventType):
        return [e for e in self.events if e.type == event_type]

    def count(self, event_type: EventType) -> int:
        return len(self.of(event_type))


@pytest.fixture
def settings(tmp_path):
    return Settings(_env_file=None, data_dir=tmp_path)


@pytest.fixture
def rng():
    return random.Random(1234)


@pytest.fixture
def event_bus():
    return EventBus()


@pytest.fixture
def recorder(event_bus):
    return EventRecorder(event_bus)


@pytest.fixture
def simulation(settings, event_bus, rng):
    return Simulation(settings=settings, event_bus=event_bus, rng=rng)


@pytest.fixture
def floating_simulation(tmp_path, event_bus, rng):
    """Simulation with negligible gravity so the bird hovers at mid-field."""
    settings = Settings(
        _env_file=None,
        data_dir=tmp_path,
        physics=PhysicsSettings(gravity=1e-6),
    )
    return Simulation(settings=settings, event_bus=event_bus, rng=rng)


def make_pipe(x, top_height=200.0, bottom_y=520.0, field_height=720.0, width=68.0):
    return Pipe(
        x=x,
        width=width,
        top_height=top_height,
        bottom_y=bottom_y,
        bottom_height=field_height - bottom_y,
    )


@pytest.fixture
def pipe_factory():
    return make_pipe
