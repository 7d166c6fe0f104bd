"""
Flappy Burst Audio Engine - short synthesized beeps.

Sounds are generated once at init from simple oscillators and played
through pygame.mixer in response to simulation events.
"""

import array
import logging
import math
from typing import Callable, Dict, List, Optional

import pygame

from flappyburst.config.settings import AudioSettings
from flappyburst.core.events import Event, EventBus, EventType

logger = logging.getLogger(__name__)

SAMPLE_RATE = 44100


def square(t: float, freq: float) -> float:
    """Square wave oscillator."""
    return 1 if (t * freq) % 1 < 0.5 else -1


def triangle(t: float, freq: float) -> float:
    """Triangle wave oscillator."""
    p = (t * freq) % 1
    return 4 * abs(p - 0.5) - 1


def sine(t: float, freq: float) -> float:
    """Sine wave oscillator."""
    return math.sin(2 * math.pi * freq * t)


def saw(t: float, freq: float) -> float:
    """Sawtooth wave."""
    return 2 * ((t * freq) % 1) - 1


WAVES: Dict[str, Callable[[float, float], float]] = {
    "sine": sine,
    "square": square,
    "triangle": triangle,
    "sawtooth": saw,
}

# name -> (frequency Hz, duration s, waveform, volume)
BEEPS: Dict[str, tuple] = {
    "flap": (880, 0.06, "triangle", 0.05),
    "score": (520, 0.06, "square", 0.05),
    "start": (700, 0.08, "square", 0.05),
    "game_over": (160, 0.2, "sawtooth", 0.06),
}

EVENT_SOUNDS: Dict[EventType, str] = {
    EventType.FLAP: "flap",
    EventType.SCORE: "score",
    EventType.GAME_START: "start",
    EventType.GAME_OVER: "game_over",
}


def render_beep(freq: float, duration: float, wave: str = "sine", volume: float = 0.04) -> array.array:
    """Render a mono 16-bit beep with a short linear fade-out."""
    osc = WAVES[wave]
    count = int(SAMPLE_RATE * duration)
    fade = max(1, int(count * 0.2))
    samples = array.array('h')
    for i in range(count):
        t = i / SAMPLE_RATE
        env = min(1.0, (count - i) / fade)
        # Beep volumes are tiny (~0.05); scale so they are audible at 16 bits
        val = osc(t, freq) * volume * 10 * env
        samples.append(int(max(-1.0, min(1.0, val)) * 32767))
    return samples


class AudioEngine:
    """Plays feedback sounds for flaps, scores, starts and game overs."""

    def __init__(self, settings: Optional[AudioSettings] = None):
        self.settings = settings if settings is not None else AudioSettings()
        self._initialized = False
        self._sounds: Dict[str, pygame.mixer.Sound] = {}
        self._muted = self.settings.muted
        self._unsubscribers: List[Callable[[], None]] = []

    @property
    def is_initialized(self) -> bool:
        return self._initialized

    @property
    def muted(self) -> bool:
        return self._muted

    def init(self) -> bool:
        """Initialize the mixer and generate all sounds."""
        if not self.settings.enabled:
            logger.info("Audio disabled by settings")
            return False

        try:
            pygame.mixer.pre_init(SAMPLE_RATE, -16, 2, 512)
            pygame.mixer.init()
        except Exception as e:
            logger.error(f"Failed to initialize audio: {e}")
            return False

        self._initialized = True
        self._generate_all_sounds()
        logger.info(f"Audio engine initialized with {len(self._sounds)} sounds")
        return True

    def _create_sound(self, samples: array.array) -> pygame.mixer.Sound:
        """Create a pygame Sound from mono samples (auto-converted to stereo)."""
        stereo = array.array('h')
        for s in samples:
            stereo.append(s)
            stereo.append(s)
        sound = pygame.mixer.Sound(buffer=stereo)
        sound.set_volume(self.settings.volume)
        return sound

    def _generate_all_sounds(self) -> None:
        for name, (freq, duration, wave, volume) in BEEPS.items():
            self._sounds[name] = self._create_sound(render_beep(freq, duration, wave, volume))

    def play(self, name: str) -> None:
        """Play a sound by name. Silently skipped when muted or uninitialized."""
        if self._muted or not self._initialized:
            return

        sound = self._sounds.get(name)
        if sound is None:
            logger.warning(f"Unknown sound: {name}")
            return
        sound.play()

    def toggle_mute(self) -> bool:
        """Flip mute. Returns the new mute state."""
        self._muted = not self._muted
        logger.info(f"Audio {'muted' if self._muted else 'unmuted'}")
        return self._muted

    def handle_event(self, event: Event) -> None:
        name = EVENT_SOUNDS.get(event.type)
        if name:
            self.play(name)

    def attach(self, event_bus: EventBus) -> None:
        """Subscribe to the simulation events that have a sound."""
        for event_type in EVENT_SOUNDS:
            self._unsubscribers.append(event_bus.subscribe(event_type, self.handle_event))

    def cleanup(self) -> None:
        for unsubscribe in self._unsubscribers:
            unsubscribe()
        self._unsubscribers.clear()

        if self._initialized:
            pygame.mixer.quit()
            self._initialized = False
