"""
Main entry point for Flappy Burst.

Loads settings and the persisted best score, wires audio and
persistence to the simulation's event bus and runs the game window.
"""

import asyncio
import logging
import sys

from flappyburst.config.settings import Settings, get_settings
from flappyburst.core.events import EventBus


def setup_logging(debug: bool = False) -> None:
    """Configure logging."""
    level = logging.DEBUG if debug else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S"
    )


async def run_game(settings: Settings) -> None:
    """Build the game from settings and run it until the window closes."""
    from flappyburst.audio.engine import AudioEngine
    from flappyburst.game.simulation import Simulation
    from flappyburst.simulator.window import SimulatorWindow
    from flappyburst.storage.best_score import BestScoreStore

    logger = logging.getLogger(__name__)

    event_bus = EventBus()

    store = BestScoreStore(settings.best_score_path)
    store.attach(event_bus)

    simulation = Simulation(
        settings=settings,
        event_bus=event_bus,
        best_score=store.load(),
    )
    if settings.seed is not None:
        logger.info(f"Using fixed pipe seed: {settings.seed}")

    audio = AudioEngine(settings.audio)
    if audio.init():
        audio.attach(event_bus)

    window = SimulatorWindow(simulation=simulation, config=settings.display, audio=audio)
    try:
        await window.run()
    finally:
        audio.cleanup()


def main() -> None:
    """Main entry point."""
    from dotenv import load_dotenv

    # Load environment variables
    load_dotenv()

    settings = get_settings()
    setup_logging(settings.debug)

    logger = logging.getLogger(__name__)
    logger.info("Flappy Burst starting...")

    try:
        asyncio.run(run_game(settings))
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
    except Exception as e:
        logger.exception(f"Fatal error: {e}")
        sys.exit(1)

    logger.info("Flappy Burst stopped")


if __name__ == "__main__":
    main()
