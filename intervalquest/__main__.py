"""Run an interval workout from the terminal: python -m intervalquest."""

from __future__ import annotations

import argparse
import logging
import signal
import sys

from PyQt6.QtCore import QCoreApplication

from .presets.repository import (
    DatabasePresetRepository,
    JsonPresetRepository,
    PresetRepository,
)
from .render import render
from .settings import Settings, SettingsStore, load_settings
from .timer.engine import TimerEngine


def setup_logging(level: int = logging.INFO) -> logging.Logger:
    """Configure logging for the application."""
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    return logging.getLogger("intervalquest")


EXIT_INTERRUPTED = 130


def setup_signal_handlers(app: QCoreApplication, engine: TimerEngine) -> None:
    """Stop the workout and leave the event loop on SIGINT or SIGTERM."""
    def signal_handler(signum, frame) -> None:
        logging.getLogger("intervalquest").info(
            "%s received, stopping workout", signal.Signals(signum).name
        )
        engine.reset()
        app.exit(EXIT_INTERRUPTED)

    signal.signal(signal.SIGINT, signal_handler)
    signal.signal(signal.SIGTERM, signal_handler)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Interval training timer")
    parser.add_argument("--work", type=int, help="Work duration in seconds")
    parser.add_argument("--rest", type=int, help="Rest duration in seconds")
    parser.add_argument("--rounds", type=int, help="Number of rounds")
    parser.add_argument(
        "--exercise", action="append", default=None,
        help="Exercise name; repeat to cycle through several",
    )
    parser.add_argument("--preset", help="Load a saved or built-in preset by name")
    parser.add_argument("--list-presets", action="store_true", help="List presets and exit")
    parser.add_argument("--no-sound", action="store_true", help="Disable cue tones")
    parser.add_argument("--no-speech", action="store_true", help="Disable spoken announcements")
    parser.add_argument("--verbose", action="store_true", help="Debug logging")
    return parser.parse_args(argv)


def build_repository(settings: Settings) -> PresetRepository:
    if settings.preset_backend == "database":
        from .database.db import configure_engine, init_db

        if settings.database_url:
            configure_engine(settings.database_url)
        init_db()
        return DatabasePresetRepository()
    return JsonPresetRepository()


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    logger = setup_logging(logging.DEBUG if args.verbose else logging.INFO)

    settings = load_settings()
    repository = build_repository(settings)

    if args.list_presets:
        for preset in repository.list():
            print(f"{preset.name}: {preset.summary}")
        return 0

    app = QCoreApplication(sys.argv[:1])
    app.setApplicationName("IntervalQuest")
    app.setOrganizationName("IntervalQuest")

    engine = TimerEngine(app)
    store = SettingsStore(engine, settings)

    if args.preset:
        preset = repository.get(args.preset)
        if preset is None:
            logger.error("Unknown preset: %s", args.preset)
            return 1
        store.apply_preset(preset)
    store.update(work_duration=args.work, rest_duration=args.rest, rounds=args.rounds)
    if args.exercise:
        store.set_exercises(args.exercise)

    from .audio.cues import CueDirector
    from .audio.sounds import SoundManager
    from .audio.speech import Speaker

    tones = None
    if settings.sound_enabled and not args.no_sound:
        tones = SoundManager(app)
        tones.set_volume(settings.sound_volume)
    speaker = None
    if settings.speech_enabled and not args.no_speech:
        speaker = Speaker(app, rate=settings.speech_rate)

    director = CueDirector(app, tones=tones, speaker=speaker)
    director.attach(engine)
    director.toast.connect(lambda title, text: print(f"{title} {text}"))

    engine.ticked.connect(lambda _remaining: print(render(engine.snapshot()).as_line()))
    engine.workout_finished.connect(lambda _event: app.quit())

    print("IntervalQuest ready!")
    print(render(engine.snapshot()).as_line())
    setup_signal_handlers(app, engine)
    engine.start()
    return app.exec()


if __name__ == "__main__":
    sys.exit(main())
