"""Weather & News interactive entry point.

Usage:
    python run_app.py

Loads config.yaml and .env, builds a PipelineEngine, then reads zipcodes
(or "City, ST") from stdin until "quit"/"exit". The engine's HTTP session is
released on every exit path.
"""

import sys
from dotenv import load_dotenv

load_dotenv()  # must precede weather_news imports so env vars are available at module load

from weather_news.core.config import build_settings, load_config  # noqa: E402
from weather_news.core.errors import ConfigError  # noqa: E402
from weather_news.core.logger import logger  # noqa: E402
from weather_news.pipeline.engine import PipelineEngine  # noqa: E402
from weather_news.pipeline.report import format_result  # noqa: E402
from weather_news.pipeline.validator import is_valid  # noqa: E402

WELCOME = """\
╔═══════════════════════════════════════════════════════════════╗
║                      Weather & News App                       ║
║                                                               ║
║  Current weather conditions and local news for any US zipcode ║
║  Enter 12345, 12345-6789 or "City, ST"                        ║
║  Type 'quit' or 'exit' to close the application               ║
╚═══════════════════════════════════════════════════════════════╝"""


def handle_input(engine: PipelineEngine, text: str) -> str:
    """Route one line of input to the engine and return what to print."""
    if "," in text:
        city, _, state = text.partition(",")
        return format_result(engine.run_city(city, state))
    if not is_valid(text):
        return (
            "Invalid zipcode format. Please enter a 5-digit US zipcode "
            "(e.g., 12345 or 12345-6789)."
        )
    return format_result(engine.run(text))


def loop(engine: PipelineEngine) -> None:
    print(WELCOME)
    while True:
        try:
            text = input("\nEnter a US zipcode (or 'quit' to exit): ").strip()
        except EOFError:
            break
        if text.lower() in ("quit", "exit"):
            print("Thank you for using Weather and News App!")
            break
        if not text:
            print("Please enter a valid zipcode.")
            continue
        try:
            print(handle_input(engine, text))
        except Exception as exc:
            logger.error(f"run_app: unexpected error for {text!r}: {exc}", exc_info=True)
            print(f"An unexpected error occurred: {exc}")


def main() -> int:
    """Run the app. Returns 0 on normal exit, 1 on startup failure."""
    try:
        settings = build_settings(load_config())
    except (FileNotFoundError, ValueError, ConfigError) as exc:
        logger.error(f"run_app: failed to load configuration: {exc}")
        print(f"ERROR: {exc}", file=sys.stderr)
        print("Please check your configuration and try again.", file=sys.stderr)
        return 1

    with PipelineEngine(settings) as engine:
        logger.info("run_app: Weather and News App initialized")
        try:
            loop(engine)
        except KeyboardInterrupt:
            print()
    return 0


if __name__ == "__main__":
    sys.exit(main())
