"""Entry point for cuaca."""

import logging
import sys

from cuaca.config import API_KEY_ENV, load_config


def run_fetch_test(config):
    """Fetch and print current weather for every location once."""
    from cuaca.api import OpenWeatherClient
    from cuaca.models import LOCATIONS, Ready
    from cuaca.renderer import view_lines

    client = OpenWeatherClient(config.api)
    for location in LOCATIONS:
        print(f"\n=== {location.name} ({location.latitude}, {location.longitude}) ===\n")
        snapshot = client.fetch_snapshot(location)
        for line in view_lines(Ready(snapshot))[1:]:
            print(f"  {line}")


def run_render_test(config):
    """Render a sample snapshot to assets/test_output.png."""
    from cuaca.renderer import run_render_test as _run_render_test

    output_path = _run_render_test(config)
    print(f"Rendered test output to: {output_path}")


def run_app(config):
    """Run the full Pygame display application."""
    from cuaca.app import WeatherBoardApp

    app = WeatherBoardApp(config)
    app.run()


def main():
    """CLI entry point for the cuaca weather board.

    Loads configuration (defaults -> YAML -> environment -> CLI args), sets
    up logging to stderr, then dispatches on CLI flags:
      --fetch-test:  print live weather for every location and exit
      --render-test: save a sample render to assets/ and exit
      (default):     run the rotating weather board
    """
    config = load_config()

    # Log to stderr so stdout is clean for --fetch-test output.
    level = logging.DEBUG if config.debug else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        stream=sys.stderr,
    )

    logger = logging.getLogger(__name__)
    logger.debug("Config loaded: rotation=%.1fs, debug=%s", config.rotation.interval_seconds, config.debug)
    if not config.api.api_key and not config.render_test:
        logger.warning("No API key configured (set %s); requests will fail", API_KEY_ENV)

    try:
        if config.fetch_test:
            logger.info("Running fetch test")
            run_fetch_test(config)
        elif config.render_test:
            logger.info("Running render test")
            run_render_test(config)
        else:
            logger.info("Starting display application")
            run_app(config)
    except KeyboardInterrupt:
        print("\nShutting down.")
        sys.exit(0)
    except Exception as e:
        logger.error("Unexpected error: %s", e, exc_info=True)
        sys.exit(1)


if __name__ == "__main__":
    main()
