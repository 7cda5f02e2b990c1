# main.py
import argparse
import cProfile
import logging
from datetime import datetime, timezone
from typing import List, Optional

from config import config, ConfigurationError # Use the global config instance
from coordinates import CoordinateTransform
from descriptors import BodyDescriptorRegistry
from ephemeris import BodyIdentity
from planet_source import PlanetSource
from preferences import PreferenceStore
from resources import StringResources
from sky_math import EphemerisError, ra_dec_from_cartesian


def parse_time_ms(text: str) -> int:
    """Parses an ISO-8601 timestamp into milliseconds since the Unix epoch. Naive times are UTC."""
    moment = datetime.fromisoformat(text)
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return int(round(moment.timestamp() * 1000))


def format_time_ms(time_ms: int) -> str:
    return datetime.fromtimestamp(time_ms / 1000.0, tz=timezone.utc).strftime('%Y-%m-%d %H:%M UTC')


def build_planet_source(body: BodyIdentity, preferences: PreferenceStore, locale: str = 'en') -> PlanetSource:
    """Wires a planet source from the global configuration."""
    registry = BodyDescriptorRegistry.from_config(config)
    transform = CoordinateTransform.from_config(config)
    return PlanetSource(body, registry, transform, StringResources(locale), preferences)


def run(body: BodyIdentity, start_ms: int, ticks: int, step_ms: int,
        preferences: PreferenceStore, locale: str = 'en') -> List[str]:
    """
    Drives one planet source through `ticks` simulated ticks and logs each one.

    Returns:
        One summary line per tick, also written to the log.
    """
    source = build_planet_source(body, preferences, locale)
    collection = source.initialize(start_ms)
    ra_dec = ra_dec_from_cartesian(source.get_search_location())
    logging.info(
        f"{source.get_names()[0]} initialized at {format_time_ms(start_ms)}: "
        f"RA={ra_dec.ra_deg:.3f} deg, Dec={ra_dec.dec_deg:.3f} deg, {collection!r}, image={source.image_id}"
    )

    lines = []
    for tick in range(1, ticks + 1):
        time_ms = start_ms + tick * step_ms
        changes = source.update(time_ms)
        ra_dec = ra_dec_from_cartesian(source.get_search_location())
        signals = ', '.join(sorted(signal.value for signal in changes)) or 'none'
        line = (f"tick {tick:4d} {format_time_ms(time_ms)}  RA={ra_dec.ra_deg:8.3f}  "
                f"Dec={ra_dec.dec_deg:8.3f}  image={source.image_id}  changes={signals}")
        logging.info(line)
        lines.append(line)
    return lines


def main(argv: Optional[List[str]] = None) -> int:
    """
    Command line entry point.

    Example:
        python main.py --body moon --start 2024-01-01T00:00 --ticks 48 --step-minutes 30
    """
    parser = argparse.ArgumentParser(description="Track one solar-system body across simulated ticks.")
    parser.add_argument("--body", default="Moon",
                        help=f"Body to track: one of {', '.join(b.value for b in BodyIdentity)}.")
    parser.add_argument("--start", default=None,
                        help="Start time as ISO-8601 (UTC if no offset). Defaults to now.")
    parser.add_argument("--ticks", type=int, default=24, help="Number of update ticks to run.")
    parser.add_argument("--step-minutes", type=float, default=60.0, help="Simulated minutes between ticks.")
    parser.add_argument("--no-images", action="store_true",
                        help="Use point markers instead of planetary images (the Sun and Moon keep images).")
    parser.add_argument("--prefs", default=None, help="JSON file of boolean preferences.")
    parser.add_argument("--locale", default="en", help="Locale for display names (en, de, fr, es).")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging of orbital mechanics.")
    parser.add_argument(
        "--profile",
        action="store_true",
        help="Enable profiling. Statistics will be saved to 'planet_source_profile.prof'."
    )
    args = parser.parse_args(argv)

    if args.debug:
        logging.getLogger().setLevel(logging.DEBUG)
        config.Debug.ORBITAL_MECHANICS = True

    profiler = None
    if args.profile:
        profiler = cProfile.Profile()
        profiler.enable()
        logging.info("cProfile profiling enabled. Output will be saved to planet_source_profile.prof upon completion.")

    try:
        body = BodyIdentity.from_name(args.body)
        preferences = PreferenceStore.from_json_file(args.prefs) if args.prefs else PreferenceStore()
        if args.no_images:
            preferences.set_boolean(config.Display.SHOW_PLANETARY_IMAGES_KEY, False)
        if args.start:
            start_ms = parse_time_ms(args.start)
        else:
            start_ms = int(datetime.now(tz=timezone.utc).timestamp() * 1000)
        step_ms = int(args.step_minutes * 60 * 1000)

        run(body, start_ms, args.ticks, step_ms, preferences, args.locale)
    except ConfigurationError as e_config:
        logging.critical(f"Planet source could not be set up due to a ConfigurationError: {e_config}", exc_info=True)
        return 2
    except EphemerisError as e_ephemeris:
        logging.critical(f"Ephemeris computation failed: {e_ephemeris}", exc_info=True)
        return 1
    except ValueError as e_value:
        logging.critical(f"Invalid argument: {e_value}")
        return 2
    finally:
        if profiler:
            profiler.disable()
            stats_file = "planet_source_profile.prof"
            try:
                profiler.dump_stats(stats_file)
                logging.info(f"Profiling data successfully saved to {stats_file}")
            except OSError as e_profile_dump:
                logging.error(f"Failed to save profiling data to {stats_file}: {e_profile_dump}", exc_info=True)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
