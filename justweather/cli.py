"""CLI entry point for the weather client."""

import argparse
import logging

from justweather.config.loader import (
    config_hash,
    get_config_value,
    load_config,
    save_config,
    set_config_value,
)
from justweather.config.schema import AppConfig
from justweather.reporting.formatters import (
    format_current_weather_json,
    format_current_weather_text,
    format_health_text,
    format_hourly_forecasts_text,
    format_precipitation_text,
    format_saved_locations_text,
)
from justweather.reporting.health_checker import HealthChecker
from justweather.repository.weather_repository import create_weather_repository
from justweather.storage.database import open_database

DEFAULT_CONFIG = "config/justweather.yaml"

logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="justweather",
        description="Current weather and forecasts for saved locations",
    )
    parser.add_argument(
        "--config", default=DEFAULT_CONFIG, help="Config YAML path"
    )
    parser.add_argument("--db", default=None, help="SQLite DB path (overrides config)")
    parser.add_argument("--verbose", action="store_true", help="Debug logging")

    sub = parser.add_subparsers(dest="command")

    # weather / hourly / precipitation
    weather_p = sub.add_parser("weather", help="Current weather at coordinates")
    _add_coordinates(weather_p)
    weather_p.add_argument("--json", action="store_true", help="Print JSON")
    _add_coordinates(sub.add_parser("hourly", help="Hourly forecast at coordinates"))
    _add_coordinates(
        sub.add_parser("precipitation", help="Precipitation probability at coordinates")
    )

    # saved list / add / remove
    saved_p = sub.add_parser("saved", help="Saved location operations")
    saved_sub = saved_p.add_subparsers(dest="saved_command")
    saved_sub.add_parser("list", help="List saved locations")
    add_p = saved_sub.add_parser("add", help="Save a location")
    add_p.add_argument("name")
    _add_coordinates(add_p)
    remove_p = saved_sub.add_parser("remove", help="Remove a saved location")
    remove_p.add_argument("location_id")

    # health
    sub.add_parser("health", help="Run health checks")

    # config show / config set
    config_p = sub.add_parser("config", help="Config operations")
    config_sub = config_p.add_subparsers(dest="config_command")
    config_sub.add_parser("show", help="Display current config")
    set_p = config_sub.add_parser("set", help="Set a config value")
    set_p.add_argument("keyvalue", help="key=value to set")

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 1

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    config = load_config(args.config)
    logger.debug("Loaded config %s (hash %s)", args.config, config_hash(config))
    if args.db is not None:
        config = config.model_copy(
            update={"storage": config.storage.model_copy(update={"db_path": args.db})}
        )

    if args.command == "weather":
        return _cmd_weather(config, args)
    elif args.command == "hourly":
        return _cmd_hourly(config, args)
    elif args.command == "precipitation":
        return _cmd_precipitation(config, args)
    elif args.command == "saved":
        return _cmd_saved(config, args)
    elif args.command == "health":
        return _cmd_health(config)
    elif args.command == "config":
        return _cmd_config(config, args)
    else:
        parser.print_help()
        return 1


def _add_coordinates(p: argparse.ArgumentParser) -> None:
    p.add_argument("latitude")
    p.add_argument("longitude")


def _cmd_weather(config: AppConfig, args) -> int:
    conn = open_database(config.storage.db_path)
    try:
        repo = create_weather_repository(config, conn)
        result = repo.fetch_weather_for_location(args.latitude, args.longitude)
    finally:
        conn.close()

    details = result.get_or_none()
    if details is None:
        print(f"Error: {result.error}")
        return 1
    if args.json:
        print(format_current_weather_json(details))
    else:
        print(format_current_weather_text(details))
    return 0


def _cmd_hourly(config: AppConfig, args) -> int:
    conn = open_database(config.storage.db_path)
    try:
        repo = create_weather_repository(config, conn)
        result = repo.fetch_hourly_forecasts(args.latitude, args.longitude)
    finally:
        conn.close()

    if not result.ok:
        print(f"Error: {result.error}")
        return 1
    print(format_hourly_forecasts_text(result.unwrap()))
    return 0


def _cmd_precipitation(config: AppConfig, args) -> int:
    conn = open_database(config.storage.db_path)
    try:
        repo = create_weather_repository(config, conn)
        result = repo.fetch_precipitation_probabilities(args.latitude, args.longitude)
    finally:
        conn.close()

    if not result.ok:
        print(f"Error: {result.error}")
        return 1
    print(format_precipitation_text(result.unwrap()))
    return 0


def _cmd_saved(config: AppConfig, args) -> int:
    if args.saved_command not in ("list", "add", "remove"):
        print("Use: saved list | saved add NAME LAT LON | saved remove ID")
        return 1

    conn = open_database(config.storage.db_path)
    try:
        repo = create_weather_repository(config, conn)
        if args.saved_command == "list":
            print(format_saved_locations_text(repo.get_saved_locations()))
            return 0
        elif args.saved_command == "add":
            location = repo.save_weather_location(
                args.name, args.latitude, args.longitude
            )
            print(f"Saved {location.name_of_location} as {location.id}")
            return 0
        else:
            if not repo.delete_weather_location(args.location_id):
                print(f"Error: no saved location with id {args.location_id}")
                return 1
            print(f"Removed {args.location_id}")
            return 0
    finally:
        conn.close()


def _cmd_health(config: AppConfig) -> int:
    conn = open_database(config.storage.db_path)
    try:
        status = HealthChecker(conn, config).check()
    finally:
        conn.close()
    print(format_health_text(status))
    return 0 if status.healthy else 1


def _cmd_config(config: AppConfig, args) -> int:
    if args.config_command == "show":
        print(config.model_dump_json(indent=2))
        return 0
    elif args.config_command == "set":
        kv = args.keyvalue
        if "=" not in kv:
            print("Error: use key=value format")
            return 1
        key, value = kv.split("=", 1)
        try:
            new_config = set_config_value(
                load_config(args.config), key.strip(), value.strip()
            )
        except (KeyError, ValueError) as e:
            print(f"Error: {e}")
            return 1
        save_config(new_config, args.config)
        print(f"Set {key.strip()} = {get_config_value(new_config, key.strip())}")
        return 0
    else:
        print("Use: config show | config set key=value")
        return 1
