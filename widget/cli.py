"""CLI entry point for the weather widget."""

import argparse
import logging
import sqlite3

from widget.config.loader import get_config_value, load_config, set_config_value
from widget.config.schema import WidgetConfig
from widget.models.common import Status, Unit
from widget.pipeline.widget import WeatherWidget, build_widget
from widget.render.formatters import (
    format_card_text,
    format_favorites_text,
    format_state_json,
)
from widget.storage.database import connect, run_migrations

DEFAULT_DB = "data/widget.db"

SHELL_HELP = """\
Type a city name and press Enter to search.
  :locate          weather at your current location
  :unit NAME       switch to metric or imperial
  :favs            list favorites
  :fav N           show favorite number N
  :fav add NAME    save a favorite
  :fav rm N        remove favorite number N
  :quit            leave the shell"""


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="weatherwidget",
        description="Current weather lookup with saved favorites",
    )
    parser.add_argument("--config", default=None, help="Config YAML path")
    parser.add_argument("--db", default=DEFAULT_DB, help="SQLite preferences DB path")
    parser.add_argument(
        "--json", action="store_true", help="Print widget state as JSON"
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Log at INFO level"
    )

    sub = parser.add_subparsers(dest="command")

    search_p = sub.add_parser("search", help="Look up weather by city name")
    search_p.add_argument("city", nargs="+", help="City name")

    coords_p = sub.add_parser("coords", help="Look up weather by coordinates")
    coords_p.add_argument("latitude", type=float)
    coords_p.add_argument("longitude", type=float)

    sub.add_parser("locate", help="Look up weather at your current location")
    sub.add_parser("last", help="Show the last successfully viewed city")
    sub.add_parser("status", help="Show stored preferences")

    unit_p = sub.add_parser("unit", help="Show or change the display unit")
    unit_p.add_argument("unit", nargs="?", choices=[u.value for u in Unit])

    # favorites list / add / remove / open
    fav_p = sub.add_parser("favorites", help="Favorite cities")
    fav_sub = fav_p.add_subparsers(dest="fav_command")
    fav_sub.add_parser("list", help="List favorites")
    add_p = fav_sub.add_parser("add", help="Save a favorite")
    add_p.add_argument("name", nargs="+")
    rm_p = fav_sub.add_parser("remove", help="Remove a favorite by position")
    rm_p.add_argument("index", type=int)
    open_p = fav_sub.add_parser("open", help="Show weather for a favorite")
    open_p.add_argument("index", type=int)

    # config show / config set
    config_p = sub.add_parser("config", help="Config operations")
    config_sub = config_p.add_subparsers(dest="config_command")
    config_sub.add_parser("show", help="Display current config")
    set_p = config_sub.add_parser("set", help="Set a config value")
    set_p.add_argument("keyvalue", help="key=value to set")

    sub.add_parser("shell", help="Interactive search prompt")
    sub.add_parser("serve", help="Run the JSON dashboard API")

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 1

    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    config = load_config(args.config)

    if args.command == "config":
        return _cmd_config(config, args)

    conn = connect(args.db)
    try:
        run_migrations(conn)
        return _dispatch(config, conn, args)
    finally:
        conn.close()


def _dispatch(config: WidgetConfig, conn: sqlite3.Connection, args) -> int:
    widget = build_widget(config, conn)

    if args.command == "search":
        widget.search(" ".join(args.city))
        return _report(widget, args.json)
    elif args.command == "coords":
        widget.fetch_by_coords(args.latitude, args.longitude)
        return _report(widget, args.json)
    elif args.command == "locate":
        widget.locate()
        return _report(widget, args.json)
    elif args.command == "last":
        return _cmd_last(widget, args)
    elif args.command == "status":
        return _cmd_status(widget)
    elif args.command == "unit":
        return _cmd_unit(widget, args)
    elif args.command == "favorites":
        return _cmd_favorites(widget, args)
    elif args.command == "shell":
        return _cmd_shell(widget)
    elif args.command == "serve":
        return _cmd_serve(config, widget)
    return 1


def _report(widget: WeatherWidget, as_json: bool) -> int:
    state = widget.state
    if as_json:
        print(format_state_json(state))
    elif state.status == Status.ERROR:
        print(f"Error: {state.error}")
    elif state.card is not None:
        print(format_card_text(state.card))
    return 1 if state.status == Status.ERROR else 0


def _cmd_last(widget: WeatherWidget, args) -> int:
    if widget.preferences.get_last_city() is None:
        print("No city viewed yet")
        return 0
    widget.on_load()
    return _report(widget, args.json)


def _cmd_status(widget: WeatherWidget) -> int:
    prefs = widget.preferences
    print(f"Unit: {prefs.get_unit().value}")
    print(f"Last city: {prefs.get_last_city() or 'none'}")
    print(f"Favorites: {len(prefs.get_favorites())}")
    print(format_favorites_text(prefs.get_favorites()))
    return 0


def _cmd_unit(widget: WeatherWidget, args) -> int:
    if args.unit is None:
        print(f"Unit: {widget.state.unit.value}")
        return 0
    widget.change_unit(Unit(args.unit))
    print(f"Unit: {widget.state.unit.value}")
    return 0


def _cmd_favorites(widget: WeatherWidget, args) -> int:
    try:
        if args.fav_command == "add":
            favorites = widget.add_favorite(" ".join(args.name))
        elif args.fav_command == "remove":
            favorites = widget.remove_favorite(args.index)
        elif args.fav_command == "open":
            widget.select_favorite(args.index)
            return _report(widget, args.json)
        else:
            favorites = widget.state.favorites
    except IndexError as e:
        print(f"Error: {e}")
        return 1
    print(format_favorites_text(favorites))
    return 0


def _cmd_config(config: WidgetConfig, args) -> int:
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
            new_config = set_config_value(config, key.strip(), value.strip())
            print(f"Set {key} = {get_config_value(new_config, key.strip())}")
            return 0
        except Exception as e:
            print(f"Error: {e}")
            return 1
    else:
        print("Use: config show | config set key=value")
        return 1


def _cmd_shell(widget: WeatherWidget) -> int:
    print(SHELL_HELP)
    if widget.on_load() is not None:
        _report(widget, False)
    while True:
        try:
            line = input("weather> ")
        except (EOFError, KeyboardInterrupt):
            print()
            return 0
        line = line.strip()
        if line in (":quit", ":q"):
            return 0
        try:
            if _shell_command(widget, line):
                _report(widget, False)
        except (IndexError, ValueError) as e:
            print(f"Error: {e}")


def _shell_command(widget: WeatherWidget, line: str) -> bool:
    """Run one shell line. Returns True when the card or error should be shown."""
    if not line.startswith(":"):
        widget.search(line)
        return True

    parts = line[1:].split(maxsplit=2)
    command = parts[0] if parts else ""
    if command == "locate":
        widget.locate()
        return True
    if command == "unit" and len(parts) > 1:
        widget.change_unit(Unit(parts[1]))
        print(f"Unit: {widget.state.unit.value}")
        return widget.state.current_city is not None
    if command == "favs":
        print(format_favorites_text(widget.state.favorites))
        return False
    if command == "fav" and len(parts) == 3 and parts[1] == "add":
        print(format_favorites_text(widget.add_favorite(parts[2])))
        return False
    if command == "fav" and len(parts) == 3 and parts[1] == "rm":
        print(format_favorites_text(widget.remove_favorite(int(parts[2]))))
        return False
    if command == "fav" and len(parts) == 2:
        widget.select_favorite(int(parts[1]))
        return True
    print(SHELL_HELP)
    return False


def _cmd_serve(config: WidgetConfig, widget: WeatherWidget) -> int:
    import uvicorn

    from widget.dashboard import create_app

    widget.on_load()
    uvicorn.run(
        create_app(widget), host=config.dashboard.host, port=config.dashboard.port
    )
    return 0
