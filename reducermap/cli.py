"""
reducermap CLI - Command-line interface for the built-in maps.

Usage:
    reducermap maps                          List built-in maps
    reducermap run <map> <action-json>...    Dispatch actions, print final state
    reducermap serve [--host H] [--port P]   Serve the REST API
"""

import argparse
import json
import sys

from . import log


def main(argv=None):
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="reducermap - Action-map state reducer",
        prog="reducermap",
    )
    parser.add_argument("--log-level", default=None, help="Override LOG_LEVEL")
    subparsers = parser.add_subparsers(dest="command", help="Commands")

    subparsers.add_parser("maps", help="List built-in maps")

    run_parser = subparsers.add_parser("run", help="Dispatch actions on a fresh store")
    run_parser.add_argument("map_name", help="Name of a built-in map")
    run_parser.add_argument(
        "actions",
        nargs="*",
        help='Actions as JSON objects, e.g. \'{"type": "increment", "by": 2}\'',
    )

    serve_parser = subparsers.add_parser("serve", help="Serve the REST API")
    serve_parser.add_argument("--host", default="127.0.0.1")
    serve_parser.add_argument("--port", type=int, default=8000)

    args = parser.parse_args(argv)
    log.setup(level=args.log_level)

    if args.command == "maps":
        return cmd_maps(args)
    elif args.command == "run":
        return cmd_run(args)
    elif args.command == "serve":
        return cmd_serve(args)
    parser.print_help()
    return 1


def cmd_maps(args):
    """List built-in maps."""
    from .maps import list_maps

    for definition in list_maps():
        action_map = definition.build()
        print(f"{definition.name}: {definition.description}")
        print(f"  actions: {', '.join(action_map.action_types)}")
    return 0


def cmd_run(args):
    """Run actions through a fresh store and print the final state."""
    from .engine_core.errors import ReducerMapError
    from .maps import get_map

    definition = get_map(args.map_name)
    if definition is None:
        print(f"Error: unknown map: {args.map_name}", file=sys.stderr)
        return 1

    actions = []
    for raw in args.actions:
        try:
            action = json.loads(raw)
        except json.JSONDecodeError as e:
            print(f"Error: invalid action JSON {raw!r}: {e}", file=sys.stderr)
            return 1
        if not isinstance(action, dict):
            print(f"Error: action must be a JSON object: {raw!r}", file=sys.stderr)
            return 1
        actions.append(action)

    store = definition.create_store()
    for action in actions:
        try:
            store.dispatch(action)
        except ReducerMapError as e:
            print(f"Error: {e}", file=sys.stderr)
            return 1
        except (KeyError, TypeError, ValueError, RuntimeError) as e:
            print(f"Error: handler rejected action: {e!r}", file=sys.stderr)
            return 1

    print(json.dumps(store.state, indent=2, sort_keys=True))
    return 0


def cmd_serve(args):
    """Serve the REST API with uvicorn."""
    import uvicorn

    uvicorn.run("reducermap.api.app:app", host=args.host, port=args.port)
    return 0


if __name__ == "__main__":
    sys.exit(main())
