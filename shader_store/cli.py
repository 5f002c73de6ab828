"""
Shader store admin CLI (SQLite)

Commands:
  init                Create the database file and schema if missing
  seed                Add the built-in default presets that are not there yet
  list-presets        Print all presets, most recently updated first
  list-projects       Print all projects, most recently updated first
  show-preset ID      Print one preset
  show-project ID     Print one project
  delete-preset ID    Delete a preset (missing ids are fine)
  delete-project ID   Delete a project (missing ids are fine)

Output is JSON on stdout.
"""
from __future__ import annotations

import argparse
import json
import sys

from .db import Store, read_config_yaml
from .errors import StoreError
from .logs import configure_logging
from .services import preset_svc, project_svc
from .services.seed_svc import seed_default_presets


def _print(obj):
    print(json.dumps(obj, ensure_ascii=False, indent=2))


def cmd_init(store: Store, args):
    _print({"message": "ok", "db_path": store.path})


def cmd_seed(store: Store, args):
    _print({"message": "ok", "ids": seed_default_presets(store)})


def cmd_list_presets(store: Store, args):
    _print([p.model_dump() for p in preset_svc.list_presets(store)])


def cmd_list_projects(store: Store, args):
    _print([p.model_dump() for p in project_svc.list_projects(store)])


def cmd_show_preset(store: Store, args):
    p = preset_svc.get_preset(store, args.id)
    _print(None if p is None else p.model_dump())


def cmd_show_project(store: Store, args):
    p = project_svc.get_project(store, args.id)
    _print(None if p is None else p.model_dump())


def cmd_delete_preset(store: Store, args):
    preset_svc.delete_preset(store, args.id)
    _print({"message": "ok"})


def cmd_delete_project(store: Store, args):
    project_svc.delete_project(store, args.id)
    _print({"message": "ok"})


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="shader-store", description="Shader preset/project store (SQLite)")
    parser.add_argument("--db", default=None, help="database file (default: resolved from env/config)")
    parser.add_argument("--config", default=None, help="config.yaml path")
    parser.add_argument("--log-level", default=None)
    sub = parser.add_subparsers()

    p_init = sub.add_parser("init", help="create db and schema")
    p_init.set_defaults(func=cmd_init)

    p_seed = sub.add_parser("seed", help="add default presets")
    p_seed.set_defaults(func=cmd_seed)

    p_lp = sub.add_parser("list-presets", help="list presets")
    p_lp.set_defaults(func=cmd_list_presets)

    p_lj = sub.add_parser("list-projects", help="list projects")
    p_lj.set_defaults(func=cmd_list_projects)

    for name, func in (
        ("show-preset", cmd_show_preset),
        ("show-project", cmd_show_project),
        ("delete-preset", cmd_delete_preset),
        ("delete-project", cmd_delete_project),
    ):
        p = sub.add_parser(name)
        p.add_argument("id", type=int)
        p.set_defaults(func=func)

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if not hasattr(args, "func"):
        parser.print_help()
        return 0

    cfg = read_config_yaml(args.config)
    configure_logging(args.log_level or cfg.get("log_level", "WARNING"))

    try:
        store = Store(args.db, config_path=args.config)
    except StoreError as e:
        print(f"error: {e}", file=sys.stderr)
        return 1
    with store:
        try:
            args.func(store, args)
        except StoreError as e:
            print(f"error: {e}", file=sys.stderr)
            return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
