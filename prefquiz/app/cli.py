from __future__ import annotations

"""Command-line entry point for the prefectural capital quiz."""

import argparse
import sys
from pathlib import Path
from typing import Any, Dict

from .. import __version__
from ..config.config import load_config, load_questions, validate_config
from ..errors import ExhaustedLoginAttempts, StorageFailure
from ..stats.report import export_ndjson, format_progress, progress_frame, summarize_progress
from ..storage.store import QuizStore, open_store
from ..util.randomness import make_rng
from .explain import trace as xtrace
from .session_manager import SessionManager
from .terminal import build_ui


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="prefquiz", description="Prefectural capital quiz trainer")
    p.add_argument("--version", action="store_true", help="Print version and exit")
    p.add_argument("--config", default=None, help="Path to YAML config")
    p.add_argument("--db", default=None, help="SQLite database path (overrides config)")
    p.add_argument("--explain", action="store_true", help="Trace milestones to stdout")
    sub = p.add_subparsers(dest="cmd")

    pp = sub.add_parser("play", help="Log in and answer questions (default)")
    pp.add_argument("--seed", type=int, default=None, help="Seed for option sampling and shuffling")

    sub.add_parser("init-db", help="Create tables and seed the prefecture questions")

    rp = sub.add_parser("progress", help="Show a user's answer history")
    rp.add_argument("--user", required=True)
    rp.add_argument("--export", default=None, help="Write the per-question report as NDJSON")
    return p


def _open(cfg: Dict[str, Any]) -> QuizStore:
    storage = cfg["storage"]
    store = open_store(storage["db_path"], timeout_s=storage["timeout_s"])
    try:
        store.init_schema()
    except StorageFailure:
        store.close()
        raise
    xtrace("store_opened", {"path": store.path})
    return store


def _cmd_init_db(cfg: Dict[str, Any], store: QuizStore) -> int:
    rows = load_questions(cfg["quiz"]["seed_file"])
    inserted = store.seed_questions(rows)
    print(f"Seeded {inserted} new question(s) into {store.path}.")
    return 0


def _cmd_progress(store: QuizStore, user_id: str, export: str | None) -> int:
    df = progress_frame(store, user_id)
    print(format_progress(user_id, summarize_progress(df)))
    if export:
        export_ndjson(df, Path(export))
        print(f"Wrote {len(df)} rows to {export}.")
    return 0


def _cmd_play(cfg: Dict[str, Any], store: QuizStore, seed: int | None) -> int:
    if seed is None:
        seed = cfg["quiz"].get("seed")
    sm = SessionManager(cfg, store, rng=make_rng(seed))
    ui = build_ui()
    print("Welcome to the prefectural capital quiz!")
    try:
        user = sm.login_or_register(ui)
    except ExhaustedLoginAttempts as e:
        print(f"{e}. Exiting.", file=sys.stderr)
        return 1
    except StorageFailure as e:
        print(f"ERROR: {e}. Exiting.", file=sys.stderr)
        return 1
    return sm.main_menu(user, ui)


def main(argv: list[str] | None = None) -> int:
    args = _build_parser().parse_args(argv)
    if args.version:
        print(f"prefquiz {__version__}")
        return 0
    if args.explain:
        from .explain import enable as explain_enable
        explain_enable(True)

    cfg = validate_config(load_config(args.config))
    if args.db:
        cfg["storage"]["db_path"] = args.db

    try:
        store = _open(cfg)
    except StorageFailure as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 1

    with store:
        try:
            if args.cmd == "init-db":
                return _cmd_init_db(cfg, store)
            if args.cmd == "progress":
                return _cmd_progress(store, args.user, args.export)
            return _cmd_play(cfg, store, getattr(args, "seed", None))
        except (EOFError, KeyboardInterrupt):
            print("\nInterrupted.", file=sys.stderr)
            return 1
        except StorageFailure as e:
            print(f"ERROR: {e}", file=sys.stderr)
            return 1


if __name__ == "__main__":
    raise SystemExit(main())
