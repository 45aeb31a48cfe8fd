#!/usr/bin/env python3
"""
contactdb - Contact/account import and geolocation service
===========================================================

    python main.py serve                      run the JSON API
    python main.py seed                       load reference data (types, countries)
    python main.py import ACCOUNTS.csv [--contacts F] [--mappings F] [--limit N]

See config.py for all environment-variable tunables.
"""

import argparse
import logging
import sys

from flask import Flask, jsonify

import config
from db import init_db, seed_reference_data, session_scope
from api import api_bp
from import_engine import ContactImportError, run_import


def create_app(db_url: str | None = None) -> Flask:
    """Flask application factory."""

    app = Flask(__name__)
    app.secret_key = config.SECRET

    # ── Initialise database ─────────────────────────────────────────
    init_db(db_url or config.DB_URL)

    # ── Register blueprints ─────────────────────────────────────────
    app.register_blueprint(api_bp)

    @app.route("/health")
    def health():
        return jsonify({"ok": True})

    # ── Error handlers ──────────────────────────────────────────────
    @app.errorhandler(404)
    def _404(e):
        return jsonify({"error": "not found"}), 404

    @app.errorhandler(500)
    def _500(e):
        return jsonify({"error": "internal server error"}), 500

    return app


# ── Commands ───────────────────────────────────────────────────────────

def cmd_serve(args) -> int:
    app = create_app()
    print(f"\n  http://{config.HOST}:{config.PORT}")
    app.run(host=config.HOST, port=config.PORT, debug=config.DEBUG)
    return 0


def cmd_seed(args) -> int:
    init_db(config.DB_URL)
    with session_scope() as session:
        stats = seed_reference_data(session, args.reference_data)
    print("  Seeded: " + ", ".join(f"{k}={v}" for k, v in stats.items()))
    return 0


def cmd_import(args) -> int:
    init_db(config.DB_URL)
    try:
        report = run_import(
            args.accounts, args.contacts, args.mappings, limit=args.limit,
        )
    except ContactImportError as exc:
        print(f"FATAL: {exc}", file=sys.stderr)
        return 1

    print(f"  Done: {report.imported} imported, {report.skipped} skipped, "
          f"{report.failed} failed / {report.total_rows} rows")
    if report.errors:
        print("  First errors (max 10):")
        for err in report.errors[:10]:
            print(f"    {err['file']} row {err['row']}: {err['reason']}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="contactdb", description=__doc__.splitlines()[1])
    parser.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    serve = sub.add_parser("serve", help="run the HTTP API")
    serve.set_defaults(func=cmd_serve)

    seed = sub.add_parser("seed", help="load reference data from YAML")
    seed.add_argument("--reference-data", default=config.REFERENCE_DATA_PATH,
                      help="YAML file (default: %(default)s)")
    seed.set_defaults(func=cmd_seed)

    imp = sub.add_parser("import", help="import accounts/contacts from CSV")
    imp.add_argument("accounts", help="semicolon-separated accounts CSV")
    imp.add_argument("--contacts", help="semicolon-separated contacts CSV")
    imp.add_argument("--mappings", help="JSON mappings file")
    imp.add_argument("--limit", type=int, default=config.IMPORT_LIMIT,
                     help="process at most N rows per file")
    imp.set_defaults(func=cmd_import)

    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)-7s %(name)s: %(message)s",
    )
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
