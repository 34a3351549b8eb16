import argparse
import json
from datetime import date
from pathlib import Path

from . import __version__
from .env import load_env, get_settings
from .logger import get_logger
from .database import init_database, get_session
from .schema import validate_citizen, validate_citizen_strict
from .normalize import milestone_age, next_milestone, to_citizen_values
from .registration import register_citizen, ENTRY_DECISIONS
from .duplicates import scan_duplicates, SCAN_MODES
from .resolution import apply_resolution, DECISIONS
from .verification import FORM_FIELDS
from pipelines.entity_resolution import FIELD_NAMES, FieldSelection, InvalidArgument, MalformedRecord
from storage.repositories.audit import AuditRepository
from storage.repositories.citizens import CitizenRepository


def _read_json(path_str: str) -> dict:
    path = Path(path_str)
    if not path.exists():
        raise SystemExit(f"Input file not found: {path}")
    with path.open("r", encoding="utf-8") as f:
        return json.load(f)


def _db_path(args: argparse.Namespace) -> Path:
    return Path(args.db) if args.db else get_settings()["db_path"]


def _open_session(args: argparse.Namespace):
    db_path = _db_path(args)
    if not db_path.exists():
        raise SystemExit(f"Database not found: {db_path}. Run 'eca init-db' first.")
    return get_session(db_path)


def _full_name(record) -> str:
    parts = [record.last_name, record.first_name, record.middle_name or ""]
    name = " ".join(p for p in parts if p.strip())
    if record.extension_name:
        name += f" ({record.extension_name})"
    return name


def cmd_init_db(args: argparse.Namespace) -> None:
    db_path = _db_path(args)
    init_database(db_path)
    print(f"Database ready: {db_path}")


def cmd_validate(args: argparse.Namespace) -> None:
    data = _read_json(args.input)
    if args.strict:
        _, errors = validate_citizen_strict(data)
    else:
        errors = validate_citizen(data)
    if errors:
        print("Invalid:")
        for e in errors:
            print(f" - {e}")
        raise SystemExit(2)
    print("Valid")


def cmd_register(args: argparse.Namespace) -> None:
    first = _read_json(args.first)
    second = _read_json(args.second)
    session = _open_session(args)
    try:
        outcome = register_citizen(session, first, second, encoded_by=args.encoded_by, decision=args.decision)
    finally:
        session.close()

    status = outcome["status"]
    print(f"Status: {status}")
    if status == "validation_error":
        for e in outcome["errors"]:
            print(f" - {e}")
        raise SystemExit(2)
    if status == "mismatch":
        print(f"Mismatched fields: {', '.join(outcome['labels'])}")
        raise SystemExit(2)
    if status == "duplicate":
        print(f"Possible duplicate of citizen {outcome['record_id']} (matched: {', '.join(outcome['matched_fields'])})")
        print("Re-run with --decision create_new or --decision update_existing.")
        raise SystemExit(3)
    print(f"Citizen: {outcome['record_id']}")


def cmd_duplicates(args: argparse.Namespace) -> None:
    settings = get_settings()
    min_confidence = args.min_confidence if args.min_confidence is not None else settings["min_confidence"]
    try:
        selection = FieldSelection().without(*(args.disable or []))
    except InvalidArgument as e:
        raise SystemExit(str(e))

    session = _open_session(args)
    try:
        matches = scan_duplicates(session, selection, min_confidence, mode=args.mode)
    except (InvalidArgument, MalformedRecord) as e:
        raise SystemExit(str(e))
    finally:
        session.close()

    if not matches:
        print("No possible duplicates found.")
        return
    shown = matches[: args.limit] if args.limit else matches
    print(f"Found {len(matches)} possible duplicates (min confidence {min_confidence:g}):\n")
    for m in shown:
        print(f"[{m.confidence_score:.1f}% {m.confidence_label}] "
              f"#{m.record_a.record_id} {_full_name(m.record_a)} ({m.record_a.birth_date.isoformat()})  <->  "
              f"#{m.record_b.record_id} {_full_name(m.record_b)} ({m.record_b.birth_date.isoformat()})")
        print(f"  Matched: {', '.join(m.matched_fields)}")


def cmd_resolve(args: argparse.Namespace) -> None:
    values = None
    if args.input:
        form = _read_json(args.input)
        values = to_citizen_values({f: form[f] for f in FORM_FIELDS if f in form})
    session = _open_session(args)
    try:
        outcome = apply_resolution(
            session,
            args.decision,
            target_id=args.target,
            values=values,
            source_id=args.source,
            staff_id=args.staff,
        )
    except ValueError as e:
        raise SystemExit(str(e))
    finally:
        session.close()
    print(f"Status: {outcome['status']}")
    print(f"Citizen: {outcome['record_id']}")


def cmd_list(args: argparse.Namespace) -> None:
    session = _open_session(args)
    try:
        repo = CitizenRepository(session)
        citizens = repo.list_by_status(args.status) if args.status else repo.list_all()
        if not citizens:
            print("No citizens in database.")
            return
        year = args.year or date.today().year
        print(f"Found {len(citizens)} citizens:\n")
        for c in citizens:
            print(f"ID: {c.id}")
            print(f"  Name: {_full_name(c)}")
            print(f"  Birth date: {c.birth_date.isoformat()}")
            print(f"  Status: {c.status}")
            age = milestone_age(c.birth_date, year)
            if age:
                print(f"  Milestone: {age} in {year}")
            else:
                upcoming = next_milestone(c.birth_date, year)
                if upcoming:
                    print(f"  Next milestone: {upcoming[0]} in {upcoming[1]}")
            print()
    finally:
        session.close()


def cmd_audit(args: argparse.Namespace) -> None:
    session = _open_session(args)
    try:
        repo = AuditRepository(session)
        entries = [repo.latest_for("citizens", args.record)] if args.record else repo.list_recent(args.limit)
        entries = [e for e in entries if e is not None]
        if not entries:
            print("No audit entries.")
            return
        for e in entries:
            kind = (e.details or {}).get("type", "")
            print(f"{e.created_at:%Y-%m-%d %H:%M:%S} | {e.action:<6} | {e.table_name}#{e.record_id} | {e.staff_id or '-'} | {kind}")
    finally:
        session.close()


def main(argv=None):
    load_env()
    try:
        settings = get_settings()
    except ValueError as e:
        raise SystemExit(str(e))
    get_logger(level=settings["log_level"], log_dir=settings["log_dir"])

    parser = argparse.ArgumentParser(prog="eca", description="ECA System: citizen registration and duplicate detection")
    parser.add_argument("--version", action="store_true", help="Show version")

    subparsers = parser.add_subparsers(dest="command")

    ini = subparsers.add_parser("init-db", help="Create the database tables")
    ini.add_argument("--db", help="Path to SQLite database (default: $ECA_DB_PATH or data/eca.db)")
    ini.set_defaults(func=cmd_init_db)

    val = subparsers.add_parser("validate", help="Validate a citizen form JSON")
    val.add_argument("--input", required=True, help="Path to citizen form JSON")
    val.add_argument("--strict", action="store_true", help="Also require status and full address")
    val.set_defaults(func=cmd_validate)

    reg = subparsers.add_parser("register", help="Register a citizen from two matching entries")
    reg.add_argument("--first", required=True, help="Path to first entry JSON")
    reg.add_argument("--second", required=True, help="Path to second entry JSON")
    reg.add_argument("--encoded-by", help="Encoder name recorded on the citizen")
    reg.add_argument("--decision", choices=ENTRY_DECISIONS, help="Answer to a flagged duplicate")
    reg.add_argument("--db", help="Path to SQLite database")
    reg.set_defaults(func=cmd_register)

    dup = subparsers.add_parser("duplicates", help="Scan stored citizens for possible duplicates")
    dup.add_argument("--min-confidence", type=float, help="Minimum confidence 0-100 (default: $ECA_MIN_CONFIDENCE or 50)")
    dup.add_argument("--disable", action="append", choices=FIELD_NAMES, help="Field to leave out of comparison (repeatable)")
    dup.add_argument("--mode", choices=SCAN_MODES, default="all", help="all pairs, or encoded vs existing")
    dup.add_argument("--limit", type=int, help="Show at most this many matches")
    dup.add_argument("--db", help="Path to SQLite database")
    dup.set_defaults(func=cmd_duplicates)

    res = subparsers.add_parser("resolve", help="Apply a decision to a flagged duplicate")
    res.add_argument("--decision", required=True, choices=DECISIONS)
    res.add_argument("--target", type=int, help="Existing citizen id to update")
    res.add_argument("--source", type=int, help="Citizen id whose identity fields overwrite the target")
    res.add_argument("--input", help="Citizen form JSON with values to write")
    res.add_argument("--staff", help="Operator recorded in the audit log")
    res.add_argument("--db", help="Path to SQLite database")
    res.set_defaults(func=cmd_resolve)

    lst = subparsers.add_parser("list", help="List stored citizens")
    lst.add_argument("--status", help="Only citizens with this status")
    lst.add_argument("--year", type=int, help="Calendar year for milestone ages (default: current year)")
    lst.add_argument("--db", help="Path to SQLite database")
    lst.set_defaults(func=cmd_list)

    aud = subparsers.add_parser("audit", help="Show audit trail entries")
    aud.add_argument("--record", help="Latest entry for this citizen id")
    aud.add_argument("--limit", type=int, default=20, help="Number of recent entries (default 20)")
    aud.add_argument("--db", help="Path to SQLite database")
    aud.set_defaults(func=cmd_audit)

    args = parser.parse_args(argv)

    if args.version:
        print(__version__)
        return

    if hasattr(args, "func"):
        args.func(args)
        return

    parser.print_help()


if __name__ == "__main__":
    main()
