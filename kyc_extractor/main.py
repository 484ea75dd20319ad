"""Command-line entry point.

Usage:
    kyc-extract extract --type id_card --front front.jpg --back back.jpg
    kyc-extract extract --type passport --passport page.png --save
    kyc-extract extract --type id_card --front f.jpg --set phone_number=0717597203 \\
        --save --on-duplicate update
    kyc-extract records
"""

import argparse
import json
import sys
from pathlib import Path

from kyc_extractor.config.settings import Settings
from kyc_extractor.documents.image_loader import ImageLoader
from kyc_extractor.documents.models import DocumentImages, DocumentType
from kyc_extractor.exceptions import KycError
from kyc_extractor.logging.logger import Log
from kyc_extractor.records.diff import DiffRow
from kyc_extractor.records.factory import RecordStoreFactory
from kyc_extractor.records.fields import format_value
from kyc_extractor.records.models import DATA_FIELDS
from kyc_extractor.records.store_base import BaseRecordStore
from kyc_extractor.review.session import SaveStatus, build_session


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="kyc-extract",
        description="Extract identity fields from ID card and passport images.",
    )
    commands = parser.add_subparsers(dest="command", required=True)

    extract = commands.add_parser("extract", help="Extract fields from document images")
    extract.add_argument(
        "--type",
        dest="doc_type",
        required=True,
        choices=[t.value for t in DocumentType],
    )
    extract.add_argument("--front", type=Path, help="ID card front image")
    extract.add_argument("--back", type=Path, help="ID card back image")
    extract.add_argument("--passport", type=Path, help="Passport photo page image")
    extract.add_argument(
        "--set",
        dest="corrections",
        action="append",
        default=[],
        metavar="FIELD=VALUE",
        help="Correct a field before saving (repeatable)",
    )
    extract.add_argument("--save", action="store_true", help="Save the reviewed record")
    extract.add_argument(
        "--on-duplicate",
        choices=["update", "discard"],
        default="discard",
        help="What to do when a record with the same ID already exists",
    )

    commands.add_parser("records", help="List saved records, newest first")
    return parser


def run_extract(args: argparse.Namespace, store: BaseRecordStore, settings: Settings) -> int:
    loader = ImageLoader()
    images = DocumentImages(
        front=loader.load_optional(args.front),
        back=loader.load_optional(args.back),
        passport=loader.load_optional(args.passport),
    )
    session = build_session(settings, store=store)
    record = session.extract(DocumentType(args.doc_type), images)

    for correction in args.corrections:
        name, sep, value = correction.partition("=")
        name = name.strip()
        if not sep or name not in DATA_FIELDS:
            raise KycError(f"Invalid correction '{correction}', expected FIELD=VALUE")
        record = session.update_field(name, value.strip() or None)

    _print_json({name: getattr(record, name) for name in DATA_FIELDS})
    if not args.save:
        return 0

    outcome = session.save()
    if outcome.status is SaveStatus.COMMITTED and outcome.saved is not None:
        print(f"Saved record {outcome.saved.id}")
        return 0

    existing_id = outcome.existing.id if outcome.existing else "?"
    print(f"Duplicate of record {existing_id}:")
    _print_diff(outcome.diff)
    if args.on_duplicate == "update":
        saved = session.update_existing()
        print(f"Updated record {saved.id}")
    else:
        session.discard()
        print("Discarded new data; existing record unchanged")
    return 0


def run_records(store: BaseRecordStore) -> int:
    records = store.list_records()
    _print_json(
        [
            {"id": saved.id, "timestamp": saved.timestamp}
            | {name: getattr(saved.record, name) for name in DATA_FIELDS}
            for saved in records
        ]
    )
    return 0


def _print_json(data: object) -> None:
    print(json.dumps(data, ensure_ascii=False, indent=2))


def _print_diff(rows: list[DiffRow]) -> None:
    for row in rows:
        marker = "*" if row.changed else " "
        existing = format_value(row.field, row.existing_value) or "N/A"
        new = format_value(row.field, row.new_value) or "N/A"
        print(f"{marker} {row.label:<16} {existing}  ->  {new}")


def main(argv: list[str] | None = None) -> int:
    """Entry point: parse args -> build store -> run command."""
    args = build_parser().parse_args(argv)
    settings = Settings()
    Log.configure(settings.log_level)

    try:
        store = RecordStoreFactory.create(settings)
    except (KycError, ValueError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    try:
        if args.command == "records":
            return run_records(store)
        return run_extract(args, store, settings)
    except (KycError, ValueError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    finally:
        store.close()


if __name__ == "__main__":
    sys.exit(main())
