import argparse
import json
import logging
import sys
from pathlib import Path

from chosen_arrows.adapters.auth.crypto import LocalIdentityProvider
from chosen_arrows.adapters.sqlite.migrator import SQLiteMigrator
from chosen_arrows.adapters.sqlite.tables import SQLiteTables
from chosen_arrows.api.deps import Settings
from chosen_arrows.components.content import seed_content
from chosen_arrows.components.settings import seed_default_settings
from chosen_arrows.core.ports.db import BackendError
from chosen_arrows.rules.loader import load_rules
from chosen_arrows.rules.models import Rules

logger = logging.getLogger("cli")


def get_rules(settings: Settings) -> Rules:
    if not settings.rules_path.exists():
        logger.error("Rules file %s not found.", settings.rules_path)
        sys.exit(1)
    return load_rules(settings.rules_path)


def handle_migrate(settings: Settings) -> None:
    settings.data_dir.mkdir(parents=True, exist_ok=True)
    applied = SQLiteMigrator(settings.db_path).run_migrations()
    print(f"Applied {len(applied)} migration(s).")


def handle_create_admin(db: SQLiteTables, rules: Rules, args: argparse.Namespace) -> None:
    identity = LocalIdentityProvider(db, ttl_minutes=rules.auth.session_ttl_minutes)
    try:
        with db.transaction():
            user = identity.register(args.email, args.password)
            db.insert(
                "admin_users",
                [{"id": user.id, "role": args.role, "full_name": args.name}],
            )
    except BackendError as e:
        logger.error("Could not create admin %s: %s", args.email, e.message)
        sys.exit(1)
    print(f"Admin created: {user.email} ({user.id})")


def handle_seed_settings(db: SQLiteTables) -> None:
    keys = seed_default_settings(db)
    print(f"Seeded settings: {', '.join(keys)}")


def handle_seed_content(db: SQLiteTables, rules: Rules, args: argparse.Namespace) -> None:
    path = Path(args.file)
    try:
        documents = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        logger.error("Could not read %s: %s", path, e)
        sys.exit(1)
    if not isinstance(documents, dict):
        logger.error("%s must hold an object of {section_key: {language: document}}", path)
        sys.exit(1)

    skipped = seed_content(
        db,
        documents,
        languages=rules.i18n.supported_languages,
        section_keys=rules.content.section_keys,
    )
    for label, errors in skipped.items():
        for field, messages in errors.items():
            logger.warning("Skipped %s: %s: %s", label, field, "; ".join(messages))
    print(f"Seeded content from {path} ({len(skipped)} skipped).")


def main(argv: list[str] | None = None) -> None:
    logging.basicConfig(level=logging.INFO)

    parser = argparse.ArgumentParser(description="Chosen Arrows Foundation CLI")
    subparsers = parser.add_subparsers(dest="command", required=True)

    # migrate
    subparsers.add_parser("migrate", help="Apply pending database migrations")

    # create-admin
    admin_parser = subparsers.add_parser("create-admin", help="Create an admin login")
    admin_parser.add_argument("email")
    admin_parser.add_argument("password")
    admin_parser.add_argument("--role", default="admin", help="Admin role (default: admin)")
    admin_parser.add_argument("--name", default=None, help="Full name shown in the dashboard")

    # seed-settings
    subparsers.add_parser("seed-settings", help="Write the default site settings")

    # seed-content
    content_parser = subparsers.add_parser("seed-content", help="Load section documents from JSON")
    content_parser.add_argument("file", help="JSON file of {section_key: {language: document}}")

    args = parser.parse_args(argv)

    settings = Settings()
    if args.command == "migrate":
        handle_migrate(settings)
        return

    rules = get_rules(settings)
    db = SQLiteTables(settings.db_path)
    if args.command == "create-admin":
        handle_create_admin(db, rules, args)
    elif args.command == "seed-settings":
        handle_seed_settings(db)
    elif args.command == "seed-content":
        handle_seed_content(db, rules, args)


if __name__ == "__main__":
    main()
