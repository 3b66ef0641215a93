# -*- coding: utf-8 -*-
# projects/management/commands/import_legacy.py
"""
Import projects, deepwells and reforestation activities from the old
document store.

- Source is a JSON dump ({"projects": [...], "deepwells": [...], ...}) or a
  Firestore project (needs the "firestore" extra and Google credentials).
- Safe to re-run: documents are matched on their original id.
- Users and messages are not imported; accounts must sign up again.

Usage
  python manage.py import_legacy dump.json
  python manage.py import_legacy --firestore-project my-gcp-project
  python manage.py import_legacy dump.json --only projects --only deepwells
"""

from __future__ import annotations

from django.core.management.base import BaseCommand, CommandError

from projects.services.legacy_import import (
    COLLECTIONS,
    LegacyImportError,
    import_documents,
    load_firestore,
    load_json_dump,
)


class Command(BaseCommand):
    help = "Import legacy documents (JSON dump or Firestore) into the dashboard database."

    def add_arguments(self, parser):
        parser.add_argument("dump", nargs="?", default="", help="Path to a JSON dump.")
        parser.add_argument("--firestore-project", default="", help="Read directly from this Firestore project.")
        parser.add_argument(
            "--only",
            action="append",
            choices=COLLECTIONS,
            help="Limit to a collection (repeatable).",
        )

    def handle(self, *args, **options):
        dump = options["dump"]
        firestore_project = options["firestore_project"]
        if bool(dump) == bool(firestore_project):
            raise CommandError("Give either a JSON dump path or --firestore-project, not both.")

        try:
            source = load_firestore(firestore_project) if firestore_project else load_json_dump(dump)
            summary = import_documents(source, only=options["only"])
        except LegacyImportError as exc:
            raise CommandError(str(exc)) from exc

        for name in options["only"] or COLLECTIONS:
            self.stdout.write(self.style.SUCCESS(summary.line(name)))
