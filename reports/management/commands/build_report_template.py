# -*- coding: utf-8 -*-
# reports/management/commands/build_report_template.py
"""
Write a starter site inspection template (every tag, a row loop and three
photo placeholders).

Usage
  python manage.py build_report_template
  python manage.py build_report_template --output /srv/templates/report.docx --force
"""

from __future__ import annotations

from pathlib import Path

from django.conf import settings
from django.core.management.base import BaseCommand, CommandError

from reports.services.starter_template import write_starter_template


class Command(BaseCommand):
    help = "Create a starter DOCX template for project reports."

    def add_arguments(self, parser):
        parser.add_argument(
            "--output",
            default="",
            help="Defaults to <BASE_DIR>/assets/site_inspection_template.docx.",
        )
        parser.add_argument("--force", action="store_true", help="Overwrite an existing file.")

    def handle(self, *args, **options):
        output = Path(options["output"] or settings.BASE_DIR / "assets" / "site_inspection_template.docx")
        if output.exists() and not options["force"]:
            raise CommandError(f"{output} already exists (use --force to overwrite).")

        output.parent.mkdir(parents=True, exist_ok=True)
        write_starter_template(output)
        self.stdout.write(self.style.SUCCESS(f"Wrote report template: {output}"))
