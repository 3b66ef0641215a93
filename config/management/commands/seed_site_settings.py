# -*- coding: utf-8 -*-
# config/management/commands/seed_site_settings.py
"""
Create SiteSetting rows for every known key, using the current effective value.

Idempotent: existing rows are left untouched unless --reset is passed.
--set overrides a single key; the value is parsed as JSON, else kept as text.

Usage
  python manage.py seed_site_settings
  python manage.py seed_site_settings --reset
  python manage.py seed_site_settings --set signups_enabled=false --set pdf_endpoint=http://gotenberg:3000/forms/libreoffice/convert
"""

from __future__ import annotations

import json

from django.core.management.base import BaseCommand, CommandError
from django.db import transaction

from config.models import SiteSetting
from config.services import SETTING_DEFAULTS, get_setting, set_setting


def _parse_assignment(raw: str):
    key, sep, value = raw.partition("=")
    key = key.strip()
    if not sep or not key:
        raise CommandError(f"Expected KEY=VALUE, got {raw!r}")
    if key not in SETTING_DEFAULTS:
        raise CommandError(f"Unknown setting {key!r}. Known: {', '.join(SETTING_DEFAULTS)}")
    try:
        return key, json.loads(value)
    except ValueError:
        return key, value


class Command(BaseCommand):
    help = "Seed SiteSetting rows for the known dashboard settings."

    def add_arguments(self, parser):
        parser.add_argument(
            "--reset",
            action="store_true",
            help="Delete existing rows first so environment values are re-captured.",
        )
        parser.add_argument(
            "--set",
            action="append",
            default=[],
            metavar="KEY=VALUE",
            help="Store a value for one key (repeatable).",
        )

    @transaction.atomic
    def handle(self, *args, **options):
        assignments = [_parse_assignment(raw) for raw in options["set"]]

        if options["reset"]:
            SiteSetting.objects.filter(key__in=SETTING_DEFAULTS.keys()).delete()

        created = 0
        for key in SETTING_DEFAULTS:
            _, was_created = SiteSetting.objects.get_or_create(
                key=key,
                defaults={"value": get_setting(key)},
            )
            created += int(was_created)

        for key, value in assignments:
            set_setting(key, value, note="seed_site_settings --set")
            self.stdout.write(f"{key} = {value!r}")

        self.stdout.write(self.style.SUCCESS(f"Seeded {created} setting(s)."))
