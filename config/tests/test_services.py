from io import StringIO

from django.core.management import CommandError, call_command
from django.test import TestCase, override_settings

from config.models import SiteSetting
from config.services import get_setting, set_setting, signups_enabled


class GetSettingTests(TestCase):
    @override_settings(DOCX_PDF_ENDPOINT="http://gotenberg:3000/forms/libreoffice/convert")
    def test_falls_back_to_django_setting(self):
        self.assertEqual(
            get_setting("pdf_endpoint"),
            "http://gotenberg:3000/forms/libreoffice/convert",
        )

    @override_settings(DOCX_PDF_ENDPOINT="http://from-env/")
    def test_row_wins_over_django_setting(self):
        set_setting("pdf_endpoint", "http://from-db/")
        self.assertEqual(get_setting("pdf_endpoint"), "http://from-db/")

    @override_settings(DOCX_PDF_ENDPOINT="")
    def test_blank_setting_uses_default(self):
        self.assertEqual(get_setting("pdf_endpoint", "fallback"), "fallback")
        self.assertEqual(get_setting("pdf_endpoint"), "")

    def test_unknown_key_returns_given_default(self):
        self.assertEqual(get_setting("no_such_key", 7), 7)
        self.assertIsNone(get_setting("no_such_key"))

    @override_settings(DASHBOARD_SIGNUPS_ENABLED=True)
    def test_signups_can_be_disabled_by_row(self):
        self.assertTrue(signups_enabled())
        set_setting("signups_enabled", False)
        self.assertFalse(signups_enabled())


class SeedSiteSettingsCommandTests(TestCase):
    def test_seed_is_idempotent(self):
        call_command("seed_site_settings", stdout=StringIO())
        first = SiteSetting.objects.count()
        call_command("seed_site_settings", stdout=StringIO())
        self.assertEqual(SiteSetting.objects.count(), first)
        self.assertTrue(SiteSetting.objects.filter(key="signups_enabled").exists())

    def test_set_overrides_one_key(self):
        call_command(
            "seed_site_settings",
            "--set", "signups_enabled=false",
            "--set", "pdf_endpoint=http://conv/pdf",
            stdout=StringIO(),
        )
        self.assertFalse(signups_enabled())
        self.assertEqual(get_setting("pdf_endpoint"), "http://conv/pdf")
        self.assertEqual(SiteSetting.objects.get(key="pdf_endpoint").note, "seed_site_settings --set")

    def test_set_rejects_unknown_key(self):
        with self.assertRaises(CommandError):
            call_command("seed_site_settings", "--set", "nope=1", stdout=StringIO())
