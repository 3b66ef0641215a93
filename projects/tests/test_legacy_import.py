import base64
import io
import json
import shutil
import tempfile
from pathlib import Path
from unittest import mock

from django.core.management import CommandError, call_command
from django.test import TestCase, override_settings
from PIL import Image

from deepwells.models import Deepwell
from projects.models import Project
from projects.services.legacy_import import LegacyImportError, import_documents, load_json_dump
from reforestation.models import ReforestationActivity

_MEDIA = tempfile.mkdtemp(prefix="dashboard_test_media_")


def _png_data_url(size=(30, 20)) -> str:
    buf = io.BytesIO()
    Image.new("RGB", size, (10, 200, 10)).save(buf, format="PNG")
    return "data:image/png;base64," + base64.b64encode(buf.getvalue()).decode("ascii")


def _dump():
    return {
        "projects": [
            {
                "id": "p-abc",
                "name": "Bridge Rehab",
                "implementingAgency": "DPWH",
                "contractor": "ACME",
                "contractAmount": "1,500,000.50",
                "originalDuration": "120",
                "timeExtension": 15,
                "originalCompletion": "2030-01-01",
                "issues": "Right of way",
                "accomplishments": [
                    {"date": "2024-01-01", "percent": 10, "plannedPercent": 12, "prevPercent": 0},
                    {"date": "2024-02-01", "percent": 25, "plannedPercent": 20, "variance": 5, "action": "Expedite"},
                    {"percent": 99},
                ],
                "progressBilling": [
                    {"date": "2024-02-15", "amount": 250000, "desc": "1st billing"},
                    {"date": "", "amount": 10},
                ],
                "photos": [_png_data_url(), "data:image/png;base64,not-an-image"],
                "history": [{"email": "old@example.com", "timestamp": "2024-01-01T00:00:00Z", "action": "create"}],
            },
            {
                "id": "p-curve",
                "name": "Seawall",
                "contractor": "BuildCo",
                "sCurveDataUrl": _png_data_url((50, 50)),
            },
        ],
        "deepwells": {
            "dw-1": {
                "name": "DW Alpha",
                "provider": "mwci",
                "ratedYield": "12.5",
                "months": [{"month": "2024-01", "prod": 100}, {"month": "2024-02", "prod": 50}, {"month": "", "prod": 7}],
            }
        },
        "reforestations": [
            {
                "id": "r-1",
                "activityName": "Mangrove Planting",
                "activityStatus": "Completed",
                "treesPlanted": "1500",
                "remarksReforestation": "Good survival",
                "kmzName": "site.kmz",
                "kmzDataUrl": "data:application/vnd.google-earth.kmz;base64," + base64.b64encode(b"PK\x03\x04").decode(),
            }
        ],
    }


@override_settings(MEDIA_ROOT=_MEDIA)
class LegacyImportTests(TestCase):
    @classmethod
    def tearDownClass(cls):
        super().tearDownClass()
        shutil.rmtree(_MEDIA, ignore_errors=True)

    def test_import_maps_all_collections(self):
        summary = import_documents(_dump())

        project = Project.objects.get(legacy_id="p-abc")
        self.assertEqual(str(project.contract_amount), "1500000.50")
        self.assertEqual(project.original_duration, 120)
        self.assertEqual(project.accomplishments.count(), 2)
        second = project.accomplishments.get(date="2024-02-01")
        self.assertEqual(second.variance, 5)
        self.assertEqual(project.accomplishments.get(date="2024-01-01").variance, -2)
        self.assertEqual(project.billing_entries.count(), 1)
        self.assertEqual(project.photos.count(), 1)
        self.assertEqual(project.history[0]["email"], "old@example.com")
        self.assertEqual(summary.collections["projects"].skipped_photos, 1)

        self.assertEqual(Project.objects.get(legacy_id="p-curve").photos.count(), 1)

        deepwell = Deepwell.objects.get(legacy_id="dw-1")
        self.assertEqual(deepwell.provider, "MWCI")
        self.assertEqual(deepwell.total_production, 150.0)
        self.assertEqual(deepwell.average_production, 75.0)
        self.assertEqual(deepwell.months.count(), 2)

        activity = ReforestationActivity.objects.get(legacy_id="r-1")
        self.assertEqual(activity.status, "Completed")
        self.assertEqual(activity.trees_planted, 1500)
        self.assertEqual(activity.remarks, "Good survival")
        self.assertEqual(activity.kmz_name, "site.kmz")
        self.assertTrue(activity.kmz.name.endswith(".kmz"))

    def test_reimport_is_idempotent(self):
        import_documents(_dump())
        summary = import_documents(_dump())

        self.assertEqual(Project.objects.count(), 2)
        self.assertEqual(Project.objects.get(legacy_id="p-abc").accomplishments.count(), 2)
        self.assertEqual(summary.collections["projects"].updated, 2)
        self.assertEqual(summary.collections["projects"].created, 0)

    def test_only_limits_collections(self):
        import_documents(_dump(), only=["deepwells"])
        self.assertFalse(Project.objects.exists())
        self.assertTrue(Deepwell.objects.exists())

        with self.assertRaises(LegacyImportError):
            import_documents(_dump(), only=["users"])

    def test_mapping_and_list_collections_both_import(self):
        source = {
            "deepwells": {"dw-map": {"name": "Well A", "provider": "MWSI"}},
            "reforestations": [{"id": "r-list", "activityName": "Mangrove planting"}],
        }
        summary = import_documents(source, only=["deepwells", "reforestations"])

        self.assertEqual(Deepwell.objects.get(legacy_id="dw-map").name, "Well A")
        self.assertTrue(ReforestationActivity.objects.filter(legacy_id="r-list").exists())
        self.assertEqual(summary.collections["deepwells"].created, 1)

    def test_document_without_id_rejected(self):
        tmp = Path(tempfile.mkdtemp())
        self.addCleanup(shutil.rmtree, tmp, ignore_errors=True)
        path = tmp / "dump.json"
        path.write_text(json.dumps({"projects": [{"name": "No id"}]}), encoding="utf-8")
        with self.assertRaises(LegacyImportError):
            load_json_dump(path)

    def test_command_with_json_dump(self):
        tmp = Path(tempfile.mkdtemp())
        self.addCleanup(shutil.rmtree, tmp, ignore_errors=True)
        path = tmp / "dump.json"
        path.write_text(json.dumps(_dump()), encoding="utf-8")

        out = io.StringIO()
        call_command("import_legacy", str(path), stdout=out)
        self.assertIn("projects: 2 created", out.getvalue())
        self.assertEqual(ReforestationActivity.objects.count(), 1)

    def test_command_reads_firestore_when_asked(self):
        with mock.patch(
            "projects.management.commands.import_legacy.load_firestore",
            return_value={"projects": [], "deepwells": [], "reforestations": []},
        ) as loader:
            call_command("import_legacy", "--firestore-project", "demo", stdout=io.StringIO())
        loader.assert_called_once_with("demo")

    def test_command_needs_exactly_one_source(self):
        with self.assertRaises(CommandError):
            call_command("import_legacy", stdout=io.StringIO())
