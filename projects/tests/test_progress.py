import datetime as dt

from django.test import SimpleTestCase, TestCase

from projects.models import Project
from projects.services.progress import (
    bulletize,
    compute_variance,
    dedupe_history,
    history_rows,
    s_curve_points,
    save_snapshot,
    snapshot_initial,
    upsert_accomplishment,
)


class UpsertTests(SimpleTestCase):
    def test_same_date_overwrites_in_place(self):
        entries = [
            {"date": "2024-01-01", "percent": 10, "planned_percent": 10, "variance": 0},
            {"date": "2024-02-01", "percent": 20, "planned_percent": 25, "variance": -5},
        ]
        out = upsert_accomplishment(entries, {"date": "2024-01-01", "percent": 12.5, "planned_percent": 10})
        self.assertEqual(len(out), 2)
        self.assertEqual(out[0]["percent"], 12.5)
        self.assertEqual(out[0]["variance"], 2.5)
        self.assertEqual(out[1], entries[1])

    def test_new_date_appends(self):
        out = upsert_accomplishment([{"date": "2024-01-01", "percent": 10}], {"date": "2024-03-01", "percent": 30})
        self.assertEqual(len(out), 2)
        self.assertEqual(out[-1]["date"], dt.date(2024, 3, 1))

    def test_blank_date_defaults_to_today(self):
        out = upsert_accomplishment([], {"date": "", "percent": 5})
        self.assertIsInstance(out[0]["date"], dt.date)

    def test_variance_rounding(self):
        self.assertEqual(compute_variance(33.333, 10.111), 23.22)
        self.assertEqual(compute_variance(None, 5), -5.0)


class DisplayTests(SimpleTestCase):
    def test_bulletize_numbered(self):
        self.assertEqual(bulletize("1. Clearing 2. Excavation"), ["Clearing", "Excavation"])

    def test_bulletize_semicolons_and_newlines(self):
        self.assertEqual(bulletize("a; b\nc"), ["a", "b", "c"])

    def test_bulletize_single_part_unchanged(self):
        self.assertEqual(bulletize("Concrete pouring"), ["Concrete pouring"])
        self.assertEqual(bulletize(""), [])

    def test_dedupe_keeps_first_after_sort(self):
        a = {"date": "2024-01-01", "percent": 10, "activities": "x"}
        b = {"date": "2024-02-01", "percent": 20, "activities": "y"}
        dup = dict(a)
        out = dedupe_history([a, b, dup])
        self.assertEqual(out, [b, a])

    def test_history_row_issue_falls_back_to_project(self):
        rows = history_rows([{"date": "2024-01-01", "percent": 10, "issue": ""}], project_issues="ROW")
        self.assertEqual(rows[0].issue, "ROW")

    def test_s_curve_ascending(self):
        pts = s_curve_points(
            [
                {"date": "2024-02-01", "percent": 20, "planned_percent": 25},
                {"date": "2024-01-01", "percent": 10, "planned_percent": 10},
            ]
        )
        self.assertEqual([p["date"] for p in pts], ["2024-01-01", "2024-02-01"])
        self.assertEqual(pts[1], {"date": "2024-02-01", "planned": 25.0, "actual": 20.0})


class SaveSnapshotTests(TestCase):
    def setUp(self):
        self.project = Project.objects.create(name="Road", contractor="ACME")

    def test_save_snapshot_upserts_rows(self):
        save_snapshot(self.project, {"date": dt.date(2024, 1, 1), "percent": 10, "planned_percent": 15})
        save_snapshot(self.project, {"date": dt.date(2024, 2, 1), "percent": 20, "planned_percent": 20})
        save_snapshot(self.project, {"date": dt.date(2024, 1, 1), "percent": 11, "planned_percent": 15})

        rows = list(self.project.accomplishments.order_by("id"))
        self.assertEqual(len(rows), 2)
        self.assertEqual(rows[0].percent, 11)
        self.assertEqual(rows[0].variance, -4)

    def test_initial_from_last_stored_snapshot(self):
        save_snapshot(self.project, {"date": dt.date(2024, 2, 1), "percent": 20, "prev_percent": 10, "planned_percent": 22})
        save_snapshot(self.project, {"date": dt.date(2024, 1, 1), "percent": 5, "planned_percent": 6, "action": "Rain"})
        initial = snapshot_initial(self.project)
        self.assertEqual(initial["date"], dt.date(2024, 1, 1))
        self.assertEqual(initial["action"], "Rain")
        self.assertEqual(snapshot_initial(None)["percent"], 0)
