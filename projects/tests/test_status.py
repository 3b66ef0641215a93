import datetime as dt

from django.test import SimpleTestCase

from projects.services.status import derive_status, latest_accomplishment, status_matches

TODAY = dt.date(2024, 6, 15)


def acc(date, percent, planned=0):
    return {"date": date, "percent": percent, "planned_percent": planned}


class DeriveStatusTests(SimpleTestCase):
    def test_completed_at_hundred_percent(self):
        status = derive_status([acc("2024-06-01", 100, 100)], "2024-01-01", None, today=TODAY)
        self.assertEqual(status, "Completed")

    def test_behind_plan_is_delayed(self):
        status = derive_status([acc("2024-06-01", 40, 55)], "2025-01-01", None, today=TODAY)
        self.assertEqual(status, "Delayed")

    def test_past_revised_completion_is_delayed(self):
        status = derive_status([acc("2024-06-01", 60, 50)], "2025-01-01", "2024-06-14", today=TODAY)
        self.assertEqual(status, "Delayed")

    def test_revised_completion_takes_precedence(self):
        status = derive_status([], "2024-01-01", "2024-12-31", today=TODAY)
        self.assertEqual(status, "On-going")

    def test_completion_today_is_not_delayed(self):
        self.assertEqual(derive_status([], "2024-06-15", None, today=TODAY), "On-going")

    def test_missing_dates_never_delay(self):
        self.assertEqual(derive_status([], None, "", today=TODAY), "On-going")

    def test_latest_by_date_not_list_position(self):
        entries = [acc("2024-05-01", 100), acc("2024-04-01", 30, 50)]
        self.assertEqual(derive_status(entries, None, None, today=TODAY), "Completed")

    def test_tie_keeps_first_in_list_order(self):
        first = acc("2024-05-01", 10, 50)
        second = acc("2024-05-01", 100)
        self.assertIs(latest_accomplishment([first, second]), first)
        self.assertEqual(derive_status([first, second], None, None, today=TODAY), "Delayed")


class StatusFilterTests(SimpleTestCase):
    def test_ongoing_filter_includes_delayed(self):
        self.assertTrue(status_matches("Delayed", "On-going"))
        self.assertTrue(status_matches("On-going", "On-going"))
        self.assertFalse(status_matches("Completed", "On-going"))

    def test_exact_filters(self):
        self.assertTrue(status_matches("Delayed", "Delayed"))
        self.assertFalse(status_matches("On-going", "Delayed"))
        self.assertTrue(status_matches("Completed", ""))
