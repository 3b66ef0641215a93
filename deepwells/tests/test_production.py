from django.contrib.auth import get_user_model
from django.test import SimpleTestCase, TestCase, override_settings
from django.urls import reverse

from deepwells.models import Deepwell, MonthlyProduction
from deepwells.services.production import (
    clean_month_rows,
    month_label,
    monthly_chart,
    production_stats,
)


class ProductionMathTests(SimpleTestCase):
    def test_stats_rounded(self):
        self.assertEqual(production_stats([10, 20, 5.5]), (35.5, 11.83))

    def test_stats_empty(self):
        self.assertEqual(production_stats([]), (0.0, 0.0))

    def test_blank_and_zero_rows_dropped(self):
        rows = [
            {"month": "2024-01", "production": 10},
            {"month": "", "production": 5},
            {"month": "2024-02", "production": 0},
            {"month": "2024-03", "production": None},
            {"month": "2024-04", "production": 7, "DELETE": True},
            {},
        ]
        self.assertEqual(clean_month_rows(rows), [{"month": "2024-01", "production": 10.0}])

    def test_month_label(self):
        self.assertEqual(month_label("2024-01"), "Jan 2024")
        self.assertEqual(month_label("2023-12"), "Dec 2023")
        self.assertEqual(month_label("bad"), "bad")

    def test_chart_aggregation(self):
        chart = monthly_chart(
            [
                ("MWCI", "2024-02", 5),
                ("mwci", "2024-02", 2.5),
                ("MWSI", "2024-01", 3),
                ("OTHER", "2023-12", 99),
            ]
        )
        self.assertEqual(chart["labels"], ["Jan 2024", "Feb 2024"])
        self.assertEqual(chart["mwci"], [0, 7.5])
        self.assertEqual(chart["mwsi"], [3.0, 0])
        self.assertTrue(chart["has_data"])
        self.assertFalse(monthly_chart([])["has_data"])


@override_settings(DASHBOARD_ADMIN_EMAIL="boss@example.com")
class DeepwellViewTests(TestCase):
    def setUp(self):
        User = get_user_model()
        self.member = User.objects.create_user(username="m", email="m@example.com", password="pw", is_approved=True)
        self.admin = User.objects.create_user(username="boss", email="boss@example.com", password="pw")

    def _post(self, url, **overrides):
        data = {
            "name": "DW-1",
            "provider": "MWCI",
            "permit": "P-001",
            "status": "Operational",
            "rated_yield": "12.5",
            "location": "",
            "municipality": "Antipolo",
            "months-TOTAL_FORMS": "3",
            "months-INITIAL_FORMS": "0",
            "months-MIN_NUM_FORMS": "0",
            "months-MAX_NUM_FORMS": "1000",
            "months-0-month": "2024-01",
            "months-0-production": "1000",
            "months-1-month": "2024-02",
            "months-1-production": "501",
            "months-2-month": "",
            "months-2-production": "",
        }
        data.update(overrides)
        return self.client.post(url, data)

    def test_create_computes_totals_and_history(self):
        self.client.force_login(self.member)
        resp = self._post(reverse("deepwells:create"))
        self.assertRedirects(resp, reverse("deepwells:list"), fetch_redirect_response=False)

        dw = Deepwell.objects.get()
        self.assertEqual(dw.total_production, 1501.0)
        self.assertEqual(dw.average_production, 750.5)
        self.assertEqual(dw.months.count(), 2)
        self.assertEqual(dw.history[0]["action"], "create")

    def test_blank_name_rejected(self):
        self.client.force_login(self.member)
        resp = self._post(reverse("deepwells:create"), name="  ")
        self.assertEqual(resp.status_code, 200)
        self.assertContains(resp, "Deepwell Name is required")

    def test_bad_month_rejected(self):
        self.client.force_login(self.member)
        resp = self._post(reverse("deepwells:create"), **{"months-0-month": "2024-13"})
        self.assertEqual(resp.status_code, 200)
        self.assertFalse(Deepwell.objects.exists())

    def test_level1_cannot_delete_admin_can(self):
        dw = Deepwell.objects.create(name="X", provider="MWSI")
        self.client.force_login(self.member)
        self.assertEqual(self.client.post(reverse("deepwells:delete", args=[dw.pk])).status_code, 403)
        self.client.force_login(self.admin)
        self.client.post(reverse("deepwells:delete", args=[dw.pk]))
        self.assertFalse(Deepwell.objects.exists())

    def test_list_filters_and_chart(self):
        a = Deepwell.objects.create(name="Alpha", provider="MWCI", status="Operational", permit="WP-9")
        Deepwell.objects.create(name="Beta", provider="MWSI", status="Idle")
        MonthlyProduction.objects.create(deepwell=a, month="2024-01", production=10)

        self.client.post(reverse("accounts:view_only"))
        resp = self.client.get(reverse("deepwells:list"), {"q": "wp-9"})
        self.assertEqual([d.name for d in resp.context["deepwells"]], ["Alpha"])
        resp = self.client.get(reverse("deepwells:list"), {"provider": "MWSI", "status": "Idle"})
        self.assertEqual([d.name for d in resp.context["deepwells"]], ["Beta"])

        chart = self.client.get(reverse("deepwells:chart")).json()
        self.assertEqual(chart["labels"], ["Jan 2024"])
        self.assertEqual(chart["mwci"], [10.0])

    def test_detail_shows_grouped_numbers(self):
        dw = Deepwell.objects.create(name="Gamma", provider="MWCI", total_production=1234567.5)
        self.client.force_login(self.member)
        resp = self.client.get(reverse("deepwells:detail", args=[dw.pk]))
        self.assertContains(resp, "1,234,567.50")
