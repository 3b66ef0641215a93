import datetime as dt
import io
import shutil
import tempfile

from django.contrib.auth import get_user_model
from django.core.files.uploadedfile import SimpleUploadedFile
from django.test import TestCase, override_settings
from django.urls import reverse
from PIL import Image

from projects.models import Accomplishment, BillingEntry, Project

_MEDIA = tempfile.mkdtemp(prefix="dashboard_test_media_")


def _jpeg_upload(name="site.png", size=(2000, 1000)):
    buf = io.BytesIO()
    Image.new("RGB", size, (200, 10, 10)).save(buf, format="PNG")
    return SimpleUploadedFile(name, buf.getvalue(), content_type="image/png")


def _form_data(**overrides):
    data = {
        "name": "Bridge Rehab",
        "implementing_agency": "DPWH",
        "location": "Marikina",
        "contractor": "ACME Builders",
        "contract_amount": "1500000.50",
        "original_duration": "120",
        "time_extension": "0",
        "original_completion": "2030-01-01",
        "activities": "1. Clearing 2. Excavation",
        "issues": "Right of way",
        "remarks": "",
        "other_details": "",
        "acc-date": "2024-03-01",
        "acc-percent": "25",
        "acc-prev_percent": "10",
        "acc-planned_percent": "30",
        "acc-action": "Added crew",
        "billing-TOTAL_FORMS": "2",
        "billing-INITIAL_FORMS": "0",
        "billing-MIN_NUM_FORMS": "0",
        "billing-MAX_NUM_FORMS": "1000",
        "billing-0-date": "2024-02-01",
        "billing-0-amount": "250000",
        "billing-0-description": "First billing",
        "billing-1-date": "",
        "billing-1-amount": "100",
        "billing-1-description": "No date, dropped",
        "contract_docs_link": "https://docs.example.com/contract",
    }
    data.update(overrides)
    return data


@override_settings(MEDIA_ROOT=_MEDIA, DASHBOARD_ADMIN_EMAIL="boss@example.com")
class ProjectViewTests(TestCase):
    @classmethod
    def tearDownClass(cls):
        super().tearDownClass()
        shutil.rmtree(_MEDIA, ignore_errors=True)

    def setUp(self):
        User = get_user_model()
        self.member = User.objects.create_user(username="m", email="m@example.com", password="pw", is_approved=True)
        self.level2 = User.objects.create_user(
            username="l2", email="l2@example.com", password="pw", is_approved=True, access_level=2
        )
        self.pending = User.objects.create_user(username="p", email="p@example.com", password="pw")

    def test_anonymous_list_redirects_to_login(self):
        resp = self.client.get(reverse("projects:list"))
        self.assertEqual(resp.status_code, 302)
        self.assertIn(reverse("accounts:login"), resp["Location"])

    def test_view_only_sees_list_but_not_detail(self):
        p = Project.objects.create(name="Seawall", contractor="X")
        self.client.post(reverse("accounts:view_only"))
        resp = self.client.get(reverse("projects:list"))
        self.assertContains(resp, "Seawall")
        resp = self.client.get(reverse("projects:detail", args=[p.pk]))
        self.assertEqual(resp.status_code, 302)

    def test_create_project_with_snapshot_and_billing(self):
        self.client.force_login(self.member)
        resp = self.client.post(reverse("projects:create"), _form_data())
        self.assertEqual(resp.status_code, 302)

        p = Project.objects.get(name="Bridge Rehab")
        self.assertEqual(p.contract_docs_link, "")
        self.assertEqual(p.history[0]["action"], "create")
        self.assertEqual(p.history[0]["email"], "m@example.com")

        acc = p.accomplishments.get()
        self.assertEqual(acc.date, dt.date(2024, 3, 1))
        self.assertEqual(acc.variance, -5.0)
        self.assertEqual(acc.issue, "Right of way")
        self.assertEqual(acc.action, "Added crew")

        self.assertEqual(BillingEntry.objects.filter(project=p).count(), 1)
        self.assertEqual(p.status, "Delayed")

    def test_percent_above_hundred_accepted_as_completed(self):
        self.client.force_login(self.member)
        resp = self.client.post(reverse("projects:create"), _form_data(**{"acc-percent": "100.5"}))
        self.assertEqual(resp.status_code, 302)

        p = Project.objects.get(name="Bridge Rehab")
        self.assertEqual(p.accomplishments.get().percent, 100.5)
        self.assertEqual(p.status, "Completed")

    def test_blank_contractor_rejected(self):
        self.client.force_login(self.member)
        resp = self.client.post(reverse("projects:create"), _form_data(contractor="   "))
        self.assertEqual(resp.status_code, 200)
        self.assertContains(resp, "Contractor is required.")
        self.assertFalse(Project.objects.exists())

    def test_edit_same_date_overwrites_and_keeps_docs_link_for_level1(self):
        p = Project.objects.create(name="Bridge Rehab", contractor="ACME", contract_docs_link="https://secret/")
        Accomplishment.objects.create(project=p, date=dt.date(2024, 3, 1), percent=5, planned_percent=5)

        self.client.force_login(self.member)
        self.client.post(reverse("projects:edit", args=[p.pk]), _form_data(contract_docs_link="https://evil/"))

        p.refresh_from_db()
        self.assertEqual(p.contract_docs_link, "https://secret/")
        self.assertEqual(p.accomplishments.count(), 1)
        self.assertEqual(p.accomplishments.get().percent, 25)
        self.assertEqual(p.history[-1]["action"], "edit")

    def test_level2_can_set_docs_link(self):
        self.client.force_login(self.level2)
        self.client.post(reverse("projects:create"), _form_data())
        self.assertEqual(Project.objects.get().contract_docs_link, "https://docs.example.com/contract")

    def test_photos_replace_set_and_are_compressed(self):
        self.client.force_login(self.member)
        data = _form_data()
        data["photos"] = [_jpeg_upload("a.png"), _jpeg_upload("b.png")]
        self.client.post(reverse("projects:create"), data)
        p = Project.objects.get()
        photos = list(p.photos.all())
        self.assertEqual([ph.slot for ph in photos], [1, 2])
        with Image.open(photos[0].image.path) as img:
            self.assertEqual(img.format, "JPEG")
            self.assertEqual(max(img.size), 1024)

        # Saving without uploads keeps the set.
        self.client.post(reverse("projects:edit", args=[p.pk]), _form_data())
        self.assertEqual(p.photos.count(), 2)

    def test_level1_cannot_delete(self):
        p = Project.objects.create(name="Keep", contractor="X")
        self.client.force_login(self.member)
        resp = self.client.post(reverse("projects:delete", args=[p.pk]))
        self.assertEqual(resp.status_code, 403)
        self.assertTrue(Project.objects.filter(pk=p.pk).exists())

    def test_level2_can_delete(self):
        p = Project.objects.create(name="Drop", contractor="X")
        self.client.force_login(self.level2)
        resp = self.client.post(reverse("projects:delete", args=[p.pk]))
        self.assertRedirects(resp, reverse("projects:list"), fetch_redirect_response=False)
        self.assertFalse(Project.objects.filter(pk=p.pk).exists())

    def test_list_filters(self):
        Project.objects.create(name="Road A", contractor="Alpha", implementing_agency="DPWH", original_completion=dt.date(2000, 1, 1))
        Project.objects.create(name="Road B", contractor="Beta", implementing_agency="LGU", original_completion=dt.date(2099, 1, 1))
        done = Project.objects.create(name="Road C", contractor="Gamma", implementing_agency="LGU")
        Accomplishment.objects.create(project=done, date=dt.date(2024, 1, 1), percent=100)

        self.client.force_login(self.member)
        resp = self.client.get(reverse("projects:list"), {"status": "On-going"})
        names = [r["project"].name for r in resp.context["rows"]]
        self.assertEqual(names, ["Road A", "Road B"])

        resp = self.client.get(reverse("projects:list"), {"agency": "LGU", "q": "gam"})
        self.assertEqual([r["project"].name for r in resp.context["rows"]], ["Road C"])

    def test_detail_and_s_curve(self):
        p = Project.objects.create(name="Dike", contractor="X", issues="Flooding")
        Accomplishment.objects.create(project=p, date=dt.date(2024, 2, 1), percent=20, planned_percent=25, variance=-5)
        Accomplishment.objects.create(project=p, date=dt.date(2024, 1, 1), percent=10, planned_percent=10)
        self.client.force_login(self.member)

        resp = self.client.get(reverse("projects:detail", args=[p.pk]))
        self.assertContains(resp, "Flooding")
        self.assertContains(resp, "-5.00%")

        resp = self.client.get(reverse("projects:s_curve", args=[p.pk]))
        self.assertEqual([pt["date"] for pt in resp.json()["points"]], ["2024-01-01", "2024-02-01"])

    def test_pending_user_forbidden(self):
        self.client.force_login(self.pending)
        resp = self.client.get(reverse("projects:create"))
        self.assertEqual(resp.status_code, 403)
