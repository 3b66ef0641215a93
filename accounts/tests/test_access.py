from django.contrib.auth import get_user_model
from django.core import mail
from django.test import TestCase, override_settings
from django.urls import reverse

from accounts.permissions import VIEW_ONLY_SESSION_KEY
from config.services import set_setting


@override_settings(DASHBOARD_ADMIN_EMAIL="boss@example.com")
class LoginAndApprovalTests(TestCase):
    def setUp(self):
        User = get_user_model()
        self.pending = User.objects.create_user(username="pending@example.com", email="pending@example.com", password="pw")
        self.approved = User.objects.create_user(
            username="ok@example.com", email="ok@example.com", password="pw", is_approved=True
        )
        self.admin = User.objects.create_user(username="boss", email="Boss@Example.com", password="pw")

    def test_pending_user_cannot_log_in(self):
        resp = self.client.post(reverse("accounts:login"), {"username": "pending@example.com", "password": "pw"})
        self.assertEqual(resp.status_code, 200)
        self.assertContains(resp, "Your account is pending approval.")
        self.assertNotIn("_auth_user_id", self.client.session)

    def test_approved_user_logs_in_with_email_any_case(self):
        resp = self.client.post(reverse("accounts:login"), {"username": "OK@example.com", "password": "pw"})
        self.assertEqual(resp.status_code, 302)
        self.assertEqual(int(self.client.session["_auth_user_id"]), self.approved.pk)

    def test_admin_email_signs_in_without_approval_flag(self):
        self.assertTrue(self.admin.is_site_admin)
        self.assertTrue(self.admin.can_sign_in)
        self.assertTrue(self.admin.has_elevated_access)

    def test_level_two_is_elevated(self):
        self.approved.access_level = 2
        self.assertTrue(self.approved.has_elevated_access)
        self.approved.access_level = 1
        self.assertFalse(self.approved.has_elevated_access)


class SignupTests(TestCase):
    def test_signup_creates_unapproved_user(self):
        resp = self.client.post(
            reverse("accounts:signup"),
            {"email": "New@Example.com", "password1": "a-long-Passw0rd!", "password2": "a-long-Passw0rd!"},
        )
        self.assertRedirects(resp, reverse("accounts:login"), fetch_redirect_response=False)
        user = get_user_model().objects.get(email="new@example.com")
        self.assertFalse(user.is_approved)
        self.assertEqual(user.access_level, 1)
        self.assertEqual(user.username, "new@example.com")

    def test_signup_closed_by_site_setting(self):
        set_setting("signups_enabled", False)
        resp = self.client.post(
            reverse("accounts:signup"),
            {"email": "x@example.com", "password1": "a-long-Passw0rd!", "password2": "a-long-Passw0rd!"},
        )
        self.assertRedirects(resp, reverse("accounts:login"), fetch_redirect_response=False)
        self.assertFalse(get_user_model().objects.filter(email="x@example.com").exists())


class ViewOnlyTests(TestCase):
    def test_enter_and_exit_view_only(self):
        resp = self.client.post(reverse("accounts:view_only"))
        self.assertRedirects(resp, reverse("projects:list"), fetch_redirect_response=False)
        self.assertTrue(self.client.session.get(VIEW_ONLY_SESSION_KEY))

        resp = self.client.get(reverse("accounts:view_only_exit"))
        self.assertRedirects(resp, reverse("accounts:login"), fetch_redirect_response=False)
        self.assertIsNone(self.client.session.get(VIEW_ONLY_SESSION_KEY))


@override_settings(DASHBOARD_ADMIN_EMAIL="boss@example.com")
class UserManagementTests(TestCase):
    def setUp(self):
        User = get_user_model()
        self.admin = User.objects.create_user(username="boss", email="boss@example.com", password="pw")
        self.member = User.objects.create_user(
            username="member", email="member@example.com", password="pw", is_approved=True
        )
        self.pending = User.objects.create_user(username="p", email="p@example.com", password="pw")

    def test_non_admin_gets_403(self):
        self.client.force_login(self.member)
        resp = self.client.post(reverse("accounts:user_approve", args=[self.pending.pk]))
        self.assertEqual(resp.status_code, 403)
        self.pending.refresh_from_db()
        self.assertFalse(self.pending.is_approved)

    def test_approve_sets_level_one_and_emails(self):
        self.client.force_login(self.admin)
        resp = self.client.post(reverse("accounts:user_approve", args=[self.pending.pk]))
        self.assertRedirects(resp, reverse("accounts:user_list"), fetch_redirect_response=False)

        self.pending.refresh_from_db()
        self.assertTrue(self.pending.is_approved)
        self.assertEqual(self.pending.access_level, 1)
        self.assertIsNotNone(self.pending.approved_at)
        self.assertEqual(len(mail.outbox), 1)
        self.assertEqual(mail.outbox[0].to, ["p@example.com"])
        self.assertIn("/accounts/set-password/", mail.outbox[0].body)

    def test_approval_survives_mail_failure(self):
        self.client.force_login(self.admin)
        with self.settings(EMAIL_BACKEND="accounts.tests.test_access.BrokenEmailBackend"):
            self.client.post(reverse("accounts:user_approve", args=[self.pending.pk]))
        self.pending.refresh_from_db()
        self.assertTrue(self.pending.is_approved)

    def test_reject_deletes_user(self):
        self.client.force_login(self.admin)
        self.client.post(reverse("accounts:user_reject", args=[self.pending.pk]))
        self.assertFalse(get_user_model().objects.filter(pk=self.pending.pk).exists())

    def test_change_access_level(self):
        self.client.force_login(self.admin)
        self.client.post(
            reverse("accounts:user_set_level", args=[self.member.pk]),
            {f"u{self.member.pk}-access_level": "2"},
        )
        self.member.refresh_from_db()
        self.assertEqual(self.member.access_level, 2)

    def test_user_list_renders_for_admin(self):
        self.client.force_login(self.admin)
        resp = self.client.get(reverse("accounts:user_list"))
        self.assertEqual(resp.status_code, 200)
        self.assertContains(resp, "p@example.com")
        self.assertContains(resp, "member@example.com")


class BrokenEmailBackend:
    def __init__(self, *args, **kwargs):
        pass

    def send_messages(self, messages):
        raise OSError("smtp down")
