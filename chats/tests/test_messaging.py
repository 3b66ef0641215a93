import datetime as dt

from django.contrib.auth import get_user_model
from django.core.exceptions import PermissionDenied
from django.test import TestCase, override_settings
from django.urls import reverse
from django.utils import timezone

from chats.models import ChatReadState, Message
from chats.services.messaging import (
    ChatError,
    chat_partners,
    clear_all_messages,
    mark_read,
    send_message,
    soft_delete_message,
    thread_messages,
    unread_counts,
    visible_messages,
)
from notifications.models import ChangeNotification


@override_settings(DASHBOARD_ADMIN_EMAIL="boss@example.com")
class MessagingServiceTests(TestCase):
    def setUp(self):
        User = get_user_model()
        self.alice = User.objects.create_user(username="a", email="a@example.com", password="pw", is_approved=True)
        self.bob = User.objects.create_user(username="b", email="b@example.com", password="pw", is_approved=True)
        self.carol = User.objects.create_user(username="c", email="c@example.com", password="pw", is_approved=True)
        self.pending = User.objects.create_user(username="p", email="p@example.com", password="pw")
        self.admin = User.objects.create_user(username="boss", email="boss@example.com", password="pw")

    def test_blank_text_is_ignored(self):
        self.assertIsNone(send_message(sender=self.alice, text="   "))
        self.assertFalse(Message.objects.exists())

    def test_text_is_trimmed(self):
        message = send_message(sender=self.alice, text="  hello  ")
        self.assertEqual(message.text, "hello")
        self.assertTrue(message.is_broadcast)

    def test_recipient_must_be_approved(self):
        with self.assertRaises(ChatError):
            send_message(sender=self.alice, text="hi", recipient=self.pending)

    def test_partners_exclude_self_and_pending(self):
        emails = [u.email for u in chat_partners(self.alice)]
        self.assertEqual(emails, ["b@example.com", "boss@example.com", "c@example.com"])

    def test_private_messages_visible_only_to_the_pair(self):
        private = send_message(sender=self.alice, text="secret", recipient=self.bob)
        broadcast = send_message(sender=self.carol, text="hello all")

        self.assertIn(private, visible_messages(self.bob))
        self.assertNotIn(private, visible_messages(self.carol))
        self.assertIn(broadcast, visible_messages(self.bob))

        self.assertEqual(list(thread_messages(self.bob, self.alice)), [private])
        self.assertEqual(list(thread_messages(self.bob)), [broadcast])

    def test_only_sender_can_soft_delete(self):
        message = send_message(sender=self.alice, text="oops")
        with self.assertRaises(PermissionDenied):
            soft_delete_message(user=self.bob, message_id=message.pk)

        soft_delete_message(user=self.alice, message_id=message.pk)
        message.refresh_from_db()
        self.assertTrue(message.is_deleted)
        self.assertEqual(message.deleted_by, self.alice)
        self.assertIsNotNone(message.deleted_at)
        self.assertNotIn(message, visible_messages(self.bob))
        self.assertEqual(
            ChangeNotification.objects.filter(collection="messages", object_id=message.pk)
            .order_by("-id")
            .first()
            .change_type,
            "removed",
        )

    def test_unread_counts_per_thread(self):
        send_message(sender=self.alice, text="one")
        send_message(sender=self.alice, text="two", recipient=self.bob)
        send_message(sender=self.carol, text="three", recipient=self.bob)
        send_message(sender=self.bob, text="mine")

        summary = unread_counts(self.bob)
        self.assertEqual(summary.threads["all"], 1)
        self.assertEqual(summary.threads[str(self.alice.pk)], 1)
        self.assertEqual(summary.threads[str(self.carol.pk)], 1)
        self.assertEqual(summary.total, 3)

        mark_read(self.bob, str(self.alice.pk))
        summary = unread_counts(self.bob)
        self.assertNotIn(str(self.alice.pk), summary.threads)
        self.assertEqual(summary.total, 2)

    def test_messages_after_last_read_count_again(self):
        ChatReadState.objects.create(
            user=self.bob, thread="all", last_read_at=timezone.now() - dt.timedelta(hours=1)
        )
        old = send_message(sender=self.alice, text="recent")
        Message.objects.filter(pk=old.pk).update(created_at=timezone.now() - dt.timedelta(hours=2))
        send_message(sender=self.alice, text="new")
        self.assertEqual(unread_counts(self.bob).threads["all"], 1)

    def test_clear_all_requires_admin(self):
        send_message(sender=self.alice, text="x")
        send_message(sender=self.bob, text="y", recipient=self.alice)
        with self.assertRaises(PermissionDenied):
            clear_all_messages(user=self.alice)

        self.assertEqual(clear_all_messages(user=self.admin), 2)
        self.assertFalse(Message.objects.exists())
        self.assertEqual(
            ChangeNotification.objects.filter(collection="messages", change_type="removed").count(), 2
        )


@override_settings(DASHBOARD_ADMIN_EMAIL="boss@example.com")
class MessengerViewTests(TestCase):
    def setUp(self):
        User = get_user_model()
        self.alice = User.objects.create_user(username="a", email="a@example.com", password="pw", is_approved=True)
        self.bob = User.objects.create_user(username="b", email="b@example.com", password="pw", is_approved=True)

    def test_view_only_cannot_open_messenger(self):
        self.client.post(reverse("accounts:view_only"))
        resp = self.client.get(reverse("chats:messenger"))
        self.assertEqual(resp.status_code, 302)

    def test_send_and_poll_private_thread(self):
        self.client.force_login(self.alice)
        resp = self.client.post(reverse("chats:send"), {"thread": str(self.bob.pk), "text": "hi bob"})
        self.assertRedirects(
            resp, f"{reverse('chats:messenger')}?thread={self.bob.pk}", fetch_redirect_response=False
        )

        self.client.force_login(self.bob)
        self.assertEqual(self.client.get(reverse("chats:unread")).json()["total"], 1)

        data = self.client.get(reverse("chats:poll"), {"thread": self.alice.pk}).json()
        self.assertEqual([m["text"] for m in data["messages"]], ["hi bob"])
        self.assertFalse(data["messages"][0]["mine"])
        self.assertFalse(data["messages"][0]["broadcast"])
        self.assertEqual(data["total"], 0)

    def test_unknown_thread_is_404(self):
        self.client.force_login(self.alice)
        self.assertEqual(self.client.get(reverse("chats:messenger"), {"thread": "999"}).status_code, 404)
        self.assertEqual(self.client.get(reverse("chats:messenger"), {"thread": "nope"}).status_code, 404)

    def test_delete_someone_elses_message_is_forbidden(self):
        message = Message.objects.create(sender=self.bob, text="keep")
        self.client.force_login(self.alice)
        self.assertEqual(self.client.post(reverse("chats:delete", args=[message.pk])).status_code, 403)

    def test_badge_in_page_context(self):
        Message.objects.create(sender=self.bob, text="ping")
        self.client.force_login(self.alice)
        resp = self.client.get(reverse("projects:list"))
        self.assertEqual(resp.context["chat_unread_total"], 1)
