from django.contrib.auth import get_user_model
from django.test import SimpleTestCase, TestCase
from django.urls import reverse

from notifications.models import ChangeNotification
from notifications.services.changes import (
    changes_since,
    collapse_changes,
    latest_cursor,
)
from projects.models import Project


def ev(object_id, change_type, collection="projects"):
    return {"collection": collection, "object_id": object_id, "change_type": change_type}


class CollapseTests(SimpleTestCase):
    def test_added_then_modified_is_added(self):
        self.assertEqual(collapse_changes([ev(1, "added"), ev(1, "modified")]), [{"collection": "projects", "id": 1, "type": "added"}])

    def test_added_then_removed_is_nothing(self):
        self.assertEqual(collapse_changes([ev(1, "added"), ev(1, "modified"), ev(1, "removed")]), [])

    def test_modified_then_removed_is_removed(self):
        self.assertEqual(collapse_changes([ev(2, "modified"), ev(2, "removed")])[0]["type"], "removed")

    def test_removed_then_added_is_modified(self):
        self.assertEqual(collapse_changes([ev(3, "removed"), ev(3, "added")])[0]["type"], "modified")

    def test_collections_are_kept_apart(self):
        out = collapse_changes([ev(1, "added"), ev(1, "removed", collection="deepwells")])
        self.assertEqual(
            out,
            [
                {"collection": "projects", "id": 1, "type": "added"},
                {"collection": "deepwells", "id": 1, "type": "removed"},
            ],
        )


class SignalAndFeedTests(TestCase):
    def setUp(self):
        self.user = get_user_model().objects.create_user(
            username="u", email="u@example.com", password="pw", is_approved=True
        )

    def test_project_save_and_delete_are_recorded(self):
        start = latest_cursor()
        p = Project.objects.create(name="A", contractor="B")
        p.name = "A2"
        p.save()
        pk = p.pk
        p.delete()

        types = [c.change_type for c in changes_since(start, ["projects"])]
        self.assertEqual(types, ["added", "modified", "removed"])
        self.assertEqual(collapse_changes(changes_since(start)), [])
        self.assertTrue(ChangeNotification.objects.filter(object_id=pk).exists())

    def test_feed_returns_cursor_and_net_changes(self):
        self.client.force_login(self.user)
        resp = self.client.get(reverse("notifications:changes"))
        cursor = resp.json()["cursor"]

        p = Project.objects.create(name="A", contractor="B")
        resp = self.client.get(reverse("notifications:changes"), {"cursor": cursor, "collections": "projects"})
        body = resp.json()
        self.assertEqual(body["changes"], [{"collection": "projects", "id": p.pk, "type": "added"}])
        self.assertGreater(body["cursor"], cursor)

    def test_bad_cursor_is_400(self):
        self.client.force_login(self.user)
        resp = self.client.get(reverse("notifications:changes"), {"cursor": "abc"})
        self.assertEqual(resp.status_code, 400)

    def test_view_only_cannot_see_message_changes(self):
        self.client.post(reverse("accounts:view_only"))
        resp = self.client.get(reverse("notifications:changes"), {"cursor": "0", "collections": "messages"})
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()["changes"], [])
