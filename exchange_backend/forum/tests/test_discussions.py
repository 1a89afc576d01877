from django.contrib.auth import get_user_model
from django.test import TestCase
from django.urls import reverse
from rest_framework.test import APIClient

from forum.models import Discussion
from forum.services.discussions import add_reply, moderate, start_discussion
from forum.services.exceptions import DiscussionLockedError, DiscussionNotFoundError, ForumPermissionError

User = get_user_model()

CONTENT = "Anyone know when the parking lots open before tip-off?"


class DiscussionServiceTests(TestCase):
    """
    GUARANTEES:
    - Only verified owners post
    - Replies bump reply_count and last activity
    - Locked discussions take no replies
    """

    def setUp(self):
        self.owner = User.objects.create_user(email="owner@example.com", password="pass1234", role="SELLER")
        self.guest = User.objects.create_user(email="guest@example.com", password="pass1234")

    def test_start_discussion_defaults_category(self):
        discussion = start_discussion(author=self.owner, title="Parking tips", content=CONTENT)

        self.assertEqual(discussion.category, "General")

    def test_guest_cannot_post(self):
        with self.assertRaises(ForumPermissionError):
            start_discussion(author=self.guest, title="Parking tips", content=CONTENT)

    def test_reply_updates_counters(self):
        discussion = start_discussion(author=self.owner, title="Parking tips", content=CONTENT)
        before = discussion.last_activity_at

        add_reply(author=self.owner, discussion_id=discussion.pk, content="Lot C opens two hours early.")

        discussion.refresh_from_db()
        self.assertEqual(discussion.reply_count, 1)
        self.assertGreaterEqual(discussion.last_activity_at, before)

    def test_locked_discussion_rejects_replies(self):
        discussion = start_discussion(author=self.owner, title="Parking tips", content=CONTENT)
        moderate(discussion_id=discussion.pk, is_locked=True)

        with self.assertRaises(DiscussionLockedError):
            add_reply(author=self.owner, discussion_id=discussion.pk, content="Lot C opens two hours early.")

    def test_reply_to_unknown_discussion(self):
        with self.assertRaises(DiscussionNotFoundError):
            add_reply(author=self.owner, discussion_id="nope", content="Lot C opens two hours early.")


class DiscussionAPITests(TestCase):
    def setUp(self):
        self.client = APIClient()
        self.owner = User.objects.create_user(email="owner@example.com", password="pass1234", role="SELLER")
        self.admin = User.objects.create_user(email="admin@example.com", password="pass1234", role="ADMIN")

    def test_create_list_and_read(self):
        self.client.force_authenticate(self.owner)
        created = self.client.post(
            reverse("discussions-list"),
            {"title": "Parking tips", "content": CONTENT, "category": "Game Day"},
            format="json",
        )
        self.assertEqual(created.status_code, 201)
        discussion_id = created.data["discussion"]["id"]

        reply = self.client.post(
            reverse("discussions-replies", args=[discussion_id]),
            {"content": "Lot C opens two hours early."},
            format="json",
        )
        self.assertEqual(reply.status_code, 201)

        self.client.force_authenticate(None)
        listing = self.client.get(reverse("discussions-list"), {"category": "Game Day"})
        self.assertEqual(len(listing.data["discussions"]), 1)
        self.assertEqual(len(self.client.get(reverse("discussions-list"), {"category": "Other"}).data["discussions"]), 0)

        detail = self.client.get(reverse("discussions-detail", args=[discussion_id]))
        self.assertEqual(detail.status_code, 200)
        self.assertEqual(detail.data["discussion"]["view_count"], 1)
        self.assertEqual(len(detail.data["discussion"]["replies"]), 1)

    def test_content_length_rules(self):
        self.client.force_authenticate(self.owner)

        response = self.client.post(
            reverse("discussions-list"),
            {"title": "Hi", "content": "too short"},
            format="json",
        )

        self.assertEqual(response.status_code, 400)
        self.assertIn("title", response.data)
        self.assertIn("content", response.data)

    def test_pinned_discussions_come_first(self):
        first = start_discussion(author=self.owner, title="First thread", content=CONTENT)
        start_discussion(author=self.owner, title="Second thread", content=CONTENT)
        Discussion.objects.filter(pk=first.pk).update(is_pinned=True)

        response = self.client.get(reverse("discussions-list"))

        self.assertEqual(response.data["discussions"][0]["id"], str(first.pk))

    def test_moderation_requires_capability(self):
        discussion = start_discussion(author=self.owner, title="Parking tips", content=CONTENT)
        url = reverse("discussions-moderate", args=[discussion.pk])

        self.client.force_authenticate(self.owner)
        self.assertEqual(self.client.patch(url, {"is_locked": True}, format="json").status_code, 403)

        self.client.force_authenticate(self.admin)
        response = self.client.patch(url, {"is_locked": True}, format="json")
        self.assertEqual(response.status_code, 200)
        self.assertTrue(response.data["discussion"]["is_locked"])

        self.client.force_authenticate(self.owner)
        locked = self.client.post(
            reverse("discussions-replies", args=[discussion.pk]),
            {"content": "Lot C opens two hours early."},
            format="json",
        )
        self.assertEqual(locked.status_code, 403)
        self.assertEqual(locked.data["error"]["code"], "DISCUSSION_LOCKED")
