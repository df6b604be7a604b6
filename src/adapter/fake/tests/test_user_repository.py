"""Unit tests for FakeUserRepository: verifies Port contract compliance."""

import unittest
from dataclasses import replace
from datetime import datetime, timezone

from adapter.fake.user_repository import FakeUserRepository
from domain.model.errors import ConflictError
from domain.model.user import Provider, User

NOW = datetime(2026, 1, 1, tzinfo=timezone.utc)


def _user(**overrides) -> User:
    defaults = dict(
        id=None, name='Ana', lastname='Diaz', username='ana01', email='ana@x.com',
        provider=Provider.LOCAL, active=True, created_at=NOW, updated_at=NOW,
    )
    defaults.update(overrides)
    return User(**defaults)


class TestFakeUserRepository(unittest.TestCase):

    def setUp(self):
        self.repo = FakeUserRepository()

    # ── save ──────────────────────────────────────────────────

    def test_save_assigns_id_and_round_trips(self):
        saved = self.repo.save(_user(), password_hash='h')

        self.assertIsNotNone(saved.id)
        self.assertEqual(self.repo.get_by_id(saved.id), saved)
        self.assertEqual(self.repo.credentials[saved.id], 'h')

    def test_save_with_id_overwrites_in_place(self):
        saved = self.repo.save(_user(), password_hash='h')
        self.repo.save(replace(saved, name='Other'))

        self.assertEqual(len(self.repo.store), 1)
        self.assertEqual(self.repo.get_by_id(saved.id).name, 'Other')
        self.assertEqual(self.repo.credentials[saved.id], 'h')

    def test_save_enforces_unique_email(self):
        self.repo.save(_user())
        with self.assertRaises(ConflictError) as ctx:
            self.repo.save(_user(username='other'))
        self.assertEqual(ctx.exception.message, 'email in use')

    def test_save_enforces_unique_username(self):
        self.repo.save(_user())
        with self.assertRaises(ConflictError) as ctx:
            self.repo.save(_user(email='other@x.com'))
        self.assertEqual(ctx.exception.message, 'username in use')

    def test_returned_users_are_copies(self):
        saved = self.repo.save(_user())
        fetched = self.repo.get_by_id(saved.id)
        fetched.name = 'mutated'
        self.assertEqual(self.repo.get_by_id(saved.id).name, 'Ana')

    # ── lookups ───────────────────────────────────────────────

    def test_lookups_by_email_and_username(self):
        saved = self.repo.save(_user())
        self.assertEqual(self.repo.get_by_email('ana@x.com'), saved)
        self.assertEqual(self.repo.get_by_username('ana01'), saved)
        self.assertIsNone(self.repo.get_by_email('nobody@x.com'))
        self.assertIsNone(self.repo.get_by_username('nobody'))

    def test_exists(self):
        self.repo.save(_user())
        self.assertTrue(self.repo.exists_by_email('ana@x.com'))
        self.assertTrue(self.repo.exists_by_username('ana01'))
        self.assertFalse(self.repo.exists_by_email('nobody@x.com'))

    def test_find_all_in_insertion_order(self):
        a = self.repo.save(_user())
        b = self.repo.save(_user(username='b', email='b@x.com'))
        self.assertEqual([u.id for u in self.repo.find_all()], [a.id, b.id])

    # ── delete ────────────────────────────────────────────────

    def test_delete(self):
        saved = self.repo.save(_user(), password_hash='h')
        self.assertTrue(self.repo.delete(saved.id))
        self.assertIsNone(self.repo.get_by_id(saved.id))
        self.assertNotIn(saved.id, self.repo.credentials)
        self.assertFalse(self.repo.delete(saved.id))


if __name__ == '__main__':
    unittest.main()
