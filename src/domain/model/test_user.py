"""Unit tests for User domain model: Provider, UserPatch sentinel handling.

Tests focus on behavior other components rely on:
- Provider string↔enum conversion (used by the MongoDB adapter)
- UserPatch distinguishing "absent" from an explicit None
"""

import unittest
from datetime import date

from domain.model.user import UNSET, Provider, UserPatch, UserRegistration


class TestProvider(unittest.TestCase):

    def test_provider_is_string_enum(self):
        self.assertEqual(Provider.LOCAL, 'LOCAL')
        self.assertEqual(Provider('GOOGLE'), Provider.GOOGLE)

    def test_matches_is_case_insensitive(self):
        self.assertTrue(Provider.matches('local', Provider.LOCAL))
        self.assertTrue(Provider.matches('Google', Provider.GOOGLE))
        self.assertTrue(Provider.matches(Provider.GOOGLE, Provider.GOOGLE))

    def test_matches_rejects_other_or_missing(self):
        self.assertFalse(Provider.matches('GOOGLE', Provider.LOCAL))
        self.assertFalse(Provider.matches(None, Provider.LOCAL))
        self.assertFalse(Provider.matches('', Provider.LOCAL))


class TestUserPatch(unittest.TestCase):

    def test_empty_patch_has_no_changes(self):
        self.assertEqual(UserPatch().changes(), {})

    def test_changes_only_contains_set_fields(self):
        patch = UserPatch(name='X', birth_date=date(1990, 1, 1))
        self.assertEqual(patch.changes(), {'name': 'X', 'birth_date': date(1990, 1, 1)})

    def test_explicit_none_is_a_change(self):
        """None is a value, not "absent"."""
        patch = UserPatch(birth_date=None)
        self.assertTrue(patch.is_set('birth_date'))
        self.assertEqual(patch.changes(), {'birth_date': None})

    def test_unset_is_singleton_and_falsy(self):
        self.assertIs(UserPatch().name, UNSET)
        self.assertFalse(UNSET)
        self.assertEqual(repr(UNSET), 'UNSET')


class TestUserRegistration(unittest.TestCase):

    def test_password_hidden_from_repr(self):
        reg = UserRegistration(
            name='Ana', lastname='Diaz', username='ana01', email='ana@x.com',
            provider='LOCAL', password='secret',
        )
        self.assertNotIn('secret', repr(reg))


if __name__ == '__main__':
    unittest.main()
