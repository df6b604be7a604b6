"""Unit tests for index conflict resolution."""

import unittest
from unittest.mock import MagicMock

from pymongo.errors import OperationFailure, PyMongoError

from adapter.mongodb.indexes import create_index_safe


class TestCreateIndexSafe(unittest.TestCase):

    def setUp(self):
        self.collection = MagicMock()

    def test_creates_index(self):
        self.assertTrue(create_index_safe(self.collection, [('email', 1)], 'idx_users_email', unique=True))
        self.collection.create_index.assert_called_once_with([('email', 1)], name='idx_users_email', unique=True)

    def test_replaces_index_with_same_keys_under_old_name(self):
        self.collection.create_index.side_effect = [OperationFailure('Index already exists'), None]
        self.collection.index_information.return_value = {
            '_id_': {'key': [('_id', 1)]},
            'email_1': {'key': [('email', 1)]},
        }

        self.assertTrue(create_index_safe(self.collection, [('email', 1)], 'idx_users_email', unique=True))

        self.collection.drop_index.assert_called_once_with('email_1')
        self.assertEqual(self.collection.create_index.call_count, 2)

    def test_replaces_index_with_same_name_but_other_keys(self):
        self.collection.create_index.side_effect = [OperationFailure('IndexKeySpecsConflict'), None]
        self.collection.index_information.return_value = {
            'idx_users_email': {'key': [('email', -1)]},
        }

        self.assertTrue(create_index_safe(self.collection, [('email', 1)], 'idx_users_email'))
        self.collection.drop_index.assert_called_once_with('idx_users_email')

    def test_unresolvable_conflict_returns_false(self):
        self.collection.create_index.side_effect = OperationFailure('already exists')
        self.collection.index_information.return_value = {'_id_': {'key': [('_id', 1)]}}

        self.assertFalse(create_index_safe(self.collection, [('email', 1)], 'idx_users_email'))
        self.collection.drop_index.assert_not_called()

    def test_other_errors_propagate(self):
        self.collection.create_index.side_effect = PyMongoError('not authorized')
        with self.assertRaises(PyMongoError):
            create_index_safe(self.collection, [('email', 1)], 'idx_users_email')


if __name__ == '__main__':
    unittest.main()
