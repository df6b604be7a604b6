"""Unit tests for BcryptPasswordHasher."""

import unittest

import bcrypt

from adapter.security.bcrypt_hasher import BcryptPasswordHasher


class TestBcryptPasswordHasher(unittest.TestCase):

    def setUp(self):
        # Minimum cost keeps the tests fast
        self.hasher = BcryptPasswordHasher(rounds=4)

    def test_hash_is_verifiable_and_not_plaintext(self):
        digest = self.hasher.hash('secret')

        self.assertIsInstance(digest, str)
        self.assertNotIn('secret', digest)
        self.assertTrue(bcrypt.checkpw(b'secret', digest.encode('utf-8')))

    def test_hash_is_salted(self):
        self.assertNotEqual(self.hasher.hash('secret'), self.hasher.hash('secret'))

    def test_rounds_are_encoded_in_digest(self):
        self.assertTrue(self.hasher.hash('secret').startswith('$2b$04$'))


if __name__ == '__main__':
    unittest.main()
