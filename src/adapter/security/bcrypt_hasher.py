"""bcrypt implementation of PasswordHasher."""

import bcrypt

# 12 rounds = 2^12 key-expansion iterations
BCRYPT_ROUNDS = 12


class BcryptPasswordHasher:
    def __init__(self, rounds: int = BCRYPT_ROUNDS):
        self.rounds = rounds

    def hash(self, plaintext: str) -> str:
        """Hash password with a fresh salt. Returns the bcrypt digest as str."""
        salt = bcrypt.gensalt(rounds=self.rounds)
        return bcrypt.hashpw(plaintext.encode('utf-8'), salt).decode('utf-8')
