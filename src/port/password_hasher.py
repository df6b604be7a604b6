from typing import Protocol


class PasswordHasher(Protocol):
    """One-way, salted password hashing."""
    def hash(self, plaintext: str) -> str: ...
