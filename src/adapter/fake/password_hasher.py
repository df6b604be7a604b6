"""Deterministic PasswordHasher for testing."""


class FakePasswordHasher:
    def __init__(self):
        self.calls: list[str] = []

    def hash(self, plaintext: str) -> str:
        self.calls.append(plaintext)
        return f"hashed:{plaintext}"
