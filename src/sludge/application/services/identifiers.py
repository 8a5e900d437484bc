"""Opaque identifier validation and generation."""

import secrets


class IdentifierService:
    """Validates and generates fixed-length, fixed-alphabet tokens.

    Every identifier in the relay (stream admin/public/hub ids, segment ids,
    hub handles) uses the same length and alphabet, which is what lets a
    path segment be classified as an identifier or a route keyword.
    """

    def __init__(self, length: int, alphabet: str):
        if length < 1:
            raise ValueError("identifier length must be positive")
        if not alphabet:
            raise ValueError("identifier alphabet must not be empty")

        self.length = length
        self.alphabet = alphabet
        self._allowed = frozenset(alphabet)

    def is_valid(self, token: str) -> bool:
        """Check whether token has the configured length and alphabet."""
        return len(token) == self.length and all(c in self._allowed for c in token)

    def generate(self) -> str:
        """Generate a fresh random identifier."""
        return "".join(secrets.choice(self.alphabet) for _ in range(self.length))
