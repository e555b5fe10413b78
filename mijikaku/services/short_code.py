"""
Short code generation for new links.
"""

import secrets

from mijikaku.config import URL_SAFE_ALPHABET


class ShortCodeGenerator:
    """
    Random fixed-length ids drawn uniformly from a URL-safe alphabet.

    Uses the secrets module (OS CSPRNG). Uniqueness against stored
    links is NOT checked here; a repeated id surfaces as a primary key
    violation on insert and is handled by the link service.

    With the default 64-character alphabet and length 6 there are
    64**6 (about 6.9e10) possible ids.
    """

    def __init__(self, length: int = 6, alphabet: str = URL_SAFE_ALPHABET):
        if length < 1:
            raise ValueError(f"Short code length must be positive, got {length}")
        if not alphabet:
            raise ValueError("Short code alphabet must not be empty")
        if len(set(alphabet)) != len(alphabet):
            raise ValueError("Short code alphabet must not repeat characters")

        self.length = length
        self.alphabet = alphabet

    def generate(self) -> str:
        """Generate one random short code"""
        return ''.join(secrets.choice(self.alphabet) for _ in range(self.length))
