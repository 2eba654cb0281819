"""Note identifier generation."""

import secrets
import time


def generate_id() -> str:
    """Return a new note id: epoch milliseconds plus 48 random bits."""
    return f"{time.time_ns() // 1_000_000}_{secrets.token_hex(6)}"
