"""Identity token generation."""

import uuid


def create_unique_token() -> str:
    """Return a new in-memory identity token (uuid4, lowercase hex)."""
    return str(uuid.uuid4())
