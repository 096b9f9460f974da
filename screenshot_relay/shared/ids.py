"""ID generation helpers."""

import uuid


def generate_id(prefix: str) -> str:
    """Generate a prefixed unique id, e.g. ``req_3f2a...``."""
    return f"{prefix}_{uuid.uuid4().hex}"


def generate_request_id() -> str:
    return generate_id("req")
