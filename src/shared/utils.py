"""Shared utility functions."""
import re


def sanitize_name(name: str) -> str:
    """Strip everything but ASCII letters and digits (``"Pet Store!"`` -> ``"PetStore"``)."""
    return re.sub(r"[^a-zA-Z0-9]", "", name)


def sanitize_path(path: str) -> str:
    """Turn an API path into an identifier fragment.

    ``/api/users/{id}`` -> ``api_users_id``
    """
    clean = re.sub(r"[{}]", "", path).replace("/", "_")
    return re.sub(r"^_", "", clean)
