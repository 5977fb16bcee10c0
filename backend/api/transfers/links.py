"""Shareable link ids."""

import base64

SHAREABLE_ID_LENGTH = 12


def derive_shareable_id(transfer_id: str) -> str:
    """Short URL-safe id derived from the record id."""
    encoded = base64.urlsafe_b64encode(transfer_id.encode()).decode("ascii")
    return encoded.replace("=", "")[:SHAREABLE_ID_LENGTH]
