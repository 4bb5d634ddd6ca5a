"""
Shared base for domain records.

Records keep snake_case attributes in Python and speak camelCase on the
wire (API bodies and the durable session record), matching the field
names the dashboard client has always used.
"""
import secrets
import string
from datetime import datetime, timezone

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

ID_ALPHABET = string.ascii_lowercase + string.digits
ID_LENGTH = 13


def generate_id() -> str:
    """Generate an opaque 13-character record id."""
    return "".join(secrets.choice(ID_ALPHABET) for _ in range(ID_LENGTH))


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class RecordModel(BaseModel):
    """Base class for all camelCase-aliased models."""
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )
