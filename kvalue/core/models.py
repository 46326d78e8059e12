"""Core data models for the key-value abstraction."""

import codecs
from datetime import UTC, datetime
from typing import Any, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class EncoderOptions(BaseModel):
    """Encoding descriptor stored alongside every envelope.

    Attributes:
        use: Whether ``ctx`` is armored as ``{"save": <text>}`` before storage
        store: Byte-to-text encoding of the armored payload
        parse: Charset used to turn the JSON payload into bytes and back
    """

    use: bool = True
    store: Literal["base64", "base64url", "hex"] = "base64"
    parse: str = "utf-8"

    @field_validator("parse")
    @classmethod
    def _known_charset(cls, value: str) -> str:
        try:
            codecs.lookup(value)
        except LookupError as e:
            raise ValueError(f"unknown charset {value!r}") from e
        return value


class Envelope(BaseModel):
    """Wrapper around a user value holding creation time, expiry and encoding."""

    model_config = ConfigDict(populate_by_name=True, arbitrary_types_allowed=True)

    ctx: Any = None
    created_at: datetime = Field(
        default_factory=lambda: datetime.now(UTC), alias="createdAt"
    )
    lifetime: Optional[datetime] = None
    encoder: EncoderOptions = Field(default_factory=EncoderOptions)


class KValueEntry(BaseModel):
    """A raw storage row: one key and its encoded value."""

    key: str
    value: Optional[str] = None


class KeyValue(BaseModel):
    """Result item of a multi-key ``get``."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    key: str
    value: Any = None


class KeyPresence(BaseModel):
    """Result item of a multi-key ``has``."""

    key: str
    has: bool


class LimiterOptions(BaseModel):
    """Random sampling and truncation applied to listings."""

    model_config = ConfigDict(strict=True)

    limit: Optional[int] = Field(default=None, ge=0)
    randomize: bool = False
