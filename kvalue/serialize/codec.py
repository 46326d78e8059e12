"""Envelope codec: Envelope <-> storage-safe string.

Stored layout::

    {"ctx": <json>, "createdAt": <ISO-8601>, "lifetime": <ISO-8601>|null,
     "encoder": {"use": bool, "store": str, "parse": str}}

With ``encoder.use`` the ``ctx`` member is armored as ``{"save": <text>}``,
where ``<text>`` is the ``store``-encoded JSON of the projected value.
"""

import base64
import json
from typing import Any, Callable, Optional

from kvalue.core.exceptions import SerializationError
from kvalue.core.models import EncoderOptions, Envelope, KValueEntry
from kvalue.serialize.registry import TypeRegistry
from kvalue.serialize.types import default_registry

_STORES: dict[str, tuple[Callable[[bytes], str], Callable[[str], bytes]]] = {
    "base64": (
        lambda raw: base64.b64encode(raw).decode("ascii"),
        lambda text: base64.b64decode(text, validate=True),
    ),
    "base64url": (
        lambda raw: base64.urlsafe_b64encode(raw).decode("ascii"),
        lambda text: base64.urlsafe_b64decode(text),
    ),
    "hex": (
        lambda raw: raw.hex(),
        lambda text: bytes.fromhex(text),
    ),
}


class Codec:
    """Serialize envelopes through a type registry."""

    def __init__(self, registry: Optional[TypeRegistry] = None) -> None:
        self.registry = registry or default_registry

    def encode(self, envelope: Envelope) -> str:
        """Encode an envelope into its stored string form."""
        encoder = envelope.encoder
        ctx: Any = self.registry.project(envelope.ctx)

        if encoder.use:
            payload = json.dumps(ctx).encode(encoder.parse)
            ctx = {"save": _STORES[encoder.store][0](payload)}

        document = {
            "ctx": ctx,
            "createdAt": envelope.created_at.isoformat(),
            "lifetime": envelope.lifetime.isoformat() if envelope.lifetime else None,
            "encoder": encoder.model_dump(),
        }
        return json.dumps(document)

    def decode(self, entry: Optional[KValueEntry]) -> Optional[Envelope]:
        """Decode a stored row back into an envelope.

        Returns:
            The envelope, or None if the row is missing or holds no value

        Raises:
            SerializationError: If the stored payload is malformed
        """
        if entry is None or entry.value is None:
            return None

        try:
            document = json.loads(entry.value)
            # rows written without an encoder descriptor were never armored
            encoder = EncoderOptions(**(document.get("encoder") or {"use": False}))
            ctx = document.get("ctx")
            if encoder.use:
                raw = _STORES[encoder.store][1](ctx["save"])
                ctx = json.loads(raw.decode(encoder.parse))
            return Envelope(
                ctx=self.registry.restore(ctx),
                createdAt=document["createdAt"],
                lifetime=document.get("lifetime"),
                encoder=encoder,
            )
        except (ValueError, KeyError, TypeError) as e:
            raise SerializationError(
                f"Failed to decode stored value for key '{entry.key}': {e}", namespace="codec"
            ) from e


_default_codec = Codec()


def encode(envelope: Envelope) -> str:
    """Encode with the default registry."""
    return _default_codec.encode(envelope)


def decode(entry: Optional[KValueEntry]) -> Optional[Envelope]:
    """Decode with the default registry."""
    return _default_codec.decode(entry)
