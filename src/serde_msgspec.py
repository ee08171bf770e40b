"""msgspec struct bases, encoders and decoding helpers shared by the project."""

from __future__ import annotations

from pathlib import Path
from typing import Final

import msgspec


class StructBaseStrict(
    msgspec.Struct,
    frozen=True,
    kw_only=True,
    omit_defaults=True,
    repr_omit_defaults=True,
    forbid_unknown_fields=True,
):
    """Immutable struct rejecting unknown fields on decode."""


class StructBaseHotPath(
    msgspec.Struct,
    frozen=True,
    kw_only=True,
    omit_defaults=True,
    repr_omit_defaults=True,
    gc=False,
    cache_hash=True,
):
    """Immutable struct for values created once per stage evaluation."""


_AT_MARKER: Final = " - at `"


def _enc_hook(obj: object) -> object:
    if isinstance(obj, Path):
        return str(obj)
    msg = f"Cannot encode {type(obj).__name__}"
    raise NotImplementedError(msg)


JSON_ENCODER = msgspec.json.Encoder(enc_hook=_enc_hook, order="deterministic")
JSON_ENCODER_SORTED = msgspec.json.Encoder(enc_hook=_enc_hook, order="sorted")
MSGPACK_ENCODER = msgspec.msgpack.Encoder(enc_hook=_enc_hook, order="deterministic")
# Keeps mapping insertion order, which is part of a host value's identity.
MSGPACK_ENCODER_ORDERED = msgspec.msgpack.Encoder(enc_hook=_enc_hook)


def validation_error_payload(exc: msgspec.ValidationError) -> dict[str, str]:
    """Split a msgspec validation message into summary and location.

    ``"Expected `int` >= 0 - at `$.length`"`` becomes
    ``{"type": "ValidationError", "summary": "Expected `int` >= 0", "path": "$.length"}``.

    Returns
    -------
    dict[str, str]
        Error type, summary and, when reported, the offending path.
    """
    message = str(exc).strip()
    payload = {"type": type(exc).__name__}
    summary, marker, location = message.partition(_AT_MARKER)
    payload["summary"] = summary.strip() or message
    if marker and location.endswith("`"):
        payload["path"] = location[:-1]
    return payload


def dumps_json(obj: object, *, pretty: bool = False) -> bytes:
    """Encode ``obj`` as JSON, optionally indented by two spaces.

    Returns
    -------
    bytes
        JSON document.
    """
    raw = JSON_ENCODER.encode(obj)
    return msgspec.json.format(raw, indent=2) if pretty else raw


def loads_json[T](buf: bytes | str, *, target_type: type[T], strict: bool = True) -> T:
    """Decode a JSON document into ``target_type``.

    Returns
    -------
    T
        Decoded value.
    """
    return msgspec.json.decode(buf, type=target_type, strict=strict)


def dumps_msgpack(obj: object, *, ordered: bool = False) -> bytes:
    """Encode ``obj`` as MessagePack.

    Parameters
    ----------
    obj
        Value to encode.
    ordered
        Keep mapping insertion order; by default keys are sorted.

    Returns
    -------
    bytes
        MessagePack payload.
    """
    encoder = MSGPACK_ENCODER_ORDERED if ordered else MSGPACK_ENCODER
    return encoder.encode(obj)


def convert[T](obj: object, *, target_type: type[T], strict: bool = True) -> T:
    """Validate builtin data (e.g. parsed TOML) into ``target_type``.

    Returns
    -------
    T
        Converted value.
    """
    return msgspec.convert(obj, type=target_type, strict=strict)


def to_builtins(obj: object, *, str_keys: bool = True) -> object:
    """Lower structs and paths to JSON-compatible builtins.

    Returns
    -------
    object
        Builtin representation with deterministically ordered keys.
    """
    return msgspec.to_builtins(obj, order="deterministic", str_keys=str_keys, enc_hook=_enc_hook)


__all__ = [
    "JSON_ENCODER",
    "JSON_ENCODER_SORTED",
    "MSGPACK_ENCODER",
    "MSGPACK_ENCODER_ORDERED",
    "StructBaseHotPath",
    "StructBaseStrict",
    "convert",
    "dumps_json",
    "dumps_msgpack",
    "loads_json",
    "to_builtins",
    "validation_error_payload",
]
