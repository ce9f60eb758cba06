"""
Canonical bytes for the proof artifact's IO commitment.

An artifact travels as JSON, and a verifier recomputes its commitment from the
parsed inputs and outputs, so both sides must hash byte-identical text no
matter how the artifact was re-serialized in between (key order, whitespace).
Storage words and output words are carried as 0x-hex strings; block numbers and
slot indexes are the only JSON ints.
"""

from __future__ import annotations

import hashlib
import json
from typing import Any


CANONICAL_ENCODING_VERSION = 1


def _reject_floats(value: Any) -> None:
    if isinstance(value, float):
        raise TypeError("floats are not allowed in canonical encoding")
    if isinstance(value, dict):
        for k in value.keys():
            if not isinstance(k, str):
                raise TypeError("dict keys must be str for canonical encoding")
        for v in value.values():
            _reject_floats(v)
        return
    if isinstance(value, (list, tuple)):
        for item in value:
            _reject_floats(item)


def canonical_json_bytes(value: Any) -> bytes:
    """
    Key-sorted, whitespace-free UTF-8 JSON of an artifact fragment.

    Floats are rejected outright: a rate or word that slipped in as a float would
    hash differently from its integer or hex form on the verifier side.
    """
    _reject_floats(value)
    text = json.dumps(
        value,
        sort_keys=True,
        separators=(",", ":"),
        ensure_ascii=False,
        allow_nan=False,
    )
    return text.encode("utf-8")


def sha256_hex(data: bytes) -> str:
    return "0x" + hashlib.sha256(data).hexdigest()


def domain_sep_bytes(label: str, version: int = 1) -> bytes:
    """
    NUL-terminated `cometproof:<label>:v<version>` prefix for a commitment preimage.

    Keeps an IO commitment for one circuit version from colliding with any other
    hash over the same canonical JSON.
    """
    if not isinstance(label, str) or not label:
        raise TypeError("label must be a non-empty str")
    if "\x00" in label:
        raise ValueError("label must not contain NUL")
    try:
        label_bytes = label.encode("ascii")
    except UnicodeEncodeError as exc:
        raise ValueError("label must be ASCII") from exc
    if not isinstance(version, int) or isinstance(version, bool) or version <= 0:
        raise ValueError("version must be a positive int")
    return b"cometproof:" + label_bytes + b":v" + str(version).encode("ascii") + b"\x00"
