"""Radix-64 encoding for binary attachments.

`encode` uses the standard library. `encode_manual` is the same algorithm
written out by hand for environments without a base64 module; both must
produce identical output.
"""
from __future__ import annotations

import base64

ALPHABET = "ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789+/"

def encode(data: bytes) -> str:
    return base64.b64encode(bytes(data)).decode("ascii")

def encode_manual(data: bytes) -> str:
    data = bytes(data)
    out = []
    for i in range(0, len(data), 3):
        chunk = data[i : i + 3]
        n = len(chunk)
        # missing low-order bytes count as zero
        word = int.from_bytes(chunk + b"\x00" * (3 - n), "big")
        symbols = [ALPHABET[(word >> shift) & 0x3F] for shift in (18, 12, 6, 0)]
        if n < 3:
            symbols[n + 1 :] = "=" * (3 - n)
        out.append("".join(symbols))
    return "".join(out)
