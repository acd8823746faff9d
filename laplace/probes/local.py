"""LocalProbe: OS cryptographic randomness. Cannot fail."""

from __future__ import annotations

import secrets

from laplace.types import RawSample, SourceKind

LOCAL_BYTES = 32
DISPLAY_CHARS = 16


class LocalProbe:
    """
    Reads 32 bytes from the OS CSPRNG.

    Only the first 16 hex characters are kept (with a trailing ellipsis);
    that rendered form is what gets mixed into the seed.
    """

    kind = SourceKind.LOCAL

    def fetch(self) -> RawSample:
        raw = secrets.token_bytes(LOCAL_BYTES).hex()
        return RawSample(label=self.kind, payload=f"{raw[:DISPLAY_CHARS]}...")

    def __repr__(self) -> str:
        return "LocalProbe()"
