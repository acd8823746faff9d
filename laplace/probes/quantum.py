"""QuantumProbe: ANU quantum random numbers (vacuum fluctuation)."""

from __future__ import annotations

import string
from typing import Any

from laplace.probes.base import ProbeMalformedResponse, RemoteProbe
from laplace.types import SourceKind

_HEX_DIGITS = frozenset(string.hexdigits)


class QuantumProbe(RemoteProbe):
    """
    Requests one hex16 block of size 4 and uses ``data[0]`` as the sample.

    The API answers ``{"type": "string", "length": 1, "size": 4,
    "data": ["a1b2c3d4"], "success": true}``.
    """

    kind = SourceKind.QUANTUM

    @property
    def url(self) -> str:
        return self._config.quantum_url

    def params(self) -> dict[str, Any]:
        return {"length": 1, "type": "hex16", "size": 4}

    def parse(self, body: Any) -> str:
        data = body["data"]
        if not isinstance(data, list):
            raise ProbeMalformedResponse(self.kind, f"data is not a list: {data!r}")
        value = data[0]
        if not isinstance(value, str) or not value or not set(value) <= _HEX_DIGITS:
            raise ProbeMalformedResponse(self.kind, f"not a hex string: {value!r}")
        return value.lower()
