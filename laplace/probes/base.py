"""
Probe protocol and shared plumbing for remote entropy sources.

Provides:
- ProbeError and its subclasses: The failure taxonomy for a single fetch
- SourceProbe: Protocol implemented by every probe
- RemoteProbe: Base class issuing one bounded-time HTTP GET via requests

A probe attempts exactly one fetch. It never retries; any timeout, transport
error or unexpected payload surfaces as a ProbeError for the harvester to
absorb.
"""

from __future__ import annotations

import logging
from typing import Any, Protocol

import requests

from laplace.config import HarvestConfig
from laplace.types import RawSample, SourceKind

logger = logging.getLogger(__name__)


class ProbeError(Exception):
    """Base class for a failed probe fetch."""

    def __init__(self, source: SourceKind, message: str) -> None:
        super().__init__(f"{source.value}: {message}")
        self.source = source


class ProbeTimeout(ProbeError):
    """The source did not answer within the probe's timeout."""

    pass


class ProbeTransportError(ProbeError):
    """Connection failure or a non-2xx HTTP status."""

    pass


class ProbeMalformedResponse(ProbeError):
    """The source answered, but the payload was not what we expected."""

    pass


class SourceProbe(Protocol):
    """A single entropy source."""

    @property
    def kind(self) -> SourceKind:
        """Label of the samples this probe produces."""
        ...

    def fetch(self) -> RawSample:
        """
        Fetch one sample.

        Raises:
            ProbeError: If the source could not produce a sample.
        """
        ...


class RemoteProbe:
    """
    Base class for probes backed by a JSON HTTP API.

    Subclasses set ``kind`` and implement ``url``, ``params`` and
    ``parse``. The session is injectable so callers can share connection
    pools or substitute a fake in tests.
    """

    kind: SourceKind

    def __init__(
        self,
        config: HarvestConfig | None = None,
        session: requests.Session | None = None,
    ) -> None:
        self._config = config or HarvestConfig()
        self._session = session or requests.Session()

    @property
    def timeout(self) -> float:
        """
        Connect and per-read timeout in seconds.

        This does not bound the total transfer time; the harvester enforces
        the overall deadline.
        """
        return self._config.timeout

    def headers(self) -> dict[str, str]:
        """Per-request headers. The session itself is never modified."""
        if self._config.user_agent:
            return {"User-Agent": self._config.user_agent}
        return {}

    @property
    def url(self) -> str:
        raise NotImplementedError

    def params(self) -> dict[str, Any]:
        raise NotImplementedError

    def parse(self, body: Any) -> str:
        """Extract the sample payload from a decoded JSON body."""
        raise NotImplementedError

    def fetch(self) -> RawSample:
        """
        Issue one GET and turn the response into a RawSample.

        Raises:
            ProbeTimeout: If the request timed out.
            ProbeTransportError: On connection errors or non-2xx status.
            ProbeMalformedResponse: If the body is not valid for this source.
        """
        logger.debug(f"Fetching {self.kind.value} entropy from {self.url}")
        try:
            response = self._session.get(
                self.url,
                params=self.params(),
                headers=self.headers(),
                timeout=self.timeout,
            )
            response.raise_for_status()
        except requests.Timeout as e:
            raise ProbeTimeout(self.kind, f"timed out after {self.timeout}s") from e
        except requests.RequestException as e:
            raise ProbeTransportError(self.kind, str(e)) from e

        try:
            body = response.json()
        except ValueError as e:
            raise ProbeMalformedResponse(self.kind, "response is not JSON") from e

        try:
            payload = self.parse(body)
        except (KeyError, IndexError, TypeError) as e:
            raise ProbeMalformedResponse(
                self.kind, f"unexpected payload shape: {e!r}"
            ) from e

        return RawSample(label=self.kind, payload=payload)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(url={self.url!r}, timeout={self.timeout})"
