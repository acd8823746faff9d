"""Tests for Universe construction and provenance."""

from __future__ import annotations

import asyncio
import re
from unittest.mock import patch

import pytest

from laplace.generator import InvalidRangeError
from laplace.harvest import EntropyHarvester
from laplace.types import REPLAY_MARKER, RawSample, SourceKind
from laplace.universe import Universe

TWO_POW_32 = 4294967296


class FixedProbe:
    """Probe that always returns the same sample."""

    def __init__(self, kind: SourceKind, payload: str):
        self.kind = kind
        self._payload = payload

    def fetch(self) -> RawSample:
        return RawSample(self.kind, self._payload)


def fixed_harvester(on_event=None) -> EntropyHarvester:
    return EntropyHarvester(
        local=FixedProbe(SourceKind.LOCAL, "0123456789abcdef..."),
        remotes=[
            FixedProbe(SourceKind.QUANTUM, "a1b2c3d4e5f60718"),
            FixedProbe(SourceKind.WEATHER, "36.6"),
        ],
        on_event=on_event,
    )


class TestFromSeed:
    """Tests for Universe.from_seed()."""

    def test_first_draw(self):
        """A replay universe starts at the seed's first value."""
        assert Universe.from_seed(42).random() == 2581720956 / TWO_POW_32

    def test_zero_is_valid_seed(self):
        """Seed 0 replays like any other seed."""
        universe = Universe.from_seed(0)
        assert universe.export_seed() == 0
        assert universe.is_replay
        assert universe.random() == 1144304738 / TWO_POW_32

    def test_replay_marker(self):
        """Replays report the replay sentinel instead of samples."""
        universe = Universe.from_seed(7)
        assert universe.get_entropy_details() == [REPLAY_MARKER]
        assert universe.samples is None

    @pytest.mark.parametrize("seed", [-1, 2**32])
    def test_out_of_range(self, seed):
        with pytest.raises(ValueError):
            Universe.from_seed(seed)

    def test_non_int(self):
        with pytest.raises(TypeError):
            Universe.from_seed("42")


class TestCreate:
    """Tests for Universe.create()."""

    def test_create_with_harvester(self):
        """The seed is the mix of the harvested samples."""
        universe = Universe.create(harvester=fixed_harvester())
        assert universe.export_seed() == 2092868600
        assert not universe.is_replay
        assert universe.get_entropy_details() == [
            "LOCAL:0123456789abcdef...",
            "QUANTUM:a1b2c3d4e5f60718",
            "WEATHER:36.6",
        ]

    def test_offline_create(self):
        """Offline universes are seeded from the local sample only."""
        universe = Universe.create(offline=True)
        details = universe.get_entropy_details()
        assert len(details) == 1
        assert re.fullmatch(r"LOCAL:[0-9a-f]{16}\.\.\.", details[0])
        assert 0 <= universe.export_seed() < 2**32

    def test_on_event_forwarded(self):
        """create() forwards on_event to the default harvester."""
        events = []
        Universe.create(offline=True, on_event=events.append)
        assert events[-1].payload["sources"][0].startswith("LOCAL:")

    def test_acreate(self):
        """acreate() awaits the same harvest in a worker thread."""
        universe = asyncio.run(Universe.acreate(harvester=fixed_harvester()))
        assert universe.export_seed() == 2092868600


class TestGeneration:
    """Tests for the Universe draw methods."""

    def test_export_seed_is_initial_seed(self):
        """Drawing does not change the exported seed."""
        universe = Universe.from_seed(99)
        universe.random()
        universe.random_hex(8)
        assert universe.export_seed() == 99

    def test_random_int_delegates(self):
        universe = Universe.from_seed(42)
        assert [universe.random_int(1, 100) for _ in range(5)] == [61, 45, 86, 67, 18]

    def test_random_int_inverted(self):
        with pytest.raises(InvalidRangeError):
            Universe.from_seed(1).random_int(5, 4)

    def test_random_hex(self):
        assert Universe.from_seed(42).random_hex() == "97da2849d73eb438"

    def test_universes_do_not_share_state(self):
        """Drawing from one universe never advances another."""
        a = Universe.from_seed(5)
        b = Universe.from_seed(5)
        a.random()
        a.random()
        assert b.random() == Universe.from_seed(5).random()


class TestSerialization:
    """Tests for to_dict() / from_dict()."""

    def test_to_dict_fresh(self):
        universe = Universe.create(harvester=fixed_harvester())
        data = universe.to_dict()
        assert data["seed"] == 2092868600
        assert data["sources"][1] == "QUANTUM:a1b2c3d4e5f60718"

    def test_from_dict_replays(self):
        universe = Universe.create(harvester=fixed_harvester())
        replay = Universe.from_dict(universe.to_dict())
        assert replay.is_replay
        assert replay.random() == Universe.from_seed(2092868600).random()

    def test_repr(self):
        assert repr(Universe.from_seed(3)) == "Universe(seed=3, origin=replay)"


class TestCreateCleanup:
    """Tests for resource cleanup in create()."""

    def test_default_harvester_session_closed(self):
        """create() closes the session of the harvester it builds."""
        with patch("laplace.harvest.requests.Session") as session_cls:
            Universe.create(offline=True)
        session_cls.return_value.close.assert_called_once()
