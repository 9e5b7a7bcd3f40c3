from __future__ import annotations

import random

import fakeredis
import pytest

from colormatch.api.models import DevicePair
from colormatch.session import RoundSession


@pytest.fixture()
def devices() -> DevicePair:
    return DevicePair(reference="gadget-ref", player="gadget-player")


@pytest.fixture()
def rng() -> random.Random:
    # Seeded so the hidden target shade is reproducible within a test.
    return random.Random(1234)


@pytest.fixture()
def session(rng: random.Random) -> RoundSession:
    return RoundSession(rng=rng)


@pytest.fixture()
def r() -> fakeredis.FakeRedis:
    return fakeredis.FakeRedis(decode_responses=True)
