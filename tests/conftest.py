from __future__ import annotations

from datetime import datetime, timedelta

import pytest

VALID_TOKEN = "t1.9euelZqKnpGQm5XOyZ2Tz8-VzpKdl-3rnpWax5eOj8yUnpvNnJOclJuKz5Xl8_dCCwNJ-e8RG0Ry_d3z9wI6AEn57xEbRHL9." + "a" * 86


class FakeClock:
    def __init__(self, start: datetime | None = None) -> None:
        self.now = start or datetime(2024, 1, 1, 12, 0, 0)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now += timedelta(**kwargs)


class FakeIssuer:
    def __init__(self, *outputs: bytes | Exception) -> None:
        self.outputs = list(outputs) or [VALID_TOKEN.encode() + b"\n"]
        self.calls = 0

    def __call__(self) -> bytes:
        self.calls += 1
        output = self.outputs[min(self.calls, len(self.outputs)) - 1]
        if isinstance(output, Exception):
            raise output
        return output


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def issuer() -> FakeIssuer:
    return FakeIssuer()
