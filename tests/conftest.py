"""
Shared fixtures for the UseGrant tool tests.

Provides a recording fake of the UseGrant SDK client factory so tools can be
exercised without a network.
"""

import asyncio
from typing import Any, Dict, List, Optional, Tuple

import pytest

from tools.registry import create_tools


class FakeGrantClient:
    """Stands in for a UseGrant SDK client; every method records its call."""

    def __init__(self, sdk: "FakeSdk", api_key: str, signal: Optional[asyncio.Event]):
        self.sdk = sdk
        self.api_key = api_key
        self.signal = signal

    def __getattr__(self, method: str):
        async def call(*args: Any) -> Any:
            self.sdk.calls.append((method, args))
            response = self.sdk.responses.get(method)
            if isinstance(response, BaseException):
                raise response
            return response

        return call


class FakeSdk:
    """Client factory that records every client built and every SDK call."""

    def __init__(self) -> None:
        self.responses: Dict[str, Any] = {}
        self.calls: List[Tuple[str, tuple]] = []
        self.clients: List[FakeGrantClient] = []

    def __call__(self, api_key: str, *, signal: Optional[asyncio.Event] = None) -> FakeGrantClient:
        client = FakeGrantClient(self, api_key, signal)
        self.clients.append(client)
        return client


@pytest.fixture
def fake_sdk() -> FakeSdk:
    return FakeSdk()


@pytest.fixture
def tools(fake_sdk: FakeSdk):
    return create_tools("key1", fake_sdk)
