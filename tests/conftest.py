# tests/conftest.py
"""Global PyTest fixtures for the test-suite.

No test talks to a real service: the S3 client is the in-memory fake from
``tests.helpers`` and HTTP goes through an ``httpx.MockTransport`` that serves
whatever a test puts in ``web_routes``. Unrouted URLs answer 404.
"""

from __future__ import annotations

import signal
from types import FrameType
from typing import Callable, Generator

import httpx
import pytest

from resourceio.clients import TransportClients
from resourceio.config import ResourceConfig
from resourceio.dispatcher import Dispatcher
from tests.helpers import FakeClock, InMemoryS3Client

DEFAULT_TEST_TIMEOUT_SECONDS = 30.0

WebRoutes = dict[str, httpx.Response | Exception]


def _build_timeout_handler(
    timeout_seconds: float,
) -> Callable[[int, FrameType | None], None]:
    """Create SIGALRM handler that fails the test when timeout is reached."""

    def _handle_timeout(signum: int, frame: FrameType | None) -> None:
        pytest.fail(
            f"Test exceeded {timeout_seconds:.0f}s timeout (includes setup/teardown)",
            pytrace=True,
        )

    return _handle_timeout


def _resolve_timeout_seconds(request: pytest.FixtureRequest) -> float:
    """Return timeout for current test (marker override allowed)."""
    marker = request.node.get_closest_marker("timeout")
    if marker is None:
        return DEFAULT_TEST_TIMEOUT_SECONDS

    raw_value = marker.kwargs.get("seconds", marker.args[0] if marker.args else None)
    if raw_value is None:
        pytest.fail("timeout marker requires seconds argument", pytrace=True)

    seconds = float(raw_value)
    if seconds <= 0:
        pytest.fail("timeout marker must be positive seconds", pytrace=True)

    return seconds


@pytest.fixture(autouse=True)
def per_test_timeout(request: pytest.FixtureRequest) -> Generator[None, None, None]:
    """Fail any test that runs longer than the default timeout."""
    if not hasattr(signal, "SIGALRM") or not hasattr(signal, "setitimer"):
        yield
        return

    timeout_seconds = _resolve_timeout_seconds(request)
    handler = _build_timeout_handler(timeout_seconds)
    previous_handler = signal.getsignal(signal.SIGALRM)
    signal.signal(signal.SIGALRM, handler)
    signal.setitimer(signal.ITIMER_REAL, timeout_seconds)
    try:
        yield
    finally:
        signal.setitimer(signal.ITIMER_REAL, 0.0)
        signal.signal(signal.SIGALRM, previous_handler)


# =========================================================================== #
#                   TRANSPORT FIXTURES                                        #
# =========================================================================== #


@pytest.fixture
def s3_client() -> InMemoryS3Client:
    """Fake S3 client with one bucket, ``mybucket``, listing two keys per page."""
    return InMemoryS3Client(buckets=("mybucket",), page_size=2)


@pytest.fixture
def web_routes() -> WebRoutes:
    """URL -> canned response (or exception to raise) for the mock transport."""
    return {}


@pytest.fixture
def http_client(web_routes: WebRoutes) -> httpx.AsyncClient:
    def handler(request: httpx.Request) -> httpx.Response:
        routed = web_routes.get(str(request.url))
        match routed:
            case None:
                return httpx.Response(404)
            case Exception():
                raise routed
            case response:
                return response

    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


@pytest.fixture
def clients(s3_client: InMemoryS3Client, http_client: httpx.AsyncClient) -> TransportClients:
    """Injected clients are usable without entering the context manager."""
    return TransportClients(ResourceConfig(), s3_client=s3_client, http_client=http_client)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def dispatcher(clients: TransportClients, clock: FakeClock) -> Dispatcher:
    """
    Dispatcher over the fake transports with a virtual clock.

    Backoff sleeps are recorded in ``clock.sleeps`` and advance ``clock.now``
    instead of blocking, so retry tests run instantly.

    Usage:
        async def test_something(dispatcher: Dispatcher) -> None:
            expect_success(await dispatcher.write("gs://mybucket/key", b"data"))
    """
    return Dispatcher(clients, sleep=clock.sleep, clock=clock)
