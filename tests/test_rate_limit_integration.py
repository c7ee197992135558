"""Integration tests for rate limiting against a real HTTP server.

These tests start an actual Uvicorn server and fire concurrent requests at
it, so the limiter is exercised through the full middleware and
dependency stack.
"""

import multiprocessing
import time
from concurrent.futures import ThreadPoolExecutor
from typing import Generator

import httpx
import pytest
import uvicorn

PORT = 8011
BASE_URL = f"http://127.0.0.1:{PORT}"


def run_server():
    """Run the FastAPI server in a separate process."""
    uvicorn.run(
        "profind.main:app",
        host="127.0.0.1",
        port=PORT,
        log_level="error",
        access_log=False,
    )


@pytest.fixture(scope="module")
def server() -> Generator[str, None, None]:
    process = multiprocessing.Process(target=run_server, daemon=True)
    process.start()

    for _ in range(50):
        try:
            if httpx.get(f"{BASE_URL}/health", timeout=1.0).status_code == 200:
                break
        except (httpx.ConnectError, httpx.ReadTimeout):
            time.sleep(0.1)
    else:
        process.terminate()
        pytest.fail("Server failed to start")

    yield BASE_URL

    process.terminate()
    process.join(timeout=5)


def test_concurrent_searches_respect_limit(server: str) -> None:
    headers = {"X-Forwarded-For": "198.51.100.77"}

    def call(_: int) -> int:
        return httpx.post(f"{server}/v1/search", json={"records": []}, headers=headers, timeout=5.0).status_code

    with ThreadPoolExecutor(max_workers=10) as pool:
        statuses = list(pool.map(call, range(40)))

    assert statuses.count(200) == 30
    assert statuses.count(429) == 10


def test_throttled_response_has_retry_headers(server: str) -> None:
    headers = {"X-Forwarded-For": "198.51.100.78"}
    for _ in range(5):
        httpx.post(
            f"{server}/v1/reviews",
            json={"provider_id": "p-1", "reviewer_name": "Asha", "reviewer_phone": "6001234", "rating": 4},
            headers=headers,
        )

    resp = httpx.post(
        f"{server}/v1/reviews",
        json={"provider_id": "p-1", "reviewer_name": "Asha", "reviewer_phone": "6001234", "rating": 4},
        headers=headers,
    )

    assert resp.status_code == 429
    assert int(resp.headers["Retry-After"]) > 0
    assert resp.headers["X-Request-ID"]
