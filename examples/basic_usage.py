#!/usr/bin/env python3
"""
Basic resourceio example.

Demonstrates:
- Writing and reading a gzip-compressed local file (codec inferred from ``.gz``)
- Listing a directory
- Telling NotFound apart from failures
- Reading an object-store key when ``AWS_ENDPOINT_URL`` points at MinIO
"""

from __future__ import annotations

import asyncio
import os
import tempfile

from resourceio import (
    Dispatcher,
    Failure,
    MimeType,
    NotFound,
    ResourceConfig,
    RetryPolicy,
    Success,
    TransportClients,
)


async def main() -> None:
    """Run basic resourceio demo."""
    match ResourceConfig.from_env():
        case Failure(error):
            print(f"Configuration error: {error}")
            return
        case Success(config):
            pass

    policy = RetryPolicy(initial_interval=0.2, max_retries=3)

    with tempfile.TemporaryDirectory() as tmpdir:
        async with TransportClients(config) as clients:
            dispatcher = Dispatcher(clients)
            target = os.path.join(tmpdir, "events.ndjson.gz")

            print("=== Write ===")
            payload = b'{"event": "start"}\n{"event": "stop"}\n'
            match await dispatcher.write(target, payload, MimeType.NDJSON, policy):
                case Success(_):
                    print(f"Wrote {len(payload)} bytes to {target}")
                case Failure(error):
                    print(f"Write failed: {error}")
                    return

            print("\n=== Read ===")
            match await dispatcher.read_as_text(target, policy):
                case Success(NotFound()):
                    print("Unexpectedly missing")
                case Success(text):
                    print(text, end="")
                case Failure(error):
                    print(f"Read failed: {error}")

            print("\n=== List ===")
            match await dispatcher.list(tmpdir):
                case Success(children):
                    for child in children:
                        print(child)
                case Failure(error):
                    print(f"List failed: {error}")

            print("\n=== Missing resource ===")
            match await dispatcher.read(os.path.join(tmpdir, "absent.bin")):
                case Success(NotFound(identifier)):
                    print(f"NotFound: {identifier}")
                case other:
                    print(f"Unexpected: {other}")

            if config.object_store.endpoint_url is not None:
                print("\n=== Object store ===")
                key = "gs://resourceio-demo/events.ndjson.gz"
                await dispatcher.create_bucket(key, policy)
                await dispatcher.write(key, payload, MimeType.NDJSON, policy)
                print(await dispatcher.list("gs://resourceio-demo/", policy))

    print("\nDemo completed successfully!")


if __name__ == "__main__":
    asyncio.run(main())
