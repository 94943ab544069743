# src/resourceio/__main__.py
"""CLI for identifier-addressed resource operations.

Usage:
    python -m resourceio ls <identifier>
    python -m resourceio cat <identifier> [--compression {gzip,none}]
    python -m resourceio exists <identifier>
    python -m resourceio put <identifier> <source-file> [--content-type TYPE] [--compression ...]
    python -m resourceio rm <identifier>
    python -m resourceio bucket-exists <identifier>
    python -m resourceio mb <identifier>

Examples:
    # List a directory-like prefix
    python -m resourceio ls gs://my-bucket/data/

    # Upload a file gzip-compressed (inferred from the .gz extension)
    python -m resourceio put gs://my-bucket/data/events.json.gz events.json --content-type application/json

    # Print a remote file
    python -m resourceio cat https://example.com/robots.txt

    # Retry at most 3 times, starting at 0.2s
    python -m resourceio exists s3://my-bucket/key --max-retries 3 --initial-interval 0.2

Exit codes:
    0: Success (or "exists")
    1: Not found (or "does not exist")
    2: Error
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from typing import Awaitable, Callable, Never, NoReturn

from .clients import TransportClients
from .compression import Compression
from .config import ResourceConfig
from .dispatcher import Dispatcher
from .errors import (
    CompressionError,
    DecodeError,
    InvalidAddress,
    InvalidConfig,
    LocalIOError,
    PermanentAccessError,
    ResourceError,
    TransientAccessError,
    UnsupportedOperation,
)
from .mime import MimeType
from .result import Failure, NotFound, Success
from .retry import RetryPolicy


def assert_never(value: Never) -> Never:
    """Exhaustiveness check for pattern matching."""
    raise AssertionError(f"Unhandled case: {value!r}")


def report_error(error: ResourceError | InvalidConfig) -> int:
    """Print an error to stderr and return the error exit code."""
    match error:
        case InvalidAddress(identifier, reason):
            print(f"✗ Error: Invalid identifier: {identifier}", file=sys.stderr)
            print(f"  {reason}", file=sys.stderr)
        case TransientAccessError(operation, target, message, code):
            print(f"✗ Error: {operation} failed after retries: {target}", file=sys.stderr)
            print(f"  {message}" + (f" ({code})" if code else ""), file=sys.stderr)
        case PermanentAccessError(operation, target, message, code):
            print(f"✗ Error: {operation} failed: {target}", file=sys.stderr)
            print(f"  {message}" + (f" ({code})" if code else ""), file=sys.stderr)
        case LocalIOError(operation, path, message):
            print(f"✗ Error: {operation} failed: {path}", file=sys.stderr)
            print(f"  {message}", file=sys.stderr)
        case CompressionError() | DecodeError() | UnsupportedOperation() | InvalidConfig():
            print(f"✗ Error: {error}", file=sys.stderr)
        case _:
            assert_never(error)
    return 2


async def _with_dispatcher(run: Callable[[Dispatcher], Awaitable[int]]) -> int:
    match ResourceConfig.from_env():
        case Failure(config_error):
            return report_error(config_error)
        case Success(config):
            async with TransportClients(config) as clients:
                return await run(Dispatcher(clients))
    raise AssertionError("Unreachable: config outcome match exhaustive")


async def cmd_ls(identifier: str, policy: RetryPolicy) -> int:
    async def run(dispatcher: Dispatcher) -> int:
        match await dispatcher.list(identifier, policy):
            case Success(children):
                for child in children:
                    print(child)
                return 0
            case Failure(error):
                return report_error(error)
        raise AssertionError("Unreachable: list outcome match exhaustive")

    return await _with_dispatcher(run)


async def cmd_cat(identifier: str, policy: RetryPolicy, compression: Compression | None) -> int:
    async def run(dispatcher: Dispatcher) -> int:
        match await dispatcher.read(identifier, policy, compression):
            case Success(NotFound()):
                print(f"✗ Not found: {identifier}", file=sys.stderr)
                return 1
            case Success(data) if isinstance(data, bytes):
                sys.stdout.buffer.write(data)
                sys.stdout.flush()
                return 0
            case Failure(error):
                return report_error(error)
        raise AssertionError("Unreachable: read outcome match exhaustive")

    return await _with_dispatcher(run)


async def cmd_exists(identifier: str, policy: RetryPolicy, bucket: bool = False) -> int:
    async def run(dispatcher: Dispatcher) -> int:
        check = dispatcher.bucket_exists if bucket else dispatcher.exists
        match await check(identifier, policy):
            case Success(True):
                print("true")
                return 0
            case Success(False):
                print("false")
                return 1
            case Failure(error):
                return report_error(error)
        raise AssertionError("Unreachable: exists outcome match exhaustive")

    return await _with_dispatcher(run)


async def cmd_put(
    identifier: str,
    source: str,
    content_type: MimeType,
    policy: RetryPolicy,
    compression: Compression | None,
) -> int:
    try:
        if source == "-":
            data = sys.stdin.buffer.read()
        else:
            data = await asyncio.to_thread(_read_file, source)
    except OSError as e:
        return report_error(LocalIOError("read", source, str(e)))

    async def run(dispatcher: Dispatcher) -> int:
        match await dispatcher.write(identifier, data, content_type, policy, compression):
            case Success(_):
                print(f"✓ Wrote {len(data)} bytes to {identifier}")
                return 0
            case Failure(error):
                return report_error(error)
        raise AssertionError("Unreachable: write outcome match exhaustive")

    return await _with_dispatcher(run)


def _read_file(path: str) -> bytes:
    with open(path, "rb") as handle:
        return handle.read()


async def cmd_rm(identifier: str, policy: RetryPolicy) -> int:
    async def run(dispatcher: Dispatcher) -> int:
        match await dispatcher.delete(identifier, policy):
            case Success(_):
                print(f"✓ Deleted {identifier}")
                return 0
            case Failure(error):
                return report_error(error)
        raise AssertionError("Unreachable: delete outcome match exhaustive")

    return await _with_dispatcher(run)


async def cmd_mb(identifier: str, policy: RetryPolicy) -> int:
    async def run(dispatcher: Dispatcher) -> int:
        match await dispatcher.create_bucket(identifier, policy):
            case Success(_):
                print(f"✓ Bucket ready: {identifier}")
                return 0
            case Failure(error):
                return report_error(error)
        raise AssertionError("Unreachable: create_bucket outcome match exhaustive")

    return await _with_dispatcher(run)


def _policy_from_args(args: argparse.Namespace) -> RetryPolicy | InvalidConfig:
    fields: dict[str, object] = {
        name: value
        for name, value in (
            ("max_retries", args.max_retries),
            ("initial_interval", args.initial_interval),
            ("max_elapsed_time", args.max_elapsed),
        )
        if value is not None
    }
    match RetryPolicy.create(**fields):
        case Success(policy):
            return policy
        case Failure(error):
            return error
    raise AssertionError("Unreachable: policy outcome match exhaustive")


def _add_retry_options(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--max-retries", type=int, default=None, help="Retries after the first attempt"
    )
    parser.add_argument(
        "--initial-interval", type=float, default=None, help="First backoff delay in seconds"
    )
    parser.add_argument(
        "--max-elapsed", type=float, default=None, help="Overall retry budget in seconds"
    )


def _add_compression_option(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--compression",
        choices=[c.value for c in Compression],
        default=None,
        help="Payload codec (default: inferred from the .gz/.gzip extension)",
    )


def main() -> NoReturn:
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="resourceio: read, write and list local, object-store and web resources",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: WARNING)",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    ls_parser = subparsers.add_parser("ls", help="List children of a prefix or directory")
    ls_parser.add_argument("identifier")
    _add_retry_options(ls_parser)

    cat_parser = subparsers.add_parser("cat", help="Write a resource's payload to stdout")
    cat_parser.add_argument("identifier")
    _add_retry_options(cat_parser)
    _add_compression_option(cat_parser)

    exists_parser = subparsers.add_parser("exists", help="Check whether a resource exists")
    exists_parser.add_argument("identifier")
    _add_retry_options(exists_parser)

    put_parser = subparsers.add_parser(
        "put", help="Write a local file ('-' for stdin) to a resource"
    )
    put_parser.add_argument("identifier")
    put_parser.add_argument("source")
    put_parser.add_argument(
        "--content-type",
        choices=[m.value for m in MimeType],
        default=MimeType.OCTET_STREAM.value,
        help="Content type passed to the backend (default: application/octet-stream)",
    )
    _add_retry_options(put_parser)
    _add_compression_option(put_parser)

    rm_parser = subparsers.add_parser("rm", help="Delete a resource")
    rm_parser.add_argument("identifier")
    _add_retry_options(rm_parser)

    bucket_exists_parser = subparsers.add_parser(
        "bucket-exists", help="Check whether an object-store bucket exists"
    )
    bucket_exists_parser.add_argument("identifier")
    _add_retry_options(bucket_exists_parser)

    mb_parser = subparsers.add_parser("mb", help="Create an object-store bucket")
    mb_parser.add_argument("identifier")
    _add_retry_options(mb_parser)

    args = parser.parse_args()
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    policy = _policy_from_args(args)
    if isinstance(policy, InvalidConfig):
        sys.exit(report_error(policy))

    compression = (
        Compression(args.compression) if getattr(args, "compression", None) is not None else None
    )

    # Dispatch to command handler
    if args.command == "ls":
        exit_code = asyncio.run(cmd_ls(args.identifier, policy))
    elif args.command == "cat":
        exit_code = asyncio.run(cmd_cat(args.identifier, policy, compression))
    elif args.command == "exists":
        exit_code = asyncio.run(cmd_exists(args.identifier, policy))
    elif args.command == "put":
        exit_code = asyncio.run(
            cmd_put(args.identifier, args.source, MimeType(args.content_type), policy, compression)
        )
    elif args.command == "rm":
        exit_code = asyncio.run(cmd_rm(args.identifier, policy))
    elif args.command == "bucket-exists":
        exit_code = asyncio.run(cmd_exists(args.identifier, policy, bucket=True))
    elif args.command == "mb":
        exit_code = asyncio.run(cmd_mb(args.identifier, policy))
    else:
        parser.print_help()
        sys.exit(2)

    sys.exit(exit_code)


if __name__ == "__main__":
    main()
