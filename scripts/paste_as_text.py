from __future__ import annotations

import argparse
import asyncio
from pathlib import Path

from dotenv import load_dotenv

_REPO_ROOT = Path(__file__).resolve().parents[1]
load_dotenv(_REPO_ROOT / ".env", override=False)

from paste_as_text import log
from paste_as_text.adapters.image_sources import FileImageSource
from paste_as_text.domain.errors import PasteAsTextError
from paste_as_text.domain.models import BackendId
from paste_as_text.settings import DEBUG_LOGGING, LOG_LEVEL


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Extract text from an image into the clipboard.")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging.")
    subparsers = parser.add_subparsers(dest="command", required=True)

    process = subparsers.add_parser("process", help="Extract text and copy it to the clipboard.")
    process.add_argument("--image", help="Image file path (default: clipboard image).")
    process.add_argument(
        "--backend",
        choices=[backend.value for backend in BackendId],
        help="Backend to use instead of PASTE_AS_TEXT_BACKEND.",
    )
    process.add_argument("--print", action="store_true", help="Also print the text to stdout.")

    set_key = subparsers.add_parser("set-key", help="Store an API key for a backend.")
    set_key.add_argument("backend", choices=[backend.value for backend in BackendId])
    set_key.add_argument("api_key")
    set_key.add_argument("--endpoint", help="Custom endpoint URL.")

    delete_key = subparsers.add_parser("delete-key", help="Delete the API key of a backend.")
    delete_key.add_argument("backend", choices=[backend.value for backend in BackendId])

    subparsers.add_parser("list-keys", help="List backends with a stored API key.")
    return parser


async def _process(services: dict, args: argparse.Namespace) -> int:
    orchestrator = services["orchestrator"]
    if args.backend and not orchestrator.select_backend(args.backend):
        raise SystemExit(f"Backend not available: {args.backend}")
    paste_service = services["paste_service"]
    if args.image:
        image = FileImageSource(args.image).read_image()
        if image is None:
            raise SystemExit(f"Not an image file: {args.image}")
        result = await paste_service.process_image(image)
    else:
        result = await paste_service.process_clipboard_image()
    print(f"outcome: {result.outcome.value}")
    if result.error is not None:
        print(f"error: {result.error.message}")
    if args.print and result.extracted is not None:
        print(result.extracted.content)
    return 0 if result.outcome.value == "success" else 1


def main() -> None:
    from paste_as_text.container import build_services

    args = _build_parser().parse_args()
    log.configure(level=LOG_LEVEL, debug=args.debug or DEBUG_LOGGING)
    services = build_services()
    credentials_service = services["credentials_service"]
    try:
        if args.command == "process":
            raise SystemExit(asyncio.run(_process(services, args)))
        if args.command == "set-key":
            credentials_service.configure_backend(args.backend, args.api_key, args.endpoint)
            print(f"Stored API key for {BackendId(args.backend).display_name}.")
        elif args.command == "delete-key":
            credentials_service.remove_backend(args.backend)
            print(f"Deleted API key for {BackendId(args.backend).display_name}.")
        elif args.command == "list-keys":
            for backend_id in sorted(credentials_service.configured_backends()):
                print(backend_id)
    except PasteAsTextError as exc:
        raise SystemExit(exc.message) from exc


if __name__ == "__main__":
    main()
