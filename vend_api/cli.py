from __future__ import annotations

import argparse
import logging
import sys
from typing import Any, List, Optional, Sequence

import orjson
from pydantic import ValidationError

from .clients.http_client import VendHTTPClient
from .clients.vend_client import RESOURCES, VendClient
from .core.config import LOG_LEVELS, get_settings
from .core.errors import VendError
from .logging_config import configure_logging, log_event
from .schemas.auth import VendCredentials
from .schemas.products import ProductUpload

CONSIGNMENT_PRODUCTS = "consignment_products"


def _dump(data: Any) -> str:
    return orjson.dumps(data, option=orjson.OPT_INDENT_2).decode()


def _positive_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid int value: {value!r}") from None
    if number < 1:
        raise argparse.ArgumentTypeError("must be at least 1")
    return number


def _parse_args(argv: Optional[Sequence[str]]) -> argparse.Namespace:
    settings = get_settings()
    p = argparse.ArgumentParser(prog="vend-api", description="Fetch records from a Vend store")
    p.add_argument("-d", dest="domain_prefix", default=settings.domain_prefix,
                   help="The Vend store name (prefix of xxxx.vendhq.com)")
    p.add_argument("-t", dest="token", default=settings.token,
                   help="Personal API Access Token for the store, generated from Setup -> API Access.")
    p.add_argument("-z", dest="timezone", default=settings.timezone,
                   help="Timezone of the store in zoneinfo format. Defaults to the computer's local timezone.")
    p.add_argument("--max-attempts", type=_positive_int, default=settings.http_max_attempts,
                   help="Attempts per request before giving up")
    p.add_argument("--log-level", type=str.upper, choices=LOG_LEVELS, default=settings.log_level)
    sub = p.add_subparsers(dest="cmd", required=True)

    p_fetch = sub.add_parser("fetch", help="Print every record of a resource as JSON")
    p_fetch.add_argument("resource", choices=sorted(RESOURCES) + [CONSIGNMENT_PRODUCTS])
    p_fetch.add_argument("--consignment", default="", help=f"Consignment ID, required for {CONSIGNMENT_PRODUCTS}")

    p_upload = sub.add_parser("upload-image", help="Upload a product image")
    p_upload.add_argument("--product-id", required=True)
    p_upload.add_argument("--image-path", required=True)
    p_upload.add_argument("--image-url", required=True, help="Name of the image sent to Vend")
    p_upload.add_argument("--remove", action="store_true", help="Delete the local file after upload")

    return p.parse_args(argv)


def _fetch(client: VendClient, args: argparse.Namespace) -> List[Any]:
    if args.resource == CONSIGNMENT_PRODUCTS:
        if not args.consignment:
            raise ValueError(f"--consignment is required for {CONSIGNMENT_PRODUCTS}")
        records = client.consignment_products(args.consignment)
    else:
        records = client.fetch_all(args.resource)
    return [record.model_dump(mode="json") for record in records]


def main(argv: Optional[Sequence[str]] = None, *, http_client: Optional[VendHTTPClient] = None) -> int:
    args = _parse_args(argv)
    configure_logging(args.log_level, sys.stderr)
    try:
        credentials = VendCredentials(token=args.token, domain_prefix=args.domain_prefix, timezone=args.timezone)
    except ValidationError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2

    transport = http_client or VendHTTPClient(max_attempts=args.max_attempts)
    try:
        client = VendClient(credentials, transport)
        if args.cmd == "fetch":
            print(_dump(_fetch(client, args)))
        else:
            product = ProductUpload(id=args.product_id, image_url=args.image_url)
            image = client.upload_image(args.image_path, product, remove_after_upload=args.remove)
            print(_dump(image.model_dump(mode="json") if image else None))
    except VendError as exc:
        log_event(logging.ERROR, "vend_error", error=type(exc).__name__, detail=str(exc))
        print(f"error: {exc}", file=sys.stderr)
        return 1
    except (ValueError, OSError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2
    finally:
        if http_client is None:
            transport.close()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
