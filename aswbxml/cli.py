"""
Trace WBXML payloads as XML, a JSON tree or a JSON token stream.

Usage:
  aswbxml-trace path/to/payload.wbxml > out.xml
  echo "03016a00..." | aswbxml-trace --hex --format tokens -
  aswbxml-trace --encode request.xml
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import List, Optional

from .config import ViewOptions
from .converter import WBXMLPayload
from .decoder import Decoder
from .exceptions import WBXMLError
from .logging_config import setup_logging

logger = logging.getLogger(__name__)


def _read_input(path: str) -> bytes:
    if path == "-":
        return sys.stdin.buffer.read()
    with open(path, "rb") as f:
        return f.read()


def _parse_hex(data: bytes) -> bytes:
    return bytes.fromhex("".join(data.decode("ascii").split()))


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="aswbxml-trace", description=__doc__.splitlines()[1])
    p.add_argument("path", help="WBXML (or XML with --encode) file path, or - for stdin")
    p.add_argument("--hex", action="store_true", help="Treat WBXML input as a hex string")
    p.add_argument(
        "--format",
        choices=("xml", "json", "tokens"),
        default="xml",
        help="Decoded output: XML text, JSON tree or JSON token stream",
    )
    p.add_argument("--no-namespaces", action="store_true", help="Write bare tag names")
    p.add_argument("--doc-refs", action="store_true", help="Annotate tags with documentation links")
    p.add_argument("--encode", action="store_true", help="Read XML and write WBXML as hex")
    p.add_argument("--log-level", default=None, help="Override LOG_LEVEL")
    return p


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(args.log_level)

    defaults = ViewOptions.from_settings()
    options = ViewOptions(
        show_namespaces=defaults.show_namespaces and not args.no_namespaces,
        show_doc_refs=defaults.show_doc_refs or args.doc_refs,
    )

    try:
        blob = _read_input(args.path)
        if args.encode:
            print(WBXMLPayload.from_xml(blob).to_bytes().hex())
            return 0

        if args.hex:
            blob = _parse_hex(blob)

        if args.format == "tokens":
            tokens = [token.to_dict() for token in Decoder(options=options).iter_tokens(blob)]
            print(json.dumps(tokens, ensure_ascii=False))
        elif args.format == "json":
            print(json.dumps(WBXMLPayload.from_bytes(blob).tree(options).to_dict(), ensure_ascii=False))
        else:
            sys.stdout.write(WBXMLPayload.from_bytes(blob).to_xml(options))
    except WBXMLError as exc:
        print(f"{type(exc).__name__}: {exc}", file=sys.stderr)
        return 1
    except (OSError, ValueError) as exc:
        # unreadable file or bad hex
        print(f"error: {exc}", file=sys.stderr)
        return 2
    return 0


if __name__ == "__main__":
    sys.exit(main())
