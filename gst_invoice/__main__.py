"""Command line entrypoint: render an invoice JSON file to PDF."""

from __future__ import annotations

import argparse
import dataclasses
import json
import logging
import sys
from typing import List, Optional

from .config import (
    POLICY_REJECT,
    SUMMARY_STRATEGIES,
    RenderConfig,
    parse_brackets,
)


class DependencyError(RuntimeError):
    """Raised when a required runtime dependency is missing."""


def load_write_invoice():
    try:
        from .rendering import write_invoice
    except ModuleNotFoundError as exc:
        if exc.name == "fpdf":
            raise DependencyError(
                "Missing dependency 'fpdf2'. Install project dependencies with "
                "'pip install -e .'."
            ) from exc
        raise
    return write_invoice


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="gst_invoice",
        description="Render a GST tax invoice JSON record to invoice-<number>.pdf.",
    )
    parser.add_argument("invoice", help="path to the invoice JSON file")
    parser.add_argument("-o", "--output-dir", default=".", help="directory for the PDF (default: .)")
    parser.add_argument("--strategy", choices=SUMMARY_STRATEGIES, help="tax summary strategy")
    parser.add_argument("--brackets", help="comma separated tax brackets, e.g. 5,12,18,28")
    parser.add_argument(
        "--reject-unbracketed",
        action="store_true",
        help="fail on items whose tax rate is not a configured bracket",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    return parser


def config_from_args(args: argparse.Namespace) -> RenderConfig:
    config = RenderConfig.from_env()
    overrides = {}
    if args.strategy:
        overrides["summary_strategy"] = args.strategy
    if args.brackets:
        overrides["brackets"] = parse_brackets(args.brackets)
    if args.reject_unbracketed:
        overrides["unbracketed_policy"] = POLICY_REJECT
    return dataclasses.replace(config, **overrides)


def main(argv: Optional[List[str]] = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        config = config_from_args(args)
        with open(args.invoice, "r", encoding="utf-8") as handle:
            data = json.load(handle)
        write_invoice = load_write_invoice()
        path = write_invoice(data, args.output_dir, config)
    except (OSError, ValueError, RuntimeError) as exc:
        # InvoiceDataError, UnsupportedTaxRateError and JSON errors are ValueErrors;
        # RenderError and DependencyError are RuntimeErrors.
        print(f"error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    print(path)


if __name__ == "__main__":
    main()
