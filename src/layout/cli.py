from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any

from contracts.layout import PageDetail, Row
from ocr import OcrBatchConfig, load_vision_batch_relpaths
from pdf_text import PdfTextConfig, run_pdf_text_relpath

from .artifacts import rows_artifact, write_rows_json_artifact
from .config import OcrUnifyConfig
from .errors import LayoutError
from .module import unify_and_group_from_ocr_pages, unify_and_group_from_pdf_pages
from .strategy import FractionalEpsilon, GapThreshold, RowGroupingStrategy
from .unify import build_intermediate_format_from_ocr_batch


def _build_arg_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="layout-rows",
        description="Reconstruct row reading order from a PDF text layer or Cloud Vision OCR batch output.",
    )
    p.add_argument("--data-root", required=True, type=Path, help="Resolved data root; inputs are relative to it.")
    src = p.add_mutually_exclusive_group(required=True)
    src.add_argument("--pdf-relpath", help="Born-digital PDF, relative to --data-root.")
    src.add_argument(
        "--vision-json",
        action="append",
        help="Cloud Vision batch output file relative to --data-root (repeat for multiple shards).",
    )
    p.add_argument("--output", required=True, type=Path, help="Path to write the rows JSON artifact.")
    p.add_argument("--page-selection", default=None, help='PDF only: pages like "1,3-5". Default: all pages.')
    p.add_argument("--fractional-epsilon", type=int, default=None, help="Row key precision (decimal digits).")
    p.add_argument("--minimum-gap", type=float, default=None, help="Gap grouping: new row on a larger y jump.")
    p.add_argument(
        "--maximum-break-threshold",
        type=float,
        default=None,
        help="Gap grouping: new row once drift from the row start exceeds this.",
    )
    p.add_argument(
        "--use-known-angle",
        action="store_true",
        default=False,
        help="OCR only: rotate pages by the median known angle instead of the median measured angle.",
    )
    p.add_argument("--angle-epsilon", type=float, default=10.0)
    p.add_argument("--low-confidence-threshold", type=float, default=0.6)
    p.add_argument("--log-level", default="WARNING", choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    return p


def _strategy_from_args(p: argparse.ArgumentParser, args: argparse.Namespace) -> RowGroupingStrategy:
    gap_args = (args.minimum_gap, args.maximum_break_threshold)
    if any(v is not None for v in gap_args):
        if args.fractional_epsilon is not None:
            p.error("--fractional-epsilon cannot be combined with gap grouping options")
        if any(v is None for v in gap_args):
            p.error("--minimum-gap and --maximum-break-threshold must be given together")
    try:
        if args.minimum_gap is not None:
            return GapThreshold(minimum_gap=args.minimum_gap, maximum_break_threshold=args.maximum_break_threshold)
        return FractionalEpsilon(precision=1 if args.fractional_epsilon is None else args.fractional_epsilon)
    except ValueError as e:
        p.error(str(e))


def _unify_config_from_args(p: argparse.ArgumentParser, args: argparse.Namespace) -> OcrUnifyConfig:
    try:
        return OcrUnifyConfig(angle_epsilon=args.angle_epsilon, low_confidence_threshold=args.low_confidence_threshold)
    except ValueError as e:
        p.error(str(e))


def _run(
    args: argparse.Namespace,
    strategy: RowGroupingStrategy,
    unify_config: OcrUnifyConfig,
) -> tuple[dict[str, Any] | None, list[dict[str, Any]]]:
    """
    Returns (artifact, errors); artifact is None when the document failed.
    """
    rows: list[Row]
    details: list[PageDetail]
    meta: dict[str, Any] = {"strategy": strategy.to_dict()}

    if args.pdf_relpath is not None:
        pdf = run_pdf_text_relpath(
            config=PdfTextConfig(data_root=args.data_root, page_selection=args.page_selection),
            pdf_relpath=args.pdf_relpath,
        )
        if not pdf.ok:
            return None, [e.to_dict() for e in pdf.errors]
        rows, details = unify_and_group_from_pdf_pages(pdf.pages, strategy)
        meta.update({"source": args.pdf_relpath, "unit": "pt", "extraction": pdf.meta})
    else:
        loaded = load_vision_batch_relpaths(config=OcrBatchConfig(data_root=args.data_root), relpaths=args.vision_json)
        if not loaded.ok or loaded.batch is None:
            return None, [e.to_dict() for e in loaded.errors]
        pages = build_intermediate_format_from_ocr_batch(loaded.batch, args.use_known_angle, unify_config)
        rows = unify_and_group_from_ocr_pages(pages, strategy)
        details = [PageDetail(page_number=p.page_number) for p in pages]
        meta.update(
            {
                "source": list(args.vision_json),
                "unit": "cm",
                "use_known_angle": args.use_known_angle,
                "page_meta": {f"page_{p.page_number:03d}": p.meta for p in pages},
            }
        )

    return rows_artifact(rows=rows, pages=details, meta=meta), []


def main(argv: list[str] | None = None) -> int:
    parser = _build_arg_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level), format="%(levelname)s %(name)s: %(message)s")
    strategy = _strategy_from_args(parser, args)
    unify_config = _unify_config_from_args(parser, args)

    try:
        payload, errors = _run(args, strategy, unify_config)
    except LayoutError as e:
        payload, errors = None, [e.to_dict()]

    if payload is None:
        print(json.dumps({"ok": False, "errors": errors}, sort_keys=True, ensure_ascii=False), file=sys.stderr)
        return 2

    write_rows_json_artifact(payload=payload, out_file=args.output)
    summary = {
        "ok": True,
        "pages": len(payload["pages"]),
        "rows": len(payload["rows"]),
        "items": sum(len(r["items"]) for r in payload["rows"]),
    }
    print(json.dumps(summary, sort_keys=True, separators=(",", ":"), ensure_ascii=False))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
