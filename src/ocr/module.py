from __future__ import annotations

import json
import logging
from typing import Any

from contracts.vision import BatchResponse

from .contracts import OcrBatchConfig, OcrBatchError, VisionBatchLoadResult
from .data_access import DataAccessError, read_json_object, resolve_json_under_data_root

logger = logging.getLogger(__name__)


def merge_vision_batches(payloads: list[dict[str, Any]]) -> BatchResponse:
    """
    Parse and merge output shards (Cloud Vision writes up to 20 pages per file).

    Responses keep their `context.pageNumber`; ordering is left to the consumer.
    """

    merged = BatchResponse(responses=[])
    for payload in payloads:
        merged = merged.merged(BatchResponse.from_dict(payload))
    return merged


def _failed(relpaths: list[str], error: OcrBatchError) -> VisionBatchLoadResult:
    return VisionBatchLoadResult(ok=False, source_relpaths=list(relpaths), batch=None, errors=[error], meta={})


def load_vision_batch_relpaths(*, config: OcrBatchConfig, relpaths: list[str]) -> VisionBatchLoadResult:
    payloads: list[dict[str, Any]] = []
    for relpath in relpaths:
        try:
            path = resolve_json_under_data_root(data_root=config.data_root, relpath=relpath)
        except DataAccessError as e:
            return _failed(
                relpaths,
                OcrBatchError(
                    code="OCR_BATCH_DATA_ACCESS_ERROR",
                    message=str(e),
                    detail={"data_root": str(config.data_root), "relpath": relpath},
                ),
            )
        try:
            payloads.append(read_json_object(path))
        except (json.JSONDecodeError, TypeError) as e:
            return _failed(
                relpaths,
                OcrBatchError(code="OCR_BATCH_INVALID_JSON", message=str(e), detail={"relpath": relpath}),
            )

    try:
        batch = merge_vision_batches(payloads)
    except (KeyError, TypeError, ValueError) as e:
        return _failed(
            relpaths,
            OcrBatchError(
                code="OCR_BATCH_BAD_SHAPE",
                message=f"Unexpected Cloud Vision batch shape: {e}",
                detail={"exception": type(e).__name__},
            ),
        )

    page_numbers = sorted(r.page_number for r in batch.responses)
    if len(set(page_numbers)) != len(page_numbers):
        return _failed(
            relpaths,
            OcrBatchError(
                code="OCR_BATCH_BAD_SHAPE",
                message="Duplicate context.pageNumber across batch responses",
                detail={"page_numbers": page_numbers},
            ),
        )

    logger.info("Loaded %d page responses from %d batch files", len(batch.responses), len(relpaths))
    return VisionBatchLoadResult(
        ok=True,
        source_relpaths=list(relpaths),
        batch=batch,
        errors=[],
        meta={"responses": len(batch.responses), "page_numbers": page_numbers},
    )
