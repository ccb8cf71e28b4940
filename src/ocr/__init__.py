"""
Cloud Vision batch adapter (perception output only).

Loads DOCUMENT_TEXT_DETECTION batch JSON files and parses them into
`contracts.vision` objects. No geometry, rotation, or grouping happens here.

Data access: all filesystem access goes through an explicitly passed data_root.
"""

from .contracts import OcrBatchConfig, OcrBatchError, VisionBatchLoadResult
from .module import load_vision_batch_relpaths, merge_vision_batches

__all__ = [
    "OcrBatchConfig",
    "OcrBatchError",
    "VisionBatchLoadResult",
    "load_vision_batch_relpaths",
    "merge_vision_batches",
]
