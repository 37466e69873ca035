"""
Vector decoding and row coercion.

The single path by which stored rows become Chunk records. Vectors may be
persisted as native JSON arrays (canonical) or as JSON-encoded strings
(legacy ingestion output); both decode to list[float] here.

Dependencies: sitechat.models, sitechat.core.exceptions
System role: Boundary validation for stored chunks
"""

import json
import logging
import math
from collections.abc import Mapping
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from sitechat.core.exceptions import VectorDecodeError
from sitechat.models.chunk import Chunk

logger = logging.getLogger(__name__)


def decode_vector(raw: Any, chunk_id: str | None = None) -> list[float]:
    """
    Decode a stored vector into a list of finite floats.

    Args:
        raw: List of numbers, or a JSON string encoding one
        chunk_id: Used for error context only

    Returns:
        list[float]: Decoded vector (may be empty)

    Raises:
        VectorDecodeError: If the value is not a JSON list of finite numbers
    """
    value = raw
    if isinstance(raw, (str, bytes, bytearray)):
        try:
            value = json.loads(raw)
        except ValueError as e:
            raise VectorDecodeError(
                "Stored vector is not valid JSON",
                chunk_id=chunk_id,
                details={"error": str(e)},
            ) from e

    if not isinstance(value, (list, tuple)):
        raise VectorDecodeError(
            f"Stored vector must be a list, got {type(value).__name__}",
            chunk_id=chunk_id,
        )

    vector: list[float] = []
    for position, item in enumerate(value):
        # bool is an int subclass but never a valid component
        if isinstance(item, bool) or not isinstance(item, (int, float)):
            raise VectorDecodeError(
                "Stored vector contains a non-numeric value",
                chunk_id=chunk_id,
                details={"position": position},
            )
        component = float(item)
        if not math.isfinite(component):
            raise VectorDecodeError(
                "Stored vector contains NaN or infinity",
                chunk_id=chunk_id,
                details={"position": position},
            )
        vector.append(component)
    return vector


def _coerce_metadata(raw: Any, chunk_id: str) -> dict[str, Any]:
    if raw is None:
        return {}
    if isinstance(raw, Mapping):
        return dict(raw)
    logger.warning(
        f"{__name__}:row_to_chunk - Ignoring metadata of chunk {chunk_id}: expected an object, got {type(raw).__name__}"
    )
    return {}


def row_to_chunk(row: Mapping[str, Any]) -> Chunk | None:
    """
    Coerce a joined chunk/page row into a Chunk.

    Corrupt vectors are logged and replaced by None so the chunk is skipped by
    similarity scoring but still available to lexical search. Non-object
    metadata is replaced by an empty mapping. Rows with empty content, or
    whose fields cannot form a Chunk at all, are logged and dropped so one bad
    row never fails a whole scan.

    Args:
        row: Mapping with id, page_id, content, vector, metadata, url, title

    Returns:
        Chunk | None: Chunk, or None when the row is unusable
    """
    chunk_id = str(row["id"])
    content = row.get("content") or ""
    if not isinstance(content, str) or not content.strip():
        logger.warning(f"{__name__}:row_to_chunk - Dropping chunk {chunk_id} with empty content")
        return None

    raw_vector = row.get("vector")
    vector: list[float] | None = None
    if raw_vector is not None:
        try:
            vector = decode_vector(raw_vector, chunk_id=chunk_id) or None
        except VectorDecodeError as e:
            logger.warning(f"{__name__}:row_to_chunk - Skipping vector of chunk {chunk_id}: {e.message}")

    try:
        return Chunk(
            id=chunk_id,
            page_id=str(row["page_id"]),
            content=content,
            vector=vector,
            metadata=_coerce_metadata(row.get("metadata"), chunk_id),
            url=row.get("url"),
            title=row.get("title"),
        )
    except PydanticValidationError as e:
        logger.warning(
            f"{__name__}:row_to_chunk - Dropping chunk {chunk_id}: {e.error_count()} invalid fields"
        )
        return None
