"""
Test suite for vector decoding and row coercion.

System role: Verification of the single decode path for stored vectors
"""

import pytest

from sitechat.boundary.vdb.vector_codec import decode_vector, row_to_chunk
from sitechat.core.exceptions import VectorDecodeError


def _row(**overrides) -> dict:
    row = {
        "id": "e1",
        "page_id": "p1",
        "content": "Offset accounts",
        "vector": [0.1, 0.2],
        "metadata": {"model": "text-embedding-004"},
        "url": "https://x/a",
        "title": "Offset",
    }
    row.update(overrides)
    return row


class TestDecodeVector:
    """Test suite for decode_vector."""

    def test_native_list_should_decode_to_floats(self) -> None:
        assert decode_vector([1, 2.5, -3]) == [1.0, 2.5, -3.0]

    def test_json_string_should_decode(self) -> None:
        assert decode_vector("[0.25, -0.5]") == [0.25, -0.5]

    @pytest.mark.parametrize(
        "raw",
        [
            "[1.0, oops",
            "{\"a\": 1}",
            "42",
            {"values": [1.0]},
            [1.0, "2.0"],
            [1.0, None],
            [True, 1.0],
            [float("nan")],
            [float("inf"), 0.0],
        ],
    )
    def test_invalid_values_should_raise(self, raw) -> None:
        with pytest.raises(VectorDecodeError):
            decode_vector(raw, chunk_id="e9")

    def test_error_should_carry_chunk_id(self) -> None:
        with pytest.raises(VectorDecodeError) as exc_info:
            decode_vector("not json", chunk_id="e9")

        assert exc_info.value.details["chunk_id"] == "e9"


class TestRowToChunk:
    """Test suite for row_to_chunk."""

    def test_valid_row_should_become_chunk(self) -> None:
        chunk = row_to_chunk(_row())

        assert chunk.id == "e1"
        assert chunk.vector == [0.1, 0.2]
        assert chunk.metadata == {"model": "text-embedding-004"}
        assert chunk.title == "Offset"

    def test_corrupt_vector_should_be_nulled_and_logged(self, caplog) -> None:
        chunk = row_to_chunk(_row(vector="[broken"))

        assert chunk is not None
        assert chunk.vector is None
        assert "e1" in caplog.text

    def test_empty_vector_should_become_none(self) -> None:
        assert row_to_chunk(_row(vector="[]")).vector is None

    def test_blank_content_should_drop_row(self) -> None:
        assert row_to_chunk(_row(content="  ")) is None

    def test_chunk_should_be_immutable(self) -> None:
        chunk = row_to_chunk(_row())

        with pytest.raises(Exception):
            chunk.content = "changed"

    @pytest.mark.parametrize("metadata", ["oops", ["bad"], 42])
    def test_non_object_metadata_should_become_empty(self, metadata, caplog) -> None:
        # Act
        chunk = row_to_chunk(_row(metadata=metadata))

        # Assert
        assert chunk is not None
        assert chunk.metadata == {}
        assert "e1" in caplog.text

    def test_missing_metadata_should_become_empty(self) -> None:
        assert row_to_chunk(_row(metadata=None)).metadata == {}

    @pytest.mark.parametrize("overrides", [{"url": None}, {"url": 7}, {"title": ["x"]}])
    def test_unrepresentable_row_should_be_dropped_and_logged(self, overrides, caplog) -> None:
        assert row_to_chunk(_row(**overrides)) is None
        assert "e1" in caplog.text
