"""
Unit Tests for the upload body reader.

Uses a minimal stand-in for the Starlette request.
"""

import pytest

from modules.backend.api.v1.endpoints.files import read_upload_body
from modules.backend.core.exceptions import ValidationError


class _Request:
    def __init__(self, chunks: list[bytes], content_length: str | None = None) -> None:
        self.headers = {} if content_length is None else {"content-length": content_length}
        self.chunks = chunks
        self.consumed = 0

    async def stream(self):
        for chunk in self.chunks:
            self.consumed += 1
            yield chunk


@pytest.mark.asyncio
async def test_reads_body_within_limit():
    request = _Request([b"abc", b"def"], content_length="6")

    assert await read_upload_body(request, max_bytes=6) == b"abcdef"


@pytest.mark.asyncio
async def test_declared_length_over_limit_rejected_before_reading():
    request = _Request([b"x" * 20], content_length="20")

    with pytest.raises(ValidationError) as exc_info:
        await read_upload_body(request, max_bytes=8)

    assert exc_info.value.details == {"max_bytes": 8, "size": 20}
    assert request.consumed == 0


@pytest.mark.asyncio
async def test_undeclared_stream_cut_off_at_limit():
    request = _Request([b"1234", b"5678", b"9", b"never read"])

    with pytest.raises(ValidationError, match="too large"):
        await read_upload_body(request, max_bytes=8)

    assert request.consumed == 3


@pytest.mark.asyncio
async def test_empty_body():
    assert await read_upload_body(_Request([]), max_bytes=8) == b""
