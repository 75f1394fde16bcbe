from __future__ import annotations

from collections.abc import Iterator
from typing import List

from .constants import CODE_FENCE, DEFAULT_CHUNK_LEN
from .errors import InvalidArgument


def iter_chunks(text: str, limit: int = DEFAULT_CHUNK_LEN) -> Iterator[str]:
    """
    Yield newline-joined runs of whole lines, each at most ``limit`` chars.

    A line is added to the current chunk while ``len(chunk) + 1 + len(line)``
    stays <= limit. A single line longer than ``limit`` is yielded whole.
    ``"\\n".join`` of the output gives back the input.
    """
    if limit <= 0:
        raise InvalidArgument("limit must be positive")
    text = text or ""
    if len(text) <= limit:
        yield text
        return

    buf: List[str] = []
    size = 0

    for line in text.split("\n"):
        if not buf:
            buf, size = [line], len(line)
            continue
        if size + 1 + len(line) > limit:
            yield "\n".join(buf)
            buf, size = [line], len(line)
        else:
            buf.append(line)
            size += 1 + len(line)

    yield "\n".join(buf)


def chunk_text(text: str, limit: int = DEFAULT_CHUNK_LEN) -> List[str]:
    """
    Discord rejects messages over 2000 chars. Chunk at newlines.
    """
    return list(iter_chunks(text, limit))


def wrap_code_block(chunk: str) -> str:
    return f"{CODE_FENCE}\n{chunk}\n{CODE_FENCE}"
