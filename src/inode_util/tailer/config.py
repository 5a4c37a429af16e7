"""TailerConfig — polling, buffering, and decoding settings for a Tailer."""
from __future__ import annotations

import codecs

from pydantic import BaseModel, Field, field_validator

DEFAULT_DELAY_SECONDS: float = 0.1
DEFAULT_BUFFER_SIZE: int = 4096


class TailerConfig(BaseModel):
    """Configuration for :class:`~inode_util.tailer.tailer.Tailer`.

    Parameters
    ----------
    delay:
        Seconds to wait between checks of the file for new content.
    buffer_size:
        Number of bytes read from the file per ``read()`` call.
    reopen:
        Close and reopen the file between checks instead of keeping the
        handle open.
    encoding:
        Codec used to decode each line.  Undecodable bytes are replaced.
    position:
        Byte offset where tailing starts.
    """

    delay: float = Field(default=DEFAULT_DELAY_SECONDS, gt=0.0)
    buffer_size: int = Field(default=DEFAULT_BUFFER_SIZE, gt=0)
    reopen: bool = False
    encoding: str = "utf-8"
    position: int = Field(default=0, ge=0)

    model_config = {"frozen": True}

    @field_validator("encoding")
    @classmethod
    def _known_encoding(cls, value: str) -> str:
        try:
            codecs.lookup(value)
        except LookupError as exc:
            raise ValueError(f"Unknown encoding {value!r}") from exc
        return value
