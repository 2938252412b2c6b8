from __future__ import annotations

from typing import Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .constants import ENCODING, MAX_MSG
from .errors import MessageTooLarge


class Message(BaseModel):
    """Opaque application payload carried by exactly one frame."""

    model_config = ConfigDict(frozen=True)

    body: bytes = Field(default=b"", max_length=MAX_MSG, description="Raw payload, at most MAX_MSG bytes")

    @property
    def text(self) -> str:
        return self.body.decode(ENCODING, errors="replace")

    def __len__(self) -> int:
        return len(self.body)

    @classmethod
    def from_bytes(cls, data: Union[bytes, bytearray, memoryview]) -> "Message":
        try:
            return cls(body=bytes(data))
        except ValidationError as exc:
            if any(err["type"] == "bytes_too_long" for err in exc.errors()):
                raise MessageTooLarge(f"{len(data)} > {MAX_MSG} bytes", operation="building message") from exc
            raise

    @classmethod
    def from_text(cls, text: str) -> "Message":
        return cls.from_bytes(text.encode(ENCODING))


__all__ = ["Message"]
