from __future__ import annotations

from typing import Optional, Union
from uuid import uuid4


def generate_exchange_id(prefix: Optional[str] = None) -> str:
    """Generate a short id used to correlate log lines of one exchange."""
    base = uuid4().hex[:12]
    return f"{prefix}-{base}" if prefix else base


def hex_preview(data: Union[bytes, bytearray, memoryview], limit: int = 32) -> str:
    """Render wire bytes as spaced upper-case hex, truncated after limit bytes."""
    raw = bytes(data)
    shown = " ".join(f"{b:02X}" for b in raw[:limit])
    if len(raw) > limit:
        shown += f" ... (+{len(raw) - limit} bytes)"
    return shown


__all__ = ["generate_exchange_id", "hex_preview"]
