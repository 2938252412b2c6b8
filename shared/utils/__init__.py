from .common import generate_exchange_id, hex_preview

__all__ = ["generate_exchange_id", "hex_preview"]
