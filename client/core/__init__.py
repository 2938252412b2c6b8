from .network import FrameClient
from .session import send_and_receive

__all__ = ["FrameClient", "send_and_receive"]
