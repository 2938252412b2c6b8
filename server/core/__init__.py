from .server import FrameServer
from .session import Responder, build_responder, echo_reply, fixed_reply, handle_one_exchange

__all__ = ["FrameServer", "Responder", "build_responder", "echo_reply", "fixed_reply", "handle_one_exchange"]
