"""Session service and WebSocket transport."""

from .broadcaster import Broadcaster, ConnectionManager, RecordingBroadcaster
from .config import ServerConfig, load_config
from .repository import SessionRepository
from .service import SessionService

__all__ = [
    "Broadcaster",
    "ConnectionManager",
    "RecordingBroadcaster",
    "ServerConfig",
    "load_config",
    "SessionRepository",
    "SessionService",
]
