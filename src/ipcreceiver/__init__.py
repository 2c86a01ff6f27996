from .config import ReceiverConfig, load_config
from .errors import ConfigurationError, DecodeError, ReceiverError
from .models import FlowRecord, IpcMode, ParserKind
from .subscription import ChunkDefragmenter, Fragment, Pipeline, Subscriber

__all__ = [
    "Subscriber",
    "Pipeline",
    "ChunkDefragmenter",
    "Fragment",
    "ReceiverConfig",
    "load_config",
    "IpcMode",
    "ParserKind",
    "FlowRecord",
    "ReceiverError",
    "DecodeError",
    "ConfigurationError",
]
