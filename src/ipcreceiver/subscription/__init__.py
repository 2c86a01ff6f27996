from ._pipelines import Handler, Pipeline
from ._types import Completed, Fragment
from .decoder import decode_fragment
from .defragment import ChunkDefragmenter, LockedEntryStore, ShardedEntryStore
from .parsers import parse_sink_payload
from .subscriber import Subscriber
from .telemetry import unwrap_telemetry

__all__ = [
    "Subscriber",
    "Pipeline",
    "Handler",
    "Fragment",
    "Completed",
    "decode_fragment",
    "ChunkDefragmenter",
    "LockedEntryStore",
    "ShardedEntryStore",
    "unwrap_telemetry",
    "parse_sink_payload",
]
