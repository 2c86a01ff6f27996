"""Process-wide counters, exported by the command line entry point."""

from prometheus_client import Counter

CHUNKS_PROCESSED = Counter(
    "onms_sink_processed_chunk",
    "The total number of processed chunks",
)
MESSAGES_PROCESSED = Counter(
    "onms_sink_processed_messages",
    "The total number of processed messages",
)
STALE_CHUNKS = Counter(
    "onms_sink_stale_chunk",
    "The total number of chunks ignored because they were already processed",
)
DECODE_ERRORS = Counter(
    "onms_sink_decode_errors",
    "The total number of messages dropped because they could not be decoded",
)
