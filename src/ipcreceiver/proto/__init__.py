from ._schema import (
    FlowMessage,
    RpcMessageProto,
    SinkMessage,
    TelemetryMessage,
    TelemetryMessageLog,
)

__all__ = [
    "SinkMessage",
    "RpcMessageProto",
    "TelemetryMessage",
    "TelemetryMessageLog",
    "FlowMessage",
]
