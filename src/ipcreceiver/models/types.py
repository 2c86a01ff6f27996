from enum import StrEnum


class IpcMode(StrEnum):
    """Wire envelope used by the topic: OpenNMS Sink API or RPC API."""

    SINK = "sink"
    RPC = "rpc"


class ParserKind(StrEnum):
    """XML message logs shipped on Sink topics that can be rendered as JSON."""

    SYSLOG = "syslog"
    SNMP = "snmp"
