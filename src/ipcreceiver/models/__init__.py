"""
ipcreceiver Models
==================

Typed payloads delivered to handlers, plus the closed set of IPC modes and
Sink parsers.
"""

from .flow import Direction, FlowRecord, NetflowVersion, SamplingAlgorithm
from .serialize import from_protobuf, to_json
from .snmp import SnmpResult, SnmpValue, Trap, TrapIdentity, TrapLog
from .syslog import SyslogMessage, SyslogMessageLog
from .types import IpcMode, ParserKind

__all__ = [
    'IpcMode',
    'ParserKind',
    'FlowRecord',
    'Direction',
    'SamplingAlgorithm',
    'NetflowVersion',
    'SyslogMessage',
    'SyslogMessageLog',
    'SnmpValue',
    'SnmpResult',
    'TrapIdentity',
    'Trap',
    'TrapLog',
    'to_json',
    'from_protobuf',
]
