from xml.etree import ElementTree

from pydantic import BaseModel

from ..errors import DecodeError
from ..models import ParserKind, SyslogMessageLog, TrapLog, to_json

_MODELS: dict[ParserKind, type[SyslogMessageLog] | type[TrapLog]] = {
    ParserKind.SYSLOG: SyslogMessageLog,
    ParserKind.SNMP: TrapLog,
}


def parse_sink_payload(payload: bytes, kind: ParserKind) -> bytes:
    """Render a Sink XML message log as indented JSON."""
    model_cls = _MODELS[ParserKind(kind)]
    try:
        root = ElementTree.fromstring(payload)
        log: BaseModel = model_cls.from_xml(root)
    except ElementTree.ParseError as e:
        raise DecodeError(f"invalid {kind} payload received: {e}") from e
    except ValueError as e:
        # Also covers pydantic's ValidationError
        raise DecodeError(f"invalid {kind} payload received: {e}") from e
    return to_json(log)


__all__ = ["parse_sink_payload"]
