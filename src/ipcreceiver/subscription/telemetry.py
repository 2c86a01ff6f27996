"""Unwrapping of telemetry envelopes into individual flow records."""

from google.protobuf.json_format import SerializeToJsonError
from google.protobuf.message import DecodeError as ProtoDecodeError
from pydantic import ValidationError

from ..errors import DecodeError
from ..models import FlowRecord, from_protobuf, to_json
from ..proto import FlowMessage, TelemetryMessageLog


def unwrap_telemetry(payload: bytes) -> list[bytes]:
    """
    Decode a ``TelemetryMessageLog`` and render every inner flow as JSON.

    The whole batch fails if the envelope or any record is malformed; nothing
    is returned for a partially valid batch.
    """
    envelope = TelemetryMessageLog()
    try:
        envelope.ParseFromString(payload)
    except ProtoDecodeError as e:
        raise DecodeError(f"invalid telemetry message received: {e}") from e

    records: list[bytes] = []
    for position, message in enumerate(envelope.message, start=1):
        flow = FlowMessage()
        try:
            flow.ParseFromString(message.bytes)
            record = from_protobuf(FlowRecord, flow)
        except (ProtoDecodeError, SerializeToJsonError, ValidationError) as e:
            raise DecodeError(
                f"invalid netflow message received at position {position}: {e}"
            ) from e
        records.append(to_json(record))
    return records


__all__ = ["unwrap_telemetry"]
