import json

import pytest
from prometheus_client import REGISTRY

import ipcreceiver.subscription._pipelines as pipelines
from ipcreceiver.models import IpcMode, ParserKind
from ipcreceiver.proto import (
    FlowMessage,
    RpcMessageProto,
    SinkMessage,
    TelemetryMessage,
    TelemetryMessageLog,
)


def _sink(message_id: str, chunk: int, total: int, content: bytes) -> bytes:
    return SinkMessage(
        message_id=message_id,
        current_chunk_number=chunk,
        total_chunks=total,
        content=content,
    ).SerializeToString()


def _telemetry(*ports: int) -> bytes:
    return TelemetryMessageLog(
        location="Default",
        system_id="minion-01",
        message=[
            TelemetryMessage(
                timestamp=1,
                bytes=FlowMessage(dst_port={"value": p}).SerializeToString(),
            )
            for p in ports
        ],
    ).SerializeToString()


def test_pipeline_reassembles_and_calls_callback_once() -> None:
    received: list[bytes] = []
    p = pipelines.Pipeline(IpcMode.SINK, received.append)

    assert p(_sink("m1", 0, 3, b"AB")) == 0
    assert p(_sink("m1", 1, 3, b"CD")) == 0
    assert p(_sink("m1", 2, 3, b"EF")) == 1

    assert received == [b"ABCDEF"]
    assert p.defragmenter.pending() == []


def test_pipeline_rpc_mode() -> None:
    received: list[bytes] = []
    p = pipelines.Pipeline(IpcMode.RPC, received.append)

    for chunk, content in enumerate((b"re", b"quest")):
        data = RpcMessageProto(
            rpc_id="r1", current_chunk_number=chunk, total_chunks=2, rpc_content=content
        ).SerializeToString()
        p(data)

    assert received == [b"request"]


def test_pipeline_delivers_empty_completed_payload() -> None:
    received: list[bytes] = []
    p = pipelines.Pipeline(IpcMode.SINK, received.append)

    assert p(_sink("empty", 0, 1, b"")) == 1
    assert received == [b""]


def test_pipeline_drops_malformed_message(caplog: pytest.LogCaptureFixture) -> None:
    received: list[bytes] = []
    p = pipelines.Pipeline(IpcMode.SINK, received.append)

    assert p(b"\x0a\x05ab", "topic[0]@7") == 0
    assert received == []
    assert "dropping message from topic[0]@7" in caplog.text


def test_pipeline_process_raises_decode_error() -> None:
    p = pipelines.Pipeline(IpcMode.SINK, lambda _payload: None)

    with pytest.raises(pipelines.DecodeError):
        p.process(b"\x0a\x05ab")


def test_pipeline_telemetry_emits_each_record_in_order() -> None:
    received: list[bytes] = []
    p = pipelines.Pipeline(IpcMode.SINK, received.append, telemetry=True)

    payload = _telemetry(80, 443, 22)
    half = len(payload) // 2
    p(_sink("t1", 0, 2, payload[:half]))
    assert p(_sink("t1", 1, 2, payload[half:])) == 3

    assert [json.loads(r)["dst_port"] for r in received] == [80, 443, 22]


def test_pipeline_telemetry_malformed_record_emits_nothing() -> None:
    received: list[bytes] = []
    p = pipelines.Pipeline(IpcMode.SINK, received.append, telemetry=True)

    payload = TelemetryMessageLog(
        location="Default",
        system_id="minion-01",
        message=[
            TelemetryMessage(timestamp=1, bytes=FlowMessage(dst_port={"value": 80}).SerializeToString()),
            TelemetryMessage(timestamp=2, bytes=b"\x0a\x05ab"),
            TelemetryMessage(timestamp=3, bytes=FlowMessage(dst_port={"value": 22}).SerializeToString()),
        ],
    ).SerializeToString()

    assert p(_sink("t1", 0, 1, payload)) == 0
    assert received == []


def test_pipeline_parser_renders_json() -> None:
    received: list[bytes] = []
    p = pipelines.Pipeline(IpcMode.SINK, received.append, parser=ParserKind.SYSLOG)

    xml = b'<syslog-message-log system-id="m" location="L"><messages timestamp="t">aGk=</messages></syslog-message-log>'
    p(_sink("s1", 0, 1, xml))

    (doc,) = [json.loads(r) for r in received]
    assert doc["messages"] == [{"timestamp": "t", "content": "hi"}]


def test_pipeline_contains_handler_failures(caplog: pytest.LogCaptureFixture) -> None:
    calls: list[bytes] = []

    def callback(payload: bytes) -> None:
        calls.append(payload)
        raise RuntimeError("handler bug")

    p = pipelines.Pipeline(IpcMode.SINK, callback)

    assert p(_sink("a", 0, 1, b"1")) == 1
    assert p(_sink("b", 0, 1, b"2")) == 1
    assert calls == [b"1", b"2"]
    assert "handler bug" in caplog.text


def test_pipeline_rejects_telemetry_with_parser() -> None:
    with pytest.raises(ValueError, match="either telemetry or a parser"):
        pipelines.Pipeline(
            IpcMode.SINK, lambda _p: None, telemetry=True, parser=ParserKind.SNMP
        )


def test_pipeline_contains_unexpected_failures(
    monkeypatch: pytest.MonkeyPatch, caplog: pytest.LogCaptureFixture
) -> None:
    def unwrap(_payload: bytes) -> list[bytes]:
        raise RuntimeError("unwrap bug")

    monkeypatch.setattr(pipelines, "unwrap_telemetry", unwrap)
    received: list[bytes] = []
    p = pipelines.Pipeline(IpcMode.SINK, received.append, telemetry=True)

    assert p(_sink("t1", 0, 1, b"x"), "topic[0]@9") == 0
    assert received == []
    assert "failed to process message from topic[0]@9" in caplog.text
    assert "unwrap bug" in caplog.text


def test_pipeline_counts_malformed_chunks() -> None:
    p = pipelines.Pipeline(IpcMode.SINK, lambda _p: None)
    before = REGISTRY.get_sample_value("onms_sink_processed_chunk_total") or 0.0

    p(b"\x0a\x05ab")

    assert REGISTRY.get_sample_value("onms_sink_processed_chunk_total") == before + 1
