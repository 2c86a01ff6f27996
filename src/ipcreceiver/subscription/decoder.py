"""Decoding of Sink and RPC envelopes into a common `Fragment`."""

from google.protobuf.message import DecodeError as ProtoDecodeError

from ..errors import DecodeError
from ..models.types import IpcMode
from ..proto import RpcMessageProto, SinkMessage
from ._types import Fragment


def _decode_sink(data: bytes) -> Fragment:
    msg = SinkMessage()
    msg.ParseFromString(data)
    return Fragment(
        message_id=msg.message_id,
        chunk=msg.current_chunk_number + 1,  # chunks start at 0 on the wire
        total=msg.total_chunks,
        content=msg.content,
    )


def _decode_rpc(data: bytes) -> Fragment:
    msg = RpcMessageProto()
    msg.ParseFromString(data)
    return Fragment(
        message_id=msg.rpc_id,
        chunk=msg.current_chunk_number + 1,
        total=msg.total_chunks,
        content=msg.rpc_content,
    )


_DECODERS = {
    IpcMode.SINK: _decode_sink,
    IpcMode.RPC: _decode_rpc,
}


def decode_fragment(data: bytes, mode: IpcMode) -> Fragment:
    """Parse raw transport bytes as the envelope selected by ``mode``."""
    decoder = _DECODERS[IpcMode(mode)]
    try:
        fragment = decoder(data)
    except ProtoDecodeError as e:
        raise DecodeError(f"invalid {mode} message received: {e}") from e

    if not 1 <= fragment.chunk <= fragment.total:
        raise DecodeError(
            f"invalid {mode} message received: chunk {fragment.chunk} of {fragment.total}"
        )
    return fragment


__all__ = ["decode_fragment"]
