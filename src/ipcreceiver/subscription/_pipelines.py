import logging
from typing import Callable

from ..errors import DecodeError
from ..metrics import CHUNKS_PROCESSED, DECODE_ERRORS, MESSAGES_PROCESSED
from ..models.types import IpcMode, ParserKind
from .decoder import decode_fragment
from .defragment import ChunkDefragmenter
from .parsers import parse_sink_payload
from .telemetry import unwrap_telemetry

Handler = Callable[[bytes], None]


class Pipeline:
    """Turns raw transport values into handler calls: decode, reassemble, unwrap."""

    def __init__(
        self,
        ipc: IpcMode,
        callback: Handler,
        *,
        defragmenter: ChunkDefragmenter | None = None,
        telemetry: bool = False,
        parser: ParserKind | None = None,
    ):
        if telemetry and parser is not None:
            raise ValueError("Use either telemetry or a parser, not both")
        self._ipc = IpcMode(ipc)
        self._callback = callback
        self._defragmenter = defragmenter if defragmenter is not None else ChunkDefragmenter()
        self._telemetry = telemetry
        self._parser = parser

    @property
    def defragmenter(self) -> ChunkDefragmenter:
        return self._defragmenter

    def process(self, data: bytes, origin: str = "") -> list[bytes]:
        """Return the payloads completed by ``data``; raises `DecodeError` on bad input."""
        log = logging.getLogger(
            ".".join((__name__, self.__class__.__name__, "process"))
        )

        CHUNKS_PROCESSED.inc()
        fragment = decode_fragment(data, self._ipc)
        log.debug(
            f"received message {fragment.message_id} (chunk {fragment.chunk} of {fragment.total}, "
            f"with {len(fragment.content)} bytes) on {origin or 'unknown origin'}"
        )

        completed = self._defragmenter.push(fragment)
        if completed is None:
            return []
        MESSAGES_PROCESSED.inc()

        if self._telemetry:
            return unwrap_telemetry(completed.payload)
        if self._parser is not None:
            return [parse_sink_payload(completed.payload, self._parser)]

        log.debug(f"processing {self._ipc} message of {len(completed.payload)} bytes")
        return [completed.payload]

    def __call__(self, data: bytes, origin: str = "") -> int:
        """Process ``data`` and hand each resulting payload to the callback.

        Per-message failures, unexpected ones included, are logged and
        contained. Returns the number of
        payloads delivered.
        """
        log = logging.getLogger(
            ".".join((__name__, self.__class__.__name__, "__call__"))
        )

        try:
            payloads = self.process(data, origin)
        except DecodeError as e:
            DECODE_ERRORS.inc()
            log.warning(f"dropping message from {origin or 'unknown origin'}: {e}")
            return 0
        except Exception:
            log.exception(f"failed to process message from {origin or 'unknown origin'}")
            return 0

        for payload in payloads:
            try:
                self._callback(payload)
            except Exception:
                log.exception(f"handler {self._callback} failed on a {len(payload)} bytes payload")
        return len(payloads)
