from dataclasses import dataclass


@dataclass(frozen=True)
class Fragment:
    """One chunk of a logical IPC message, normalized across wire formats."""

    message_id: str
    chunk: int  # 1-based
    total: int
    content: bytes

    @property
    def is_final(self) -> bool:
        return self.chunk == self.total


@dataclass(frozen=True)
class Completed:
    """A reassembled message. An empty payload is still a complete message."""

    message_id: str
    payload: bytes


def byte_count(b: float) -> str:
    unit = 1024
    if b < unit:
        return f"{b:.0f} B"
    div, exp = unit, 0
    n = b / unit
    while n >= unit:
        div *= unit
        exp += 1
        n /= unit
    return f"{b / div:.1f} {'KMGTPE'[exp]}iB"
