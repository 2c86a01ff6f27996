from typing import Protocol


class KafkaMsg(Protocol):
    def value(self) -> bytes | None: ...

    def key(self) -> bytes | None: ...

    def error(self) -> object | None: ...

    def topic(self) -> str | None: ...

    def partition(self) -> int | None: ...

    def offset(self) -> int | None: ...


class KafkaConsumer(Protocol):
    def subscribe(self, topics: list[str]) -> None: ...

    def poll(self, timeout: float = -1) -> KafkaMsg | None: ...

    def commit(
        self, message: KafkaMsg | None = None, asynchronous: bool = True
    ) -> object: ...

    def close(self) -> None: ...
