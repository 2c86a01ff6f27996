import json
import logging
import threading
from typing import Any, Callable

from confluent_kafka import KafkaException

from ..config import ReceiverConfig
from ..errors import ConfigurationError
from ._kafka import connect, create_config
from ._kafka_protocols import KafkaConsumer, KafkaMsg
from ._pipelines import Handler, Pipeline
from ._types import byte_count

ConsumerFactory = Callable[[dict[str, Any], list[str]], KafkaConsumer]


class Subscriber:
    """
    Consumer loop for one IPC topic.

    Usage:
        subscriber = Subscriber(ReceiverConfig(topic="OpenNMS.Sink.Syslog"))

        @subscriber.subscribe
        def handle(payload: bytes) -> None:
            ...

        subscriber.run()  # blocks until stop() is called

    The handler runs on the polling thread, one payload at a time. Every
    message is committed after it was handled, whether or not it could be
    processed.
    """

    _pipeline: Pipeline | None
    _consumer: KafkaConsumer | None

    def __init__(
        self,
        config: ReceiverConfig,
        *,
        consumer_factory: ConsumerFactory = connect,
    ):
        log = logging.getLogger(
            ".".join((__name__, self.__class__.__name__, "__init__"))
        )
        self._config = config
        self._consumer_factory = consumer_factory
        self._pipeline = None
        self._consumer = None
        self._stopping = threading.Event()
        log.info("Initialized new subscriber.")

    @property
    def running(self) -> bool:
        return self._consumer is not None and not self._stopping.is_set()

    def subscribe(self, callback: Handler) -> Handler:
        log = logging.getLogger(
            ".".join((__name__, self.__class__.__name__, "subscribe"))
        )
        if self._pipeline is not None:
            raise ConfigurationError("You cannot use more than one handler at a time.")

        self._pipeline = Pipeline(
            self._config.ipc,
            callback,
            telemetry=self._config.telemetry,
            parser=self._config.parser,
        )
        log.info(f"Subscribing {callback} to {self._config.topic} ({self._config.ipc})")
        return callback

    def initialize(self) -> None:
        """Create the consumer and subscribe it. Failures are fatal."""
        log = logging.getLogger(
            ".".join((__name__, self.__class__.__name__, "initialize"))
        )
        if self._consumer is not None:
            raise ConfigurationError("consumer already initialized")

        settings = create_config(self._config)
        settings["stats_cb"] = self._on_stats
        settings["error_cb"] = self._on_error
        self._consumer = self._consumer_factory(settings, [self._config.topic])
        log.info(f"consumer started for topic {self._config.topic} at {self._config.bootstrap}")

    def run(self) -> None:
        log = logging.getLogger(".".join((__name__, self.__class__.__name__, "run")))
        assert self._pipeline is not None, (
            "A handler should be subscribed for service to run."
        )
        if self._consumer is None:
            self.initialize()
        consumer = self._consumer
        assert consumer is not None

        log.info(f"starting kafka consumer: {self._config.model_dump_json()}")
        try:
            while not self._stopping.is_set():
                msg = consumer.poll(self._config.poll_timeout)
                if msg is None:
                    continue
                if (err := msg.error()) is not None:
                    log.warning(f"consumer error {err}")
                    continue

                try:
                    self._pipeline(msg.value() or b"", _origin(msg))
                finally:
                    self._commit(consumer, msg)
        finally:
            consumer.close()
            self._consumer = None
            log.info("good bye!")

    def stop(self) -> None:
        """Ask the loop to exit after the current message. Safe from any thread."""
        log = logging.getLogger(".".join((__name__, self.__class__.__name__, "stop")))
        log.info("stopping consumer")
        self._stopping.set()

    def _commit(self, consumer: KafkaConsumer, msg: KafkaMsg) -> None:
        log = logging.getLogger(
            ".".join((__name__, self.__class__.__name__, "_commit"))
        )
        try:
            consumer.commit(message=msg, asynchronous=False)
        except KafkaException as e:
            log.warning(f"error committing message: {e}")

    def _on_stats(self, stats_json: str) -> None:
        # https://github.com/confluentinc/librdkafka/blob/master/STATISTICS.md
        log = logging.getLogger(
            ".".join((__name__, self.__class__.__name__, "_on_stats"))
        )
        stats = json.loads(stats_json)
        log.info(
            f"statistics: {stats.get('rxmsgs', 0)} messages "
            f"({byte_count(float(stats.get('rxmsg_bytes', 0)))}) consumed"
        )

    def _on_error(self, err: object) -> None:
        log = logging.getLogger(
            ".".join((__name__, self.__class__.__name__, "_on_error"))
        )
        log.warning(f"consumer error {err}")


def _origin(msg: KafkaMsg) -> str:
    return f"{msg.topic()}[{msg.partition()}]@{msg.offset()}"
