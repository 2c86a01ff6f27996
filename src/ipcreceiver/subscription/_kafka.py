import logging
from typing import Any

from confluent_kafka import Consumer, KafkaException

from ..config import ReceiverConfig
from ..errors import ConfigurationError
from ._kafka_protocols import KafkaConsumer

_logger = logging.getLogger(__name__)


def create_config(config: ReceiverConfig) -> dict[str, Any]:
    """Build the consumer settings, applying every valid ``key=value`` parameter."""
    settings: dict[str, Any] = {
        "bootstrap.servers": config.bootstrap,
        "group.id": config.group_id,
        "session.timeout.ms": 6000,
        "broker.address.family": "v4",
        # Offsets are committed after each message is handled
        "enable.auto.commit": False,
    }
    for kv in config.parameters:
        parts = kv.split("=")
        if len(parts) != 2 or not parts[0]:
            _logger.warning(f"invalid key-value pair {kv}")
            continue
        key, value = parts
        settings[key] = value
    return settings


def connect(settings: dict[str, Any], topics: list[str]) -> KafkaConsumer:
    """Create a consumer and subscribe it to ``topics``."""
    _logger.info(f"creating consumer for topics {topics} at {settings.get('bootstrap.servers')}")
    try:
        consumer = Consumer(settings)
    except KafkaException as e:
        raise ConfigurationError(f"cannot create consumer: {e}") from e

    try:
        consumer.subscribe(topics)
    except KafkaException as e:
        consumer.close()
        raise ConfigurationError(f"cannot subscribe to topics {topics}: {e}") from e
    return consumer
