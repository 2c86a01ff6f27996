from __future__ import annotations

import argparse
import logging
import signal
import sys

from prometheus_client import start_http_server

from ipcreceiver.config import load_config
from ipcreceiver.errors import ConfigurationError
from ipcreceiver.subscription import Subscriber

_logger = logging.getLogger("ipcreceiver")


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="ipcreceiver",
        description="Kafka consumer for single or multi-part OpenNMS Sink/RPC messages",
    )
    p.add_argument("--bootstrap", default="localhost:9092", help="kafka bootstrap server")
    p.add_argument(
        "--topic",
        default="OpenNMS.Sink.Trap",
        help="kafka topic that will receive the messages",
    )
    p.add_argument("--group-id", default="sink-go-client", help="the consumer group ID")
    p.add_argument(
        "--parameter",
        action="append",
        default=[],
        help="kafka consumer configuration attribute (can be used multiple times), for instance: acks=1",
    )
    p.add_argument("--ipc", default="sink", help="IPC API: sink, rpc")
    p.add_argument(
        "--parser",
        choices=["syslog", "snmp", "netflow"],
        default=None,
        help="Sink API parser; netflow unwraps telemetry envelopes",
    )
    p.add_argument(
        "--metrics-port",
        type=int,
        default=8181,
        help="port of the Prometheus metrics server (0 disables it)",
    )
    p.add_argument("--log-level", default="INFO")
    return p


def _print_payload(payload: bytes) -> None:
    _logger.info(f"Value: {payload.decode('utf-8', errors='replace')}")


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        stream=sys.stdout,
        level=args.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    telemetry = args.parser == "netflow"
    try:
        config = load_config(
            bootstrap=args.bootstrap,
            topic=args.topic,
            group_id=args.group_id,
            parameters=args.parameter,
            ipc=args.ipc,
            telemetry=telemetry,
            parser=None if telemetry else args.parser,
        )
        subscriber = Subscriber(config)
        subscriber.subscribe(_print_payload)
        _logger.info("starting consumer")
        subscriber.initialize()
    except ConfigurationError as e:
        _logger.critical(f"Cannot initialize consumer: {e}")
        return 1
    _logger.info("consumer started")

    if args.metrics_port:
        _logger.info(f"Starting Prometheus Metrics Server on port {args.metrics_port}")
        start_http_server(args.metrics_port)

    def _on_signal(signum: int, _frame: object) -> None:
        _logger.info(f"received signal {signal.Signals(signum).name}")
        subscriber.stop()

    signal.signal(signal.SIGINT, _on_signal)
    signal.signal(signal.SIGTERM, _on_signal)

    subscriber.run()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
