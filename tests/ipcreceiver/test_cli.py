from typing import Any

import pytest

import ipcreceiver.__main__ as cli


class _FakeSubscriber:
    instances: list["_FakeSubscriber"] = []

    def __init__(self, config: Any) -> None:
        self.config = config
        self.callback = None
        self.initialized = False
        self.ran = False
        _FakeSubscriber.instances.append(self)

    def subscribe(self, callback: Any) -> Any:
        self.callback = callback
        return callback

    def initialize(self) -> None:
        self.initialized = True

    def run(self) -> None:
        self.ran = True

    def stop(self) -> None:
        return None


@pytest.fixture
def fakes(monkeypatch: pytest.MonkeyPatch) -> dict[str, list[Any]]:
    calls: dict[str, list[Any]] = {"metrics": [], "signals": []}
    _FakeSubscriber.instances.clear()
    monkeypatch.setattr(cli, "Subscriber", _FakeSubscriber)
    monkeypatch.setattr(cli, "start_http_server", lambda port: calls["metrics"].append(port))
    monkeypatch.setattr(
        cli.signal, "signal", lambda signum, handler: calls["signals"].append(signum)
    )
    return calls


def test_parser_defaults() -> None:
    args = cli.build_parser().parse_args([])

    assert args.bootstrap == "localhost:9092"
    assert args.topic == "OpenNMS.Sink.Trap"
    assert args.group_id == "sink-go-client"
    assert args.ipc == "sink"
    assert args.parameter == []
    assert args.metrics_port == 8181


def test_main_runs_subscriber(fakes: dict[str, list[Any]]) -> None:
    rc = cli.main(
        [
            "--topic",
            "OpenNMS.Sink.Syslog",
            "--parser",
            "syslog",
            "--parameter",
            "acks=1",
            "--parameter",
            "client.id=test",
        ]
    )

    assert rc == 0
    (sub,) = _FakeSubscriber.instances
    assert sub.initialized and sub.ran
    assert sub.config.topic == "OpenNMS.Sink.Syslog"
    assert sub.config.parser == "syslog"
    assert sub.config.parameters == ["acks=1", "client.id=test"]
    assert fakes["metrics"] == [8181]
    assert len(fakes["signals"]) == 2


def test_netflow_parser_enables_telemetry(fakes: dict[str, list[Any]]) -> None:
    assert cli.main(["--parser", "netflow", "--metrics-port", "0"]) == 0

    (sub,) = _FakeSubscriber.instances
    assert sub.config.telemetry is True
    assert sub.config.parser is None
    assert fakes["metrics"] == []


def test_invalid_ipc_fails_before_start(fakes: dict[str, list[Any]]) -> None:
    assert cli.main(["--ipc", "bogus"]) == 1
    assert _FakeSubscriber.instances == []


def test_default_handler_logs_payload(caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level("INFO", logger="ipcreceiver")
    cli._print_payload(b"hello")
    assert "Value: hello" in caplog.text
