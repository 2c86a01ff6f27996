import base64
import json

import pytest

from ipcreceiver.errors import DecodeError
from ipcreceiver.models import ParserKind
from ipcreceiver.subscription import parse_sink_payload


def _b64(text: str) -> str:
    return base64.b64encode(text.encode()).decode()


SYSLOG = f"""<syslog-message-log system-id="minion-01" location="Default"
    source-address="10.0.0.1" source-port="514">
  <messages timestamp="2024-01-01T00:00:00Z">{_b64("<34>Oct 11 22:14:15 host su: fail")}</messages>
  <messages timestamp="2024-01-01T00:00:01Z">{_b64("<13>second line")}</messages>
</syslog-message-log>""".encode()

TRAP = f"""<trap-message-log location="Default" system-id="minion-01" trap-address="10.0.0.5">
  <messages>
    <agent-address>10.0.0.5</agent-address>
    <community>public</community>
    <version>v2</version>
    <timestamp>1700000000</timestamp>
    <creation-time>1700000001</creation-time>
    <pdu-length>3</pdu-length>
    <trap-identity enterprise-id=".1.3.6.1.4.1.9" generic="6" specific="1"/>
    <results>
      <result>
        <base>.1.3.6.1.2.1.1.3</base>
        <instance>0</instance>
        <value type="4">{_b64("up")}</value>
      </result>
    </results>
  </messages>
</trap-message-log>""".encode()


def test_syslog_log_is_rendered_with_decoded_content() -> None:
    doc = json.loads(parse_sink_payload(SYSLOG, ParserKind.SYSLOG))

    assert doc["systemId"] == "minion-01"
    assert doc["sourceAddress"] == "10.0.0.1"
    assert doc["sourcePort"] == 514
    assert [m["content"] for m in doc["messages"]] == [
        "<34>Oct 11 22:14:15 host su: fail",
        "<13>second line",
    ]


def test_snmp_trap_log_is_rendered_with_decoded_values() -> None:
    doc = json.loads(parse_sink_payload(TRAP, ParserKind.SNMP))

    assert doc["trapAddress"] == "10.0.0.5"
    (trap,) = doc["messages"]
    assert trap["agentAddress"] == "10.0.0.5"
    assert trap["pduLength"] == 3
    assert trap["trapIdentity"] == {
        "enterpriseID": ".1.3.6.1.4.1.9",
        "generic": 6,
        "specific": 1,
    }
    assert trap["results"][0]["value"] == {"type": 4, "value": "up"}


def test_wrong_root_element_is_rejected() -> None:
    with pytest.raises(DecodeError, match="syslog-message-log"):
        parse_sink_payload(TRAP, ParserKind.SYSLOG)


def test_malformed_xml_is_rejected() -> None:
    with pytest.raises(DecodeError, match="invalid snmp payload"):
        parse_sink_payload(b"<trap-message-log", ParserKind.SNMP)


def test_invalid_base64_is_rejected() -> None:
    payload = b"""<syslog-message-log system-id="m" location="L">
      <messages timestamp="t">***</messages>
    </syslog-message-log>"""
    with pytest.raises(DecodeError):
        parse_sink_payload(payload, ParserKind.SYSLOG)
