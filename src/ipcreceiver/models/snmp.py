"""
SNMP trap logs published by Minions on the Sink API (``<trap-message-log>``).
"""

import base64
from typing import Optional
from xml.etree.ElementTree import Element

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

ROOT_TAG = "trap-message-log"

_CAMEL = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class SnmpValue(BaseModel):
    model_config = _CAMEL

    type: int = Field(..., description="SNMP value type code")
    value: str = Field(default="", description="Decoded value")

    @field_validator("value", mode="before")
    @classmethod
    def decode_value(cls, v: object) -> object:
        if isinstance(v, (str, bytes)):
            return base64.b64decode(v, validate=True).decode("utf-8", errors="replace")
        return v


class SnmpResult(BaseModel):
    model_config = _CAMEL

    base: str
    instance: Optional[str] = None
    value: SnmpValue


class TrapIdentity(BaseModel):
    model_config = _CAMEL

    enterprise_id: str = Field(..., alias="enterpriseID")
    generic: int
    specific: int


class Trap(BaseModel):
    model_config = _CAMEL

    agent_address: str
    community: Optional[str] = None
    version: str
    timestamp: int
    creation_time: int
    pdu_length: int
    raw_message: Optional[str] = Field(None, description="Base64 encoded PDU, kept as is")
    trap_identity: Optional[TrapIdentity] = None
    results: list[SnmpResult] = Field(default_factory=list)


class TrapLog(BaseModel):
    model_config = _CAMEL

    location: str
    system_id: str
    trap_address: str
    messages: list[Trap] = Field(default_factory=list)

    @classmethod
    def from_xml(cls, root: Element) -> "TrapLog":
        if root.tag != ROOT_TAG:
            raise ValueError(f"Expected <{ROOT_TAG}>, got <{root.tag}>")
        return cls.model_validate(
            {
                "location": root.get("location"),
                "system_id": root.get("system-id"),
                "trap_address": root.get("trap-address"),
                "messages": [_trap(m) for m in root.findall("messages")],
            }
        )


def _text(element: Element, tag: str) -> Optional[str]:
    child = element.find(tag)
    if child is None or child.text is None:
        return None
    return child.text.strip()


def _trap(element: Element) -> dict[str, object]:
    identity = element.find("trap-identity")
    results = element.find("results")
    return {
        "agent_address": _text(element, "agent-address"),
        "community": _text(element, "community"),
        "version": _text(element, "version"),
        "timestamp": _text(element, "timestamp"),
        "creation_time": _text(element, "creation-time"),
        "pdu_length": _text(element, "pdu-length"),
        "raw_message": _text(element, "raw-message"),
        "trap_identity": None
        if identity is None
        else {
            "enterprise_id": identity.get("enterprise-id"),
            "generic": identity.get("generic"),
            "specific": identity.get("specific"),
        },
        "results": []
        if results is None
        else [_result(r) for r in results.findall("result")],
    }


def _result(element: Element) -> dict[str, object]:
    value = element.find("value")
    return {
        "base": _text(element, "base"),
        "instance": _text(element, "instance"),
        "value": None
        if value is None
        else {"type": value.get("type"), "value": (value.text or "").strip()},
    }


__all__ = ["SnmpValue", "SnmpResult", "TrapIdentity", "Trap", "TrapLog"]
