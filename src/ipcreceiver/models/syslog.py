"""
Syslog message logs published by Minions on the Sink API.

The XML document looks like::

    <syslog-message-log system-id="minion-01" location="Default"
                        source-address="10.0.0.1" source-port="514">
      <messages timestamp="2024-01-01T00:00:00Z">PDM0PlRlc3Q=</messages>
    </syslog-message-log>

Each ``messages`` body is the base64 encoded raw syslog line.
"""

import base64
from typing import Optional
from xml.etree.ElementTree import Element

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

ROOT_TAG = "syslog-message-log"


class SyslogMessage(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    timestamp: str = Field(..., description="Reception time reported by the Minion")
    content: str = Field(..., description="Decoded syslog line")

    @field_validator("content", mode="before")
    @classmethod
    def decode_content(cls, v: object) -> object:
        """Decode the base64 body into text"""
        if isinstance(v, (str, bytes)):
            return base64.b64decode(v, validate=True).decode("utf-8", errors="replace")
        return v


class SyslogMessageLog(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    system_id: str
    location: str
    source_address: Optional[str] = None
    source_port: Optional[int] = Field(None, ge=0, le=65535)
    messages: list[SyslogMessage] = Field(default_factory=list)

    @classmethod
    def from_xml(cls, root: Element) -> "SyslogMessageLog":
        if root.tag != ROOT_TAG:
            raise ValueError(f"Expected <{ROOT_TAG}>, got <{root.tag}>")
        return cls.model_validate(
            {
                "system_id": root.get("system-id"),
                "location": root.get("location"),
                "source_address": root.get("source-address"),
                "source_port": root.get("source-port"),
                "messages": [
                    {"timestamp": m.get("timestamp"), "content": (m.text or "").strip()}
                    for m in root.findall("messages")
                ],
            }
        )


__all__ = ["SyslogMessage", "SyslogMessageLog"]
