from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator

from .errors import ConfigurationError
from .models.types import IpcMode, ParserKind


class ReceiverConfig(BaseModel):
    """
    Settings of one receiver, validated before the consumer is created.

    An invalid combination is a startup failure, never a per-message one.
    """

    model_config = ConfigDict(frozen=True)

    bootstrap: str = Field("localhost:9092", min_length=1, description="Kafka bootstrap server")
    topic: str = Field("OpenNMS.Sink.Trap", min_length=1, description="Topic carrying the IPC messages")
    group_id: str = Field("sink-go-client", min_length=1, description="Consumer group ID")
    parameters: list[str] = Field(
        default_factory=list,
        description="Extra consumer settings as key=value, e.g. acks=1",
    )
    ipc: IpcMode = Field(default=IpcMode.SINK, description="IPC API of the topic")
    telemetry: bool = Field(default=False, description="Unwrap flows from telemetry envelopes")
    parser: Optional[ParserKind] = Field(None, description="Render Sink XML payloads as JSON")
    poll_timeout: float = Field(0.5, gt=0, description="Poll timeout (seconds)")

    @field_validator("ipc", mode="before")
    @classmethod
    def default_ipc(cls, v: object) -> object:
        """An empty IPC means the Sink API"""
        if v is None or v == "":
            return IpcMode.SINK
        return v

    @model_validator(mode="after")
    def check_payload_handling(self) -> "ReceiverConfig":
        if self.ipc is IpcMode.RPC and (self.telemetry or self.parser is not None):
            raise ValueError("Telemetry and parsers are only available with the sink IPC")
        if self.telemetry and self.parser is not None:
            raise ValueError("Use either telemetry or a parser, not both")
        return self


def load_config(**values: object) -> ReceiverConfig:
    """Build a `ReceiverConfig`, turning validation failures into `ConfigurationError`."""
    try:
        return ReceiverConfig.model_validate(values)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid receiver configuration: {e}") from e


__all__ = ["ReceiverConfig", "load_config"]
