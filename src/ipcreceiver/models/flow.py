"""
Flow record carried inside OpenNMS telemetry envelopes.

One ``FlowRecord`` is produced for every ``TelemetryMessage`` of a
``TelemetryMessageLog``. Wrapper fields of the protobuf message are unwrapped
to plain optional values; absent wrappers stay ``None`` and are left out of
the JSON rendering.
"""

from enum import StrEnum
from typing import Optional

from pydantic import BaseModel, Field


class Direction(StrEnum):
    INGRESS = "INGRESS"
    EGRESS = "EGRESS"
    UNKNOWN = "UNKNOWN"


class SamplingAlgorithm(StrEnum):
    UNASSIGNED = "UNASSIGNED"
    SYSTEMATIC_COUNT_BASED_SAMPLING = "SYSTEMATIC_COUNT_BASED_SAMPLING"
    SYSTEMATIC_TIME_BASED_SAMPLING = "SYSTEMATIC_TIME_BASED_SAMPLING"
    RANDOM_N_OUT_OF_N_SAMPLING = "RANDOM_N_OUT_OF_N_SAMPLING"
    RANDOM_UNIFORM_PROBABILISTIC_SAMPLING = "RANDOM_UNIFORM_PROBABILISTIC_SAMPLING"
    PROPERTY_MATCH_FILTERING = "PROPERTY_MATCH_FILTERING"
    HASH_BASED_FILTERING = "HASH_BASED_FILTERING"
    FLOW_STATE_DEPENDENT_INTERMEDIATE_FLOW_SELECTION_PROCESS = (
        "FLOW_STATE_DEPENDENT_INTERMEDIATE_FLOW_SELECTION_PROCESS"
    )


class NetflowVersion(StrEnum):
    V5 = "V5"
    V9 = "V9"
    IPFIX = "IPFIX"
    SFLOW = "SFLOW"


class FlowRecord(BaseModel):
    """
    Flow document decoded from a ``FlowMessage``.

    Counters that the exporter may omit are optional; enum fields fall back to
    their protobuf zero value and keep numbers that have no known name.
    """

    timestamp: int = Field(default=0, ge=0, description="Flow timestamp (ms since epoch)")
    num_bytes: Optional[int] = Field(None, ge=0, description="Number of bytes transferred")
    # Open proto3 enums: numbers without a known name pass through as ints
    direction: Direction | int = Field(default=Direction.INGRESS)

    dst_address: Optional[str] = None
    dst_hostname: Optional[str] = None
    dst_as: Optional[int] = None
    dst_mask_len: Optional[int] = None
    dst_port: Optional[int] = Field(None, ge=0, le=65535)

    engine_id: Optional[int] = None
    engine_type: Optional[int] = None

    delta_switched: Optional[int] = None
    first_switched: Optional[int] = None
    last_switched: Optional[int] = None

    num_flow_records: Optional[int] = None
    num_packets: Optional[int] = Field(None, ge=0)
    flow_seq_num: Optional[int] = None

    input_snmp_ifindex: Optional[int] = None
    output_snmp_ifindex: Optional[int] = None
    ip_protocol_version: Optional[int] = None

    next_hop_address: Optional[str] = None
    next_hop_hostname: Optional[str] = None
    protocol: Optional[int] = Field(None, description="IP protocol number")

    sampling_algorithm: SamplingAlgorithm | int = Field(default=SamplingAlgorithm.UNASSIGNED)
    sampling_interval: Optional[float] = None

    src_address: Optional[str] = None
    src_hostname: Optional[str] = None
    src_as: Optional[int] = None
    src_mask_len: Optional[int] = None
    src_port: Optional[int] = Field(None, ge=0, le=65535)

    tcp_flags: Optional[int] = None
    tos: Optional[int] = None
    netflow_version: NetflowVersion | int = Field(default=NetflowVersion.V5)
    vlan: Optional[int] = None
    node_identifier: Optional[str] = None


__all__ = ["Direction", "SamplingAlgorithm", "NetflowVersion", "FlowRecord"]
