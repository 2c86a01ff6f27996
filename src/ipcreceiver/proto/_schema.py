"""Protobuf descriptors for the OpenNMS IPC and telemetry wire formats.

The schemas are declared as ``FileDescriptorProto`` objects and registered in
the default descriptor pool, which is what generated ``*_pb2`` modules do with
their serialized descriptors. Field numbers must match the upstream
``.proto`` files bit for bit.
"""

from google.protobuf import descriptor_pb2, descriptor_pool
from google.protobuf import wrappers_pb2  # noqa: F401  registers wrappers.proto
from google.protobuf.message_factory import GetMessageClass

_F = descriptor_pb2.FieldDescriptorProto

SINK_PACKAGE = "org.opennms.core.ipc.sink.model"
RPC_PACKAGE = "org.opennms.core.ipc.rpc.kafka.model"
TELEMETRY_PACKAGE = "org.opennms.netmgt.telemetry.ipc"
NETFLOW_PACKAGE = "org.opennms.netmgt.telemetry.protocols.netflow.adapter.common"


def _field(
    name: str,
    number: int,
    kind: int,
    label: int = _F.LABEL_OPTIONAL,
    type_name: str | None = None,
) -> descriptor_pb2.FieldDescriptorProto:
    field = _F(name=name, number=number, type=kind, label=label)
    if type_name is not None:
        field.type_name = type_name
    return field


def _map_entry(name: str) -> descriptor_pb2.DescriptorProto:
    # map<string, string>
    entry = descriptor_pb2.DescriptorProto(name=name)
    entry.field.extend(
        [
            _field("key", 1, _F.TYPE_STRING),
            _field("value", 2, _F.TYPE_STRING),
        ]
    )
    entry.options.map_entry = True
    return entry


def _wrapper(name: str, number: int, kind: str) -> descriptor_pb2.FieldDescriptorProto:
    return _field(name, number, _F.TYPE_MESSAGE, type_name=f".google.protobuf.{kind}")


def _sink_file() -> descriptor_pb2.FileDescriptorProto:
    file = descriptor_pb2.FileDescriptorProto(
        name="sink-message.proto", package=SINK_PACKAGE, syntax="proto3"
    )
    msg = file.message_type.add(name="SinkMessage")
    msg.nested_type.append(_map_entry("TracingInfoEntry"))
    msg.field.extend(
        [
            _field("message_id", 1, _F.TYPE_STRING),
            _field("content", 2, _F.TYPE_BYTES),
            _field("current_chunk_number", 3, _F.TYPE_INT32),
            _field("total_chunks", 4, _F.TYPE_INT32),
            _field(
                "tracing_info",
                5,
                _F.TYPE_MESSAGE,
                _F.LABEL_REPEATED,
                f".{SINK_PACKAGE}.SinkMessage.TracingInfoEntry",
            ),
        ]
    )
    return file


def _rpc_file() -> descriptor_pb2.FileDescriptorProto:
    file = descriptor_pb2.FileDescriptorProto(
        name="rpc-message.proto", package=RPC_PACKAGE, syntax="proto3"
    )
    msg = file.message_type.add(name="RpcMessageProto")
    msg.nested_type.append(_map_entry("TracingInfoEntry"))
    msg.field.extend(
        [
            _field("rpc_id", 1, _F.TYPE_STRING),
            _field("rpc_content", 2, _F.TYPE_BYTES),
            _field("system_id", 3, _F.TYPE_STRING),
            _field("location", 4, _F.TYPE_STRING),
            _field("module_id", 5, _F.TYPE_STRING),
            _field("expiration_time", 6, _F.TYPE_UINT64),
            _field("current_chunk_number", 7, _F.TYPE_INT32),
            _field("total_chunks", 8, _F.TYPE_INT32),
            _field(
                "tracing_info",
                9,
                _F.TYPE_MESSAGE,
                _F.LABEL_REPEATED,
                f".{RPC_PACKAGE}.RpcMessageProto.TracingInfoEntry",
            ),
        ]
    )
    return file


def _telemetry_file() -> descriptor_pb2.FileDescriptorProto:
    file = descriptor_pb2.FileDescriptorProto(
        name="telemetry.proto", package=TELEMETRY_PACKAGE, syntax="proto2"
    )
    record = file.message_type.add(name="TelemetryMessage")
    record.field.extend(
        [
            _field("timestamp", 1, _F.TYPE_UINT64, _F.LABEL_REQUIRED),
            _field("bytes", 2, _F.TYPE_BYTES, _F.LABEL_REQUIRED),
        ]
    )
    log = file.message_type.add(name="TelemetryMessageLog")
    log.field.extend(
        [
            _field("location", 1, _F.TYPE_STRING, _F.LABEL_REQUIRED),
            _field("system_id", 2, _F.TYPE_STRING, _F.LABEL_REQUIRED),
            _field("source_address", 3, _F.TYPE_STRING),
            _field("source_port", 4, _F.TYPE_UINT32),
            _field(
                "message",
                5,
                _F.TYPE_MESSAGE,
                _F.LABEL_REPEATED,
                f".{TELEMETRY_PACKAGE}.TelemetryMessage",
            ),
        ]
    )
    return file


def _netflow_file() -> descriptor_pb2.FileDescriptorProto:
    file = descriptor_pb2.FileDescriptorProto(
        name="netflow.proto", package=NETFLOW_PACKAGE, syntax="proto3"
    )
    file.dependency.append("google/protobuf/wrappers.proto")

    direction = file.enum_type.add(name="Direction")
    for name, number in (("INGRESS", 0), ("EGRESS", 1), ("UNKNOWN", 255)):
        direction.value.add(name=name, number=number)

    sampling = file.enum_type.add(name="SamplingAlgorithm")
    for number, name in enumerate(
        (
            "UNASSIGNED",
            "SYSTEMATIC_COUNT_BASED_SAMPLING",
            "SYSTEMATIC_TIME_BASED_SAMPLING",
            "RANDOM_N_OUT_OF_N_SAMPLING",
            "RANDOM_UNIFORM_PROBABILISTIC_SAMPLING",
            "PROPERTY_MATCH_FILTERING",
            "HASH_BASED_FILTERING",
            "FLOW_STATE_DEPENDENT_INTERMEDIATE_FLOW_SELECTION_PROCESS",
        )
    ):
        sampling.value.add(name=name, number=number)

    version = file.enum_type.add(name="NetflowVersion")
    for number, name in enumerate(("V5", "V9", "IPFIX", "SFLOW")):
        version.value.add(name=name, number=number)

    flow = file.message_type.add(name="FlowMessage")
    flow.field.extend(
        [
            _field("timestamp", 1, _F.TYPE_UINT64),
            _wrapper("num_bytes", 2, "UInt64Value"),
            _field(
                "direction", 3, _F.TYPE_ENUM, type_name=f".{NETFLOW_PACKAGE}.Direction"
            ),
            _field("dst_address", 4, _F.TYPE_STRING),
            _field("dst_hostname", 5, _F.TYPE_STRING),
            _wrapper("dst_as", 6, "UInt64Value"),
            _wrapper("dst_mask_len", 7, "UInt32Value"),
            _wrapper("dst_port", 8, "UInt32Value"),
            _wrapper("engine_id", 9, "UInt32Value"),
            _wrapper("engine_type", 10, "UInt32Value"),
            _wrapper("delta_switched", 11, "UInt64Value"),
            _wrapper("first_switched", 12, "UInt64Value"),
            _wrapper("last_switched", 13, "UInt64Value"),
            _wrapper("num_flow_records", 14, "UInt32Value"),
            _wrapper("num_packets", 15, "UInt64Value"),
            _wrapper("flow_seq_num", 16, "UInt64Value"),
            _wrapper("input_snmp_ifindex", 17, "UInt32Value"),
            _wrapper("output_snmp_ifindex", 18, "UInt32Value"),
            _wrapper("ip_protocol_version", 19, "UInt32Value"),
            _field("next_hop_address", 20, _F.TYPE_STRING),
            _field("next_hop_hostname", 21, _F.TYPE_STRING),
            _wrapper("protocol", 22, "UInt32Value"),
            _field(
                "sampling_algorithm",
                23,
                _F.TYPE_ENUM,
                type_name=f".{NETFLOW_PACKAGE}.SamplingAlgorithm",
            ),
            _wrapper("sampling_interval", 24, "DoubleValue"),
            _field("src_address", 26, _F.TYPE_STRING),
            _field("src_hostname", 27, _F.TYPE_STRING),
            _wrapper("src_as", 28, "UInt64Value"),
            _wrapper("src_mask_len", 29, "UInt32Value"),
            _wrapper("src_port", 30, "UInt32Value"),
            _wrapper("tcp_flags", 31, "UInt32Value"),
            _wrapper("tos", 32, "UInt32Value"),
            _field(
                "netflow_version",
                33,
                _F.TYPE_ENUM,
                type_name=f".{NETFLOW_PACKAGE}.NetflowVersion",
            ),
            _wrapper("vlan", 34, "UInt32Value"),
            _field("node_identifier", 35, _F.TYPE_STRING),
        ]
    )
    return file


_POOL = descriptor_pool.Default()
for _file in (_sink_file(), _rpc_file(), _telemetry_file(), _netflow_file()):
    _POOL.AddSerializedFile(_file.SerializeToString())


def _message_class(full_name: str) -> type:
    return GetMessageClass(_POOL.FindMessageTypeByName(full_name))


SinkMessage = _message_class(f"{SINK_PACKAGE}.SinkMessage")
RpcMessageProto = _message_class(f"{RPC_PACKAGE}.RpcMessageProto")
TelemetryMessage = _message_class(f"{TELEMETRY_PACKAGE}.TelemetryMessage")
TelemetryMessageLog = _message_class(f"{TELEMETRY_PACKAGE}.TelemetryMessageLog")
FlowMessage = _message_class(f"{NETFLOW_PACKAGE}.FlowMessage")
