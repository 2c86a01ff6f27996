from google.protobuf.json_format import MessageToDict
from google.protobuf.message import Message
from pydantic import BaseModel


def to_json(model: BaseModel) -> bytes:
    """
    Serialize a Pydantic model to indented JSON bytes for the handler.
    """
    # Aliases carry the camelCase names of the Sink DTOs
    return model.model_dump_json(indent=2, by_alias=True, exclude_none=True).encode()


def from_protobuf[M: BaseModel](model_cls: type[M], message: Message) -> M:
    """
    Convert a decoded protobuf message to a Pydantic model.
    """
    # Wrapper types unwrap to plain values; 64-bit integers come out as strings
    # and are coerced back by pydantic.
    model_dict = MessageToDict(message, preserving_proto_field_name=True)
    return model_cls.model_validate(model_dict)
