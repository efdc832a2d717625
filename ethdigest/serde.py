"""
Pydantic Integration
Serialization of Digest values through pydantic models.

Wire Format (Hard Contract):
- Serialized as a single string: 0x + 64 lowercase hex digits
- Deserialization requires the 0x prefix; bare hex digits are rejected with
  an explicit "missing `0x`-prefix" error, then the HexCodec takes over
"""
from __future__ import annotations

from typing import TYPE_CHECKING, Annotated, Any

from pydantic import AfterValidator
from pydantic_core import PydanticCustomError, core_schema

from ethdigest.errors import MissingPrefixError, ParseDigestError
from ethdigest.hex import PREFIX

if TYPE_CHECKING:
    from ethdigest.digest import Digest

JSON_PATTERN = r"^0x[0-9a-fA-F]{64}$"


def deserialize(value: str) -> "Digest":
    """
    Deserialize a digest from its wire string.

    Raises:
        MissingPrefixError: If the string does not start with 0x
        ParseDigestError: If the remaining hex is invalid
    """
    from ethdigest.digest import Digest

    if not value.startswith(PREFIX):
        raise MissingPrefixError()
    return Digest.parse(value[len(PREFIX):])


def serialize(value: "Digest") -> str:
    """Serialize a digest to its canonical 0x-prefixed lowercase string."""
    return str(value)


def _validate_str(value: str) -> "Digest":
    try:
        return deserialize(value)
    except ParseDigestError as e:
        raise PydanticCustomError(
            "digest_parsing",
            "invalid digest: {reason}",
            {"reason": e.message},
        ) from e


def digest_core_schema(cls: type) -> core_schema.CoreSchema:
    """Core schema used by ``Digest.__get_pydantic_core_schema__``."""
    from_str = core_schema.chain_schema(
        [
            core_schema.str_schema(),
            core_schema.no_info_plain_validator_function(_validate_str),
        ]
    )
    return core_schema.json_or_python_schema(
        json_schema=from_str,
        python_schema=core_schema.union_schema(
            [core_schema.is_instance_schema(cls), from_str]
        ),
        serialization=core_schema.plain_serializer_function_ser_schema(
            serialize,
            return_schema=core_schema.str_schema(),
        ),
    )


def digest_json_schema() -> dict[str, Any]:
    return {
        "type": "string",
        "pattern": JSON_PATTERN,
        "description": "0x-prefixed 32-byte hex digest",
    }


def _normalize(value: str) -> str:
    return serialize(_validate_str(value))


# A plain str field holding a digest in canonical form.
DigestStr = Annotated[str, AfterValidator(_normalize)]


__all__ = [
    "JSON_PATTERN",
    "deserialize",
    "serialize",
    "digest_core_schema",
    "digest_json_schema",
    "DigestStr",
]
