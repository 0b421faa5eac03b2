"""ICMP message view (RFC 792)."""

from __future__ import annotations

import enum
import ipaddress
import struct
from dataclasses import dataclass
from typing import Union

from .checksum import InvalidPacketError, cal_checksum
from .ipv4 import Ipv4Packet

__all__ = [
    "IcmpKind",
    "DestinationUnreachableCode",
    "RedirectCode",
    "TimeExceededCode",
    "ParameterProblemCode",
    "Unused",
    "Pointer",
    "Address",
    "Identifier",
    "UnknownHeader",
    "Timestamp",
    "IcmpPacket",
    "decode_code",
]

HEADER_LEN = 8


class _ByteEnum(enum.IntEnum):
    """Byte-sized enum whose unnamed values become pseudo members."""

    @classmethod
    def _missing_(cls, value):
        if isinstance(value, int) and 0 <= value <= 0xFF:
            member = int.__new__(cls, value)
            member._name_ = f"UNKNOWN_{value}"
            member._value_ = value
            return member
        return None


class IcmpKind(_ByteEnum):
    """ICMP message type."""

    ECHO_REPLY = 0
    DESTINATION_UNREACHABLE = 3
    SOURCE_QUENCH = 4
    REDIRECT = 5
    ECHO_REQUEST = 8
    ROUTER_ADVERTISEMENT = 9
    ROUTER_SOLICITATION = 10
    TIME_EXCEEDED = 11
    PARAMETER_PROBLEM = 12
    TIMESTAMP_REQUEST = 13
    TIMESTAMP_REPLY = 14
    INFORMATION_REQUEST = 15
    INFORMATION_REPLY = 16
    ADDRESS_MASK_REQUEST = 17
    ADDRESS_MASK_REPLY = 18
    TRACE_ROUTE = 30


class DestinationUnreachableCode(_ByteEnum):
    """Codes of Destination Unreachable messages."""

    DESTINATION_NETWORK_UNREACHABLE = 0
    DESTINATION_HOST_UNREACHABLE = 1
    DESTINATION_PROTOCOL_UNREACHABLE = 2
    DESTINATION_PORT_UNREACHABLE = 3
    FRAGMENTATION_REQUIRED = 4
    SOURCE_ROUTE_FAILED = 5
    DESTINATION_NETWORK_UNKNOWN = 6
    DESTINATION_HOST_UNKNOWN = 7
    SOURCE_HOST_ISOLATED = 8
    NETWORK_ADMINISTRATIVELY_PROHIBITED = 9
    HOST_ADMINISTRATIVELY_PROHIBITED = 10
    NETWORK_UNREACHABLE_FOR_TOS = 11
    HOST_UNREACHABLE_FOR_TOS = 12
    COMMUNICATION_ADMINISTRATIVELY_PROHIBITED = 13
    HOST_PRECEDENCE_VIOLATION = 14
    PRECEDENT_CUTOFF_IN_EFFECT = 15


class RedirectCode(_ByteEnum):
    """Codes of Redirect messages."""

    REDIRECT_DATAGRAM_FOR_NETWORK = 0
    REDIRECT_DATAGRAM_FOR_HOST = 1
    REDIRECT_DATAGRAM_FOR_TOS_AND_NETWORK = 2
    REDIRECT_DATAGRAM_FOR_TOS_AND_HOST = 3


class TimeExceededCode(_ByteEnum):
    """Codes of Time Exceeded messages."""

    TRANSIT = 0
    REASSEMBLY = 1


class ParameterProblemCode(_ByteEnum):
    """Codes of Parameter Problem messages."""

    POINTER_INDICATES_ERROR = 0
    MISSING_REQUIRED_DATA = 1
    BAD_LENGTH = 2


Code = Union[DestinationUnreachableCode, RedirectCode, ParameterProblemCode, int]


def decode_code(kind: int, code: int) -> Code:
    """Interpret *code* in the context of message type *kind*.

    Types without a dedicated code table give the raw number back.
    """
    kind = IcmpKind(kind)
    if kind == IcmpKind.DESTINATION_UNREACHABLE:
        return DestinationUnreachableCode(code)
    if kind == IcmpKind.REDIRECT:
        return RedirectCode(code)
    if kind == IcmpKind.PARAMETER_PROBLEM:
        return ParameterProblemCode(code)
    return code


@dataclass(frozen=True)
class Unused:
    """Second header word that is unused (all zero on the wire)."""

    data: bytes


@dataclass(frozen=True)
class Pointer:
    """Octet index of the error in a Parameter Problem message."""

    pointer: int


@dataclass(frozen=True)
class Address:
    """Gateway address of a Redirect message."""

    gateway: ipaddress.IPv4Address


@dataclass(frozen=True)
class Identifier:
    """Identifier and sequence number of echo, timestamp and information messages."""

    identifier: int
    sequence: int


@dataclass(frozen=True)
class UnknownHeader:
    """Second header word of a message type without a known layout."""

    data: bytes


@dataclass(frozen=True)
class Timestamp:
    """Originate, receive and transmit timestamps."""

    originate: int
    receive: int
    transmit: int


HeaderOther = Union[Unused, Pointer, Address, Identifier, UnknownHeader]
Description = Union[Ipv4Packet, Timestamp, bytes]

_IDENTIFIER_KINDS = frozenset(
    {
        IcmpKind.ECHO_REPLY,
        IcmpKind.ECHO_REQUEST,
        IcmpKind.TIMESTAMP_REQUEST,
        IcmpKind.TIMESTAMP_REPLY,
        IcmpKind.INFORMATION_REQUEST,
        IcmpKind.INFORMATION_REPLY,
    }
)
_UNUSED_KINDS = frozenset(
    {IcmpKind.DESTINATION_UNREACHABLE, IcmpKind.TIME_EXCEEDED, IcmpKind.SOURCE_QUENCH}
)
_ERROR_KINDS = frozenset(
    {
        IcmpKind.DESTINATION_UNREACHABLE,
        IcmpKind.TIME_EXCEEDED,
        IcmpKind.PARAMETER_PROBLEM,
        IcmpKind.SOURCE_QUENCH,
        IcmpKind.REDIRECT,
    }
)
_TIMESTAMP_KINDS = frozenset({IcmpKind.TIMESTAMP_REQUEST, IcmpKind.TIMESTAMP_REPLY})


class IcmpPacket:
    """A view over an ICMP message held in *buffer*.

    Pass a bytearray to be able to change fields in place.
    """

    def __init__(self, buffer):
        if len(buffer) < HEADER_LEN:
            raise InvalidPacketError(f"icmp message shorter than {HEADER_LEN} bytes")
        self.buffer = buffer

    @classmethod
    def unchecked(cls, buffer):
        """Wrap *buffer* without checking its length."""
        packet = cls.__new__(cls)
        packet.buffer = buffer
        return packet

    @property
    def kind(self) -> IcmpKind:
        return IcmpKind(self.buffer[0])

    @kind.setter
    def kind(self, value: int) -> None:
        self.buffer[0] = int(value)

    @property
    def code(self) -> Code:
        return decode_code(self.kind, self.buffer[1])

    @property
    def checksum(self) -> int:
        return int.from_bytes(self.buffer[2:4], "big")

    def is_valid(self) -> bool:
        """True if the checksum is unset (zero) or verifies."""
        return self.checksum == 0 or cal_checksum(self.buffer) == 0

    def header_other(self) -> HeaderOther:
        """Decode the second header word according to the message type."""
        kind = self.kind
        rest = bytes(self.buffer[4:8])
        if kind in _IDENTIFIER_KINDS:
            identifier, sequence = struct.unpack(">HH", rest)
            return Identifier(identifier, sequence)
        if kind in _UNUSED_KINDS:
            return Unused(rest)
        if kind == IcmpKind.REDIRECT:
            return Address(ipaddress.IPv4Address(rest))
        if kind == IcmpKind.PARAMETER_PROBLEM:
            return Pointer(rest[0])
        return UnknownHeader(rest)

    @property
    def payload(self) -> bytes:
        return bytes(self.buffer[HEADER_LEN:])

    def description(self) -> Description:
        """Decode the message body according to the message type.

        Error messages give the embedded IPv4 packet when it parses, timestamp
        messages give their three timestamps, anything else the raw bytes.
        """
        kind = self.kind
        payload = self.payload
        if kind in _ERROR_KINDS:
            try:
                return Ipv4Packet(payload)
            except InvalidPacketError:
                return payload
        if kind in _TIMESTAMP_KINDS:
            if len(payload) < 12:
                raise InvalidPacketError("timestamp message body shorter than 12 bytes")
            return Timestamp(*struct.unpack_from(">III", payload))
        return payload

    def update_checksum(self) -> None:
        """Recompute and store the checksum."""
        self.buffer[2:4] = b"\x00\x00"
        self.buffer[2:4] = cal_checksum(self.buffer).to_bytes(2, "big")

    def __repr__(self) -> str:
        code = self.code
        code_text = code.name if isinstance(code, enum.Enum) else str(code)
        marker = "" if self.is_valid() else "!"
        return (
            f"IcmpPacket{marker}(kind={self.kind.name}, code={code_text}, "
            f"checksum={self.checksum}, payload={self.payload.hex()})"
        )