"""IGMP version 1 (RFC 1112) and version 2 (RFC 2236) message views."""

from __future__ import annotations

import enum
import ipaddress

from .checksum import InvalidPacketError, cal_checksum

__all__ = [
    "IgmpType",
    "IgmpV1Type",
    "IgmpV2Type",
    "IgmpV1Packet",
    "IgmpV2Packet",
]

PACKET_LEN = 8


class _ByteEnum(enum.IntEnum):
    """Byte-sized enum whose unnamed values become pseudo members."""

    @classmethod
    def _missing_(cls, value):
        if isinstance(value, int) and 0 <= value <= 0xFF:
            member = int.__new__(cls, value)
            member._name_ = f"UNKNOWN_{value:#04x}"
            member._value_ = value
            return member
        return None


class IgmpType(_ByteEnum):
    """IGMP message type across all versions."""

    QUERY = 0x11
    REPORT_V1 = 0x12
    REPORT_V2 = 0x16
    REPORT_V3 = 0x22
    LEAVE_V2 = 0x17


class IgmpV1Type(_ByteEnum):
    """IGMP version 1 message type."""

    QUERY = 0x11
    REPORT_V1 = 0x12


class IgmpV2Type(_ByteEnum):
    """IGMP version 2 message type."""

    QUERY = 0x11
    REPORT_V2 = 0x16
    LEAVE_V2 = 0x17


def _check_length(buffer) -> None:
    if len(buffer) != PACKET_LEN:
        raise InvalidPacketError(f"igmp message must be {PACKET_LEN} bytes")


def _read_checksum(buffer) -> int:
    return int.from_bytes(buffer[2:4], "big")


def _write_checksum(buffer, value: int) -> None:
    buffer[2:4] = value.to_bytes(2, "big")


def _refresh_checksum(buffer) -> None:
    _write_checksum(buffer, 0)
    _write_checksum(buffer, cal_checksum(buffer))


def _verifies(buffer) -> bool:
    return _read_checksum(buffer) == 0 or cal_checksum(buffer) == 0


class IgmpV1Packet:
    """A view over an 8-byte IGMP version 1 message.

    Pass a bytearray to be able to change fields in place.
    """

    def __init__(self, buffer):
        _check_length(buffer)
        self.buffer = buffer

    @classmethod
    def unchecked(cls, buffer):
        """Wrap *buffer* without checking its length."""
        packet = cls.__new__(cls)
        packet.buffer = buffer
        return packet

    @property
    def version(self) -> int:
        """High nibble of the first byte."""
        return self.buffer[0] >> 4

    @version.setter
    def version(self, value: int) -> None:
        self.buffer[0] = ((value << 4) & 0xFF) | (self.buffer[0] & 0x0F)

    @property
    def igmp_type(self) -> IgmpV1Type:
        """Low nibble of the first byte."""
        return IgmpV1Type(self.buffer[0] & 0x0F)

    @igmp_type.setter
    def igmp_type(self, value: int) -> None:
        self.buffer[0] = (self.buffer[0] & 0xF0) | int(value)

    @property
    def unused(self) -> int:
        return self.buffer[1]

    @property
    def checksum(self) -> int:
        return _read_checksum(self.buffer)

    @checksum.setter
    def checksum(self, value: int) -> None:
        _write_checksum(self.buffer, value)

    def is_valid(self) -> bool:
        """True if the checksum is unset (zero) or verifies."""
        return _verifies(self.buffer)

    def update_checksum(self) -> None:
        """Recompute and store the checksum."""
        _refresh_checksum(self.buffer)

    @property
    def group_address(self) -> ipaddress.IPv4Address:
        return ipaddress.IPv4Address(bytes(self.buffer[4:8]))

    @group_address.setter
    def group_address(self, value) -> None:
        self.buffer[4:8] = ipaddress.IPv4Address(value).packed

    def __repr__(self) -> str:
        return (
            f"IgmpV1Packet(version={self.version}, type={self.igmp_type.name}, "
            f"checksum={self.checksum}, is_valid={self.is_valid()}, "
            f"group_address={self.group_address})"
        )


class IgmpV2Packet:
    """A view over an 8-byte IGMP version 2 message.

    Pass a bytearray to be able to change fields in place.
    """

    def __init__(self, buffer):
        _check_length(buffer)
        self.buffer = buffer

    @classmethod
    def unchecked(cls, buffer):
        """Wrap *buffer* without checking its length."""
        packet = cls.__new__(cls)
        packet.buffer = buffer
        return packet

    @property
    def igmp_type(self) -> IgmpV2Type:
        return IgmpV2Type(self.buffer[0])

    @igmp_type.setter
    def igmp_type(self, value: int) -> None:
        self.buffer[0] = int(value)

    @property
    def max_resp_time(self) -> int:
        return self.buffer[1]

    @max_resp_time.setter
    def max_resp_time(self, value: int) -> None:
        self.buffer[1] = value

    @property
    def checksum(self) -> int:
        return _read_checksum(self.buffer)

    @checksum.setter
    def checksum(self, value: int) -> None:
        _write_checksum(self.buffer, value)

    def is_valid(self) -> bool:
        """True if the checksum is unset (zero) or verifies."""
        return _verifies(self.buffer)

    def update_checksum(self) -> None:
        """Recompute and store the checksum."""
        _refresh_checksum(self.buffer)

    @property
    def group_address(self) -> ipaddress.IPv4Address:
        return ipaddress.IPv4Address(bytes(self.buffer[4:8]))

    @group_address.setter
    def group_address(self, value) -> None:
        self.buffer[4:8] = ipaddress.IPv4Address(value).packed

    def __repr__(self) -> str:
        return (
            f"IgmpV2Packet(type={self.igmp_type.name}, "
            f"max_resp_time={self.max_resp_time}, checksum={self.checksum}, "
            f"is_valid={self.is_valid()}, group_address={self.group_address})"
        )