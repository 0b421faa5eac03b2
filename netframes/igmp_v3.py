"""IGMP version 3 (RFC 3376) query, report and group record views."""

from __future__ import annotations

import enum
import ipaddress
from typing import List, Optional

from .checksum import InvalidPacketError, cal_checksum

__all__ = [
    "IgmpV3Type",
    "IgmpV3RecordType",
    "IgmpV3QueryPacket",
    "IgmpV3ReportPacket",
    "IgmpV3RecordPacket",
]

QUERY_MIN_LEN = 12
REPORT_MIN_LEN = 8
RECORD_MIN_LEN = 8


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


class IgmpV3Type(_ByteEnum):
    """IGMP version 3 message type."""

    QUERY = 0x11
    REPORT_V3 = 0x22


class IgmpV3RecordType(_ByteEnum):
    """Type of a group record in a version 3 report."""

    MODE_IS_INCLUDE = 1
    MODE_IS_EXCLUDE = 2
    CHANGE_TO_INCLUDE_MODE = 3
    CHANGE_TO_EXCLUDE_MODE = 4
    ALLOW_NEW_SOURCES = 5
    BLOCK_OLD_SOURCES = 6


def _check_min_length(buffer, min_len: int, name: str) -> None:
    if len(buffer) < min_len:
        raise InvalidPacketError(f"igmp v3 {name} shorter than {min_len} bytes")


def _u16(buffer, offset: int) -> int:
    return int.from_bytes(buffer[offset:offset + 2], "big")


def _address_at(buffer, start: int) -> Optional[ipaddress.IPv4Address]:
    end = start + 4
    if end > len(buffer):
        return None
    return ipaddress.IPv4Address(bytes(buffer[start:end]))


def _address_list(buffer, first: int, count: int) -> Optional[List[ipaddress.IPv4Address]]:
    """Read *count* addresses from *first*; None if there are none or they overrun."""
    if count == 0:
        return None
    addresses = []
    for index in range(count):
        address = _address_at(buffer, first + index * 4)
        if address is None:
            return None
        addresses.append(address)
    return addresses


class IgmpV3QueryPacket:
    """A view over an IGMP version 3 membership query.

    Pass a bytearray to be able to change fields in place.
    """

    def __init__(self, buffer):
        _check_min_length(buffer, QUERY_MIN_LEN, "query")
        self.buffer = buffer

    @classmethod
    def unchecked(cls, buffer):
        """Wrap *buffer* without checking its length."""
        packet = cls.__new__(cls)
        packet.buffer = buffer
        return packet

    @property
    def igmp_type(self) -> IgmpV3Type:
        return IgmpV3Type(self.buffer[0])

    @igmp_type.setter
    def igmp_type(self, value: int) -> None:
        self.buffer[0] = int(value)

    @property
    def max_resp_code(self) -> int:
        return self.buffer[1]

    @max_resp_code.setter
    def max_resp_code(self, value: int) -> None:
        self.buffer[1] = value

    @property
    def checksum(self) -> int:
        return _u16(self.buffer, 2)

    @checksum.setter
    def checksum(self, value: int) -> None:
        self.buffer[2:4] = value.to_bytes(2, "big")

    def is_valid(self) -> bool:
        """True if the checksum is unset (zero) or verifies."""
        return self.checksum == 0 or cal_checksum(self.buffer) == 0

    def update_checksum(self) -> None:
        """Recompute and store the checksum."""
        self.checksum = 0
        self.checksum = cal_checksum(self.buffer)

    @property
    def group_address(self) -> ipaddress.IPv4Address:
        return ipaddress.IPv4Address(bytes(self.buffer[4:8]))

    @group_address.setter
    def group_address(self, value) -> None:
        self.buffer[4:8] = ipaddress.IPv4Address(value).packed

    @property
    def resv(self) -> int:
        """Reserved high nibble of byte 8."""
        return self.buffer[8] >> 4

    @property
    def s(self) -> int:
        """Suppress router-side processing flag."""
        return (self.buffer[8] & 0x0F) >> 3

    @property
    def qrv(self) -> int:
        """Querier's robustness variable."""
        return self.buffer[8] & 0x07

    @qrv.setter
    def qrv(self, value: int) -> None:
        self.buffer[8] = (self.buffer[8] & ~0x07 & 0xFF) | (value & 0x07)

    @property
    def qqic(self) -> int:
        """Querier's query interval code."""
        return self.buffer[9]

    @qqic.setter
    def qqic(self, value: int) -> None:
        self.buffer[9] = value

    @property
    def source_number(self) -> int:
        """Number of source addresses announced in the header."""
        return _u16(self.buffer, 10)

    def source_addresses(self) -> Optional[List[ipaddress.IPv4Address]]:
        """All announced source addresses, or None if there are none or they overrun."""
        return _address_list(self.buffer, QUERY_MIN_LEN, self.source_number)

    def source_address(self, index: int) -> Optional[ipaddress.IPv4Address]:
        """The address at slot *index*; None while *index* is within the announced count."""
        if self.source_number >= index:
            return None
        return _address_at(self.buffer, QUERY_MIN_LEN + index * 4)

    def __repr__(self) -> str:
        return (
            f"IgmpV3QueryPacket(type={self.igmp_type.name}, "
            f"max_resp_code={self.max_resp_code}, checksum={self.checksum}, "
            f"is_valid={self.is_valid()}, group_address={self.group_address}, "
            f"s={self.s}, qrv={self.qrv}, qqic={self.qqic}, "
            f"source_number={self.source_number}, "
            f"source_addresses={self.source_addresses()})"
        )


class IgmpV3RecordPacket:
    """A view over one group record of a version 3 report."""

    def __init__(self, buffer):
        _check_min_length(buffer, RECORD_MIN_LEN, "group record")
        self.buffer = buffer

    @classmethod
    def unchecked(cls, buffer):
        """Wrap *buffer* without checking its length."""
        packet = cls.__new__(cls)
        packet.buffer = buffer
        return packet

    @property
    def record_type(self) -> IgmpV3RecordType:
        return IgmpV3RecordType(self.buffer[0])

    @property
    def aux_data_len(self) -> int:
        """Length of the auxiliary data in 4-byte words."""
        return self.buffer[1]

    @property
    def source_number(self) -> int:
        return _u16(self.buffer, 2)

    @property
    def multicast_address(self) -> ipaddress.IPv4Address:
        return ipaddress.IPv4Address(bytes(self.buffer[4:8]))

    def source_addresses(self) -> Optional[List[ipaddress.IPv4Address]]:
        """All announced source addresses, or None if there are none or they overrun."""
        return _address_list(self.buffer, RECORD_MIN_LEN, self.source_number)

    def source_address(self, index: int) -> Optional[ipaddress.IPv4Address]:
        """The address at slot *index*; None while *index* is within the announced count."""
        if self.source_number >= index:
            return None
        return _address_at(self.buffer, RECORD_MIN_LEN + index * 4)

    @property
    def auxiliary_data(self) -> bytes:
        """Auxiliary data after the sources; empty if it overruns the buffer."""
        start = RECORD_MIN_LEN + self.source_number * 4
        end = start + self.aux_data_len * 4
        if end > len(self.buffer):
            return b""
        return bytes(self.buffer[start:end])

    def __repr__(self) -> str:
        return (
            f"IgmpV3RecordPacket(record_type={self.record_type.name}, "
            f"aux_data_len={self.aux_data_len}, source_number={self.source_number}, "
            f"multicast_address={self.multicast_address}, "
            f"source_addresses={self.source_addresses()}, "
            f"auxiliary_data={self.auxiliary_data.hex()})"
        )


class IgmpV3ReportPacket:
    """A view over an IGMP version 3 membership report."""

    def __init__(self, buffer):
        _check_min_length(buffer, REPORT_MIN_LEN, "report")
        self.buffer = buffer

    @classmethod
    def unchecked(cls, buffer):
        """Wrap *buffer* without checking its length."""
        packet = cls.__new__(cls)
        packet.buffer = buffer
        return packet

    @property
    def igmp_type(self) -> IgmpV3Type:
        return IgmpV3Type(self.buffer[0])

    @property
    def reserved1(self) -> int:
        return self.buffer[1]

    @property
    def checksum(self) -> int:
        return _u16(self.buffer, 2)

    def is_valid(self) -> bool:
        """True if the checksum is unset (zero) or verifies."""
        return self.checksum == 0 or cal_checksum(self.buffer) == 0

    @property
    def reserved2(self) -> int:
        return _u16(self.buffer, 4)

    @property
    def record_number(self) -> int:
        """Number of group records announced in the header."""
        return _u16(self.buffer, 6)

    def group_records(self) -> Optional[List[IgmpV3RecordPacket]]:
        """All group records, or None if there are none or any of them is truncated."""
        count = self.record_number
        if count == 0:
            return None
        buffer = bytes(self.buffer)
        records = []
        start = REPORT_MIN_LEN
        for _ in range(count):
            if start >= len(buffer):
                return None
            try:
                record = IgmpV3RecordPacket(buffer[start:])
            except InvalidPacketError:
                return None
            end = start + RECORD_MIN_LEN + record.aux_data_len * 4 + record.source_number * 4
            if end > len(buffer):
                return None
            records.append(IgmpV3RecordPacket(buffer[start:end]))
            start = end
        return records

    def __repr__(self) -> str:
        return (
            f"IgmpV3ReportPacket(type={self.igmp_type.name}, "
            f"reserved1={self.reserved1}, checksum={self.checksum}, "
            f"is_valid={self.is_valid()}, reserved2={self.reserved2}, "
            f"record_number={self.record_number}, "
            f"group_records={self.group_records()})"
        )