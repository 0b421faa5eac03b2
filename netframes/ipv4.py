"""IPv4 packet view (RFC 791)."""

from __future__ import annotations

import ipaddress

from .checksum import InvalidPacketError, cal_checksum
from .ip_protocol import IpProtocol

__all__ = ["Ipv4Packet", "parse_ip_packet"]

MIN_HEADER_LEN = 20


class Ipv4Packet:
    """A view over an IPv4 packet held in *buffer*.

    Pass a bytearray to be able to change fields in place.
    """

    def __init__(self, buffer):
        if len(buffer) < MIN_HEADER_LEN:
            raise InvalidPacketError("len < 20")
        if buffer[0] >> 4 != 4:
            raise InvalidPacketError("not ipv4")
        self.buffer = buffer
        if len(buffer) < self.header_len * 4:
            raise InvalidPacketError("head_len err")

    @classmethod
    def unchecked(cls, buffer):
        """Wrap *buffer* without validating it."""
        packet = cls.__new__(cls)
        packet.buffer = buffer
        return packet

    def _u16(self, offset: int) -> int:
        return int.from_bytes(self.buffer[offset:offset + 2], "big")

    @property
    def header(self) -> bytes:
        return bytes(self.buffer[:self.header_len * 4])

    @property
    def payload(self) -> bytes:
        return bytes(self.buffer[self.header_len * 4:])

    @property
    def version(self) -> int:
        return self.buffer[0] >> 4

    @property
    def header_len(self) -> int:
        """Header length in 4-byte words."""
        return self.buffer[0] & 0x0F

    @property
    def dscp(self) -> int:
        """Differentiated services code point."""
        return self.buffer[1] >> 2

    @property
    def ecn(self) -> int:
        """Explicit congestion notification bits."""
        return self.buffer[1] & 0b11

    @property
    def length(self) -> int:
        """Total length of the packet in bytes."""
        return self._u16(2)

    @property
    def id(self) -> int:
        return self._u16(4)

    @property
    def flags(self) -> int:
        """The 3 flag bits: reserved, don't fragment, more fragments."""
        return self.buffer[6] >> 5

    @flags.setter
    def flags(self, value: int) -> None:
        self.buffer[6] = (self.buffer[6] & 0b1110_0000) | ((value << 5) & 0xFF)

    @property
    def offset(self) -> int:
        """Fragment offset."""
        return self._u16(6) & 0x1FFF

    @property
    def ttl(self) -> int:
        return self.buffer[8]

    @property
    def protocol(self) -> IpProtocol:
        return IpProtocol(self.buffer[9])

    @protocol.setter
    def protocol(self, value: int) -> None:
        self.buffer[9] = int(value)

    @property
    def checksum(self) -> int:
        return self._u16(10)

    def is_valid(self) -> bool:
        """True if the header checksum is unset (zero) or verifies."""
        return self.checksum == 0 or cal_checksum(self.header) == 0

    @property
    def source_ip(self) -> ipaddress.IPv4Address:
        return ipaddress.IPv4Address(bytes(self.buffer[12:16]))

    @source_ip.setter
    def source_ip(self, value) -> None:
        self.buffer[12:16] = ipaddress.IPv4Address(value).packed

    @property
    def destination_ip(self) -> ipaddress.IPv4Address:
        return ipaddress.IPv4Address(bytes(self.buffer[16:20]))

    @destination_ip.setter
    def destination_ip(self, value) -> None:
        self.buffer[16:20] = ipaddress.IPv4Address(value).packed

    @property
    def options(self) -> bytes:
        return bytes(self.buffer[MIN_HEADER_LEN:self.header_len * 4])

    def update_checksum(self) -> None:
        """Recompute and store the header checksum."""
        self.buffer[10:12] = b"\x00\x00"
        self.buffer[10:12] = cal_checksum(self.header).to_bytes(2, "big")

    def __repr__(self) -> str:
        return (
            f"Ipv4Packet(version={self.version}, header_len={self.header_len}, "
            f"dscp={self.dscp}, ecn={self.ecn}, length={self.length}, id={self.id}, "
            f"flags={self.flags}, offset={self.offset}, ttl={self.ttl}, "
            f"protocol={self.protocol.name}, checksum={self.checksum}, "
            f"is_valid={self.is_valid()}, source={self.source_ip}, "
            f"destination={self.destination_ip}, options={self.options.hex()}, "
            f"payload={self.payload.hex()})"
        )


def parse_ip_packet(buffer) -> Ipv4Packet:
    """Return a view of the IP packet in *buffer*; only IPv4 is supported."""
    if len(buffer) == 0 or buffer[0] >> 4 != 4:
        raise InvalidPacketError("unsupported ip version")
    return Ipv4Packet(buffer)