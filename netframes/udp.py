"""UDP datagram view (RFC 768)."""

from __future__ import annotations

import ipaddress

from .checksum import InvalidPacketError, ipv4_cal_checksum

__all__ = ["UdpPacket"]

HEADER_LEN = 8
_UDP_PROTOCOL = 17


class UdpPacket:
    """A view over a UDP datagram, with the IPv4 addresses needed for its checksum.

    Pass a bytearray to be able to change fields in place.
    """

    def __init__(self, source_ip, destination_ip, buffer):
        if len(buffer) < HEADER_LEN:
            raise InvalidPacketError(f"udp datagram shorter than {HEADER_LEN} bytes")
        self._bind(source_ip, destination_ip, buffer)

    @classmethod
    def unchecked(cls, source_ip, destination_ip, buffer):
        """Wrap *buffer* without checking its length."""
        packet = cls.__new__(cls)
        packet._bind(source_ip, destination_ip, buffer)
        return packet

    def _bind(self, source_ip, destination_ip, buffer) -> None:
        self._source_ip = ipaddress.IPv4Address(source_ip)
        self._destination_ip = ipaddress.IPv4Address(destination_ip)
        self.buffer = buffer

    def _u16(self, offset: int) -> int:
        return int.from_bytes(self.buffer[offset:offset + 2], "big")

    @property
    def source_port(self) -> int:
        return self._u16(0)

    @source_port.setter
    def source_port(self, value: int) -> None:
        self.buffer[0:2] = value.to_bytes(2, "big")

    @property
    def destination_port(self) -> int:
        return self._u16(2)

    @destination_port.setter
    def destination_port(self, value: int) -> None:
        self.buffer[2:4] = value.to_bytes(2, "big")

    @property
    def length(self) -> int:
        """Length of header and data in bytes, as stored in the header."""
        return self._u16(4)

    @property
    def checksum(self) -> int:
        return self._u16(6)

    def _store_checksum(self, value: int) -> None:
        self.buffer[6:8] = value.to_bytes(2, "big")

    def _compute_checksum(self) -> int:
        return ipv4_cal_checksum(
            self.buffer, self._source_ip, self._destination_ip, _UDP_PROTOCOL
        )

    def is_valid(self) -> bool:
        """True if the checksum is unset (zero) or verifies."""
        return self.checksum == 0 or self._compute_checksum() == 0

    @property
    def payload(self) -> bytes:
        return bytes(self.buffer[HEADER_LEN:])

    def update_checksum(self) -> None:
        """Recompute and store the checksum."""
        self._store_checksum(0)
        self._store_checksum(self._compute_checksum())

    def __repr__(self) -> str:
        return (
            f"UdpPacket(source={self.source_port}, destination={self.destination_port}, "
            f"length={self.length}, checksum={self.checksum}, "
            f"is_valid={self.is_valid()}, payload={self.payload.hex()})"
        )