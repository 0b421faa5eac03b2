"""TCP segment view (RFC 793)."""

from __future__ import annotations

import enum
import ipaddress

from .checksum import InvalidPacketError, ipv4_cal_checksum

__all__ = ["TcpFlags", "TcpPacket"]

MIN_HEADER_LEN = 20
_TCP_PROTOCOL = 6


class TcpFlags(enum.IntFlag):
    """Control bits of a TCP header."""

    FIN = 0b0000_0001
    SYN = 0b0000_0010
    RST = 0b0000_0100
    PSH = 0b0000_1000
    ACK = 0b0001_0000
    URG = 0b0010_0000

    def describe(self) -> str:
        """Render the set control bits as ``URG|ACK|...``, or ``NULL`` if none."""
        order = (
            TcpFlags.URG,
            TcpFlags.ACK,
            TcpFlags.PSH,
            TcpFlags.RST,
            TcpFlags.SYN,
            TcpFlags.FIN,
        )
        return "|".join(flag.name for flag in order if self & flag) or "NULL"


class TcpPacket:
    """A view over a TCP segment, with the IPv4 addresses needed for its checksum.

    Pass a bytearray to be able to change fields in place.
    """

    def __init__(self, source_ip, destination_ip, buffer):
        self._bind(source_ip, destination_ip, buffer)
        if len(buffer) < MIN_HEADER_LEN:
            raise InvalidPacketError(f"tcp segment shorter than {MIN_HEADER_LEN} bytes")
        if len(buffer) < self.data_offset * 4:
            raise InvalidPacketError("tcp data offset beyond end of buffer")

    @classmethod
    def unchecked(cls, source_ip, destination_ip, buffer):
        """Wrap *buffer* without validating it."""
        packet = cls.__new__(cls)
        packet._bind(source_ip, destination_ip, buffer)
        return packet

    def _bind(self, source_ip, destination_ip, buffer) -> None:
        self._source_ip = ipaddress.IPv4Address(source_ip)
        self._destination_ip = ipaddress.IPv4Address(destination_ip)
        self.buffer = buffer

    def _u16(self, offset: int) -> int:
        return int.from_bytes(self.buffer[offset:offset + 2], "big")

    def _u32(self, offset: int) -> int:
        return int.from_bytes(self.buffer[offset:offset + 4], "big")

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
    def sequence(self) -> int:
        return self._u32(4)

    @property
    def acknowledgment(self) -> int:
        return self._u32(8)

    @property
    def data_offset(self) -> int:
        """Header length in 4-byte words."""
        return self.buffer[12] >> 4

    @property
    def flags(self) -> TcpFlags:
        return TcpFlags(self.buffer[13])

    @property
    def window(self) -> int:
        return self._u16(14)

    @property
    def checksum(self) -> int:
        return self._u16(16)

    def _store_checksum(self, value: int) -> None:
        self.buffer[16:18] = value.to_bytes(2, "big")

    def _compute_checksum(self) -> int:
        return ipv4_cal_checksum(
            self.buffer, self._source_ip, self._destination_ip, _TCP_PROTOCOL
        )

    def is_valid(self) -> bool:
        """True if the checksum is unset (zero) or verifies."""
        return self.checksum == 0 or self._compute_checksum() == 0

    @property
    def urgent_pointer(self) -> int:
        return self._u16(18)

    @property
    def options(self) -> bytes:
        return bytes(self.buffer[MIN_HEADER_LEN:self.data_offset * 4])

    @property
    def payload(self) -> bytes:
        return bytes(self.buffer[self.data_offset * 4:])

    def update_checksum(self) -> None:
        """Recompute and store the checksum."""
        self._store_checksum(0)
        self._store_checksum(self._compute_checksum())

    def __repr__(self) -> str:
        return (
            f"TcpPacket(source={self.source_port}, destination={self.destination_port}, "
            f"sequence={self.sequence}, acknowledgment={self.acknowledgment}, "
            f"offset={self.data_offset}, flags={self.flags.describe()}, "
            f"window={self.window}, checksum={self.checksum}, "
            f"is_valid={self.is_valid()}, pointer={self.urgent_pointer}, "
            f"options={self.options.hex()}, payload={self.payload.hex()})"
        )