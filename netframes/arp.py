"""ARP packet view for Ethernet hardware and IPv4 addresses."""

from __future__ import annotations

from .checksum import InvalidPacketError

__all__ = ["ArpPacket"]

PACKET_LEN = 28


def _write(buffer, start: int, data, size: int) -> None:
    data = bytes(data)
    if len(data) != size:
        raise ValueError(f"expected {size} bytes, got {len(data)}")
    buffer[start:start + size] = data


class ArpPacket:
    """A view over a 28-byte ARP packet held in *buffer*.

    Pass a bytearray to be able to change fields in place.
    """

    def __init__(self, buffer):
        if len(buffer) != PACKET_LEN:
            raise InvalidPacketError(f"arp packet must be {PACKET_LEN} bytes")
        self.buffer = buffer

    @classmethod
    def unchecked(cls, buffer):
        """Wrap *buffer* without checking its length."""
        packet = cls.__new__(cls)
        packet.buffer = buffer
        return packet

    def _u16(self, offset: int) -> int:
        return int.from_bytes(self.buffer[offset:offset + 2], "big")

    def _set_u16(self, offset: int, value: int) -> None:
        self.buffer[offset:offset + 2] = value.to_bytes(2, "big")

    @property
    def hardware_type(self) -> int:
        """Hardware type; 1 for Ethernet."""
        return self._u16(0)

    @hardware_type.setter
    def hardware_type(self, value: int) -> None:
        self._set_u16(0, value)

    @property
    def protocol_type(self) -> int:
        """Upper protocol type; 0x0800 for IPv4."""
        return self._u16(2)

    @protocol_type.setter
    def protocol_type(self, value: int) -> None:
        self._set_u16(2, value)

    @property
    def hardware_size(self) -> int:
        return self.buffer[4]

    @hardware_size.setter
    def hardware_size(self, value: int) -> None:
        self.buffer[4] = value

    @property
    def protocol_size(self) -> int:
        return self.buffer[5]

    @protocol_size.setter
    def protocol_size(self, value: int) -> None:
        self.buffer[5] = value

    @property
    def op_code(self) -> int:
        """1 ARP request, 2 ARP reply, 3 RARP request, 4 RARP reply."""
        return self._u16(6)

    @op_code.setter
    def op_code(self, value: int) -> None:
        self._set_u16(6, value)

    @property
    def sender_hardware_addr(self) -> bytes:
        return bytes(self.buffer[8:14])

    @sender_hardware_addr.setter
    def sender_hardware_addr(self, value) -> None:
        _write(self.buffer, 8, value, 6)

    @property
    def sender_protocol_addr(self) -> bytes:
        return bytes(self.buffer[14:18])

    @sender_protocol_addr.setter
    def sender_protocol_addr(self, value) -> None:
        _write(self.buffer, 14, value, 4)

    @property
    def target_hardware_addr(self) -> bytes:
        return bytes(self.buffer[18:24])

    @target_hardware_addr.setter
    def target_hardware_addr(self, value) -> None:
        _write(self.buffer, 18, value, 6)

    @property
    def target_protocol_addr(self) -> bytes:
        return bytes(self.buffer[24:28])

    @target_protocol_addr.setter
    def target_protocol_addr(self, value) -> None:
        _write(self.buffer, 24, value, 4)

    def __repr__(self) -> str:
        return (
            f"ArpPacket(hardware_type={self.hardware_type}, "
            f"protocol_type={self.protocol_type:#06x}, "
            f"hardware_size={self.hardware_size}, protocol_size={self.protocol_size}, "
            f"op_code={self.op_code}, "
            f"sender_hardware_addr={self.sender_hardware_addr.hex(':')}, "
            f"sender_protocol_addr={list(self.sender_protocol_addr)}, "
            f"target_hardware_addr={self.target_hardware_addr.hex(':')}, "
            f"target_protocol_addr={list(self.target_protocol_addr)})"
        )