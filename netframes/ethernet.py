"""Ethernet II frame view (RFC 894)."""

from __future__ import annotations

import enum

from .checksum import InvalidPacketError

__all__ = ["EtherType", "EthernetPacket"]

HEADER_LEN = 14


class EtherType(enum.IntEnum):
    """Layer-3 protocol carried by an Ethernet frame.

    Values without a name come back as pseudo members holding the raw number.
    """

    IPV4 = 0x0800
    ARP = 0x0806
    WAKE_ON_LAN = 0x0842
    TRILL = 0x22F3
    DEC_NET = 0x6003
    RARP = 0x8035
    APPLE_TALK = 0x809B
    AARP = 0x80F3
    IPX = 0x8137
    QNX = 0x8204
    IPV6 = 0x86DD
    FLOW_CONTROL = 0x8808
    COBRA_NET = 0x8819
    MPLS = 0x8847
    MPLS_MULTICAST = 0x8848
    PPPOE_DISCOVERY = 0x8863
    PPPOE_SESSION = 0x8864
    VLAN = 0x8100
    PBRIDGE = 0x88A8
    LLDP = 0x88CC
    PTP = 0x88F7
    CFM = 0x8902
    QINQ = 0x9100

    @classmethod
    def _missing_(cls, value):
        if isinstance(value, int) and 0 <= value <= 0xFFFF:
            member = int.__new__(cls, value)
            member._name_ = f"UNKNOWN_{value:#06x}"
            member._value_ = value
            return member
        return None


def _write(buffer, start: int, data, size: int) -> None:
    data = bytes(data)
    if len(data) != size:
        raise ValueError(f"expected {size} bytes, got {len(data)}")
    buffer[start:start + size] = data


class EthernetPacket:
    """A view over an Ethernet frame held in *buffer*.

    Pass a bytearray to be able to change fields in place.
    """

    def __init__(self, buffer):
        if len(buffer) < HEADER_LEN:
            raise InvalidPacketError(f"ethernet frame shorter than {HEADER_LEN} bytes")
        self.buffer = buffer

    @classmethod
    def unchecked(cls, buffer):
        """Wrap *buffer* without checking its length."""
        packet = cls.__new__(cls)
        packet.buffer = buffer
        return packet

    @property
    def destination(self) -> bytes:
        """Destination MAC address."""
        return bytes(self.buffer[0:6])

    @destination.setter
    def destination(self, value) -> None:
        _write(self.buffer, 0, value, 6)

    @property
    def source(self) -> bytes:
        """Source MAC address."""
        return bytes(self.buffer[6:12])

    @source.setter
    def source(self, value) -> None:
        _write(self.buffer, 6, value, 6)

    @property
    def protocol(self) -> EtherType:
        """Layer-3 protocol of the payload."""
        return EtherType(int.from_bytes(self.buffer[12:14], "big"))

    @protocol.setter
    def protocol(self, value: int) -> None:
        self.buffer[12:14] = int(value).to_bytes(2, "big")

    @property
    def payload(self) -> bytes:
        return bytes(self.buffer[HEADER_LEN:])

    def __repr__(self) -> str:
        return (
            f"EthernetPacket(destination={self.destination.hex(':')}, "
            f"source={self.source.hex(':')}, protocol={self.protocol.name}, "
            f"payload={self.payload.hex()})"
        )