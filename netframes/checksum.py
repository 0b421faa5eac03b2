"""Internet checksum (RFC 1071) helpers shared by the packet views."""

from __future__ import annotations

import ipaddress
import struct

__all__ = ["InvalidPacketError", "cal_checksum", "ipv4_cal_checksum"]


class InvalidPacketError(ValueError):
    """Raised when a buffer cannot hold the packet it is meant to describe."""


def _ones_complement_sum(data: bytes) -> int:
    """Sum the big-endian 16-bit words of *data*, zero-padding an odd tail."""
    if len(data) % 2:
        data += b"\x00"
    return sum(word for (word,) in struct.iter_unpack(">H", data))


def _finish(total: int) -> int:
    while total >> 16:
        total = (total & 0xFFFF) + (total >> 16)
    return ~total & 0xFFFF


def cal_checksum(buffer) -> int:
    """Return the one's-complement checksum of *buffer*.

    Computing it over data that already carries a correct checksum gives 0.
    """
    return _finish(_ones_complement_sum(bytes(buffer)))


def ipv4_cal_checksum(buffer, src_ip, dest_ip, protocol: int) -> int:
    """Return the checksum of an upper-layer segment including the IPv4 pseudo header."""
    data = bytes(buffer)
    pseudo_header = (
        ipaddress.IPv4Address(src_ip).packed
        + ipaddress.IPv4Address(dest_ip).packed
        + bytes((0, protocol))
    )
    total = _ones_complement_sum(pseudo_header) + len(data) + _ones_complement_sum(data)
    return _finish(total)