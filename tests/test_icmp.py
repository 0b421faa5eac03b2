import ipaddress
import struct

import pytest
from hypothesis import given, strategies as st

from netframes.checksum import InvalidPacketError, cal_checksum
from netframes.icmp import (
    Address,
    DestinationUnreachableCode,
    IcmpKind,
    IcmpPacket,
    Identifier,
    ParameterProblemCode,
    Pointer,
    RedirectCode,
    TimeExceededCode,
    Timestamp,
    UnknownHeader,
    Unused,
    decode_code,
)
from netframes.ipv4 import Ipv4Packet


def make(kind, code=0, rest=b"\x00\x00\x00\x00", payload=b""):
    return bytearray([int(kind), code, 0, 0]) + bytearray(rest) + bytearray(payload)


def ipv4_header(src="10.0.0.1", dst="10.0.0.2"):
    header = bytearray(20)
    header[0] = 0x45
    header[8] = 64
    header[9] = 17
    header[12:16] = ipaddress.IPv4Address(src).packed
    header[16:20] = ipaddress.IPv4Address(dst).packed
    return header


def test_short_buffer_rejected():
    with pytest.raises(InvalidPacketError):
        IcmpPacket(bytearray(7))


def test_unchecked_accepts_short_buffer():
    packet = IcmpPacket.unchecked(bytearray([8, 0]))
    assert packet.kind == IcmpKind.ECHO_REQUEST


@pytest.mark.parametrize(
    "value, kind",
    [
        (0, IcmpKind.ECHO_REPLY),
        (3, IcmpKind.DESTINATION_UNREACHABLE),
        (5, IcmpKind.REDIRECT),
        (8, IcmpKind.ECHO_REQUEST),
        (11, IcmpKind.TIME_EXCEEDED),
        (30, IcmpKind.TRACE_ROUTE),
    ],
)
def test_kind_values(value, kind):
    assert IcmpKind(value) is kind
    assert int(kind) == value


def test_unknown_kind_keeps_value():
    kind = IcmpKind(200)
    assert int(kind) == 200
    assert kind.name.startswith("UNKNOWN")


def test_kind_setter_writes_byte():
    buf = make(IcmpKind.ECHO_REQUEST)
    packet = IcmpPacket(buf)
    packet.kind = IcmpKind.ECHO_REPLY
    assert buf[0] == 0
    assert packet.kind == IcmpKind.ECHO_REPLY


def test_decode_code_tables():
    assert decode_code(IcmpKind.DESTINATION_UNREACHABLE, 3) is (
        DestinationUnreachableCode.DESTINATION_PORT_UNREACHABLE
    )
    assert decode_code(IcmpKind.REDIRECT, 1) is RedirectCode.REDIRECT_DATAGRAM_FOR_HOST
    assert decode_code(IcmpKind.PARAMETER_PROBLEM, 2) is ParameterProblemCode.BAD_LENGTH
    assert decode_code(IcmpKind.TIME_EXCEEDED, 1) == 1
    assert not isinstance(decode_code(IcmpKind.ECHO_REQUEST, 0), DestinationUnreachableCode)


def test_unknown_code_keeps_value():
    code = decode_code(IcmpKind.DESTINATION_UNREACHABLE, 99)
    assert isinstance(code, DestinationUnreachableCode)
    assert int(code) == 99


def test_time_exceeded_code_values():
    assert TimeExceededCode(0) is TimeExceededCode.TRANSIT
    assert TimeExceededCode(1) is TimeExceededCode.REASSEMBLY


def test_code_property():
    packet = IcmpPacket(make(IcmpKind.DESTINATION_UNREACHABLE, code=4))
    assert packet.code is DestinationUnreachableCode.FRAGMENTATION_REQUIRED


def test_checksum_reads_bytes():
    buf = make(IcmpKind.ECHO_REQUEST)
    buf[2:4] = b"\x12\x34"
    assert IcmpPacket(buf).checksum == 0x1234


def test_zero_checksum_counts_as_valid():
    assert IcmpPacket(make(IcmpKind.ECHO_REQUEST, payload=b"xyz")).is_valid()


@given(
    kind=st.integers(min_value=0, max_value=255),
    code=st.integers(min_value=0, max_value=255),
    rest=st.binary(min_size=4, max_size=4),
    payload=st.binary(max_size=64),
)
def test_update_checksum_makes_valid(kind, code, rest, payload):
    buf = make(kind, code, rest, payload)
    packet = IcmpPacket(buf)
    packet.update_checksum()
    assert cal_checksum(buf) == 0
    assert packet.is_valid()


def test_corruption_detected():
    buf = make(IcmpKind.ECHO_REQUEST, rest=b"\x00\x01\x00\x01", payload=b"abcd")
    packet = IcmpPacket(buf)
    packet.update_checksum()
    assert packet.checksum != 0
    buf[8] ^= 0x01
    assert not packet.is_valid()


def test_header_other_identifier():
    packet = IcmpPacket(make(IcmpKind.ECHO_REPLY, rest=b"\x01\x02\x03\x04"))
    assert packet.header_other() == Identifier(0x0102, 0x0304)


def test_header_other_unused():
    packet = IcmpPacket(make(IcmpKind.TIME_EXCEEDED, rest=b"\x00\x00\x00\x00"))
    assert packet.header_other() == Unused(b"\x00\x00\x00\x00")


def test_header_other_address():
    packet = IcmpPacket(make(IcmpKind.REDIRECT, rest=bytes([192, 168, 1, 1])))
    assert packet.header_other() == Address(ipaddress.IPv4Address("192.168.1.1"))


def test_header_other_pointer():
    packet = IcmpPacket(make(IcmpKind.PARAMETER_PROBLEM, rest=b"\x07\x00\x00\x00"))
    assert packet.header_other() == Pointer(7)


def test_header_other_unknown():
    packet = IcmpPacket(make(IcmpKind.ROUTER_ADVERTISEMENT, rest=b"\x09\x08\x07\x06"))
    assert packet.header_other() == UnknownHeader(b"\x09\x08\x07\x06")


def test_payload():
    packet = IcmpPacket(make(IcmpKind.ECHO_REQUEST, payload=b"hello"))
    assert packet.payload == b"hello"


def test_description_embedded_ip():
    packet = IcmpPacket(
        make(IcmpKind.DESTINATION_UNREACHABLE, code=3, payload=ipv4_header() + b"12345678")
    )
    description = packet.description()
    assert isinstance(description, Ipv4Packet)
    assert description.source_ip == ipaddress.IPv4Address("10.0.0.1")
    assert description.destination_ip == ipaddress.IPv4Address("10.0.0.2")
    assert description.payload == b"12345678"


def test_description_error_with_garbage_body():
    packet = IcmpPacket(make(IcmpKind.TIME_EXCEEDED, payload=b"\x00\x01\x02"))
    assert packet.description() == b"\x00\x01\x02"


def test_description_timestamp():
    body = struct.pack(">III", 1, 2, 3)
    packet = IcmpPacket(make(IcmpKind.TIMESTAMP_REPLY, payload=body))
    assert packet.description() == Timestamp(1, 2, 3)


def test_description_timestamp_too_short():
    packet = IcmpPacket(make(IcmpKind.TIMESTAMP_REQUEST, payload=b"\x00" * 8))
    with pytest.raises(InvalidPacketError):
        packet.description()


def test_description_other():
    packet = IcmpPacket(make(IcmpKind.ECHO_REQUEST, payload=b"ping"))
    assert packet.description() == b"ping"


def test_repr_marks_invalid():
    buf = make(IcmpKind.ECHO_REQUEST, rest=b"\x00\x01\x00\x01", payload=b"abcd")
    packet = IcmpPacket(buf)
    packet.update_checksum()
    assert repr(packet).startswith("IcmpPacket(kind=ECHO_REQUEST")
    buf[8] ^= 0x01
    assert repr(packet).startswith("IcmpPacket!(")