import ipaddress

import pytest

from netframes.checksum import InvalidPacketError, cal_checksum
from netframes.ip_protocol import IpProtocol
from netframes.ipv4 import Ipv4Packet, parse_ip_packet

# A widely used worked example of an IPv4 header with its checksum.
SAMPLE_HEADER = bytes.fromhex("450000730000400040 11b861c0a80001c0a800c7".replace(" ", ""))


def make_packet(payload=b"hello"):
    return bytearray(SAMPLE_HEADER + payload)


def test_fields_of_sample_header():
    packet = Ipv4Packet(make_packet())
    assert packet.version == 4
    assert packet.header_len == 5
    assert packet.dscp == 0
    assert packet.ecn == 0
    assert packet.length == 0x73
    assert packet.id == 0
    assert packet.flags == 0b010
    assert packet.offset == 0
    assert packet.ttl == 0x40
    assert packet.protocol is IpProtocol.UDP
    assert packet.checksum == 0xB861
    assert packet.source_ip == ipaddress.IPv4Address("192.168.0.1")
    assert packet.destination_ip == ipaddress.IPv4Address("192.168.0.199")
    assert packet.options == b""
    assert packet.header == SAMPLE_HEADER
    assert packet.payload == b"hello"


def test_sample_checksum_is_valid():
    assert Ipv4Packet(make_packet()).is_valid()


def test_update_checksum_restores_sample_value():
    buffer = make_packet()
    buffer[10:12] = b"\x12\x34"
    packet = Ipv4Packet(buffer)
    assert not packet.is_valid()
    packet.update_checksum()
    assert packet.checksum == 0xB861
    assert packet.is_valid()


def test_zero_checksum_counts_as_valid():
    buffer = make_packet()
    buffer[10:12] = b"\x00\x00"
    assert Ipv4Packet(buffer).is_valid()


def test_setters_then_checksum_verifies():
    packet = Ipv4Packet(make_packet())
    packet.source_ip = "10.0.0.1"
    packet.destination_ip = ipaddress.IPv4Address("10.0.0.2")
    packet.protocol = IpProtocol.TCP
    packet.update_checksum()
    assert packet.source_ip == ipaddress.IPv4Address("10.0.0.1")
    assert packet.destination_ip == ipaddress.IPv4Address("10.0.0.2")
    assert packet.protocol is IpProtocol.TCP
    assert cal_checksum(packet.header) == 0


def test_flags_setter_keeps_offset_low_byte():
    buffer = make_packet()
    buffer[6:8] = b"\x00\x05"
    packet = Ipv4Packet(buffer)
    packet.flags = 0b001
    assert packet.flags == 0b001
    assert packet.offset == 5


def test_options_and_payload_split_by_header_len():
    header = bytearray(SAMPLE_HEADER)
    header[0] = 0x46
    buffer = header + b"\x01\x02\x03\x04" + b"data"
    packet = Ipv4Packet(buffer)
    assert packet.header_len == 6
    assert packet.options == b"\x01\x02\x03\x04"
    assert packet.payload == b"data"
    assert len(packet.header) == 24


def test_short_buffer_rejected():
    with pytest.raises(InvalidPacketError):
        Ipv4Packet(SAMPLE_HEADER[:19])


def test_wrong_version_rejected():
    buffer = make_packet()
    buffer[0] = 0x65
    with pytest.raises(InvalidPacketError):
        Ipv4Packet(buffer)


def test_header_len_beyond_buffer_rejected():
    buffer = bytearray(SAMPLE_HEADER)
    buffer[0] = 0x4F
    with pytest.raises(InvalidPacketError):
        Ipv4Packet(buffer)


def test_unchecked_skips_validation():
    packet = Ipv4Packet.unchecked(bytearray(b"\x60" + bytes(19)))
    assert packet.version == 6


def test_parse_ip_packet_returns_ipv4_view():
    packet = parse_ip_packet(make_packet())
    assert isinstance(packet, Ipv4Packet)
    assert packet.payload == b"hello"


@pytest.mark.parametrize("buffer", [b"", b"\x60" + bytes(39)])
def test_parse_ip_packet_rejects_non_ipv4(buffer):
    with pytest.raises(InvalidPacketError):
        parse_ip_packet(buffer)


def test_repr_mentions_addresses_and_protocol():
    text = repr(Ipv4Packet(make_packet()))
    assert "192.168.0.1" in text
    assert "192.168.0.199" in text
    assert "UDP" in text