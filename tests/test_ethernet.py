import pytest

from netframes.checksum import InvalidPacketError
from netframes.ethernet import EtherType, EthernetPacket

DST = bytes.fromhex("020000000001")
SRC = bytes.fromhex("020000000002")


def _frame(ethertype=0x0800, payload=b"hello"):
    return bytearray(DST + SRC + ethertype.to_bytes(2, "big") + payload)


def test_short_buffer_rejected():
    with pytest.raises(InvalidPacketError):
        EthernetPacket(bytes(13))


def test_minimum_header_accepted():
    packet = EthernetPacket(bytes(14))
    assert packet.payload == b""


def test_fields_are_read_from_wire():
    packet = EthernetPacket(_frame(payload=b"abc"))
    assert packet.destination == DST
    assert packet.source == SRC
    assert packet.protocol is EtherType.IPV4
    assert packet.payload == b"abc"


@pytest.mark.parametrize(
    "value, expected",
    [(0x0806, EtherType.ARP), (0x86DD, EtherType.IPV6), (0x8100, EtherType.VLAN), (0x9100, EtherType.QINQ)],
)
def test_known_ethertypes(value, expected):
    assert EthernetPacket(_frame(ethertype=value)).protocol is expected


def test_unknown_ethertype_keeps_value():
    protocol = EthernetPacket(_frame(ethertype=0x1234)).protocol
    assert int(protocol) == 0x1234
    assert protocol not in list(EtherType)


def test_ethertype_out_of_range():
    with pytest.raises(ValueError):
        EtherType(0x10000)


def test_setters_round_trip():
    packet = EthernetPacket(bytearray(20))
    packet.destination = SRC
    packet.source = DST
    packet.protocol = EtherType.ARP
    assert packet.destination == SRC
    assert packet.source == DST
    assert packet.protocol is EtherType.ARP
    assert bytes(packet.buffer[12:14]) == b"\x08\x06"


def test_setter_rejects_wrong_length():
    packet = EthernetPacket(bytearray(20))
    with pytest.raises(ValueError):
        packet.destination = b"\x01\x02"
    assert len(packet.buffer) == 20


def test_unchecked_skips_validation():
    packet = EthernetPacket.unchecked(b"\x01\x02")
    assert packet.buffer == b"\x01\x02"


def test_repr_names_protocol():
    assert "ARP" in repr(EthernetPacket(_frame(ethertype=0x0806)))