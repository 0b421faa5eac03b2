# netframes

Views over raw network frames. Each packet class wraps a `bytes` or
`bytearray` buffer and reads header fields straight out of it through
properties. Over a `bytearray`, fields that have setters can be changed in
place and checksums recomputed with `update_checksum()`.

It has no dependencies beyond the standard library.

## Covered formats

| Module | What it holds |
| --- | --- |
| `netframes.ethernet` | `EthernetPacket`, `EtherType` |
| `netframes.arp` | `ArpPacket` (28-byte Ethernet/IPv4 ARP) |
| `netframes.ipv4` | `Ipv4Packet`, `parse_ip_packet` |
| `netframes.ip_protocol` | `IpProtocol`, the IPv4 protocol numbers |
| `netframes.icmp` | `IcmpPacket`, `IcmpKind`, the code enums, `decode_code` and the header/body records `Unused`, `Pointer`, `Address`, `Identifier`, `UnknownHeader`, `Timestamp` |
| `netframes.igmp` | `IgmpV1Packet`, `IgmpV2Packet`, `IgmpType`, `IgmpV1Type`, `IgmpV2Type` |
| `netframes.igmp_v3` | `IgmpV3QueryPacket`, `IgmpV3ReportPacket`, `IgmpV3RecordPacket`, `IgmpV3Type`, `IgmpV3RecordType` |
| `netframes.tcp` | `TcpPacket`, `TcpFlags` |
| `netframes.udp` | `UdpPacket` |
| `netframes.checksum` | `cal_checksum`, `ipv4_cal_checksum`, `InvalidPacketError` |
| `netframes.finger` | `Finger`, a 12-byte fingerprint: the tail of SHA-256 over a nonce, a body and the SHA-256 of a shared token |

The enums are `IntEnum`s. A number without a name still converts: it comes
back as a member named `UNKNOWN_...` that holds the raw value.

## Install

```
pip install .
```

## Example

```python
from netframes.ipv4 import Ipv4Packet
from netframes.udp import UdpPacket

packet = Ipv4Packet(bytearray(frame_bytes))
print(packet.source_ip, "->", packet.destination_ip, packet.protocol.name)
print(packet.is_valid())

udp = UdpPacket(packet.source_ip, packet.destination_ip, bytearray(packet.payload))
udp.destination_port = 5353
udp.update_checksum()
print(udp.source_port, udp.destination_port, udp.is_valid())
```

`TcpPacket` and `UdpPacket` take the IPv4 source and destination addresses
because their checksums cover the IPv4 pseudo header. `is_valid()` on every
view is true when the stored checksum is zero (unset) or verifies.

`IcmpPacket.header_other()` decodes the second header word by message type,
and `description()` gives the embedded `Ipv4Packet` for error messages (or the
raw bytes if it does not parse), a `Timestamp` for timestamp messages, and the
raw payload otherwise.

`IgmpV3QueryPacket.source_addresses()`, `IgmpV3RecordPacket.source_addresses()`
and `IgmpV3ReportPacket.group_records()` return `None` when the count in the
header is zero or when the entries run past the end of the buffer.

```python
from netframes.finger import Finger

finger = Finger("token")
tag = finger.calculate_finger(nonce_bytes, body_bytes)  # 12 bytes
```

## Errors

A buffer that is too short, or that is not the format the class expects,
raises `netframes.checksum.InvalidPacketError` (a `ValueError`). The
`unchecked` class method on each view builds it without those checks.
`parse_ip_packet` accepts IPv4 only and raises the same error for anything else.

## What it does not do

The package only reads and edits headers in buffers you give it. It does not
capture or send packets, open sockets or TUN devices, reassemble fragments or
TCP streams, or encrypt payloads; `Finger` computes fingerprints and nothing more.

## Tests

```
pip install .[test]
pytest
```