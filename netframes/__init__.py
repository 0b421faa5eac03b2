"""Views over raw network frames: Ethernet, ARP, IPv4, ICMP, IGMP, TCP and UDP, with checksum and fingerprint helpers."""

__version__ = "1.2.12"