[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "netframes"
version = "1.2.12"
description = "Read and edit Ethernet, ARP, IPv4, ICMP, IGMP, TCP and UDP headers over byte buffers"
requires-python = ">=3.10"
dependencies = []
keywords = ["networking", "packets", "ipv4", "tcp", "udp", "icmp", "igmp", "arp", "ethernet", "checksum"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Networking",
]

[project.optional-dependencies]
test = ["pytest", "hypothesis"]

[tool.hatch.build.targets.wheel]
packages = ["netframes"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"
