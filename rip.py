#!/usr/bin/env python3

"""
RIPv2 protocol module for ripfwd.

Decodes the RIP payload of an IPv4/UDP packet into a RIPPacket and
assembles a RIPPacket back into RIP wire bytes.
"""
import struct
import logging
from dataclasses import dataclass, field
from typing import List, Optional

from globals import bytes_to_ip, ip_to_bytes, ip_to_int, IP_HEADER_LEN, UDP_HEADER_LEN

RIP_REQUEST  = 1
RIP_RESPONSE = 2
RIP_VERSION  = 2

RIP_MAX_ENTRY = 25
RIP_INFINITY  = 16
RIP_PORT      = 520

FAMILY_UNSPEC = 0
FAMILY_INET   = 2

RIP_HEADER_LEN = 4
RIP_ENTRY_LEN  = 20

# The payload is taken at a fixed offset: a 20 byte IPv4 header without
# options followed by the 8 byte UDP header. IHL is not consulted.
RIP_OFFSET = IP_HEADER_LEN + UDP_HEADER_LEN
RIP_ENTRIES_OFFSET = RIP_OFFSET + RIP_HEADER_LEN

RIP_HEADER_FMT = '!BBH'
RIP_ENTRY_FMT  = '!HH4s4s4sI'

@dataclass
class RIPEntry:
    """
    A single RIP route entry. Family and route tag are not kept,
    the family follows from the packet command and the tag is always 0.
    """
    ip_address: str
    subnet_mask: str
    next_hop: str
    metric: int

    @property
    def prefix_length(self) -> int:
        return bin(ip_to_int(self.subnet_mask)).count('1')

    def __str__(self):
        return f'{self.ip_address}/{self.prefix_length} via {self.next_hop} metric {self.metric}'

@dataclass
class RIPPacket:
    """
    A RIPv2 message. Version and the must-be-zero field are not kept.
    """
    command: int
    entries: List[RIPEntry] = field(default_factory=list)

    @property
    def family(self) -> int:
        """
        Address family every entry carries on the wire.
        """
        return FAMILY_UNSPEC if self.command == RIP_REQUEST else FAMILY_INET

def command_family(command: int) -> Optional[int]:
    if command == RIP_REQUEST:
        return FAMILY_UNSPEC
    if command == RIP_RESPONSE:
        return FAMILY_INET
    return None

def is_contiguous_mask(mask: int) -> bool:
    """
    True if the set bits of a 32-bit mask form a single high-order run.
    0.0.0.0 passes.
    """
    return ((mask - 1) & 0xFFFFFFFF) | mask == 0xFFFFFFFF

def parse_rip_entry(data: bytes, command: int) -> Optional[RIPEntry]:
    """
    Parse and validate a single RIP entry.

    :param data: The 20 raw bytes of the entry.
    :param command: The command of the enclosing packet.
    :return: An RIPEntry object or None if the entry is invalid.
    """
    if len(data) < RIP_ENTRY_LEN:
        return None

    family, tag, ip_raw, mask_raw, next_hop_raw, metric = struct.unpack(RIP_ENTRY_FMT, data[:RIP_ENTRY_LEN])

    if family != command_family(command):
        logging.debug('rip: family %d does not match command %d', family, command)
        return None
    if tag != 0:
        logging.debug('rip: non-zero route tag %d', tag)
        return None
    if not is_contiguous_mask(int.from_bytes(mask_raw, 'big')):
        logging.debug('rip: mask %s is not contiguous', bytes_to_ip(mask_raw))
        return None
    if metric < 1 or metric > RIP_INFINITY:
        logging.debug('rip: metric %d out of range', metric)
        return None

    return RIPEntry(
        ip_address=bytes_to_ip(ip_raw),
        subnet_mask=bytes_to_ip(mask_raw),
        next_hop=bytes_to_ip(next_hop_raw),
        metric=metric
    )

def parse_rip_packet(packet: bytes, length: Optional[int] = None) -> Optional[RIPPacket]:
    """
    Parse a RIP packet out of a received IPv4 packet.

    The IP and UDP checksums are not checked. The number of entries is
    inferred from the IPv4 Total Length, which must not exceed length.

    :param packet: The IPv4 packet, RIP payload at byte 28.
    :param length: Number of valid bytes in packet, defaults to len(packet).
    :return: A RIPPacket object or None if the packet is invalid.
    """
    if length is None:
        length = len(packet)
    if length > len(packet):
        logging.debug('rip: length %d exceeds the %d byte buffer', length, len(packet))
        return None
    if length < RIP_ENTRIES_OFFSET:
        logging.debug('rip: %d bytes is too short for a RIP packet', length)
        return None

    total_length = struct.unpack('!H', packet[2:4])[0]
    if total_length > length:
        logging.debug('rip: total length %d exceeds %d', total_length, length)
        return None

    command, version, zero = struct.unpack(RIP_HEADER_FMT, packet[RIP_OFFSET:RIP_ENTRIES_OFFSET])

    if command not in (RIP_REQUEST, RIP_RESPONSE):
        logging.debug('rip: bad command %d', command)
        return None
    if version != RIP_VERSION:
        logging.debug('rip: bad version %d', version)
        return None
    if zero != 0:
        logging.debug('rip: must-be-zero field is %#06x', zero)
        return None

    num_entries, remainder = divmod(total_length - RIP_ENTRIES_OFFSET, RIP_ENTRY_LEN)
    if num_entries < 0 or remainder:
        logging.debug('rip: total length %d is not a whole number of entries', total_length)
        return None
    if num_entries > RIP_MAX_ENTRY:
        logging.debug('rip: %d entries, maximum is %d', num_entries, RIP_MAX_ENTRY)
        return None

    entries = []
    offset = RIP_ENTRIES_OFFSET

    for _ in range(num_entries):
        entry = parse_rip_entry(packet[offset:offset + RIP_ENTRY_LEN], command)
        if not entry:
            return None
        entries.append(entry)
        offset += RIP_ENTRY_LEN

    return RIPPacket(command=command, entries=entries)

def assemble_rip_packet(rip: RIPPacket) -> bytes:
    """
    Build the RIP wire format of a RIPPacket, filling in the version,
    must-be-zero, address family and route tag fields.

    :return: 4 header bytes plus 20 bytes per entry.
    """
    family = rip.family
    payload = struct.pack(RIP_HEADER_FMT, rip.command, RIP_VERSION, 0)
    for entry in rip.entries:
        payload += struct.pack(RIP_ENTRY_FMT,
                               family,
                               0,
                               ip_to_bytes(entry.ip_address),
                               ip_to_bytes(entry.subnet_mask),
                               ip_to_bytes(entry.next_hop),
                               entry.metric)
    return payload

def assemble_rip_packet_into(rip: RIPPacket, buffer, offset: int = 0) -> int:
    """
    Write the RIP wire format of a RIPPacket into a caller supplied
    buffer starting at offset.

    :return: The number of bytes written.
    """
    payload = assemble_rip_packet(rip)
    buffer[offset:offset + len(payload)] = payload
    return len(payload)
