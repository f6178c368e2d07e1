#!/usr/bin/env python3

"""
UDP and IPv4 dataclass, parsing & framing
module for ripfwd
"""

import struct
import socket
from dataclasses import dataclass
from io import BytesIO

from globals import bytes_to_ip, ip_to_bytes, RIP_MULTICAST_ADDRESS, IP_HEADER_LEN, UDP_HEADER_LEN
from checksum import ip_checksum
from rip import RIP_PORT

IP_VERSION_IHL = 0x45
DONT_FRAGMENT  = 0x4000

@dataclass
class IPHeader:
    version: int
    header_length: int
    differentiated_service_field: int
    total_length: int
    identification: int
    flags: int
    frag_offset: int
    ttl: int
    protocol: int
    checksum: int
    src_ip: str
    dst_ip: str
    options: bytes

@dataclass
class UDPHeader:
    src_port: int
    dst_port: int
    length: int
    checksum: bytes
    payload_length: int

"""
NOTE: PACKET CREATION FUNCTIONS
"""

def udp_checksum(src_addr, dest_addr, udp_length, udp_header, udp_data):
    """
    Calculate the UDP checksum including the pseudo-header.
    """
    # Pseudo-header fields
    protocol = socket.IPPROTO_UDP
    pseudo_header = struct.pack('!4s4sBBH',
                                ip_to_bytes(src_addr),
                                ip_to_bytes(dest_addr),
                                0,
                                protocol,
                                udp_length)

    data = pseudo_header + udp_header + udp_data
    if len(data) % 2:  # if odd length, pad with a zero byte
        data += b'\x00'
    checksum = ip_checksum(data)
    # An all zero result is sent as all ones (RFC 768)
    return checksum if checksum else 0xFFFF

def create_udp_header(src_port, dst_port, length, checksum):

    return struct.pack("!HHHH", src_port, dst_port, length, checksum)

def create_ip_header(src_ip, dst_ip, payload_len, ttl=1, protocol=socket.IPPROTO_UDP, identification=0) -> bytes:
    """
    Build a 20 byte IPv4 header without options and with a valid
    header checksum.
    """
    total_length = IP_HEADER_LEN + payload_len
    header = struct.pack('!BBHHHBBH4s4s',
                         IP_VERSION_IHL,
                         0,
                         total_length,
                         identification,
                         DONT_FRAGMENT,
                         ttl,
                         protocol,
                         0,
                         ip_to_bytes(src_ip),
                         ip_to_bytes(dst_ip))
    checksum = ip_checksum(header)
    return header[:10] + checksum.to_bytes(2, 'big') + header[12:]

def build_rip_datagram(rip_payload: bytes, src_ip: str, dst_ip: str = RIP_MULTICAST_ADDRESS, ttl: int = 1) -> bytes:
    """
    Wrap an assembled RIP payload in UDP (port 520 to 520) and IPv4,
    placing the RIP header at byte 28.
    """
    udp_length = UDP_HEADER_LEN + len(rip_payload)
    udp_header = create_udp_header(RIP_PORT, RIP_PORT, udp_length, 0)
    checksum = udp_checksum(src_ip, dst_ip, udp_length, udp_header, rip_payload)
    udp_header = create_udp_header(RIP_PORT, RIP_PORT, udp_length, checksum)

    ip_header = create_ip_header(src_ip, dst_ip, udp_length, ttl=ttl)
    return ip_header + udp_header + rip_payload

"""
NOTE: PACKET PARSING FUNCTIONS
"""

def parse_ip_header(reader: BytesIO) -> IPHeader | None:
    """
    IPv4 Header Parsing Function
    """
    data = reader.read(20)
    if len(data) < 20:
        return None
    ver_len = data[0]
    version = (ver_len & 0xF0) >> 4
    header_length = (ver_len & 0x0F) * 4 # to resolve to the actual number of bytes
    dsf = data[1]
    total_length = struct.unpack('!H', data[2:4])[0]
    identification = struct.unpack('!H',data[4:6])[0]
    flags = data[6]
    frag_offset = struct.unpack('!H', data[6:8])[0] & 0x1FFF
    ttl = data[8]
    proto = data[9]
    checksum = struct.unpack('!H',data[10:12])[0]
    src_ip = bytes_to_ip(data[12:16])
    dst_ip = bytes_to_ip(data[16:20])
    options = b''
    if header_length > 20:
        options = reader.read(header_length - 20)

    return IPHeader(version, header_length, dsf, total_length, identification, \
                    flags, frag_offset, ttl, proto, checksum, src_ip, dst_ip, options)

def parse_udp_header(reader: BytesIO) -> UDPHeader | None:
    """
    UDP Header Parsing Function
    """
    data = reader.read(8)
    if len(data) < 8:
        return None
    src_port, dst_port, udp_total_len = struct.unpack('!HHH', data[:6])
    checksum = data[6:8]
    udp_payload_len = udp_total_len - 8

    return UDPHeader(src_port, dst_port, udp_total_len, checksum, udp_payload_len)
