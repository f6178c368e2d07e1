#!/usr/bin/env python3
"""
IPv4 header checksum module for ripfwd
"""
import logging

from globals import IP_HEADER_LEN

CHECKSUM_OFFSET = 10

def header_length(packet) -> int:
    """
    Header length in bytes from the IHL nibble of the first byte.
    """
    return (packet[0] & 0x0F) * 4

def ip_checksum(ip_header) -> int:
    """
    One's complement of the one's complement sum of the 16-bit
    big-endian words of the header.
    """
    assert len(ip_header) % 2 == 0, "Header length must be even."

    checksum = 0
    for i in range(0, len(ip_header), 2):
        word = (ip_header[i] << 8) + ip_header[i+1]
        checksum += word
        # Add carry bits to fit the sum into 16 bits
        while checksum >> 16:
            checksum = (checksum & 0xFFFF) + (checksum >> 16)

    return ~checksum & 0xFFFF

def validate_ip_checksum(packet, length: int | None = None) -> bool:
    """
    Checks the header checksum of an IPv4 packet.

    The checksum field is zeroed in a scratch copy of the header,
    the caller's buffer is never modified.

    :param packet: The IPv4 header and payload.
    :param length: Number of valid bytes in packet, defaults to len(packet).
    :return: True if the transmitted checksum matches the computed one.
    """
    if length is None:
        length = len(packet)
    length = min(length, len(packet))
    if length < IP_HEADER_LEN:
        logging.debug('checksum: %d bytes is shorter than an IPv4 header', length)
        return False

    header_len = header_length(packet)
    if header_len < IP_HEADER_LEN or header_len > length:
        logging.debug('checksum: bad header length %d for %d byte packet', header_len, length)
        return False

    header = bytearray(packet[:header_len])
    sum_ = (header[CHECKSUM_OFFSET] << 8) + header[CHECKSUM_OFFSET+1]
    header[CHECKSUM_OFFSET:CHECKSUM_OFFSET+2] = b'\x00\x00'

    return ip_checksum(header) == sum_

def set_ip_checksum(packet) -> int:
    """
    Recomputes the header checksum of a mutable IPv4 packet and
    writes it into bytes 10-11 in network order.

    :return: The checksum that was written.
    """
    header_len = header_length(packet)
    packet[CHECKSUM_OFFSET:CHECKSUM_OFFSET+2] = b'\x00\x00'
    checksum = ip_checksum(packet[:header_len])
    packet[CHECKSUM_OFFSET:CHECKSUM_OFFSET+2] = checksum.to_bytes(2, 'big')
    return checksum
