#!/usr/bin/env python3
"""
IPv4 forwarding header update for ripfwd
"""
import logging

from checksum import validate_ip_checksum, set_ip_checksum

TTL_OFFSET = 8

def forward(packet: bytearray, length: int | None = None) -> bool:
    """
    Header update needed to forward an IPv4 packet: the header
    checksum is checked, then the TTL is decremented and the checksum
    recomputed in place.

    The TTL is not floor checked, a TTL of 0 wraps to 255. Sending
    ICMP Time Exceeded is left to the caller.

    :param packet: The received packet, updated in place.
    :param length: Number of valid bytes in packet, defaults to len(packet).
    :return: False, with packet untouched, if the checksum is wrong.
    """
    if isinstance(packet, bytes):
        raise TypeError('forward() needs a mutable buffer such as a bytearray')

    if not validate_ip_checksum(packet, length):
        logging.debug('forward: dropping packet with bad header checksum')
        return False

    packet[TTL_OFFSET] = (packet[TTL_OFFSET] - 1) & 0xFF
    set_ip_checksum(packet)
    return True
