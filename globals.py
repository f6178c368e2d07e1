#!/usr/bin/env python3
"""
Globals module for ripfwd
"""
import re
import socket

IPV4_ANY_ADDRESS      = '0.0.0.0'
RIP_MULTICAST_ADDRESS = '224.0.0.9'

IP_HEADER_LEN  = 20
UDP_HEADER_LEN = 8

DEFAULT_TTL = 1

COMMAND_NAMES = {'request': 1, 'response': 2}

DARK_RED = '\x1b[31m'
DEFAULT = '\x1b[0m'

def validate_ip(ip):
    """Validate an IPv4 address."""
    if not isinstance(ip, str):
        return False
    pattern = re.compile(r"^(?:[0-9]{1,3}\.){3}[0-9]{1,3}$")
    if pattern.match(ip) is None:
        return False
    return all(int(octet) <= 255 for octet in ip.split('.'))

def validate_ttl(ttl):
    """Validate an IPv4 time to live."""
    return isinstance(ttl, int) and not isinstance(ttl, bool) and 0 < ttl <= 255

def bytes_to_ip(bytes: bytes) -> str:
    """
    Converts a 4-byte sequence to an IPv4 string
    """
    return socket.inet_ntoa(bytes)

def ip_to_bytes(ip: str) -> bytes:
    """
    Converts an IPv4 string to its 4-byte network order form
    """
    return socket.inet_aton(ip)

def ip_to_int(ip: str) -> int:
    return int.from_bytes(socket.inet_aton(ip), 'big')

def hex_to_bytes(hex_str: str) -> bytes | None:
    """
    Converts a hex dump (whitespace and ':' separators allowed)
    to bytes. Returns None if the string is not valid hex.
    """
    cleaned = re.sub(r'[\s:]', '', hex_str)
    if cleaned.lower().startswith('0x'):
        cleaned = cleaned[2:]
    try:
        return bytes.fromhex(cleaned)
    except ValueError:
        return None
