#!/usr/bin/env python3
"""
ripfwd - IPv4 forwarding header update and RIPv2 codec tool.

Packets are given as hex dumps of the IPv4 packet, '-' reads stdin.
"""
import sys
import logging
import argparse
from io import BytesIO

from globals import hex_to_bytes, DARK_RED, DEFAULT
from checksum import validate_ip_checksum
from forwarding import forward
from rip import parse_rip_packet, assemble_rip_packet, RIP_REQUEST
from tcp_udp import parse_ip_header, parse_udp_header, build_rip_datagram
from config import load_route_yaml

VERSION = '1.0.0'

def read_packet(arg: str) -> bytes:
    """
    Read a hex encoded packet from the command line or stdin.
    """
    hex_str = sys.stdin.read() if arg == '-' else arg
    packet = hex_to_bytes(hex_str)
    if packet is None:
        print(f'{DARK_RED}[!] ERROR: Packet is not valid hex.{DEFAULT}')
        sys.exit(1)
    return packet

def cmd_checksum(args) -> int:
    packet = read_packet(args.packet)
    if validate_ip_checksum(packet):
        print('[+] IPv4 header checksum is valid.')
        return 0
    print(f'{DARK_RED}[!] IPv4 header checksum is invalid.{DEFAULT}')
    return 1

def cmd_forward(args) -> int:
    packet = bytearray(read_packet(args.packet))
    if not forward(packet):
        print(f'{DARK_RED}[!] Packet dropped: bad IPv4 header checksum.{DEFAULT}')
        return 1
    print(packet.hex())
    return 0

def cmd_decode(args) -> int:
    packet = read_packet(args.packet)
    rip = parse_rip_packet(packet)
    if rip is None:
        print(f'{DARK_RED}[!] Not a valid RIPv2 packet.{DEFAULT}')
        return 1

    reader = BytesIO(packet)
    ip_header = parse_ip_header(reader)
    udp_header = parse_udp_header(reader)
    command = 'Request' if rip.command == RIP_REQUEST else 'Response'
    print(f'[+] RIPv2 {command} {ip_header.src_ip}:{udp_header.src_port} -> '
          f'{ip_header.dst_ip}:{udp_header.dst_port} ({len(rip.entries)} entries)')
    for entry in rip.entries:
        print(f'    {entry}')
    return 0

def cmd_encode(args) -> int:
    config = load_route_yaml(args.config)
    payload = assemble_rip_packet(config.to_rip_packet())
    datagram = build_rip_datagram(payload, config.src_ip, config.dst_ip, config.ttl)
    print(datagram.hex())
    return 0

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog='ripfwd',
                                     description='IPv4 forwarding header update and RIPv2 codec.')
    parser.add_argument('-V', '--version', action='version', version=f'%(prog)s {VERSION}')
    parser.add_argument('-d', '--debug', action='store_true', help='log why packets are rejected')
    subparsers = parser.add_subparsers(dest='command', required=True)

    checksum_parser = subparsers.add_parser('checksum', help='validate the IPv4 header checksum')
    checksum_parser.add_argument('packet', help="hex encoded IPv4 packet, '-' for stdin")
    checksum_parser.set_defaults(func=cmd_checksum)

    forward_parser = subparsers.add_parser('forward', help='decrement TTL and update the checksum')
    forward_parser.add_argument('packet', help="hex encoded IPv4 packet, '-' for stdin")
    forward_parser.set_defaults(func=cmd_forward)

    decode_parser = subparsers.add_parser('decode', help='decode a RIPv2 packet')
    decode_parser.add_argument('packet', help="hex encoded IPv4 packet, '-' for stdin")
    decode_parser.set_defaults(func=cmd_decode)

    encode_parser = subparsers.add_parser('encode', help='build a RIPv2 datagram from a yaml file')
    encode_parser.add_argument('config', help='yaml route advertisement file')
    encode_parser.set_defaults(func=cmd_encode)

    return parser

def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.debug else logging.WARNING,
                        format='%(levelname)s %(message)s')
    return args.func(args)

if __name__ == '__main__':
    sys.exit(main())
