#!/usr/bin/env python3
"""
Route advertisement configuration (yaml) for ripfwd
"""
import os
import sys
import yaml
import yaml.scanner

from globals import (validate_ip, validate_ttl, ip_to_int, IPV4_ANY_ADDRESS,
                     RIP_MULTICAST_ADDRESS, DEFAULT_TTL, COMMAND_NAMES)
from rip import RIP_MAX_ENTRY, RIP_INFINITY, RIPEntry, RIPPacket, is_contiguous_mask

class RouteConfig:
    """
    An object class to hold a RIP advertisement loaded from yaml.
    """
    def __init__(self, command, src_ip, dst_ip, ttl, routes):
        self.command = command
        self.src_ip = src_ip
        self.dst_ip = dst_ip if dst_ip else RIP_MULTICAST_ADDRESS
        self.ttl = ttl if ttl else DEFAULT_TTL
        self.routes = routes

    def to_rip_packet(self) -> RIPPacket:
        """
        Builds the structured RIP message described by the config.
        """
        entries = [RIPEntry(ip_address=route['Address'],
                            subnet_mask=route['Mask'],
                            next_hop=route.get('Next-Hop', IPV4_ANY_ADDRESS),
                            metric=route['Metric'])
                   for route in self.routes]
        return RIPPacket(command=self.command, entries=entries)

def parse_command(command) -> int | None:
    """
    Resolve a yaml command value ('request', 'response', 1 or 2).
    """
    if isinstance(command, str):
        return COMMAND_NAMES.get(command.strip().lower())
    if isinstance(command, int) and command in COMMAND_NAMES.values():
        return command
    return None

def validate_routes(routes) -> list:
    """
    Check every route mapping against the same invariants the
    RIP decoder enforces. Returns a list of error strings.
    """
    errors = []
    if routes is None:
        routes = []
    if not isinstance(routes, list):
        return [f"Invalid Routes: {routes}"]
    if len(routes) > RIP_MAX_ENTRY:
        errors.append(f"Too many Routes: {len(routes)} (maximum is {RIP_MAX_ENTRY})")

    for index, route in enumerate(routes, 1):
        if not isinstance(route, dict):
            errors.append(f"Route {index} is not a mapping")
            continue
        address = route.get('Address')
        mask = route.get('Mask')
        next_hop = route.get('Next-Hop', IPV4_ANY_ADDRESS)
        metric = route.get('Metric')

        if not validate_ip(address):
            errors.append(f"Route {index}: Invalid Address: {address}")
        if not validate_ip(mask):
            errors.append(f"Route {index}: Invalid Mask: {mask}")
        elif not is_contiguous_mask(ip_to_int(mask)):
            errors.append(f"Route {index}: Mask is not contiguous: {mask}")
        if not validate_ip(next_hop):
            errors.append(f"Route {index}: Invalid Next-Hop: {next_hop}")
        if not isinstance(metric, int) or isinstance(metric, bool) or not 1 <= metric <= RIP_INFINITY:
            errors.append(f"Route {index}: Invalid Metric: {metric}")

    return errors

def load_route_yaml(file_path):
    if not os.path.exists(file_path):
        print('[!] ERROR: Configuration file does not exist.')
        sys.exit(1)
    try:
        print(f'[+] Loading yaml route config "{file_path}"', file=sys.stderr)
        with open(file_path, 'r') as file:
            config = yaml.safe_load(file)
    except (yaml.scanner.ScannerError, yaml.YAMLError):
        print('[!] ERROR: Malformed yaml configuration file.')
        sys.exit(1)

    if not isinstance(config, dict):
        print('[!] ERROR: Configuration file must be a mapping.')
        sys.exit(1)

    command = parse_command(config.get('Command'))
    src_ip = config.get('Source-IP')
    dst_ip = config.get('Destination-IP', RIP_MULTICAST_ADDRESS)
    ttl = config.get('TTL', DEFAULT_TTL)
    routes = config.get('Routes') or []

    errors = []

    # Validate Command
    if command is None:
        errors.append(f"Invalid Command: {config.get('Command')}")

    # Validate Source-IP
    if not validate_ip(src_ip):
        errors.append(f"Invalid Source-IP: {src_ip}")

    # Validate Destination-IP
    if not validate_ip(dst_ip):
        errors.append(f"Invalid Destination-IP: {dst_ip}")

    # Validate TTL
    if not validate_ttl(ttl):
        errors.append(f"Invalid TTL: {ttl}")

    errors.extend(validate_routes(routes))

    if errors:
        print("    The following errors occurred in the configuration file:")
        for error in errors:
            print(f"[!] ERROR: {error}.")
        sys.exit(1)
    else:
        return RouteConfig(command, src_ip, dst_ip, ttl, routes)
