"""Tests for yaml route advertisement loading and shared helpers."""

import pytest

from config import RouteConfig, load_route_yaml, parse_command, validate_routes
from globals import hex_to_bytes, ip_to_int, validate_ip, validate_ttl
from rip import RIP_REQUEST, RIP_RESPONSE, RIPEntry, RIPPacket

VALID_YAML = """\
Command: response
Source-IP: 10.0.0.1
Destination-IP: 10.0.0.2
TTL: 2
Routes:
  - Address: 10.1.0.0
    Mask: 255.255.0.0
    Next-Hop: 10.0.0.254
    Metric: 1
  - Address: 10.2.0.0
    Mask: 255.255.255.0
    Metric: 16
"""


@pytest.fixture
def write_yaml(tmp_path):
    def write(text: str) -> str:
        path = tmp_path / 'routes.yaml'
        path.write_text(text)
        return str(path)
    return write


class TestLoadRouteYaml:
    def test_valid(self, write_yaml) -> None:
        config = load_route_yaml(write_yaml(VALID_YAML))
        assert isinstance(config, RouteConfig)
        assert config.command == RIP_RESPONSE
        assert config.src_ip == '10.0.0.1'
        assert config.dst_ip == '10.0.0.2'
        assert config.ttl == 2
        assert len(config.routes) == 2

    def test_to_rip_packet(self, write_yaml) -> None:
        config = load_route_yaml(write_yaml(VALID_YAML))
        assert config.to_rip_packet() == RIPPacket(RIP_RESPONSE, [
            RIPEntry('10.1.0.0', '255.255.0.0', '10.0.0.254', 1),
            RIPEntry('10.2.0.0', '255.255.255.0', '0.0.0.0', 16),
        ])

    def test_defaults(self, write_yaml) -> None:
        config = load_route_yaml(write_yaml('Command: 1\nSource-IP: 10.0.0.1\n'))
        assert config.command == RIP_REQUEST
        assert config.dst_ip == '224.0.0.9'
        assert config.ttl == 1
        assert config.to_rip_packet() == RIPPacket(RIP_REQUEST, [])

    def test_missing_file(self, tmp_path, capsys) -> None:
        with pytest.raises(SystemExit) as exc:
            load_route_yaml(str(tmp_path / 'nope.yaml'))
        assert exc.value.code == 1
        assert 'does not exist' in capsys.readouterr().out

    def test_malformed(self, write_yaml, capsys) -> None:
        with pytest.raises(SystemExit):
            load_route_yaml(write_yaml('Command: [response\nSource-IP: 10.0.0.1\n'))
        assert 'Malformed' in capsys.readouterr().out

    def test_not_a_mapping(self, write_yaml) -> None:
        with pytest.raises(SystemExit):
            load_route_yaml(write_yaml('- 1\n- 2\n'))

    @pytest.mark.parametrize('text, message', [
        ('Command: update\nSource-IP: 10.0.0.1\n', 'Invalid Command'),
        ('Command: response\nSource-IP: 10.0.0.300\n', 'Invalid Source-IP'),
        ('Command: response\nSource-IP: 10.0.0.1\nDestination-IP: nowhere\n', 'Invalid Destination-IP'),
        ('Command: response\nSource-IP: 10.0.0.1\nTTL: 0\n', 'Invalid TTL'),
        ('Command: response\nSource-IP: 10.0.0.1\nRoutes:\n  - Address: 10.0.0.0\n'
         '    Mask: 255.0.255.0\n    Metric: 1\n', 'Mask is not contiguous'),
        ('Command: response\nSource-IP: 10.0.0.1\nRoutes:\n  - Address: 10.0.0.0\n'
         '    Mask: 255.0.0.0\n    Metric: 17\n', 'Invalid Metric'),
    ])
    def test_invalid(self, write_yaml, capsys, text: str, message: str) -> None:
        with pytest.raises(SystemExit) as exc:
            load_route_yaml(write_yaml(text))
        assert exc.value.code == 1
        assert message in capsys.readouterr().out


class TestValidateRoutes:
    def test_valid(self) -> None:
        assert validate_routes([{'Address': '10.0.0.0', 'Mask': '255.0.0.0', 'Metric': 1}]) == []

    def test_none(self) -> None:
        assert validate_routes(None) == []

    def test_not_a_list(self) -> None:
        assert validate_routes('10.0.0.0') == ['Invalid Routes: 10.0.0.0']

    def test_too_many(self) -> None:
        route = {'Address': '10.0.0.0', 'Mask': '255.0.0.0', 'Metric': 1}
        errors = validate_routes([route] * 26)
        assert errors == ['Too many Routes: 26 (maximum is 25)']

    def test_collects_every_error(self) -> None:
        errors = validate_routes([
            {'Address': 'x', 'Mask': '255.0.0.0', 'Metric': 1},
            {'Address': '10.0.0.0', 'Mask': '255.0.0.0', 'Next-Hop': 'y', 'Metric': 0},
            'not a route',
        ])
        assert errors == [
            'Route 1: Invalid Address: x',
            'Route 2: Invalid Next-Hop: y',
            'Route 2: Invalid Metric: 0',
            'Route 3 is not a mapping',
        ]

    def test_bool_metric(self) -> None:
        assert validate_routes([{'Address': '10.0.0.0', 'Mask': '255.0.0.0', 'Metric': True}])


class TestHelpers:
    @pytest.mark.parametrize('value, expected', [
        ('request', RIP_REQUEST), ('Response', RIP_RESPONSE), (1, 1), (2, 2),
        (3, None), ('update', None), (None, None),
    ])
    def test_parse_command(self, value, expected) -> None:
        assert parse_command(value) == expected

    def test_validate_ip(self) -> None:
        assert validate_ip('192.168.0.1')
        assert not validate_ip('192.168.0.256')
        assert not validate_ip('192.168.0')
        assert not validate_ip(None)

    def test_validate_ttl(self) -> None:
        assert validate_ttl(1)
        assert validate_ttl(255)
        assert not validate_ttl(0)
        assert not validate_ttl(256)
        assert not validate_ttl('1')

    def test_ip_to_int(self) -> None:
        assert ip_to_int('255.255.255.0') == 0xFFFFFF00

    def test_hex_to_bytes(self) -> None:
        assert hex_to_bytes('45 00\n00:1c') == b'\x45\x00\x00\x1c'
        assert hex_to_bytes('0x4500') == b'\x45\x00'
        assert hex_to_bytes('zz') is None
