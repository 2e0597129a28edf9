"""Tests for the port catalog."""

from vargo.core.data_models import PortEntry
from vargo.core.port_catalog import format_ports, parse_ports


def test_default_catalog():
    assert parse_ports("default") == [
        PortEntry(21, "FTP"),
        PortEntry(22, "SSH"),
        PortEntry(80, "HTTP"),
        PortEntry(443, "HTTPS"),
        PortEntry(445, "SMB"),
        PortEntry(3389, "RDP"),
    ]


def test_default_is_case_insensitive():
    assert parse_ports(" DEFAULT ") == parse_ports("default")


def test_names_and_numbers_keep_request_order():
    assert parse_ports("ssh,99999,http") == [
        PortEntry(22, "SSH"),
        PortEntry(99999, "Unknown"),
        PortEntry(80, "HTTP"),
    ]


def test_empty_spec_yields_nothing():
    assert parse_ports("") == []


def test_service_names_are_case_insensitive_and_trimmed():
    assert parse_ports(" SSH , Https ,mysql") == [
        PortEntry(22, "SSH"),
        PortEntry(443, "HTTPS"),
        PortEntry(3306, "MySQL"),
    ]


def test_known_numbers_get_their_label():
    assert parse_ports("23,25,53") == [
        PortEntry(23, "Telnet"),
        PortEntry(25, "SMTP"),
        PortEntry(53, "DNS"),
    ]


def test_docker_service():
    assert parse_ports("docker") == [PortEntry(2375, "Docker")]


def test_unparseable_tokens_are_skipped():
    assert parse_ports("ssh,gopher,,0,-5,8080") == [
        PortEntry(22, "SSH"),
        PortEntry(8080, "Unknown"),
    ]


def test_duplicates_are_preserved():
    assert parse_ports("http,80,http") == [PortEntry(80, "HTTP")] * 3


def test_format_ports():
    assert format_ports([PortEntry(22, "SSH"), PortEntry(8080, "Unknown")]) == "[22/SSH 8080/Unknown]"
    assert format_ports([]) == "[]"


def test_only_plain_ascii_digits_are_numbers():
    assert parse_ports("8_0,+80,٨٠,0x50,1e3,443") == [PortEntry(443, "HTTPS")]
