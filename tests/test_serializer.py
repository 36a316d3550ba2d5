import io

import pytest

from iptables_cleaner.filtering import filter_tables
from iptables_cleaner.model import Chain, FilterParams, Rule, Table, TableSet
from iptables_cleaner.parser import parse_iptables_save
from iptables_cleaner.serializer import SerializerError, render_restore, write_restore


def test_render_layout():
    table = Table(
        name="filter",
        chains=[Chain("INPUT", "ACCEPT", "[0:0]"), Chain("SSH", "-", "[0:0]")],
        rules=[Rule("SSH", "-A SSH -s 10.0.0.0/8 -j ACCEPT")],
    )
    assert render_restore(TableSet([table, Table("nat")])) == (
        "*filter\n"
        ":INPUT ACCEPT [0:0]\n"
        ":SSH - [0:0]\n"
        "-A SSH -s 10.0.0.0/8 -j ACCEPT\n"
        "COMMIT\n"
        "\n"
        "*nat\n"
        "COMMIT\n"
        "\n"
    )


def test_empty_table_round_trip():
    assert render_restore(parse_iptables_save("*filter\nCOMMIT\n")) == "*filter\nCOMMIT\n\n"


def test_empty_set_renders_nothing():
    assert render_restore(TableSet()) == ""


def test_docker_scenario():
    text = (
        "*filter\n:INPUT ACCEPT [0:0]\n:DOCKER-USER - [0:0]\n"
        "-A DOCKER-USER -j RETURN\n-A INPUT -j DOCKER-USER\nCOMMIT\n"
    )
    tables = filter_tables(parse_iptables_save(text), FilterParams(exclude_patterns=frozenset({"DOCKER"})))
    assert render_restore(tables) == "*filter\n:INPUT ACCEPT [0:0]\nCOMMIT\n\n"


def test_write_restore_encodes_bytes():
    sink = io.BytesIO()
    write_restore(sink, TableSet([Table("raw", rules=[Rule("OUTPUT", "-A OUTPUT -j CT --notrack")])]))
    assert sink.getvalue() == b"*raw\n-A OUTPUT -j CT --notrack\nCOMMIT\n\n"


class _FullDisk(io.RawIOBase):
    def writable(self):
        return True

    def write(self, data):
        raise OSError("no space left on device")


def test_write_failure_is_wrapped():
    with pytest.raises(SerializerError, match="error writing output"):
        write_restore(_FullDisk(), TableSet([Table("filter")]))


def test_unencodable_text_is_wrapped_before_writing():
    sink = io.BytesIO()
    tables = TableSet([Table("filter", rules=[Rule("INPUT", "-A INPUT -m comment --comment \ud800 -j ACCEPT")])])
    with pytest.raises(SerializerError, match="error encoding output"):
        write_restore(sink, tables)
    assert sink.getvalue() == b""
