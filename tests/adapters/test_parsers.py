"""Platform dump parser tests.

Each parser must flush a record at the next boundary and once more at the end
of the stream, skip incomplete records, and never raise on unexpected text.
"""

from __future__ import annotations

import pytest
from hypothesis import given
from hypothesis import strategies as st

from shh_env.adapters.enumeration.parsers import parse_cmdkey, parse_secret_tool, parse_security_dump
from shh_env.domain.entries import SecretEntry
from tests.support import LINUX_DUMP, MACOS_DUMP, WINDOWS_DUMP

PARSERS = [parse_security_dump, parse_secret_tool, parse_cmdkey]


def test_security_dump_keeps_generic_passwords_only() -> None:
    assert parse_security_dump(MACOS_DUMP) == [
        SecretEntry("app::dev", "API_KEY"),
        SecretEntry("_", "EDITOR"),
    ]


def test_security_dump_flushes_last_record() -> None:
    dump = 'class: "genp"\n    "svce"<blob>="_"\n    "acct"<blob>="LAST"'
    assert parse_security_dump(dump) == [SecretEntry("_", "LAST")]


def test_security_dump_ignores_fields_before_first_class() -> None:
    dump = '"svce"<blob>="_"\n"acct"<blob>="STRAY"\n'
    assert parse_security_dump(dump) == []


def test_secret_tool_reads_username_and_account_attributes() -> None:
    assert parse_secret_tool(LINUX_DUMP) == [
        SecretEntry("_", "EDITOR"),
        SecretEntry("app::dev", "API_KEY"),
    ]


def test_secret_tool_resets_fields_between_records() -> None:
    dump = "[/a]\nattribute.service = one\n[/b]\nattribute.username = KEY\n"
    assert parse_secret_tool(dump) == []


def test_cmdkey_targets() -> None:
    assert parse_cmdkey(WINDOWS_DUMP) == [
        SecretEntry("app", "API_KEY"),
        SecretEntry("app::dev", "DB_URL"),
        SecretEntry("legacy", "TOKEN"),
    ]


def test_cmdkey_plain_target_without_user_is_dropped() -> None:
    assert parse_cmdkey("Target: LegacyGeneric:target=lonely\nType: Generic\n") == []


@pytest.mark.parametrize("parser", PARSERS)
def test_empty_output(parser) -> None:
    assert parser("") == []


@pytest.mark.parametrize("parser", PARSERS)
@given(text=st.text(max_size=300))
def test_parsers_never_raise(parser, text: str) -> None:
    entries = parser(text)
    assert all(entry.namespace and entry.key for entry in entries)
