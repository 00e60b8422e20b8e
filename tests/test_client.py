"""
test_client.py: Tests for the printf client output.

Created on 10/19/26.

Copyright (c) 2026, The CONIX Research Center
All rights reserved.

This source code is licensed under the BSD-3-Clause license found in the
LICENSE file in the root directory of this source tree.
"""

import io
from datetime import datetime, timedelta, timezone

from conftest import FakeMoteIF

from motecomm_py.message import PrintfMsg
from printfclient.client import PrintfClient, format_timestamp

STAMP = "2026/10/19 12:34:56.789"


def make_client(clock):
    out = io.StringIO()
    mote_if = FakeMoteIF()
    client = PrintfClient(mote_if, out=out, clock=clock)
    return client, mote_if, out


def test_registers_for_printf_messages(fixed_time):
    client, mote_if, _ = make_client(lambda: fixed_time)
    assert len(mote_if.registered) == 1
    template, listener = mote_if.registered[0]
    assert isinstance(template, PrintfMsg)
    assert listener is client
    assert client.awaiting_timestamp


def test_format_timestamp_is_utc_with_millis():
    local = datetime(2026, 10, 19, 14, 34, 56, 789999,
                     tzinfo=timezone(timedelta(hours=2)))
    assert format_timestamp(local) == STAMP


def test_single_line(fixed_time):
    client, _, out = make_client(lambda: fixed_time)
    client.message_received(0xFFFF, PrintfMsg(b"AB\n"))
    assert out.getvalue() == f"{STAMP}:AB\n"
    assert client.awaiting_timestamp


def test_one_timestamp_per_message_not_per_char(fixed_time):
    times = iter([fixed_time, fixed_time + timedelta(seconds=1)])
    client, _, out = make_client(lambda: next(times))
    client.message_received(0, PrintfMsg(b"AB\n"))
    client.message_received(0, PrintfMsg(b"CD\n"))
    assert out.getvalue() == (f"{STAMP}:AB\n"
                              "2026/10/19 12:34:57.789:CD\n")


def test_nul_and_carriage_return_are_dropped(fixed_time):
    client, _, out = make_client(lambda: fixed_time)
    client.message_received(0, PrintfMsg(b"A\x00B\rC\n"))
    assert out.getvalue() == f"{STAMP}:ABC\n"


def test_line_split_across_messages_gets_one_timestamp(fixed_time):
    times = iter([fixed_time, fixed_time + timedelta(seconds=1)])
    client, _, out = make_client(lambda: next(times))
    client.message_received(0, PrintfMsg(b"AB"))
    assert not client.awaiting_timestamp
    client.message_received(0, PrintfMsg(b"CD\n"))
    assert out.getvalue() == f"{STAMP}:ABCD\n"


def test_several_lines_in_one_message_share_the_time(fixed_time):
    client, _, out = make_client(lambda: fixed_time)
    client.message_received(0, PrintfMsg(b"x=1\r\ny=2\n"))
    assert out.getvalue() == f"{STAMP}:x=1\n{STAMP}:y=2\n"


def test_skipped_chars_do_not_trigger_timestamp(fixed_time):
    client, _, out = make_client(lambda: fixed_time)
    client.message_received(0, PrintfMsg(b"\r\x00\r"))
    assert out.getvalue() == ""
    assert client.awaiting_timestamp


def test_full_buffer_is_read(fixed_time):
    client, _, out = make_client(lambda: fixed_time)
    payload = b"0123456789" * 2 + b"abcdefgh"
    assert len(payload) == PrintfMsg.total_size_buffer()
    client.message_received(0, PrintfMsg(payload + b"ignored"))
    assert out.getvalue() == f"{STAMP}:{payload.decode()}"


def test_high_bytes_are_unsigned(fixed_time):
    client, _, out = make_client(lambda: fixed_time)
    client.message_received(0, PrintfMsg(b"\xe9\n"))
    assert out.getvalue() == f"{STAMP}:é\n"


def test_flushes_once_per_message(fixed_time):
    flushes = []

    class Out(io.StringIO):
        def flush(self):
            flushes.append(self.getvalue())
            super().flush()

    out = Out()
    client = PrintfClient(FakeMoteIF(), out=out, clock=lambda: fixed_time)
    client.message_received(0, PrintfMsg(b"A\nB\nC\n"))
    assert flushes == [out.getvalue()]


def test_defaults_to_stdout(capsys, fixed_time):
    client = PrintfClient(FakeMoteIF(), clock=lambda: fixed_time)
    client.message_received(0, PrintfMsg(b"hi\n"))
    assert capsys.readouterr().out == f"{STAMP}:hi\n"
