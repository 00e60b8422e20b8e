"""
test_framing.py: Tests for the serial frame parser.

Created on 10/19/26.

Copyright (c) 2026, The CONIX Research Center
All rights reserved.

This source code is licensed under the BSD-3-Clause license found in the
LICENSE file in the root directory of this source tree.
"""

from motecomm_py.framing import (SERIAL_PROTO_ACK, FrameParser, crc16,
                                 encode_ack, encode_frame, escape)


def feed(parser, data):
    frames = []
    for msg_byte in data:
        out = parser.next_byte(msg_byte)
        if out is not False:
            frames.append(out)
    return frames


def test_crc16_check_value():
    assert crc16(b"123456789") == 0x31C3
    assert crc16(b"") == 0


def test_escape_stuffs_sync_and_escape_bytes():
    assert escape(b"\x01\x7e\x02\x7d") == b"\x01\x7d\x5e\x02\x7d\x5d"


def test_frame_with_stuffed_bytes_decodes():
    body = b"\x45\x00\x7e\x7d\x10"
    frame = encode_frame(body)
    assert frame[0] == frame[-1] == 0x7E
    assert feed(FrameParser(), frame) == [body]


def test_garbage_before_sync_is_ignored():
    body = b"\x45hello"
    assert feed(FrameParser(), b"noise" + encode_frame(body)) == [body]


def test_back_to_back_frames_share_delimiters():
    first = encode_frame(b"\x45one")
    second = encode_frame(b"\x45two")
    # Closing delimiter of one frame opens the next
    stream = first + second[1:]
    assert feed(FrameParser(), stream) == [b"\x45one", b"\x45two"]


def test_bad_crc_is_dropped(capsys):
    frame = bytearray(encode_frame(b"\x45data"))
    frame[3] ^= 0xFF
    parser = FrameParser()
    assert feed(parser, bytes(frame)) == []
    assert "invalid CRC" in capsys.readouterr().err
    # Parser recovers on the next frame
    assert feed(parser, encode_frame(b"\x45ok")) == [b"\x45ok"]


def test_short_frame_is_dropped(capsys):
    assert feed(FrameParser(), b"\x7e\x45\x7e") == []
    assert "short frame" in capsys.readouterr().err


def test_ack_frame():
    assert feed(FrameParser(), encode_ack(7)) == [
        bytes([SERIAL_PROTO_ACK, 7])]
