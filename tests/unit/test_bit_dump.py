import os
import sys
import logging

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', '..'))

from utils.bit_dump import dump_frame, format_bits


def test_format_bits_reverses_byte_order():
    assert format_bits(b"\x01\x80") == "10000000 00000001"

def test_format_bits_full_frame():
    bits = format_bits(bytes(128))
    groups = bits.split(" ")
    assert len(groups) == 128
    assert set(groups) == {"00000000"}

def test_format_bits_minor_frame_reads_as_little_endian_number():
    value = 0x0ABCABCABCABCFFF
    bits = format_bits(value.to_bytes(8, "little")).replace(" ", "")
    assert int(bits, 2) == value

def test_dump_frame_logs_at_debug(caplog):
    with caplog.at_level(logging.DEBUG, logger="utils.bit_dump"):
        dump_frame(b"\xff", 7)

    assert "Major Frame 7 Dump" in caplog.text
    assert "11111111" in caplog.text
