"""Tests for the Color value type."""

import itertools

import pytest
from pydantic import ValidationError

from status_leds.core.exceptions import ColorFormatError
from status_leds.core.models.color import LOADING, OFF, Color

_LEVELS = (0, 1, 127, 128, 255)


class TestFromHex:
    def test_plain(self):
        assert Color.from_hex("ff0000ff") == Color.rgbw(255, 0, 0, 255)

    def test_0x_prefix(self):
        assert Color.from_hex("0x00ff00aa") == Color.rgbw(0, 255, 0, 170)

    def test_hash_prefix(self):
        assert Color.from_hex("#0000ff55") == Color.rgbw(0, 0, 255, 85)

    def test_prefixes_equivalent(self):
        assert Color.from_hex("0x12abCD34") == Color.from_hex("#12abcd34") == Color.from_hex("12ABcd34")

    @pytest.mark.parametrize("value", ["ff00", "gghhiijj", "", "#", "0x", "ff0000ff00", "ff 000ff"])
    def test_rejects_bad_strings(self, value):
        with pytest.raises(ColorFormatError) as info:
            Color.from_hex(value)
        assert repr(value)[1:-1] in str(info.value)

    def test_error_is_value_error(self):
        with pytest.raises(ValueError):
            Color.from_hex("nothex!!")


class TestSerialisation:
    def test_to_hex(self):
        assert Color.rgbw(255, 128, 64, 32).to_hex() == "ff804020"

    def test_to_bytes_order(self):
        assert Color.rgbw(1, 2, 3, 4).to_bytes() == b"\x01\x02\x03\x04"

    @pytest.mark.parametrize("channel", ["red", "green", "blue", "white"])
    @pytest.mark.parametrize("level", _LEVELS)
    def test_round_trip_single_channel(self, channel, level):
        c = Color(**{channel: level})
        assert Color.from_hex(c.to_hex()).to_hex() == c.to_hex()
        assert Color.from_hex(c.to_hex()) == c

    @pytest.mark.parametrize(
        "channels", list(itertools.product(_LEVELS, repeat=4)), ids=lambda ch: "-".join(map(str, ch))
    )
    def test_round_trip_all_channels(self, channels):
        c = Color.rgbw(*channels)
        assert Color.from_hex(c.to_hex()).to_hex() == c.to_hex()
        assert c.to_bytes() == bytes(channels)

    def test_str_is_hex(self):
        assert str(Color.rgbw(0, 255, 0, 0)) == "00ff0000"


class TestValueSemantics:
    def test_default_is_off(self):
        assert Color() == OFF
        assert OFF.to_bytes() == bytes(4)
        assert LOADING != OFF

    def test_structural_equality_and_hash(self):
        assert Color.rgbw(1, 2, 3, 4) == Color.rgbw(1, 2, 3, 4)
        assert len({Color.rgbw(1, 2, 3, 4), Color.rgbw(1, 2, 3, 4)}) == 1

    def test_immutable(self):
        with pytest.raises(ValidationError):
            OFF.red = 10  # type: ignore[misc]

    def test_channel_range_validated(self):
        with pytest.raises(ValidationError):
            Color(red=256)
