"""Selftests for the /particle command codec.

Run:
  python -m selftest.test_command_codec
"""

from app.particle_catalog import PRESETS
from models.codec import CommandDecodeError, decode, decode_or_raise, encode
from models.command import CommandState, DEFAULT_STATE


def test_encode_default():
    assert encode(DEFAULT_STATE) == "/particle flame ~ ~1 ~ 0 0 0 0.1 10 normal"


def test_encode_does_not_validate():
    st = DEFAULT_STATE.replace(count="-3", x="~~")
    assert encode(st) == "/particle flame ~~ ~1 ~ 0 0 0 0.1 -3 normal"


def test_decode_too_few_tokens():
    assert decode("particle flame ~ ~1 ~ 0 0") is None
    assert decode("") is None
    assert decode("/particle") is None


def test_decode_needs_a_particle_token():
    # nine scalars but no id
    assert decode("particle ~ ~1 ~ 0 0 0 0.1 10 normal") is None


def test_decode_embedded_dust_arguments():
    st = decode("particle dust 1.0 0.0 0.0 1.0 ~ ~1 ~ 0 0 0 0.1 10 normal")
    assert st == CommandState(
        particle="dust 1.0 0.0 0.0 1.0",
        x="~", y="~1", z="~",
        dx="0", dy="0", dz="0",
        speed="0.1", count="10", mode="normal",
    )


def test_decode_slash_whitespace_and_missing_keyword():
    st = decode("  /particle   heart  ^ ^2 ^-1 0.5 0.5 0.5 0 3 force ")
    assert st is not None
    assert st.particle == "heart"
    assert (st.x, st.y, st.z) == ("^", "^2", "^-1")
    assert st.mode == "force"

    st2 = decode("flame ~ ~1 ~ 0 0 0 0.1 10 normal")
    assert st2 is not None and st2.particle == "flame"


def test_round_trip():
    states = [
        DEFAULT_STATE,
        CommandState("dust_color_transition 1 0 0 1 0 0 1", "10", "64", "-3.5", "1", "2", "3", "0.5", "100", "force"),
        CommandState("minecraft:end_rod", "^", "^", "^1", "0", "0", "0", "0.05", "30", "normal"),
    ]
    for st in states:
        assert decode(encode(st)) == st


def test_decode_or_raise():
    try:
        decode_or_raise("particle flame ~ ~1")
    except CommandDecodeError as e:
        assert "token" in str(e)
    else:
        raise AssertionError("expected CommandDecodeError")
    assert decode_or_raise("/particle flame ~ ~1 ~ 0 0 0 0.1 10 normal") == DEFAULT_STATE


def test_presets_decode():
    for p in PRESETS:
        st = decode(p.command)
        assert st is not None, p.id
        assert st.mode == "normal"


def main():
    test_encode_default()
    test_encode_does_not_validate()
    test_decode_too_few_tokens()
    test_decode_needs_a_particle_token()
    test_decode_embedded_dust_arguments()
    test_decode_slash_whitespace_and_missing_keyword()
    test_round_trip()
    test_decode_or_raise()
    test_presets_decode()
    print("OK: command codec selftests passed")


if __name__ == "__main__":
    main()
