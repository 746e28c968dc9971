"""Selftests for field validation.

Run:
  python -m selftest.test_command_validation
"""

from app.command_validation import ErrorKind, message_for, validate_field, validate_state, validation_snapshot
from models.command import DEFAULT_STATE


def test_required_first():
    for name in ("particle", "x", "dx", "speed", "count", "mode"):
        assert validate_field(name, "") is ErrorKind.REQUIRED
        assert validate_field(name, "   ") is ErrorKind.REQUIRED


def test_coordinates():
    for ok in ("~", "^", "~-5", "^1.5", "12", "-3", "~.5", "0.25"):
        assert validate_field("x", ok) is None, ok
    for bad in ("~~", "1~", "^~", "abc", "1.", " 5", "~1e3", "\u0663", "~\u0661\u0662"):
        assert validate_field("y", bad) is ErrorKind.INVALID_COORDINATE, bad


def test_deltas():
    assert validate_field("dx", "0.5") is None
    assert validate_field("dy", "-2") is None
    assert validate_field("dz", "1e3") is None
    assert validate_field("dx", "abc") is ErrorKind.INVALID_NUMBER
    assert validate_field("dx", "nan") is ErrorKind.INVALID_NUMBER
    assert validate_field("dx", "1_0") is ErrorKind.INVALID_NUMBER
    assert validate_field("dx", "\u0663") is ErrorKind.INVALID_NUMBER
    assert validate_field("count", "\uff15") is ErrorKind.INVALID_NUMBER


def test_speed():
    assert validate_field("speed", "0") is None
    assert validate_field("speed", "0.1") is None
    assert validate_field("speed", "-0.1") is ErrorKind.MIN_ZERO
    assert validate_field("speed", "fast") is ErrorKind.INVALID_NUMBER


def test_count_order():
    assert validate_field("count", "-1") is ErrorKind.MIN_ZERO
    assert validate_field("count", "1.5") is ErrorKind.INVALID_INTEGER
    assert validate_field("count", "-1.5") is ErrorKind.INVALID_INTEGER
    assert validate_field("count", "ten") is ErrorKind.INVALID_NUMBER
    assert validate_field("count", "0") is None
    assert validate_field("count", "10.0") is None


def test_presence_only_fields():
    assert validate_field("particle", "dust 1 0 0 1") is None
    assert validate_field("mode", "whatever") is None


def test_validate_state():
    assert validate_state(DEFAULT_STATE) == {}
    bad = DEFAULT_STATE.replace(x="~~", count="1.5", speed="-1")
    assert validate_state(bad) == {
        "x": ErrorKind.INVALID_COORDINATE,
        "speed": ErrorKind.MIN_ZERO,
        "count": ErrorKind.INVALID_INTEGER,
    }


def test_messages_and_snapshot():
    assert message_for(ErrorKind.MIN_ZERO) == "MUST BE >= 0"
    assert message_for(ErrorKind.REQUIRED, "zh") == "必填项"
    assert message_for(ErrorKind.REQUIRED, "fr") == "REQUIRED"

    snap = validation_snapshot(DEFAULT_STATE.replace(count="-1"))
    assert snap["ok"] is False
    assert snap["errors"] == ["count: MUST BE >= 0"]

    snap2 = validation_snapshot(DEFAULT_STATE.replace(mode="loud"))
    assert snap2["ok"] is True
    assert len(snap2["warnings"]) == 1


def main():
    test_required_first()
    test_coordinates()
    test_deltas()
    test_speed()
    test_count_order()
    test_presence_only_fields()
    test_validate_state()
    test_messages_and_snapshot()
    print("OK: command validation selftests passed")


if __name__ == "__main__":
    main()
