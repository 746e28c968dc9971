"""Selftests for the builder session (editing, copy gating, loaders).

Run:
  python -m selftest.test_builder_session
"""

from app.builder_session import BuilderSession
from app.command_validation import ErrorKind
from app.particle_catalog import get_particle, get_preset
from models.command import CommandState, DEFAULT_STATE


def _session():
    copied = []
    return BuilderSession(clipboard=copied.append), copied


def test_edit_sets_and_clears_errors():
    s, _ = _session()
    assert s.set_field("count", "-1") is ErrorKind.MIN_ZERO
    assert s.has_errors
    assert s.error_message("count") == "MUST BE >= 0"
    assert s.set_field("count", "5") is None
    assert not s.has_errors
    assert s.state.count == "5"


def test_copy_with_errors_skips_history():
    s, copied = _session()
    s.set_field("count", "-1")
    text = s.copy_command()
    assert copied == [text]
    assert text.endswith(" -1 normal")
    assert len(s.history) == 0


def test_copy_gates_on_every_field():
    # errors dict is empty but the state itself is invalid
    copied = []
    s = BuilderSession(CommandState(count="-5"), clipboard=copied.append)
    assert s.errors == {}
    s.copy_command()
    assert len(copied) == 1
    assert len(s.history) == 0


def test_copy_valid_records_once():
    s, copied = _session()
    s.copy_command()
    s.copy_command()
    assert len(copied) == 2
    assert len(s.history) == 1
    assert s.history.newest == DEFAULT_STATE


def test_restore_clears_errors():
    s, _ = _session()
    s.copy_command()
    s.set_field("speed", "-1")
    assert s.has_errors
    st = s.restore(0)
    assert st == DEFAULT_STATE
    assert s.state == DEFAULT_STATE
    assert s.errors == {}


def test_copy_preset_bypasses_history():
    s, copied = _session()
    p = get_preset("void_gateway")
    assert s.copy_preset(p) == p.command
    assert copied == [p.command]
    assert len(s.history) == 0


def test_load_preset_and_text():
    s, _ = _session()
    assert s.load_preset(get_preset("void_gateway"))
    assert s.state.particle == "portal"
    assert s.state.count == "200"

    assert s.load_text("/particle heart ~ ~ ~ 0 0 0 0.5 1.5 normal")
    assert s.errors == {"count": ErrorKind.INVALID_INTEGER}
    assert not s.load_text("not a command")
    assert s.state.particle == "heart"


def test_load_dust_embeds_color():
    s, _ = _session()
    st = s.load_particle("dust", "#ff0000")
    assert st.particle == "dust 1.00 0.00 0.00 1"
    assert (st.speed, st.count) == ("0.1", "10")


def test_load_entity_effect_color_mode():
    s, _ = _session()
    st = s.load_particle(get_particle("entity_effect"), "#00ff00")
    assert (st.dx, st.dy, st.dz) == ("0.00", "1.00", "0.00")
    assert (st.count, st.speed) == ("0", "1")


def test_load_note_hue():
    s, _ = _session()
    st = s.load_particle("note", "#00ff00")
    assert st.dx == "0.33"
    assert (st.count, st.speed) == ("0", "0")


def test_load_plain_and_multi_token_examples():
    s, _ = _session()
    assert s.load_particle("flame").particle == "flame"
    pdef = get_particle("dust_color_transition")
    assert s.load_particle(pdef).particle == pdef.example
    try:
        s.load_particle("no_such_particle")
    except KeyError:
        pass
    else:
        raise AssertionError("expected KeyError")


def test_subscribers_see_new_objects():
    s, _ = _session()
    seen = []
    s.subscribe(seen.append)
    before = s.state
    s.set_field("particle", "heart")
    s.set_field("particle", "heart")
    assert len(seen) == 2
    assert seen[0] is not before
    assert seen[0] is not seen[1]


def main():
    test_edit_sets_and_clears_errors()
    test_copy_with_errors_skips_history()
    test_copy_gates_on_every_field()
    test_copy_valid_records_once()
    test_restore_clears_errors()
    test_copy_preset_bypasses_history()
    test_load_preset_and_text()
    test_load_dust_embeds_color()
    test_load_entity_effect_color_mode()
    test_load_note_hue()
    test_load_plain_and_multi_token_examples()
    test_subscribers_see_new_objects()
    print("OK: builder session selftests passed")


if __name__ == "__main__":
    main()
