from __future__ import annotations

"""Command builder session.

Headless core behind the builder UI (Qt window, CLI, tests). It owns:
- the live CommandState (replaced, never mutated, on every edit)
- per-field validation errors for the fields the user touched
- the copy history

Validation only gates history; copying an invalid command still works.
"""

from typing import Callable, Dict, Optional, Union

from app import log_buffer
from app.color_picker import hex_to_hue, hex_to_rgb
from app.command_history import CommandHistory
from app.command_validation import ErrorKind, message_for, validate_field, validate_state
from app.particle_catalog import ParticleDef, PresetDef, get_particle
from models.codec import decode, encode
from models.command import CommandState, DEFAULT_STATE

Clipboard = Callable[[str], None]

DEFAULT_PICKER_COLOR = "#ff0000"

# Field values a catalog particle is loaded with.
LOAD_DEFAULTS: Dict[str, str] = {
    "x": "~", "y": "~1", "z": "~",
    "dx": "0", "dy": "0", "dz": "0",
    "speed": "0.1", "count": "10", "mode": "normal",
}


class BuilderSession:
    def __init__(self, state: CommandState = DEFAULT_STATE, *, clipboard: Optional[Clipboard] = None,
                 history: Optional[CommandHistory] = None):
        self.state = state
        self.errors: Dict[str, ErrorKind] = {}
        self.history = history if history is not None else CommandHistory()
        self.clipboard = clipboard
        self._listeners = []

    # ---- observers (preview, UI)
    def subscribe(self, fn: Callable[[CommandState], None]) -> None:
        self._listeners.append(fn)

    def _set_state(self, state: CommandState) -> None:
        self.state = state
        for fn in list(self._listeners):
            fn(state)

    # ---- editing
    def set_field(self, name: str, value: str) -> Optional[ErrorKind]:
        self._set_state(self.state.replace(**{name: value}))
        err = validate_field(name, value)
        if err is None:
            self.errors.pop(name, None)
        else:
            self.errors[name] = err
        return err

    @property
    def has_errors(self) -> bool:
        return bool(self.errors)

    def error_message(self, name: str, lang: str = "en") -> Optional[str]:
        kind = self.errors.get(name)
        return message_for(kind, lang) if kind is not None else None

    @property
    def command_text(self) -> str:
        return encode(self.state)

    # ---- copy / history
    def _send(self, text: str) -> None:
        if self.clipboard is not None:
            self.clipboard(text)

    def copy_command(self) -> str:
        """Copy the live command; record it in history when every field is valid."""
        text = encode(self.state)
        all_errors = validate_state(self.state)
        if all_errors:
            log_buffer.push(f"[builder] copied with errors in {', '.join(all_errors)}; history unchanged")
        elif self.history.record(self.state):
            log_buffer.push(f"[builder] recorded {text}")
        self._send(text)
        return text

    def copy_preset(self, preset: PresetDef) -> str:
        self._send(preset.command)
        return preset.command

    def restore(self, entry: Union[CommandState, int]) -> CommandState:
        """Replace the live state with a history entry. Entries were valid when recorded."""
        state = self.history[entry] if isinstance(entry, int) else entry
        self._set_state(state)
        self.errors = {}
        return state

    def clear_history(self) -> None:
        self.history.clear()

    # ---- loading
    def load_preset(self, preset: PresetDef) -> bool:
        st = decode(preset.command)
        if st is None:
            log_buffer.push(f"[builder] preset '{preset.id}' did not decode")
            return False
        self._set_state(st)
        self.errors = {}
        return True

    def load_text(self, text: str) -> bool:
        st = decode(text)
        if st is None:
            return False
        self._set_state(st)
        self.errors = dict(validate_state(st))
        return True

    def load_particle(self, particle: Union[ParticleDef, str], color_hex: Optional[str] = None) -> CommandState:
        """Load a catalog particle with default arguments.

        Color-capable kinds take the picked color: dust embeds it in the id,
        entity_effect carries it in dx/dy/dz (count 0), note carries a hue in dx.
        """
        pdef = particle if isinstance(particle, ParticleDef) else get_particle(particle)
        if pdef is None:
            raise KeyError(f"unknown particle: {particle!r}")

        pid = pdef.id
        overrides: Dict[str, str] = {}
        if pdef.supports_color:
            hex_color = color_hex or DEFAULT_PICKER_COLOR
            if pdef.id == "dust":
                r, g, b = hex_to_rgb(hex_color)
                pid = f"dust {r} {g} {b} 1"
            elif pdef.id == "entity_effect":
                r, g, b = hex_to_rgb(hex_color)
                overrides = {"dx": r, "dy": g, "dz": b, "count": "0", "speed": "1"}
            elif pdef.id == "note":
                overrides = {"dx": hex_to_hue(hex_color), "count": "0", "speed": "0"}
        elif pdef.example and len(pdef.example.split()) > 1:
            pid = pdef.example

        fields = dict(LOAD_DEFAULTS)
        fields.update(overrides)
        st = CommandState(particle=pid, **fields)
        self._set_state(st)
        self.errors = {}
        return st
