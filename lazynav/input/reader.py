"""Low-level terminal input decoding.

Reads raw bytes from stdin and translates them into ``KeyboardEvent`` values.
Handles ESC-sequence timing, CSI modifier parameters, and UTF-8 characters.
"""

from __future__ import annotations

import os
import select

from .keys import KeyboardEvent

ESC_SEQUENCE_TIMEOUT_MS = 25
_PENDING_BYTES: list[bytes] = []

_CSI_LETTER_KEYS = {
    b"A": "ArrowUp",
    b"B": "ArrowDown",
    b"C": "ArrowRight",
    b"D": "ArrowLeft",
    b"H": "Home",
    b"F": "End",
}
_CSI_TILDE_KEYS = {
    "1": "Home",
    "2": "Insert",
    "3": "Delete",
    "4": "End",
    "5": "PageUp",
    "6": "PageDown",
    "7": "Home",
    "8": "End",
}


def _read_ready_byte(fd: int, timeout_ms: int) -> bytes | None:
    if _PENDING_BYTES:
        return _PENDING_BYTES.pop(0)
    ready, _, _ = select.select([fd], [], [], max(0.0, timeout_ms / 1000.0))
    if not ready:
        return None
    ch = os.read(fd, 1)
    if not ch:
        return None
    return ch


def read_key(fd: int, timeout_ms: int | None = None) -> KeyboardEvent | None:
    """Block for the next key on ``fd``.

    Returns ``None`` when ``timeout_ms`` elapses first or when an unknown
    escape sequence was consumed. Raises ``EOFError`` once ``fd`` is closed.
    """
    if _PENDING_BYTES:
        ch = _PENDING_BYTES.pop(0)
    else:
        if timeout_ms is not None:
            ready, _, _ = select.select([fd], [], [], max(0.0, timeout_ms / 1000.0))
            if not ready:
                return None
        ch = os.read(fd, 1)
        if not ch:
            raise EOFError("end of input")

    if ch == b"\x1b":
        return _read_escape_sequence(fd)
    return _decode_byte(fd, ch)


def _decode_byte(fd: int, ch: bytes) -> KeyboardEvent:
    code = ch[0]
    if ch in {b"\r", b"\n"}:
        return KeyboardEvent("Enter")
    if ch == b"\t":
        return KeyboardEvent("Tab")
    if ch == b"\x7f":
        return KeyboardEvent("Backspace")
    # Most terminals send ^H for Ctrl+Backspace and ^W for "delete word".
    if ch in {b"\x08", b"\x17"}:
        return KeyboardEvent("Backspace", ctrl=True)
    if ch == b"\x00":
        return KeyboardEvent(" ", ctrl=True)
    if code < 0x1b:
        return KeyboardEvent(chr(code + 0x60), ctrl=True)
    if code < 0x20:
        return KeyboardEvent(chr(code + 0x40), ctrl=True)
    if code >= 0x80:
        return KeyboardEvent(_read_utf8_char(fd, ch))
    return KeyboardEvent(ch.decode("ascii"))


def _read_utf8_char(fd: int, lead: bytes) -> str:
    code = lead[0]
    if code >= 0xF0:
        length = 4
    elif code >= 0xE0:
        length = 3
    elif code >= 0xC0:
        length = 2
    else:
        length = 1
    data = bytearray(lead)
    while len(data) < length:
        part = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
        if part is None:
            break
        data += part
    return data.decode("utf-8", errors="replace")


def _read_escape_sequence(fd: int) -> KeyboardEvent | None:
    seq = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
    if seq is None:
        return KeyboardEvent("Escape")
    if seq == b"[":
        return _read_csi(fd)
    if seq == b"O":
        final = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
        if final is None:
            return KeyboardEvent("O", alt=True)
        name = _CSI_LETTER_KEYS.get(final)
        return KeyboardEvent(name) if name is not None else None
    if seq == b"\x1b":
        _PENDING_BYTES.append(seq)
        return KeyboardEvent("Escape")
    # ESC followed by a plain key is how terminals report Alt+key.
    event = _decode_byte(fd, seq)
    return KeyboardEvent(event.key, ctrl=event.ctrl, alt=True, shift=event.shift)


def _read_csi(fd: int) -> KeyboardEvent | None:
    params = bytearray()
    while True:
        part = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
        if part is None:
            return KeyboardEvent("Escape")
        if 0x40 <= part[0] <= 0x7E:
            final = part
            break
        params += part
        if len(params) > 32:
            return None

    fields = params.decode("ascii", errors="replace").split(";")
    ctrl, alt, shift = _modifier_flags(fields[1] if len(fields) > 1 else "")
    if final == b"Z":
        return KeyboardEvent("Tab", ctrl=ctrl, alt=alt, shift=True)
    if final == b"~":
        name = _CSI_TILDE_KEYS.get(fields[0])
    else:
        name = _CSI_LETTER_KEYS.get(final)
    if name is None:
        return None
    return KeyboardEvent(name, ctrl=ctrl, alt=alt, shift=shift)


def _modifier_flags(param: str) -> tuple[bool, bool, bool]:
    """Decode an xterm modifier parameter into ``(ctrl, alt, shift)``."""
    try:
        mask = int(param) - 1
    except ValueError:
        return False, False, False
    if mask < 0:
        return False, False, False
    return bool(mask & 4), bool(mask & 2 or mask & 8), bool(mask & 1)


__all__ = ["ESC_SEQUENCE_TIMEOUT_MS", "read_key"]
