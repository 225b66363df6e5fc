"""Terminal key input for the browser.

Puts stdin in cbreak mode (Ctrl+C still raises KeyboardInterrupt) and turns
raw bytes into key tokens such as ``UP``, ``ENTER`` or a plain character.
"""

from __future__ import annotations

import contextlib
import os
import termios
import tty
from typing import List

_SEQUENCES = {
    b"\x1b[A": "UP",
    b"\x1b[B": "DOWN",
    b"\x1b[C": "RIGHT",
    b"\x1b[D": "LEFT",
    b"\x1bOA": "UP",
    b"\x1bOB": "DOWN",
    b"\x1bOC": "RIGHT",
    b"\x1bOD": "LEFT",
    b"\x1b[H": "HOME",
    b"\x1bOH": "HOME",
    b"\x1b[1~": "HOME",
    b"\x1b[7~": "HOME",
}

_SINGLE = {
    b"\r": "ENTER",
    b"\n": "ENTER",
    b"\x7f": "BACKSPACE",
    b"\x08": "BACKSPACE",
    b"\x03": "CTRL_C",
}


def decode_keys(data: bytes) -> List[str]:
    keys = []
    i = 0
    while i < len(data):
        if data[i:i + 1] == b"\x1b":
            for seq, token in _SEQUENCES.items():
                if data.startswith(seq, i):
                    keys.append(token)
                    i += len(seq)
                    break
            else:
                # unknown or lone escape
                keys.append("ESC")
                i += 1
            continue
        ch = data[i:i + 1]
        if ch in _SINGLE:
            keys.append(_SINGLE[ch])
            i += 1
            continue
        # multi-byte UTF-8 characters are kept whole
        end = i + 1
        while end < len(data) and end - i < 4 and (data[end] & 0xC0) == 0x80:
            end += 1
        keys.append(data[i:end].decode("utf-8", errors="replace"))
        i = end
    return keys


class KeyReader:
    def __init__(self, stdin_fd: int):
        self.stdin_fd = stdin_fd
        self._saved_tty_state = termios.tcgetattr(stdin_fd)

    def read_keys(self) -> List[str]:
        data = os.read(self.stdin_fd, 64)
        return decode_keys(data)

    @contextlib.contextmanager
    def cbreak_mode(self):
        tty.setcbreak(self.stdin_fd, termios.TCSANOW)
        try:
            yield
        finally:
            termios.tcsetattr(self.stdin_fd, termios.TCSAFLUSH, self._saved_tty_state)
