"""Terminal surfaces and key sources.

The game only talks to two small interfaces:

* a surface with ``place_glyphs(col, row, text)``, ``clear()``, ``refresh()``
  and ``size()``;
* a key source with a non-blocking ``poll_key()`` and a blocking
  ``wait_key()``.

Keys come back as lower-case strings: single characters, ``ESC`` for escape,
``"left"``/``"right"`` for the arrow keys.
"""

from __future__ import annotations

import os
import sys
import time

ESC = "\x1b"

MOVE_LEFT = "move_left"
MOVE_RIGHT = "move_right"
QUIT = "quit"


def key_action(key: str | None) -> str | None:
    if key is None:
        return None
    key = key.lower()
    if key in ("a", "left"):
        return MOVE_LEFT
    if key in ("d", "right"):
        return MOVE_RIGHT
    if key in (ESC, "q"):
        return QUIT
    return None


class CursesSurface:
    def __init__(self, screen):
        import curses
        self.curses = curses
        self.screen = screen

    def size(self) -> tuple[int, int]:
        height, width = self.screen.getmaxyx()
        return width, height

    def place_glyphs(self, col: int, row: int, text: str):
        try:
            self.screen.addstr(row, col, text)
        except self.curses.error:
            # off-screen or bottom-right cell
            pass

    def clear(self):
        self.screen.clear()

    def refresh(self):
        self.screen.refresh()


class CursesKeys:
    def __init__(self, screen):
        import curses
        self.curses = curses
        self.screen = screen
        self.screen.nodelay(True)
        self.screen.keypad(True)

    def _translate(self, ch: int) -> str | None:
        if ch == self.curses.KEY_LEFT:
            return "left"
        if ch == self.curses.KEY_RIGHT:
            return "right"
        if 0 <= ch < 256:
            return chr(ch).lower()
        return None

    def poll_key(self) -> str | None:
        ch = self.screen.getch()
        if ch == -1:
            return None
        return self._translate(ch)

    def wait_key(self) -> str:
        self.screen.nodelay(False)
        try:
            while True:
                key = self._translate(self.screen.getch())
                if key is not None:
                    return key
        finally:
            self.screen.nodelay(True)


class ConsoleSurface:
    """Plain print fallback for terminals without curses; keeps a character buffer."""

    def __init__(self, width: int, height: int, stream=None):
        self.width = width
        self.height = height
        self.stream = stream if stream is not None else sys.stdout
        self.rows = [[" "] * width for _ in range(height)]

    def size(self) -> tuple[int, int]:
        return self.width, self.height

    def place_glyphs(self, col: int, row: int, text: str):
        if not 0 <= row < self.height:
            return
        line = self.rows[row]
        for i, ch in enumerate(text):
            if 0 <= col + i < self.width:
                line[col + i] = ch

    def text(self) -> str:
        return "\n".join("".join(line).rstrip() for line in self.rows)

    def clear(self):
        self.rows = [[" "] * self.width for _ in range(self.height)]
        if self.stream is sys.stdout:
            os.system("cls" if os.name == "nt" else "clear")

    def refresh(self):
        # cursor home, then redraw the whole buffer
        self.stream.write("\033[H" + self.text() + "\n")
        self.stream.flush()


class ConsoleKeys:
    """Non-blocking keyboard for the print fallback (msvcrt on Windows, cbreak stdin elsewhere).

    POSIX reads use os.read on the descriptor, never the buffered sys.stdin.
    """

    def __init__(self, fd: int | None = None):
        self.windows = os.name == "nt"
        self.fd = fd
        self.old_settings = None
        if not self.windows:
            import termios
            import tty
            if self.fd is None:
                self.fd = sys.stdin.fileno()
            if os.isatty(self.fd):
                self.old_settings = termios.tcgetattr(self.fd)
                tty.setcbreak(self.fd)

    def close(self):
        if self.old_settings is not None:
            import termios
            termios.tcsetattr(self.fd, termios.TCSADRAIN, self.old_settings)
            self.old_settings = None

    def _pending(self) -> bool:
        if self.windows:
            import msvcrt
            return msvcrt.kbhit()
        import select
        return bool(select.select([self.fd], [], [], 0)[0])

    def _read_fd(self, n: int) -> str:
        return os.read(self.fd, n).decode("utf-8", errors="replace")

    def _read(self) -> str | None:
        if self.windows:
            import msvcrt
            ch = msvcrt.getwch()
            if ch in ("\x00", "\xe0"):
                return {"K": "left", "M": "right"}.get(msvcrt.getwch())
            return ch.lower()
        ch = self._read_fd(1)
        if ch == ESC and self._pending():
            seq = self._read_fd(2)
            return {"[D": "left", "[C": "right"}.get(seq)
        return ch.lower()

    def poll_key(self) -> str | None:
        if not self._pending():
            return None
        return self._read()

    def wait_key(self) -> str:
        while True:
            key = self.poll_key()
            if key is not None:
                return key
            time.sleep(0.02)
