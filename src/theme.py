"""Badge palette and ANSI styling for the task table.

Decisions:
- One foreground color per badge kind plus a primary color for chrome.
- Truecolor when COLORTERM advertises it, else the xterm 256-color cube.
- Off when stdout is not a TTY (unless FORCE_COLOR=1) or NO_COLOR is set.
- TRACKER_* hex overrides come from the environment or the project .env
  file (loaded by config).
"""
from __future__ import annotations
import os, sys
import config  # noqa: F401  loads .env before the palette is resolved
from view import BADGE_COMPLETED, BADGE_OVERDUE, BADGE_PROGRESS

_FORCE = os.environ.get("FORCE_COLOR", "").lower() in {"1", "true", "yes", "on"}
ENABLED = (_FORCE or sys.stdout.isatty()) and os.environ.get("NO_COLOR") is None
TRUECOLOR = ENABLED and any(tok in os.environ.get("COLORTERM", "").lower() for tok in ("truecolor", "24bit"))

PALETTE_DEFAULTS = {
    'primary': ('TRACKER_PRIMARY', '#476EAE'),
    BADGE_PROGRESS: ('TRACKER_PROGRESS', '#F6FF99'),
    BADGE_COMPLETED: ('TRACKER_COMPLETED', '#A7E399'),
    BADGE_OVERDUE: ('TRACKER_OVERDUE', '#E36B6B'),
}


def resolve_hex(env_name: str, default: str) -> str:
    """Env override if it is a 6-digit hex color, else the default."""
    h = (os.environ.get(env_name) or '').lstrip('#')
    if len(h) == 6 and all(c in '0123456789abcdefABCDEF' for c in h):
        return '#' + h
    return default


def foreground(hex_code: str) -> str:
    """ANSI foreground sequence for a hex color ('' when color is off)."""
    if not ENABLED:
        return ''
    h = hex_code.lstrip('#')
    r, g, b = (int(h[i:i + 2], 16) for i in (0, 2, 4))
    if TRUECOLOR:
        return f"\033[38;2;{r};{g};{b}m"
    r6, g6, b6 = (int(round(x / 255 * 5)) for x in (r, g, b))
    return f"\033[38;5;{16 + 36 * r6 + 6 * g6 + b6}m"


PALETTE = {kind: resolve_hex(env, default) for kind, (env, default) in PALETTE_DEFAULTS.items()}
BOLD = "\033[1m" if ENABLED else ''
PRIMARY = foreground(PALETTE['primary'])
BADGE_COLOR = {kind: foreground(PALETTE[kind]) for kind in (BADGE_PROGRESS, BADGE_COMPLETED, BADGE_OVERDUE)}


def color(text: str, *styles: str) -> str:
    if not ENABLED or not any(styles):
        return text
    return ''.join(styles) + text + "\033[0m"
