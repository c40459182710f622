"""Color & style helpers for the terminal projection of the list.

Decisions:
- Completed items render struck through (SGR 9) in the done colour.
- Truecolor preferred; falls back to 256-color cube if unsupported.
- Disables automatically when not a TTY unless FORCE_COLOR=1.
- Honors NO_COLOR for complete disable.
- Supports palette overrides via environment or project .env file.
"""
from __future__ import annotations
import logging
import os, sys
from pathlib import Path

logger = logging.getLogger(__name__)

_FORCE = os.environ.get("FORCE_COLOR", "").lower() in {"1", "true", "yes", "on"}
_NO_COLOR = os.environ.get("NO_COLOR") is not None
_ENABLE = (_FORCE or sys.stdout.isatty()) and not _NO_COLOR
_COLORTERM = os.environ.get("COLORTERM", "").lower()
_USE_TRUECOLOR = _ENABLE and any(tok in _COLORTERM for tok in ("truecolor", "24bit"))

PALETTE_KEYS = ('TODOS_PRIMARY', 'TODOS_ACTIVE', 'TODOS_DONE')

def _code(part: str) -> str:
    return f"\033[{part}m" if _ENABLE else ''

def _hex_to_rgb(hex_code: str) -> tuple[int,int,int]:
    h = hex_code.lstrip('#')
    return int(h[0:2],16), int(h[2:4],16), int(h[4:6],16)

def _is_hex(value: str) -> bool:
    h = value.lstrip('#')
    return len(h) == 6 and all(c in '0123456789abcdefABCDEF' for c in h)

def _fg_truecolor(r: int, g: int, b: int) -> str:
    return f"\033[38;2;{r};{g};{b}m"

def _fg_256(r: int, g: int, b: int) -> str:
    """Approximate RGB to xterm 256-color cube."""
    def to_6(x: int) -> int:
        return int(round(x / 255 * 5))
    r6, g6, b6 = to_6(r), to_6(g), to_6(b)
    idx = 16 + 36 * r6 + 6 * g6 + b6
    return f"\033[38;5;{idx}m"

def _from_hex(hex_code: str) -> str:
    if not _ENABLE or not _is_hex(hex_code):
        return ''
    r, g, b = _hex_to_rgb(hex_code)
    if _USE_TRUECOLOR:
        return _fg_truecolor(r, g, b)
    return _fg_256(r, g, b)

def read_env_file(path: Path) -> dict[str, str]:
    """Palette overrides from a KEY=VALUE file; unknown keys and bad hex ignored."""
    overrides: dict[str, str] = {}
    if not path.exists():
        return overrides
    try:
        text = path.read_text()
    except OSError as exc:
        logger.debug("Could not read %s: %s", path, exc)
        return overrides
    for line in text.splitlines():
        line = line.strip()
        if not line or line.startswith('#') or '=' not in line:
            continue
        k, v = line.split('=', 1)
        k = k.strip()
        v = v.strip()
        if k in PALETTE_KEYS and _is_hex(v):
            overrides[k] = '#' + v.lstrip('#')
    return overrides

RESET = _code('0')
BOLD = _code('1')
DIM = _code('2')
STRIKE = _code('9')

HEX_PRIMARY_DEFAULT = '#476EAE'
HEX_ACTIVE_DEFAULT = '#48B3AF'
HEX_DONE_DEFAULT = '#A7E399'

_ENV_OVERRIDES = read_env_file(Path(__file__).resolve().parent.parent / '.env')

# priority: real env var > .env override > default
HEX_PRIMARY = str(os.environ.get('TODOS_PRIMARY') or _ENV_OVERRIDES.get('TODOS_PRIMARY', HEX_PRIMARY_DEFAULT))
HEX_ACTIVE = str(os.environ.get('TODOS_ACTIVE') or _ENV_OVERRIDES.get('TODOS_ACTIVE', HEX_ACTIVE_DEFAULT))
HEX_DONE = str(os.environ.get('TODOS_DONE') or _ENV_OVERRIDES.get('TODOS_DONE', HEX_DONE_DEFAULT))

PRIMARY = _from_hex(HEX_PRIMARY)
C_ACTIVE = _from_hex(HEX_ACTIVE)
C_DONE = _from_hex(HEX_DONE)

HEADER_COLOR = PRIMARY
ID_COLOR = PRIMARY + BOLD
EMPTY_COLOR = DIM + PRIMARY
ACTIVE_COLOR = C_ACTIVE
DONE_COLOR = C_DONE + STRIKE

def color(text: str, *styles: str) -> str:
    """Apply ANSI styles to a given text."""
    if not _ENABLE:
        return text
    return ''.join(styles) + text + RESET

__all__ = [
    'color','read_env_file','RESET','BOLD','DIM','STRIKE','HEADER_COLOR','ID_COLOR','EMPTY_COLOR',
    'ACTIVE_COLOR','DONE_COLOR','HEX_PRIMARY','HEX_ACTIVE','HEX_DONE','_ENABLE','_USE_TRUECOLOR','_FORCE'
]
