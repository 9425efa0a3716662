"""Terminal-safe output helpers.

Detects whether the terminal can render UTF-8 and swaps the icons used by
the CLI for ASCII stand-ins when it cannot.
"""
import locale
import sys

# Icons printed by the CLI, with their ASCII fallbacks
ICON_MAP = {
    '✓': '[OK]',
    '✗': '[X]',
    '⚠': '[WARN]',
    '→': '->',
    '•': '*',
    '…': '...',
}

UTF8_ENCODINGS = ('utf-8', 'utf8', 'utf_8')


def detect_terminal_encoding() -> str:
    """Detect the terminal's encoding.

    Returns:
        str: Lower-cased encoding name, 'ascii' when nothing is known
    """
    encoding = getattr(sys.stdout, 'encoding', None)
    if encoding:
        return encoding.lower()

    try:
        return locale.getpreferredencoding().lower()
    except (LookupError, ValueError):
        return 'ascii'


def is_utf8_capable() -> bool:
    return detect_terminal_encoding() in UTF8_ENCODINGS


def sanitize_for_terminal(text: str, utf8: bool = None) -> str:
    """Replace CLI icons with ASCII when the terminal lacks UTF-8.

    Args:
        text: Text potentially containing icons
        utf8: Force the capability check result (detected when None)

    Returns:
        str: Text safe for the current terminal
    """
    if utf8 is None:
        utf8 = is_utf8_capable()
    if utf8:
        return text

    for icon, replacement in ICON_MAP.items():
        text = text.replace(icon, replacement)
    return text
