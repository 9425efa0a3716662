"""Tests for terminal-safe output."""
import io

from scoper_symbols.utils.logger import sanitize_for_terminal
from scoper_symbols.utils.safe_console import SafeConsole


def test_utf8_terminal_keeps_icons():
    assert sanitize_for_terminal("✓ done", utf8=True) == "✓ done"


def test_ascii_terminal_replaces_icons():
    assert sanitize_for_terminal("✓ ok ✗ no ⚠ careful → next", utf8=False) == \
        "[OK] ok [X] no [WARN] careful -> next"


def test_plain_text_untouched():
    assert sanitize_for_terminal("Crypto\\Cipher", utf8=False) == "Crypto\\Cipher"


def test_console_sanitizes_on_ascii_terminal(monkeypatch):
    monkeypatch.setattr('scoper_symbols.utils.safe_console.is_utf8_capable', lambda: False)
    output = io.StringIO()

    console = SafeConsole(file=output, width=80)
    console.print("✓ No stale corrections")

    assert output.getvalue().strip() == "[OK] No stale corrections"
