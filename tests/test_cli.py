"""Tests for the scoper-symbols command line."""
import pytest
from pathlib import Path
from typer.testing import CliRunner

import scoper_symbols.registry.reflector as reflector_module
from scoper_symbols.config import __version__
from scoper_symbols.main import app


FIXTURES_DIR = Path(__file__).parent / 'fixtures' / 'stubs'
EXCERPT = FIXTURES_DIR / 'php74_excerpt.json'

runner = CliRunner()


@pytest.fixture(autouse=True)
def fresh_registry(monkeypatch):
    """Reset the process-wide registry and point the config at the excerpt."""
    monkeypatch.setattr(reflector_module, '_registry', None)
    monkeypatch.setenv('SCOPER_STUBS_MAP', str(EXCERPT))
    monkeypatch.delenv('SCOPER_PHP_EDITION', raising=False)


class TestCheck:
    """The check command."""

    def test_class_verdicts(self):
        """Test one internal and one user class in a single call."""
        result = runner.invoke(app, ['check', 'UV', 'MyApp'])

        assert result.exit_code == 0
        assert 'UV' in result.output
        assert 'MyApp' in result.output
        assert 'internal' in result.output
        assert 'user' in result.output

    def test_function_kind_folds_case(self):
        """Test that --kind function matches any casing."""
        result = runner.invoke(app, ['check', '--kind', 'function', 'UV_RUN'])

        assert result.exit_code == 0
        assert 'internal' in result.output
        assert 'user' not in result.output

    def test_common_function_is_internal(self):
        """Test that an everyday built-in is reported internal."""
        result = runner.invoke(app, ['check', '-k', 'function', 'usort'])

        assert result.exit_code == 0
        assert 'internal' in result.output
        assert 'user' not in result.output

    def test_constant_kind_is_exact(self):
        """Test that constants do not fold case."""
        result = runner.invoke(app, ['check', '-k', 'constant', 'stdout'])

        assert result.exit_code == 0
        assert 'user' in result.output

    def test_custom_stubs(self):
        """Test that --stubs replaces the configured map."""
        result = runner.invoke(app, ['check', '--stubs', str(FIXTURES_DIR / 'minimal.json'), 'ArrayIterator'])

        assert result.exit_code == 0
        assert 'user' in result.output

    def test_bad_stubs_exit_code(self, tmp_path):
        """Test that a missing --stubs file exits with code 2."""
        result = runner.invoke(app, ['check', '--stubs', str(tmp_path / 'missing.json'), 'UV'])

        assert result.exit_code == 2
        assert 'Error' in result.output

    def test_unconfigured_map_exit_code(self, monkeypatch):
        """Test that an unset SCOPER_STUBS_MAP exits with code 2 instead of guessing."""
        monkeypatch.delenv('SCOPER_STUBS_MAP')

        result = runner.invoke(app, ['check', 'UV'])

        assert result.exit_code == 2
        assert 'Error' in result.output
        assert 'SCOPER_STUBS_MAP' in result.output
        assert 'internal' not in result.output

    def test_unknown_kind_rejected(self):
        """Test that an unknown --kind is a usage error."""
        result = runner.invoke(app, ['check', '--kind', 'trait', 'UV'])

        assert result.exit_code != 0


class TestStats:
    """The stats command."""

    def test_stats_for_fixture(self):
        """Test table sizes and edition for the minimal fixture."""
        result = runner.invoke(app, ['stats', '--stubs', str(FIXTURES_DIR / 'minimal.json')])

        assert result.exit_code == 0
        assert 'Classes' in result.output
        assert '51' in result.output
        assert '8.1' in result.output

    def test_edition_label_override(self, monkeypatch):
        """Test that SCOPER_PHP_EDITION replaces the edition label."""
        monkeypatch.setenv('SCOPER_PHP_EDITION', '8.4-custom')

        result = runner.invoke(app, ['stats'])

        assert result.exit_code == 0
        assert '8.4-custom' in result.output

    def test_configured_bad_map(self, monkeypatch, tmp_path):
        """Test that a configured but missing map exits with code 2."""
        monkeypatch.setenv('SCOPER_STUBS_MAP', str(tmp_path / 'missing.json'))

        result = runner.invoke(app, ['stats'])

        assert result.exit_code == 2


class TestCorrections:
    """The corrections command."""

    def test_lists_all_trackers(self):
        """Test that all three kinds are listed."""
        result = runner.invoke(app, ['corrections'])

        assert result.exit_code == 0
        assert 'Classes Corrections' in result.output
        assert 'Functions Corrections' in result.output
        assert 'Constants Corrections' in result.output

    def test_no_stale_with_excerpt_map(self):
        """Test that the 7.4 excerpt has caught up with no correction."""
        result = runner.invoke(app, ['corrections', '--stale'])

        assert result.exit_code == 0
        assert 'No stale corrections' in result.output

    def test_stale_entries_fail(self):
        """Test that covered corrections exit with code 1."""
        result = runner.invoke(app, ['corrections', '--stale', '--stubs', str(FIXTURES_DIR / 'caught_up.json')])

        assert result.exit_code == 1
        assert 'Stale corrections found' in result.output
        assert 'Classes Corrections' in result.output
        assert 'Functions Corrections' in result.output
        assert 'Constants Corrections' in result.output


def test_version():
    """Test that --version prints the package version."""
    result = runner.invoke(app, ['--version'])

    assert result.exit_code == 0
    assert __version__ in result.output
