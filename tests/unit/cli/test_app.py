"""Unit tests for the command-line interface in app.py.

Test coverage includes:

1. add
   - Prints the stored entry, persists it to the entry file.
   - Adding a taken short code fails with exit code 1.

2. view
   - Short and full (--long) output.
   - Unknown short codes print 'Not Found' with exit code 1.

3. edit
   - Without options the entry is only shown.
   - Updates are persisted, --author reassigns the entry.
   - Invalid timestamps are rejected by argparse.

4. remove
"""

import io
import logging
from pathlib import Path

import pytest
from rich.console import Console

from tinifier.cli import app
from tinifier.dao import UrlEntryFileDAO
from tinifier.utils import generate_shortcode


LONG_URL = 'https://example.com/blog/article-123'


@pytest.fixture(autouse=True)
def environment(monkeypatch):
    for name in ('TINIFIER_CONFIG', 'TINIFIER_BACKEND', 'TINIFIER_FILE', 'LOG_LEVEL', 'LOG_FORMAT'):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv('USER', 'alice')

    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.fixture
def output(monkeypatch) -> io.StringIO:
    buffer = io.StringIO()
    monkeypatch.setattr(app, 'console', Console(file=buffer, width=200, color_system=None))
    return buffer


@pytest.fixture
def errors(monkeypatch) -> io.StringIO:
    buffer = io.StringIO()
    monkeypatch.setattr(app, 'err_console', Console(file=buffer, width=200, color_system=None))
    return buffer


@pytest.fixture
def entry_file(tmp_path: Path) -> Path:
    return tmp_path / 'entries'


@pytest.fixture
def cli(entry_file):
    def run(*argv: str) -> int:
        return app.main(['--backend', 'file', '--file', str(entry_file), *argv])

    return run


@pytest.fixture
def short_url(cli, output) -> str:
    assert cli('add', LONG_URL) == 0
    output.seek(0)
    output.truncate()
    return generate_shortcode(LONG_URL)


# -------------------------------
# 1. add
# -------------------------------


def test_add(cli, output, entry_file):
    assert cli('add', LONG_URL) == 0

    short_url = generate_shortcode(LONG_URL)
    printed = output.getvalue()
    assert printed.startswith('ADDED:')
    assert f'Long URL: {LONG_URL}' in printed
    assert f'Short URL: {short_url}' in printed
    assert 'Expiration Date: None' in printed
    assert 'Author: alice' in printed

    entry = UrlEntryFileDAO(entry_file).get(short_url)
    assert entry.long_url == LONG_URL
    assert entry.author == 'alice'


def test_add_taken_short_code(cli, short_url, output, errors):
    assert cli('add', LONG_URL) == 1

    assert output.getvalue() == ''
    assert f"Error: Short URL '{short_url}'" in errors.getvalue()
    assert 'already taken' in errors.getvalue()


def test_add_with_unknown_backend_in_environment(monkeypatch, errors, output):
    monkeypatch.setenv('TINIFIER_BACKEND', 'sqlite')

    assert app.main(['add', LONG_URL]) == 1
    assert "Unknown backend 'sqlite'" in errors.getvalue()


def test_add_with_memory_backend(output):
    assert app.main(['--backend', 'memory', 'add', LONG_URL]) == 0
    assert 'ADDED:' in output.getvalue()


# -------------------------------
# 2. view
# -------------------------------


def test_view(cli, short_url, output):
    assert cli('view', short_url) == 0
    assert output.getvalue().strip() == f'{short_url} => {LONG_URL}'


def test_view_long(cli, short_url, output):
    assert cli('view', short_url, '--long') == 0

    printed = output.getvalue()
    assert printed.startswith(f'{short_url} =>')
    assert f'Long URL: {LONG_URL}' in printed
    assert 'Creation Date: ' in printed
    assert 'Author: alice' in printed


def test_view_not_found(cli, output):
    assert cli('view', 'abc123') == 1
    assert output.getvalue().strip() == 'Not Found'


# -------------------------------
# 3. edit
# -------------------------------


def test_edit_without_options_shows_entry(cli, short_url, output, entry_file):
    content = entry_file.read_text(encoding='utf-8')

    assert cli('edit', short_url) == 0
    assert f'Long URL: {LONG_URL}' in output.getvalue()
    assert entry_file.read_text(encoding='utf-8') == content


def test_edit_long_url_and_expiration(cli, short_url, output, entry_file):
    new_url = 'https://example.com/blog/article-456'

    assert cli('edit', short_url, '--long-url', new_url, '--expires', '2027-01-01T00:00:00+00:00') == 0

    printed = output.getvalue()
    assert f'Long URL: {new_url}' in printed
    assert f'Short URL: {short_url}' in printed
    assert 'Expiration Date: 2027-01-01 00:00:00+00:00' in printed
    assert 'Author: alice' in printed

    # The short code is kept, only one line for it remains in the file
    assert UrlEntryFileDAO(entry_file).get(short_url).long_url == new_url
    assert len(entry_file.read_text(encoding='utf-8').splitlines()) == 1


def test_edit_reassign_author(cli, short_url, output, entry_file):
    assert cli('edit', short_url, '--author', 'bob') == 0

    assert 'Author: bob' in output.getvalue()
    assert UrlEntryFileDAO(entry_file).get(short_url).author == 'bob'


def test_edit_not_found(cli, output):
    assert cli('edit', 'abc123', '--long-url', 'https://example.org') == 1
    assert output.getvalue().strip() == 'Not Found'


def test_edit_invalid_timestamp(cli, capsys):
    with pytest.raises(SystemExit) as exc_info:
        cli('edit', 'abc123', '--expires', 'tomorrow')

    assert exc_info.value.code == 2
    assert 'invalid ISO-8601 timestamp' in capsys.readouterr().err


# -------------------------------
# 4. remove
# -------------------------------


def test_remove(cli, short_url, output, entry_file):
    assert cli('remove', short_url) == 0

    printed = output.getvalue()
    assert printed.startswith(f'REMOVED: {short_url}')
    assert f'Long URL: {LONG_URL}' in printed
    assert entry_file.read_text(encoding='utf-8') == ''

    output.seek(0)
    output.truncate()
    assert cli('view', short_url) == 1
    assert 'Not Found' in output.getvalue()


def test_remove_not_found(cli, output):
    assert cli('remove', 'abc123') == 1
    assert output.getvalue().strip() == 'Not Found'
