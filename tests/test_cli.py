"""Tests for the psgraph command line."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

from psgraph.cli import main as cli_main


def _run(monkeypatch: pytest.MonkeyPatch, *args: str) -> int:
    monkeypatch.setattr(sys, 'argv', ['psgraph', *args])
    return cli_main.main()


def test_paper_command(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """paper writes graph paper with the given ranges and titles."""
    out = tmp_path / 'grid'
    rc = _run(
        monkeypatch,
        'paper',
        '-o', str(out),
        '--paper', 'Letter',
        '--x-low', '-5',
        '--x-high', '5',
        '--heading', 'Grid',
        '--y-title', 'Height',
    )
    assert rc == 0
    text = (tmp_path / 'grid.ps').read_text(encoding='latin-1')
    assert '%%DocumentMedia: Letter 612 792' in text
    assert '(Grid) heading_labels' in text
    assert '(Height) yaxis_labels' in text


def test_default_output_dir(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """Without -o the file is named after the command in PSGRAPH_OUTPUT_DIR."""
    monkeypatch.setenv('PSGRAPH_OUTPUT_DIR', str(tmp_path))
    assert _run(monkeypatch, 'paper') == 0
    assert (tmp_path / 'paper.ps').exists()


def test_bar_command(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """bar reads a CSV file and draws a keyed bar chart."""
    data = tmp_path / 'sales.csv'
    data.write_text('Region,2019,2020\nNorth,120,135\nSouth,80,95\n', encoding='utf-8')
    rc = _run(monkeypatch, 'bar', str(data), '-o', str(tmp_path / 'bars.ps'))
    assert rc == 0
    text = (tmp_path / 'bars.ps').read_text(encoding='latin-1')
    assert 'drawbar' in text
    assert '(2020) show' in text


def test_xy_command_without_key(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """xy --no-key draws lines with no key."""
    data = tmp_path / 'xy.csv'
    data.write_text('t,a,b\n0,1,2\n1,3,1\n', encoding='utf-8')
    rc = _run(monkeypatch, 'xy', str(data), '--no-key', '--landscape', '-o', str(tmp_path / 'xy'))
    assert rc == 0
    text = (tmp_path / 'xy.ps').read_text(encoding='latin-1')
    assert 'drawxyline' in text
    assert 'keybox' not in text.split('%%EndProlog')[1]
    assert '%%Orientation: Landscape' in text


def test_bad_data_reports_error(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    """Data errors print a message and return 1."""
    data = tmp_path / 'bad.csv'
    data.write_text('x,y\n1,abc\n', encoding='utf-8')
    rc = _run(monkeypatch, 'xy', str(data), '-o', str(tmp_path / 'bad'))
    assert rc == 1
    assert "Error: Row 1, column 'y': 'abc' is not a number" in capsys.readouterr().err


def test_bad_range_reports_error(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    """An empty axis range prints an error and returns 1."""
    rc = _run(monkeypatch, 'paper', '--x-low', '3', '--x-high', '3', '-o', str(tmp_path / 'p'))
    assert rc == 1
    assert 'Error: x axis: high' in capsys.readouterr().err


def test_missing_file(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    """A missing data file is reported rather than raised."""
    rc = _run(monkeypatch, 'bar', str(tmp_path / 'none.csv'), '-o', str(tmp_path / 'b'))
    assert rc == 1
    assert capsys.readouterr().err.startswith('Error:')
