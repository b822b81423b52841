import io
import re

import pytest

from huffarc.progress import Progress, terminal_width

ESCAPES = re.compile(r"\x1b\[[0-9;]*m")


@pytest.fixture(autouse=True)
def columns(monkeypatch):
    monkeypatch.setenv("COLUMNS", "50")


def _visible(text):
    return ESCAPES.sub("", text)


def test_terminal_width_follows_columns(monkeypatch):
    monkeypatch.setenv("COLUMNS", "77")
    assert terminal_width() == 77


def test_initial_bar_is_empty():
    stream = io.StringIO()
    Progress(4, stream)
    out = _visible(stream.getvalue())
    assert out.startswith("[")
    assert out.endswith("]   0/4\r")
    assert "#" not in out
    assert out.count("-") > 0


def test_full_bar_after_last_update():
    stream = io.StringIO()
    progress = Progress(4, stream)
    start = _visible(stream.getvalue())
    stream.seek(0)
    stream.truncate()
    progress.update(4)
    end = _visible(stream.getvalue())
    assert end.endswith("]   4/4\r")
    assert "-" not in end
    assert end.count("#") == start.count("-")


def test_bar_length_is_constant():
    stream = io.StringIO()
    progress = Progress(3, stream)
    lengths = [len(_visible(stream.getvalue()))]
    for index in (1, 2, 3):
        stream.seek(0)
        stream.truncate()
        progress.update(index)
        lengths.append(len(_visible(stream.getvalue())))
    assert len(set(lengths)) == 1


def test_zero_total_draws_nothing():
    stream = io.StringIO()
    progress = Progress(0, stream)
    progress.update(0)
    assert stream.getvalue() == ""


def test_print_line_pads_over_bar():
    stream = io.StringIO()
    progress = Progress(4, stream)
    bar = _visible(stream.getvalue()).rstrip("\r")
    stream.seek(0)
    stream.truncate()
    progress.print_line("abc\n")
    line = stream.getvalue()
    assert line.startswith("abc")
    assert line.endswith("\n")
    assert len(line) - 1 == len(bar)
    assert line[3:-1].strip() == ""


def test_print_line_longer_than_bar_is_not_padded():
    stream = io.StringIO()
    progress = Progress(2, stream)
    stream.seek(0)
    stream.truncate()
    text = "x" * 200
    progress.print_line(text)
    assert stream.getvalue() == text + "\n"


def test_close_ends_line():
    stream = io.StringIO()
    with Progress(2, stream):
        stream.seek(0)
        stream.truncate()
    assert stream.getvalue() == "\n"