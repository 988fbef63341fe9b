import errno

import pytest

from rttrutil.log import (
    Log,
    LogTarget,
    error,
    fatal_error,
    format_message,
    get_log,
    warning,
)
from rttrutil.writers import Color, NullWriter, StringWriter, TextWriter


class RecordingWriter(TextWriter):
    def __init__(self):
        self.entries = []

    def write_text(self, txt, color=0):
        self.entries.append((txt, color))


@pytest.fixture
def log():
    result = Log()
    result.stdout_writer = StringWriter()
    result.stderr_writer = StringWriter()
    result.file_writer = StringWriter()
    return result


def test_format_printf_style():
    assert format_message("%s: %s\n", "ctx", "msg") == "ctx: msg\n"


def test_format_positional():
    assert format_message("\n\nERROR: %1%\n", "boom") == "\n\nERROR: boom\n"


def test_format_numbers_and_percent():
    assert format_message("%u of %d%%", 3, 10) == "3 of 10%"


def test_format_too_few_args():
    with pytest.raises(ValueError):
        format_message("%s %s", "a")


def test_format_too_many_args():
    with pytest.raises(ValueError):
        format_message("%s", "a", "b")


def test_format_bad_directive():
    with pytest.raises(ValueError):
        format_message("100%z", 1)


def test_write_default_targets(log):
    log.write("Hello %s\n", "World")
    assert log.stdout_writer.text() == "Hello World\n"
    assert log.file_writer.text() == "Hello World\n"
    assert log.stderr_writer.text() == ""


def test_write_to_stderr_only(log):
    log.write("x", target=LogTarget.STDERR)
    assert log.stderr_writer.text() == "x"
    assert log.stdout_writer.text() == ""
    assert log.file_writer.text() == ""


def test_write_to_file_only(log):
    log.write_to_file("data %1%", 5)
    assert log.file_writer.text() == "data 5"
    assert log.stdout_writer.text() == ""


def test_write_colored_passes_color():
    log = Log()
    rec = RecordingWriter()
    log.set_writer(rec, LogTarget.ALL)
    log.write_colored("msg", Color.GREEN, target=LogTarget.STDOUT)
    assert rec.entries == [("msg", Color.GREEN)]


def test_empty_message_not_flushed():
    log = Log()
    rec = RecordingWriter()
    log.set_writer(rec, LogTarget.ALL)
    log.write("")
    assert rec.entries == []


def test_shared_writer_receives_each_target():
    log = Log()
    rec = RecordingWriter()
    log.set_writer(rec, LogTarget.ALL)
    log.write("a", target=LogTarget.ALL)
    assert rec.entries == [("a", 0), ("a", 0), ("a", 0)]


def test_set_writer_none_restores_default(capsys):
    log = Log()
    log.set_writer(NullWriter(), LogTarget.STDOUT)
    log.write("hidden", target=LogTarget.STDOUT)
    assert capsys.readouterr().out == ""
    log.set_writer(None, LogTarget.STDOUT)
    log.write("shown", target=LogTarget.STDOUT)
    assert capsys.readouterr().out == "shown"


def test_open_creates_log_file(tmp_path):
    log = Log()
    log.set_log_filepath(tmp_path)
    log.write_to_file("entry %s\n", "one")
    files = list(tmp_path.glob("*.log"))
    assert len(files) == 1
    assert files[0].read_text(encoding="utf-8") == "entry one\n"
    log.file_writer.close()


def test_set_filepath_after_open_raises(tmp_path):
    log = Log()
    log.set_log_filepath(tmp_path)
    log.open()
    with pytest.raises(RuntimeError):
        log.set_log_filepath(tmp_path / "other")
    log.file_writer.close()


def test_write_last_error(log):
    try:
        raise OSError(errno.ENOENT, "No such file")
    except OSError:
        log.write_last_error("ctx")
    assert log.stdout_writer.text() == "ctx: No such file\n"


def test_fatal_error_returns_failure(log):
    assert fatal_error("boom", log) == 1
    assert log.stdout_writer.text() == "\n\nFATAL ERROR: boom\n"


def test_error_returns_failure(log):
    assert error("bad", log) == 1
    assert log.file_writer.text() == "\n\nERROR: bad\n"


def test_warning_returns_success(log):
    assert warning("careful", log) == 0
    assert log.stdout_writer.text() == "\n\nWARNING: careful\n"


def test_get_log_is_shared():
    shared = get_log()
    assert isinstance(shared, Log)
    writer = StringWriter()
    shared.set_writer(writer, LogTarget.STDERR)
    try:
        get_log().write("via shared %s", "log", target=LogTarget.STDERR)
        assert writer.text() == "via shared log"
    finally:
        shared.set_writer(None, LogTarget.STDERR)