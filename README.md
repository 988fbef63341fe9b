# rttrutil

A small utility library with no third-party dependencies.

## Modules

- **`rttrutil.writers`**: the `TextWriter` base class, whose single method is
  `write_text(txt, color=0)`. The package ships these writers:
  - `StdStreamWriter(stdout_or_stderr=True, stream=None)` writes to stdout or
    stderr, or to a given stream. It flushes after every write. It wraps
    coloured text in ANSI escape sequences through `set_color` and
    `reset_color`.
  - `FileWriter(path)` writes to a file and flushes after every write. It can
    be used as a context manager, and `close()` closes the file. It raises
    `OSError` if the file cannot be opened.
  - `StringWriter` collects text in memory, which `text()` returns.
  - `NullWriter` discards everything.
  - `AvoidDuplicatesWriter(writer)` drops text that the last remembered line
    already starts with. `reset()` forgets that line.

  The `Color` enum names the colours: `NONE`, `BLUE`, `RED`, `YELLOW`,
  `GREEN`, `MAGENTA`, `CYAN`, `BLACK`, `WHITE`, `ORANGE` and `BROWN`.

- **`rttrutil.log`**: `Log` sends formatted messages to a stdout writer, a
  stderr writer and a file writer.
  - `LogTarget` flags choose the targets: `STDOUT`, `STDERR`, `FILE`,
    `STDOUT_AND_STDERR`, `FILE_AND_STDOUT`, `FILE_AND_STDERR` and `ALL`.
  - Messages are written with `write`, `write_colored`, `write_to_file` and
    `write_last_error`.
  - `set_writer(writer, target)` replaces the writer for the given targets.
    Passing `None` restores the default writer.
  - The log file is opened on the first write to `FILE`. It is named
    `YYYY-MM-DD_HH-MM-SS.log` and goes in the directory set with
    `set_log_filepath` (default `logs`). That directory must already exist.
  - `format_message(fmt, *args)` supports printf-style directives (`%s`, `%d`,
    `%5.2f`, ...) and positional ones (`%1%`). It raises `ValueError` on a
    malformed format or a wrong argument count.
  - `get_log()` returns a shared instance.
  - `fatal_error`, `error` and `warning` log a tagged message and return an
    exit code: 1, 1 and 0 respectively.

- **`rttrutil.utf8`**:
  - `is_valid_utf8(data)` tells whether bytes are valid UTF-8.
  - `find_invalid_utf8(data)` returns the offset of the first invalid
    sequence, or `len(data)` if there is none.
  - `utf8_to_32(data)` decodes bytes and `utf32_to_8(text)` encodes a string.
    Both replace invalid input with U+FFFD.
  - `ansi_to_utf8(data)` converts Windows-1252 bytes to UTF-8 and leaves
    valid UTF-8 unchanged.

- **`rttrutil.tmpfile`**:
  - `TmpFile(ext=".tmp", directory=None)` creates a new empty binary file.
    Its open handle is `stream` and its location is `path`. `close()` closes
    and deletes the file. `is_valid()` tells whether a file could be created.
  - `TmpFolder(parent=None)` creates a new folder. `cleanup()` removes it with
    its contents.
  - Both can be used as context managers.
  - `unlink_file(path)` deletes a file if it exists and ignores failures.

- **`rttrutil.ip`**: `string_to_ip("192.168.0.1")` returns the address as a
  32-bit integer. It raises `ValueError` for anything that is not four dotted
  numbers from 0 to 255.

- **`rttrutil.messaging`**: length-prefixed messages over sockets.
  - A message is sent as a 6-byte little-endian header followed by the
    payload. The header holds a 16-bit id and a 32-bit payload length.
    `encode_header` and `decode_header` build and read that header.
  - `Message` subclasses implement `serialize` and `deserialize`. `clone()`
    copies a message through serialisation.
  - `MessageHandler(create_msg)` sends one message or receives one. The
    `create_msg` factory builds an empty message from its id, and the
    received payload is then loaded into it.
  - `MessageQueue` is a FIFO with `push`, `peek`, `pop`, `clear`, `len()`,
    `send`, `flush`, `recv` and `recv_all`.
  - Failures raise `MessageError`. Messages over 64 KiB are refused.

## Examples

```python
from rttrutil.log import Log, LogTarget
from rttrutil.writers import StringWriter

log = Log()
capture = StringWriter()
log.set_writer(capture, LogTarget.STDOUT)
log.write("%s has %d items\n", "queue", 3, target=LogTarget.STDOUT)
print(capture.text())   # "queue has 3 items\n"
```

```python
from rttrutil.utf8 import ansi_to_utf8, is_valid_utf8

is_valid_utf8(b"\xc3\xa4")      # True
ansi_to_utf8(b"\x80")           # b"\xe2\x82\xac" (euro sign)
```

## What it does not do

- It defines no message types of its own. You supply the `Message`
  subclasses and the factory that creates them from an id.
- It has no LAN discovery or socket abstraction. Plain `socket.socket`
  objects are used directly.
- It has no command-line program.

## Running the tests

```
pip install -e .[test]
pytest
```