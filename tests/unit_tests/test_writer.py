from __future__ import annotations

import inspect
import io
import threading

import pytest

from levelog import CallSite, FormatOptions, MultiSink, SeverityLevel, SeverityWriter, StdioSink
from levelog.writer import render_line


def make_writer(options: FormatOptions = FormatOptions.LOG_LEVEL, **kwargs) -> tuple[SeverityWriter, io.StringIO]:
    buffer = io.StringIO()
    return SeverityWriter(SeverityLevel.INFO, options, MultiSink(StdioSink(buffer)), **kwargs), buffer


class TestFormatting:
    def test_printf(self) -> None:
        writer, buffer = make_writer()
        writer.printf("user %s logged in after %d tries", "ada", 3)
        assert buffer.getvalue() == "INFO user ada logged in after 3 tries\n"

    def test_printf_without_args_is_verbatim(self) -> None:
        writer, buffer = make_writer()
        writer.printf("100% done")
        assert buffer.getvalue() == "INFO 100% done\n"

    def test_printf_with_mapping(self) -> None:
        writer, buffer = make_writer()
        writer.printf("%(host)s:%(port)d", {"host": "db", "port": 5432})
        assert buffer.getvalue() == "INFO db:5432\n"

    def test_println_joins_with_spaces(self) -> None:
        writer, buffer = make_writer()
        writer.println("count", 3, None)
        assert buffer.getvalue() == "INFO count 3 None\n"

    def test_println_without_args(self) -> None:
        writer, buffer = make_writer()
        writer.println()
        assert buffer.getvalue() == "INFO \n"

    def test_trailing_newline_not_doubled(self) -> None:
        writer, buffer = make_writer(FormatOptions(0))
        writer.printf("done\n")
        writer.println("again")
        assert buffer.getvalue() == "done\nagain\n"

    def test_render_line(self) -> None:
        assert render_line(None, "msg", {"prefix": "WARN ", "event": "x"}) == "WARN x"
        assert render_line(None, "msg", {"event": "x"}) == "x"


class TestCallSite:
    def test_printf_reports_caller(self) -> None:
        writer, buffer = make_writer(FormatOptions.SHORT_FILE_NAME)
        line = inspect.currentframe().f_lineno + 1
        writer.printf("here")
        assert buffer.getvalue() == f"test_writer.py:{line} here\n"

    def test_println_reports_caller(self) -> None:
        writer, buffer = make_writer(FormatOptions.LONG_FILE_NAME)
        line = inspect.currentframe().f_lineno + 1
        writer.println("here")
        assert buffer.getvalue() == f"{__file__}:{line} here\n"

    def test_output_depth_one_is_direct_caller(self) -> None:
        writer, buffer = make_writer(FormatOptions.SHORT_FILE_NAME)
        line = inspect.currentframe().f_lineno + 1
        writer.output(1, "direct")
        assert buffer.getvalue() == f"test_writer.py:{line} direct\n"

    def test_explicit_call_site(self) -> None:
        writer, buffer = make_writer(FormatOptions.SHORT_FILE_NAME)
        writer.output(0, "bridged", caller=CallSite("/opt/worker/jobs.py", 12))
        assert buffer.getvalue() == "jobs.py:12 bridged\n"

    def test_frozen_prefix_is_reused(self) -> None:
        writer, buffer = make_writer(FormatOptions.SHORT_FILE_NAME, prefix="FIXED ")
        writer.println("a")
        writer.println("b")
        assert buffer.getvalue() == "FIXED a\nFIXED b\n"
        assert writer.prefix == "FIXED "


class TestFatal:
    def test_fatalf_writes_then_exits(self) -> None:
        writer, buffer = make_writer()
        with pytest.raises(SystemExit) as excinfo:
            writer.fatalf("cannot bind port %d", 8080)
        assert excinfo.value.code == 1
        assert buffer.getvalue() == "INFO cannot bind port 8080\n"

    def test_fatalln_writes_then_exits(self) -> None:
        writer, buffer = make_writer()
        with pytest.raises(SystemExit):
            writer.fatalln("bye")
        assert buffer.getvalue() == "INFO bye\n"


def test_concurrent_lines_do_not_interleave():
    writer, buffer = make_writer()
    workers = 8
    per_worker = 200

    def work(n: int) -> None:
        for i in range(per_worker):
            writer.printf("worker-%d line-%d %s", n, i, "x" * 64)

    threads = [threading.Thread(target=work, args=(n,)) for n in range(workers)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    lines = buffer.getvalue().splitlines()
    assert len(lines) == workers * per_worker
    for line in lines:
        assert line.startswith("INFO worker-")
        assert line.endswith(" " + "x" * 64)


class TestBadFormatArguments:
    def test_mismatched_type_does_not_raise(self) -> None:
        writer, buffer = make_writer()
        writer.printf("%d items", "many")
        assert buffer.getvalue() == "INFO %d items ('many',)\n"

    def test_missing_argument_does_not_raise(self) -> None:
        writer, buffer = make_writer()
        writer.printf("%s and %s", "one")
        assert buffer.getvalue() == "INFO %s and %s ('one',)\n"

    def test_missing_mapping_key_does_not_raise(self) -> None:
        writer, buffer = make_writer()
        writer.printf("%(host)s", {"port": 1})
        assert buffer.getvalue() == "INFO %(host)s ({'port': 1},)\n"
