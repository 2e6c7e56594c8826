"""Tests for transports"""

import io
from unittest.mock import Mock

from pipelogger.core.message import Message, MessageContent
from pipelogger.core.registry import Registry
from pipelogger.transports import ConsoleTransport, FileTransport, Transport, WRITE


def make_message(text="hello", muted=False):
    return Message(
        content=MessageContent(
            passed_segments=[text],
            joined_segments=text,
            formatted=f"\033[32m{text}\033[0m\n",
            plain=f"{text}\n",
        ),
        level=1,
        source_logger="logger0x0",
        muted=muted,
    )


class TestTransport:
    """Test the transport contract."""

    def setup_method(self):
        self.registry = Registry()

    def test_post_without_write_method(self):
        transport = Transport(registry=self.registry)
        assert transport.post(make_message()) is False

    def test_post_calls_write_with_context(self):
        context = {"paths": ["./logs/error.log"]}
        transport = Transport(context=context, registry=self.registry)
        callback = Mock()
        assert transport.set_method(WRITE, callback) is True

        msg = make_message()
        assert transport.post(msg) is True
        callback.assert_called_once_with(msg, context)

    def test_disabled_transport_skips_write(self):
        transport = Transport(registry=self.registry)
        callback = Mock()
        transport.set_method(WRITE, callback)

        transport.disable()
        assert transport.enabled is False
        assert transport.post(make_message()) is False
        callback.assert_not_called()

        transport.enable()
        assert transport.post(make_message()) is True

    def test_set_method_refuses_overwrite(self):
        transport = Transport(registry=self.registry)
        first, second = Mock(), Mock()
        transport.set_method(WRITE, first)

        assert transport.set_method(WRITE, second) is False
        transport.post(make_message())
        first.assert_called_once()
        second.assert_not_called()

        assert transport.set_method(WRITE, second, force=True) is True
        transport.post(make_message())
        second.assert_called_once()

    def test_remove_method(self):
        transport = Transport(registry=self.registry)
        transport.set_method(WRITE, Mock())
        assert transport.remove_method(WRITE) is True
        assert transport.remove_method(WRITE) is False
        assert transport.has_method(WRITE) is False
        assert transport.post(make_message()) is False

    def test_ids_are_unique(self):
        first = Transport(id="sink", registry=self.registry)
        second = Transport(id="sink", registry=self.registry)
        assert first.id == "sink"
        assert second.id != "sink"
        assert second.id.startswith("transport0x")
        assert self.registry.get_transport("sink") is first


class TestConsoleTransport:
    """Test console sink."""

    def setup_method(self):
        self.registry = Registry()

    def test_writes_formatted_text(self):
        stream = io.StringIO()
        transport = ConsoleTransport(stream, registry=self.registry)
        transport.post(make_message("hi"))
        assert stream.getvalue() == "\033[32mhi\033[0m\n"

    def test_skips_muted(self):
        stream = io.StringIO()
        transport = ConsoleTransport(stream, registry=self.registry)
        assert transport.post(make_message(muted=True)) is True
        assert stream.getvalue() == ""

    def test_defaults_to_stdout(self, capsys):
        transport = ConsoleTransport(registry=self.registry)
        transport.post(make_message("out"))
        assert capsys.readouterr().out == "\033[32mout\033[0m\n"


class TestFileTransport:
    """Test file sink."""

    def setup_method(self):
        self.registry = Registry()

    def test_header_and_plain_lines(self, tmp_path):
        path = tmp_path / "logs" / "app.log"
        with FileTransport(str(path), registry=self.registry) as transport:
            transport.post(make_message("first"))
            transport.post(make_message("skipped", muted=True))
            transport.post(make_message("second"))

        lines = path.read_text(encoding="utf-8").splitlines()
        assert lines[0].startswith("# File autogenerated by pipelogger [")
        assert lines[1:] == ["first", "second"]

    def test_truncates_existing_file(self, tmp_path):
        path = tmp_path / "app.log"
        path.write_text("old content\n", encoding="utf-8")

        transport = FileTransport(str(path), registry=self.registry)
        transport.close()

        content = path.read_text(encoding="utf-8")
        assert "old content" not in content
        assert content.count("\n") == 1

    def test_write_after_close_ignored(self, tmp_path):
        path = tmp_path / "app.log"
        transport = FileTransport(str(path), registry=self.registry)
        transport.close()
        transport.post(make_message("late"))
        assert "late" not in path.read_text(encoding="utf-8")
