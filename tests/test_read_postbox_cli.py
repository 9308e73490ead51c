"""Tests for the smbpbi command-line tool."""

import errno

import pytest

from smbpbi.apps import read_postbox
from smbpbi.postbox.errors import IncompleteTransferError

from conftest import FakeBus


@pytest.fixture
def patched_bus(monkeypatch):
    """Route every backend choice to one FakeBus."""
    bus = FakeBus()
    monkeypatch.setattr(read_postbox, "_make_backend_factory", lambda name: bus.factory)
    return bus


def _argv(offset="0x10", size="4", *extra):
    return ["read", "--bus", "1", "--address", "0x50", "--offset", offset, "--size", size, *extra]


class TestMain:

    def test_success_prints_hex_array(self, patched_bus, capsys) -> None:
        patched_bus.echo = b"\xde\xad\xbe\xef"
        assert read_postbox.main(_argv()) == 0
        out = capsys.readouterr().out
        assert out == "[\n    0xde,\n    0xad,\n    0xbe,\n    0xef,\n]\n"
        assert patched_bus.opened == [1]
        assert patched_bus.transfers == [(0x50, b"\x10", 4)]

    def test_decimal_arguments(self, patched_bus) -> None:
        patched_bus.echo = b"\x00\x00"
        argv = ["read", "--bus", "2", "--address", "80", "--offset", "4660", "--size", "2"]
        assert read_postbox.main(argv) == 0
        assert patched_bus.opened == [2]
        assert patched_bus.transfers == [(80, b"\x12\x34", 2)]

    def test_oversize_exits_nonzero(self, patched_bus, capsys) -> None:
        assert read_postbox.main(_argv(size="9")) == 1
        captured = capsys.readouterr()
        assert captured.out == ""
        assert "Maximum post-box size is 8 bytes" in captured.err
        assert not patched_bus.invoked

    def test_partial_transfer_exits_nonzero(self, patched_bus, capsys) -> None:
        patched_bus.completed = 1
        assert read_postbox.main(_argv()) == 1
        err = capsys.readouterr().err
        assert err.startswith("Error: Unable to read post-box at +16, size=4")
        assert "Only 1/2 messages were transmitted successfully" in err

    def test_bus_error_shows_cause(self, patched_bus, capsys) -> None:
        patched_bus.error = OSError(errno.EREMOTEIO, "Remote I/O error")
        assert read_postbox.main(_argv()) == 1
        err = capsys.readouterr().err
        assert "Caused by:" in err
        assert "Unable to complete i2c transfer with /dev/i2c-1 @0x50 at +16" in err
        assert "Remote I/O error" in err

    @pytest.mark.parametrize(
        "argv",
        [
            ["read", "--bus", "256", "--address", "0x50", "--offset", "0", "--size", "1"],
            ["read", "--bus", "0", "--address", "0x10000", "--offset", "0", "--size", "1"],
            ["read", "--bus", "0", "--address", "0x50", "--offset", "-1", "--size", "1"],
            ["read", "--bus", "0", "--address", "0x50", "--offset", "0", "--size", "abc"],
            ["read", "--bus", "0", "--address", "0x50", "--offset", "0"],
            [],
        ],
    )
    def test_bad_arguments(self, patched_bus, argv) -> None:
        with pytest.raises(SystemExit) as excinfo:
            read_postbox.main(argv)
        assert excinfo.value.code != 0
        assert not patched_bus.invoked


class TestFormatting:

    def test_empty_array(self) -> None:
        assert read_postbox.format_hex_array(b"") == "[]"

    def test_single_byte(self) -> None:
        assert read_postbox.format_hex_array(b"\x0a") == "[\n    0x0a,\n]"

    def test_error_chain_without_context(self) -> None:
        text = read_postbox.format_error_chain(IncompleteTransferError(0, 2))
        assert text == "Error: Only 0/2 messages were transmitted successfully"

    def test_error_chain_with_context(self) -> None:
        err = IncompleteTransferError(1, 2)
        err.context = "Unable to read post-box at +0, size=1"
        text = read_postbox.format_error_chain(err)
        assert text == (
            "Error: Unable to read post-box at +0, size=1\n"
            "\n"
            "Caused by:\n"
            "    Only 1/2 messages were transmitted successfully"
        )


class TestBackendSelection:

    def test_linux_is_default(self) -> None:
        from smbpbi.postbox.backends.linux_i2c import LinuxI2CBackend

        args = read_postbox.build_parser().parse_args(_argv())
        assert args.backend == "linux"
        assert read_postbox._make_backend_factory(args.backend) is LinuxI2CBackend
