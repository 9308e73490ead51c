"""Shared fakes for post-box tests."""

from __future__ import annotations

from typing import List, Optional, Tuple

from smbpbi.postbox.backends.base import I2CBackend


class FakeBus(I2CBackend):
    """In-memory I2C backend that records everything the reader asks of it."""

    def __init__(
        self,
        echo: bytes = b"",
        completed: int = 2,
        error: Optional[OSError] = None,
        open_error: Optional[OSError] = None,
    ) -> None:
        self.echo = echo
        self.completed = completed
        self.error = error
        self.open_error = open_error
        self.opened: List[int] = []
        self.transfers: List[Tuple[int, bytes, int]] = []
        self.closed = 0

    def factory(self, bus: int) -> "FakeBus":
        """Stands in for a backend class: called with the bus index."""
        if self.open_error is not None:
            raise self.open_error
        self.opened.append(bus)
        return self

    def transfer(self, dev_addr: int, write_data: bytes, read_buf: bytearray) -> int:
        self.transfers.append((dev_addr, bytes(write_data), len(read_buf)))
        if self.error is not None:
            raise self.error
        read_buf[: len(self.echo)] = self.echo[: len(read_buf)]
        return self.completed

    def close(self) -> None:
        self.closed += 1

    @property
    def invoked(self) -> bool:
        return bool(self.opened or self.transfers)
