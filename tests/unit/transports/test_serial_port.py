from unittest import mock

import pytest
import serial

from thermal_printer.exceptions import TransportError
from thermal_printer.protocols import Transport
from thermal_printer.transports.serial_port import SerialTransport


@pytest.fixture
def serial_class():
    with mock.patch("thermal_printer.transports.serial_port.serial.Serial") as cls:
        cls.return_value.is_open = True
        yield cls


class TestOpen:
    def test_opens_8n1(self, serial_class: mock.MagicMock) -> None:
        transport = SerialTransport("/dev/ttyUSB0", baudrate=9600, timeout=1.5)

        serial_class.assert_called_once_with(
            port="/dev/ttyUSB0",
            baudrate=9600,
            bytesize=serial.EIGHTBITS,
            parity=serial.PARITY_NONE,
            stopbits=serial.STOPBITS_ONE,
            timeout=1.5,
            write_timeout=1.5,
        )
        assert transport.is_open

    def test_defaults(self, serial_class: mock.MagicMock) -> None:
        transport = SerialTransport()
        assert transport.port == "/dev/serial0"
        assert transport.baudrate == 19200

    def test_deferred_open(self, serial_class: mock.MagicMock) -> None:
        transport = SerialTransport(open_port=False)
        serial_class.assert_not_called()
        assert not transport.is_open

    def test_open_failure(self, serial_class: mock.MagicMock) -> None:
        serial_class.side_effect = serial.SerialException("no such device")
        with pytest.raises(TransportError, match="Cannot open") as exc_info:
            SerialTransport("/dev/nothing")
        assert isinstance(exc_info.value.__cause__, serial.SerialException)

    def test_open_is_idempotent(self, serial_class: mock.MagicMock) -> None:
        transport = SerialTransport()
        transport.open()
        serial_class.assert_called_once()


class TestWrite:
    def test_write_and_flush(self, serial_class: mock.MagicMock) -> None:
        transport = SerialTransport()
        transport.write(b"\x1b@")
        transport.flush()

        port = serial_class.return_value
        port.write.assert_called_once_with(b"\x1b@")
        port.flush.assert_called_once_with()

    def test_write_failure(self, serial_class: mock.MagicMock) -> None:
        serial_class.return_value.write.side_effect = serial.SerialTimeoutException("timeout")
        transport = SerialTransport()
        with pytest.raises(TransportError, match="2 bytes"):
            transport.write(b"ab")

    def test_flush_failure(self, serial_class: mock.MagicMock) -> None:
        serial_class.return_value.flush.side_effect = serial.SerialException("gone")
        transport = SerialTransport()
        with pytest.raises(TransportError):
            transport.flush()

    @pytest.mark.parametrize("method, args", [("write", (b"x",)), ("flush", ())])
    def test_closed_port(self, serial_class: mock.MagicMock, method: str, args: tuple) -> None:
        transport = SerialTransport(open_port=False)
        with pytest.raises(TransportError, match="not open"):
            getattr(transport, method)(*args)


class TestLifecycle:
    def test_context_manager_closes(self, serial_class: mock.MagicMock) -> None:
        with SerialTransport(open_port=False) as transport:
            assert transport.is_open
        serial_class.return_value.close.assert_called_once_with()
        assert not transport.is_open

    def test_close_twice(self, serial_class: mock.MagicMock) -> None:
        transport = SerialTransport()
        transport.close()
        transport.close()
        serial_class.return_value.close.assert_called_once_with()

    def test_repr(self, serial_class: mock.MagicMock) -> None:
        transport = SerialTransport("/dev/ttyS1")
        assert "port=/dev/ttyS1" in repr(transport)
        assert "open" in repr(transport)

    def test_is_transport(self, serial_class: mock.MagicMock) -> None:
        assert isinstance(SerialTransport(open_port=False), Transport)
