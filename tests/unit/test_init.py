"""
Модульные тесты для thermal_printer/__init__.py
Тестирует метаданные пакета, конфигурацию, логирование и публичный API.
"""

import json
import logging
import logging.handlers
import os
import re
import subprocess
import sys
import tomllib
from pathlib import Path
from unittest import mock

import pytest

import thermal_printer


class TestVersionMetadata:
    """Тестирование метаданных версии и констант."""

    def test_version_format(self) -> None:
        """Проверить, что __version__ следует семантическому версионированию."""
        assert re.match(
            r"^\d+\.\d+\.\d+$", thermal_printer.__version__
        ), f"Версия '{thermal_printer.__version__}' не соответствует семантическому версионированию"

    def test_version_components(self) -> None:
        """Проверить, что компоненты версии соответствуют __version__."""
        expected_version = (
            f"{thermal_printer.VERSION_MAJOR}."
            f"{thermal_printer.VERSION_MINOR}."
            f"{thermal_printer.VERSION_PATCH}"
        )
        assert thermal_printer.__version__ == expected_version

    @pytest.mark.parametrize(
        "attribute",
        ["__author__", "__description__", "__license__", "__python_requires__"],
    )
    def test_metadata_attributes(self, attribute: str) -> None:
        """Проверить, что атрибуты метаданных являются непустыми строками."""
        value = getattr(thermal_printer, attribute)
        assert isinstance(value, str) and value, f"{attribute} должен быть непустой строкой"

    def test_pyproject_matches_package(self) -> None:
        """Проверить, что pyproject.toml согласован с пакетом и README существует."""
        root = Path(__file__).resolve().parents[2]
        with (root / "pyproject.toml").open("rb") as f:
            project = tomllib.load(f)["project"]
        assert project["version"] == thermal_printer.__version__
        assert project["readme"] == "README.md"
        assert (root / project["readme"]).is_file()


class TestPublicAPI:
    """Тестирование экспортов публичного API."""

    def test_all_exports_exist(self) -> None:
        """Проверить, что все имена в __all__ существуют в модуле."""
        for name in thermal_printer.__all__:
            assert hasattr(thermal_printer, name), f"Имя '{name}' из __all__ не существует"

    def test_no_duplicate_exports(self) -> None:
        """Проверить, что __all__ не содержит дубликатов."""
        assert len(thermal_printer.__all__) == len(set(thermal_printer.__all__))

    @pytest.mark.parametrize(
        "name",
        [
            "ThermalPrinter",
            "PrinterConfig",
            "SerialTransport",
            "MemoryTransport",
            "BrightnessGrid",
            "BarcodeSpec",
            "ThermalPrinterError",
            "InvalidBarcodeSpecError",
        ],
    )
    def test_core_names_exported(self, name: str) -> None:
        """Проверить, что основные классы экспортированы."""
        assert name in thermal_printer.__all__

    def test_exception_hierarchy(self) -> None:
        """Проверить, что все исключения пакета наследуют ThermalPrinterError."""
        for exc in (
            thermal_printer.TransportError,
            thermal_printer.EncodingError,
            thermal_printer.InvalidImageDimensionsError,
            thermal_printer.InvalidBarcodeSpecError,
        ):
            assert issubclass(exc, thermal_printer.ThermalPrinterError)

    def test_exception_cause(self) -> None:
        """Проверить, что исключение сохраняет исходную причину."""
        cause = OSError("порт недоступен")
        error = thermal_printer.TransportError("Ошибка записи", cause=cause)
        assert error.__cause__ is cause
        assert "Ошибка записи" in str(error)


class TestLogging:
    """Тестирование конфигурации логирования."""

    def test_get_logger_name_format(self) -> None:
        """Проверить, что имена логгеров получают префикс пакета."""
        logger = thermal_printer.get_logger("host_app")
        assert isinstance(logger, logging.Logger)
        assert logger.name == "thermal_printer.host_app"

    def test_get_logger_with_qualified_name(self) -> None:
        """Проверить get_logger с уже квалифицированным именем."""
        logger = thermal_printer.get_logger("thermal_printer.printer.session")
        assert logger.name == "thermal_printer.printer.session"

    def test_get_logger_with_main(self) -> None:
        """Проверить get_logger с модулем __main__."""
        assert thermal_printer.get_logger("__main__").name == "thermal_printer.main"

    def test_get_logger_with_dots(self) -> None:
        """Проверить get_logger с именем модуля с точками."""
        logger = thermal_printer.get_logger("scripts.print_demo")
        assert logger.name == "thermal_printer.scripts.print_demo"

    def test_logger_is_configured(self) -> None:
        """Проверить, что корневой логгер пакета имеет обработчики."""
        root_logger = logging.getLogger("thermal_printer")
        assert len(root_logger.handlers) >= 1
        assert root_logger.propagate is False

    def test_log_level_from_environment(self) -> None:
        """Проверить, что уровень логирования задаётся переменной окружения."""
        root_logger = logging.getLogger("thermal_printer")
        saved_handlers = root_logger.handlers[:]
        saved_level = root_logger.level
        try:
            for handler in saved_handlers:
                root_logger.removeHandler(handler)
            with mock.patch.dict("os.environ", {"THERMAL_PRINTER_LOG_LEVEL": "DEBUG"}):
                thermal_printer._setup_logging()
            assert root_logger.level == logging.DEBUG
        finally:
            for handler in root_logger.handlers[:]:
                root_logger.removeHandler(handler)
                handler.close()
            for handler in saved_handlers:
                root_logger.addHandler(handler)
            root_logger.setLevel(saved_level)

    def test_log_dir_from_environment(self, tmp_path: Path) -> None:
        """Проверить, что каталог журнала задаётся переменной окружения."""
        root_logger = logging.getLogger("thermal_printer")
        saved_handlers = root_logger.handlers[:]
        saved_level = root_logger.level
        try:
            for handler in saved_handlers:
                root_logger.removeHandler(handler)
            with mock.patch.dict("os.environ", {"THERMAL_PRINTER_LOG_DIR": str(tmp_path / "журнал")}):
                thermal_printer._setup_logging()
            files = [
                Path(h.baseFilename)
                for h in root_logger.handlers
                if isinstance(h, logging.handlers.RotatingFileHandler)
            ]
            assert files == [tmp_path / "журнал" / "thermal_printer.log"]
        finally:
            for handler in root_logger.handlers[:]:
                root_logger.removeHandler(handler)
                handler.close()
            for handler in saved_handlers:
                root_logger.addHandler(handler)
            root_logger.setLevel(saved_level)

    @pytest.mark.parametrize(
        "name, expected",
        [
            ("debug", logging.DEBUG),
            (" WARNING ", logging.WARNING),
            ("VERBOSE", logging.INFO),
            (None, logging.INFO),
        ],
    )
    def test_resolve_level(self, name, expected: int) -> None:
        """Проверить разбор имени уровня логирования."""
        assert thermal_printer._resolve_level(name) == expected

    def test_setup_logging_idempotent(self) -> None:
        """Проверить, что повторная настройка не добавляет обработчики."""
        root_logger = logging.getLogger("thermal_printer")
        before = len(root_logger.handlers)
        thermal_printer._setup_logging()
        assert len(root_logger.handlers) == before


class TestConfiguration:
    """Тестирование управления конфигурацией."""

    def test_load_config_defaults(self, tmp_path: Path) -> None:
        """Проверить, что без файла возвращаются все ключи по умолчанию."""
        config = thermal_printer.load_config(tmp_path / "nonexistent.json")

        assert config["port"] == "/dev/serial0"
        assert config["baudrate"] == 19200
        assert config["text_encoding"] == "IBM850"
        assert config["heating_time"] == 80
        assert config["picture_line_delay_ms"] == 20

    def test_load_config_from_file(self, tmp_path: Path) -> None:
        """Проверить, что пользовательские значения сливаются с настройками по умолчанию."""
        config_path = tmp_path / "config.json"
        config_path.write_text(
            json.dumps({"port": "/dev/ttyUSB0", "heating_time": 120}), encoding="utf-8"
        )

        config = thermal_printer.load_config(config_path)

        assert config["port"] == "/dev/ttyUSB0"
        assert config["heating_time"] == 120
        assert config["baudrate"] == 19200

    def test_load_config_accepts_str(self, tmp_path: Path) -> None:
        """Проверить, что путь можно передать строкой."""
        config_path = tmp_path / "config.json"
        config_path.write_text(json.dumps({"baudrate": 9600}), encoding="utf-8")
        assert thermal_printer.load_config(str(config_path))["baudrate"] == 9600

    def test_load_config_invalid_json(self, tmp_path: Path) -> None:
        """Проверить, что недопустимый JSON даёт конфигурацию по умолчанию."""
        config_path = tmp_path / "config.json"
        config_path.write_text("{invalid json", encoding="utf-8")

        config = thermal_printer.load_config(config_path)

        assert config == thermal_printer._DEFAULT_CONFIG

    def test_load_config_non_dict_json(self, tmp_path: Path) -> None:
        """Проверить, что JSON-список вместо объекта игнорируется."""
        config_path = tmp_path / "config.json"
        config_path.write_text(json.dumps(["not", "a", "dict"]), encoding="utf-8")

        config = thermal_printer.load_config(config_path)

        assert config == thermal_printer._DEFAULT_CONFIG

    def test_log_level_applied(self, tmp_path: Path) -> None:
        """Проверить, что log_level из файла меняет уровень логгера пакета."""
        root_logger = logging.getLogger("thermal_printer")
        saved_level = root_logger.level
        config_path = tmp_path / "config.json"
        config_path.write_text(json.dumps({"log_level": "ERROR"}), encoding="utf-8")
        try:
            thermal_printer.load_config(config_path)
            assert root_logger.level == logging.ERROR
        finally:
            root_logger.setLevel(saved_level)

    def test_defaults_not_mutated(self, tmp_path: Path) -> None:
        """Проверить, что загрузка не изменяет словарь по умолчанию."""
        config_path = tmp_path / "config.json"
        config_path.write_text(json.dumps({"port": "COM3"}), encoding="utf-8")

        thermal_printer.load_config(config_path)

        assert thermal_printer._DEFAULT_CONFIG["port"] == "/dev/serial0"

    def test_defaults_build_printer_config(self, tmp_path: Path) -> None:
        """Проверить, что конфигурация по умолчанию превращается в PrinterConfig."""
        config = thermal_printer.load_config(tmp_path / "missing.json")
        printer_config = thermal_printer.PrinterConfig.from_mapping(config)
        assert printer_config == thermal_printer.PrinterConfig()


class TestDependencyCheck:
    """Тестирование проверки зависимостей."""

    def test_check_dependencies_keys(self) -> None:
        """Проверить, что проверяются ожидаемые пакеты."""
        deps = thermal_printer.check_dependencies()
        assert set(deps) == {"pillow", "pyserial"}
        assert all(isinstance(v, bool) for v in deps.values())

    def test_installed_dependencies(self) -> None:
        """Проверить, что обязательные зависимости установлены в тестовом окружении."""
        deps = thermal_printer.check_dependencies()
        assert deps["pillow"] and deps["pyserial"]

    def test_missing_dependency(self) -> None:
        """Проверить, что отсутствующий пакет отмечается как недоступный."""
        with mock.patch.dict(sys.modules, {"serial": None}):
            deps = thermal_printer.check_dependencies()
        assert deps["pyserial"] is False

    def test_import_without_optional_packages(self, tmp_path: Path) -> None:
        """Проверить, что пакет импортируется без Pillow и pyserial, а проверка это сообщает."""
        code = (
            "import sys\n"
            "sys.modules['PIL'] = None\n"
            "sys.modules['serial'] = None\n"
            "import thermal_printer\n"
            "print(sorted(thermal_printer.check_dependencies().items()))\n"
        )
        result = subprocess.run(
            [sys.executable, "-c", code],
            capture_output=True,
            text=True,
            cwd=Path(__file__).resolve().parents[2],
            env={**os.environ, "THERMAL_PRINTER_LOG_DIR": str(tmp_path)},
            check=False,
        )
        assert result.returncode == 0, result.stderr
        assert "('pillow', False), ('pyserial', False)" in result.stdout

    def test_serial_transport_loaded_on_access(self) -> None:
        """Проверить ленивый импорт SerialTransport."""
        from thermal_printer.transports.serial_port import SerialTransport

        assert thermal_printer.SerialTransport is SerialTransport
        assert thermal_printer.transports.SerialTransport is SerialTransport

    def test_unknown_attribute(self) -> None:
        """Проверить, что неизвестный атрибут даёт AttributeError."""
        with pytest.raises(AttributeError):
            thermal_printer.NoSuchTransport  # noqa: B018


class TestPlatformChecks:
    """Тестирование проверок совместимости платформы."""

    def test_python_version_requirement(self) -> None:
        """Проверить, что версия Python соответствует требованиям."""
        assert sys.version_info >= (3, 11)
