"""
Пакет Thermal Printer
=====================

Драйвер термопринтеров чеков ESC/POS (58 мм, 384 точки) с последовательным
интерфейсом.

Возможности пакета:
    - Кодирование команд ESC/POS с точностью до байта
    - Печать текста в кодовых страницах IBM437 и IBM850
    - Стили печати (жирный, инверсия, двойная высота/ширина)
    - Штрих-коды (UPC, EAN, Code39, Code128 и др.)
    - Растровая печать изображений шириной 384 точки
    - Параметры нагрева термоголовки
    - Последовательный транспорт на pyserial

Печать чека:
    >>> from thermal_printer import ThermalPrinter, SerialTransport, Alignment
    >>> with SerialTransport("/dev/serial0", baudrate=19200) as transport:
    ...     printer = ThermalPrinter(transport)
    ...     printer.set_alignment(Alignment.CENTER)
    ...     printer.write_line_big("ЧЕК")
    ...     printer.horizontal_rule(32)
    ...     printer.write_line("Café au lait   3.50")
    ...     printer.feed_lines(3)

Настройки из файла:
    >>> from thermal_printer import load_config, PrinterConfig
    >>> settings = load_config("printer.json")
    >>> config = PrinterConfig.from_mapping(settings)

Переменные окружения:
    THERMAL_PRINTER_LOG_LEVEL - уровень логирования (по умолчанию INFO)
    THERMAL_PRINTER_LOG_DIR   - каталог журнала (по умолчанию ./logs)
"""

import importlib
import json
import logging
import logging.handlers
import os
import sys
from pathlib import Path
from typing import Any, Dict, Optional, Union

# =============================================================================
# МЕТАДАННЫЕ
# =============================================================================

__version__ = "0.1.0"
__author__ = "Thermal Printer Development Team"
__description__ = "ESC/POS command encoder and serial driver for 58 mm thermal receipt printers"
__license__ = "MIT"
__python_requires__ = ">=3.11"

VERSION_MAJOR, VERSION_MINOR, VERSION_PATCH = (int(p) for p in __version__.split("."))

if sys.version_info < (3, 11):
    raise RuntimeError(
        "thermal_printer требует Python 3.11+, запущен "
        + ".".join(str(p) for p in sys.version_info[:3])
    )

# =============================================================================
# ЛОГИРОВАНИЕ
# =============================================================================

_ROOT_LOGGER_NAME = "thermal_printer"
_LOG_FORMAT = "[%(asctime)s] %(levelname)-8s [%(name)s.%(funcName)s:%(lineno)d] %(message)s"
_LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
_LOG_FILE_NAME = "thermal_printer.log"
_LOG_MAX_BYTES = 10 * 1024 * 1024
_LOG_BACKUP_COUNT = 5
_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def _resolve_level(name: Optional[str], default: int = logging.INFO) -> int:
    """Преобразовать имя уровня в число; неизвестные имена дают default."""
    if not name:
        return default
    name = str(name).strip().upper()
    if name not in _LOG_LEVELS:
        return default
    return logging.getLevelName(name)


def _setup_logging() -> None:
    """
    Настроить логгер пакета 'thermal_printer'.

    - stderr: WARNING и выше;
    - ротирующий файл <THERMAL_PRINTER_LOG_DIR>/thermal_printer.log
      (10 МБ × 5) на уровне THERMAL_PRINTER_LOG_LEVEL;
    - без передачи записей корневому логгеру.

    Если каталог журнала недоступен, остаётся только консоль.
    Повторный вызов ничего не меняет.
    """
    root_logger = logging.getLogger(_ROOT_LOGGER_NAME)
    if root_logger.handlers:
        return

    level = _resolve_level(os.environ.get("THERMAL_PRINTER_LOG_LEVEL"))
    root_logger.setLevel(level)
    formatter = logging.Formatter(fmt=_LOG_FORMAT, datefmt=_LOG_DATE_FORMAT)

    stderr_handler = logging.StreamHandler(sys.stderr)
    stderr_handler.setLevel(logging.WARNING)
    stderr_handler.setFormatter(formatter)
    root_logger.addHandler(stderr_handler)

    log_dir = Path(os.environ.get("THERMAL_PRINTER_LOG_DIR", "logs"))
    try:
        log_dir.mkdir(parents=True, exist_ok=True)
        file_handler = logging.handlers.RotatingFileHandler(
            filename=log_dir / _LOG_FILE_NAME,
            maxBytes=_LOG_MAX_BYTES,
            backupCount=_LOG_BACKUP_COUNT,
            encoding="utf-8",
        )
    except OSError as e:
        root_logger.warning("Журнал в %s недоступен (%s), пишем только в консоль", log_dir, e)
    else:
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)

    root_logger.propagate = False


def get_logger(module_name: str) -> logging.Logger:
    """
    Получить логгер в пространстве имён 'thermal_printer'.

    Аргументы:
        module_name: Обычно `__name__` вызывающего модуля.

    Пример:
        >>> get_logger("host_app").name
        'thermal_printer.host_app'
        >>> get_logger("__main__").name
        'thermal_printer.main'
    """
    if module_name.startswith(_ROOT_LOGGER_NAME):
        return logging.getLogger(module_name)
    if module_name == "__main__":
        suffix = "main"
    else:
        suffix = module_name.lstrip(".")
    return logging.getLogger(f"{_ROOT_LOGGER_NAME}.{suffix}")


# =============================================================================
# КОНФИГУРАЦИЯ
# =============================================================================

_DEFAULT_CONFIG: Dict[str, Any] = {
    "port": "/dev/serial0",
    "baudrate": 19200,
    "timeout": 2.0,
    "text_encoding": "IBM850",
    "max_printing_dots": 7,
    "heating_time": 80,
    "heating_interval": 2,
    "picture_line_delay_ms": 20,
    "text_line_delay_ms": 0,
    "encoding_errors": "strict",
    "raster_command": "GS_V_0",
    "log_level": "INFO",
}


def _read_config_file(path: Path) -> Dict[str, Any]:
    """
    Прочитать JSON-объект из файла.

    Исключения:
        OSError: Файл не читается.
        json.JSONDecodeError: Недопустимый JSON.
        ValueError: В файле не объект.
    """
    with path.open("r", encoding="utf-8") as f:
        data = json.load(f)
    if not isinstance(data, dict):
        raise ValueError(f"ожидался JSON-объект, а не {type(data).__name__}")
    return data


def load_config(config_path: Union[str, Path, None] = None) -> Dict[str, Any]:
    """
    Загрузить настройки принтера поверх значений по умолчанию.

    Ключи: port, baudrate, timeout (транспорт); text_encoding,
    max_printing_dots, heating_time, heating_interval,
    picture_line_delay_ms, text_line_delay_ms, encoding_errors,
    raster_command (PrinterConfig); log_level (уровень логгера пакета,
    применяется сразу).

    Отсутствующий, нечитаемый или испорченный файл не является ошибкой:
    в журнал пишется предупреждение и возвращаются значения по умолчанию.

    Аргументы:
        config_path: Путь к JSON-файлу; по умолчанию ./config.json.

    Возвращает:
        Новый словарь со всеми ключами по умолчанию.
    """
    logger = get_logger(__name__)
    path = Path(config_path) if config_path is not None else Path("config.json")
    config = dict(_DEFAULT_CONFIG)

    if not path.exists():
        logger.info("Файл настроек %s не найден, используются значения по умолчанию", path)
        return config

    try:
        user_config = _read_config_file(path)
    except json.JSONDecodeError as e:
        logger.warning(
            "%s: ошибка JSON в строке %d, столбце %d; настройки по умолчанию",
            path,
            e.lineno,
            e.colno,
        )
        return config
    except (OSError, ValueError) as e:
        logger.warning("%s не загружен: %s; настройки по умолчанию", path, e)
        return config

    config.update(user_config)
    if "log_level" in user_config:
        logging.getLogger(_ROOT_LOGGER_NAME).setLevel(_resolve_level(config["log_level"]))
    logger.info("Настройки загружены из %s", path)
    logger.debug("Настройки: %s", config)
    return config


# Пакет PyPI -> импортируемый модуль
_DEPENDENCIES: Dict[str, str] = {
    "pillow": "PIL",
    "pyserial": "serial",
}


def check_dependencies() -> Dict[str, bool]:
    """
    Проверить наличие внешних зависимостей (pillow, pyserial).

    Пакет импортируется и без них: Pillow нужен для загрузки изображений,
    pyserial - для SerialTransport.

    Возвращает:
        Имя пакета -> True, если модуль импортируется.
    """
    status: Dict[str, bool] = {}
    for package, module in _DEPENDENCIES.items():
        try:
            importlib.import_module(module)
        except ImportError:
            status[package] = False
        else:
            status[package] = True
    return status


# =============================================================================
# ПУБЛИЧНЫЙ API
# =============================================================================

# Импорты после утилит: логирование должно быть готово раньше подмодулей.
from thermal_printer.config import PrinterConfig  # noqa: E402
from thermal_printer.escpos.commands import (  # noqa: E402
    Alignment,
    BarcodeSpec,
    BarcodeType,
    PrintingStyle,
    RasterCommand,
    TextEncoding,
)
from thermal_printer.exceptions import (  # noqa: E402
    EncodingError,
    InvalidBarcodeSpecError,
    InvalidImageDimensionsError,
    ThermalPrinterError,
    TransportError,
)
from thermal_printer.model.raster import BrightnessGrid  # noqa: E402
from thermal_printer.printer.session import ThermalPrinter  # noqa: E402
from thermal_printer.protocols import RasterImage, Transport  # noqa: E402
from thermal_printer.transports import MemoryTransport  # noqa: E402


def __getattr__(name: str) -> Any:
    """SerialTransport импортируется при первом обращении (нужен pyserial)."""
    if name == "SerialTransport":
        from thermal_printer.transports.serial_port import SerialTransport

        return SerialTransport
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = [
    "__version__",
    "__author__",
    "__description__",
    "__license__",
    "__python_requires__",
    "VERSION_MAJOR",
    "VERSION_MINOR",
    "VERSION_PATCH",
    "get_logger",
    "load_config",
    "check_dependencies",
    "ThermalPrinter",
    "PrinterConfig",
    "Transport",
    "RasterImage",
    "SerialTransport",
    "MemoryTransport",
    "BrightnessGrid",
    "Alignment",
    "BarcodeSpec",
    "BarcodeType",
    "PrintingStyle",
    "RasterCommand",
    "TextEncoding",
    "ThermalPrinterError",
    "TransportError",
    "EncodingError",
    "InvalidImageDimensionsError",
    "InvalidBarcodeSpecError",
]

_setup_logging()
get_logger(__name__).debug("thermal_printer %s, Python %s", __version__, sys.version.split()[0])
