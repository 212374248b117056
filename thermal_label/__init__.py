"""
Пакет Thermal Label
===================

Генерация командных потоков для термопринтеров этикеток из шаблона,
нарисованного в визуальном редакторе (координаты в пикселях 96 DPI).

Этот пакет предоставляет:
    - Три языка принтеров: ZPL (Zebra), EPL (Eltron), TSPL (TSC)
    - Пересчёт геометрии в точки для любого разрешения (203/300/600 DPI)
    - Подстановку данных товара (${nome}, $preco, ...) в текст и штрихкоды
    - Штрихкоды, QR-коды, монохромные изображения, рамки и линии
    - Пакетную печать: несколько товаров с количеством в одном задании

Пример базового использования:
    >>> from thermal_label import LabelTemplate, ThermalPrintConfig, TextElement, generate
    >>>
    >>> template = LabelTemplate(
    ...     id="price-tag",
    ...     elements=[TextElement(id="t1", x=8, y=8, content="Preço: ${preco}")],
    ... )
    >>> config = ThermalPrintConfig(language="ZPL", dpi=203, label_width=40, label_height=30)
    >>> data = generate(template, config, product={"preco": 19.9})
    >>> data.splitlines()[0]
    b'^XA'

Переменные окружения:
    THERMAL_LABEL_LOG_LEVEL: DEBUG, INFO, WARNING, ERROR, CRITICAL (по умолчанию INFO)
    THERMAL_LABEL_LOG_DIR: каталог для ротируемого файла журнала (не задан - без файла)
"""

import json
import logging
import logging.handlers
import os
import sys
from pathlib import Path
from typing import Any, Dict, Optional

# =============================================================================
# МЕТАДАННЫЕ ВЕРСИИ
# =============================================================================

__version__ = "0.1.0"
__author__ = "Thermal Label Development Team"
__description__ = "ZPL / EPL / TSPL command generation for thermal label printers"
__license__ = "MIT"
__python_requires__ = ">=3.11"

VERSION_MAJOR = 0
VERSION_MINOR = 1
VERSION_PATCH = 0

_PACKAGE = "thermal_label"

if sys.version_info < (3, 11):
    raise RuntimeError(
        f"thermal_label требует Python 3.11 или выше. "
        f"Текущая версия: {sys.version_info.major}."
        f"{sys.version_info.minor}.{sys.version_info.micro}"
    )

# =============================================================================
# КОНФИГУРАЦИЯ ЛОГИРОВАНИЯ
# =============================================================================


def _setup_logging() -> None:
    """
    Инициализировать логирование пакета.

    - Консольный обработчик (stderr) для WARNING и выше
    - Ротирующий файловый обработчик (10 МБ x 5), только если задан
      THERMAL_LABEL_LOG_DIR
    - Уровень из THERMAL_LABEL_LOG_LEVEL, по умолчанию INFO

    Идемпотентна: повторные вызовы не добавляют обработчиков.
    """
    log_level_str = os.environ.get("THERMAL_LABEL_LOG_LEVEL", "INFO").upper()
    log_level_map = {
        "DEBUG": logging.DEBUG,
        "INFO": logging.INFO,
        "WARNING": logging.WARNING,
        "ERROR": logging.ERROR,
        "CRITICAL": logging.CRITICAL,
    }
    log_level = log_level_map.get(log_level_str, logging.INFO)

    package_logger = logging.getLogger(_PACKAGE)
    if package_logger.handlers:
        return

    package_logger.setLevel(log_level)

    formatter = logging.Formatter(
        fmt="[%(asctime)s] %(levelname)-8s [%(name)s.%(funcName)s:%(lineno)d] %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(logging.WARNING)
    console_handler.setFormatter(formatter)
    package_logger.addHandler(console_handler)

    log_dir_env = os.environ.get("THERMAL_LABEL_LOG_DIR")
    if log_dir_env:
        try:
            log_dir = Path(log_dir_env)
            log_dir.mkdir(parents=True, exist_ok=True)
            file_handler = logging.handlers.RotatingFileHandler(
                filename=log_dir / "thermal_label.log",
                maxBytes=10 * 1024 * 1024,  # 10 МБ
                backupCount=5,
                encoding="utf-8",
            )
            file_handler.setLevel(log_level)
            file_handler.setFormatter(formatter)
            package_logger.addHandler(file_handler)
        except OSError as e:
            package_logger.warning(
                "Не удалось инициализировать файловое логирование: %s. Используется только консоль.",
                e,
            )

    package_logger.propagate = False


def get_logger(module_name: str) -> logging.Logger:
    """
    Получить логгер в пространстве имён пакета ('thermal_label.<module_name>').

    >>> get_logger("printer.zpl").name
    'thermal_label.printer.zpl'
    >>> get_logger("__main__").name
    'thermal_label.main'
    """
    if module_name.startswith(_PACKAGE):
        full_name = module_name
    elif module_name == "__main__":
        full_name = f"{_PACKAGE}.main"
    else:
        clean_name = module_name.lstrip(".")
        full_name = f"{_PACKAGE}.{clean_name}" if clean_name else _PACKAGE
    return logging.getLogger(full_name)


_setup_logging()

# =============================================================================
# УПРАВЛЕНИЕ КОНФИГУРАЦИЕЙ
# =============================================================================

CONFIG_FILE_NAME = "thermal_label.json"

_DEFAULT_CONFIG: Dict[str, Any] = {
    "default_language": "ZPL",
    "default_dpi": 203,
    "default_copies": 1,
    "gap_mm": 2.0,
    "encoding": "cp850",
    "log_level": "INFO",
}


def load_config(config_path: Optional[Path] = None) -> Dict[str, Any]:
    """
    Загрузить настройки из thermal_label.json поверх значений по умолчанию.

    Отсутствующий файл, недопустимый JSON или не-объект в файле не являются
    ошибкой: пишется предупреждение в лог и возвращаются значения по умолчанию.

    Ключи:
        - default_language: str - ZPL, EPL или TSPL
        - default_dpi: int - разрешение принтера
        - default_copies: int - количество копий
        - gap_mm: float - зазор между этикетками
        - encoding: str - кодовая страница данных полей
        - log_level: str - уровень логирования
    """
    logger = get_logger(__name__)

    if config_path is None:
        config_path = Path(CONFIG_FILE_NAME)
    config_path = Path(config_path)

    config = _DEFAULT_CONFIG.copy()

    if not config_path.exists():
        logger.info("Файл конфигурации %s не найден. Используется конфигурация по умолчанию.", config_path)
        return config

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            user_config = json.load(f)
        if not isinstance(user_config, dict):
            raise ValueError(
                f"Файл конфигурации должен содержать JSON-объект, получен {type(user_config).__name__}"
            )
        config.update(user_config)
        logger.info("Конфигурация загружена из %s", config_path)
        logger.debug("Конфигурация: %s", config)
    except json.JSONDecodeError as e:
        logger.warning(
            "Не удалось разобрать %s: недопустимый JSON в строке %d, столбце %d. "
            "Используется конфигурация по умолчанию.",
            config_path,
            e.lineno,
            e.colno,
        )
    except OSError as e:
        logger.warning("Не удалось прочитать %s: %s. Используется конфигурация по умолчанию.", config_path, e)
    except ValueError as e:
        logger.warning("Недопустимый формат конфигурации: %s. Используется конфигурация по умолчанию.", e)

    return config


def check_dependencies() -> Dict[str, bool]:
    """
    Проверить наличие сторонних библиотек, не вызывая исключений.

        - pillow: монохромные изображения и растр QR для EPL
        - qrcode: размер QR-символа (число модулей)
    """
    dependencies: Dict[str, bool] = {}

    try:
        import PIL  # noqa: F401

        dependencies["pillow"] = True
    except ImportError:
        dependencies["pillow"] = False

    try:
        import qrcode  # noqa: F401

        dependencies["qrcode"] = True
    except ImportError:
        dependencies["qrcode"] = False

    return dependencies


# =============================================================================
# ПУБЛИЧНЫЙ API
# =============================================================================
# Импорты после утилит: логирование должно быть настроено первым.

from .errors import InvalidConfigError, ThermalPrintError, UnsupportedElementError  # noqa: E402
from .model import (  # noqa: E402
    BarcodeElement,
    BarcodeFormat,
    ErrorCorrectionLevel,
    ImageElement,
    LabelConfig,
    LabelElement,
    LabelTemplate,
    LabelUnit,
    LineElement,
    LineOrientation,
    MonochromeBitmap,
    PrinterLanguage,
    QRCodeElement,
    RectangleElement,
    TextAlign,
    TextElement,
    ThermalPrintConfig,
    element_from_dict,
)
from .printer import (  # noqa: E402
    command_file_name,
    estimate_width,
    generate,
    generate_batch,
    get_emitter,
    px_to_dots,
    to_dots,
)
from .variables import SubstitutionOptions, substitute  # noqa: E402

__all__ = [
    # Метаданные версии
    "__version__",
    "__author__",
    "__description__",
    "__license__",
    "__python_requires__",
    "VERSION_MAJOR",
    "VERSION_MINOR",
    "VERSION_PATCH",
    # Утилиты
    "get_logger",
    "load_config",
    "check_dependencies",
    # Ошибки
    "ThermalPrintError",
    "InvalidConfigError",
    "UnsupportedElementError",
    # Модель
    "LabelTemplate",
    "LabelConfig",
    "LabelElement",
    "TextElement",
    "BarcodeElement",
    "QRCodeElement",
    "ImageElement",
    "RectangleElement",
    "LineElement",
    "element_from_dict",
    "MonochromeBitmap",
    "ThermalPrintConfig",
    "PrinterLanguage",
    "BarcodeFormat",
    "TextAlign",
    "LineOrientation",
    "ErrorCorrectionLevel",
    "LabelUnit",
    # Генерация
    "generate",
    "generate_batch",
    "get_emitter",
    "command_file_name",
    "substitute",
    "SubstitutionOptions",
    "to_dots",
    "px_to_dots",
    "estimate_width",
]
