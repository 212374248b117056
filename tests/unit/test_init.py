"""
Модульные тесты для thermal_label/__init__.py
Тестирует метаданные пакета, логирование, конфигурацию и публичный API.
"""

import json
import logging
import re
import sys
from pathlib import Path
from unittest import mock

import pytest

import thermal_label


class TestVersionMetadata:
    """Тестирование метаданных версии и констант."""

    def test_version_format(self) -> None:
        """Проверить, что __version__ следует семантическому версионированию."""
        assert re.match(r"^\d+\.\d+\.\d+$", thermal_label.__version__)

    def test_version_components(self) -> None:
        """Проверить, что компоненты версии соответствуют __version__."""
        expected = (
            f"{thermal_label.VERSION_MAJOR}."
            f"{thermal_label.VERSION_MINOR}."
            f"{thermal_label.VERSION_PATCH}"
        )
        assert thermal_label.__version__ == expected

    @pytest.mark.parametrize(
        "name", ["__author__", "__description__", "__license__", "__python_requires__"]
    )
    def test_metadata_attributes(self, name: str) -> None:
        value = getattr(thermal_label, name)
        assert isinstance(value, str) and value, f"{name} должен быть непустой строкой"


class TestPublicAPI:
    """Тестирование экспортов публичного API."""

    def test_all_exports_exist(self) -> None:
        for name in thermal_label.__all__:
            assert hasattr(thermal_label, name), f"Имя '{name}' из __all__ не существует в модуле"

    def test_no_duplicate_exports(self) -> None:
        assert len(thermal_label.__all__) == len(set(thermal_label.__all__))

    def test_generation_entry_points_exported(self) -> None:
        for name in ("generate", "generate_batch", "get_emitter", "substitute", "ThermalPrintConfig"):
            assert name in thermal_label.__all__

    def test_docstring_example(self) -> None:
        """Пример из документации модуля работает."""
        template = thermal_label.LabelTemplate(
            id="price-tag",
            elements=[thermal_label.TextElement(id="t1", x=8, y=8, content="Preço: ${preco}")],
        )
        config = thermal_label.ThermalPrintConfig(
            language="ZPL", dpi=203, label_width=40, label_height=30
        )
        data = thermal_label.generate(template, config, product={"preco": 19.9})
        assert data.splitlines()[0] == b"^XA"


class TestLogging:
    """Тестирование конфигурации логирования."""

    @pytest.mark.parametrize(
        "module_name, expected",
        [
            ("test_module", "thermal_label.test_module"),
            ("thermal_label.printer.zpl", "thermal_label.printer.zpl"),
            ("__main__", "thermal_label.main"),
            ("printer.emitters.epl", "thermal_label.printer.emitters.epl"),
            ("", "thermal_label"),
        ],
    )
    def test_get_logger_name(self, module_name: str, expected: str) -> None:
        logger = thermal_label.get_logger(module_name)
        assert isinstance(logger, logging.Logger)
        assert logger.name == expected

    def test_package_logger_is_configured(self) -> None:
        package_logger = logging.getLogger("thermal_label")
        assert len(package_logger.handlers) >= 1
        assert package_logger.propagate is False

    def test_setup_logging_is_idempotent(self) -> None:
        package_logger = logging.getLogger("thermal_label")
        before = list(package_logger.handlers)
        thermal_label._setup_logging()
        assert package_logger.handlers == before

    def test_module_loggers_share_package_handlers(self) -> None:
        """Логгеры модулей наследуют обработчики пакета через иерархию."""
        from thermal_label.printer.emitters import zpl

        assert zpl.logger.name == "thermal_label.printer.emitters.zpl"
        assert zpl.logger.parent is not None


class TestConfiguration:
    """Тестирование управления конфигурацией."""

    def test_load_config_defaults(self, tmp_path: Path) -> None:
        config = thermal_label.load_config(tmp_path / "missing.json")
        assert config == {
            "default_language": "ZPL",
            "default_dpi": 203,
            "default_copies": 1,
            "gap_mm": 2.0,
            "encoding": "cp850",
            "log_level": "INFO",
        }

    def test_load_config_from_file(self, tmp_path: Path) -> None:
        config_path = tmp_path / "thermal_label.json"
        config_path.write_text(
            json.dumps({"default_language": "TSPL", "default_dpi": 300, "custom_key": 1}),
            encoding="utf-8",
        )
        config = thermal_label.load_config(config_path)
        assert config["default_language"] == "TSPL"
        assert config["default_dpi"] == 300
        assert config["custom_key"] == 1
        # Остальные ключи по умолчанию сохраняются
        assert config["encoding"] == "cp850"

    def test_load_config_invalid_json(self, tmp_path: Path) -> None:
        config_path = tmp_path / "invalid.json"
        config_path.write_text("{invalid json content", encoding="utf-8")
        with mock.patch.object(logging.getLogger("thermal_label"), "warning") as warning:
            config = thermal_label.load_config(config_path)
        warning.assert_called_once()
        assert config["default_language"] == "ZPL"

    def test_load_config_non_dict_json(self, tmp_path: Path) -> None:
        config_path = tmp_path / "list.json"
        config_path.write_text(json.dumps(["not", "a", "dict"]), encoding="utf-8")
        with mock.patch.object(logging.getLogger("thermal_label"), "warning") as warning:
            config = thermal_label.load_config(config_path)
        warning.assert_called_once()
        assert config["default_dpi"] == 203

    def test_load_config_does_not_share_defaults(self, tmp_path: Path) -> None:
        first = thermal_label.load_config(tmp_path / "missing.json")
        first["default_dpi"] = 600
        second = thermal_label.load_config(tmp_path / "missing.json")
        assert second["default_dpi"] == 203


class TestDependencyCheck:
    """Тестирование проверки зависимостей."""

    def test_check_dependencies_keys(self) -> None:
        deps = thermal_label.check_dependencies()
        assert set(deps) == {"pillow", "qrcode"}
        assert all(isinstance(v, bool) for v in deps.values())

    def test_check_dependencies_installed(self) -> None:
        assert thermal_label.check_dependencies() == {"pillow": True, "qrcode": True}


class TestPlatformChecks:
    def test_python_version_requirement(self) -> None:
        assert sys.version_info >= (3, 11)


# Запускать тесты командой: pytest tests/unit/test_init.py -v
