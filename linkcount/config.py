"""
Модуль для загрузки и валидации конфигурации краулера linkcount.
Используется Pydantic для описания схемы и проверки данных.
"""
from __future__ import annotations

import errno
import json
import os
from pathlib import Path
from typing import Any, List, Optional, Union

import yaml
from pydantic import BaseModel, ConfigDict, Field, field_validator


class CrawlerConfig(BaseModel):
    """Конфигурация для одного запуска обхода."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    seeds: List[str] = Field(default_factory=list, description="Стартовые URL (если не заданы в CLI).")
    top_n: int = Field(10, ge=1, description="Сколько адресов выводить в итоговом рейтинге.")
    timeout: float = Field(5.0, gt=0, description="Таймаут на установку соединения (секунд).")
    read_timeout: Optional[float] = Field(30.0, gt=0, description="Таймаут чтения ответа (секунд).")
    concurrency: int = Field(16, ge=1, description="Число одновременных загрузок.")
    max_pages: Optional[int] = Field(None, ge=1, description="Жесткий лимит по числу загружаемых страниц.")
    max_depth: Optional[int] = Field(None, ge=0, description="Максимальная глубина обхода ссылок.")
    keep_links: bool = Field(False, description="Сохранять граф ссылок для отчёта.")

    @field_validator("seeds", mode="before")
    def _single_seed_to_list(cls, v: Any) -> Any:
        if isinstance(v, str):
            return [v]
        return v


def _read_yaml(path: Path) -> dict[str, Any]:
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as exc:
        raise ValueError(f"Неправильный YAML в {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise TypeError(f"Верхний уровень YAML должен быть mapping, получено {type(data).__name__}")
    return data


def _read_json(path: Path) -> dict[str, Any]:
    try:
        data = json.loads(path.read_text(encoding="utf-8")) or {}
    except json.JSONDecodeError as exc:
        raise ValueError(f"Неправильный JSON в {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise TypeError(f"Верхний уровень JSON должен быть mapping, получено {type(data).__name__}")
    return data


def load_config(path: Union[str, Path, None]) -> CrawlerConfig:
    """
    Читает YAML или JSON и возвращает проверенный объект CrawlerConfig.
    Без пути возвращает конфигурацию по умолчанию; отсутствующий файл - FileNotFoundError.
    """
    if path is None:
        return CrawlerConfig()

    path_obj = Path(path).expanduser().resolve()
    if not path_obj.is_file():
        raise FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), str(path_obj))

    suffix = path_obj.suffix.lower()
    if suffix in (".yaml", ".yml"):
        data = _read_yaml(path_obj)
    elif suffix == ".json":
        data = _read_json(path_obj)
    else:
        raise ValueError(f"Неподдерживаемый формат конфига: {suffix}")

    return CrawlerConfig(**data)


def apply_overrides(config: CrawlerConfig, **overrides: Any) -> CrawlerConfig:
    """Возвращает копию config с переопределёнными полями; значения None игнорируются."""
    update = {k: v for k, v in overrides.items() if v is not None}
    if not update:
        return config
    # model_copy не валидирует update, поэтому пересобираем модель
    return CrawlerConfig(**{**config.model_dump(), **update})


__all__ = ["CrawlerConfig", "load_config", "apply_overrides"]
