from __future__ import annotations

from pathlib import Path
from typing import Any, ClassVar, Literal

import yaml
from pydantic import Field
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)

from ..utils.log import log
from ..utils.render import ValueRenderer

DEFAULT_CONFIG_PATH = Path("auditdiff.yaml")


class DiffSettings(BaseSettings):
    delimiter: str = Field(default=" -> ", min_length=1)
    empty_label: str = Field(default="N/A")
    date_format: str = Field(default="%c", min_length=1)
    checked_label: str = Field(default="Checked")
    unchecked_label: str = Field(default="Unchecked")
    on_render_error: Literal["skip", "raise"] = "skip"

    config_path: ClassVar[Path] = DEFAULT_CONFIG_PATH

    model_config = SettingsConfigDict(
        env_prefix="AUDITDIFF_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    class YamlConfigSource(PydanticBaseSettingsSource):
        yaml_path: Path
        _data: dict[str, Any] | None

        def __init__(self, settings_cls: type[BaseSettings], yaml_path: Path) -> None:
            super().__init__(settings_cls)
            self.yaml_path = yaml_path
            self._data = None

        def _read_yaml(self) -> dict[str, Any]:
            """Reads the YAML file once; a missing file means no overrides."""
            if self._data is not None:
                return self._data

            self._data = {}
            if self.yaml_path.exists():
                try:
                    with open(self.yaml_path, encoding="utf-8") as f:
                        loaded = yaml.safe_load(f)
                    if isinstance(loaded, dict):
                        self._data = loaded
                    else:
                        log(f"⚠️ {self.yaml_path} не содержит словаря настроек, игнорирую")
                except (OSError, yaml.YAMLError) as e:
                    log(f"⚠️ Ошибка при чтении {self.yaml_path}: {e}")
            return self._data

        def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:
            data = self._read_yaml()
            if field_name in data:
                return data[field_name], field_name, True
            return None, field_name, False

        def prepare_field_value(self, field_name: str, field: Any, value: Any, value_is_complex: bool) -> Any:
            return value

        def __call__(self) -> dict[str, Any]:
            return self._read_yaml()

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        return (
            init_settings,
            env_settings,
            dotenv_settings,
            cls.YamlConfigSource(settings_cls, cls.config_path),
            file_secret_settings,
        )

    @classmethod
    def load(cls, config_path: Path | str | None = None, **overrides: Any) -> DiffSettings:
        """
        Factory for correct instantiation.
        An explicitly given YAML file takes precedence over the environment.
        """
        values: dict[str, Any] = {}
        if config_path is not None:
            values.update(cls.YamlConfigSource(cls, Path(config_path))())
        values.update(overrides)
        return cls(**values)

    def make_renderer(self) -> ValueRenderer:
        return ValueRenderer(
            empty_label=self.empty_label,
            date_format=self.date_format,
            checked_label=self.checked_label,
            unchecked_label=self.unchecked_label,
        )
