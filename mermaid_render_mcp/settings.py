from __future__ import annotations

from functools import lru_cache
from typing import ClassVar

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config: ClassVar[SettingsConfigDict] = SettingsConfigDict(env_prefix="MERMAID_MCP_", env_nested_delimiter="__")

    node_binary: str = Field(default="node", description="Node.js executable used to run the rendering engine")
    engine_module: str = Field(default="beautiful-mermaid", description="Module specifier imported by the Node bridge")
    node_workdir: str | None = Field(default=None, description="Working directory for the Node bridge (where node_modules lives)")

    output_dir: str | None = Field(default=None, description="Scratch directory for SVGs rendered without an output_path")

    log_level: str = Field(default="INFO", description="Log level for the stderr log sink")


@lru_cache
def get_settings() -> Settings:
    return Settings()
