"""
Configuration: the project's ``components.json`` and the generator settings.
"""

from __future__ import annotations

import json
import os
from functools import lru_cache
from typing import Dict

from pydantic import BaseModel, Field, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from .errors import ConfigError


COMPONENTS_CONFIG_FILENAME = "components.json"


class Aliases(BaseModel):
	ui: str
	components: str
	composables: str
	utils: str
	lib: str


class ComponentsConfig(BaseModel):
	aliases: Aliases


class RegistrySettings(BaseSettings):
	"""Generator settings loaded from ``SHADCN_REGISTRY_*`` environment variables."""

	model_config = SettingsConfigDict(
		env_prefix="SHADCN_REGISTRY_",
		env_file=".env",
		env_file_encoding="utf-8",
		extra="ignore",
	)

	name: str = Field(default="some name")
	homepage: str = Field(default="some homepage")
	src_dir: str = Field(default="src")
	output_dir: str = Field(default="dist")
	path_aliases: Dict[str, str] = Field(default={"@": "src", "~": "src"})
	strict_names: bool = Field(default=False)

	# Logging
	log_level: str = Field(default="INFO")
	log_format: str = Field(default="console")


@lru_cache()
def get_settings() -> RegistrySettings:
	return RegistrySettings()


def load_components_config(root: str) -> ComponentsConfig:
	path = os.path.join(root, COMPONENTS_CONFIG_FILENAME)
	try:
		with open(path, "r", encoding="utf-8") as fh:
			raw = json.load(fh)
	except FileNotFoundError as e:
		raise ConfigError(f"Missing {COMPONENTS_CONFIG_FILENAME} in {root}") from e
	except (OSError, json.JSONDecodeError) as e:
		raise ConfigError(f"Cannot read {path}: {e}") from e

	try:
		return ComponentsConfig.model_validate(raw)
	except ValidationError as e:
		raise ConfigError(f"Invalid {path}: {e}") from e
