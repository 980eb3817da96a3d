from __future__ import annotations

from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


PLUGIN_NAME = "shadcn-registry"
REGISTRY_SCHEMA_URL = "https://shadcn-vue.com/schema/registry.json"
REGISTRY_ITEM_SCHEMA_URL = "https://shadcn-vue.com/schema/registry-item.json"

# Build-tool-private modules (Rollup/Vite convention)
VIRTUAL_MODULE_PREFIX = "\0"
QUERY_DELIMITER = "?"


class ItemCategory(str, Enum):
	SHADCN_PRIMITIVE = "registry:shadcn"
	COMPONENT = "registry:component"
	HOOK = "registry:hook"
	LIB = "registry:lib"
	INTERNAL = "registry:internal"
	EXTERNAL = "external"


PUBLISHABLE_CATEGORIES = frozenset({ItemCategory.COMPONENT, ItemCategory.HOOK, ItemCategory.LIB})


def is_virtual_module(module_id: str) -> bool:
	return module_id.startswith(VIRTUAL_MODULE_PREFIX)


def has_query(module_id: str) -> bool:
	return QUERY_DELIMITER in module_id


class ItemMeta(BaseModel):
	model_config = ConfigDict(frozen=True)

	category: ItemCategory
	name: str


class ResolvedId(BaseModel):
	id: str
	external: bool = False


class ModuleInfo(BaseModel):
	"""Per-module facts as reported by the bundler (Rollup field names)."""

	model_config = ConfigDict(populate_by_name=True)

	id: str
	imported_ids: List[str] = Field(default_factory=list, alias="importedIds")
	dynamically_imported_ids: List[str] = Field(default_factory=list, alias="dynamicallyImportedIds")
	is_external: bool = Field(default=False, alias="isExternal")
	meta: Dict[str, Any] = Field(default_factory=dict)

	@property
	def all_imported_ids(self) -> List[str]:
		return [*self.imported_ids, *self.dynamically_imported_ids]

	@property
	def source_code(self) -> Optional[str]:
		return (self.meta.get(PLUGIN_NAME) or {}).get("sourceCode")


class GraphSnapshot(BaseModel):
	modules: List[ModuleInfo] = []


class ModuleRecord(BaseModel):
	model_config = ConfigDict(frozen=True)

	id: str
	meta: ItemMeta
	modules: List[str] = []
	code: Optional[str] = None

	@property
	def category(self) -> ItemCategory:
		return self.meta.category

	@property
	def name(self) -> str:
		return self.meta.name


class RegistryFile(BaseModel):
	type: str = "registry:file"
	path: str
	target: str
	content: Optional[str] = None


class RegistryItem(BaseModel):
	model_config = ConfigDict(populate_by_name=True)

	name: str
	type: ItemCategory
	files: List[RegistryFile] = []
	dependencies: List[str] = []
	registry_dependencies: List[str] = Field(default_factory=list, alias="registryDependencies")

	def to_document(self) -> Dict[str, Any]:
		return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class EntryPattern(BaseModel):
	entries: List[str] = []
	include: List[str] = []
	ignore: List[str] = []


class SourceImports(BaseModel):
	static: List[str] = []
	dynamic: List[str] = []
