from __future__ import annotations

import json
import os
from typing import Any, Dict, List, Optional

import structlog

from .errors import RegistryNameCollisionError
from .model import PLUGIN_NAME, REGISTRY_ITEM_SCHEMA_URL, REGISTRY_SCHEMA_URL, RegistryItem


logger = structlog.get_logger(__name__)


class Registry:
	"""Insertion-ordered catalog of registry items keyed by name."""

	def __init__(self, name: str, homepage: str, strict_names: bool = False):
		self.name = name
		self.homepage = homepage
		self.strict_names = strict_names
		self._items: Dict[str, RegistryItem] = {}

	@property
	def items(self) -> List[RegistryItem]:
		return list(self._items.values())

	def get_item(self, name: str) -> Optional[RegistryItem]:
		return self._items.get(name)

	def add_item(self, item: RegistryItem) -> None:
		existing = self._items.get(item.name)
		if existing is not None:
			if self.strict_names:
				raise RegistryNameCollisionError(item.name, existing.type.value, item.type.value)
			logger.warning(
				"registry item replaced",
				name=item.name,
				replaced_type=existing.type.value,
				type=item.type.value,
			)
		self._items[item.name] = item

	def to_manifest(self) -> Dict[str, Any]:
		return {
			"$schema": REGISTRY_SCHEMA_URL,
			"name": self.name,
			"homepage": self.homepage,
			"items": [item.to_document() for item in self.items],
		}


def item_document(item: RegistryItem) -> Dict[str, Any]:
	return {"$schema": REGISTRY_ITEM_SCHEMA_URL, **item.to_document()}


def dump_document(document: Dict[str, Any]) -> str:
	return json.dumps(document, indent=2, ensure_ascii=False)


def write_registry(registry: Registry, output_dir: str) -> List[str]:
	"""Write ``index.json`` plus one document per item under ``<output_dir>/shadcn-registry``."""
	registry_dir = os.path.join(output_dir, PLUGIN_NAME)
	os.makedirs(registry_dir, exist_ok=True)

	written: List[str] = []
	index_path = os.path.join(registry_dir, "index.json")
	with open(index_path, "w", encoding="utf-8") as fh:
		fh.write(dump_document(registry.to_manifest()))
	written.append(index_path)

	for item in registry.items:
		item_path = os.path.join(registry_dir, f"{item.name}.json")
		with open(item_path, "w", encoding="utf-8") as fh:
			fh.write(dump_document(item_document(item)))
		written.append(item_path)

	logger.info("registry written", directory=registry_dir, items=len(registry.items))
	return written
