from __future__ import annotations

import posixpath
from typing import Dict, List, Optional, Set

from pydantic import BaseModel

from .classify import strip_query
from .errors import GraphConsistencyError
from .model import ItemCategory, ModuleRecord, RegistryFile, has_query, is_virtual_module


class ItemClosure(BaseModel):
	files: List[RegistryFile] = []
	dependencies: List[str] = []
	registry_dependencies: List[str] = []


def local_file_path(module_id: str, root_dir: str) -> str:
	return posixpath.relpath(strip_query(module_id), root_dir)


def _lookup(records: Dict[str, ModuleRecord], module_id: str, importer: Optional[str]) -> ModuleRecord:
	record = records.get(module_id)
	if record is None:
		raise GraphConsistencyError(module_id, importer)
	return record


def build_item_closure(target_id: str, records: Dict[str, ModuleRecord], root_dir: str) -> ItemClosure:
	"""Collect the files, package dependencies and primitive references of one item.

	Internal helpers are flattened into the item: each contributes its own file
	and its imports are walked further. Every other category stops the walk.
	"""
	target = _lookup(records, target_id, None)

	dependencies: Dict[str, None] = {}
	registry_dependencies: Dict[str, None] = {}
	files: Dict[str, RegistryFile] = {}
	expanded: Set[str] = set()

	frontier: Dict[str, Optional[str]] = {target_id: None}
	for module_id in target.modules:
		frontier.setdefault(module_id, target_id)

	while frontier:
		next_frontier: Dict[str, Optional[str]] = {}

		for module_id, importer in frontier.items():
			if is_virtual_module(module_id) or module_id in expanded:
				continue
			expanded.add(module_id)
			record = _lookup(records, module_id, importer)

			if record.category is ItemCategory.EXTERNAL:
				dependencies[record.name] = None
				continue

			if record.category is ItemCategory.SHADCN_PRIMITIVE:
				registry_dependencies[record.name] = None
				continue

			if record.category is ItemCategory.INTERNAL:
				for dependency_id in record.modules:
					if dependency_id not in expanded:
						next_frontier.setdefault(dependency_id, module_id)

			# Sub-representations (e.g. ``Foo.vue?vue&type=script``) share their base file
			if has_query(module_id):
				continue

			path = local_file_path(module_id, root_dir)
			files[module_id] = RegistryFile(path=path, target=path, content=record.code)

		frontier = next_frontier

	return ItemClosure(
		files=list(files.values()),
		dependencies=list(dependencies),
		registry_dependencies=list(registry_dependencies),
	)
