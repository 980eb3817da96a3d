from __future__ import annotations

import posixpath
import re
from typing import List, Optional

from pydantic import BaseModel

from .model import ItemCategory, ItemMeta, has_query, is_virtual_module


COMPONENT_FILE_EXTENSIONS = (".vue", ".jsx", ".tsx")
COMPOSABLE_FILE_EXTENSIONS = (".js", ".ts")
INDEX_FILES = ("index.js", "index.ts")


class ClassifierRoots(BaseModel):
	"""Absolute POSIX directories of the semantic roots. ``None`` never matches."""

	ui: Optional[str] = None
	components: Optional[str] = None
	composables: Optional[str] = None
	utils: Optional[str] = None


def _split_humps(word: str) -> List[str]:
	# camelCase humps and acronym ends, for any script with letter case
	parts: List[str] = []
	start = 0
	for i in range(1, len(word)):
		prev, cur = word[i - 1], word[i]
		nxt = word[i + 1] if i + 1 < len(word) else ""
		if cur.isupper() and (prev.islower() or prev.isdigit() or (prev.isupper() and nxt.islower())):
			parts.append(word[start:i])
			start = i
	parts.append(word[start:])
	return parts


def to_kebab_case(value: str) -> str:
	words: List[str] = []
	for chunk in re.split(r"[\W_]+", value):
		words.extend(_split_humps(chunk))
	return "-".join(w.lower() for w in words if w)


def strip_query(module_id: str) -> str:
	return module_id.split("?", 1)[0]


def relative_parts(module_id: str, root: Optional[str]) -> Optional[List[str]]:
	if not root or is_virtual_module(module_id):
		return None
	prefix = root.rstrip("/") + "/"
	if not module_id.startswith(prefix):
		return None
	return module_id[len(prefix):].split("/")


def is_under_root(module_id: str, root: Optional[str]) -> bool:
	return relative_parts(module_id, root) is not None


def _is_dir_index(parts: List[str]) -> bool:
	return len(parts) == 2 and parts[1] in INDEX_FILES


def is_component(module_id: str, root: Optional[str]) -> bool:
	parts = relative_parts(module_id, root)
	if parts is None:
		return False
	if _is_dir_index(parts):
		return True
	return len(parts) == 1 and parts[0].endswith(COMPONENT_FILE_EXTENSIONS)


def is_composable(module_id: str, root: Optional[str]) -> bool:
	parts = relative_parts(module_id, root)
	if parts is None:
		return False
	if _is_dir_index(parts):
		return True
	return len(parts) == 1 and parts[0].endswith(COMPOSABLE_FILE_EXTENSIONS)


def is_util(module_id: str, root: Optional[str]) -> bool:
	parts = relative_parts(module_id, root)
	return parts is not None and len(parts) == 1 and not has_query(module_id)


def registry_item_name(module_id: str, root: str) -> str:
	path = strip_query(module_id)
	rel = posixpath.relpath(path, root)
	directory = posixpath.dirname(rel)
	if directory:
		return to_kebab_case(directory.split("/", 1)[0])
	name, _ = posixpath.splitext(posixpath.basename(rel))
	return to_kebab_case(name)


def classify_module(module_id: str, external: bool, roots: ClassifierRoots) -> ItemMeta:
	if is_under_root(module_id, roots.ui):
		return ItemMeta(category=ItemCategory.SHADCN_PRIMITIVE, name=registry_item_name(module_id, roots.ui))

	if is_component(module_id, roots.components):
		return ItemMeta(category=ItemCategory.COMPONENT, name=registry_item_name(module_id, roots.components))

	if is_composable(module_id, roots.composables):
		return ItemMeta(category=ItemCategory.HOOK, name=registry_item_name(module_id, roots.composables))

	if is_util(module_id, roots.utils):
		return ItemMeta(category=ItemCategory.LIB, name=registry_item_name(module_id, roots.utils))

	if external:
		return ItemMeta(category=ItemCategory.EXTERNAL, name=module_id)

	return ItemMeta(category=ItemCategory.INTERNAL, name=module_id)
