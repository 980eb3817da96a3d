from __future__ import annotations

import os
from typing import Any, Dict, Iterable, List, Optional

import structlog

from .classify import is_under_root, strip_query
from .errors import ModuleResolutionError
from .graph import ModuleGraph
from .import_parse import is_script_file, parse_imports
from .model import PLUGIN_NAME, GraphSnapshot, ModuleInfo, ResolvedId, is_virtual_module
from .resolve import absolute_aliases, resolve_specifier, to_posix


logger = structlog.get_logger(__name__)


def _read_text(path: str) -> Optional[str]:
	try:
		with open(path, "r", encoding="utf-8") as fh:
			return fh.read()
	except UnicodeDecodeError:
		# binary assets carry no source
		return None


class ProjectModuleGraph(ModuleGraph):
	"""Module graph built by crawling a project's sources from a set of seeds."""

	def __init__(self, root: str, source_root: str, aliases: Dict[str, str]):
		self.root = to_posix(os.path.abspath(root))
		self.source_root = to_posix(os.path.abspath(source_root))
		self.aliases = absolute_aliases(self.root, aliases)
		self._modules: Dict[str, ModuleInfo] = {}

	def get_module_info(self, module_id: str) -> Optional[ModuleInfo]:
		return self._modules.get(module_id)

	def to_snapshot(self) -> GraphSnapshot:
		return GraphSnapshot(modules=list(self._modules.values()))

	def resolve(self, specifier: str, importer: Optional[str] = None) -> Optional[ResolvedId]:
		if specifier.startswith("node:"):
			return ResolvedId(id=specifier, external=True)
		return resolve_specifier(specifier, importer, self.root, self.aliases, os.path.isfile)

	def load(self, seeds: Iterable[str]) -> None:
		"""Crawl every module reachable from ``seeds`` into the graph."""
		queue: List[str] = [to_posix(seed) for seed in seeds]
		while queue:
			module_id = queue.pop(0)
			if module_id in self._modules or is_virtual_module(module_id):
				continue
			info = self._load_module(module_id)
			self._modules[module_id] = info
			queue.extend(i for i in info.all_imported_ids if i not in self._modules)
		logger.debug("project graph loaded", root=self.root, modules=len(self._modules))

	def _load_module(self, module_id: str) -> ModuleInfo:
		path = strip_query(module_id)
		text = _read_text(path)
		meta: Dict[str, Any] = {}
		if text is not None and is_under_root(path, self.source_root):
			meta[PLUGIN_NAME] = {"sourceCode": text}

		if text is None or not is_script_file(path) or module_id != path:
			return ModuleInfo(id=module_id, meta=meta)

		imports = parse_imports(path, text)
		return ModuleInfo(
			id=module_id,
			imported_ids=self._resolve_all(imports.static, module_id),
			dynamically_imported_ids=self._resolve_all(imports.dynamic, module_id),
			meta=meta,
		)

	def _resolve_all(self, specifiers: List[str], importer: str) -> List[str]:
		resolved_ids: List[str] = []
		for specifier in specifiers:
			resolved = self.resolve(specifier, importer)
			if resolved is None or (not resolved.external and os.path.isdir(resolved.id)):
				raise ModuleResolutionError(specifier, importer)
			if resolved.external and resolved.id not in self._modules:
				self._modules[resolved.id] = ModuleInfo(id=resolved.id, is_external=True)
			if resolved.id not in resolved_ids:
				resolved_ids.append(resolved.id)
		return resolved_ids
