from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Dict, Iterable, List, Optional

import structlog

from .classify import ClassifierRoots, classify_module
from .errors import GraphConsistencyError
from .model import GraphSnapshot, ModuleInfo, ModuleRecord, ResolvedId, is_virtual_module


logger = structlog.get_logger(__name__)


class ModuleGraph(ABC):
	"""Read-only view of a finalized module graph."""

	@abstractmethod
	def get_module_info(self, module_id: str) -> Optional[ModuleInfo]:
		...

	@abstractmethod
	def resolve(self, specifier: str, importer: Optional[str] = None) -> Optional[ResolvedId]:
		...

	@abstractmethod
	def to_snapshot(self) -> GraphSnapshot:
		...

	def require_module_info(self, module_id: str, importer: Optional[str] = None) -> ModuleInfo:
		info = self.get_module_info(module_id)
		if info is None:
			raise GraphConsistencyError(module_id, importer)
		return info


def walk_module_graph(graph: ModuleGraph, seeds: Iterable[str]) -> List[str]:
	"""Return every module reachable from ``seeds`` once, in breadth-first order.

	Seeds are included. Virtual (``\\0``-prefixed) modules are neither visited
	nor expanded.
	"""
	visited: Dict[str, None] = {}
	importers: Dict[str, Optional[str]] = {}

	frontier: List[str] = []
	for seed in seeds:
		if is_virtual_module(seed) or seed in visited:
			continue
		visited[seed] = None
		importers[seed] = None
		frontier.append(seed)

	while frontier:
		next_frontier: List[str] = []
		for module_id in frontier:
			info = graph.require_module_info(module_id, importers.get(module_id))
			for imported_id in info.all_imported_ids:
				if is_virtual_module(imported_id) or imported_id in visited:
					continue
				visited[imported_id] = None
				importers[imported_id] = module_id
				next_frontier.append(imported_id)
		frontier = next_frontier

	logger.debug("module graph walked", modules=len(visited))
	return list(visited)


def collect_module_records(
	graph: ModuleGraph, module_ids: Iterable[str], roots: ClassifierRoots
) -> Dict[str, ModuleRecord]:
	records: Dict[str, ModuleRecord] = {}
	for module_id in module_ids:
		info = graph.require_module_info(module_id)
		records[module_id] = ModuleRecord(
			id=module_id,
			meta=classify_module(module_id, info.is_external, roots),
			modules=info.all_imported_ids,
			code=info.source_code,
		)
	return records
