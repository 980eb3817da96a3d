from __future__ import annotations

import os
import posixpath
from typing import Iterable, List, Optional, Tuple

import structlog

from .classify import ClassifierRoots
from .closure import build_item_closure
from .config import RegistrySettings, load_components_config
from .fs_scan import registry_seeds, resolve_classifier_roots, resolve_registry_entries
from .graph import ModuleGraph, collect_module_records, walk_module_graph
from .model import PUBLISHABLE_CATEGORIES, RegistryItem
from .project_graph import ProjectModuleGraph
from .resolve import to_posix
from .snapshot import SnapshotModuleGraph
from .store import Registry


logger = structlog.get_logger(__name__)


def build_registry(
	graph: ModuleGraph,
	seeds: Iterable[str],
	roots: ClassifierRoots,
	root_dir: str,
	name: str,
	homepage: str,
	strict_names: bool = False,
) -> Registry:
	module_ids = walk_module_graph(graph, seeds)
	records = collect_module_records(graph, module_ids, roots)

	registry = Registry(name, homepage, strict_names=strict_names)
	for module_id, record in records.items():
		if record.category not in PUBLISHABLE_CATEGORIES:
			continue

		closure = build_item_closure(module_id, records, root_dir)
		registry.add_item(
			RegistryItem(
				name=record.name,
				type=record.category,
				files=closure.files,
				dependencies=closure.dependencies,
				registry_dependencies=closure.registry_dependencies,
			)
		)
		logger.debug("registry item added", name=record.name, type=record.category.value, files=len(closure.files))

	logger.info("registry built", modules=len(records), items=len(registry.items))
	return registry


def load_project_graph(
	root: str, settings: RegistrySettings, snapshot_path: Optional[str] = None
) -> Tuple[ModuleGraph, List[str], ClassifierRoots]:
	"""Return the module graph, entry seeds and semantic roots of the project at ``root``.

	The module graph comes from ``snapshot_path`` when given, otherwise from
	crawling the project's sources.
	"""
	root_dir = to_posix(os.path.abspath(root))
	source_root = posixpath.join(root_dir, settings.src_dir)
	config = load_components_config(root_dir)

	graph: ModuleGraph
	if snapshot_path:
		graph = SnapshotModuleGraph.from_file(snapshot_path, root_dir, settings.path_aliases)
	else:
		graph = ProjectModuleGraph(root_dir, source_root, settings.path_aliases)

	patterns = resolve_registry_entries(graph, config)
	seeds = registry_seeds(patterns)
	roots = resolve_classifier_roots(graph, config)
	logger.info("registry entries resolved", root=root_dir, seeds=len(seeds))

	if isinstance(graph, ProjectModuleGraph):
		graph.load(seeds)
	return graph, seeds, roots


def build_project_registry(
	root: str, settings: RegistrySettings, snapshot_path: Optional[str] = None
) -> Registry:
	graph, seeds, roots = load_project_graph(root, settings, snapshot_path)
	return build_registry(
		graph,
		seeds,
		roots,
		to_posix(os.path.abspath(root)),
		name=settings.name,
		homepage=settings.homepage,
		strict_names=settings.strict_names,
	)
