from __future__ import annotations

import glob
import os
import posixpath
from typing import Dict, List, Optional

import structlog

from .classify import ClassifierRoots
from .config import ComponentsConfig
from .graph import ModuleGraph
from .model import EntryPattern
from .resolve import to_posix


logger = structlog.get_logger(__name__)

ENTRY_EXTENSIONS = (".js", ".jsx", ".ts", ".tsx", ".vue")

# Aliases whose entries seed the graph walk; ``ui`` primitives are only reached through them
SEED_ALIASES = ("components", "composables", "lib", "utils")

# Aliases that name a single module rather than a directory of entries
FILE_ALIASES = ("utils",)


def resolve_alias_path(graph: ModuleGraph, alias: str, as_directory: bool) -> Optional[str]:
	resolved = graph.resolve(alias)
	if resolved is None or resolved.external:
		return None
	path = resolved.id
	if as_directory and os.path.isfile(path):
		path = posixpath.dirname(path)
	return path


def scan_entries(directory: str) -> EntryPattern:
	include: List[str] = []
	ignore: List[str] = []
	for ext in ENTRY_EXTENSIONS:
		include.append(posixpath.join(directory, "*" + ext))
		include.append(posixpath.join(directory, "*", "index" + ext))
		ignore.append(posixpath.join(directory, "index" + ext))

	found = set()
	for pattern in include:
		for path in glob.glob(pattern):
			path = to_posix(path)
			if path not in ignore and os.path.isfile(path):
				found.add(path)
	return EntryPattern(entries=sorted(found), include=include, ignore=ignore)


def resolve_registry_entries(graph: ModuleGraph, config: ComponentsConfig) -> Dict[str, EntryPattern]:
	patterns: Dict[str, EntryPattern] = {}
	for name, alias in config.aliases.model_dump().items():
		as_directory = name not in FILE_ALIASES
		path = resolve_alias_path(graph, alias, as_directory)
		if path is None:
			logger.debug("alias did not resolve", alias_name=name, alias=alias)
			continue

		if as_directory:
			patterns[name] = scan_entries(path)
		else:
			entries = [path] if os.path.isfile(path) else []
			patterns[name] = EntryPattern(entries=entries, include=[path])
		logger.debug("alias resolved", alias_name=name, path=path, entries=len(patterns[name].entries))
	return patterns


def registry_seeds(patterns: Dict[str, EntryPattern]) -> List[str]:
	seeds: List[str] = []
	for name in SEED_ALIASES:
		pattern = patterns.get(name)
		if pattern is None:
			continue
		for entry in pattern.entries:
			if entry not in seeds:
				seeds.append(entry)
	return seeds


def resolve_classifier_roots(graph: ModuleGraph, config: ComponentsConfig) -> ClassifierRoots:
	aliases = config.aliases
	return ClassifierRoots(
		ui=resolve_alias_path(graph, aliases.ui, True),
		components=resolve_alias_path(graph, aliases.components, True),
		composables=resolve_alias_path(graph, aliases.composables, True),
		# utils is usually a file (``@/lib/utils``); its siblings form the lib root
		utils=resolve_alias_path(graph, aliases.utils, True),
	)
