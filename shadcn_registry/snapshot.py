from __future__ import annotations

import json
import os
from typing import Dict, Optional

from pydantic import ValidationError

from .errors import ConfigError
from .graph import ModuleGraph
from .model import GraphSnapshot, ModuleInfo, ResolvedId
from .resolve import absolute_aliases, resolve_specifier, to_posix


class SnapshotModuleGraph(ModuleGraph):
	"""Module graph exported by a bundler after its module graph was finalized.

	The snapshot is a JSON document ``{"modules": [...]}`` whose entries use
	Rollup's ``ModuleInfo`` field names (``id``, ``importedIds``,
	``dynamicallyImportedIds``, ``isExternal``, ``meta``).
	"""

	def __init__(self, snapshot: GraphSnapshot, root: str, aliases: Optional[Dict[str, str]] = None):
		self.root = to_posix(os.path.abspath(root))
		self.aliases = absolute_aliases(self.root, aliases or {})
		self._modules: Dict[str, ModuleInfo] = {m.id: m for m in snapshot.modules}

	@classmethod
	def from_file(cls, path: str, root: str, aliases: Optional[Dict[str, str]] = None) -> "SnapshotModuleGraph":
		try:
			with open(path, "r", encoding="utf-8") as fh:
				snapshot = GraphSnapshot.model_validate(json.load(fh))
		except (OSError, json.JSONDecodeError, ValidationError) as e:
			raise ConfigError(f"Cannot load module graph snapshot {path}: {e}") from e
		return cls(snapshot, root, aliases)

	def get_module_info(self, module_id: str) -> Optional[ModuleInfo]:
		return self._modules.get(module_id)

	def to_snapshot(self) -> GraphSnapshot:
		return GraphSnapshot(modules=list(self._modules.values()))

	def resolve(self, specifier: str, importer: Optional[str] = None) -> Optional[ResolvedId]:
		known = self._modules.get(specifier)
		if known is not None:
			return ResolvedId(id=known.id, external=known.is_external)
		return resolve_specifier(specifier, importer, self.root, self.aliases, self._modules.__contains__)
