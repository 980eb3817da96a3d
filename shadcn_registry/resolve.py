from __future__ import annotations

import os
import posixpath
from typing import Callable, Dict, List, Optional

from .model import ResolvedId, is_virtual_module


RESOLVE_EXTENSIONS = (".ts", ".tsx", ".js", ".jsx", ".mjs", ".vue", ".json")


def to_posix(path: str) -> str:
	return path.replace(os.sep, "/")


def absolute_aliases(root: str, aliases: Dict[str, str]) -> Dict[str, str]:
	return {prefix: posixpath.normpath(posixpath.join(to_posix(root), target)) for prefix, target in aliases.items()}


def expand_alias(specifier: str, aliases: Dict[str, str]) -> Optional[str]:
	for prefix in sorted(aliases, key=len, reverse=True):
		if specifier == prefix or specifier.startswith(prefix + "/"):
			return aliases[prefix] + specifier[len(prefix):]
	return None


def is_relative(specifier: str) -> bool:
	return specifier in (".", "..") or specifier.startswith(("./", "../"))


def candidate_paths(base: str) -> List[str]:
	candidates = [base]
	candidates.extend(base + ext for ext in RESOLVE_EXTENSIONS)
	candidates.extend(posixpath.join(base, "index" + ext) for ext in RESOLVE_EXTENSIONS)
	return candidates


def resolve_specifier(
	specifier: str,
	importer: Optional[str],
	root: str,
	aliases: Dict[str, str],
	is_module: Callable[[str], bool],
) -> Optional[ResolvedId]:
	"""Map an import specifier to a module id.

	``aliases`` must already be absolute (see ``absolute_aliases``). Bare
	package specifiers resolve to themselves as external modules. Paths that
	name a directory without an index file resolve to the directory.
	"""
	if is_virtual_module(specifier):
		return ResolvedId(id=specifier)

	path, sep, query = specifier.partition("?")
	suffix = sep + query

	base = expand_alias(path, aliases)
	if base is None:
		if is_relative(path):
			anchor = posixpath.dirname(importer) if importer else to_posix(root)
			base = posixpath.normpath(posixpath.join(anchor, path))
		elif path.startswith("/"):
			base = posixpath.normpath(path)
		else:
			return ResolvedId(id=specifier, external=True)

	for candidate in candidate_paths(base):
		if is_module(candidate):
			return ResolvedId(id=candidate + suffix)

	if os.path.isdir(base):
		return ResolvedId(id=base)
	return None
