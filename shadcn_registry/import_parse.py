from __future__ import annotations

import re
from typing import Dict, List

from .model import SourceImports


SCRIPT_EXTENSIONS = (".js", ".jsx", ".ts", ".tsx", ".mjs", ".vue")

# String literals are matched too so that comment markers inside them are kept
_COMMENT_OR_STRING = re.compile(
	r"(?P<comment>/\*[\s\S]*?\*/|//[^\n]*)"
	r"|'(?:\\.|[^'\\\n])*'"
	r'|"(?:\\.|[^"\\\n])*"'
	r"|`(?:\\[\s\S]|[^`\\])*`"
)
_VUE_SCRIPT = re.compile(r"<script\b[^>]*>([\s\S]*?)</script>", re.IGNORECASE)

_STATIC_IMPORT = re.compile(
	r"""\bimport\s+(type\s+)?(?:[\w$*{}\s,]+?\s+from\s+)?["']([^"'\n]+)["']"""
)
_REEXPORT = re.compile(
	r"""\bexport\s+(type\s+)?(?:\*(?:\s+as\s+[\w$]+)?|\{[^}]*\})\s*from\s+["']([^"'\n]+)["']"""
)
_DYNAMIC_IMPORT = re.compile(r"""\bimport\s*\(\s*["']([^"'\n]+)["']\s*\)""")


def is_script_file(path: str) -> bool:
	return path.endswith(SCRIPT_EXTENSIONS)


def extract_script(path: str, text: str) -> str:
	if path.endswith(".vue"):
		return "\n".join(m.group(1) for m in _VUE_SCRIPT.finditer(text))
	return text


def _strip_comments(text: str) -> str:
	return _COMMENT_OR_STRING.sub(lambda m: " " if m.group("comment") else m.group(0), text)


def parse_imports(path: str, text: str) -> SourceImports:
	code = _strip_comments(extract_script(path, text))

	# Keyed by offset so imports and re-exports keep source order
	static_by_pos: Dict[int, str] = {}
	for pattern in (_STATIC_IMPORT, _REEXPORT):
		for m in pattern.finditer(code):
			if m.group(1):
				# type-only imports vanish at compile time
				continue
			static_by_pos[m.start()] = m.group(2)

	static: List[str] = []
	for _, specifier in sorted(static_by_pos.items()):
		if specifier not in static:
			static.append(specifier)

	dynamic: List[str] = []
	for m in _DYNAMIC_IMPORT.finditer(code):
		if m.group(1) not in dynamic:
			dynamic.append(m.group(1))

	return SourceImports(static=static, dynamic=dynamic)
