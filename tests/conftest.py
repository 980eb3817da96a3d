import json
from textwrap import dedent
from typing import Dict

import pytest

from shadcn_registry.model import GraphSnapshot, ModuleInfo, PLUGIN_NAME
from shadcn_registry.snapshot import SnapshotModuleGraph


COMPONENTS_JSON = {
	"$schema": "https://shadcn-vue.com/schema.json",
	"style": "new-york",
	"typescript": True,
	"aliases": {
		"ui": "@/components/ui",
		"components": "@/components",
		"composables": "@/composables",
		"utils": "@/lib/utils",
		"lib": "@/lib",
	},
}

SAMPLE_SOURCES: Dict[str, str] = {
	"src/components/ui/button/index.ts": """
		export { default as Button } from './Button.vue'
		""",
	"src/components/ui/button/Button.vue": """
		<script setup lang="ts">
		import { cn } from '@/lib/utils'
		</script>

		<template>
		  <button :class="cn('btn')"><slot /></button>
		</template>
		""",
	"src/components/card/index.ts": """
		import clsx from 'clsx'
		import { Button } from '@/components/ui/button'
		import { formatTitle } from './format'

		export function card(title: string) {
		  return clsx(Button, formatTitle(title))
		}
		""",
	"src/components/card/format.ts": """
		export function formatTitle(title: string) {
		  return title.trim()
		}
		""",
	"src/composables/useCounter.ts": """
		import { ref } from 'vue'
		import type { Ref } from 'vue'

		export function useCounter(): Ref<number> {
		  return ref(0)
		}
		""",
	"src/lib/utils.ts": """
		import { type ClassValue, clsx } from 'clsx'
		import { twMerge } from 'tailwind-merge'

		export function cn(...inputs: ClassValue[]) {
		  return twMerge(clsx(inputs))
		}
		""",
}


def write_project(root, sources: Dict[str, str], components=COMPONENTS_JSON):
	root.mkdir(parents=True, exist_ok=True)
	(root / "components.json").write_text(json.dumps(components))
	for rel_path, text in sources.items():
		path = root / rel_path
		path.parent.mkdir(parents=True, exist_ok=True)
		path.write_text(dedent(text).lstrip())
	return root


@pytest.fixture
def sample_project(tmp_path):
	return write_project(tmp_path / "proj", SAMPLE_SOURCES)


def make_graph(modules: Dict[str, dict], root: str = "/proj") -> SnapshotModuleGraph:
	"""Build an in-memory graph from ``{id: {"imports": [...], "dynamic": [...], "external": bool, "code": str}}``."""
	infos = []
	for module_id, spec in modules.items():
		meta = {}
		if spec.get("code") is not None:
			meta[PLUGIN_NAME] = {"sourceCode": spec["code"]}
		infos.append(
			ModuleInfo(
				id=module_id,
				imported_ids=spec.get("imports", []),
				dynamically_imported_ids=spec.get("dynamic", []),
				is_external=spec.get("external", False),
				meta=meta,
			)
		)
	return SnapshotModuleGraph(GraphSnapshot(modules=infos), root)


@pytest.fixture
def graph_factory():
	return make_graph
