import pytest

from shadcn_registry.classify import ClassifierRoots
from shadcn_registry.closure import build_item_closure
from shadcn_registry.errors import GraphConsistencyError
from shadcn_registry.graph import collect_module_records, walk_module_graph
from shadcn_registry.pipeline import build_registry


ROOTS = ClassifierRoots(
	ui="/proj/src/components/ui",
	components="/proj/src/components",
	composables="/proj/src/composables",
	utils="/proj/src/lib",
)

CARD = "/proj/src/components/card/index.ts"
FORMAT = "/proj/src/components/card/format.ts"
BUTTON = "/proj/src/components/ui/button/index.ts"


def records_for(graph, seeds):
	return collect_module_records(graph, walk_module_graph(graph, seeds), ROOTS)


def paths(closure):
	return [f.path for f in closure.files]


def test_component_with_external_and_primitive(graph_factory):
	graph = graph_factory({
		CARD: {"imports": ["clsx", BUTTON], "code": "card source"},
		BUTTON: {"imports": ["/proj/src/components/ui/button/Button.vue"]},
		"/proj/src/components/ui/button/Button.vue": {},
		"clsx": {"external": True},
	})
	registry = build_registry(graph, [CARD], ROOTS, "/proj", "acme", "https://acme.dev")

	assert [item.to_document() for item in registry.items] == [
		{
			"name": "card",
			"type": "registry:component",
			"files": [
				{
					"type": "registry:file",
					"path": "src/components/card/index.ts",
					"target": "src/components/card/index.ts",
					"content": "card source",
				}
			],
			"dependencies": ["clsx"],
			"registryDependencies": ["button"],
		}
	]


def test_internal_helper_becomes_a_file(graph_factory):
	graph = graph_factory({
		CARD: {"imports": ["clsx", BUTTON, FORMAT], "code": "card source"},
		FORMAT: {"code": "format source"},
		BUTTON: {},
		"clsx": {"external": True},
	})
	closure = build_item_closure(CARD, records_for(graph, [CARD]), "/proj")

	assert paths(closure) == ["src/components/card/index.ts", "src/components/card/format.ts"]
	assert closure.files[1].content == "format source"
	assert closure.dependencies == ["clsx"]
	assert closure.registry_dependencies == ["button"]


def test_internal_chains_are_flattened(graph_factory):
	helper = "/proj/src/helpers/a.ts"
	nested = "/proj/src/helpers/b.ts"
	graph = graph_factory({
		CARD: {"imports": [helper]},
		helper: {"imports": [nested]},
		nested: {"imports": ["/proj/src/lib/utils.ts", "date-fns"]},
		"/proj/src/lib/utils.ts": {"imports": ["tailwind-merge"]},
		"date-fns": {"external": True},
		"tailwind-merge": {"external": True},
	})
	closure = build_item_closure(CARD, records_for(graph, [CARD]), "/proj")

	assert set(paths(closure)) == {
		"src/components/card/index.ts",
		"src/helpers/a.ts",
		"src/helpers/b.ts",
		"src/lib/utils.ts",
	}
	# the embedded lib is copied, not expanded
	assert closure.dependencies == ["date-fns"]


def test_nested_component_is_embedded_without_recursion(graph_factory):
	other = "/proj/src/components/Avatar.vue"
	graph = graph_factory({
		CARD: {"imports": [other]},
		other: {"imports": ["@vueuse/core"]},
		"@vueuse/core": {"external": True},
	})
	registry = build_registry(graph, [CARD, other], ROOTS, "/proj", "acme", "")

	card = registry.get_item("card")
	assert [f.path for f in card.files] == ["src/components/card/index.ts", "src/components/Avatar.vue"]
	assert card.dependencies == []
	assert registry.get_item("avatar").dependencies == ["@vueuse/core"]


def test_query_and_virtual_modules_never_become_files(graph_factory):
	sub_block = "/proj/src/components/Avatar.vue?vue&type=script&setup=true&lang.ts"
	avatar = "/proj/src/components/Avatar.vue"
	graph = graph_factory({
		avatar: {"imports": [sub_block, "\0plugin-vue:export-helper"]},
		sub_block: {"imports": ["/proj/src/shared/initials.ts", "\0plugin-vue:export-helper"]},
		"/proj/src/shared/initials.ts": {},
	})
	closure = build_item_closure(avatar, records_for(graph, [avatar]), "/proj")

	assert paths(closure) == ["src/components/Avatar.vue", "src/shared/initials.ts"]
	assert all("?" not in p and "\0" not in p for p in paths(closure))


def test_internal_cycles_terminate(graph_factory):
	a = "/proj/src/shared/a.ts"
	b = "/proj/src/shared/b.ts"
	graph = graph_factory({
		CARD: {"imports": [a]},
		a: {"imports": [b, CARD]},
		b: {"imports": [a, "clsx", "clsx"]},
		"clsx": {"external": True},
	})
	closure = build_item_closure(CARD, records_for(graph, [CARD]), "/proj")

	assert sorted(paths(closure)) == [
		"src/components/card/index.ts",
		"src/shared/a.ts",
		"src/shared/b.ts",
	]
	assert closure.dependencies == ["clsx"]


def test_duplicate_references_are_collapsed(graph_factory):
	helper = "/proj/src/shared/a.ts"
	graph = graph_factory({
		CARD: {"imports": [BUTTON, helper, "clsx"]},
		helper: {"imports": [BUTTON, "clsx"]},
		BUTTON: {},
		"clsx": {"external": True},
	})
	closure = build_item_closure(CARD, records_for(graph, [CARD]), "/proj")

	assert closure.registry_dependencies == ["button"]
	assert closure.dependencies == ["clsx"]
	assert len(closure.files) == 2


def test_missing_record_is_fatal(graph_factory):
	helper = "/proj/src/shared/a.ts"
	graph = graph_factory({
		CARD: {"imports": [helper]},
		helper: {},
	})
	records = records_for(graph, [CARD])
	broken = dict(records)
	broken[helper] = records[helper].model_copy(update={"modules": ["/proj/src/shared/gone.ts"]})

	with pytest.raises(GraphConsistencyError) as excinfo:
		build_item_closure(CARD, broken, "/proj")
	assert excinfo.value.module_id == "/proj/src/shared/gone.ts"
	assert excinfo.value.importer == helper
