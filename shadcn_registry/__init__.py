"""Registry generator: turns a project's module graph into a shadcn registry.

Modules:
- classify.py: Semantic categories and catalog names for module ids.
- graph.py: Module-graph interface, breadth-first walk and module records.
- closure.py: Per-item closure of files, dependencies and primitive references.
- store.py: The registry catalog and its JSON documents.
- config.py: components.json and generator settings.
- fs_scan.py: Alias resolution and entry discovery on disk.
- import_parse.py: Import specifier extraction from script sources.
- project_graph.py / snapshot.py: Module-graph providers.
- pipeline.py: End-to-end registry build.
"""

__all__ = [
	"classify",
	"graph",
	"closure",
	"store",
	"config",
	"fs_scan",
	"import_parse",
	"project_graph",
	"snapshot",
	"pipeline",
]
