from __future__ import annotations

import argparse
import os
import sys
from typing import List, Optional

import structlog
import uvicorn

from shadcn_registry.config import get_settings
from shadcn_registry.errors import RegistryError
from shadcn_registry.log import configure_logging
from shadcn_registry.pipeline import build_project_registry, load_project_graph
from shadcn_registry.store import dump_document, write_registry


logger = structlog.get_logger(__name__)


def cmd_build(args: argparse.Namespace) -> int:
	settings = get_settings()
	overrides = {}
	if args.name is not None:
		overrides["name"] = args.name
	if args.homepage is not None:
		overrides["homepage"] = args.homepage
	if args.strict:
		overrides["strict_names"] = True
	if overrides:
		settings = settings.model_copy(update=overrides)

	try:
		registry = build_project_registry(args.path, settings, snapshot_path=args.graph)
	except RegistryError as e:
		logger.error("registry build failed", error=str(e))
		print(f"error: {e}", file=sys.stderr)
		return 1

	if args.print:
		print(dump_document(registry.to_manifest()))
	else:
		write_registry(registry, args.out or os.path.join(args.path, settings.output_dir))
	return 0


def cmd_graph(args: argparse.Namespace) -> int:
	try:
		graph, _, _ = load_project_graph(args.path, get_settings())
	except RegistryError as e:
		logger.error("module graph export failed", error=str(e))
		print(f"error: {e}", file=sys.stderr)
		return 1

	text = graph.to_snapshot().model_dump_json(by_alias=True, indent=2)
	if args.out:
		with open(args.out, "w", encoding="utf-8") as fh:
			fh.write(text)
	else:
		print(text)
	return 0


def cmd_serve(args: argparse.Namespace) -> int:
	uvicorn.run("api:app", host=args.host, port=args.port, reload=args.reload)
	return 0


def main(argv: Optional[List[str]] = None) -> int:
	parser = argparse.ArgumentParser(prog="shadcn-registry")
	sub = parser.add_subparsers(dest="cmd", required=True)

	pb = sub.add_parser("build", help="Generate the registry for a project")
	pb.add_argument("path", help="Path to project root (the directory holding components.json)")
	pb.add_argument("--graph", help="Module graph snapshot exported by the bundler")
	pb.add_argument("--out", help="Output directory (default: output_dir under the project root)")
	pb.add_argument("--name", help="Registry display name")
	pb.add_argument("--homepage", help="Registry homepage")
	pb.add_argument("--strict", action="store_true", help="Fail when two items share a name")
	pb.add_argument("--print", action="store_true", help="Print the manifest instead of writing files")
	pb.set_defaults(func=cmd_build)

	pg = sub.add_parser("graph", help="Export the crawled module graph as a snapshot")
	pg.add_argument("path", help="Path to project root")
	pg.add_argument("--out", help="Snapshot file (default: stdout)")
	pg.set_defaults(func=cmd_graph)

	ps = sub.add_parser("serve", help="Run FastAPI server")
	ps.add_argument("--host", default="127.0.0.1")
	ps.add_argument("--port", type=int, default=8000)
	ps.add_argument("--reload", action="store_true")
	ps.set_defaults(func=cmd_serve)

	args = parser.parse_args(argv)
	settings = get_settings()
	configure_logging(settings.log_level, settings.log_format)
	return args.func(args)


if __name__ == "__main__":
	sys.exit(main())
