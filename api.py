from __future__ import annotations

import os
from typing import Any, Dict, Optional

from fastapi import FastAPI, HTTPException
from pydantic import BaseModel

from shadcn_registry.config import get_settings
from shadcn_registry.errors import RegistryError
from shadcn_registry.pipeline import build_project_registry
from shadcn_registry.store import Registry, item_document


app = FastAPI(title="shadcn Registry Generator")


class RegistryRequest(BaseModel):
	root_path: str
	graph_path: Optional[str] = None


def _build(req: RegistryRequest) -> Registry:
	root = os.path.abspath(req.root_path)
	if not os.path.isdir(root):
		raise HTTPException(status_code=400, detail=f"Invalid root_path: {root}")
	try:
		return build_project_registry(root, get_settings(), snapshot_path=req.graph_path)
	except RegistryError as e:
		raise HTTPException(status_code=400, detail=str(e))


@app.post("/registry")
def registry_manifest(req: RegistryRequest) -> Dict[str, Any]:
	return _build(req).to_manifest()


@app.post("/registry/items/{name}")
def registry_item(name: str, req: RegistryRequest) -> Dict[str, Any]:
	item = _build(req).get_item(name)
	if item is None:
		raise HTTPException(status_code=404, detail=f"Unknown registry item: {name}")
	return item_document(item)


def create_app() -> FastAPI:
	return app
