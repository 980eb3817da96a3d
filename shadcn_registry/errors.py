from __future__ import annotations

from typing import Optional


class RegistryError(Exception):
	"""Base class for failures that abort a registry build."""


class GraphConsistencyError(RegistryError):
	def __init__(self, module_id: str, importer: Optional[str] = None):
		self.module_id = module_id
		self.importer = importer
		if importer:
			message = f'Unable to find info for module "{module_id}" (imported by "{importer}").'
		else:
			message = f'Unable to find info for module "{module_id}".'
		super().__init__(message)


class ModuleResolutionError(RegistryError):
	def __init__(self, specifier: str, importer: str):
		self.specifier = specifier
		self.importer = importer
		super().__init__(f'Unable to resolve "{specifier}" from "{importer}".')


class ConfigError(RegistryError):
	pass


class RegistryNameCollisionError(RegistryError):
	def __init__(self, name: str, existing_type: str, new_type: str):
		self.name = name
		super().__init__(
			f'Registry item "{name}" ({new_type}) collides with an existing item ({existing_type}).'
		)
