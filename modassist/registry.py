"""
In-memory knowledge module registry.

The registry is the entry store the search pipeline reads from: it keeps
module metadata and entries per module, and hands out a snapshot of all
entries through get_all_entries().
"""

import logging
import uuid
from typing import Dict, List, Optional

from .knowledge import BUILTIN_MODULES
from .models import KnowledgeEntry, KnowledgeModule, ModuleDefinition

logger = logging.getLogger(__name__)


class ModuleRegistry:
    """Registry of knowledge modules and their entries."""

    def __init__(self):
        self._modules: Dict[str, KnowledgeModule] = {}
        self._entries: Dict[str, List[KnowledgeEntry]] = {}

    def register_module(self, definition: ModuleDefinition) -> bool:
        """
        Register (or replace) a module and its entries.

        Entries without an id get a generated one; every entry is tagged
        with the module id.

        Args:
            definition: Module metadata plus entries

        Returns:
            True if registered, False if the definition lacks an id or name
        """
        if not definition.id or not definition.name:
            logger.error("Invalid module definition: missing required fields (id, name)")
            return False

        module = KnowledgeModule(
            id=definition.id,
            name=definition.name,
            description=definition.description,
            version=definition.version,
            author=definition.author,
            category_id=definition.category_id,
        )

        entries = [
            entry.model_copy(update={
                "id": entry.id or uuid.uuid4().hex,
                "module_id": definition.id,
            })
            for entry in definition.entries
        ]

        missing = [dep for dep in definition.dependencies if dep not in self._modules]
        if missing:
            logger.warning(f"Module {definition.id} depends on unregistered modules: {missing}")

        # dicts keep insertion order, re-registering keeps the module's slot
        self._modules[module.id] = module
        self._entries[module.id] = entries

        logger.info(f"Registered module: {module.name} ({module.id}) with {len(entries)} entries")
        return True

    def get_modules(self) -> List[KnowledgeModule]:
        return list(self._modules.values())

    def get_entries(self, module_id: str) -> List[KnowledgeEntry]:
        """Entries of one module; empty list for unknown modules."""
        return list(self._entries.get(module_id, []))

    def get_all_entries(self) -> List[KnowledgeEntry]:
        """Snapshot of all entries across modules, in registration order."""
        return [entry for entries in self._entries.values() for entry in entries]

    def is_module_registered(self, module_id: str) -> bool:
        return module_id in self._modules

    def get_module_metadata(self, module_id: str) -> Optional[KnowledgeModule]:
        return self._modules.get(module_id)


def create_default_registry() -> ModuleRegistry:
    """Registry preloaded with the built-in knowledge modules."""
    registry = ModuleRegistry()
    for definition in BUILTIN_MODULES:
        registry.register_module(definition)
    return registry
