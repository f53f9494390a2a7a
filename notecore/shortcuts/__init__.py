from .catalog import DEFAULT_REGISTRY, list_shortcuts, load_custom_shortcuts, load_registry
from .engine import ExpansionEngine, expand, has_shortcuts
from .registry import DataMacro, ShortcutRegistry, ShortcutRegistryError, ShortcutTemplate

__all__ = [
    "expand",
    "has_shortcuts",
    "ExpansionEngine",
    "ShortcutRegistry",
    "ShortcutRegistryError",
    "ShortcutTemplate",
    "DataMacro",
    "DEFAULT_REGISTRY",
    "list_shortcuts",
    "load_custom_shortcuts",
    "load_registry",
]
