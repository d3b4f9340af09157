from .source_registry import SourceRegistry, load_registry_from_yaml, registry_from_mapping

__all__ = ["SourceRegistry", "load_registry_from_yaml", "registry_from_mapping"]
