from .pipeline import build_pipeline, build_pipeline_from_files, resolve_node_type

__all__ = ["build_pipeline", "build_pipeline_from_files", "resolve_node_type"]
