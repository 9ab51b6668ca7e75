"""Dependency graph construction over operation sequences."""

from fusion_debug.graph.dependency import DependencyGraph, build_dependency_graph, dependency_map

__all__ = ["DependencyGraph", "build_dependency_graph", "dependency_map"]
