"""LangGraph pipeline components.

This module exports the generation pipeline builder:
    - build_generation_graph: validate, summarize oversized input, write cards
"""

from studysnap_core.graph.build_generation_graph import (
    GenerationState,
    build_generation_graph,
)
from studysnap_core.graph.nodes.summarize import summarize_large

__all__ = ["GenerationState", "build_generation_graph", "summarize_large"]
