"""Pipeline nodes for flashcard generation.

Nodes:
    - prepare: request validation and routing by input size
    - summarize: map-reduce condensation of oversized input
    - write_cards: flashcard generation from the prepared text
"""

from studysnap_core.graph.nodes import prepare, summarize, write_cards

__all__ = ["prepare", "summarize", "write_cards"]
