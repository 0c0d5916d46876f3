"""Clients for generative text backends.

Supported providers:
- OpenAI: chat completions endpoint (gpt-4o, gpt-4o-mini), or any
  OpenAI-compatible server reachable through ``base_url``
"""

from studysnap_core.model_adapters.base import BaseGenerationClient
from studysnap_core.model_adapters.openai import OpenAIChatClient

__all__ = ["BaseGenerationClient", "OpenAIChatClient"]
