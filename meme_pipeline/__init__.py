"""
Pipeline package for AI meme generation.

Modules:
- core: meme generation orchestration
- catalog: offline topic catalog & scenario sampling
- trends: real-time trending topic lookup (grounded search)
- generator: image generation and image editing adapters
- messaging: LLM caption adapter
- assets: reference image loading & input validation
- render: data URIs, saving results, caption overlay
"""

from .core import MemePipeline, MemeResult, OutputStyle

__all__ = ["MemePipeline", "MemeResult", "OutputStyle"]
