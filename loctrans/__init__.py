"""
LocTrans: batch translation of JSON/YAML localization files with a local LLM.

Every string leaf of a localization tree is sent to an Ollama model, a
few requests at a time, and the translated leaves are reassembled into a
tree of the same shape for each target language.

Example:
    >>> from loctrans import translate_files
    >>> stats = translate_files("translations/*.json", ["en", "de"])
    >>> print(stats.translated_keys)

License: MIT
"""

from __future__ import annotations

import asyncio
from typing import Optional

__version__ = "1.0.0"

from loctrans.config import TranslationConfig
from loctrans.models import TranslationRequest, TranslationResponse, TranslationStats
from loctrans.pipeline import TranslationPipeline, translate_files_async
from loctrans.translate.base import create_translator
from loctrans.tree import flatten, rebuild


def quick_translate(
    text: str,
    source_lang: str,
    target_lang: str,
    config: Optional[TranslationConfig] = None,
) -> str:
    """Translate a single string with the configured Ollama model."""
    translator = create_translator("ollama", config or TranslationConfig.from_env())
    
    async def _run() -> str:
        async with translator:
            response = await translator.translate(
                TranslationRequest(text=text, source_lang=source_lang, target_lang=target_lang)
            )
        return response.translated_text
    
    return asyncio.run(_run())


def translate_files(
    pattern: Optional[str] = None,
    target_langs: Optional[list[str]] = None,
    config: Optional[TranslationConfig] = None,
) -> TranslationStats:
    """Translate every file matching ``pattern`` (default: the files in
    ``TRANSLATIONS_DIR``) and write the results."""
    return asyncio.run(
        translate_files_async(pattern, target_langs, config or TranslationConfig.from_env())
    )


__all__ = [
    "TranslationConfig",
    "TranslationPipeline",
    "TranslationRequest",
    "TranslationResponse",
    "TranslationStats",
    "flatten",
    "rebuild",
    "quick_translate",
    "translate_files",
]
