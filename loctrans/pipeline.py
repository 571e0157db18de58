"""
Localization file translation pipeline.

This module orchestrates the complete workflow for a set of files:
1. Expand the file pattern and load every file (fail fast, nothing written)
2. For each file and target language:
   flatten -> build requests -> batch translate -> rebuild
3. Save the rebuilt trees, one directory per language
4. Aggregate statistics

Output layout:
    <output_dir>/<lang>/<source file name>

Design Philosophy:
- Loading errors (no match, unsupported format, malformed document) are
  fatal and happen before any translation call
- A failure while translating one file/language pair is recorded and
  the other pairs continue
- A failed string becomes an empty string; it never fails a file
"""

from __future__ import annotations

import glob
import logging
import time
from pathlib import Path
from typing import Callable

from loctrans.config import TranslationConfig
from loctrans.errors import ConfigError, NoFilesMatchedError
from loctrans.formats import FORMATS, load_file, save_file
from loctrans.models import FileTranslation, TranslationRequest, Tree, TranslationStats
from loctrans.translate.base import Translator, create_translator
from loctrans.translate.batch import BatchDispatcher
from loctrans.tree import count_leaves, flatten, rebuild

logger = logging.getLogger(__name__)

# Type alias for progress callbacks: (message, fraction done)
ProgressCallback = Callable[[str, float], None]


def find_files(pattern: str) -> list[Path]:
    """Expand a glob pattern into a sorted list of files."""
    matches = sorted(glob.glob(pattern, recursive=True))
    return [Path(m) for m in matches if Path(m).is_file()]


def find_locale_files(directory: Path) -> list[Path]:
    """Files directly inside ``directory`` with a supported extension, sorted."""
    if not directory.is_dir():
        return []
    return sorted(p for p in directory.iterdir() if p.is_file() and p.suffix.lower() in FORMATS)


class TranslationPipeline:
    """Translate localization trees and files into several languages.
    
    Usage:
        config = TranslationConfig.from_env()
        async with TranslationPipeline(config) as pipeline:
            stats = await pipeline.process_files("translations/*.json", ["en", "de"])
    """
    
    def __init__(
        self,
        config: TranslationConfig | None = None,
        translator: Translator | None = None,
        progress_callback: ProgressCallback | None = None,
    ):
        self.config = config or TranslationConfig()
        self.translator = translator or create_translator("ollama", self.config)
        self.dispatcher = BatchDispatcher(self.translator, self.config.max_concurrent_requests)
        self.progress_callback = progress_callback or (lambda msg, pct: None)
    
    async def __aenter__(self) -> "TranslationPipeline":
        return self
    
    async def __aexit__(self, *exc_info) -> None:
        await self.translator.close()
    
    def build_requests(self, pairs: list[tuple[str, str]], target_lang: str) -> list[TranslationRequest]:
        return [
            TranslationRequest(
                text=text,
                source_lang=self.config.source_lang,
                target_lang=target_lang,
                context=f"Key: {key}",
            )
            for key, text in pairs
        ]
    
    async def translate_tree(self, tree: Tree, target_lang: str) -> tuple[Tree, int]:
        """Translate every string leaf of a tree into one language.
        
        Returns:
            (rebuilt tree, number of strings that failed and were left empty)
        """
        pairs = flatten(tree)
        requests = self.build_requests(pairs, target_lang)
        responses = await self.dispatcher.translate_batch(requests)
        
        failed = sum(1 for r in responses if r.is_placeholder)
        translated = rebuild(
            (key, response.translated_text or "")
            for (key, _), response in zip(pairs, responses)
        )
        return translated, failed
    
    def load_files(self, pattern: str | None = None) -> list[FileTranslation]:
        """Load every file matching ``pattern``.
        
        Without a pattern, the JSON/YAML files of ``config.translations_dir``
        are loaded.
        
        Raises:
            NoFilesMatchedError: If nothing matches
            UnsupportedFormatError: For an unknown extension
            MalformedDocumentError: For a file that does not parse
        """
        if pattern is None:
            paths = find_locale_files(self.config.translations_dir)
            if not paths:
                raise NoFilesMatchedError(str(self.config.translations_dir / "*.{json,yaml,yml}"))
        else:
            paths = find_files(pattern)
            if not paths:
                raise NoFilesMatchedError(pattern)
        
        loaded = []
        for path in paths:
            content, fmt = load_file(path)
            loaded.append(FileTranslation(path=path, format=fmt, content=content))
        return loaded
    
    def output_path(self, file: FileTranslation, lang: str) -> Path:
        name = self.config.output_file_name or file.path.name
        return self.config.output_dir / lang / name
    
    async def process_file(
        self,
        file: FileTranslation,
        target_langs: list[str],
        stats: TranslationStats,
    ) -> FileTranslation:
        """Translate one loaded file into every target language."""
        for lang in target_langs:
            logger.info("Translating %s to %s...", file.path, lang)
            try:
                tree, failed = await self.translate_tree(file.content, lang)
            except Exception as e:
                message = f"Translation of {file.path} to {lang} failed: {e}"
                logger.error(message)
                file.errors[lang] = str(e)
                stats.errors.append(message)
                continue
            file.translations[lang] = tree
            stats.failed_requests += failed
        return file
    
    def save_translations(self, files: list[FileTranslation]) -> list[Path]:
        """Write every translated tree to its output path."""
        written = []
        for file in files:
            for lang, tree in file.translations.items():
                path = save_file(self.output_path(file, lang), tree, file.format)
                logger.info("Saved: %s", path)
                written.append(path)
        return written
    
    async def process_files(
        self,
        pattern: str | None = None,
        target_langs: list[str] | None = None,
    ) -> TranslationStats:
        """Translate all files matching ``pattern`` into ``target_langs``.
        
        Args:
            pattern: Glob pattern selecting source files (defaults to the
                JSON/YAML files in ``config.translations_dir``)
            target_langs: Target language codes (defaults to the config's)
            
        Returns:
            TranslationStats for the whole run
        """
        start = time.monotonic()
        target_langs = list(target_langs or self.config.target_langs)
        
        files = self.load_files(pattern)
        if self.config.output_file_name and len(files) > 1:
            raise ConfigError("An output file name can only be used with a single input file")
        logger.info("Processing %d file(s)...", len(files))
        
        stats = TranslationStats(
            total_files=len(files),
            languages=[self.config.source_lang, *target_langs],
        )
        
        for index, file in enumerate(files):
            self.progress_callback(f"Translating {file.path.name}...", index / len(files))
            await self.process_file(file, target_langs, stats)
            
            key_count = count_leaves(file.content)
            stats.total_keys += key_count
            stats.translated_keys += key_count * len(target_langs)
        
        self.progress_callback("Saving translations...", 0.95)
        stats.output_files = self.save_translations(files)
        stats.duration = time.monotonic() - start
        self.progress_callback("Complete!", 1.0)
        return stats


# ============================================================================
# Convenience Functions
# ============================================================================

async def translate_files_async(
    pattern: str | None = None,
    target_langs: list[str] | None = None,
    config: TranslationConfig | None = None,
    translator: Translator | None = None,
) -> TranslationStats:
    async with TranslationPipeline(config, translator=translator) as pipeline:
        return await pipeline.process_files(pattern, target_langs)
