"""
Runtime configuration for LocTrans.

Configuration is an explicit TranslationConfig value, validated when it
is constructed. ``TranslationConfig.from_env()`` reads it from the
environment (and a ``.env`` file, via python-dotenv):

    OLLAMA_HOST              Ollama server URL      (http://localhost:11434)
    OLLAMA_MODEL             Model name             (llama3.1:8b)
    DEFAULT_SOURCE_LANG      Source language code   (fr)
    DEFAULT_TARGET_LANGS     Comma separated codes  (en,es,de,it,pt,nl)
    MAX_CONCURRENT_REQUESTS  Concurrent calls, 1-10 (3)
    TRANSLATION_TIMEOUT      Per-call timeout in ms, 5000-120000 (30000)
    TRANSLATIONS_DIR         Files translated when no pattern is given (./translations)
    OUTPUT_DIR               Output root directory  (./translations/output)
    OUTPUT_FILE_NAME         Output file name override (unset)

Example:
    >>> from loctrans.config import TranslationConfig
    >>> config = TranslationConfig.from_env(max_concurrent_requests=5)
    >>> config.timeout_seconds
    30.0
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from loctrans.errors import ConfigError

APP_NAME = "LocTrans"

DEFAULT_TARGET_LANGS = ["en", "es", "de", "it", "pt", "nl"]

MIN_CONCURRENCY, MAX_CONCURRENCY = 1, 10
MIN_TIMEOUT_MS, MAX_TIMEOUT_MS = 5000, 120000


def parse_languages(value: str) -> list[str]:
    """Split a comma separated language list, dropping blanks."""
    return [lang.strip() for lang in value.split(",") if lang.strip()]


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError:
        raise ConfigError(f"{name} must be an integer, got {raw!r}") from None


@dataclass
class TranslationConfig:
    """Validated settings shared by the pipeline, dispatcher and translator."""
    ollama_host: str = "http://localhost:11434"
    model: str = "llama3.1:8b"
    source_lang: str = "fr"
    target_langs: list[str] = field(default_factory=lambda: list(DEFAULT_TARGET_LANGS))
    max_concurrent_requests: int = 3
    timeout: int = 30000  # milliseconds
    translations_dir: Path = Path("./translations")  # searched when no pattern is given
    output_dir: Path = Path("./translations/output")
    output_file_name: Optional[str] = None
    
    def __post_init__(self) -> None:
        self.translations_dir = Path(self.translations_dir)
        self.output_dir = Path(self.output_dir)
        self.validate()
    
    def validate(self) -> None:
        """Check required values and ranges.
        
        Raises:
            ConfigError: On the first invalid value
        """
        if not self.ollama_host:
            raise ConfigError("OLLAMA_HOST is required")
        if not self.model:
            raise ConfigError("OLLAMA_MODEL is required")
        if not self.source_lang:
            raise ConfigError("A source language is required")
        if not self.target_langs:
            raise ConfigError("At least one target language is required")
        if not MIN_CONCURRENCY <= self.max_concurrent_requests <= MAX_CONCURRENCY:
            raise ConfigError(
                f"MAX_CONCURRENT_REQUESTS must be between {MIN_CONCURRENCY} and {MAX_CONCURRENCY}"
            )
        if not MIN_TIMEOUT_MS <= self.timeout <= MAX_TIMEOUT_MS:
            raise ConfigError(
                f"TRANSLATION_TIMEOUT must be between {MIN_TIMEOUT_MS}ms and {MAX_TIMEOUT_MS}ms"
            )
    
    @property
    def timeout_seconds(self) -> float:
        return self.timeout / 1000
    
    @classmethod
    def from_env(cls, env_file: Optional[Path] = None, **overrides) -> "TranslationConfig":
        """Build a config from environment variables.
        
        Args:
            env_file: Explicit .env file; by default python-dotenv searches
                from the working directory upwards
            **overrides: Field values that win over the environment
                (None values are ignored, so CLI options can be passed
                through unchanged)
        """
        load_dotenv(dotenv_path=env_file)
        
        values = {
            "ollama_host": os.getenv("OLLAMA_HOST", "http://localhost:11434"),
            "model": os.getenv("OLLAMA_MODEL", "llama3.1:8b"),
            "source_lang": os.getenv("DEFAULT_SOURCE_LANG", "fr"),
            "target_langs": parse_languages(os.getenv("DEFAULT_TARGET_LANGS", ""))
            or list(DEFAULT_TARGET_LANGS),
            "max_concurrent_requests": _env_int("MAX_CONCURRENT_REQUESTS", 3),
            "timeout": _env_int("TRANSLATION_TIMEOUT", 30000),
            "translations_dir": Path(os.getenv("TRANSLATIONS_DIR", "./translations")),
            "output_dir": Path(os.getenv("OUTPUT_DIR", "./translations/output")),
            "output_file_name": os.getenv("OUTPUT_FILE_NAME") or None,
        }
        
        known = {f.name for f in fields(cls)}
        for name, value in overrides.items():
            if name not in known:
                raise ConfigError(f"Unknown configuration field: {name}")
            if value is not None:
                values[name] = value
        
        return cls(**values)
    
    def to_dict(self) -> dict:
        """Serialize config for display/debugging."""
        return {
            "ollama_host": self.ollama_host,
            "model": self.model,
            "source_lang": self.source_lang,
            "target_langs": ", ".join(self.target_langs),
            "max_concurrent_requests": self.max_concurrent_requests,
            "timeout": f"{self.timeout}ms",
            "translations_dir": str(self.translations_dir),
            "output_dir": str(self.output_dir),
            "output_file_name": self.output_file_name or "(source file name)",
        }
