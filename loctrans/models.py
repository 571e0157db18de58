"""
Data model for localization translation.

A localization file is parsed into a plain nested ``dict`` (the source
tree). Its string leaves are flattened into dotted keys, each key becomes
a TranslationRequest, and the translator answers with a
TranslationResponse. FileTranslation and TranslationStats carry the
results of a run back to the caller.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

# A parsed localization document: str keys, nested dicts or scalar/list leaves
Tree = dict[str, Any]


@dataclass
class TranslationRequest:
    """One string to translate.
    
    Attributes:
        text: Source text
        source_lang: Source language code (e.g. 'fr')
        target_lang: Target language code (e.g. 'en')
        context: Optional hint for the model, usually the flattened key
    """
    text: str
    source_lang: str
    target_lang: str
    context: Optional[str] = None


@dataclass
class TranslationResponse:
    """Result of translating one request.
    
    An empty ``translated_text`` is a degraded but valid result: the
    batch dispatcher uses it as a placeholder for failed calls.
    """
    translated_text: str
    source_lang: str
    target_lang: str
    model: str
    
    @classmethod
    def placeholder(cls, model: str = "") -> "TranslationResponse":
        """Response standing in for a failed translation."""
        return cls(translated_text="", source_lang="", target_lang="", model=model)
    
    @property
    def is_placeholder(self) -> bool:
        return not self.translated_text and not self.source_lang and not self.target_lang


@dataclass
class FileTranslation:
    """A loaded source file and its translated trees.
    
    Attributes:
        path: Source file path
        format: Codec name ('json' or 'yaml')
        content: Parsed source tree
        translations: Target language -> rebuilt tree
        errors: Target language -> error message, for pairs that failed
    """
    path: Path
    format: str
    content: Tree
    translations: dict[str, Tree] = field(default_factory=dict)
    errors: dict[str, str] = field(default_factory=dict)


@dataclass
class TranslationStats:
    """Aggregated statistics for one run."""
    total_files: int = 0
    total_keys: int = 0
    translated_keys: int = 0
    failed_requests: int = 0
    languages: list[str] = field(default_factory=list)
    duration: float = 0.0
    output_files: list[Path] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)
    
    @property
    def success(self) -> bool:
        return len(self.errors) == 0
    
    def to_dict(self) -> dict:
        """Serialize stats for display."""
        return {
            "total_files": self.total_files,
            "total_keys": self.total_keys,
            "translated_keys": self.translated_keys,
            "failed_requests": self.failed_requests,
            "languages": ", ".join(self.languages),
            "duration": f"{self.duration:.1f}s",
        }
