"""Translation backends and batch dispatch."""

from loctrans.translate.base import DummyTranslator, Translator, create_translator
from loctrans.translate.batch import BatchDispatcher, chunked

__all__ = [
    "Translator",
    "DummyTranslator",
    "create_translator",
    "BatchDispatcher",
    "chunked",
]
