"""
Tests for bounded-concurrency batch translation.

Run with: pytest tests/test_batch.py -v
"""

import asyncio

import pytest

from conftest import ScriptedTranslator
from loctrans.models import TranslationRequest
from loctrans.translate.base import DummyTranslator
from loctrans.translate.batch import BatchDispatcher, chunked


def make_requests(*texts, target_lang="en"):
    return [
        TranslationRequest(text=t, source_lang="fr", target_lang=target_lang, context=f"Key: k{i}")
        for i, t in enumerate(texts)
    ]


def run_batch(translator, requests, concurrency):
    dispatcher = BatchDispatcher(translator, concurrency)
    return asyncio.run(dispatcher.translate_batch(requests)), dispatcher


class TestChunked:
    """Tests for chunked()."""
    
    def test_limit_one_gives_single_item_groups(self):
        assert chunked([1, 2, 3, 4, 5], 1) == [[1], [2], [3], [4], [5]]
    
    def test_limit_equal_to_size_gives_one_group(self):
        assert chunked([1, 2, 3, 4, 5], 5) == [[1, 2, 3, 4, 5]]
    
    def test_last_group_may_be_smaller(self):
        assert chunked([1, 2, 3, 4, 5], 2) == [[1, 2], [3, 4], [5]]
    
    def test_empty(self):
        assert chunked([], 3) == []
    
    def test_invalid_size(self):
        with pytest.raises(ValueError):
            chunked([1], 0)


class TestBatchDispatcher:
    """Tests for BatchDispatcher.translate_batch()."""
    
    def test_rejects_non_positive_limit(self):
        with pytest.raises(ValueError):
            BatchDispatcher(DummyTranslator(), 0)
    
    def test_empty_batch(self, scripted):
        results, _ = run_batch(scripted, [], 3)
        assert results == []
        assert scripted.calls == []
    
    @pytest.mark.parametrize("concurrency", [1, 2, 3, 7, 50])
    def test_output_length_matches_input(self, scripted, concurrency):
        requests = make_requests(*[f"t{i}" for i in range(7)])
        results, _ = run_batch(scripted, requests, concurrency)
        assert len(results) == len(requests)
    
    def test_results_follow_input_order(self):
        """Placement is by index even when later calls finish first."""
        texts = ["slow", "medium", "fast"]
        translator = ScriptedTranslator(delays={"slow": 0.05, "medium": 0.02, "fast": 0.0})
        results, _ = run_batch(translator, make_requests(*texts), 3)
        assert [r.translated_text for r in results] == ["slow-en", "medium-en", "fast-en"]
    
    def test_limit_one_is_sequential(self, scripted):
        results, _ = run_batch(scripted, make_requests("a", "b", "c", "d", "e"), 1)
        assert scripted.max_in_flight == 1
        assert [c.text for c in scripted.calls] == ["a", "b", "c", "d", "e"]
        assert len(results) == 5
    
    def test_limit_equal_to_size_runs_one_group(self, scripted):
        run_batch(scripted, make_requests("a", "b", "c", "d", "e"), 5)
        assert scripted.max_in_flight == 5
    
    def test_concurrency_never_exceeds_limit(self, scripted):
        run_batch(scripted, make_requests(*[f"t{i}" for i in range(10)]), 3)
        assert scripted.max_in_flight == 3
    
    def test_failure_is_isolated(self):
        """A failed call leaves a placeholder and does not affect the others."""
        translator = ScriptedTranslator(fail_on={"boom"})
        results, dispatcher = run_batch(translator, make_requests("a", "boom", "c", "d"), 2)
        
        assert results[1].is_placeholder
        assert results[1].translated_text == ""
        assert results[1].source_lang == ""
        assert results[1].target_lang == ""
        assert [r.translated_text for i, r in enumerate(results) if i != 1] == ["a-en", "c-en", "d-en"]
        assert dispatcher.failures == 1
    
    def test_failing_group_does_not_stop_later_groups(self):
        translator = ScriptedTranslator(fail_on={"a", "b"})
        results, _ = run_batch(translator, make_requests("a", "b", "c"), 2)
        assert [r.is_placeholder for r in results] == [True, True, False]
        assert len(translator.calls) == 3
    
    def test_failure_is_logged(self, caplog):
        translator = ScriptedTranslator(fail_on={"boom"})
        with caplog.at_level("WARNING", logger="loctrans.translate.batch"):
            run_batch(translator, make_requests("boom"), 1)
        assert "Translation failed" in caplog.text
        assert "Key: k0" in caplog.text
    
    def test_successful_responses_pass_through(self):
        results, _ = run_batch(DummyTranslator(mode="upper"), make_requests("abc"), 1)
        assert results[0].translated_text == "ABC"
        assert results[0].target_lang == "en"
        assert results[0].model == "dummy-upper"
