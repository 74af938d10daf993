"""Tests for translation job construction."""

import pytest

from deeplx_bridge.lmt.exceptions import MalformedUpstreamResponse
from deeplx_bridge.lmt.jobs import build_jobs
from deeplx_bridge.lmt.models import Chunk, Sentence


def _chunks(*texts):
    return [Chunk(sentences=[Sentence(text=t)]) for t in texts]


class TestBuildJobs:

    def test_single_chunk_has_no_context(self):
        jobs = build_jobs(_chunks("Hello world."))
        assert len(jobs) == 1
        assert jobs[0].context_before == []
        assert jobs[0].context_after == []
        assert jobs[0].id == 1

    def test_neighbouring_context(self):
        jobs = build_jobs(_chunks("One.", "Two.", "Three."))
        assert [job.id for job in jobs] == [1, 2, 3]
        assert [job.context_before for job in jobs] == [[], ["One."], ["Two."]]
        assert [job.context_after for job in jobs] == [["Two."], ["Three."], []]

    def test_context_is_only_adjacent_sentence(self):
        jobs = build_jobs(_chunks("A.", "B.", "C.", "D.", "E."))
        assert jobs[2].context_before == ["B."]
        assert jobs[2].context_after == ["D."]

    def test_prefix_preserved(self):
        chunks = [Chunk(sentences=[Sentence(text="Two.", prefix=" ")])]
        assert build_jobs(chunks)[0].sentence.prefix == " "

    def test_chunk_without_sentence_raises(self):
        chunks = _chunks("One.") + [Chunk(sentences=[])]
        with pytest.raises(MalformedUpstreamResponse) as exc_info:
            build_jobs(chunks)
        assert "chunk 1" in str(exc_info.value)
        assert exc_info.value.details["chunk_index"] == 1

    def test_multi_sentence_chunk_uses_first_sentence(self):
        chunks = [Chunk(sentences=[Sentence(text="First."), Sentence(text="Second.")])]
        jobs = build_jobs(chunks)
        assert jobs[0].sentence.text == "First."

    def test_empty_input(self):
        assert build_jobs([]) == []


def test_job_payload_shape():
    job = build_jobs(_chunks("One.", "Two."))[1]
    assert job.to_payload() == {
        "kind": "default",
        "preferred_num_beams": 4,
        "raw_en_context_before": ["One."],
        "raw_en_context_after": [],
        "sentences": [{"prefix": "", "text": "Two.", "id": 2}],
    }
