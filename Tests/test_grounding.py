from types import SimpleNamespace

import pytest

from veritas_guard.core.grounding import collect_grounding_sources
from veritas_guard.core.schemas import GroundingSource, Language


def _chunk(index: int) -> dict:
    return {
        "web": {"uri": f"https://news.example/{index}", "title": f"Article {index}"},
        "maps": {"uri": f"https://maps.example/{index}", "title": f"Place {index}"},
    }


@pytest.mark.parametrize("count", [0, 1, 3])
def test_entries_with_both_sub_records_yield_two_sources(count):
    sources = collect_grounding_sources([_chunk(i) for i in range(count)])
    assert len(sources) == 2 * count
    expected = []
    for i in range(count):
        expected.append(GroundingSource(uri=f"https://news.example/{i}", title=f"Article {i}"))
        expected.append(GroundingSource(uri=f"https://maps.example/{i}", title=f"Place {i}"))
    assert sources == expected


def test_duplicates_are_kept():
    chunk = {"web": {"uri": "https://same.example", "title": "Same"}}
    assert len(collect_grounding_sources([chunk, chunk])) == 2


def test_missing_titles_are_localized():
    citations = [
        {"web": {"uri": "https://a.example"}},
        {"maps": {"uri": "https://maps.example", "title": None}},
    ]
    english = collect_grounding_sources(citations, Language.EN)
    russian = collect_grounding_sources(citations, Language.RU)
    assert [s.title for s in english] == ["Web Source", "Google Maps Location"]
    assert [s.title for s in russian] == ["Веб-источник", "Локация Google Maps"]


def test_entries_without_uris_contribute_nothing():
    citations = [{}, {"web": {"title": "No link"}}, {"retrieved_context": {"uri": "x"}}, None]
    assert collect_grounding_sources(citations) == []


def test_none_citations():
    assert collect_grounding_sources(None) == []


def test_sdk_style_objects():
    """Attribute-style chunks, as returned by the SDK, are read the same way."""
    chunk = SimpleNamespace(
        web=None, maps=SimpleNamespace(uri="https://maps.example/9", title="Harbor")
    )
    assert collect_grounding_sources([chunk]) == [
        GroundingSource(uri="https://maps.example/9", title="Harbor")
    ]
