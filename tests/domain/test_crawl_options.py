import dataclasses

import pytest

from wordcrawl.domain import CrawlOptions, CrawlResult, PageResult


def test_defaults_crawl_only_the_seed():
    options = CrawlOptions()
    assert options.parallel == 1
    assert options.max_depth == 0
    assert options.limit == 0
    assert options.verbose is False
    assert options.deadline is None


def test_exceeds_max_depth():
    options = CrawlOptions(max_depth=2)
    assert not options.exceeds_max_depth(0)
    assert not options.exceeds_max_depth(2)
    assert options.exceeds_max_depth(3)


def test_options_are_immutable():
    options = CrawlOptions()
    with pytest.raises(dataclasses.FrozenInstanceError):
        options.max_depth = 5


def test_invalid_values_are_rejected():
    with pytest.raises(ValueError):
        CrawlOptions(parallel=0)
    with pytest.raises(ValueError):
        CrawlOptions(max_depth=-1)
    with pytest.raises(ValueError):
        CrawlOptions(limit=-0.5)
    with pytest.raises(ValueError):
        CrawlOptions(deadline=0)


def test_crawl_result_totals():
    result = CrawlResult(
        pages={
            "https://example.com": PageResult("https://example.com", 4, 1),
            "https://example.com/a": PageResult("https://example.com/a", 6, 3),
        },
        items_processed=3,
        stopped=False,
        elapsed=0.5,
    )
    assert result.visited == 2
    assert result.total_words == 10
    assert result.total_numbers == 4
