# Tests
import asyncio

import pytest

from github_tree_fs.domain.entities import RawTreeEntry
from github_tree_fs.services.directory_timestamp import DirectoryTimestampAggregator
from github_tree_fs.services.metadata_normalizer import normalize_entries


def _lookup(created):
    calls = []

    async def created_timestamp(path):
        calls.append(path)
        await asyncio.sleep(0)
        return created[path]

    return created_timestamp, calls


TREE = [
    RawTreeEntry(path="D", type="tree"),
    RawTreeEntry(path="D/f1", type="blob"),
    RawTreeEntry(path="D/sub", type="tree"),
    RawTreeEntry(path="D/sub/f2", type="blob"),
    RawTreeEntry(path="D/link", type="commit"),
    RawTreeEntry(path="E", type="tree"),
    RawTreeEntry(path="other", type="blob"),
]


# Aggregation Tests
class TestAggregate:

    @pytest.mark.asyncio
    async def test_is_max_over_file_descendants(self):
        lookup, calls = _lookup({"D/f1": 100, "D/sub/f2": 200, "other": 999})
        aggregator = DirectoryTimestampAggregator(lookup)

        assert await aggregator.aggregate(TREE, "D") == 200
        assert sorted(calls) == ["D/f1", "D/sub/f2"]

    @pytest.mark.asyncio
    async def test_empty_directory_is_epoch(self):
        lookup, calls = _lookup({})
        aggregator = DirectoryTimestampAggregator(lookup)

        assert await aggregator.aggregate(TREE, "E") == 0
        assert calls == []

    @pytest.mark.asyncio
    async def test_nested_directory(self):
        lookup, _ = _lookup({"D/sub/f2": 200})
        assert await DirectoryTimestampAggregator(lookup).aggregate(TREE, "D/sub") == 200

    @pytest.mark.asyncio
    async def test_accepts_normalized_entries(self):
        lookup, _ = _lookup({"D/f1": 100, "D/sub/f2": 200})
        aggregator = DirectoryTimestampAggregator(lookup)

        assert await aggregator.aggregate(normalize_entries(TREE), "/D/") == 200

    @pytest.mark.asyncio
    async def test_respects_concurrency_limit(self):
        in_flight, peak = 0, 0

        async def slow(path):
            nonlocal in_flight, peak
            in_flight += 1
            peak = max(peak, in_flight)
            await asyncio.sleep(0.01)
            in_flight -= 1
            return 1

        tree = [RawTreeEntry(path=f"d/{i}", type="blob") for i in range(8)]
        aggregator = DirectoryTimestampAggregator(slow, max_concurrency=2)

        assert await aggregator.aggregate(tree, "d") == 1
        assert peak == 2
