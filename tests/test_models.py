"""
Tests for data models and parameter validation.
"""
import dataclasses
import pytest
from dupfind.core.models import File, DuplicateGroup, DeduplicationParams, DeduplicationStats


class TestFile:
    def test_name_is_basename(self):
        assert File(path="/some/dir/photo.jpg", size=1).name == "photo.jpg"

    def test_is_immutable(self):
        file = File(path="/a", size=1)
        with pytest.raises(dataclasses.FrozenInstanceError):
            file.size = 2


class TestDuplicateGroup:
    def test_add_file_rejects_different_size(self):
        group = DuplicateGroup(size=10, files=[])
        group.add_file(File("/a", 10))
        with pytest.raises(ValueError):
            group.add_file(File("/b", 11))
        assert group.duplicate_count == 1
        assert not group.is_duplicate()

    def test_wasted_space_of_empty_group(self):
        assert DuplicateGroup(size=10, files=[]).wasted_space == 0


class TestDeduplicationParams:
    def test_defaults(self):
        params = DeduplicationParams(root_dir="/data")
        assert params.min_size_bytes is None
        assert params.max_size_bytes is None
        assert params.excluded_dirs == []
        assert params.max_workers == 1

    @pytest.mark.parametrize("kwargs, message", [
        ({"root_dir": ""}, "cannot be empty"),
        ({"root_dir": "/d", "min_size_bytes": -1}, "Minimum size"),
        ({"root_dir": "/d", "max_size_bytes": -1}, "Maximum size cannot be negative"),
        ({"root_dir": "/d", "min_size_bytes": 10, "max_size_bytes": 5}, "less than minimum"),
        ({"root_dir": "/d", "max_workers": 0}, "workers"),
    ])
    def test_validation(self, kwargs, message):
        with pytest.raises(ValueError, match=message):
            DeduplicationParams(**kwargs)


class TestDeduplicationStats:
    def test_update_stage_accumulates(self):
        stats = DeduplicationStats()
        stats.update_stage("size", 2, 5, 0.1)
        stats.update_stage("size", 1, 3, 0.2)
        assert stats.stage_stats["size"]["groups"] == 3
        assert stats.stage_stats["size"]["files"] == 8

    def test_listener_errors_do_not_propagate(self):
        stats = DeduplicationStats()
        received = []

        def broken(stage, data):
            raise RuntimeError("boom")

        stats.add_listener(broken)
        stats.add_listener(lambda stage, data: received.append(stage))
        stats.update_stage("partial", 1, 2, 0.0)

        assert received == ["partial"]

    def test_summary_mentions_stages_and_skips(self):
        stats = DeduplicationStats()
        stats.update_stage("size", 1, 2, 0.0)
        stats.update_stage("full", 1, 2, 0.0)
        stats.record_skip("/x", "unreadable", "Full Hash")

        summary = stats.print_summary()

        assert "Size Groups: 1 / 2" in summary
        assert "Full Content Hash Groups: 1 / 2" in summary
        assert "Skipped entries: 1" in summary
