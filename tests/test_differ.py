"""
Tests for the streaming comparator.

Run with: pytest tests/ -v
"""

import io

import pytest

from snapshot_diff import (
    Added,
    DiffAggregator,
    DiffConfig,
    FieldChange,
    Incompatible,
    Modified,
    Removed,
    StreamingCSVReader,
    StreamingComparator,
)
from snapshot_diff.csv_reader import open_table_file
from snapshot_diff.errors import IdFieldOutOfRangeError, RecordReadError
from snapshot_diff.loader import TableLoader


def compare(load_table, candidate_reader, baseline, candidate, config=None):
    config = config or DiffConfig(id_index=0)
    table = load_table(baseline, config)
    return list(StreamingComparator(table, candidate_reader(candidate, config), config))


class TestStreamingComparator:
    """Tests for classifying candidate rows."""

    def test_documented_example(self, load_table, candidate_reader):
        """Test modified, added and removed records in one run."""
        events = compare(
            load_table, candidate_reader,
            "id|name|age\n1|Alice|30\n2|Bob|40\n",
            "id|name|age\n1|Alice|31\n3|Carl|22\n",
        )

        assert events == [
            Modified(1, 1, '1', (FieldChange('age', 'age', '30', '31'),)),
            Added('3', 2),
            Removed('2', 2),
        ]

    def test_identical_rows_emit_nothing(self, load_table, candidate_reader):
        """Test that equal rows produce no event."""
        events = compare(load_table, candidate_reader, "id|v\n1|a\n2|b\n", "id|v\n2|b\n1|a\n")

        assert events == []

    def test_field_change_per_differing_column(self, load_table, candidate_reader):
        """Test one FieldChange per differing position, in column order."""
        events = compare(
            load_table, candidate_reader,
            "id|a|b|c\n1|x|y|z\n",
            "id|a|b|c\n1|X|y|Z\n",
        )

        assert len(events) == 1
        changes = events[0].field_changes
        assert [c.label for c in changes] == ['a', 'c']
        assert [(c.left_value, c.right_value) for c in changes] == [('x', 'X'), ('z', 'Z')]

    def test_width_mismatch_is_incompatible(self, load_table, candidate_reader):
        """Test that a wider candidate row is never compared field by field."""
        events = compare(
            load_table, candidate_reader,
            "id|v\n1|a\n",
            "id|v\n1|a|extra\n",
        )

        assert events == [Incompatible(1, 1, '1', 2, 3)]

    def test_incompatible_even_when_values_differ(self, load_table, candidate_reader):
        """Test that width mismatch wins over value differences."""
        events = compare(
            load_table, candidate_reader,
            "id|v|w\n1|a|b\n",
            "id|v|w\n1|z\n",
        )

        assert events == [Incompatible(1, 1, '1', 3, 2)]

    def test_row_numbers(self, load_table, candidate_reader):
        """Test that row numbers are 1-based data positions in each file."""
        events = compare(
            load_table, candidate_reader,
            "id|v\n1|a\n2|b\n3|c\n",
            "id|v\n9|z\n3|C\n",
        )

        assert events[0] == Added('9', 1)
        assert events[1].left_row_number == 3
        assert events[1].right_row_number == 2
        assert events[2:] == [Removed('1', 1), Removed('2', 2)]

    def test_removed_in_baseline_order(self, load_table, candidate_reader):
        """Test that removed rows come last, in ascending baseline order."""
        events = compare(
            load_table, candidate_reader,
            "id|v\n4|d\n1|a\n3|c\n2|b\n",
            "id|v\n3|c\n5|e\n",
        )

        assert events == [Added('5', 2), Removed('4', 1), Removed('1', 2), Removed('2', 4)]

    def test_paired_label_when_headers_differ(self, load_table, candidate_reader):
        """Test that a renamed column is labelled with both header names."""
        events = compare(
            load_table, candidate_reader,
            "id|age\n1|30\n",
            "id|years\n1|31\n",
        )

        change = events[0].field_changes[0]
        assert change.left_header == 'age'
        assert change.right_header == 'years'
        assert change.label == 'age - years'

    def test_placeholder_labels_without_header(self, load_table, candidate_reader):
        """Test that headerless files label columns by number."""
        config = DiffConfig(id_index=0, has_header=False)
        events = compare(load_table, candidate_reader, "1|a|b\n", "1|a|c\n", config)

        assert events == [Modified(1, 1, '1', (FieldChange('#3', '#3', 'b', 'c'),))]

    def test_duplicate_baseline_id(self, load_table, candidate_reader):
        """Test that a repeated identifier diffs against its last row only."""
        events = compare(
            load_table, candidate_reader,
            "id|v\n5|old\n6|x\n5|new\n",
            "id|v\n5|newer\n6|x\n",
        )

        assert events == [Modified(3, 1, '5', (FieldChange('v', 'v', 'new', 'newer'),))]

    def test_duplicate_candidate_id(self, load_table, candidate_reader):
        """Test that each candidate occurrence is compared independently."""
        events = compare(
            load_table, candidate_reader,
            "id|v\n1|a\n",
            "id|v\n1|a\n1|b\n",
        )

        assert events == [Modified(1, 2, '1', (FieldChange('v', 'v', 'a', 'b'),))]

    def test_id_column_not_first(self, load_table, candidate_reader):
        """Test matching on the second column."""
        config = DiffConfig.from_id_column(2)
        events = compare(
            load_table, candidate_reader,
            "code|id\nA|1\nB|2\n",
            "code|id\nZ|2\n",
            config,
        )

        assert events == [
            Modified(2, 1, '2', (FieldChange('code', 'code', 'B', 'Z'),)),
            Removed('1', 1),
        ]

    def test_values_survive_buffer_reuse(self, load_table, candidate_reader):
        """Test that collected events are unaffected by later reads."""
        events = compare(
            load_table, candidate_reader,
            "id|v\n1|a\n2|b\n",
            "id|v\n1|A\n2|B\n3|c\n",
        )

        assert [e.field_changes[0].right_value for e in events[:2]] == ['A', 'B']
        assert events[2] == Added('3', 3)

    def test_seen_ids_tracked(self, load_table, candidate_reader):
        """Test that every candidate identifier is recorded."""
        config = DiffConfig(id_index=0)
        table = load_table("id|v\n1|a\n", config)
        comparator = StreamingComparator(table, candidate_reader("id|v\n1|a\n7|b\n"), config)
        list(comparator)

        assert comparator.seen_ids == {'1', '7'}

    def test_lazy_evaluation(self, load_table, candidate_reader):
        """Test that events are produced one candidate row at a time."""
        config = DiffConfig(id_index=0)
        table = load_table("id|v\n1|a\n", config)
        comparator = StreamingComparator(table, candidate_reader("id|v\n8|x\n9|y\n"), config)

        events = iter(comparator)
        assert next(events) == Added('8', 1)
        assert comparator.seen_ids == {'8'}

    def test_not_restartable(self, load_table, candidate_reader):
        """Test that a second iteration is refused."""
        config = DiffConfig(id_index=0)
        table = load_table("id|v\n1|a\n", config)
        comparator = StreamingComparator(table, candidate_reader("id|v\n1|a\n"), config)
        list(comparator)

        with pytest.raises(RuntimeError):
            iter(comparator)

    def test_malformed_candidate_aborts(self, load_table, candidate_reader):
        """Test that a bad record stops the stream after earlier events."""
        config = DiffConfig(id_index=0)
        table = load_table("id|v\n1|a\n2|b\n", config)
        comparator = StreamingComparator(
            table, candidate_reader('id|v\n3|c\n2|"b"x\n1|a\n'), config
        )

        events = iter(comparator)
        assert next(events) == Added('3', 1)
        with pytest.raises(RecordReadError):
            next(events)

    def test_short_candidate_row_aborts(self, load_table, candidate_reader):
        """Test that a candidate row without an identifier is fatal."""
        config = DiffConfig(id_index=1)
        table = load_table("code|id\nA|1\n", config)
        comparator = StreamingComparator(table, candidate_reader("code|id\nA\n", config), config)

        with pytest.raises(IdFieldOutOfRangeError) as exc_info:
            list(comparator)
        assert exc_info.value.row_number == 1


class TestComparatorProperties:
    """Properties that hold for whole runs."""

    def test_self_comparison(self, baseline_psv):
        """Test that a file compared with itself has no differences."""
        config = DiffConfig.from_id_column(2)
        with open_table_file(baseline_psv) as f:
            table = TableLoader(config).load(f)
        with open_table_file(baseline_psv) as f:
            reader = StreamingCSVReader(f, reuse_record=True)
            stats = DiffAggregator().consume(StreamingComparator(table, reader, config))

        assert stats.added_count == 0
        assert stats.removed_count == 0
        assert stats.modified_field_counts == {}

    def test_deterministic_ordering(self, baseline_psv, candidate_psv):
        """Test that repeated runs produce the same events."""
        config = DiffConfig.from_id_column(2)

        def run():
            with open_table_file(baseline_psv) as f:
                table = TableLoader(config).load(f)
            with open_table_file(candidate_psv) as f:
                return list(StreamingComparator(table, StreamingCSVReader(f), config))

        first = run()
        assert first == run()
        assert first == [
            Modified(1, 1, '1', (FieldChange('age', 'age', '30', '31'),)),
            Incompatible(4, 3, '4', 4, 5),
            Added('5', 4),
            Removed('2', 2),
        ]

    def test_each_unseen_id_removed_once(self, load_table, candidate_reader):
        """Test that removed identifiers are reported exactly once."""
        baseline = "id|v\n" + "".join(f"{i}|x\n" for i in range(20))
        candidate = "id|v\n" + "".join(f"{i}|x\n" for i in range(0, 20, 3))
        events = compare(load_table, candidate_reader, baseline, candidate)

        removed = [e.id for e in events if isinstance(e, Removed)]
        expected = [str(i) for i in range(20) if i % 3]
        assert removed == expected
        assert all(isinstance(e, Removed) for e in events)

    def test_unseen_duplicate_id_removed_once(self, load_table, candidate_reader):
        """Test that a repeated baseline identifier missing from the candidate is removed once."""
        events = compare(
            load_table, candidate_reader,
            "id|v\n5|old\n6|x\n7|y\n5|new\n7|z\n",
            "id|v\n6|x\n",
        )

        assert events == [Removed('5', 4), Removed('7', 5)]
        stats = DiffAggregator().consume(events)
        assert stats.removed_count == 2

    def test_added_ids_never_modified(self, load_table, candidate_reader):
        """Test that unknown identifiers only ever yield Added."""
        events = compare(
            load_table, candidate_reader,
            "id|v\n1|a\n",
            "id|v\n2|a\n3|a|b\n",
        )

        assert events == [Added('2', 1), Added('3', 2), Removed('1', 1)]


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
