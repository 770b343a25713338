from __future__ import annotations

import datetime
import doctest

import pytest

import revisiondiff
from revisiondiff import (
    ComparisonConfig, DiffOp, EntitySnapshot, EntityStore, FieldValue, InMemoryEntityStore,
    InputError, Layout, RevisionSelection, build_overview, compare_revision_ids,
    render_revision_diff, validate_selection,
)
from revisiondiff import line_differ

WHEN = datetime.datetime(2024, 3, 1, 12, 0)


def _snapshot(revision_id, title, body, entity_id="node/7", **kwargs):
    fields = {
        "title": FieldValue("string", [title]),
        "body": FieldValue("text_with_summary", [{"value": body, "summary": "", "format": "basic_html"}]),
    }
    created = WHEN + datetime.timedelta(hours=revision_id)
    return EntitySnapshot(entity_id, revision_id, created, "bo", fields=fields, **kwargs)


def _store():
    return InMemoryEntityStore([
        _snapshot(1, "Draft", "<p>Intro</p><p>Old ending</p>", log_message="created"),
        _snapshot(2, "Draft", "<p>Intro</p><p>New ending</p>"),
        _snapshot(3, "Final", "<p>Intro</p><p>New ending</p><p>Credits</p>", is_current=True),
    ])


def _config():
    return ComparisonConfig(field_labels={"title": "Title", "body": "Body"})


def test_doctests_revisiondiff_package():
    res = doctest.testmod(revisiondiff, verbose=False)
    assert res.failed == 0


def test_doctests_line_differ_module():
    res = doctest.testmod(line_differ, verbose=False)
    assert res.failed == 0


def test_validate_selection_puts_older_revision_left():
    assert validate_selection(RevisionSelection(3, 1)) == RevisionSelection(1, 3)
    assert validate_selection(RevisionSelection(1, 3)) == RevisionSelection(1, 3)


@pytest.mark.parametrize("left,right", [(5, 5), (None, 2), (2, None), (None, None)])
def test_validate_selection_rejects_bad_pairs(left, right):
    with pytest.raises(InputError):
        validate_selection(RevisionSelection(left, right))


def test_same_revision_selected_twice_raises():
    with pytest.raises(InputError) as excinfo:
        compare_revision_ids(_store(), "node/7", RevisionSelection(5, 5))
    assert excinfo.value.revision_ids == (5, 5)


def test_unknown_revision_raises_before_comparing():
    with pytest.raises(InputError):
        compare_revision_ids(_store(), "node/7", RevisionSelection(1, 42))
    with pytest.raises(InputError):
        compare_revision_ids(_store(), "node/8", RevisionSelection(1, 2))


def test_compare_revision_ids_builds_changes_only_table():
    table = compare_revision_ids(_store(), "node/7", RevisionSelection(2, 1), _config())
    assert [cell.data.revision_id for cell in table.header] == [1, 2]
    assert [group.field_name for group in table.groups] == ["body"]
    body = table.groups[0]
    assert body.label_row.cells[0].data == "Body"
    assert [(row.op, row.left_text, row.right_text) for row in body.diff_rows] == [
        (DiffOp.EQUAL, "Intro", "Intro"),
        (DiffOp.EQUAL, "", ""),
        (DiffOp.CHANGE, "Old ending", "New ending"),
    ]


def test_compare_across_several_fields():
    table = compare_revision_ids(_store(), "node/7", RevisionSelection(1, 3), _config())
    assert [group.field_name for group in table.groups] == ["title", "body"]
    title, body = table.groups
    assert [row.op for row in title.diff_rows] == [DiffOp.DELETE, DiffOp.INSERT]
    assert [row.op for row in body.diff_rows] == [
        DiffOp.EQUAL, DiffOp.EQUAL, DiffOp.CHANGE, DiffOp.INSERT, DiffOp.INSERT,
    ]
    assert body.diff_rows[-1].right_text == "Credits"


def test_identical_content_gives_empty_table():
    left = _snapshot(1, "Same", "<p>Same</p>")
    right = _snapshot(2, "Same", "<p>Same</p>")
    table = render_revision_diff(left, right, _config())
    assert table.is_empty
    assert table.rows == ()
    assert table.empty_message == "No visible changes"


def test_rendering_is_deterministic():
    store = _store()
    for layout in Layout:
        first = compare_revision_ids(store, "node/7", RevisionSelection(1, 3), _config(), layout)
        second = compare_revision_ids(store, "node/7", RevisionSelection(1, 3), _config(), layout)
        assert first == second


def test_context_lines_trim_unchanged_rows():
    left = _snapshot(1, "T", "<p>1</p><p>2</p><p>3</p>")
    right = _snapshot(2, "T", "<p>1</p><p>2</p><p>x</p>")
    config = ComparisonConfig(context_lines_leading=1, context_lines_trailing=0)
    (body,) = render_revision_diff(left, right, config).groups
    assert [(row.op, row.left_text) for row in body.diff_rows] == [
        (DiffOp.EQUAL, ""),
        (DiffOp.CHANGE, "3"),
    ]


def test_field_type_strategy_is_applied():
    left = _snapshot(1, "T", "<p>a <em>b</em></p>")
    right = _snapshot(2, "T", "<p>a <em>c</em></p>")
    config = ComparisonConfig(field_type_overrides={"text_with_summary": "filter_tags"})
    (body,) = render_revision_diff(left, right, config).groups
    assert [(row.op, row.left_text, row.right_text) for row in body.diff_rows] == [
        (DiffOp.DELETE, "a <em>b</em>", None),
        (DiffOp.INSERT, None, "a <em>c</em>"),
    ]


# -- overview ----------------------------------------------------------------

def test_overview_lists_newest_first_with_defaults():
    overview = build_overview(_store(), "node/7", ComparisonConfig(radio_auto_submit=True),
                              operations=("delete", "revert"))
    assert [row.revision.revision_id for row in overview.rows] == [3, 2, 1]
    assert overview.default_selection == RevisionSelection(2, 3)
    assert overview.radio_auto_submit is True
    assert overview.rows[0].revision.is_current
    assert overview.rows[0].operations == ()
    oldest = overview.rows[2]
    assert oldest.log_message == "created"
    assert [(op.name, op.revision_id) for op in oldest.operations] == [("revert", 1), ("delete", 1)]
    assert oldest.operations[0].link.route == "entity.revision_revert"


def test_overview_only_offers_allowed_operations():
    overview = build_overview(_store(), "node/7", operations=("revert",))
    assert [op.name for op in overview.rows[1].operations] == ["revert"]
    overview = build_overview(_store(), "node/7")
    assert all(row.operations == () for row in overview.rows)
    assert overview.radio_auto_submit is False


def test_overview_of_single_revision():
    store = InMemoryEntityStore([_snapshot(1, "Only", "", is_current=True)])
    assert build_overview(store, "node/7").default_selection == RevisionSelection(None, 1)
    assert build_overview(store, "node/9").default_selection == RevisionSelection(None, None)


def test_overview_skips_revisions_that_do_not_load():
    class LossyStore(InMemoryEntityStore):
        def revision_ids(self, entity_id):
            return super().revision_ids(entity_id) + [4]

    store = LossyStore(_store()._revisions["node/7"].values())
    overview = build_overview(store, "node/7")
    assert [row.revision.revision_id for row in overview.rows] == [3, 2, 1]


def test_field_without_value_does_not_break_rendering():
    left = EntitySnapshot("node/7", 1, WHEN, "bo", fields={"title": None})
    right = EntitySnapshot("node/7", 2, WHEN, "bo", fields={"title": None})
    assert render_revision_diff(left, right).is_empty


def test_blank_line_edit_shows_with_filter_strategies():
    for strategy in ("filter_tags", "filter_all_tags"):
        left = EntitySnapshot("node/7", 1, WHEN, "bo", fields={"body": FieldValue("text", ["<em>a</em>\nb"])})
        right = EntitySnapshot("node/7", 2, WHEN, "bo", fields={"body": FieldValue("text", ["<em>a</em>\n\n\nb"])})
        table = render_revision_diff(left, right, ComparisonConfig(normalization=strategy))
        assert not table.is_empty
        assert [row.op for row in table.groups[0].diff_rows] == [
            DiffOp.EQUAL, DiffOp.INSERT, DiffOp.INSERT, DiffOp.EQUAL,
        ]


def test_link_target_edit_shows_with_default_strategy():
    left = _snapshot(1, "T", '<p><a href="https://old.example">Docs</a></p>')
    right = _snapshot(2, "T", '<p><a href="https://new.example">Docs</a></p>')
    (body,) = render_revision_diff(left, right).groups
    assert [(row.op, row.left_text, row.right_text) for row in body.diff_rows] == [
        (DiffOp.EQUAL, "Docs [1]", "Docs [1]"),
        (DiffOp.EQUAL, "", ""),
        (DiffOp.CHANGE, "[1] https://old.example", "[1] https://new.example"),
    ]


def test_entity_store_is_abstract():
    with pytest.raises(TypeError):
        EntityStore()

    class Incomplete(EntityStore):
        def revision_ids(self, entity_id):
            return []

    with pytest.raises(TypeError):
        Incomplete()
