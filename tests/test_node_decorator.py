"""Tests for VisibleNode handles and the lazy missing-callback errors."""

import dataclasses
from types import SimpleNamespace

import pytest

from dazzletreeview import (
    MissingCallbackError,
    NodeDecorator,
    RawVisibleEntry,
    TreeViewError,
    build_visible_list,
)


def raw(node_id, level=0, parent_id=None, node=None):
    return RawVisibleEntry(
        node=node if node is not None else {'id': node_id, 'name': node_id.title()},
        node_id=node_id,
        level=level,
        parent_id=parent_id,
        has_children=False,
        is_expanded=False,
    )


class TestMissingCallbacks:
    """Omitted callbacks fail only when their handle is used."""

    def test_build_without_callbacks_succeeds(self, tree_data):
        rows = build_visible_list(tree_data, expanded_state={'root': True})

        assert len(rows) == 3

    def test_select_without_callback_raises(self, tree_data):
        rows = build_visible_list(tree_data)

        with pytest.raises(MissingCallbackError) as exc_info:
            rows[1].select()

        assert exc_info.value.option_name == 'on_selection'
        assert exc_info.value.operation == 'select'
        assert 'on_selection' in str(exc_info.value)
        assert isinstance(exc_info.value, TreeViewError)

    def test_toggle_without_callback_raises(self, tree_data):
        rows = build_visible_list(tree_data, expanded_state={'root': True})

        with pytest.raises(MissingCallbackError) as exc_info:
            rows[2].toggle_expanded()

        assert exc_info.value.option_name == 'on_expanded_state_change'
        assert 'on_expanded_state_change' in str(exc_info.value)

    def test_toggle_without_callback_raises_in_static_mode(self, tree_data):
        rows = build_visible_list(tree_data)

        with pytest.raises(MissingCallbackError):
            rows[0].toggle_expanded()


class TestToggleExpanded:
    """toggle_expanded hands back a complete new map."""

    def test_first_toggle_expands(self):
        received = []
        state = {'root': True}
        decorator = NodeDecorator(expanded_state=state, on_expanded_state_change=received.append)

        decorator.decorate(raw('folder2', 1, 'root')).toggle_expanded()

        assert received == [{'root': True, 'folder2': True}]

    def test_toggle_collapses_expanded_node(self):
        received = []
        decorator = NodeDecorator(
            expanded_state={'root': True, 'folder2': True},
            on_expanded_state_change=received.append,
        )

        decorator.decorate(raw('folder2')).toggle_expanded()

        assert received == [{'root': True, 'folder2': False}]

    def test_caller_map_is_not_mutated(self):
        state = {'root': True}
        received = []
        decorator = NodeDecorator(expanded_state=state, on_expanded_state_change=received.append)

        decorator.decorate(raw('root')).toggle_expanded()

        assert state == {'root': True}
        assert received[0] is not state
        assert received[0] == {'root': False}

    def test_static_mode_toggle_is_a_no_op(self):
        received = []
        decorator = NodeDecorator(expanded_state=None, on_expanded_state_change=received.append)

        decorator.decorate(raw('root')).toggle_expanded()

        assert received == []


class TestVisibleNode:
    """Row fields, node field access and immutability."""

    def test_select_passes_raw_node(self):
        selected = []
        node = {'id': 'a', 'name': 'A'}
        row = NodeDecorator(on_selection=selected.append).decorate(raw('a', node=node))

        row.select()

        assert selected == [node]
        assert selected[0] is node

    def test_is_selected_compares_own_id(self):
        row = NodeDecorator().decorate(raw('a'))

        assert row.is_selected('a') is True
        assert row.is_selected('b') is False
        assert row.is_selected(None) is False

    def test_node_fields_are_readable(self):
        row = NodeDecorator().decorate(raw('a', node={'id': 'a', 'name': 'Alpha', 'size': 3}))

        assert row.name == 'Alpha'
        assert row['size'] == 3
        assert row.id == 'a'

    def test_object_node_fields_are_readable(self):
        node = SimpleNamespace(id='a', name='Alpha')
        row = NodeDecorator().decorate(raw('a', node=node))

        assert row.name == 'Alpha'
        assert row['name'] == 'Alpha'

    def test_unknown_field_raises(self):
        row = NodeDecorator().decorate(raw('a'))

        with pytest.raises(AttributeError):
            row.does_not_exist
        with pytest.raises(KeyError):
            row['does_not_exist']

    def test_rows_are_immutable(self):
        row = NodeDecorator().decorate(raw('a'))

        with pytest.raises(dataclasses.FrozenInstanceError):
            row.level = 3

    def test_rows_from_different_passes_compare_equal(self, tree_data):
        first = build_visible_list(tree_data)
        second = build_visible_list(tree_data, on_selection=print)

        assert first == second
        assert first[0] is not second[0]

    def test_rows_are_hashable(self, tree_data):
        rows = build_visible_list(tree_data)

        assert len(set(rows)) == 4

    def test_decorate_all_keeps_order(self):
        rows = NodeDecorator().decorate_all([raw('a'), raw('b', 1, 'a'), raw('c', 1, 'a')])

        assert [row.id for row in rows] == ['a', 'b', 'c']
        assert [row.parent_id for row in rows] == [None, 'a', 'a']
