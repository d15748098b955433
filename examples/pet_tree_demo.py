#!/usr/bin/env python3
"""Demo script for DazzleTreeView.

Renders an id-indexed tree of people and their pets as indented text,
drives it with simulated key presses and toggles, moves a node to a new
parent, and finishes with a search.
"""

import sys
from pathlib import Path

# Add parent directory to path for development
sys.path.insert(0, str(Path(__file__).parent.parent))

from dazzletreeview import FlatTreeAccessor, TreeView
from dazzletreeview.testing import create_flat_tree, create_name_tree


class PetTreeApp:
    """Owns the state a UI would own: data, expansion and selection."""

    def __init__(self, count: int = 30):
        self.nodes = create_flat_tree(create_name_tree(count, seed=42), children_field='pets')
        self.expanded_state = {}
        self.selected_id = None
        self.view = TreeView(
            data=self.nodes['root'],
            accessor=FlatTreeAccessor(self.nodes, children_field='pets'),
            expanded_state=self.expanded_state,
            on_expanded_state_change=self.set_expanded,
            on_selection=self.select,
            show_root=False,
        )

    def set_expanded(self, new_state):
        self.expanded_state = new_state
        self.view.update(expanded_state=new_state)

    def select(self, node):
        self.selected_id = node['id']

    def move_node(self, node_id, current_parent_id, new_parent_id):
        """Move a node and open its new parent.

        Touched parents are replaced, not edited. The view notices the
        replaced table entries and re-resolves only the affected lists.
        """
        current_parent = dict(self.nodes[current_parent_id])
        current_parent['pets'] = [i for i in current_parent['pets'] if i != node_id]

        new_parent = dict(self.nodes[new_parent_id])
        new_parent['pets'] = list(new_parent.get('pets', [])) + [node_id]

        self.nodes[current_parent_id] = current_parent
        self.nodes[new_parent_id] = new_parent

        if not self.expanded_state.get(new_parent_id):
            self.expanded_state = dict(self.expanded_state, **{new_parent_id: True})
        self.view.update(data=self.nodes['root'], expanded_state=self.expanded_state)
        self.view.refresh()

    def render(self, title):
        print(f"\n=== {title} ===")
        for row in self.view.visible_list:
            marker = ("-" if row.is_expanded else "+") if row.has_children else " "
            cursor = ">" if row.is_selected(self.selected_id) else " "
            print(f"{cursor} {'  ' * row.level}{marker} {row.name}")


def main():
    app = PetTreeApp()
    app.render("Collapsed")

    first = app.view.visible_list[0]
    first.select()
    first.toggle_expanded()
    app.render(f"Expanded {first.name}")

    index = app.view.index_of(app.selected_id)
    app.view.navigate_with_key('ArrowDown', index)
    app.render("After ArrowDown")

    rows = app.view.visible_list
    moved = rows[-1]
    target = next((row for row in rows if row.id != moved.id and row.parent_id != moved.id), None)
    if target is not None and moved.parent_id != target.id:
        app.move_node(moved.id, moved.parent_id, target.id)
        app.render(f"Moved {moved.name} under {target.name}")

    app.view.update(search_term='Cat')
    app.render("Search: 'Cat'")

    print("\nCache:", app.view.cache.get_stats())


if __name__ == "__main__":
    main()
