#!/usr/bin/env python3
"""
Rebuild benchmark for DazzleTreeView.

Measures what a UI pays per interaction:
1. Cold build in a fresh view (every children list resolved and sorted)
2. Warm rebuild after an expansion toggle (children cache hits)
3. Search over the whole tree and back (cache hits, no expansion gating)
"""

import gc
import statistics
import sys
import time
from pathlib import Path

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from dazzletreeview import TreeView
from dazzletreeview.testing import create_name_tree


def by_name(a, b):
    return (a['name'] > b['name']) - (a['name'] < b['name'])


def median_time(func, iterations: int = 5) -> float:
    times = []
    for _ in range(iterations):
        gc.collect()
        start = time.perf_counter()
        func()
        times.append(time.perf_counter() - start)
    return statistics.median(times)


def run(size: int):
    tree = create_name_tree(size, max_children=8, seed=1)
    parents = list(_parent_ids(tree))

    def cold():
        TreeView(data=tree, child_sort=by_name).visible_list

    view = TreeView(data=tree, child_sort=by_name, expanded_state={p: True for p in parents})
    view.visible_list
    toggled = [{p: True for p in parents if p != parents[i % len(parents)]} for i in range(5)]
    state = {'i': 0}

    def warm_toggle():
        view.update(expanded_state=toggled[state['i'] % len(toggled)])
        state['i'] += 1

    def search():
        view.update(search_term='Gecko')
        view.update(search_term='')

    print(f"\n{size:>7} nodes")
    print(f"  cold build          {median_time(cold) * 1000:8.2f} ms")
    print(f"  rebuild after toggle{median_time(warm_toggle) * 1000:8.2f} ms")
    print(f"  search + clear      {median_time(search) * 1000:8.2f} ms")
    print(f"  cache               {view.cache.get_stats()}")


def _parent_ids(tree):
    stack = [tree]
    while stack:
        node = stack.pop()
        children = node.get('children') or []
        if children:
            yield node['id']
        stack.extend(children)


if __name__ == "__main__":
    for size in (1_000, 10_000, 50_000):
        run(size)
