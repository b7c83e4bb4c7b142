# -*- coding: utf-8 -*-
"""Read-only tree view of a survey for presentation layers.

The survey model itself knows nothing about display. This adapter exposes it
as a generic tree: the root is the Survey, its children are the top-level
series, and a series' children are its inner series followed by its legs.

The adapter holds no cached state. Only adding, inserting or removing
top-level series is announced through ``Survey.subscribe``; a host that edits
the legs or inner series of a Series directly must refresh its own view.
"""

from __future__ import annotations

from cave_converter.survey.models import Leg
from cave_converter.survey.models import Series
from cave_converter.survey.models import Survey

TreeNode = Survey | Series | Leg


class SurveyTreeAdapter:
    """Answers tree-shaped queries against a Survey without modifying it."""

    def __init__(self, survey: Survey) -> None:
        self.survey = survey

    def get_root(self) -> Survey:
        return self.survey

    def get_child(self, parent: TreeNode, index: int) -> Series | Leg:
        if isinstance(parent, Survey):
            return parent.series[index]
        if isinstance(parent, Series):
            inner = parent.inner_series_count()
            if index < inner:
                return parent.inner_series[index]
            return parent.legs[index - inner]
        raise IndexError(f"Leg '{parent}' has no children")

    def get_child_count(self, parent: TreeNode) -> int:
        if isinstance(parent, Survey):
            return parent.series_count()
        if isinstance(parent, Series):
            return parent.inner_series_count() + parent.leg_count()
        return 0

    def is_leaf(self, node: TreeNode) -> bool:
        return isinstance(node, Leg)

    def get_index_of_child(self, parent: TreeNode, child: TreeNode) -> int:
        """Position of ``child`` under ``parent``, or -1 if it is not there."""
        if isinstance(parent, Survey):
            for idx, series in enumerate(parent.series):
                if series is child:
                    return idx
            return -1
        if isinstance(parent, Series) and isinstance(child, Series | Leg):
            return parent.get_index_of_child(child)
        return -1
