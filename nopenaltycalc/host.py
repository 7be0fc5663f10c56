from __future__ import annotations


__copyright__ = "Copyright (C) 2025 nopenaltycalc authors"

__license__ = """
Permission is hereby granted, free of charge, to any person obtaining a copy
of this software and associated documentation files (the "Software"), to deal
in the Software without restriction, including without limitation the rights
to use, copy, modify, merge, publish, distribute, sublicense, and/or sell
copies of the Software, and to permit persons to whom the Software is
furnished to do so, subject to the following conditions:

The above copyright notice and this permission notice shall be included in
all copies or substantial portions of the Software.

THE SOFTWARE IS PROVIDED "AS IS", WITHOUT WARRANTY OF ANY KIND, EXPRESS OR
IMPLIED, INCLUDING BUT NOT LIMITED TO THE WARRANTIES OF MERCHANTABILITY,
FITNESS FOR A PARTICULAR PURPOSE AND NONINFRINGEMENT. IN NO EVENT SHALL THE
AUTHORS OR COPYRIGHT HOLDERS BE LIABLE FOR ANY CLAIM, DAMAGES OR OTHER
LIABILITY, WHETHER IN AN ACTION OF CONTRACT, TORT OR OTHERWISE, ARISING FROM,
OUT OF OR IN CONNECTION WITH THE SOFTWARE OR THE USE OR OTHER DEALINGS IN
THE SOFTWARE.
"""

__doc__ = """
The grading engine owns grade items, grade categories and the aggregation
rules. This module describes the small part of it that no-penalty
calculation relies on. A host application subclasses these to adapt its
own objects.

.. autoclass:: ItemBounds
.. autoclass:: GradeItem
.. autoclass:: GradeCategory
.. autoclass:: AggregationResult
.. autoclass:: DeductionRecord
"""

from abc import ABC, abstractmethod
from collections.abc import Mapping, MutableMapping
from dataclasses import dataclass


@dataclass(frozen=True)
class ItemBounds:
    """Default grade range of one item, as found in the item catalog
    passed along with an aggregation.
    """
    grademin: float
    grademax: float


@dataclass(frozen=True)
class AggregationResult:
    """
    .. attribute:: grade

        The aggregated grade, normalised to [0, 1]. Natural (sum)
        aggregation may produce values below 0.

    .. attribute:: grademin
    .. attribute:: grademax

        The (possibly adjusted) range of the category.
    """
    grade: float | None
    grademin: float
    grademax: float


@dataclass(frozen=True)
class DeductionRecord:
    """One user's raw grade for an item, with the mark deducted as a penalty
    (in the item's own scale).
    """
    itemid: int
    deductedmark: float | None
    itemtype: str
    overridden: bool
    finalgrade: float | None


class GradeItem(ABC):
    id: int
    itemtype: str
    grademin: float
    grademax: float

    def bound(self, grade: float | None) -> float | None:
        """Return *grade* limited to the valid range of this item.

        Hosts with rounding or scale rules of their own override this.
        """
        if grade is None:
            return None

        return max(self.grademin, min(self.grademax, grade))


class GradeCategory(ABC):
    courseid: int
    aggregation: str
    grade_item: GradeItem

    @abstractmethod
    def supports_limit_rules(self) -> bool:
        ...

    @abstractmethod
    def apply_limit_rules(self,
                values: MutableMapping[int, float],
                items: Mapping[int, ItemBounds]) -> None:
        """Apply rules such as "drop lowest" to *values*, in place.

        *values* is ordered by ascending value.
        """

    @abstractmethod
    def aggregate(self,
                values: Mapping[int, float],
                items: Mapping[int, ItemBounds],
                weights: Mapping[int, float],
                min_overrides: Mapping[int, float],
                max_overrides: Mapping[int, float],
            ) -> AggregationResult:
        ...
