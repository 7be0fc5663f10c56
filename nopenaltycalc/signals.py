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

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from django.dispatch import Signal


if TYPE_CHECKING:
    from collections.abc import Mapping

    from nopenaltycalc.host import GradeCategory, ItemBounds


@dataclass
class CategoryAggregationCalculated:
    """What the grading engine knows right after it aggregated one grade
    category for one user.

    .. attribute:: gradevaluesprelimit

        Item id to normalised (0..1) item value, before the category's limit
        rules (such as "drop lowest") were applied. Iteration order is kept.

    .. attribute:: usermodified

        Id of the user on whose behalf the recalculation runs, if any.
    """
    gradecategory: GradeCategory
    userid: int
    gradevaluesprelimit: Mapping[int, float]
    items: Mapping[int, ItemBounds]
    usedweights: Mapping[int, float] = field(default_factory=dict)
    grademinoverrides: Mapping[int, float] = field(default_factory=dict)
    grademaxoverrides: Mapping[int, float] = field(default_factory=dict)
    usermodified: int | None = None


# Sent by the grading engine with ``hook=CategoryAggregationCalculated(...)``.
after_category_aggregation_calculated = Signal()
