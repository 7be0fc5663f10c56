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

from django.utils.translation import pgettext_lazy


# {{{ grade item type

class grade_item_type:  # noqa
    """The kind of a grade item, as reported by the grading engine.

    .. attribute:: course

        The item backing the top-level course category (the course total).

    .. attribute:: category

        The item backing a (non-course) grade category.

    .. attribute:: mod

        An item belonging to an activity.

    .. attribute:: manual

        A manually created item.
    """

    course = "course"
    category = "category"
    mod = "mod"
    manual = "manual"


GRADE_ITEM_TYPE_CHOICES = (
        (grade_item_type.course,
            pgettext_lazy("Grade item type", "Course total")),
        (grade_item_type.category,
            pgettext_lazy("Grade item type", "Category total")),
        (grade_item_type.mod,
            pgettext_lazy("Grade item type", "Activity")),
        (grade_item_type.manual,
            pgettext_lazy("Grade item type", "Manual item")),
        )

# }}}


# {{{ category aggregation

class category_aggregation:  # noqa
    """How a grade category combines the grades of its children.

    Only :attr:`sum` changes how no-penalty grades are computed: under
    natural (sum) aggregation the category range always starts at 0 while
    the grade itself may go negative.
    """

    mean = "mean"
    median = "median"
    min = "min"
    max = "max"
    mode = "mode"
    weighted_mean = "weighted_mean"
    simple_weighted_mean = "simple_weighted_mean"
    extracredit_mean = "extracredit_mean"
    sum = "sum"

# }}}

# vim: foldmethod=marker
