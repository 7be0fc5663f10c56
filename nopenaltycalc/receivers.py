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

from typing import Any

from django.conf import settings
from django.db import transaction
from django.dispatch import receiver

from nopenaltycalc.calculation import calculate_no_penalty_final_grade
from nopenaltycalc.checks import NOPENALTYCALC_ENABLED
from nopenaltycalc.models import NoPenaltyFinalGrade
from nopenaltycalc.repository import get_repository
from nopenaltycalc.signals import (
    CategoryAggregationCalculated,
    after_category_aggregation_calculated,
)


# {{{ Recalculate no-penalty grades when a category has been aggregated

@receiver(after_category_aggregation_calculated)
@transaction.atomic
def recalculate_no_penalty_grade(
        sender: Any,
        hook: CategoryAggregationCalculated,
        **kwargs: Any) -> NoPenaltyFinalGrade | None:
    if not getattr(settings, NOPENALTYCALC_ENABLED, True):
        return None

    return calculate_no_penalty_final_grade(hook, get_repository())

# }}}

# vim: foldmethod=marker
