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

from django.db import models
from django.utils.translation import gettext_lazy as _

from nopenaltycalc.constants import GRADE_ITEM_TYPE_CHOICES


class NoPenaltyFinalGrade(models.Model):
    """The final grade a user would have in a grade category (or in the
    course) if no penalties had been deducted from any item.

    Course, user and item ids refer to rows owned by the grading engine,
    so they are stored as plain integers rather than foreign keys.
    """

    id = models.BigAutoField(primary_key=True)

    courseid = models.BigIntegerField(
            verbose_name=_("Course ID"))
    userid = models.BigIntegerField(
            verbose_name=_("User ID"))
    itemid = models.BigIntegerField(
            help_text=_("The grade item backing the category."),
            verbose_name=_("Grade item ID"))
    itemtype = models.CharField(max_length=30,
            choices=GRADE_ITEM_TYPE_CHOICES,
            verbose_name=_("Grade item type"))

    grademin = models.FloatField(null=True, blank=True,
            verbose_name=_("Minimum grade"))
    grademax = models.FloatField(null=True, blank=True,
            verbose_name=_("Maximum grade"))
    finalgrade = models.FloatField(null=True, blank=True,
            help_text=_("The category grade with all penalties removed."),
            verbose_name=_("Final grade"))

    usermodified = models.BigIntegerField(null=True, blank=True,
            verbose_name=_("Modified by user ID"))

    class Meta:
        db_table = "no_penalty_finalgrades"
        verbose_name = _("No-penalty final grade")
        verbose_name_plural = _("No-penalty final grades")
        ordering = ("courseid", "userid", "itemid")
        unique_together = (("courseid", "userid", "itemid"),)
        indexes = [
            models.Index(fields=["courseid", "userid"],
                name="no_penalty_course_user_idx"),
        ]

    def __str__(self) -> str:
        return (
                f"No-penalty grade {self.finalgrade} for user {self.userid} "
                f"on item {self.itemid} in course {self.courseid}")
