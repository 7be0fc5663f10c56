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

import logging
from abc import ABC, abstractmethod
from collections.abc import Iterable

from django.conf import settings
from django.core.exceptions import ImproperlyConfigured
from django.db import connection, transaction
from django.utils.module_loading import import_string

from nopenaltycalc.checks import (
    DEFAULT_GRADE_GRADES_TABLE,
    DEFAULT_GRADE_ITEMS_TABLE,
    DEFAULT_REPOSITORY,
    NOPENALTYCALC_GRADE_GRADES_TABLE,
    NOPENALTYCALC_GRADE_ITEMS_TABLE,
    NOPENALTYCALC_REPOSITORY,
)
from nopenaltycalc.host import DeductionRecord
from nopenaltycalc.models import NoPenaltyFinalGrade


logger = logging.getLogger(__name__)


def _to_float(value):
    # NUMERIC columns come back as Decimal on most database backends.
    if value is None:
        return None
    return float(value)


class NoPenaltyRepository(ABC):
    """Everything no-penalty calculation reads from or writes to storage."""

    @abstractmethod
    def find_deductions(self,
                userid: int, itemids: Iterable[int]
            ) -> dict[int, DeductionRecord]:
        """Return the user's raw grades (with deducted marks) for *itemids*,
        keyed by item id. Items without a grade are absent.
        """

    @abstractmethod
    def find_no_penalty_records(self,
                courseid: int, userid: int
            ) -> dict[int, NoPenaltyFinalGrade]:
        """Return all stored no-penalty grades of a user in a course, keyed
        by item id.
        """

    @abstractmethod
    def upsert_no_penalty_record(self,
                courseid: int,
                userid: int,
                itemid: int,
                itemtype: str,
                grademin: float | None,
                grademax: float | None,
                finalgrade: float | None,
                usermodified: int | None,
            ) -> NoPenaltyFinalGrade:
        ...


class DjangoNoPenaltyRepository(NoPenaltyRepository):
    """Reads raw grades straight from the grading engine's tables and keeps
    no-penalty grades in :class:`~nopenaltycalc.models.NoPenaltyFinalGrade`.
    """

    def find_deductions(self,
                userid: int, itemids: Iterable[int]
            ) -> dict[int, DeductionRecord]:
        itemids = list(itemids)
        if not itemids:
            return {}

        qn = connection.ops.quote_name
        grades_table = qn(getattr(
            settings, NOPENALTYCALC_GRADE_GRADES_TABLE, DEFAULT_GRADE_GRADES_TABLE))
        items_table = qn(getattr(
            settings, NOPENALTYCALC_GRADE_ITEMS_TABLE, DEFAULT_GRADE_ITEMS_TABLE))
        placeholders = ", ".join(["%s"] * len(itemids))

        with connection.cursor() as c:
            c.execute(
                f"SELECT gg.itemid, gg.deductedmark, gi.itemtype, "
                f"gg.overridden, gg.finalgrade "
                f"FROM {grades_table} gg "
                f"INNER JOIN {items_table} gi ON gg.itemid = gi.id "
                f"WHERE gg.userid = %s AND gg.itemid IN ({placeholders})",
                [userid, *itemids])
            rows = c.fetchall()

        return {
            itemid: DeductionRecord(
                itemid=itemid,
                deductedmark=_to_float(deductedmark),
                itemtype=itemtype,
                overridden=bool(overridden),
                finalgrade=_to_float(finalgrade))
            for itemid, deductedmark, itemtype, overridden, finalgrade in rows}

    def find_no_penalty_records(self,
                courseid: int, userid: int
            ) -> dict[int, NoPenaltyFinalGrade]:
        return {
            record.itemid: record
            for record in NoPenaltyFinalGrade.objects.filter(
                courseid=courseid, userid=userid)}

    def upsert_no_penalty_record(self,
                courseid: int,
                userid: int,
                itemid: int,
                itemtype: str,
                grademin: float | None,
                grademax: float | None,
                finalgrade: float | None,
                usermodified: int | None,
            ) -> NoPenaltyFinalGrade:
        with transaction.atomic():
            try:
                record = (NoPenaltyFinalGrade
                    .objects.select_for_update()
                    .get(courseid=courseid, userid=userid, itemid=itemid))
            except NoPenaltyFinalGrade.DoesNotExist:
                record = NoPenaltyFinalGrade(
                    courseid=courseid,
                    userid=userid,
                    itemid=itemid,
                    itemtype=itemtype)

            record.grademax = grademax
            record.grademin = grademin
            record.finalgrade = finalgrade
            record.usermodified = usermodified
            record.save()

        logger.debug("saved no-penalty grade %s for user %s on item %s "
                "in course %s", finalgrade, userid, itemid, courseid)

        return record


def get_repository() -> NoPenaltyRepository:
    repository_class = getattr(settings, NOPENALTYCALC_REPOSITORY, None)
    if repository_class is None:
        repository_class = DEFAULT_REPOSITORY

    if isinstance(repository_class, str):
        try:
            repository_class = import_string(repository_class)
        except ImportError as e:
            raise ImproperlyConfigured(
                f"{NOPENALTYCALC_REPOSITORY}: `{repository_class}` "
                "failed to be imported.") from e

    return repository_class()
