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

from django.conf import settings
from django.core.checks import Critical, register
from django.core.exceptions import ImproperlyConfigured
from django.utils.module_loading import import_string


INSTANCE_ERROR_PATTERN = "%(location)s must be an instance of %(types)s."

NOPENALTYCALC_ENABLED = "NOPENALTYCALC_ENABLED"
NOPENALTYCALC_REPOSITORY = "NOPENALTYCALC_REPOSITORY"
NOPENALTYCALC_GRADE_GRADES_TABLE = "NOPENALTYCALC_GRADE_GRADES_TABLE"
NOPENALTYCALC_GRADE_ITEMS_TABLE = "NOPENALTYCALC_GRADE_ITEMS_TABLE"

NOPENALTYCALC_STARTUP_CHECKS_TAG = "nopenaltycalc_start_up_check"

DEFAULT_REPOSITORY = "nopenaltycalc.repository.DjangoNoPenaltyRepository"
DEFAULT_GRADE_GRADES_TABLE = "grade_grades"
DEFAULT_GRADE_ITEMS_TABLE = "grade_items"


class NoPenaltyCalcCriticalCheckMessage(Critical):
    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.obj = self.obj or ImproperlyConfigured.__name__


def check_nopenaltycalc_settings(app_configs, **kwargs):
    errors = []

    # {{{ check NOPENALTYCALC_ENABLED
    enabled = getattr(settings, NOPENALTYCALC_ENABLED, True)
    if not isinstance(enabled, bool):
        errors.append(NoPenaltyCalcCriticalCheckMessage(
            msg=(INSTANCE_ERROR_PATTERN
                 % {"location": NOPENALTYCALC_ENABLED, "types": "bool"}),
            id="nopenaltycalc_enabled.E001"
        ))
    # }}}

    # {{{ check NOPENALTYCALC_REPOSITORY
    repository = getattr(settings, NOPENALTYCALC_REPOSITORY, None)
    if repository is not None:
        if isinstance(repository, str):
            try:
                repository = import_string(repository)
            except ImportError:
                errors.append(NoPenaltyCalcCriticalCheckMessage(
                    msg=(
                        f"{NOPENALTYCALC_REPOSITORY}: "
                        f"`{repository}` failed to be imported."
                    ),
                    id="nopenaltycalc_repository.E001"
                ))
                repository = None

        if repository is not None:
            from nopenaltycalc.repository import NoPenaltyRepository
            if not (isinstance(repository, type)
                    and issubclass(repository, NoPenaltyRepository)):
                errors.append(NoPenaltyCalcCriticalCheckMessage(
                    msg=(
                        f"{NOPENALTYCALC_REPOSITORY}: `{repository}` is not "
                        "a subclass of "
                        "nopenaltycalc.repository.NoPenaltyRepository."
                    ),
                    id="nopenaltycalc_repository.E002"
                ))
    # }}}

    # {{{ check host table names

    for location in [
            NOPENALTYCALC_GRADE_GRADES_TABLE, NOPENALTYCALC_GRADE_ITEMS_TABLE]:
        table_name = getattr(settings, location, None)
        if table_name is None:
            continue

        msg_id_prefix = location.lower()
        if not isinstance(table_name, str):
            errors.append(NoPenaltyCalcCriticalCheckMessage(
                msg=(INSTANCE_ERROR_PATTERN
                     % {"location": location, "types": "str"}),
                id=f"{msg_id_prefix}.E001"
            ))
        elif not table_name.strip():
            errors.append(NoPenaltyCalcCriticalCheckMessage(
                msg=f"{location} should not be an empty string",
                id=f"{msg_id_prefix}.E002"
            ))

    # }}}

    return errors


def register_startup_checks():
    register(check_nopenaltycalc_settings, NOPENALTYCALC_STARTUP_CHECKS_TAG)

# vim: foldmethod=marker
