"""
Django settings for running the no-penalty calculation app standalone.
"""

from __future__ import annotations


# Do not change this file. All these settings can be overridden in
# local_settings.py.

import os
import sys
from os.path import join


BASE_DIR = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))

_local_settings_file = join(BASE_DIR, "local_settings.py")

if os.environ.get("NOPENALTY_LOCAL_TEST_SETTINGS", None):
    # This is to make sure local_settings.py is not used for unit tests.
    assert _local_settings_file != os.environ["NOPENALTY_LOCAL_TEST_SETTINGS"]
    _local_settings_file = os.environ["NOPENALTY_LOCAL_TEST_SETTINGS"]

if not os.path.isfile(_local_settings_file):
    from warnings import warn
    warn(f"'{_local_settings_file}' is missing: "
            "falling back to 'local_settings_example.py'.")

    _local_settings_file = join(BASE_DIR, "local_settings_example.py")

if not os.path.isfile(_local_settings_file):
    raise RuntimeError(
        "Management command '%(cmd_name)s' failed to run "
        "because '%(local_settings_file)s' is missing."
        % {"cmd_name": sys.argv[1] if len(sys.argv) > 1 else sys.argv[0],
           "local_settings_file": _local_settings_file})

local_settings_module_name, ext = (
    os.path.splitext(os.path.split(_local_settings_file)[-1]))
assert ext == ".py"

_local_settings_dir = os.path.dirname(os.path.abspath(_local_settings_file))
if _local_settings_dir not in sys.path:
    sys.path.insert(0, _local_settings_dir)

from importlib import import_module  # noqa: E402


local_settings = import_module(local_settings_module_name).__dict__

# {{{ django: apps

INSTALLED_APPS = (
    "django.contrib.auth",
    "django.contrib.contenttypes",

    "nopenaltycalc",
)

# }}}

# {{{ database

# default, likely overriden by local_settings.py
DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": os.path.join(BASE_DIR, "db.sqlite3"),
    }
}

DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"

# }}}

# {{{ internationalization

LANGUAGE_CODE = "en-us"

USE_I18N = True

USE_TZ = True

# }}}

# {{{ app defaults

NOPENALTYCALC_ENABLED = True

NOPENALTYCALC_REPOSITORY = "nopenaltycalc.repository.DjangoNoPenaltyRepository"

# Tables of the grading engine that hold raw grades and grade items.
NOPENALTYCALC_GRADE_GRADES_TABLE = "grade_grades"
NOPENALTYCALC_GRADE_ITEMS_TABLE = "grade_items"

# }}}

# {{{ logging

LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "handlers": {
        "console": {
            "class": "logging.StreamHandler",
        },
    },
    "loggers": {
        "nopenaltycalc": {
            "handlers": ["console"],
            "level": "INFO",
        },
    },
}

# }}}

for name, val in local_settings.items():
    if not name.startswith("_"):
        globals()[name] = val

# vim: foldmethod=marker
