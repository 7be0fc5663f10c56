#!/usr/bin/env python
from __future__ import annotations

import os
import sys


if __name__ == "__main__":
    os.environ.setdefault("DJANGO_SETTINGS_MODULE", "nopenaltysite.settings")

    if len(sys.argv) > 1 and sys.argv[1] == "test":
        # never run tests against the production local_settings.py
        os.environ.setdefault(
            "NOPENALTY_LOCAL_TEST_SETTINGS",
            os.path.join(
                os.path.dirname(os.path.abspath(__file__)),
                "local_settings_example.py"))

    from django.core.management import execute_from_command_line

    execute_from_command_line(sys.argv)
