from __future__ import annotations

from unittest import mock  # noqa

from django.db import connection


# {{{ grading engine tables

def create_host_grade_tables(
        grades_table="grade_grades", items_table="grade_items"):
    """Create (a minimal version of) the grading engine's tables that raw
    grades are read from. Must run inside the test's transaction so that
    the tables are rolled back with it.
    """
    qn = connection.ops.quote_name
    with connection.cursor() as c:
        c.execute(
            f"CREATE TABLE {qn(items_table)} ("
            "id integer PRIMARY KEY, "
            "itemtype varchar(30) NOT NULL)")
        c.execute(
            f"CREATE TABLE {qn(grades_table)} ("
            "id integer PRIMARY KEY, "
            "itemid integer NOT NULL, "
            "userid integer NOT NULL, "
            "deductedmark double precision NULL, "
            "overridden integer NOT NULL DEFAULT 0, "
            "finalgrade double precision NULL)")


def insert_grade_item(id, itemtype, items_table="grade_items"):
    with connection.cursor() as c:
        c.execute(
            f"INSERT INTO {connection.ops.quote_name(items_table)} "
            "(id, itemtype) VALUES (%s, %s)",
            [id, itemtype])


_grade_grade_ids = iter(range(1, 1000000))


def insert_grade_grade(itemid, userid, finalgrade, deductedmark=0,
        overridden=0, grades_table="grade_grades"):
    with connection.cursor() as c:
        c.execute(
            f"INSERT INTO {connection.ops.quote_name(grades_table)} "
            "(id, itemid, userid, deductedmark, overridden, finalgrade) "
            "VALUES (%s, %s, %s, %s, %s, %s)",
            [next(_grade_grade_ids), itemid, userid, deductedmark,
                overridden, finalgrade])

# }}}

# vim: foldmethod=marker
