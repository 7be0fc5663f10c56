import pytest

from nopenaltycalc.constants import grade_item_type


@pytest.fixture
def host_grade_tables(db):
    from tests.utils import create_host_grade_tables
    create_host_grade_tables()


@pytest.fixture
def course_item():
    from tests.host import SimpleGradeItem
    return SimpleGradeItem(1, itemtype=grade_item_type.course)

