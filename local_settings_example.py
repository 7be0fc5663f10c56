# {{{ database and site

SECRET_KEY = '<CHANGE ME TO SOME RANDOM STRING ONCE IN PRODUCTION>'

ALLOWED_HOSTS = [
        "grades.example.com",
        ]

# Uncomment this to use a real database. If left commented out, a local SQLite3
# database will be used, which is not recommended for production use.
#
# The no-penalty table has to live in the same database as the grading
# engine's grade tables, since raw grades are read with a join.
#
# DATABASES = {
#     'default': {
#         'ENGINE': 'django.db.backends.postgresql',
#         'NAME': 'grades',
#         'USER': 'grades',
#         'PASSWORD': '<PASSWORD>',
#         'HOST': '127.0.0.1',
#         'PORT': '5432',
#     }
# }

# SECURITY WARNING: don't run with debug turned on in production!
DEBUG = True

TIME_ZONE = "America/Chicago"

# }}}

# {{{ no-penalty calculation

# Set to False to stop recording no-penalty grades.
#NOPENALTYCALC_ENABLED = True

# A subclass of nopenaltycalc.repository.NoPenaltyRepository (or its dotted
# path) that reads raw grades and stores no-penalty grades.
#NOPENALTYCALC_REPOSITORY = "nopenaltycalc.repository.DjangoNoPenaltyRepository"

# Names of the grading engine's raw grades and grade items tables.
#NOPENALTYCALC_GRADE_GRADES_TABLE = "grade_grades"
#NOPENALTYCALC_GRADE_ITEMS_TABLE = "grade_items"

# }}}

# vim: foldmethod=marker
