"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_SESSION_DAYS = 7
LOW_ATTENDANCE_THRESHOLD = 75
RECENT_MONTHS = 6

ROLL_NUMBER_MAX_LEN = 20
NAME_MIN_LEN = 2
NAME_MAX_LEN = 100
EMAIL_MAX_LEN = 255
PHONE_MAX_LEN = 20
DEPARTMENT_MIN_LEN = 2
DEPARTMENT_MAX_LEN = 100
MIN_YEAR = 1
MAX_YEAR = 4

STUDENT_ORDERINGS = ("roll_number", "name")

# Cache kinds used as the first part of a query-cache key.
CACHE_STUDENTS = "students"
CACHE_SUBJECTS = "subjects"
CACHE_ATTENDANCE = "attendance"
