"""Student Attendance package.

Organized by feature modules (students, subjects, attendance, reports, users)
with a thin Flask controller layer on top of service/repository layers.
"""
