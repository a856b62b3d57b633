"""Coaching-center attendance tracker.

This package is organized by feature modules (students, attendance, reports,
admin, users) with a thin Flask controller layer over service/repository
layers. The `analytics` package is the pure roster-ordering, merge, risk and
turnout engine; it never performs I/O.
"""
