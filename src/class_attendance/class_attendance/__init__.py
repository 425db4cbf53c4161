"""Class Attendance package.

This package is organized by feature modules (categories, sessions, students,
attendance, payments) with a thin Flask controller layer over plain
service/repository layers.
"""
