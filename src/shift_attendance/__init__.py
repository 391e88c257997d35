"""Shift Attendance package.

Feature modules (shifts, attendance, regularization) hold the attendance
window and status engine; a thin Flask controller and MySQL repositories sit
around it as collaborators.
"""
