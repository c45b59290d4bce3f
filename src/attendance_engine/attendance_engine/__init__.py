"""Attendance Engine package.

Week windows, daily attendance status and the check-in/check-out toggle
behind the HR dashboard, organized by feature modules (attendance,
employees, ...) with a thin Flask controller layer over service and
store layers.
"""
