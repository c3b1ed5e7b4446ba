"""Attendance engine package.

This package is organized by feature modules (schedules, punches, attendance,
payroll, ...). Every computation is a pure function of its inputs; storage is
reached only through the repository protocols each feature declares.
"""
