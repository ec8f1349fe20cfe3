"""Attendance resolution package.

Turns raw biometric punches plus HR rules, leaves and adjustments into one
resolved attendance record per employee per day. Organized by feature modules
(punches, rules, shifts, attendance, reports, ...) with a thin Flask
controller layer over service/repository layers.
"""
