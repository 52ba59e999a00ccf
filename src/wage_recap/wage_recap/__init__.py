"""Wage recap package.

Turns daily attendance/pay entries into payroll recaps and wage report exports.
Organized by feature module (attendance, payroll) with a thin Flask controller
layer over service/repository layers.
"""
