"""Nurse Payroll package.

Salary engine for visiting nurses: monthly activity aggregation, configurable
pay rates and one persisted salary record per nurse and month. Organized by
feature modules (settings, activity, users, payroll) with a thin Flask
controller layer over service/repository layers.
"""
