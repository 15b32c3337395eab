"""Cohort Tracker package.

This package is organized by feature modules (attendance, reporting, submissions, ...)
with a thin Flask controller layer and service/repository layers underneath.
"""
