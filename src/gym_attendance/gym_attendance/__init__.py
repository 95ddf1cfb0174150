"""Gym attendance package.

Organized by feature modules (members, attendance, compliance, workouts, ...)
with a thin Flask controller layer over service/repository layers.
"""
