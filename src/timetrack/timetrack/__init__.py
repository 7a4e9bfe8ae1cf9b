"""TimeTrack attendance package.

Organized by feature modules (attendance, reports, reconciliation, employees)
with a thin Flask controller layer over service/repository layers.
"""
