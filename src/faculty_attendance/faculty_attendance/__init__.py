"""Faculty attendance & payroll package.

Organized by feature modules (attendance, leaves, payroll, allocation, ...)
with a thin Flask controller layer over service/repository layers that talk
to an abstract keyed record store.
"""
