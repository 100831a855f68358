"""Conference System package.

This package is organized by feature modules (participants, catalog,
admissions, registrations, proceedings) with a thin Flask controller layer
over service/repository layers.
"""
