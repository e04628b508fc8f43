"""Overtime Tracker package.

Feature modules (overtime, export, preferences, ...) keep the business rules in
plain services; Flask controllers and MySQL repositories are thin adapters.
"""
