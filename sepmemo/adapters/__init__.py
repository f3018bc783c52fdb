"""Adapter package for port implementations.

Purpose:
    Concrete logging sinks and message catalogs used by the use cases.

Dependencies:
    Standard ``logging`` and JSON catalogs shipped in ``sepmemo/locales``.

Call context:
    Wired by ``rest_api/app.py`` at startup and by tests.
"""
