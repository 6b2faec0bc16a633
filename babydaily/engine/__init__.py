"""Record engine: store, clock helpers, derived views, mutations and export.

Nothing in this package performs I/O or reads the current time on its own.
"""
