"""Root pytest configuration (kept intentionally minimal).

The application package resides in the nested `duplicate_detector/`
directory. Pytest inserts this directory on `sys.path` when it loads this
conftest, so the package imports without an install as long as we avoid
having an `__init__` at the backend root (which would shadow the real
package).
"""

# Intentionally no path mangling here.
