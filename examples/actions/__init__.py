"""Sample action declarations for ``python -m actiongen --source-root examples/actions``."""
