"""org-task-csv: export Org outline tasks to CSV."""

from orgtaskcsv.config import VERSION

__version__ = VERSION
