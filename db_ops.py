# db_ops.py

"""
This module serves as a single, convenient entry point for the UI to access
all database operations. It aggregates functions from the specialized modules
in the 'database' package, providing a simplified facade.

The UI layer should only need to import this file to get access to any
database-related function or type it needs.
"""

from database.connection import *
from database.models import *
from database.user_queries import *
