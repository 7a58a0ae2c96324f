"""
ShareSpace database provisioning.

Creates the application principal, the validated collections and the
index plan for the ShareSpace MongoDB database.
"""

__version__ = "0.1.0"
