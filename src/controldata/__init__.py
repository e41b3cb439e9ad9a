"""
controldata - pg_control inspection

Reads the fixed-layout binary control file of a database cluster, verifies its
CRC, and exposes the decoded fields as ordered (name, setting) rows.
"""

__version__ = "0.1.0"
__author__ = "Systems Engineering Portfolio"
