"""
cPanel / Passenger WSGI entry point for the portfolio site.
Passenger imports 'application' from this file.
"""
import sys
import os

sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from app import application  # noqa: E402,F401
