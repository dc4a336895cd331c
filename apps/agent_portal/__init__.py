"""
Agent Portal
Agent-facing frontend of the ticketing system with environment reporting
"""

__version__ = '1.0.0'
