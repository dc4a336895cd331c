"""
Page routes for the agent portal
"""
