"""
Utility helpers shared across keystone-flow.
"""
