"""
Growth Module

Geometry, local constraints, expansion policy and the growth loop.
"""
