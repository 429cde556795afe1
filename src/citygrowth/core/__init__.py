"""
Core Module

Data contracts and configuration shared across the growth system.
"""
