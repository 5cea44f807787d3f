"""
Utilities
Configuration, logging, the journal service client and dashboard analytics.
"""
