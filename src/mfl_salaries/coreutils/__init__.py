"""
Core Utilities - Shared Plumbing

Configuration, logging setup and the HTTP fetch helper.
"""
