"""
Shared service utilities.

- http.py - requests session with retry and a default timeout
"""
