"""Prefect flows.

- build.py - fetch one hour's snapshot and write a static page
"""
