"""Dispatch — maps matched routes to registered callables.

The router only produces ``ActionDescriptor`` values. The registry turns
them into callables, and the dispatcher owns the live route table.
"""
