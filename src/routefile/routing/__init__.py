"""Routing — route file loading and ordered, first-match-wins matching.

Route files are parsed once into an immutable ``RouteTable``; matching
scans it in declaration order.
"""
