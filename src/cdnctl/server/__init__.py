"""HTTP read path: host resolution, the WSGI handler, catalog refresh.

Request handling only reads the registry and blob store; the refresher
replaces catalog tables wholesale from disk.
"""
