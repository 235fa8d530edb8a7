"""
devrunner: runs subgraph commands in the background for local development
and works out which GraphQL endpoint each one serves.
"""

__version__ = "0.1.0"
