"""
Endpoint discovery collaborators.

`NetstatScanner` reads the host socket table and probes it for GraphQL
servers; `ConsoleChooser` lets the user pick when several new ones appear.
"""
from .chooser import ConsoleChooser
from .netstat import NetstatScanner

__all__ = ['ConsoleChooser', 'NetstatScanner']
