"""Bridges to external collaborators.

Modules
-------
github
    Fetches the newest-first candidate commit list from the GitHub API and
    validates it before handing plain commit hashes to the resolver.
"""
