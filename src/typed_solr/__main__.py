"""
Entry point for running typed_solr as a module.

This allows the package to be executed with:
    python -m typed_solr
"""

from .main import main

if __name__ == "__main__":
    main()
