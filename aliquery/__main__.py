"""Main entry point when executing aliquery as a package.

This allows running the package using python -m aliquery.
"""

from aliquery.main import cli_entry_point

if __name__ == "__main__":
    cli_entry_point()
