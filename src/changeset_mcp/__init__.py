"""publish local changesets to GitHub as pull requests"""

try:
    from importlib.metadata import version

    __version__ = version("changeset-mcp")
except Exception:
    __version__ = "0.0.0"
