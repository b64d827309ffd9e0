"""Campaign Dealer: The House Doesn't Always Win.

A campaign generator for a tabletop RPG where the house is a faction to be
toppled: random character skeletons are dealt from a deck of archetypes and
suits, then an LLM gives them names, faces and a game-master script to play.

Version Management
------------------
``__version__`` is read from the installed package metadata at import time.
The single source of truth is the ``version`` field in ``pyproject.toml``.
``api/routes/health.py`` and the CLI import ``__version__`` from here.
"""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError, version

# ---------------------------------------------------------------------------
# Package version, read from pyproject.toml via importlib.metadata.
#
# When the package is installed (``pip install -e .``), importlib.metadata
# resolves the version from the distribution metadata that pip wrote.  If
# the package is imported without being installed we fall back to the
# literal below so the application can still start.
# ---------------------------------------------------------------------------
try:
    __version__: str = version("campaign_dealer")
except PackageNotFoundError:
    __version__ = "0.3.0"
