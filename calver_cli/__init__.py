"""Calendar-versioned revisions for a branching release workflow.

The command surface is implemented with Typer and Rich. It only prints
guidance; it never runs git itself.
"""

__all__ = ["__version__"]

__version__ = "0.1.0"
