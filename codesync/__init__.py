"""CodeSync: save solved coding problems from practice sites to a GitHub repository."""

__version__ = "1.0.0"
