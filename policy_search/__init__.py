"""Policy search: similarity retrieval over a vector collection of policy documents."""

__version__ = "1.0.0"
