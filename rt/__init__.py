"""Release train modelling and dependency-ordered release orchestration."""

__version__ = "0.4.0"
