"""ComptaPro - multi-tenant SYSCOHADA bookkeeping backend."""

__version__ = "0.1.0"
