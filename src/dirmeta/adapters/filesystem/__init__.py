from .local_fs import AsyncLocalFS, LocalFS

__all__ = ["AsyncLocalFS", "LocalFS"]
