from memberhub.db import Base

__all__ = ["Base"]
