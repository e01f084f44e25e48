from .stat import run as stat_run

__all__ = ["stat_run"]
