# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Evaluation: runtime objects (`rt`), heap snapshots (`heapstate`) and the
initializer interpreter (`interpreter`).
"""

__all__ = ["rt", "heapstate", "interpreter"]
