# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Helpers shared by lumi commands: argument partitioning (`args`), package
location (`locate`), process logging (`log`) and the default sink (`sink`).
"""

__all__ = ["args", "locate", "log", "sink"]
