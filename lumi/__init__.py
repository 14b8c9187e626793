# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
lumi: compile reusable stacks of services into a symbol table plus a heap
snapshot.

Layout:
  cmdutil:  argument partitioning, package location, logging, default sink
  compiler: parser, binder and the `Compiler` entry points
  eval:     runtime objects, heap snapshots and the interpreter
  pack:     package descriptors (`Lumi.json`)
  resource: configuration maps and the config applier
  compile:  the orchestrator gluing the above into one invocation
"""

__version__ = "0.1.0"

__all__ = ["__version__"]
