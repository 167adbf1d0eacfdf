"""
task-list: a personal task tracker driven from the command line.

Tasks live in a single JSON document; see tasks/ for the model, store and
query pipeline and cli/ for the command surface.
"""

__version__ = "0.1.0"
