"""gddon — Godot addon package manager.

Tracks third-party addons as separately versioned git repositories, pins
each to a revision, and mirrors their folders into the project tree.
"""

__version__ = "0.1.0"
